import pytest

from json_to_pojo.pipeline.analyzer.name_resolver import (
    ensure_unique_name,
    fingerprint,
    sanitize_java_identifier,
    sanitize_package_name,
    to_camel_case,
    to_pascal_case,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("first_name", "FirstName"),
        ("FIRST-NAME", "FirstName"),
        ("order items", "OrderItems"),
        ("address2", "Address2"),
        ("%%%", "Pojo"),
        ("", "Pojo"),
    ],
)
def test_to_pascal_case(text, expected):
    assert to_pascal_case(text) == expected


def test_to_camel_case():
    assert to_camel_case("first_name") == "firstName"
    assert to_camel_case("ID") == "id"


class TestSanitizeJavaIdentifier:
    """Identifiers derived from arbitrary JSON keys"""

    def test_field_names_are_camel_case(self):
        assert sanitize_java_identifier("user-id") == "userId"

    def test_class_names_are_pascal_case(self):
        assert sanitize_java_identifier("shipping address", pascal=True) == "ShippingAddress"

    def test_leading_digits_are_dropped(self):
        assert sanitize_java_identifier("1st place") == "stPlace"
        assert sanitize_java_identifier("2fa", pascal=True) == "fa"

    def test_empty_results_fall_back_to_placeholder(self):
        assert sanitize_java_identifier("123") == "value"
        assert sanitize_java_identifier("   ") == "value"
        assert sanitize_java_identifier("!!!", pascal=True) == "Pojo"

    @pytest.mark.parametrize("keyword", ["class", "public", "int", "default", "true", "null"])
    def test_reserved_words_get_suffix(self, keyword):
        assert sanitize_java_identifier(keyword) == f"{keyword}Value"

    def test_reserved_check_ignores_case(self):
        assert sanitize_java_identifier("class", pascal=True) == "ClassValue"

    def test_result_is_valid_identifier(self):
        for text in ["a b c", "$ref", "@type", "ü-name", "x" * 3]:
            name = sanitize_java_identifier(text)
            assert name[0].isalpha() or name[0] == "_"
            assert name.isidentifier()


class TestSanitizePackageName:
    """Dotted package normalization"""

    def test_none_and_empty(self):
        assert sanitize_package_name(None) is None
        assert sanitize_package_name("") is None

    def test_segments_are_lowercased_and_cleaned(self):
        assert sanitize_package_name("Com.Example-App.models") == "com.exampleapp.models"

    def test_emptied_segment_becomes_placeholder(self):
        assert sanitize_package_name("com.$$.models") == "com.pkg.models"

    def test_all_segments_empty(self):
        assert sanitize_package_name("$.#") is None


def test_ensure_unique_name_appends_counter():
    used = set()
    assert ensure_unique_name("Item", used) == "Item"
    assert ensure_unique_name("Item", used) == "Item1"
    assert ensure_unique_name("Item", used) == "Item2"
    assert used == {"Item", "Item1", "Item2"}


class TestFingerprint:
    """Canonical strings for structural comparison"""

    def test_key_order_does_not_matter(self):
        assert fingerprint({"a": 1, "b": {"x": True, "y": None}}) == fingerprint({"b": {"y": None, "x": True}, "a": 1})

    def test_array_order_matters(self):
        assert fingerprint([1, 2]) != fingerprint([2, 1])

    def test_different_values_differ(self):
        assert fingerprint({"a": "string"}) != fingerprint({"a": "integer"})
