import io
import zipfile

import pytest

from json_to_pojo.archive import archive_file_name, create_zip, sanitize_file_name


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Root.java", "Root.java"),
        ("My Class!.java", "My_Class_.java"),
        ("../../etc/Passwd.java", "Passwd.java"),
        ("dir\\Item.java", "Item.java"),
        ("__Weird__.java", "Weird_.java"),
        ("%%%", ""),
        ("..", ""),
    ],
)
def test_sanitize_file_name(name, expected):
    assert sanitize_file_name(name) == expected


def read_zip(data):
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return {info.filename: (archive.read(info).decode("utf-8"), info) for info in archive.infolist()}


def test_create_zip_contents_and_order():
    files = {"Root.java": "class Root {}\n", "Address.java": "class Address {}\n"}
    entries = read_zip(create_zip(files, "Root"))
    assert list(entries) == ["Address.java", "Root.java"]
    assert entries["Root.java"][0] == "class Root {}\n"
    assert all(info.compress_type == zipfile.ZIP_DEFLATED for _, info in entries.values())


def test_create_zip_is_deterministic():
    files = {"B.java": "b", "A.java": "a"}
    assert create_zip(files, "Root") == create_zip(dict(reversed(list(files.items()))), "Root")


def test_create_zip_unusable_name_falls_back_to_root():
    entries = read_zip(create_zip({"%%%": "class Order {}"}, "Order"))
    assert list(entries) == ["Order.java"]


def test_create_zip_colliding_names_stay_distinct():
    entries = read_zip(create_zip({"a b.java": "1", "a_b.java": "2"}, "Root"))
    assert sorted(entries) == ["a_b.java", "a_b1.java"]


@pytest.mark.parametrize(
    "root,expected",
    [("Order", "order_pojos.zip"), ("My Order", "my_order_pojos.zip"), ("", "json-to-pojo.zip"), (None, "json-to-pojo.zip")],
)
def test_archive_file_name(root, expected):
    assert archive_file_name(root) == expected
