import pytest

from json_to_pojo.errors import ModelBuildError
from json_to_pojo.pipeline.analyzer import JavaTypeKind, ModelBuilder
from json_to_pojo.pipeline.analyzer.model_builder import enum_constant_name
from json_to_pojo.pipeline.config import GeneratorConfig, NullHandling, NumberStrategy, SerializationLibrary
from json_to_pojo.pipeline.inference import infer_from_sample, infer_from_schema
from json_to_pojo.pipeline.inference.shapes import InferredShape, ShapeKind


def build_sample(value, **options):
    config = GeneratorConfig(**options).validate()
    return ModelBuilder(config).build(infer_from_sample(value, config))


def build_schema(schema, **options):
    return ModelBuilder(GeneratorConfig(**options).validate()).build(infer_from_schema(schema))


def field_types(java_class):
    return {f.name: f.type_ref.to_java() for f in java_class.fields}


class TestClasses:
    """Class creation, naming and deduplication"""

    def test_nested_object_becomes_class(self):
        model, _ = build_sample({"address": {"city": "Paris"}})
        assert list(model.classes) == ["Root", "Address"]
        assert field_types(model.root) == {"address": "Address"}

    def test_root_name_from_config(self):
        model, _ = build_sample({"a": 1}, root_class_name="Order")
        assert model.root.name == "Order"

    def test_identical_objects_share_a_class(self):
        model, _ = build_sample({"billing": {"city": "A"}, "shipping": {"city": "B"}})
        assert list(model.classes) == ["Root", "Billing"]
        assert field_types(model.root) == {"billing": "Billing", "shipping": "Billing"}

    def test_dedup_ignores_key_order(self):
        model, _ = build_sample({"from": {"x": 1, "y": 2}, "to": {"y": 3, "x": 4}})
        assert len(model.classes) == 2

    def test_dedup_disabled(self):
        model, _ = build_sample({"billing": {"city": "A"}, "shipping": {"city": "B"}}, stable_names=False)
        assert list(model.classes) == ["Root", "Billing", "Shipping"]

    def test_name_collisions_get_suffix(self):
        model, _ = build_sample({"item": {"a": 1}, "other": {"item": {"b": 1}}})
        assert set(model.classes) == {"Root", "Item", "Other", "Item1"}

    @pytest.mark.parametrize("key,class_name", [("data", "Data1"), ("builder", "Builder1"), ("json", "Json1")])
    def test_generated_names_avoid_annotation_names(self, key, class_name):
        model, _ = build_sample({key: {"x": 1}}, use_builder_annotation=True)
        assert list(model.classes) == ["Root", class_name]
        assert field_types(model.root) == {key: class_name}

    def test_generated_names_avoid_library_types(self):
        model, _ = build_sample({"list": {"a": 1}, "date": {"b": 1}})
        assert "List" not in model.classes
        assert "Date" not in model.classes
        assert field_types(model.root) == {"list": "List1", "date": "Date1"}

    def test_field_names_unique_within_class(self):
        model, _ = build_sample({"first_name": "a", "firstName": "b", "first-name": "c"})
        assert [f.name for f in model.root.fields] == ["firstName", "firstname", "firstName1"]
        assert [f.json_name for f in model.root.fields] == ["first_name", "firstName", "first-name"]

    def test_inner_classes(self):
        model, _ = build_sample({"address": {"city": "Paris"}}, inner_classes=True)
        address = model.classes["Address"]
        assert address.nested
        assert model.root.inner_classes == [address]
        assert not model.root.nested


class TestFieldTypes:
    """Type resolution and null handling"""

    def test_required_scalars_are_primitive(self):
        model, _ = build_sample({"n": 1, "b": True, "s": "x"})
        assert field_types(model.root) == {"n": "double", "b": "boolean", "s": "String"}

    @pytest.mark.parametrize(
        "strategy,raw",
        [(NumberStrategy.INTEGER, "int"), (NumberStrategy.LONG, "long"), (NumberStrategy.DOUBLE, "double")],
    )
    def test_number_strategy(self, strategy, raw):
        model, _ = build_sample({"n": 1}, number_strategy=strategy)
        assert field_types(model.root) == {"n": raw}

    def test_boxed_policy_boxes_non_required(self):
        schema = {"properties": {"n": {"type": "number"}, "b": {"type": "boolean"}, "s": {"type": "string"}}}
        model, _ = build_schema(schema)
        assert field_types(model.root) == {"n": "Double", "b": "Boolean", "s": "String"}

    def test_optional_policy_wraps_non_required(self):
        schema = {
            "required": ["id"],
            "properties": {"id": {"type": "integer"}, "n": {"type": "integer"}, "tags": {"type": "array", "items": {"type": "string"}}},
        }
        model, _ = build_schema(schema, null_handling=NullHandling.OPTIONAL, number_strategy=NumberStrategy.INTEGER)
        assert field_types(model.root) == {"id": "Integer", "n": "Optional<Integer>", "tags": "Optional<List<String>>"}

    def test_array_elements_are_boxed(self):
        model, _ = build_sample({"values": [1, 2]})
        assert field_types(model.root) == {"values": "List<Double>"}

    def test_array_of_objects_uses_item_class(self):
        model, _ = build_sample({"lines": [{"sku": "a"}]})
        assert field_types(model.root) == {"lines": "List<Linesitem>"}

    def test_set_collection(self):
        model, _ = build_sample({"tags": ["a"]}, collection_type="set")
        assert field_types(model.root) == {"tags": "Set<String>"}

    def test_date_time(self):
        model, _ = build_sample({"at": "2024-01-01T00:00:00Z"})
        assert field_types(model.root) == {"at": "OffsetDateTime"}
        model, _ = build_sample({"at": "2024-01-01T00:00:00Z"}, date_type="util-date")
        assert field_types(model.root) == {"at": "Date"}

    def test_map_from_additional_properties(self):
        schema = {"properties": {"scores": {"type": "object", "additionalProperties": {"type": "integer"}}}}
        model, _ = build_schema(schema)
        assert field_types(model.root) == {"scores": "Map<String, Double>"}
        assert list(model.classes) == ["Root"]

    def test_null_and_any_fall_back_to_object(self):
        model, diagnostics = build_sample({"missing": None, "mixed": [1, "a"]})
        assert field_types(model.root) == {"missing": "Object", "mixed": "List<Object>"}
        assert diagnostics == ["Root.missing: could not determine a type (null); using Object."]

    def test_field_metadata_from_schema(self):
        schema = {"properties": {"name": {"type": "string", "description": "Display name", "examples": ["Ann"]}}}
        model, _ = build_schema(schema)
        field = model.root.fields[0]
        assert field.description == "Display name"
        assert field.example == "Ann"


class TestEnums:
    """Enum generation from string value sets"""

    def test_string_enum_becomes_enum(self):
        schema = {"properties": {"status": {"type": "string", "enum": ["in-progress", "done"]}}}
        model, _ = build_schema(schema)
        status = model.root.fields[0]
        assert status.type_ref.kind == JavaTypeKind.ENUM
        assert status.type_ref.name == "Status"
        assert model.root.enums[0].name == "Status"
        assert [v.name for v in model.root.enums[0].values] == ["IN_PROGRESS", "DONE"]
        assert [v.value for v in model.root.enums[0].values] == ["in-progress", "done"]

    def test_enums_disabled(self):
        schema = {"properties": {"status": {"type": "string", "enum": ["a"]}}}
        model, _ = build_schema(schema, generate_enums=False)
        assert field_types(model.root) == {"status": "String"}
        assert model.enums == {}

    def test_numeric_enum_is_not_java_enum(self):
        schema = {"properties": {"level": {"type": "integer", "enum": [1, 2]}}}
        model, _ = build_schema(schema)
        assert model.enums == {}

    def test_enum_names_unique_across_run(self):
        schema = {
            "properties": {
                "status": {"type": "string", "enum": ["a"]},
                "child": {"properties": {"status": {"type": "string", "enum": ["b"]}}},
            }
        }
        model, _ = build_schema(schema)
        assert list(model.enums) == ["Status", "Status1"]

    def test_duplicate_constants_get_suffix(self):
        schema = {"properties": {"size": {"type": "string", "enum": ["small", "SMALL", "Small!"]}}}
        model, _ = build_schema(schema)
        assert [v.name for v in model.root.enums[0].values] == ["SMALL", "SMALL1", "SMALL2"]

    @pytest.mark.parametrize(
        "value,expected",
        [("active", "ACTIVE"), ("in progress", "IN_PROGRESS"), ("2nd", "_2ND"), ("--", "VALUE"), ("a.b-c", "A_B_C")],
    )
    def test_enum_constant_name(self, value, expected):
        assert enum_constant_name(value) == expected


class TestAnnotations:
    """Class-level annotations"""

    def test_defaults(self):
        model, diagnostics = build_sample({"a": 1})
        assert model.root.annotations == ["@JsonIgnoreProperties(ignoreUnknown = true)", "@Data"]
        assert diagnostics == []

    def test_builder_with_data(self):
        model, _ = build_sample({"a": 1}, use_builder_annotation=True)
        assert model.root.annotations[-1] == "@Builder"

    def test_builder_without_data_is_ignored(self):
        model, diagnostics = build_sample(
            {"a": 1}, use_data_annotation=False, use_builder_annotation=True, serialization_library=SerializationLibrary.GSON
        )
        assert model.root.annotations == []
        assert diagnostics == ["Builder annotation ignored: it requires the data annotation."]


class TestRoot:
    """Top-level values that are not objects"""

    def test_non_object_root_gives_empty_class(self):
        model, diagnostics = build_sample([1, 2])
        assert model.root.name == "Root"
        assert model.root.fields == []
        assert diagnostics == ["Top-level value is array, not an object; generated an empty Root class."]

    def test_missing_root_class_is_fatal(self, monkeypatch):
        monkeypatch.setattr(ModelBuilder, "_build_class", lambda self, shape, name_hint, context, parent: "Nowhere")
        with pytest.raises(ModelBuildError):
            ModelBuilder(GeneratorConfig()).build(InferredShape(kind=ShapeKind.OBJECT, properties={}))
