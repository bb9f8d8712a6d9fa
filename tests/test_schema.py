import pytest

from formstate.exceptions import SchemaValidationError
from formstate.form.helpers import empty_to_undefined, optional_url
from formstate.form.schema import (
    Failure,
    Issue,
    SchemaKind,
    Success,
    any_value,
    array,
    boolean,
    integer,
    literal,
    number,
    object_schema,
    preprocess,
    string,
    union,
)


class TestLeaves:
    def test_string_accepts_string(self):
        assert string().safe_parse("hi") == Success("hi")

    def test_string_rejects_missing_value(self):
        result = string().safe_parse(None)
        assert result == Failure([Issue((), "Invalid input: expected string, received undefined", "invalid_type")])

    def test_string_length_checks(self):
        node = string().min_length(2).max_length(3)
        assert node.safe_parse("a").issues[0].message == "Too small: expected string to have >=2 characters"
        assert node.safe_parse("abcd").issues[0].message == "Too big: expected string to have <=3 characters"
        assert node.safe_parse("abc").success

    def test_string_trim_runs_before_checks(self):
        node = string().trim().min_length(1)
        assert node.safe_parse("  x  ") == Success("x")
        assert not node.safe_parse("   ").success

    def test_email_and_url(self):
        assert string().email().safe_parse("a@b.io").success
        assert string().email().safe_parse("nope").issues[0].message == "Invalid email address"
        assert string().url().safe_parse("https://example.com/cb").success
        assert string().url().safe_parse("http://localhost:3000").success
        assert string().url().safe_parse("not-a-url").issues[0].message == "Invalid URL"
        assert not string().url().safe_parse("http://").success

    def test_number_does_not_accept_bool_or_string(self):
        assert number().safe_parse(1.5) == Success(1.5)
        assert not number().safe_parse(True).success
        assert not number().safe_parse("4").success

    def test_number_coercion(self):
        assert number(coerce=True).safe_parse(" 4 ") == Success(4)
        assert number(coerce=True).safe_parse("2.5") == Success(2.5)
        assert not number(coerce=True).safe_parse("four").success

    def test_integer_bounds(self):
        node = integer().min_value(1).max_value(100)
        assert node.safe_parse(0).issues[0].message == "Too small: expected number to be >=1"
        assert node.safe_parse(101).issues[0].message == "Too big: expected number to be <=100"
        assert node.safe_parse(2.0) == Success(2)
        assert node.safe_parse(2.5).issues[0].code == "invalid_type"

    def test_boolean(self):
        assert boolean().safe_parse(False) == Success(False)
        assert not boolean().safe_parse(0).success

    def test_literal(self):
        assert literal("").safe_parse("") == Success("")
        assert literal("").safe_parse("x").issues[0].code == "invalid_value"

    def test_refine(self):
        node = any_value().refine(lambda v: v != "admin", "Reserved name")
        assert node.safe_parse("admin").issues[0].message == "Reserved name"
        assert node.safe_parse("root").success

    def test_array_reports_item_paths(self):
        node = array(string().url())
        result = node.safe_parse(["https://a.example", "bad"])
        assert result.issues == [Issue((1,), "Invalid URL", "invalid_format")]

    def test_array_item_count(self):
        node = array(string()).min_items(1)
        assert node.safe_parse([]).issues[0].message == "Too small: expected array to have >=1 items"


class TestComposites:
    def test_kinds(self):
        assert string().kind is SchemaKind.LEAF
        assert string().optional().kind is SchemaKind.OPTIONAL
        assert string().default("x").kind is SchemaKind.DEFAULT
        assert string().or_(number()).kind is SchemaKind.UNION
        assert string().transform(str.upper).kind is SchemaKind.PIPE

    def test_optional_accepts_none(self):
        assert string().optional().safe_parse(None) == Success(None)
        assert not string().optional().safe_parse(3).success

    def test_default_fills_missing_value(self):
        assert string().default("en").safe_parse(None) == Success("en")
        assert array(string()).default(list).safe_parse(None) == Success([])

    def test_default_value_is_copied(self):
        shared = ["a"]
        node = array(string()).default(shared)
        node.safe_parse(None).data.append("b")
        assert shared == ["a"]

    def test_transform(self):
        assert string().transform(str.upper).safe_parse("abc") == Success("ABC")

    def test_transform_value_error_becomes_issue(self):
        def parse_port(value):
            return int(value)

        result = string().transform(parse_port).safe_parse("http")
        assert result.issues[0].code == "custom"

    def test_pipe_stops_at_input_failure(self):
        node = string().pipe(string().min_length(5))
        assert node.safe_parse(1).issues[0].code == "invalid_type"
        assert node.safe_parse("abc").issues[0].code == "too_small"

    def test_preprocess_output_is_the_wrapped_node(self):
        inner = string().optional()
        node = preprocess(lambda v: v, inner)
        assert node.output is inner

    def test_union_first_match_wins(self):
        node = union(number(coerce=True), string())
        assert node.safe_parse("5") == Success(5)
        assert node.safe_parse("x") == Success("x")

    def test_union_reports_meaningful_branch(self):
        result = optional_url().safe_parse("not-a-url")
        assert result.issues == [Issue((), "Invalid URL", "invalid_format")]

    def test_union_of_mismatches_reports_generic_message(self, restore_config):
        result = union(number(), boolean()).safe_parse("x")
        assert result.issues == [Issue((), "Invalid input", "invalid_union")]

        restore_config.invalid_union_message = "Pick a number or a flag"
        result = union(number(), boolean()).safe_parse("x")
        assert result.issues[0].message == "Pick a number or a flag"


class TestHelpers:
    def test_empty_to_undefined(self):
        node = empty_to_undefined(string().email().optional())
        assert node.safe_parse("") == Success(None)
        assert node.safe_parse("a@b.io") == Success("a@b.io")
        assert not node.safe_parse("x").success

    def test_optional_url(self):
        node = optional_url()
        assert node.safe_parse("") == Success(None)
        assert node.safe_parse(None) == Success(None)
        assert node.safe_parse("https://app.example") == Success("https://app.example")


class TestObjectSchema:
    def test_shape_is_ordered(self):
        schema = object_schema(b=string(), a=string())
        assert list(schema.shape) == ["b", "a"]

    def test_field_adds_to_shape(self):
        schema = object_schema()
        node = schema.field("name", string())
        assert schema.shape["name"] is node

    def test_validate_success_drops_unknown_keys(self):
        schema = object_schema(name=string(), age=number().optional())
        assert schema.validate({"name": "ann", "extra": 1}) == Success({"name": "ann", "age": None})

    def test_validate_failure_paths(self):
        schema = object_schema(name=string().min_length(1), tags=array(string().min_length(2)))
        result = schema.validate({"name": "", "tags": ["ok", "x"]})
        assert [issue.path for issue in result.issues] == [("name",), ("tags", 1)]

    def test_non_dict_input(self):
        result = object_schema(name=string()).validate(["ann"])
        assert result.issues[0].message == "Invalid input: expected object, received array"

    def test_parse_raises_with_issues(self):
        with pytest.raises(SchemaValidationError) as excinfo:
            object_schema(name=string()).parse({})
        assert excinfo.value.issues[0].path == ("name",)
        assert "name: Invalid input" in str(excinfo.value)
