from formstate.form.helpers import empty_to_undefined, optional_url
from formstate.form.introspect import is_required, node_kind, required_flags
from formstate.form.schema import (
    PipeNode,
    SchemaKind,
    UnionNode,
    array,
    literal,
    number,
    object_schema,
    preprocess,
    string,
    union,
)


def test_leaf_is_required():
    assert is_required(string()) is True
    assert is_required(array(string())) is True
    assert is_required(object_schema(a=string())) is True


def test_optional_and_default_are_not_required():
    assert is_required(string().optional()) is False
    assert is_required(string().default("x")) is False
    assert is_required(string().min_length(1).optional()) is False


def test_wrapping_flips_requiredness_regardless_of_value():
    bare = number()
    assert is_required(bare) is True
    assert is_required(bare.optional()) is False


def test_union_with_optional_branch_is_not_required():
    field = union(string().email(), string().optional())
    assert is_required(field) is False


def test_union_without_optional_branch_is_required():
    assert is_required(union(string(), number())) is True


def test_union_branch_optional_through_a_pipe():
    field = union(string().url(), empty_to_undefined(string().optional()))
    assert is_required(field) is False


def test_pipe_follows_output_not_input():
    assert is_required(PipeNode(string().optional(), string())) is True
    assert is_required(PipeNode(string(), string().optional())) is False


def test_transform_pipe_is_required():
    assert is_required(literal("").transform(lambda _: None)) is True


def test_nested_pipe_union_optional():
    field = preprocess(lambda v: v, union(number(), preprocess(lambda v: v, string().optional())))
    assert is_required(field) is False


def test_optional_url_helper_is_not_required():
    assert is_required(optional_url()) is False


class ForeignNode:
    """A node from some other schema library."""


class StringKindNode:
    kind = "optional"


def test_unknown_nodes_fail_closed():
    assert node_kind(ForeignNode()) is SchemaKind.LEAF
    assert is_required(ForeignNode()) is True
    assert is_required(None) is True

    class WeirdKind:
        kind = "intersection"

    assert is_required(WeirdKind()) is True


def test_kind_given_as_string_is_understood():
    assert is_required(StringKindNode()) is False


def test_composite_without_children_fails_closed():
    class BareUnion:
        kind = SchemaKind.UNION

    class BarePipe:
        kind = "pipe"

    assert is_required(BareUnion()) is True
    assert is_required(BarePipe()) is True


def test_cyclic_union_terminates():
    node = UnionNode([string()])
    node.options.append(node)
    assert is_required(node) is True

    node.options.append(string().optional())
    assert is_required(node) is False


def test_required_flags():
    schema = object_schema(name=string(), age=number().optional())
    assert required_flags(schema, ["name", "age", "nickname"]) == {
        "name": True,
        "age": False,
        "nickname": False,
    }


def test_required_flags_without_shape():
    assert required_flags(object(), ["name"]) == {"name": False}
