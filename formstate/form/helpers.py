from typing import Any

from formstate.form.schema import SchemaNode, PipeNode, UnionNode, literal, preprocess, string


def _blank_to_none(value: Any) -> Any:
    return None if value == "" else value


def empty_to_undefined(node: SchemaNode) -> PipeNode:
    """Treats an empty string as a missing value before `node` parses it."""
    return preprocess(_blank_to_none, node)


def optional_url() -> UnionNode:
    """A URL that may be left out or left blank; blank parses to None."""
    return string().url().optional().or_(literal("").transform(lambda _: None))
