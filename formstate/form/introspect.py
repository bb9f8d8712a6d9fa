"""
Requiredness of form fields, read off their schema nodes.

Only the node kinds in `SchemaKind` are understood. Any node that does not
declare one of them (including nodes from other schema libraries) is a leaf,
and a leaf is required.
"""
import logging
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

from formstate.form.schema import SchemaKind

logger = logging.getLogger(__name__)


def node_kind(node: Any) -> SchemaKind:
    """Returns the declared kind of a node, falling back to LEAF."""
    kind = getattr(node, "kind", None)
    try:
        return SchemaKind(kind)
    except (ValueError, TypeError):
        logger.debug("Treating %r as a leaf node (kind=%r)", node, kind)
        return SchemaKind.LEAF


def is_required(node: Any, _seen: Optional[FrozenSet[int]] = None) -> bool:
    """
    Decides whether the field described by `node` is required.

    - union: required unless one of its options is not required
    - pipe: follows its output node
    - optional, default: never required
    - anything else: required
    """
    seen = _seen or frozenset()
    if id(node) in seen:
        return True
    seen = seen | {id(node)}

    kind = node_kind(node)

    if kind is SchemaKind.UNION:
        options = getattr(node, "options", None)
        if options is None:
            logger.debug("Union node %r exposes no options; treating it as required", node)
            return True
        return not any(not is_required(option, seen) for option in options)

    if kind is SchemaKind.PIPE:
        output = getattr(node, "output", None)
        if output is None:
            logger.debug("Pipe node %r exposes no output; treating it as required", node)
            return True
        return is_required(output, seen)

    if kind in (SchemaKind.OPTIONAL, SchemaKind.DEFAULT):
        return False

    return True


def schema_shape(schema: Any) -> Mapping[str, Any]:
    """Returns the ordered field map of an object schema, or an empty mapping."""
    shape = getattr(schema, "shape", None)
    if isinstance(shape, Mapping):
        return shape
    logger.debug("Schema %r has no field shape; all fields will be optional", schema)
    return {}


def required_flags(schema: Any, keys: Iterable[str]) -> Dict[str, bool]:
    """
    Computes the `required` flag for each key.

    A key without a node in the schema's shape is not required.
    """
    shape = schema_shape(schema)
    return {key: is_required(shape[key]) if key in shape else False for key in keys}
