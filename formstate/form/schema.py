from typing import Dict, Any, Callable, Optional, List, Sequence, Tuple, Union
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
import logging

from formstate.config import get_config
from formstate.exceptions import SchemaValidationError
from formstate.form.validator import Validator

logger = logging.getLogger(__name__)

Path = Tuple[Union[str, int], ...]

# Issue codes for a value of the wrong shape; union parsing treats
# branches that only failed this way as non-matching.
MISMATCH_CODES = frozenset({"invalid_type", "invalid_value"})


class SchemaKind(str, Enum):
    """The closed set of node kinds a schema tree is built from."""
    UNION = "union"
    PIPE = "pipe"
    OPTIONAL = "optional"
    DEFAULT = "default"
    LEAF = "leaf"


@dataclass(frozen=True)
class Issue:
    path: Path
    message: str
    code: str = "custom"


@dataclass(frozen=True)
class Success:
    data: Any
    success: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Failure:
    issues: List[Issue]
    success: bool = field(default=False, init=False)


ParseResult = Union[Success, Failure]


def describe(value: Any) -> str:
    """Names the type of a value the way issue messages refer to it."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


class SchemaNode:
    """
    Base class for every schema node.

    Subclasses implement `_parse`, returning the (possibly coerced) output
    value and the list of issues found at `path`.
    """
    kind = SchemaKind.LEAF

    def __init__(self):
        self.checks: List[Tuple[str, Callable[[Any], Optional[str]]]] = []

    def _parse(self, value: Any, path: Path) -> Tuple[Any, List[Issue]]:
        raise NotImplementedError

    def _run_checks(self, value: Any, path: Path) -> List[Issue]:
        issues = []
        for code, check in self.checks:
            message = check(value)
            if message:
                issues.append(Issue(path, message, code))
        return issues

    def safe_parse(self, value: Any) -> ParseResult:
        """Parses a value, returning `Success` or `Failure` instead of raising."""
        output, issues = self._parse(value, ())
        if issues:
            return Failure(issues)
        return Success(output)

    def parse(self, value: Any) -> Any:
        """Parses a value, raising `SchemaValidationError` on failure."""
        result = self.safe_parse(value)
        if not result.success:
            raise SchemaValidationError(result.issues)
        return result.data

    # -- Combinators ---
    def optional(self) -> 'OptionalNode':
        """Accepts a missing value (None) in addition to what this node accepts."""
        return OptionalNode(self)

    def default(self, value: Any) -> 'DefaultNode':
        """Substitutes `value` (or the result of calling it) when the input is missing."""
        return DefaultNode(self, value)

    def or_(self, other: 'SchemaNode') -> 'UnionNode':
        return UnionNode([self, other])

    def transform(self, fn: Callable[[Any], Any]) -> 'PipeNode':
        """Feeds this node's output through `fn`."""
        return PipeNode(self, TransformNode(fn))

    def pipe(self, node: 'SchemaNode') -> 'PipeNode':
        """Feeds this node's output into `node`."""
        return PipeNode(self, node)

    def refine(self, fn: Callable[[Any], Any], error_message: str = "Invalid input") -> 'SchemaNode':
        """Adds a custom check run after the node's own checks."""
        self.checks.append(("custom", Validator.custom(fn, error_message)))
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# -- Leaves ---

class TypedNode(SchemaNode):
    type_name = "unknown"

    def _accepts(self, value: Any) -> bool:
        raise NotImplementedError

    def _coerce(self, value: Any) -> Any:
        return value

    def _type_issue(self, value: Any, path: Path) -> Issue:
        return Issue(path, f"Invalid input: expected {self.type_name}, received {describe(value)}", "invalid_type")

    def _parse(self, value, path):
        value = self._coerce(value)
        if not self._accepts(value):
            return value, [self._type_issue(value, path)]
        return value, self._run_checks(value, path)


class StringNode(TypedNode):
    type_name = "string"

    def __init__(self):
        super().__init__()
        self.trim_flag = False

    def _accepts(self, value):
        return isinstance(value, str)

    def _coerce(self, value):
        if self.trim_flag and isinstance(value, str):
            return value.strip()
        return value

    def trim(self) -> 'StringNode':
        """Strips surrounding whitespace before the checks run."""
        self.trim_flag = True
        return self

    def min_length(self, length: int, error_message: str = None) -> 'StringNode':
        self.checks.append(("too_small", Validator.min_length(length, error_message)))
        return self

    def max_length(self, length: int, error_message: str = None) -> 'StringNode':
        self.checks.append(("too_big", Validator.max_length(length, error_message)))
        return self

    def non_empty(self, error_message: str = None) -> 'StringNode':
        return self.min_length(1, error_message)

    def regex(self, pattern: str, error_message: str = None) -> 'StringNode':
        self.checks.append(("invalid_format", Validator.regex(pattern, error_message)))
        return self

    def email(self, error_message: str = None) -> 'StringNode':
        self.checks.append(("invalid_format", Validator.email(error_message)))
        return self

    def url(self, error_message: str = None) -> 'StringNode':
        self.checks.append(("invalid_format", Validator.url(error_message)))
        return self


class NumberNode(TypedNode):
    """
    A number. With `coerce`, numeric strings are converted before checking,
    so text inputs bound to number fields validate.
    """
    def __init__(self, integer: bool = False, coerce: bool = False):
        super().__init__()
        self.integer = integer
        self.coerce = coerce

    @property
    def type_name(self):
        return "int" if self.integer else "number"

    def _accepts(self, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if self.integer:
            return isinstance(value, int) or value.is_integer()
        return value == value  # NaN is not a number here

    def _coerce(self, value):
        if self.coerce and isinstance(value, str) and value.strip():
            try:
                number = float(value.strip())
            except ValueError:
                return value
            return int(number) if number.is_integer() else number
        if self.integer and isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    def min_value(self, min_val: Union[int, float], error_message: str = None) -> 'NumberNode':
        self.checks.append(("too_small", Validator.min_value(min_val, error_message)))
        return self

    def max_value(self, max_val: Union[int, float], error_message: str = None) -> 'NumberNode':
        self.checks.append(("too_big", Validator.max_value(max_val, error_message)))
        return self


class BooleanNode(TypedNode):
    type_name = "boolean"

    def _accepts(self, value):
        return isinstance(value, bool)


class LiteralNode(SchemaNode):
    def __init__(self, expected: Any):
        super().__init__()
        self.expected = expected

    def _parse(self, value, path):
        if value != self.expected or type(value) is not type(self.expected):
            return value, [Issue(path, f"Invalid input: expected {self.expected!r}", "invalid_value")]
        return value, self._run_checks(value, path)

    def __repr__(self):
        return f"LiteralNode({self.expected!r})"


class AnyNode(SchemaNode):
    def _parse(self, value, path):
        return value, self._run_checks(value, path)


class TransformNode(SchemaNode):
    """Applies a function to the value. A ValueError or TypeError raised by it becomes an issue."""
    def __init__(self, fn: Callable[[Any], Any]):
        super().__init__()
        self.fn = fn

    def _parse(self, value, path):
        try:
            output = self.fn(value)
        except (ValueError, TypeError) as e:
            return value, [Issue(path, str(e) or "Invalid input", "custom")]
        return output, self._run_checks(output, path)


class ArrayNode(TypedNode):
    type_name = "array"

    def __init__(self, item: SchemaNode):
        super().__init__()
        self.item = item

    def _accepts(self, value):
        return isinstance(value, (list, tuple))

    def _parse(self, value, path):
        if not self._accepts(value):
            return value, [self._type_issue(value, path)]
        output, issues = [], []
        for index, element in enumerate(value):
            parsed, element_issues = self.item._parse(element, path + (index,))
            output.append(parsed)
            issues.extend(element_issues)
        issues.extend(self._run_checks(output, path))
        return output, issues

    def min_items(self, count: int, error_message: str = None) -> 'ArrayNode':
        self.checks.append(("too_small", Validator.min_length(count, error_message, noun="array")))
        return self

    def max_items(self, count: int, error_message: str = None) -> 'ArrayNode':
        self.checks.append(("too_big", Validator.max_length(count, error_message, noun="array")))
        return self


class ObjectSchema(TypedNode):
    """
    An object with a fixed, ordered set of fields.

    Used both as a nested field node and as the whole-form schema. Keys not
    declared in the shape are dropped from the output.
    """
    type_name = "object"

    def __init__(self, shape: Optional[Dict[str, SchemaNode]] = None):
        super().__init__()
        self.shape: Dict[str, SchemaNode] = dict(shape or {})

    def field(self, name: str, node: SchemaNode) -> SchemaNode:
        """Adds a field to the schema and returns its node."""
        self.shape[name] = node
        return node

    def _accepts(self, value):
        return isinstance(value, dict)

    def _parse(self, value, path):
        if not self._accepts(value):
            return value, [self._type_issue(value, path)]
        output, issues = {}, []
        for key, node in self.shape.items():
            parsed, field_issues = node._parse(value.get(key), path + (key,))
            output[key] = parsed
            issues.extend(field_issues)
        if not issues:
            issues.extend(self._run_checks(output, path))
        return output, issues

    def validate(self, values: Dict[str, Any]) -> ParseResult:
        """Validates a flat value mapping against the whole schema."""
        return self.safe_parse(values)

    def __repr__(self):
        return f"ObjectSchema({list(self.shape)})"


# -- Composites ---

class OptionalNode(SchemaNode):
    kind = SchemaKind.OPTIONAL

    def __init__(self, inner: SchemaNode):
        super().__init__()
        self.inner = inner

    def unwrap(self) -> SchemaNode:
        return self.inner

    def _parse(self, value, path):
        if value is None:
            return None, []
        return self.inner._parse(value, path)

    def __repr__(self):
        return f"OptionalNode({self.inner!r})"


class DefaultNode(SchemaNode):
    kind = SchemaKind.DEFAULT

    def __init__(self, inner: SchemaNode, default_value: Any):
        super().__init__()
        self.inner = inner
        self.default_value = default_value

    def unwrap(self) -> SchemaNode:
        return self.inner

    def resolve_default(self) -> Any:
        if callable(self.default_value):
            return self.default_value()
        return deepcopy(self.default_value)

    def _parse(self, value, path):
        if value is None:
            return self.resolve_default(), []
        return self.inner._parse(value, path)

    def __repr__(self):
        return f"DefaultNode({self.inner!r}, {self.default_value!r})"


class UnionNode(SchemaNode):
    """
    Accepts a value if any option accepts it; the first accepting option's
    output wins.
    """
    kind = SchemaKind.UNION

    def __init__(self, options: Sequence[SchemaNode]):
        super().__init__()
        self.options: List[SchemaNode] = list(options)

    def or_(self, other: SchemaNode) -> 'UnionNode':
        return UnionNode(self.options + [other])

    def _parse(self, value, path):
        failures = []
        for option in self.options:
            output, issues = option._parse(value, path)
            if not issues:
                return output, self._run_checks(output, path)
            failures.append(issues)

        for issues in failures:
            if any(issue.code not in MISMATCH_CODES for issue in issues):
                return value, issues
        return value, [Issue(path, get_config().invalid_union_message, "invalid_union")]

    def __repr__(self):
        return f"UnionNode({self.options!r})"


class PipeNode(SchemaNode):
    """Parses with `input`, then feeds the result to `output`."""
    kind = SchemaKind.PIPE

    def __init__(self, in_node: SchemaNode, out_node: SchemaNode):
        super().__init__()
        self.input = in_node
        self.output = out_node

    def _parse(self, value, path):
        intermediate, issues = self.input._parse(value, path)
        if issues:
            return value, issues
        result, issues = self.output._parse(intermediate, path)
        if issues:
            return value, issues
        return result, self._run_checks(result, path)

    def __repr__(self):
        return f"PipeNode({self.input!r}, {self.output!r})"


# -- Constructors ---

def string() -> StringNode:
    return StringNode()

def number(coerce: bool = False) -> NumberNode:
    return NumberNode(coerce=coerce)

def integer(coerce: bool = False) -> NumberNode:
    return NumberNode(integer=True, coerce=coerce)

def boolean() -> BooleanNode:
    return BooleanNode()

def literal(value: Any) -> LiteralNode:
    return LiteralNode(value)

def any_value() -> AnyNode:
    return AnyNode()

def array(item: SchemaNode) -> ArrayNode:
    return ArrayNode(item)

def transform(fn: Callable[[Any], Any]) -> TransformNode:
    return TransformNode(fn)

def union(*options: SchemaNode) -> UnionNode:
    return UnionNode(options)

def preprocess(fn: Callable[[Any], Any], node: SchemaNode) -> PipeNode:
    """Runs `fn` on the raw value before `node` parses it."""
    return PipeNode(TransformNode(fn), node)

def object_schema(shape: Optional[Dict[str, SchemaNode]] = None, **fields: SchemaNode) -> ObjectSchema:
    return ObjectSchema({**(shape or {}), **fields})
