import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass
class ValidationOutcome:
    """
    Result of validating a form's raw values.

    On success `values` holds the validator's coerced output for every field.
    On failure `values` holds the raw input unchanged and `errors` the first
    message reported for each field.
    """
    success: bool
    values: Dict[str, Any]
    errors: Dict[str, Optional[str]]
    failure: Any = field(default=None, repr=False)


def issue_key(issue: Any) -> Any:
    """Returns the first element of an issue's path, or None for form-level issues."""
    path = getattr(issue, "path", None)
    if not path:
        return None
    return path[0]


def first_messages(issues: Iterable[Any], keys: Iterable[str]) -> Dict[str, Optional[str]]:
    """Maps each key to the message of the first issue whose path starts with it."""
    errors: Dict[str, Optional[str]] = {key: None for key in keys}
    for issue in issues:
        key = issue_key(issue)
        if key in errors and errors[key] is None:
            errors[key] = issue.message
    return errors


class ValidatorAdapter:
    """
    Runs a whole-schema validation function over a form's values and
    translates its result into per-field values and errors.

    `validate_fn` takes the value mapping and returns an object with a
    `success` flag plus either `data` or `issues`.
    """
    def __init__(self, validate_fn: Callable[[Dict[str, Any]], Any]):
        self.validate_fn = validate_fn

    @classmethod
    def for_schema(cls, schema: Any) -> 'ValidatorAdapter':
        validate_fn = getattr(schema, "validate", None) or getattr(schema, "safe_parse")
        return cls(validate_fn)

    def run(self, values: Mapping[str, Any]) -> ValidationOutcome:
        keys = list(values.keys())
        result = self.validate_fn(dict(values))

        if result.success:
            data = result.data or {}
            coerced = {key: data[key] if key in data else values[key] for key in keys}
            logger.debug("Validation succeeded for fields %s", keys)
            return ValidationOutcome(True, coerced, {key: None for key in keys})

        errors = first_messages(result.issues, keys)
        logger.debug("Validation failed: %s", {k: v for k, v in errors.items() if v is not None})
        return ValidationOutcome(False, dict(values), errors, failure=result)
