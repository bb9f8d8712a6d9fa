import logging

logger = logging.getLogger(__name__)


class FormError(Exception):
    """Base exception for form state errors."""
    pass


class UnknownFieldError(FormError, KeyError):
    """Raised when a field key was not part of the form at construction."""
    def __init__(self, key):
        super().__init__(f"Field '{key}' is not part of this form.")
        self.key = key

    def __str__(self):
        return self.args[0]


class StateShapeError(FormError, ValueError):
    """Raised when a replacement state does not have the form's exact key set."""
    def __init__(self, expected, received):
        missing = [k for k in expected if k not in received]
        extra = [k for k in received if k not in expected]
        super().__init__(f"State keys do not match the form (missing: {missing}, unexpected: {extra}).")
        self.missing = missing
        self.extra = extra


def global_error_handler(error: Exception, description: str = None):
    logger.error(
        "%s: %s",
        description or error.__class__.__name__,
        error,
        exc_info=(type(error), error, error.__traceback__),
    )


class SchemaValidationError(FormError, ValueError):
    """Raised by `SchemaNode.parse` when a value does not satisfy its schema."""
    def __init__(self, issues):
        self.issues = list(issues)
        summary = "; ".join(
            f"{'.'.join(str(p) for p in issue.path) or '<root>'}: {issue.message}" for issue in self.issues
        )
        super().__init__(summary or "Validation failed")
