from typing import Any, Callable, Optional, Union
import logging
import re
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

Check = Callable[[Any], Optional[str]]


class Validator:
    """
    Provides a set of built-in validation checks.

    Every check is a callable taking the value and returning an error message,
    or None when the value passes.
    """

    @staticmethod
    def min_length(length: int, error_message: str = None, noun: str = "string") -> Check:
        """Creates a check for a minimum length."""
        unit = "characters" if noun == "string" else "items"
        def validate(value: Any) -> Optional[str]:
            if len(value) < length:
                return error_message or f"Too small: expected {noun} to have >={length} {unit}"
            return None
        return validate

    @staticmethod
    def max_length(length: int, error_message: str = None, noun: str = "string") -> Check:
        """Creates a check for a maximum length."""
        unit = "characters" if noun == "string" else "items"
        def validate(value: Any) -> Optional[str]:
            if len(value) > length:
                return error_message or f"Too big: expected {noun} to have <={length} {unit}"
            return None
        return validate

    @staticmethod
    def regex(pattern: Union[str, "re.Pattern"], error_message: str = None) -> Check:
        """Creates a check that the whole value matches a regex pattern."""
        compiled_pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        def validate(value: str) -> Optional[str]:
            if not compiled_pattern.fullmatch(value):
                return error_message or f"Invalid string: must match pattern /{compiled_pattern.pattern}/"
            return None
        return validate

    @staticmethod
    def email(error_message: str = None) -> Check:
        """Creates an email address check."""
        email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
        return Validator.regex(email_pattern, error_message or "Invalid email address")

    @staticmethod
    def url(error_message: str = None) -> Check:
        """
        Creates a URL check.

        A URL needs a scheme and, for hierarchical schemes, a host; bare words
        and relative paths are rejected.
        """
        def validate(value: str) -> Optional[str]:
            message = error_message or "Invalid URL"
            if any(c.isspace() for c in value):
                return message
            try:
                parts = urlsplit(value)
            except ValueError:
                return message
            if not re.fullmatch(r"[a-zA-Z][a-zA-Z0-9+.-]*", parts.scheme or ""):
                return message
            if value[len(parts.scheme) + 1:].startswith("//") and not parts.netloc:
                return message
            if not parts.netloc and not parts.path:
                return message
            return None
        return validate

    @staticmethod
    def min_value(min_val: Union[int, float], error_message: str = None) -> Check:
        """Creates a check for a minimum numeric value."""
        def validate(value: Union[int, float]) -> Optional[str]:
            if value < min_val:
                return error_message or f"Too small: expected number to be >={min_val}"
            return None
        return validate

    @staticmethod
    def max_value(max_val: Union[int, float], error_message: str = None) -> Check:
        """Creates a check for a maximum numeric value."""
        def validate(value: Union[int, float]) -> Optional[str]:
            if value > max_val:
                return error_message or f"Too big: expected number to be <={max_val}"
            return None
        return validate

    @staticmethod
    def custom(validation_func: Callable[[Any], Any], error_message: str = "Invalid input") -> Check:
        """
        Wraps a predicate as a check.

        The predicate may return a bool (False fails with `error_message`),
        a message string, or None.
        """
        def validate(value: Any) -> Optional[str]:
            result = validation_func(value)
            if result is True or result is None:
                return None
            if result is False:
                return error_message
            return str(result)
        return validate
