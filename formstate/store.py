import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from formstate.core import ReadOnlySignal, create_signal
from formstate.exceptions import StateShapeError, UnknownFieldError

logger = logging.getLogger(__name__)

FormState = Dict[str, "FieldState"]


@dataclass(frozen=True)
class FieldState:
    """
    State of a single form field.

    `required` is fixed when the form is built; `error` holds the message
    from the most recent validation, or None.
    """
    value: Any
    error: Optional[str] = None
    required: bool = False


class FieldStateStore:
    """
    Observable container of per-field state.

    The key set and its order are fixed at construction. Every mutation
    publishes a complete new mapping through a single notification, so an
    observer never sees some fields updated and others not.
    """
    def __init__(self, initial_state: Mapping[str, FieldState]):
        self._keys = tuple(initial_state.keys())
        self._signal, self._set_state = create_signal(MappingProxyType(dict(initial_state)), always_notify=True)

    @property
    def keys(self):
        return self._keys

    @property
    def signal(self) -> ReadOnlySignal:
        return ReadOnlySignal(self._signal)

    def get(self) -> FormState:
        """Returns a snapshot of the current state."""
        return dict(self._signal.peek())

    def __contains__(self, key) -> bool:
        return key in self._keys

    def patch(self, key: str, value: Any) -> None:
        """Updates the value of one field, leaving its error and every other field untouched."""
        if key not in self._keys:
            raise UnknownFieldError(key)
        current = self._signal.peek()
        self._set_state(MappingProxyType({**current, key: replace(current[key], value=value)}))

    def replace_all(self, next_state: Mapping[str, FieldState]) -> None:
        """
        Replaces every field's value and error in one update.

        `required` flags are always taken from the current state.
        """
        if set(next_state.keys()) != set(self._keys):
            raise StateShapeError(self._keys, tuple(next_state.keys()))
        current = self._signal.peek()
        self._set_state(MappingProxyType({
            key: FieldState(
                value=next_state[key].value,
                error=next_state[key].error,
                required=current[key].required,
            )
            for key in self._keys
        }))

    def replace_values(self, values: Mapping[str, Any], errors: Optional[Mapping[str, Optional[str]]] = None) -> None:
        """Builds the next state from value and error mappings and replaces the whole state with it."""
        errors = errors or {}
        current = self._signal.peek()
        self.replace_all({
            key: replace(
                current[key],
                value=values[key] if key in values else current[key].value,
                error=errors.get(key),
            )
            for key in self._keys
        })

    def subscribe(self, callback: Callable[[FormState], None]) -> Callable[[], bool]:
        """
        Registers an observer called with the full state on every mutation.
        Returns a function that removes the observer.
        """
        return self._signal.subscribe(callback)
