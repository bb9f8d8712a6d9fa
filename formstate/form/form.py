import logging
from typing import Dict, Any, Optional, Mapping

from formstate.config import get_config
from formstate.core import ReadOnlySignal, batch_updates, create_signal
from formstate.exceptions import UnknownFieldError
from formstate.form.adapter import ValidatorAdapter
from formstate.form.introspect import node_kind, required_flags, schema_shape
from formstate.form.schema import SchemaKind
from formstate.store import FieldState, FieldStateStore, FormState
from formstate.utils.common import copy_containers, trim_values

logger = logging.getLogger(__name__)


class Form:
    """
    Manages the state of one input form backed by an object schema.

    Every key of `initial_values` becomes a field whose `required` flag is
    read from the schema once, here, and never recomputed. The live state is
    available through `inputs`; the latest raw validation failure (for an
    aggregate error summary) through `errors`.

    A form has a single logical owner. Nothing is locked: if a `set_value`
    lands while `validate()` is computing, whichever update is published
    last wins.
    """
    def __init__(self, schema: Any, initial_values: Mapping[str, Any],
                 validator: Optional[ValidatorAdapter] = None):
        self.schema = schema
        self.initial_values = {key: copy_containers(value) for key, value in initial_values.items()}
        self._adapter = validator or ValidatorAdapter.for_schema(schema)

        flags = required_flags(schema, self.initial_values.keys())
        self._store = FieldStateStore({
            key: FieldState(value=copy_containers(value), error=None, required=flags[key])
            for key, value in self.initial_values.items()
        })
        self._errors, self._set_errors = create_signal(None)

        logger.debug("Created form with fields %s (required: %s)",
                     list(self.initial_values), [k for k, v in flags.items() if v])

    @property
    def inputs(self) -> ReadOnlySignal:
        """The live field state mapping."""
        return self._store.signal

    @property
    def errors(self) -> ReadOnlySignal:
        """The raw failure of the most recent `validate()`, or None."""
        return ReadOnlySignal(self._errors)

    @property
    def store(self) -> FieldStateStore:
        return self._store

    def state(self) -> FormState:
        return self._store.get()

    def field(self, key: str) -> FieldState:
        state = self._store.signal.peek()
        if key not in state:
            raise UnknownFieldError(key)
        return state[key]

    def required(self, key: str) -> bool:
        return self.field(key).required

    def values(self) -> Dict[str, Any]:
        """Returns the current raw values, untrimmed."""
        return {key: field_state.value for key, field_state in self._store.get().items()}

    def validate(self) -> Optional[Dict[str, Any]]:
        """
        Validates the current values against the schema.

        On success every error is cleared, the stored values become the
        schema's coerced output (trimmed), and that output is returned.
        On failure each field gets the first message reported for it, the
        raw values are kept, and None is returned. The field state and the
        raw failure are published together.
        """
        outcome = self._adapter.run(self.values())

        if outcome.success:
            result = trim_values(outcome.values)

            def publish_success():
                self._store.replace_values(result)
                self._set_errors(None)

            batch_updates(publish_success)
            return result

        def publish_failure():
            self._store.replace_values(outcome.values, outcome.errors)
            self._set_errors(outcome.failure)

        batch_updates(publish_failure)
        return None

    def set_value(self, key: str, value: Any) -> None:
        """Sets one field's raw value. Errors and other fields are left alone."""
        if key not in self._store:
            if get_config().strict_keys:
                raise UnknownFieldError(key)
            logger.warning("Ignoring value for unknown field '%s'", key)
            return
        self._store.patch(key, value)

    def reset(self) -> None:
        """Restores the construction-time values and clears every error."""
        def perform_updates():
            self._store.replace_values({key: copy_containers(value) for key, value in self.initial_values.items()})
            self._set_errors(None)

        batch_updates(perform_updates)

    def data(self) -> Dict[str, Any]:
        """
        Returns the current values with strings (and strings inside lists)
        trimmed.

        NOTE: this also writes the trimmed values back into the form state,
        so observers are notified when trimming changed anything. Callers
        rely on a read leaving the stored values trimmed.
        """
        state = self._store.get()
        values = {key: field_state.value for key, field_state in state.items()}
        trimmed = trim_values(values)

        if any(trimmed[key] != values[key] for key in values):
            self._store.replace_values(trimmed, {key: field_state.error for key, field_state in state.items()})

        return trimmed

    def __repr__(self):
        return f"Form(fields={list(self.initial_values)})"


def initial_values_from_schema(schema: Any) -> Dict[str, Any]:
    """
    Builds initial values for every field of a schema: the field's default
    when its node carries one, otherwise None.
    """
    values = {}
    for key, node in schema_shape(schema).items():
        if node_kind(node) is SchemaKind.DEFAULT and hasattr(node, "resolve_default"):
            values[key] = node.resolve_default()
        else:
            values[key] = None
    return values


def create_form(form_schema: Any, initial_values: Optional[Mapping[str, Any]] = None,
                validator: Optional[ValidatorAdapter] = None) -> Form:
    """
    Factory function to create and initialize a Form instance.

    Args:
        form_schema: The object schema the form validates against.
        initial_values: The form's fields and their starting values. When
                        omitted, every field of the schema is used, starting
                        from its default or None.
        validator: Optional adapter to use instead of the schema's own
                   `validate`.

    Returns:
        A configured Form instance.
    """
    if initial_values is None:
        initial_values = initial_values_from_schema(form_schema)
    return Form(form_schema, initial_values, validator=validator)
