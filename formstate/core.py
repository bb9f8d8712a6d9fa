import logging
from typing import Callable, Any, List, Optional

from formstate.exceptions import global_error_handler

logger = logging.getLogger(__name__)

# Global state for reactive system
_current_effect = None
_batch_updates_active = False
_batch_updates_queue = []
_global_error_handler = global_error_handler

def set_global_error_handler(handler: Optional[Callable[..., None]]):
    """Sets a global error handler for exceptions raised by subscribers and effects."""
    global _global_error_handler
    _global_error_handler = handler

def get_global_error_handler():
    return _global_error_handler

def _handle_error(error, message):
    if _global_error_handler:
        _global_error_handler(error, message)
    else:
        logger.error(f"{message}: {str(error)}")

def batch_updates(fn):
    """
    Runs `fn` with signal writes deferred.

    Every `Signal.set` made inside `fn` is queued. Once `fn` returns, all
    queued values are assigned first and subscribers are notified after,
    in the order the writes were made, so no subscriber observes a batch
    half-applied. Nested batches flush only when the outermost batch
    finishes.
    """
    global _batch_updates_active, _batch_updates_queue
    prev_state = _batch_updates_active
    _batch_updates_active = True
    try:
        return fn()
    finally:
        _batch_updates_active = prev_state
        if not _batch_updates_active:
            queue_to_process = list(_batch_updates_queue)
            _batch_updates_queue.clear()
            changed = [signal for signal, new_value in queue_to_process if signal._assign(new_value)]
            for signal in dict.fromkeys(changed):
                signal._notify()

def queue_update(signal, new_value):
    if _batch_updates_active:
        _batch_updates_queue.append((signal, new_value))
    else:
        signal._set_value_internal(new_value)


class Signal:
    """
    An observable value cell.

    Reading the signal inside a running effect registers the effect as a
    dependency. Plain callbacks registered through `subscribe` are called
    synchronously, in registration order, with the new value.
    """
    __slots__ = ('_subscribers', '_effects', '_always_notify', '_value', '__weakref__')

    def __init__(self, initial_value: Any, always_notify: bool = False):
        self._subscribers: List[Callable[[Any], None]] = []
        self._effects: List['Effect'] = []
        self._always_notify = always_notify
        self._value = initial_value

    def __call__(self) -> Any:
        if _current_effect is not None and _current_effect not in self._effects:
            self._effects.append(_current_effect)
            _current_effect.dependencies.add(self)
        return self._value

    get = __call__

    def peek(self) -> Any:
        return self._value

    def set(self, new_value: Any) -> None:
        queue_update(self, new_value)

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], bool]:
        """
        Registers a callback invoked with the new value on every change.
        Returns a function that removes the callback.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> bool:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
                return True
            return False

        return unsubscribe

    def _set_value_internal(self, new_value):
        if self._assign(new_value):
            self._notify()

    def _assign(self, new_value) -> bool:
        if not self._always_notify and self._value == new_value:
            return False
        self._value = new_value
        return True

    def _notify(self):
        value = self._value
        for subscriber in list(self._subscribers):
            try:
                subscriber(value)
            except Exception as e:
                _handle_error(e, f"Error notifying subscriber: {subscriber}")

        for effect in list(self._effects):
            effect.notify(self)

    def _remove_effect(self, effect):
        if effect in self._effects:
            self._effects.remove(effect)


def create_signal(initial_value: Any, always_notify: bool = False):
    signal = Signal(initial_value, always_notify=always_notify)
    return signal, signal.set


class ReadOnlySignal:
    """Read access to a signal without its setter."""
    __slots__ = ('_signal',)

    def __init__(self, signal: Signal):
        self._signal = signal

    def __call__(self) -> Any:
        return self._signal()

    get = __call__

    def peek(self) -> Any:
        return self._signal.peek()

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], bool]:
        return self._signal.subscribe(callback)


class Effect:
    __slots__ = ('fn', 'dependencies', 'is_running', 'disposed', '__weakref__')

    def __init__(self, fn: Callable[[], Any]):
        self.fn = fn
        self.dependencies: set = set()
        self.is_running = False
        self.disposed = False

    def notify(self, signal):
        if signal in self.dependencies:
            self.run()

    def run(self):
        if self.disposed or self.is_running:
            return
        global _current_effect
        prev_effect = _current_effect
        self.is_running = True
        self._cleanup()
        _current_effect = self
        try:
            self.fn()
        except Exception as e:
            _handle_error(e, "Error running effect")
        finally:
            _current_effect = prev_effect
            self.is_running = False

    def _cleanup(self):
        for signal in list(self.dependencies):
            signal._remove_effect(self)
        self.dependencies.clear()

    def dispose(self):
        if self.disposed:
            return
        self.disposed = True
        self._cleanup()


def create_effect(fn: Callable[[], Any]) -> Effect:
    effect = Effect(fn)
    effect.run()
    return effect

def untrack(fn: Callable[[], Any]) -> Any:
    global _current_effect
    if not callable(fn):
        raise TypeError(f"untrack: expected callable, got {type(fn).__name__}")
    prev_effect = _current_effect
    _current_effect = None
    try:
        return fn()
    finally:
        _current_effect = prev_effect
