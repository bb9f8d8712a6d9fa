from .core import create_signal, create_effect, batch_updates, untrack, set_global_error_handler
from .store import FieldState, FieldStateStore
from .form import Form, create_form

__version__ = "0.1.0"

get_version = lambda: __version__
