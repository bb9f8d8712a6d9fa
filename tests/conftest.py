import pytest

from formstate import config as config_module
from formstate.config import FormConfig
from formstate.core import get_global_error_handler, set_global_error_handler


@pytest.fixture(autouse=True)
def restore_config():
    saved = config_module.config
    config_module.config = FormConfig()
    yield config_module.config
    config_module.config = saved


@pytest.fixture
def captured_errors():
    """Routes subscriber and effect errors into a list for the duration of a test."""
    previous = get_global_error_handler()
    errors = []
    set_global_error_handler(lambda error, description=None: errors.append(error))
    yield errors
    set_global_error_handler(previous)
