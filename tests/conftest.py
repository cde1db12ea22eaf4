import pytest

from appboot import Bootstrap
from appboot.models.config import RuntimeSettings, LifecycleSettings
from appboot.models.enums import LogLevel
from appboot.utils.logger import get_logger, configure_logger


class TerminateRecorder:
    """Stands in for sys.exit: records codes instead of ending the interpreter."""

    def __init__(self):
        self.codes = []

    def __call__(self, code):
        self.codes.append(code)


class CallRecorder:
    """Builds hooks that append their name to a shared list."""

    def __init__(self):
        self.calls = []

    def hook(self, name, result=None, raises=None):
        def _hook(*args):
            self.calls.append(name)
            if raises is not None:
                raise raises
            return result
        _hook.__qualname__ = name
        return _hook

    def async_hook(self, name, result=None, raises=None):
        async def _hook(*args):
            self.calls.append(name)
            if raises is not None:
                raise raises
            return result
        _hook.__qualname__ = name
        return _hook


@pytest.fixture
def terminate():
    return TerminateRecorder()


@pytest.fixture
def recorder():
    return CallRecorder()


@pytest.fixture
def settings():
    """Settings without the atexit hook, so tests never leave one behind."""
    return RuntimeSettings(lifecycle=LifecycleSettings(exit_on_interpreter_shutdown=False))


@pytest.fixture
def make_app(terminate, settings):
    def _make(options=None, cls=Bootstrap):
        return cls(options, terminate=terminate, settings=settings)
    return _make


@pytest.fixture
def restore_logger():
    logger = get_logger()
    level, colors = logger.min_level, logger.use_colors
    yield logger
    configure_logger(level, colors)


@pytest.fixture(autouse=True)
def plain_logger(restore_logger):
    configure_logger(LogLevel.INFO, use_colors=False)
