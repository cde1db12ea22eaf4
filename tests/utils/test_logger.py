"""
Structured logger output.
"""

import io

from appboot.models.enums import LogCategory, LogLevel
from appboot.utils.logger import Logger


def make_logger(min_level=LogLevel.DEBUG):
    out, err = io.StringIO(), io.StringIO()
    return Logger(min_level=min_level, use_colors=False, stream=out, error_stream=err), out, err


def test_message_and_details_format():
    logger, out, _ = make_logger()

    logger.info(LogCategory.PIPELINE, "Phase completed", phase="RUN", took="3ms")

    lines = out.getvalue().splitlines()
    assert "PIPELINE" in lines[0]
    assert lines[0].endswith("✓ Phase completed")
    assert lines[1].strip() == "├─ phase: RUN"
    assert lines[2].strip() == "└─ took: 3ms"


def test_errors_go_to_error_stream():
    logger, out, err = make_logger()

    logger.error(LogCategory.SHUTDOWN, "Teardown failed")
    logger.warn(LogCategory.SHUTDOWN, "Slow teardown")

    assert "Teardown failed" in err.getvalue()
    assert "Teardown failed" not in out.getvalue()
    assert "Slow teardown" in out.getvalue()


def test_min_level_filters():
    logger, out, _ = make_logger(min_level=LogLevel.WARN)

    logger.debug(LogCategory.CONFIG, "hidden")
    logger.info(LogCategory.CONFIG, "hidden too")
    logger.warn(LogCategory.CONFIG, "shown")

    assert "hidden" not in out.getvalue()
    assert "shown" in out.getvalue()


def test_exception_traceback_in_details():
    logger, _, err = make_logger()
    try:
        raise ValueError("boom")
    except ValueError as e:
        logger.error(LogCategory.PIPELINE, "Unhandled failure", exception=e)

    text = err.getvalue()
    assert "Traceback (most recent call last):" in text
    assert "ValueError: boom" in text


def test_bound_logger_category_override():
    logger, out, _ = make_logger()
    bound = logger.for_category(LogCategory.LIFECYCLE)

    bound.info("booting")
    bound.with_category(LogCategory.SIGNAL).info("signal")

    lines = out.getvalue().splitlines()
    assert "LIFECYCLE" in lines[0]
    assert "SIGNAL" in lines[1]


def test_colors_toggle():
    out = io.StringIO()
    Logger(use_colors=True, stream=out).info(LogCategory.SYSTEM, "hello")
    assert "\033[" in out.getvalue()
