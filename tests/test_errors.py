"""錯誤類別與錯誤處理器的測試。"""

import logging

import pydantic
import pytest

from pyredg import (
    ActionError,
    ConfigurationError,
    ErrorHandler,
    ErrorHandlerConfig,
    RedgError,
    global_error_handler,
    handle_error,
)


def test_error_details_and_str():
    err = ActionError("bad creator", action_type="[X] Add", key="add")

    assert isinstance(err, RedgError)
    assert err.details == {"action_type": "[X] Add", "key": "add"}
    assert "bad creator" in str(err) and "key='add'" in str(err)
    assert err.to_dict() == {
        "error_type": "ActionError",
        "message": "bad creator",
        "details": {"action_type": "[X] Add", "key": "add"},
    }


def test_configuration_error_component():
    err = ConfigurationError("nope", component="SliceBuilder.handle")
    assert err.component == "SliceBuilder.handle"
    assert str(RedgError("plain")) == "plain"


def test_config_requires_log_file_for_file_logging():
    with pytest.raises(pydantic.ValidationError):
        ErrorHandlerConfig(log_to_file=True)


def test_file_logging(tmp_path):
    log_file = tmp_path / "errors.log"
    handler = ErrorHandler(
        log_to_console=False, log_to_file=True,
        log_file=str(log_file), logger_name="pyredg.tests.file",
    )

    handler.handle(ActionError("written", action_type="X"))
    for h in handler.logger.handlers:
        h.flush()

    assert "written" in log_file.read_text(encoding="utf-8")


def test_second_log_file_on_same_logger_gets_its_own_handler(tmp_path):
    first = tmp_path / "a.log"
    second = tmp_path / "b.log"
    name = "pyredg.tests.two_files"
    ErrorHandler(log_to_console=False, log_to_file=True, log_file=str(first), logger_name=name)
    handler = ErrorHandler(log_to_console=False, log_to_file=True, log_file=str(second), logger_name=name)
    # 同一路徑不重複附加
    ErrorHandler(log_to_console=False, log_to_file=True, log_file=str(second), logger_name=name)

    handler.handle(ActionError("to both", action_type="X"))
    for h in handler.logger.handlers:
        h.flush()

    file_handlers = [h for h in handler.logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 2
    assert "to both" in second.read_text(encoding="utf-8")
    assert "to both" in first.read_text(encoding="utf-8")


def test_handler_wraps_foreign_exceptions_and_notifies(caplog):
    handler = ErrorHandler(ErrorHandlerConfig(log_to_console=False), logger_name="pyredg.tests.notify")
    received = []
    handler.register_handler(received.append)

    original = KeyError("missing")
    with caplog.at_level(logging.ERROR, logger="pyredg.tests.notify"):
        report = handler.handle(original)

    assert received == [report]
    assert report.__cause__ is original
    assert "KeyError" in caplog.text


def test_handle_error_decorator_reraises_original():
    reported = []
    global_error_handler.register_handler(reported.append)

    @handle_error
    def divide(a, b):
        return a / b

    try:
        assert divide(4, 2) == 2
        with pytest.raises(ZeroDivisionError):
            divide(1, 0)
    finally:
        global_error_handler.handlers.remove(reported.append)

    assert len(reported) == 1
    assert reported[0].details["original_type"] == "ZeroDivisionError"
