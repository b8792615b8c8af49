"""
pyredg 錯誤處理模組。

定義函式庫的例外層級以及集中式錯誤處理器。
使用者提供的 handler / creator 所拋出的例外不會被包裝，
這裡的例外只用於描述函式庫本身被錯誤使用的情況。
"""
import functools
import logging
import os
import sys
import traceback
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from pydantic import BaseModel, model_validator

F = TypeVar("F", bound=Callable[..., Any])


class RedgError(Exception):
    """所有 pyredg 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.traceback = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """轉為可序列化的字典。"""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"{self.message} ({details})"


class ActionError(RedgError):
    """與 Action 或 action creator 相關的錯誤。"""

    def __init__(self, message: str, action_type: Optional[str] = None, **kwargs: Any):
        details = {"action_type": action_type}
        details.update(kwargs)
        super().__init__(message, details)
        self.action_type = action_type


class ConfigurationError(RedgError):
    """建構 reducer 時的配置錯誤。"""

    def __init__(self, message: str, component: str, **kwargs: Any):
        details = {"component": component}
        details.update(kwargs)
        super().__init__(message, details)
        self.component = component


class ErrorHandlerConfig(BaseModel):
    """
    ErrorHandler 的配置。

    屬性:
        log_to_console: 是否輸出到終端
        log_to_file: 是否寫入檔案
        log_file: 日誌檔路徑，`log_to_file` 為 True 時必填
        logger_name: 使用的 logger 名稱
        level: 記錄錯誤時使用的日誌等級
    """
    log_to_console: bool = True
    log_to_file: bool = False
    log_file: Optional[str] = None
    logger_name: str = "pyredg"
    level: int = logging.ERROR

    @model_validator(mode="after")
    def _check_log_file(self) -> "ErrorHandlerConfig":
        if self.log_to_file and not self.log_file:
            raise ValueError("log_file is required when log_to_file is enabled")
        return self


class ErrorHandler:
    """集中式錯誤處理器，負責日誌記錄並通知已註冊的回調。"""

    def __init__(self, config: Optional[ErrorHandlerConfig] = None, **overrides: Any):
        if config is None:
            config = ErrorHandlerConfig(**overrides)
        elif overrides:
            config = config.model_copy(update=overrides)
        self.config = config
        self.handlers: List[Callable[[RedgError], None]] = []
        self.logger = logging.getLogger(config.logger_name)
        self._configure_logger()

    def _configure_logger(self) -> None:
        # 避免對同一個輸出目標重複附加 handler
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        if self.config.log_to_console and not self._has_console_handler():
            console = logging.StreamHandler()
            console.setFormatter(formatter)
            self.logger.addHandler(console)
        if self.config.log_to_file and not self._has_file_handler(self.config.log_file):
            file_handler = logging.FileHandler(self.config.log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def _has_console_handler(self) -> bool:
        return any(
            type(h) is logging.StreamHandler and h.stream is sys.stderr
            for h in self.logger.handlers
        )

    def _has_file_handler(self, log_file: str) -> bool:
        path = os.path.abspath(log_file)
        return any(
            isinstance(h, logging.FileHandler) and h.baseFilename == path
            for h in self.logger.handlers
        )

    def register_handler(self, handler: Callable[[RedgError], None]) -> None:
        """註冊一個錯誤回調，接收 RedgError 實例。"""
        self.handlers.append(handler)

    def handle(self, error: Union[RedgError, Exception]) -> RedgError:
        """
        記錄錯誤並通知所有回調。

        非 RedgError 的例外會被包裝成 RedgError 以便統一回報，
        但原始例外仍應由呼叫者重新拋出。

        Returns:
            回報用的 RedgError 實例
        """
        if isinstance(error, RedgError):
            report = error
        else:
            report = RedgError(
                str(error),
                {"original_type": type(error).__name__},
            )
            report.__cause__ = error
        self.logger.log(self.config.level, "%s: %s", type(error).__name__, report)
        for handler in self.handlers:
            handler(report)
        return report


# 單例錯誤處理器
global_error_handler = ErrorHandler(log_to_console=False)


def handle_error(func: F) -> F:
    """
    裝飾器：將函式拋出的例外回報給 global_error_handler 後重新拋出。
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Exception as err:
            global_error_handler.handle(err)
            raise
    return wrapper  # type: ignore[return-value]
