import sys
import time
from pathlib import Path
from typing import Literal, ClassVar
from functools import lru_cache

import aiofiles
from aiologger import Logger
from aiologger.levels import LogLevel
from aiologger.handlers.base import Handler
from colorama import init, Fore, Style

init(autoreset=True)

ROOT_DIR = Path(__file__).parent.parent.parent.absolute()
LOGS_FILE_PATH = ROOT_DIR / "logs"

SUCCESS_PREFIX = "[success]"
LEVEL_WIDTH = 8


def _split_success(record) -> tuple[str, str]:
    """Returns the display level and the message without the success marker."""
    msg = str(record.msg)
    if record.levelname == "INFO" and msg.startswith(SUCCESS_PREFIX):
        return "SUCCESS", msg[len(SUCCESS_PREFIX):].lstrip()
    return record.levelname, msg


class PlainFormatter:
    __slots__ = ('_time_format',)

    def __init__(self, time_format: str = "%Y-%m-%d %H:%M:%S"):
        self._time_format = time_format

    def format(self, record) -> str:
        formatted_time = time.strftime(
            self._time_format,
            time.localtime(record.created)
        )
        levelname, msg = _split_success(record)
        padding = " " * (LEVEL_WIDTH - len(levelname))

        return (
            f"[{formatted_time}] | [{record.name}] | "
            f"[{levelname}]{padding} | {msg}"
        )


class ColoredFormatter:
    __slots__ = ('_time_format',)

    LEVEL_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.WHITE,
        "SUCCESS": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.MAGENTA + Style.BRIGHT,
    }

    def __init__(self, time_format: str = "%H:%M:%S"):
        self._time_format = time_format

    def format(self, record) -> str:
        formatted_time = time.strftime(
            self._time_format,
            time.localtime(record.created)
        )
        levelname, msg = _split_success(record)
        level_color = self.LEVEL_COLORS.get(levelname, Fore.WHITE)
        padding = " " * (LEVEL_WIDTH - len(levelname))

        return (
            f"{Fore.CYAN}[{formatted_time}]{Style.RESET_ALL} | "
            f"{Fore.WHITE}[{record.name}]{Style.RESET_ALL} | "
            f"{level_color}[{levelname}]{padding}{Style.RESET_ALL} | "
            f"{level_color}{msg}{Style.RESET_ALL}"
        )


class AsyncFileHandler(Handler):
    __slots__ = ('file_path', 'formatter', '_initialized')

    def __init__(self, base_name: str = "app_log", level=LogLevel.DEBUG) -> None:
        super().__init__(level=level)
        self.file_path = LOGS_FILE_PATH / f"{base_name}.log"
        self.formatter = PlainFormatter()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def emit(self, record) -> None:
        if not self._initialized:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self._initialized = True
        async with aiofiles.open(self.file_path, mode="a", encoding="utf-8") as f:
            await f.write(self.formatter.format(record) + "\n")

    async def close(self) -> None:
        self._initialized = False


class AsyncConsoleHandler(Handler):
    __slots__ = ('formatter',)

    def __init__(self, level=LogLevel.DEBUG) -> None:
        super().__init__(level=level)
        self.formatter = ColoredFormatter()

    @property
    def initialized(self) -> bool:
        return True

    async def emit(self, record) -> None:
        sys.stdout.write(self.formatter.format(record) + "\n")
        sys.stdout.flush()

    async def close(self) -> None:
        sys.stdout.flush()


class AsyncLogger:
    __slots__ = ('_logger', '_log_type_methods')

    def __init__(
        self,
        name: str = "Pharos Bot",
        file_base_name: str = "app_log"
    ) -> None:
        self._logger = Logger(name=name, level=LogLevel.INFO)
        self._logger.add_handler(AsyncConsoleHandler(level=LogLevel.DEBUG))
        self._logger.add_handler(AsyncFileHandler(base_name=file_base_name, level=LogLevel.DEBUG))

        self._log_type_methods = {
            "success": self._logger.info,
            "info": self._logger.info,
            "error": self._logger.error,
            "warning": self._logger.warning,
            "debug": self._logger.debug
        }

    @lru_cache(maxsize=256)
    def _build_info(
        self,
        account_name: str | None,
        address: str | None,
        class_name: str | None,
        method_name: str | None,
    ) -> str:
        parts = (account_name, address, class_name, method_name)
        return " | ".join(f"[{part}]" for part in parts if part)

    async def logger_msg(
        self,
        msg: str = "",
        type_msg: Literal["info", "error", "success", "warning", "debug"] = "info",
        account_name: str | None = None,
        address: str | None = None,
        class_name: str | None = None,
        method_name: str | None = None,
    ) -> None:
        info = self._build_info(account_name, address, class_name, method_name)
        full_msg = f"{info} {msg}" if info else msg

        if type_msg == "success":
            full_msg = f"{SUCCESS_PREFIX} {full_msg}"
        await self._log_type_methods[type_msg](full_msg)
