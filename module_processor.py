import asyncio
import signal

from bot_loader import config, config_loader
from src.console import Console
from src.cycle_loop import CycleLoop
from src.logger import AsyncLogger
from src.scheduler import Scheduler
from src.utils.sleeper import CancellableSleeper


logger = AsyncLogger()


class ModuleProcessor:
    def __init__(self, sleeper: CancellableSleeper | None = None):
        self.console = Console()
        self.sleeper = sleeper or CancellableSleeper()
        self.scheduler = Scheduler(config, self.sleeper)
        self.cycle_loop = CycleLoop(config, self.scheduler, self.sleeper, self.console)

    def install_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.sleeper.cancel)
            except (NotImplementedError, RuntimeError):
                # Windows event loops have no signal handler support
                continue

    async def _log_load_notices(self) -> None:
        for notice in config_loader.notices:
            await logger.logger_msg(notice, type_msg="warning", method_name="load_config")

    async def execute(self) -> int:
        self.console.build(config)
        await self._log_load_notices()

        try:
            await self.cycle_loop.run()
            return 0
        except Exception as e:
            await logger.logger_msg(
                f"Unhandled error: {type(e).__name__}: {str(e)}",
                type_msg="error",
                method_name="execute"
            )
            if config.exit_on_error:
                return 1

        await logger.logger_msg(
            "exit_on_error is disabled, staying idle until terminated",
            type_msg="warning"
        )
        await self.sleeper.wait()
        return 0


async def main_loop() -> int:
    await logger.logger_msg("✅ The program has been started", type_msg="info")

    processor = ModuleProcessor()
    processor.install_signal_handlers()
    exit_code = await processor.execute()

    if processor.sleeper.cancelled:
        await logger.logger_msg("🚨 Shutdown requested", type_msg="warning", method_name="main_loop")
    await logger.logger_msg(
        "👋 Goodbye! The terminal is ready for commands.",
        type_msg="info"
    )
    return exit_code
