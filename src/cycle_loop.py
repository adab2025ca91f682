from typing import Protocol

from src.logger import AsyncLogger
from src.models import Config, WalletReport
from src.scheduler import Scheduler
from src.utils.sleeper import CancellableSleeper
from src.utils.utils import format_duration


class Countdown(Protocol):
    async def countdown(self, seconds: int, sleeper: CancellableSleeper) -> bool: ...


class CycleLoop(AsyncLogger):
    """Runs the scheduler over every wallet, then waits out the cooldown, forever."""

    def __init__(
        self,
        config: Config,
        scheduler: Scheduler,
        sleeper: CancellableSleeper,
        console: Countdown | None = None,
    ) -> None:
        AsyncLogger.__init__(self)
        self.config = config
        self.scheduler = scheduler
        self.sleeper = sleeper
        self.console = console
        self.cycles_completed = 0

    async def run_cycle(self) -> list[WalletReport]:
        accounts = self.config.accounts
        total = len(accounts)
        reports: list[WalletReport] = []

        for index, account in enumerate(accounts, start=1):
            if self.sleeper.cancelled:
                break
            try:
                report = await self.scheduler.process_wallet(index, total, account)
            except Exception as error:
                await self.logger_msg(
                    msg=f"[{index}/{total}] Wallet pass aborted: {type(error).__name__}: {error}",
                    type_msg="error", address=account.address,
                    class_name=self.__class__.__name__, method_name="run_cycle"
                )
                report = WalletReport(address=account.address, skipped=True, reason=str(error))
            reports.append(report)

        return reports

    async def _cooldown(self) -> bool:
        seconds = self.config.policy.cycle_cooldown
        await self.logger_msg(
            msg=f"Next cycle in {format_duration(seconds)}", type_msg="info"
        )
        if self.console is not None:
            return await self.console.countdown(seconds, self.sleeper)
        return await self.sleeper.sleep(seconds)

    async def run(self) -> None:
        if not self.config.accounts:
            await self.logger_msg(
                msg="No wallets found in private_keys.txt, no work to do", type_msg="warning"
            )
            return

        while not self.sleeper.cancelled:
            await self.logger_msg(
                msg=f"Starting cycle {self.cycles_completed + 1} "
                    f"for {len(self.config.accounts)} wallet(s)",
                type_msg="info"
            )
            reports = await self.run_cycle()
            if self.sleeper.cancelled:
                break

            self.cycles_completed += 1
            skipped = sum(1 for report in reports if report.skipped)
            await self.logger_msg(
                msg=f"All actions completed: {len(reports) - skipped} wallet(s) processed, "
                    f"{skipped} skipped",
                type_msg="success"
            )

            if not await self._cooldown():
                break

        await self.logger_msg(msg="Cycle loop stopped", type_msg="info")
