from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cycle_loop import CycleLoop
from src.models import Config, WalletReport


def make_scheduler(side_effect=None):
    scheduler = MagicMock()
    scheduler.process_wallet = AsyncMock(
        side_effect=side_effect or (lambda index, total, account: WalletReport(address=account.address))
    )
    return scheduler


class TestCycleLoop:
    @pytest.mark.asyncio
    async def test_no_wallets_means_no_work(self, policy, sleeper):
        config = Config(accounts=[], policy=policy)
        scheduler = make_scheduler()
        console = MagicMock()
        console.countdown = AsyncMock(return_value=True)

        await CycleLoop(config, scheduler, sleeper, console).run()

        scheduler.process_wallet.assert_not_awaited()
        console.countdown.assert_not_awaited()
        assert sleeper.calls == []

    @pytest.mark.asyncio
    async def test_repeats_until_countdown_is_interrupted(self, config, sleeper):
        scheduler = make_scheduler()
        console = MagicMock()
        console.countdown = AsyncMock(side_effect=[True, False])
        loop = CycleLoop(config, scheduler, sleeper, console)

        await loop.run()

        assert loop.cycles_completed == 2
        assert scheduler.process_wallet.await_count == 4
        console.countdown.assert_awaited_with(10, sleeper)

    @pytest.mark.asyncio
    async def test_without_console_the_sleeper_waits(self, config, sleeper):
        scheduler = make_scheduler()
        loop = CycleLoop(config, scheduler, sleeper)

        async def stop_after_cooldown(seconds):
            sleeper.calls.append(seconds)
            sleeper.cancel()
            return False

        sleeper.sleep = stop_after_cooldown
        await loop.run()

        assert loop.cycles_completed == 1
        assert sleeper.calls == [10]

    @pytest.mark.asyncio
    async def test_wallets_run_in_order(self, config, sleeper):
        scheduler = make_scheduler()

        await CycleLoop(config, scheduler, sleeper).run_cycle()

        calls = scheduler.process_wallet.await_args_list
        assert [call.args[0] for call in calls] == [1, 2]
        assert [call.args[2] for call in calls] == config.accounts

    @pytest.mark.asyncio
    async def test_unexpected_error_aborts_only_that_wallet(self, config, sleeper):
        def process_wallet(index, total, account):
            if index == 1:
                raise RuntimeError("boom")
            return WalletReport(address=account.address)

        scheduler = make_scheduler(process_wallet)

        reports = await CycleLoop(config, scheduler, sleeper).run_cycle()

        assert reports[0].skipped
        assert reports[0].reason == "boom"
        assert not reports[1].skipped

    @pytest.mark.asyncio
    async def test_cancelled_loop_does_not_start(self, config, sleeper):
        scheduler = make_scheduler()
        sleeper.cancel()

        await CycleLoop(config, scheduler, sleeper).run()

        scheduler.process_wallet.assert_not_awaited()
