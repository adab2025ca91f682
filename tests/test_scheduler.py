from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cycle_loop import CycleLoop
from src.models import ActionKind, ActionResult, ActionStatus, PolicyConfig, UserPoints
from src.scheduler import Scheduler


TX_HASH = "0x" + "ab" * 32


def make_api_cls(events, rejected_addresses=()):
    """Points API double recording every call into ``events``."""

    class FakeAPI:
        instances = []

        def __init__(self, base_url, proxy=None):
            self.base_url = base_url
            self.proxy = proxy
            self.points = iter([UserPoints(5, 100), UserPoints(8, 130)])
            FakeAPI.instances.append(self)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc_info):
            return None

        async def login(self, address, signature, invite_code=""):
            events.append(("login", address))
            if address in rejected_addresses:
                return {"code": 1, "data": {}, "msg": "bad signature"}
            return {"code": 0, "data": {"jwt": f"jwt-{address}"}, "msg": "ok"}

        async def get_profile(self, session):
            return next(self.points)

        async def sign_in(self, session):
            events.append(("check_in", session.address))
            return {"code": 0, "data": {}, "msg": "ok"}

        async def faucet_status(self, session):
            events.append(("faucet", session.address))
            return {"code": 0, "data": {"is_able_to_faucet": False, "avaliable_timestamp": 0}}

        async def claim_faucet(self, session):
            return {"code": 0, "data": {}}

        async def verify_task(self, session, task_id, tx_hash):
            events.append(("verify", session.address))
            return {"code": 0, "data": {"verified": True}, "msg": "ok"}

    return FakeAPI


def make_executor_cls(events):
    class FakeExecutor:
        def __init__(self, wallet, config, receipt_waiter, sleeper, wallet_index=1, total_wallets=1):
            self.wallet = wallet

        async def execute(self, kind, action_index, total_actions):
            events.append(("action", self.wallet.wallet_address, kind))
            return ActionResult(kind, ActionStatus.CONFIRMED, TX_HASH)

    return FakeExecutor


def make_provider_factory(created=None):
    created = [] if created is None else created

    def acquire(keypair, proxy=None):
        wallet = MagicMock()
        wallet.wallet_address = keypair
        wallet.close = AsyncMock()
        created.append(wallet)
        return wallet

    provider_factory = MagicMock()
    provider_factory.acquire_until_ready = AsyncMock(side_effect=acquire)
    return provider_factory


def make_scheduler(config, sleeper, events, rejected_addresses=(), created=None):
    provider_factory = make_provider_factory(created)
    scheduler = Scheduler(
        config,
        sleeper,
        provider_factory=provider_factory,
        receipt_waiter=MagicMock(),
        api_client_cls=make_api_cls(events, rejected_addresses),
        executor_cls=make_executor_cls(events),
    )
    return scheduler, provider_factory


class TestScheduler:
    @pytest.mark.asyncio
    async def test_two_wallets_three_actions_each(self, config, sleeper):
        events = []
        scheduler, _ = make_scheduler(config, sleeper, events)

        reports = await CycleLoop(config, scheduler, sleeper).run_cycle()

        first, second = (account.address for account in config.accounts)
        keys = [account.keypair for account in config.accounts]
        actions = [event for event in events if event[0] == "action"]
        verifies = [event for event in events if event[0] == "verify"]

        assert [event[1] for event in actions] == [keys[0]] * 3 + [keys[1]] * 3
        assert {event[2] for event in actions[:3]} == set(ActionKind)
        assert {event[2] for event in actions[3:]} == set(ActionKind)
        assert [event[1] for event in verifies] == [first] * 3 + [second] * 3

        last_first = max(i for i, event in enumerate(events) if first in event)
        first_second = min(i for i, event in enumerate(events) if second in event)
        assert last_first < first_second

        for report in reports:
            assert not report.skipped
            assert len(report.results) == 3
            assert report.verified == 3
            assert report.points_delta == UserPoints(3, 30)

    @pytest.mark.asyncio
    async def test_each_action_is_verified_before_the_next(self, config, sleeper):
        events = []
        scheduler, _ = make_scheduler(config, sleeper, events)

        await scheduler.process_wallet(1, 2, config.accounts[0])

        kinds = [event[0] for event in events if event[0] in ("action", "verify")]
        assert kinds == ["action", "verify"] * 3
        assert sleeper.calls == [0, 0, 0]

    @pytest.mark.asyncio
    async def test_login_failure_skips_to_next_wallet(self, config, sleeper):
        events = []
        rejected = config.accounts[0].address
        scheduler, provider_factory = make_scheduler(config, sleeper, events, rejected_addresses={rejected})

        reports = await CycleLoop(config, scheduler, sleeper).run_cycle()

        assert reports[0].skipped
        assert not reports[1].skipped
        assert [event for event in events if rejected in event] == [("login", rejected)]
        assert not any(event[1] == config.accounts[0].keypair for event in events if event[0] == "action")
        assert provider_factory.acquire_until_ready.await_count == 1

    @pytest.mark.asyncio
    async def test_daily_tasks_follow_configured_order(self, config, sleeper):
        events = []
        policy = PolicyConfig(**{**config.policy.model_dump(), "daily_tasks": ("faucet", "check_in")})
        config = config.model_copy(update={"policy": policy})
        scheduler, _ = make_scheduler(config, sleeper, events)

        await scheduler.process_wallet(1, 1, config.accounts[0])

        daily = [event[0] for event in events if event[0] in ("check_in", "faucet")]
        assert daily == ["faucet", "check_in"]

    @pytest.mark.asyncio
    async def test_provider_is_closed_after_the_pass(self, config, sleeper):
        created = []
        scheduler, provider_factory = make_scheduler(config, sleeper, [], created=created)

        await scheduler.process_wallet(1, 1, config.accounts[0])

        provider_factory.acquire_until_ready.assert_awaited_once()
        created[0].close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_stops_the_action_loop(self, config, sleeper):
        events = []
        scheduler, _ = make_scheduler(config, sleeper, events)
        sleeper.cancel()

        report = await scheduler.process_wallet(1, 1, config.accounts[0])

        assert report.results == []
