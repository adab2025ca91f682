from unittest.mock import AsyncMock, MagicMock

import pytest

from src.api.task_verifier import TaskVerifier
from src.exceptions.api_exceptions import APITimeoutError
from src.models import PLACEHOLDER_TX_HASH, Session


TX_HASH = "0x" + "ab" * 32

VERIFIED = {"code": 0, "data": {"verified": True}, "msg": "ok"}
PENDING = {"code": 1, "data": {}, "msg": "Transaction pending, please try again later"}
REJECTED = {"code": 1, "data": {}, "msg": "task already completed"}


@pytest.fixture
def session():
    return Session(address="0xabc", token="token")


def make_verifier(sleeper, *responses, **kwargs):
    api = MagicMock()
    api.verify_task = AsyncMock(side_effect=list(responses))
    return TaskVerifier(api, task_id=103, sleeper=sleeper, **kwargs), api


class TestTaskVerifier:
    @pytest.mark.asyncio
    async def test_verified(self, sleeper, session):
        verifier, api = make_verifier(sleeper, VERIFIED)

        assert await verifier.verify(session, TX_HASH) is True
        api.verify_task.assert_awaited_once_with(session, 103, TX_HASH)

    @pytest.mark.asyncio
    async def test_pending_is_polled_again(self, sleeper, session):
        verifier, api = make_verifier(sleeper, PENDING, PENDING, VERIFIED)

        assert await verifier.verify(session, TX_HASH) is True
        assert api.verify_task.await_count == 3
        assert sleeper.calls == [3, 3]

    @pytest.mark.asyncio
    async def test_rejection_is_final(self, sleeper, session):
        verifier, api = make_verifier(sleeper, REJECTED, VERIFIED)

        assert await verifier.verify(session, TX_HASH) is False
        assert api.verify_task.await_count == 1
        assert sleeper.calls == []

    @pytest.mark.asyncio
    async def test_pending_until_attempts_run_out(self, sleeper, session):
        verifier, api = make_verifier(sleeper, *[PENDING] * 5, max_attempts=5, retry_delay=3)

        assert await verifier.verify(session, TX_HASH) is False
        assert api.verify_task.await_count == 5
        assert sleeper.calls == [3] * 4

    @pytest.mark.asyncio
    async def test_api_error_reports_false(self, sleeper, session):
        verifier, _ = make_verifier(sleeper, APITimeoutError("timed out"))

        assert await verifier.verify(session, TX_HASH) is False

    @pytest.mark.asyncio
    async def test_missing_hash_sends_placeholder(self, sleeper, session):
        verifier, api = make_verifier(sleeper, REJECTED)

        result = await verifier.verify(session, None)

        assert isinstance(result, bool)
        api.verify_task.assert_awaited_once_with(session, 103, PLACEHOLDER_TX_HASH)

    @pytest.mark.parametrize("message, pending", [
        ("Not yet indexed", True),
        ("please TRY AGAIN LATER", True),
        ("tx pending", True),
        ("invalid tx hash", False),
        ("", False),
    ])
    def test_is_pending(self, message, pending):
        assert TaskVerifier.is_pending(message) is pending

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", ["ok", ["verified"], None])
    async def test_non_object_data_is_not_verified(self, sleeper, session, data):
        verifier, api = make_verifier(sleeper, {"code": 0, "data": data, "msg": ""})

        assert await verifier.verify(session, TX_HASH) is False
        assert api.verify_task.await_count == 1
