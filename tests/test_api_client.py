from unittest.mock import AsyncMock, patch

import pytest

from src.api import PharosAPIClient
from src.api.base_client import BaseAPIClient
from src.exceptions.api_exceptions import (
    APIClientSideError,
    APIResponseError,
    APIServerSideError,
)
from src.models import Session


BASE_URL = "https://api.pharosnetwork.xyz"


def ok(data):
    return {"status_code": 200, "url": BASE_URL, "text": "", "data": data}


@pytest.fixture
def session():
    return Session(address="0xabc", token="jwt-token")


@pytest.fixture(autouse=True)
def no_backoff():
    with patch.object(BaseAPIClient, "_backoff", return_value=0):
        yield


class TestBaseAPIClient:
    def test_build_url(self):
        client = BaseAPIClient(BASE_URL)

        assert client._build_url("/user/login", None) == f"{BASE_URL}/user/login"
        assert client._build_url(None, "https://other/x") == "https://other/x"

    @pytest.mark.asyncio
    async def test_server_error_is_retried(self):
        client = BaseAPIClient(BASE_URL)
        response = ok({"code": 0})

        with patch.object(
            client, "_request_once",
            AsyncMock(side_effect=[APIServerSideError("Server error: 502", 502), response])
        ) as request_once:
            result = await client.send_request(method="/sign/in")

        assert result is response
        assert request_once.await_count == 2

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self):
        client = BaseAPIClient(BASE_URL)

        with patch.object(
            client, "_request_once",
            AsyncMock(side_effect=APIClientSideError("Client error: 401", 401))
        ) as request_once:
            with pytest.raises(APIClientSideError):
                await client.send_request(method="/user/profile")

        assert request_once.await_count == 1

    @pytest.mark.asyncio
    async def test_malformed_answer_is_not_retried(self):
        client = BaseAPIClient(BASE_URL)

        with patch.object(
            client, "_request_once",
            AsyncMock(side_effect=APIResponseError("Unexpected answer"))
        ) as request_once:
            with pytest.raises(APIResponseError):
                await client.send_request(method="/user/profile")

        assert request_once.await_count == 1

    @pytest.mark.asyncio
    async def test_exhausted_retries(self):
        client = BaseAPIClient(BASE_URL)

        with patch.object(
            client, "_request_once",
            AsyncMock(side_effect=APIServerSideError("Server error: 503", 503))
        ) as request_once:
            with pytest.raises(APIServerSideError, match="after 2 attempts"):
                await client.send_request(method="/faucet/daily", max_retries=2)

        assert request_once.await_count == 2


class TestPharosAPIClient:
    @pytest.mark.asyncio
    async def test_login_is_sent_once_with_query_params(self):
        client = PharosAPIClient(BASE_URL)
        envelope = {"code": 0, "data": {"jwt": "abc"}, "msg": "ok"}

        with patch.object(client, "send_request", AsyncMock(return_value=ok(envelope))) as send:
            result = await client.login("0xabc", "0xsig", "CODE")

        assert result == envelope
        kwargs = send.await_args.kwargs
        assert kwargs["method"] == "/user/login"
        assert kwargs["params"] == {"address": "0xabc", "signature": "0xsig", "invite_code": "CODE"}
        assert kwargs["max_retries"] == 1

    @pytest.mark.asyncio
    async def test_profile_points(self, session):
        client = PharosAPIClient(BASE_URL)
        envelope = {"code": 0, "data": {"user_info": {"TaskPoints": 20, "TotalPoints": 150}}}

        with patch.object(client, "send_request", AsyncMock(return_value=ok(envelope))) as send:
            points = await client.get_profile(session)

        assert (points.task_points, points.total_points) == (20, 150)
        assert send.await_args.kwargs["headers"] == {"authorization": "Bearer jwt-token"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", ["none", ["x"], {"user_info": "none"}])
    async def test_profile_without_user_info_has_zero_points(self, session, data):
        client = PharosAPIClient(BASE_URL)
        envelope = {"code": 0, "data": data}

        with patch.object(client, "send_request", AsyncMock(return_value=ok(envelope))):
            points = await client.get_profile(session)

        assert (points.task_points, points.total_points) == (0, 0)

    @pytest.mark.asyncio
    async def test_verify_task_params(self, session):
        client = PharosAPIClient(BASE_URL)
        envelope = {"code": 0, "data": {"verified": True}}

        with patch.object(client, "send_request", AsyncMock(return_value=ok(envelope))) as send:
            await client.verify_task(session, 103, "0xhash")

        assert send.await_args.kwargs["params"] == {
            "address": "0xabc", "task_id": 103, "tx_hash": "0xhash"
        }

    @pytest.mark.asyncio
    async def test_non_json_answer(self, session):
        client = PharosAPIClient(BASE_URL)
        response = {"status_code": 200, "url": BASE_URL, "text": "<html>", "data": None}

        with patch.object(client, "send_request", AsyncMock(return_value=response)):
            with pytest.raises(APIResponseError):
                await client.sign_in(session)
