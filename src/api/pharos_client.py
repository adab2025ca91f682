from typing import Any

from better_proxy import Proxy

from src.api.base_client import BaseAPIClient
from src.exceptions.api_exceptions import APIResponseError
from src.models import Session, UserPoints


def envelope_data(envelope: dict[str, Any]) -> dict[str, Any]:
    """Returns the ``data`` member of an API answer, or an empty dict when it is not an object."""
    data = envelope.get("data")
    return data if isinstance(data, dict) else {}


class PharosAPIClient(BaseAPIClient):
    """
    Client of the Pharos points API.

    Every endpoint answers with ``{"code": int, "data": ..., "msg": str}``
    where ``code == 0`` means success. Methods return the decoded envelope
    and leave its interpretation to the caller.
    """

    _API_HEADERS = {
        'origin': 'https://testnet.pharosnetwork.xyz',
        'referer': 'https://testnet.pharosnetwork.xyz/',
        'sec-fetch-dest': 'empty',
        'sec-fetch-mode': 'cors',
        'sec-fetch-site': 'same-site',
    }

    def __init__(self, base_url: str, proxy: Proxy | None = None) -> None:
        super().__init__(base_url, proxy)
        self._headers.update(self._API_HEADERS)

    @staticmethod
    def _envelope(response: dict[str, Any]) -> dict[str, Any]:
        data = response.get("data")
        if not isinstance(data, dict):
            raise APIResponseError(
                f"Unexpected response ({response.get('status_code')}): {response.get('text', '')[:200]}"
            )
        return data

    async def login(self, address: str, signature: str, invite_code: str = "") -> dict[str, Any]:
        response = await self.send_request(
            request_type="POST",
            method="/user/login",
            params={
                "address": address,
                "signature": signature,
                "invite_code": invite_code,
            },
            verify=False,
            max_retries=1,
        )
        return self._envelope(response)

    async def get_profile(self, session: Session) -> UserPoints:
        response = await self.send_request(
            request_type="GET",
            method="/user/profile",
            params={"address": session.address},
            headers=session.auth_header,
        )
        return UserPoints.from_profile(self._envelope(response))

    async def faucet_status(self, session: Session) -> dict[str, Any]:
        response = await self.send_request(
            request_type="GET",
            method="/faucet/status",
            params={"address": session.address},
            headers=session.auth_header,
        )
        return self._envelope(response)

    async def claim_faucet(self, session: Session) -> dict[str, Any]:
        response = await self.send_request(
            request_type="POST",
            method="/faucet/daily",
            params={"address": session.address},
            headers=session.auth_header,
        )
        return self._envelope(response)

    async def sign_in(self, session: Session) -> dict[str, Any]:
        response = await self.send_request(
            request_type="POST",
            method="/sign/in",
            params={"address": session.address},
            headers=session.auth_header,
        )
        return self._envelope(response)

    async def verify_task(self, session: Session, task_id: int, tx_hash: str) -> dict[str, Any]:
        response = await self.send_request(
            request_type="POST",
            method="/task/verify",
            params={
                "address": session.address,
                "task_id": task_id,
                "tx_hash": tx_hash,
            },
            headers=session.auth_header,
        )
        return self._envelope(response)
