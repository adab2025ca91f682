from src.api.pharos_client import PharosAPIClient, envelope_data
from src.exceptions.api_exceptions import APIAuthError, APIClientError
from src.logger import AsyncLogger
from src.models import Account, Session
from src.utils.utils import sign_message


LOGIN_MESSAGE = "pharos"


class SessionAuthenticator(AsyncLogger):
    """Exchanges a wallet signature for a bearer token of the points API."""

    def __init__(self, api: PharosAPIClient, invite_code: str = "") -> None:
        AsyncLogger.__init__(self)
        self.api = api
        self.invite_code = invite_code

    async def login(self, account: Account) -> Session:
        signature = sign_message(account.keypair, LOGIN_MESSAGE)

        try:
            response = await self.api.login(account.address, signature, self.invite_code)
        except APIClientError as error:
            raise APIAuthError(f"Login request failed: {error}") from error

        token = envelope_data(response).get("jwt")
        if response.get("code") != 0 or not token:
            raise APIAuthError(f"Login rejected: {response.get('msg') or response}")

        await self.logger_msg(
            msg="Logged in to the points API", type_msg="success",
            address=account.address
        )
        return Session(address=account.address, token=token)
