from datetime import datetime

from src.api.pharos_client import PharosAPIClient, envelope_data
from src.exceptions.api_exceptions import APIClientError
from src.logger import AsyncLogger
from src.models import Session


class DailyRewardsModule(AsyncLogger):
    """Daily check-in and faucet claim on the points API."""

    def __init__(self, api: PharosAPIClient, session: Session) -> None:
        AsyncLogger.__init__(self)
        self.api = api
        self.session = session

    async def run(self, task: str) -> bool:
        handlers = {
            "check_in": self.check_in,
            "faucet": self.claim_faucet,
        }
        handler = handlers.get(task)
        if handler is None:
            raise ValueError(f"Unknown daily task: {task}")
        return await handler()

    async def claim_faucet(self) -> bool:
        try:
            status = await self.api.faucet_status(self.session)
            data = envelope_data(status)

            if status.get("code") != 0:
                await self.logger_msg(
                    msg=f"Failed to read faucet status: {status.get('msg') or status}",
                    type_msg="warning", address=self.session.address,
                    class_name=self.__class__.__name__, method_name="claim_faucet"
                )
                return False

            if not data.get("is_able_to_faucet"):
                available_at = data.get("avaliable_timestamp")
                next_time = (
                    datetime.fromtimestamp(int(available_at)).strftime("%Y-%m-%d %H:%M:%S")
                    if available_at else "unknown"
                )
                await self.logger_msg(
                    msg=f"Faucet not available yet, next claim at {next_time}",
                    type_msg="info", address=self.session.address
                )
                return False

            response = await self.api.claim_faucet(self.session)
            if response.get("code") == 0:
                await self.logger_msg(
                    msg="Faucet claimed", type_msg="success", address=self.session.address
                )
                return True

            await self.logger_msg(
                msg=f"Faucet claim rejected: {response.get('msg') or response}",
                type_msg="warning", address=self.session.address,
                class_name=self.__class__.__name__, method_name="claim_faucet"
            )
            return False

        except APIClientError as error:
            await self.logger_msg(
                msg=f"Faucet request failed: {error}", type_msg="error",
                address=self.session.address,
                class_name=self.__class__.__name__, method_name="claim_faucet"
            )
            return False

    async def check_in(self) -> bool:
        try:
            response = await self.api.sign_in(self.session)
        except APIClientError as error:
            await self.logger_msg(
                msg=f"Check-in request failed: {error}", type_msg="error",
                address=self.session.address,
                class_name=self.__class__.__name__, method_name="check_in"
            )
            return False

        if response.get("code") == 0:
            await self.logger_msg(
                msg="Daily check-in done", type_msg="success", address=self.session.address
            )
            return True

        await self.logger_msg(
            msg=f"Check-in returned code {response.get('code')}, possibly already checked in: "
                f"{response.get('msg', '')}",
            type_msg="warning", address=self.session.address
        )
        return False
