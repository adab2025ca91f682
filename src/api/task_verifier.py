from src.api.pharos_client import PharosAPIClient, envelope_data
from src.exceptions.api_exceptions import APIClientError
from src.logger import AsyncLogger
from src.models import PLACEHOLDER_TX_HASH, Session
from src.utils.sleeper import CancellableSleeper


PENDING_MARKERS = (
    "pending",
    "not yet",
    "try again later",
)


class TaskVerifier(AsyncLogger):
    """
    Reports an on-chain action to the points API.

    ``verify`` never raises: API failures and rejections are logged and
    reported as ``False``. Only answers that look like "not indexed yet" are
    polled again.
    """

    def __init__(
        self,
        api: PharosAPIClient,
        task_id: int,
        sleeper: CancellableSleeper,
        max_attempts: int = 5,
        retry_delay: float = 3,
    ) -> None:
        AsyncLogger.__init__(self)
        self.api = api
        self.task_id = task_id
        self.sleeper = sleeper
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    @staticmethod
    def is_pending(message: str) -> bool:
        lowered = (message or "").lower()
        return any(marker in lowered for marker in PENDING_MARKERS)

    async def verify(self, session: Session, tx_hash: str | None) -> bool:
        tx_hash = tx_hash or PLACEHOLDER_TX_HASH

        for attempt in range(1, self.max_attempts + 1):
            try:
                response = await self.api.verify_task(session, self.task_id, tx_hash)
            except APIClientError as error:
                await self.logger_msg(
                    msg=f"Verification request failed for {tx_hash}: {error}",
                    type_msg="error", address=session.address,
                    class_name=self.__class__.__name__, method_name="verify"
                )
                return False

            data = envelope_data(response)
            if response.get("code") == 0 and data.get("verified"):
                await self.logger_msg(
                    msg=f"Task {self.task_id} verified for {tx_hash}", type_msg="success",
                    address=session.address
                )
                return True

            message = str(response.get("msg") or "")
            if not self.is_pending(message):
                await self.logger_msg(
                    msg=f"Task {self.task_id} not verified for {tx_hash}: {message or response}",
                    type_msg="warning", address=session.address,
                    class_name=self.__class__.__name__, method_name="verify"
                )
                return False

            if attempt < self.max_attempts:
                await self.logger_msg(
                    msg=f"Verification pending for {tx_hash} "
                        f"(attempt {attempt}/{self.max_attempts}): {message}",
                    type_msg="debug", address=session.address
                )
                if not await self.sleeper.sleep(self.retry_delay):
                    return False

        await self.logger_msg(
            msg=f"Verification still pending after {self.max_attempts} attempts: {tx_hash}",
            type_msg="warning", address=session.address,
            class_name=self.__class__.__name__, method_name="verify"
        )
        return False
