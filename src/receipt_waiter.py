from src.logger import AsyncLogger
from src.models.action_model import Receipt
from src.utils.rpc_errors import is_receipt_pending, is_transient_rpc_error
from src.utils.sleeper import CancellableSleeper
from src.wallet import Wallet


logger = AsyncLogger()


class ReceiptWaiter:
    def __init__(
        self,
        sleeper: CancellableSleeper,
        max_attempts: int = 30,
        poll_interval: float = 2,
    ) -> None:
        self.sleeper = sleeper
        self.max_attempts = max_attempts
        self.poll_interval = poll_interval

    async def wait(self, wallet: Wallet, tx_hash: str) -> Receipt:
        """
        Polls for the receipt of ``tx_hash``.

        A missing receipt and transient RPC errors are retried until the
        attempts run out, which yields ``Receipt(confirmed=False)``. Any other
        error is raised to the caller.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                receipt = await wallet.get_receipt(tx_hash)
            except Exception as error:
                if not (is_receipt_pending(error) or is_transient_rpc_error(error)):
                    raise
                if not is_receipt_pending(error):
                    await logger.logger_msg(
                        msg=f"Receipt poll failed (attempt {attempt}/{self.max_attempts}): {error}",
                        type_msg="debug", address=wallet.wallet_address,
                        class_name=self.__class__.__name__, method_name="wait"
                    )
            else:
                if receipt is not None:
                    return Receipt(
                        tx_hash=tx_hash,
                        confirmed=True,
                        status=receipt.get("status"),
                        block_number=receipt.get("blockNumber"),
                    )

            if attempt < self.max_attempts:
                await self.sleeper.sleep(self.poll_interval)

        await logger.logger_msg(
            msg=f"Transaction {tx_hash} not confirmed after {self.max_attempts} polls",
            type_msg="warning", address=wallet.wallet_address,
            class_name=self.__class__.__name__, method_name="wait"
        )
        return Receipt(tx_hash=tx_hash, confirmed=False)
