from abc import ABC, abstractmethod
from typing import Awaitable, Callable, ClassVar

from web3.types import TxParams

from src.exceptions.custom_exceptions import (
    InsufficientFundsError,
    TransactionConfirmationError,
    TransactionSubmissionError,
    WalletError,
)
from src.logger import AsyncLogger
from src.models import ActionKind, ActionResult, Config, PendingOperation, Receipt
from src.receipt_waiter import ReceiptWaiter
from src.utils.logger_trx import show_trx_log
from src.utils.rpc_errors import describe_error, is_nonce_error, is_transient_rpc_error
from src.utils.sleeper import CancellableSleeper
from src.utils.utils import format_amount
from src.wallet import Wallet


TxBuilder = Callable[[int], Awaitable[TxParams]]


class ActionModule(AsyncLogger, ABC):
    """
    One on-chain operation of a wallet pass.

    Subclasses implement ``execute``. ``run`` wraps it so that the scheduler
    always gets an ``ActionResult`` back and one progress line is logged.
    """

    kind: ClassVar[ActionKind]

    def __init__(
        self,
        wallet: Wallet,
        config: Config,
        receipt_waiter: ReceiptWaiter,
        sleeper: CancellableSleeper,
        wallet_index: int = 1,
        total_wallets: int = 1,
    ) -> None:
        AsyncLogger.__init__(self)
        self.wallet = wallet
        self.config = config
        self.policy = config.policy
        self.receipt_waiter = receipt_waiter
        self.sleeper = sleeper
        self.wallet_index = wallet_index
        self.total_wallets = total_wallets
        self.description = self.kind.value.capitalize()

    @abstractmethod
    async def execute(self) -> ActionResult:
        pass

    async def run(self, action_index: int, total_actions: int) -> ActionResult:
        try:
            result = await self.execute()
        except Exception as error:
            result = ActionResult.failed(
                self.kind, describe_error(error), getattr(error, "tx_hash", None)
            )

        await show_trx_log(
            prefix=f"[{self.wallet_index}/{self.total_wallets}] [{action_index}/{total_actions}]",
            description=self.description,
            result=result,
            explorer=self.config.explorer_url,
            address=self.wallet.wallet_address,
        )
        return result

    async def submit(self, build_tx: TxBuilder) -> str:
        """
        Signs and broadcasts the transaction returned by ``build_tx``.

        The nonce is drawn right before every attempt. A retry after a failed
        broadcast never reuses the nonce of the previous attempt.
        """
        max_attempts = self.policy.submit_max_attempts
        previous_nonce: int | None = None

        for attempt in range(1, max_attempts + 1):
            try:
                nonce = await self.wallet.get_nonce()
                if previous_nonce is not None and nonce <= previous_nonce:
                    nonce = previous_nonce + 1
                previous_nonce = nonce

                operation = PendingOperation(self.kind, await build_tx(nonce), nonce)
                return await self.wallet.sign_and_send(operation.payload)

            except Exception as error:
                retryable = is_transient_rpc_error(error) or is_nonce_error(error)
                if not retryable or attempt == max_attempts:
                    raise TransactionSubmissionError(describe_error(error)) from error

                await self.logger_msg(
                    msg=f"Broadcast failed with nonce {previous_nonce} "
                        f"(attempt {attempt}/{max_attempts}): {error}",
                    type_msg="warning", address=self.wallet.wallet_address,
                    class_name=self.__class__.__name__, method_name="submit"
                )
                await self.sleeper.sleep(self.policy.submit_retry_delay)

        raise TransactionSubmissionError(f"Failed to broadcast after {max_attempts} attempts")

    async def submit_and_confirm(self, build_tx: TxBuilder) -> Receipt:
        tx_hash = await self.submit(build_tx)
        try:
            return await self.receipt_waiter.wait(self.wallet, tx_hash)
        except Exception as error:
            raise TransactionConfirmationError(describe_error(error), tx_hash) from error

    async def ensure_allowance(self, token_address: str, spender_address: str, required: int) -> None:
        current = await self.wallet.allowance(token_address, spender_address)
        if current >= required:
            return

        token = await self.wallet.get_contract(token_address)
        spender = self.wallet.to_checksum_address(spender_address)

        async def build_approve(nonce: int) -> TxParams:
            return await self.wallet.build_transaction_params(
                nonce, token.functions.approve(spender, self.wallet.MAX_UINT256)
            )

        receipt = await self.submit_and_confirm(build_approve)
        if not receipt.succeeded:
            raise WalletError(f"Approval of {token_address} was not confirmed: {receipt.tx_hash}")

        await self.logger_msg(
            msg=f"Approved {token_address} for {spender}",
            type_msg="debug", address=self.wallet.wallet_address,
            class_name=self.__class__.__name__, method_name="ensure_allowance"
        )

    async def ensure_balance(self, required: int) -> None:
        balance = await self.wallet.get_balance()
        if balance < required:
            native = self.config.chain_config.name_native_token
            raise InsufficientFundsError(
                f"Insufficient balance: {format_amount(self.wallet.from_wei(balance, 'ether'))} {native}"
            )
