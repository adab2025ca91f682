from web3.types import TxParams

from src.models import ActionKind, ActionResult
from src.tasks.base import ActionModule
from src.utils.utils import format_amount, random_address


class TransferModule(ActionModule):
    kind = ActionKind.TRANSFER

    async def execute(self) -> ActionResult:
        native = self.config.chain_config.name_native_token
        amount = self.wallet.to_wei_amount(self.policy.transfer_amount)
        to_address = random_address()
        self.description = (
            f"Transfer {format_amount(self.policy.transfer_amount)} {native} to {to_address}"
        )

        await self.ensure_balance(amount)

        async def build_transfer(nonce: int) -> TxParams:
            return await self.wallet.build_transaction_params(
                nonce,
                to=to_address,
                value=amount,
                gas=self.policy.transfer_gas_limit,
            )

        receipt = await self.submit_and_confirm(build_transfer)
        return ActionResult.from_receipt(self.kind, receipt)
