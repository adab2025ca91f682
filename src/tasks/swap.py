import random
import time

from web3.types import TxParams

from src.models import ActionKind, ActionResult, SwapRouterContract
from src.tasks.base import ActionModule


class SwapModule(ActionModule):
    kind = ActionKind.SWAP

    def pick_swap(self) -> tuple[str, float]:
        params = self.policy.swap
        token_name = random.choice(params.tokens)
        amount = round(random.uniform(params.amount.min, params.amount.max), 4)
        return token_name, amount

    async def execute(self) -> ActionResult:
        chain = self.config.chain_config
        params = self.policy.swap
        token_name, amount = self.pick_swap()
        amount_wei = self.wallet.to_wei_amount(amount)
        self.description = f"Swap {amount} {chain.name_native_token} -> {token_name}"

        await self.ensure_balance(amount_wei)

        router = await self.wallet.get_contract(
            SwapRouterContract(address=chain.contracts["swap_router"])
        )
        swap_data = router.encode_abi(
            "exactInputSingle",
            args=[(
                self.wallet.to_checksum_address(chain.tokens["WPHRS"]),
                self.wallet.to_checksum_address(chain.tokens[token_name]),
                params.fee,
                self.wallet.wallet_address,
                amount_wei,
                0,
                0,
            )],
        )

        async def build_swap(nonce: int) -> TxParams:
            deadline = int(time.time()) + params.deadline
            return await self.wallet.build_transaction_params(
                nonce,
                router.functions.multicall(deadline, [swap_data]),
                value=amount_wei,
                gas_buffer=params.gas_buffer,
            )

        receipt = await self.submit_and_confirm(build_swap)
        return ActionResult.from_receipt(self.kind, receipt)
