import random
import time

from web3.types import TxParams

from src.models import ActionKind, ActionResult, PositionManagerContract
from src.tasks.base import ActionModule


class LiquidityModule(ActionModule):
    kind = ActionKind.LIQUIDITY

    async def execute(self) -> ActionResult:
        chain = self.config.chain_config
        params = self.policy.liquidity
        token_name = random.choice(params.tokens)
        token0 = self.wallet.to_checksum_address(chain.tokens["WPHRS"])
        token1 = self.wallet.to_checksum_address(chain.tokens[token_name])
        manager_address = chain.contracts["position_manager"]
        self.description = f"Add LP WPHRS/{token_name}"

        await self.ensure_allowance(token0, manager_address, params.amount0_desired)
        await self.ensure_allowance(token1, manager_address, params.amount1_desired)

        manager = await self.wallet.get_contract(
            PositionManagerContract(address=manager_address)
        )

        async def build_mint(nonce: int) -> TxParams:
            mint_params = (
                token0,
                token1,
                params.fee,
                params.tick_lower,
                params.tick_upper,
                params.amount0_desired,
                params.amount1_desired,
                0,
                0,
                self.wallet.wallet_address,
                int(time.time()) + params.deadline,
            )
            calls = [
                manager.encode_abi("mint", args=[mint_params]),
                manager.encode_abi("refundETH", args=[]),
            ]
            return await self.wallet.build_transaction_params(
                nonce,
                manager.functions.multicall(calls),
                value=self.wallet.to_wei_amount(params.value),
                gas=params.gas_limit,
            )

        receipt = await self.submit_and_confirm(build_mint)
        return ActionResult.from_receipt(self.kind, receipt)
