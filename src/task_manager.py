from typing import Awaitable, Callable

from src.models import ActionKind, ActionResult, Config
from src.receipt_waiter import ReceiptWaiter
from src.tasks import ActionModule, LiquidityModule, SwapModule, TransferModule
from src.utils.sleeper import CancellableSleeper
from src.wallet import Wallet


class ActionExecutor:
    """Runs the on-chain operations of one wallet pass."""

    MODULES: dict[ActionKind, type[ActionModule]] = {
        ActionKind.TRANSFER: TransferModule,
        ActionKind.SWAP: SwapModule,
        ActionKind.LIQUIDITY: LiquidityModule,
    }

    def __init__(
        self,
        wallet: Wallet,
        config: Config,
        receipt_waiter: ReceiptWaiter,
        sleeper: CancellableSleeper,
        wallet_index: int = 1,
        total_wallets: int = 1,
    ) -> None:
        self.wallet = wallet
        self.config = config
        self.receipt_waiter = receipt_waiter
        self.sleeper = sleeper
        self.wallet_index = wallet_index
        self.total_wallets = total_wallets
        self._modules: dict[ActionKind, ActionModule] = {}
        self.module_functions = self._load_module_functions()

    def _load_module_functions(self) -> dict[str, Callable[[int, int], Awaitable[ActionResult]]]:
        return {
            attr_name[8:]: getattr(self, attr_name)
            for attr_name in dir(self)
            if attr_name.startswith('process_')
        }

    def _module(self, kind: ActionKind) -> ActionModule:
        if kind not in self._modules:
            self._modules[kind] = self.MODULES[kind](
                self.wallet, self.config, self.receipt_waiter, self.sleeper,
                self.wallet_index, self.total_wallets
            )
        return self._modules[kind]

    async def process_transfer(self, action_index: int, total_actions: int) -> ActionResult:
        return await self._module(ActionKind.TRANSFER).run(action_index, total_actions)

    async def process_swap(self, action_index: int, total_actions: int) -> ActionResult:
        return await self._module(ActionKind.SWAP).run(action_index, total_actions)

    async def process_liquidity(self, action_index: int, total_actions: int) -> ActionResult:
        return await self._module(ActionKind.LIQUIDITY).run(action_index, total_actions)

    async def execute(self, kind: ActionKind, action_index: int, total_actions: int) -> ActionResult:
        process_func = self.module_functions.get(ActionKind(kind).value)
        if process_func is None:
            raise ValueError(f"Action '{kind}' is not implemented")
        return await process_func(action_index, total_actions)
