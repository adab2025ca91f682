from .chains import CHAINS, ChainConfig
from .config_model import (
    Account,
    ActionQuota,
    AmountRange,
    Config,
    DelayRange,
    LiquidityParams,
    PolicyConfig,
    SwapParams,
)
from .action_model import (
    PLACEHOLDER_TX_HASH,
    ActionGroup,
    ActionKind,
    ActionResult,
    ActionStatus,
    PendingOperation,
    Receipt,
    Session,
    UserPoints,
    WalletReport,
)
from .onchain_model import (
    BaseContract,
    ERC20Contract,
    PositionManagerContract,
    SwapRouterContract,
)
