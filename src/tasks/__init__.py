from .base import ActionModule
from .transfer import TransferModule
from .swap import SwapModule
from .liquidity import LiquidityModule
from .daily import DailyRewardsModule
