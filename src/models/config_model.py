from better_proxy import Proxy
from eth_account import Account as EthAccount
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)

import configs
from src.models.chains import CHAINS, ChainConfig


class Account:
    __slots__ = (
        'keypair',
        '_address',
    )

    def __init__(self, keypair: str) -> None:
        self.keypair = keypair
        self._address: str | None = None

    @property
    def address(self) -> str:
        if self._address is None:
            self._address = EthAccount.from_key(self.keypair).address
        return self._address

    def __repr__(self) -> str:
        return f'Account({self.address!r})'


class DelayRange(BaseModel):
    min: float = Field(ge=0)
    max: float = Field(ge=0)

    @field_validator('max')
    @classmethod
    def validate_max(cls, value: float, info: ValidationInfo) -> float:
        if value < info.data['min']:
            raise ValueError('max must be greater than or equal to min')
        return value

    model_config = ConfigDict(frozen=True)


class AmountRange(BaseModel):
    min: float = Field(gt=0)
    max: float = Field(gt=0)

    @field_validator('max')
    @classmethod
    def validate_max(cls, value: float, info: ValidationInfo) -> float:
        if value < info.data['min']:
            raise ValueError('max must be greater than or equal to min')
        return value

    model_config = ConfigDict(frozen=True)


class ActionQuota(BaseModel):
    transfer: int = Field(default=configs.TOTAL_TRANSFER, ge=0)
    swap: int = Field(default=configs.TOTAL_SWAP, ge=0)
    liquidity: int = Field(default=configs.TOTAL_LP, ge=0)

    model_config = ConfigDict(frozen=True)


class LiquidityParams(BaseModel):
    tokens: tuple[str, ...] = tuple(configs.LP_TOKENS)
    fee: int = configs.LP_POOL_FEE
    tick_lower: int = configs.LP_TICK_RANGE[0]
    tick_upper: int = configs.LP_TICK_RANGE[1]
    amount0_desired: int = configs.LP_AMOUNT0_DESIRED
    amount1_desired: int = configs.LP_AMOUNT1_DESIRED
    value: float = configs.LP_VALUE
    gas_limit: int = configs.LP_GAS_LIMIT
    deadline: int = configs.LP_DEADLINE

    @field_validator('tick_upper')
    @classmethod
    def validate_ticks(cls, value: int, info: ValidationInfo) -> int:
        if value <= info.data['tick_lower']:
            raise ValueError('tick_upper must be greater than tick_lower')
        return value

    model_config = ConfigDict(frozen=True)


class SwapParams(BaseModel):
    tokens: tuple[str, ...] = tuple(configs.SWAP_TOKENS)
    amount: AmountRange = AmountRange(
        min=configs.SWAP_AMOUNT_RANGE[0], max=configs.SWAP_AMOUNT_RANGE[1]
    )
    fee: int = configs.SWAP_POOL_FEE
    deadline: int = configs.SWAP_DEADLINE
    gas_buffer: float = configs.SWAP_GAS_BUFFER

    model_config = ConfigDict(frozen=True)


class PolicyConfig(BaseModel):
    """Scheduling and retry policy of one generation of the bot."""

    quota: ActionQuota = ActionQuota()
    shuffle_action_groups: bool = configs.SHUFFLE_ACTION_GROUPS
    daily_tasks: tuple[str, ...] = tuple(configs.DAILY_TASKS)
    delay_between_actions: DelayRange = DelayRange(
        min=configs.SLEEP_RANGE_BETWEEN_ACTIONS[0],
        max=configs.SLEEP_RANGE_BETWEEN_ACTIONS[1]
    )
    cycle_cooldown: int = Field(default=configs.CYCLE_COOLDOWN, ge=0)

    provider_max_attempts: int = Field(default=configs.PROVIDER_MAX_ATTEMPTS, ge=1)
    provider_retry_delay: float = configs.PROVIDER_RETRY_DELAY
    provider_outage_delay: float = configs.PROVIDER_OUTAGE_DELAY
    receipt_max_attempts: int = Field(default=configs.RECEIPT_MAX_ATTEMPTS, ge=1)
    receipt_poll_interval: float = configs.RECEIPT_POLL_INTERVAL
    submit_max_attempts: int = Field(default=configs.SUBMIT_MAX_ATTEMPTS, ge=1)
    submit_retry_delay: float = configs.SUBMIT_RETRY_DELAY
    verify_max_attempts: int = Field(default=configs.VERIFY_MAX_ATTEMPTS, ge=1)
    verify_retry_delay: float = configs.VERIFY_RETRY_DELAY

    transfer_amount: float = Field(default=configs.TRANSFER_AMOUNT, gt=0)
    transfer_gas_limit: int = configs.TRANSFER_GAS_LIMIT
    swap: SwapParams = SwapParams()
    liquidity: LiquidityParams = LiquidityParams()

    @field_validator('daily_tasks')
    @classmethod
    def validate_daily_tasks(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        unknown = set(value) - {'check_in', 'faucet'}
        if unknown:
            raise ValueError(f'Unknown daily tasks: {", ".join(sorted(unknown))}')
        return value

    model_config = ConfigDict(frozen=True)


class Config(BaseModel):
    accounts: list[Account] = Field(default_factory=list)
    proxies: list[Proxy] = Field(default_factory=list)
    rpc_url: str = "https://testnet.dplabs-internal.com"
    explorer_url: str = "https://testnet.pharosscan.xyz"
    api_url: str = "https://api.pharosnetwork.xyz"
    chain: str = "Pharos"
    invite_code: str = ""
    task_id: int = 103
    exit_on_error: bool = True
    policy: PolicyConfig = PolicyConfig()

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra='forbid',
        frozen=True,
    )

    @field_validator('chain')
    @classmethod
    def validate_chain(cls, value: str) -> str:
        if value not in CHAINS:
            raise ValueError(f'Unknown chain: {value}')
        return value

    @property
    def chain_config(self) -> ChainConfig:
        return CHAINS[self.chain]
