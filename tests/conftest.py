from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.models import (
    Account,
    ActionQuota,
    Config,
    DelayRange,
    PolicyConfig,
)
from src.utils.sleeper import CancellableSleeper


PRIVATE_KEY_1 = "0x" + "11" * 32
PRIVATE_KEY_2 = "0x" + "22" * 32


class InstantSleeper(CancellableSleeper):
    """Records requested delays and returns at once."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[float] = []

    async def sleep(self, seconds: float) -> bool:
        self.calls.append(seconds)
        return not self.cancelled


@pytest.fixture
def sleeper() -> InstantSleeper:
    return InstantSleeper()


@pytest.fixture
def policy() -> PolicyConfig:
    return PolicyConfig(
        quota=ActionQuota(transfer=1, swap=1, liquidity=1),
        delay_between_actions=DelayRange(min=0, max=0),
        cycle_cooldown=10,
    )


@pytest.fixture
def accounts() -> list[Account]:
    return [Account(PRIVATE_KEY_1), Account(PRIVATE_KEY_2)]


@pytest.fixture
def config(accounts, policy) -> Config:
    return Config(accounts=accounts, policy=policy)


@pytest.fixture
def fake_wallet() -> MagicMock:
    wallet = MagicMock()
    wallet.wallet_address = "0x000000000000000000000000000000000000dEaD"
    wallet.MAX_UINT256 = 2 ** 256 - 1
    wallet.to_wei_amount = lambda amount: int(Decimal(str(amount)) * 10 ** 18)
    wallet.from_wei = lambda value, unit: Decimal(value) / 10 ** 18
    wallet.to_checksum_address = lambda address: address
    wallet.get_balance = AsyncMock(return_value=10 ** 18)
    wallet.get_nonce = AsyncMock(return_value=0)
    wallet.build_transaction_params = AsyncMock(
        side_effect=lambda nonce, *args, **kwargs: {"nonce": nonce, **kwargs}
    )
    wallet.sign_and_send = AsyncMock(return_value="0x" + "ab" * 32)
    wallet.close = AsyncMock()
    return wallet
