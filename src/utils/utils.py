import random
from decimal import Decimal

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_typing import HexStr

from src.logger import AsyncLogger
from src.utils.sleeper import CancellableSleeper


async def random_sleep(
    sleeper: CancellableSleeper,
    address: str | None = None,
    min_sec: float = 30,
    max_sec: float = 60
) -> bool:
    logger = AsyncLogger()
    delay = random.uniform(min_sec, max_sec)

    minutes, seconds = divmod(delay, 60)
    template = (
        f"Sleep {int(minutes)} minutes {seconds:.1f} seconds" if minutes > 0 else
        f"Sleep {seconds:.1f} seconds"
    )
    await logger.logger_msg(template, type_msg="debug", address=address)

    completed = await sleeper.sleep(delay)
    if not completed:
        await logger.logger_msg(
            "Sleep interrupted", type_msg="warning", address=address
        )
    return completed


def sign_message(keypair: str, text: str) -> HexStr:
    try:
        signed = Account.sign_message(encode_defunct(text=text), private_key=keypair)
    except Exception as error:
        raise ValueError(f"Signing failed: {str(error)}") from error

    signature = signed.signature.hex()
    return HexStr(signature if signature.startswith("0x") else f"0x{signature}")


def random_address() -> str:
    return Account.create().address


def format_duration(total_seconds: int) -> str:
    hours, remainder = divmod(max(int(total_seconds), 0), 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}h {minutes}m {seconds}s"


def format_amount(value: float | Decimal) -> str:
    return f"{Decimal(str(value)).normalize():f}"
