from src.logger import AsyncLogger
from src.models.action_model import ActionResult, ActionStatus


logger = AsyncLogger()


async def show_trx_log(
    prefix: str,
    description: str,
    result: ActionResult,
    explorer: str,
    address: str | None = None,
) -> None:
    if result.status is ActionStatus.CONFIRMED:
        explorer_link = f"{explorer.rstrip('/')}/tx/{_normalize_hash(result.tx_hash)}"
        await logger.logger_msg(
            f"{prefix} {description} completed: {explorer_link}",
            type_msg="success", address=address
        )
    elif result.status is ActionStatus.UNCONFIRMED:
        await logger.logger_msg(
            f"{prefix} {description} unconfirmed: {_normalize_hash(result.tx_hash)}",
            type_msg="warning", address=address
        )
    else:
        tx_part = f" ({_normalize_hash(result.tx_hash)})" if result.tx_hash else ""
        await logger.logger_msg(
            f"{prefix} {description} failed{tx_part}: {result.message}",
            type_msg="error", address=address
        )


def _normalize_hash(raw_hash: str | None) -> str:
    hash_str = str(raw_hash or "")
    return hash_str if hash_str.startswith("0x") else f"0x{hash_str}"
