import asyncio

import aiohttp
from web3.exceptions import TransactionNotFound


TRANSIENT_MARKERS = (
    "unable to complete request",
    "rate limit",
    "ratelimit",
    "too many requests",
    "request limit",
    "service unavailable",
    "bad gateway",
    "gateway timeout",
    "timed out",
    "-32005",
    "-32603",
)

NONCE_MARKERS = (
    "nonce too low",
    "nonce_too_small",
    "already known",
    "replacement transaction underpriced",
)

REPLAY_MARKERS = (
    "tx_replay_attack",
)

TRANSIENT_HTTP_STATUSES = frozenset({429, 502, 503, 504})


def is_replay_error(error: BaseException) -> bool:
    error_str = str(error).lower()
    return any(marker in error_str for marker in REPLAY_MARKERS)


def is_transient_rpc_error(error: BaseException) -> bool:
    if isinstance(error, (asyncio.TimeoutError, aiohttp.ServerDisconnectedError, aiohttp.ServerTimeoutError)):
        return True
    if isinstance(error, aiohttp.ClientResponseError):
        return error.status in TRANSIENT_HTTP_STATUSES

    if is_replay_error(error):
        return False

    error_str = str(error).lower()
    return any(marker in error_str for marker in TRANSIENT_MARKERS)


def is_nonce_error(error: BaseException) -> bool:
    if is_replay_error(error):
        return False
    error_str = str(error).lower()
    return any(marker in error_str for marker in NONCE_MARKERS)


def is_receipt_pending(error: BaseException) -> bool:
    return isinstance(error, TransactionNotFound)


def describe_error(error: BaseException) -> str:
    error_str = str(error)

    if is_replay_error(error):
        return "Transaction was already broadcast (TX_REPLAY_ATTACK)"
    if "insufficient funds" in error_str:
        return "Insufficient funds for gas * price + value"
    if "execution reverted" in error_str:
        return "Transaction execution reverted by the blockchain"
    if "cannot estimate gas" in error_str.lower():
        return "Cannot estimate gas: transaction may fail or require more gas"
    return error_str or type(error).__name__
