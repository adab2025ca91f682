from .sleeper import CancellableSleeper
from .utils import (
    format_amount,
    format_duration,
    random_address,
    random_sleep,
    sign_message,
)
from .rpc_errors import (
    describe_error,
    is_nonce_error,
    is_replay_error,
    is_receipt_pending,
    is_transient_rpc_error,
)
from .logger_trx import show_trx_log
from .load_config import ConfigLoader
