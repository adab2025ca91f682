class WalletError(Exception):
    """
    Base class for wallet-related errors.

    Used as a parent class for all wallet-related exceptions.
    """


class InsufficientFundsError(WalletError):
    """
    Exception for insufficient funds on the wallet.

    Occurs when the wallet balance is insufficient to complete the operation.
    """


class ConfigurationError(Exception):
    """
    Base class for configuration errors.

    Used for handling errors related to application settings.
    """


class ProviderError(Exception):
    """
    The RPC endpoint could not be used.

    Raised for failures that are not known to be transient, the wallet is
    skipped for the current cycle.
    """


class ProviderUnreachableError(ProviderError):
    """
    The RPC endpoint kept failing with transient errors.

    Raised once the bounded retry of the provider factory is exhausted.
    """


class TransactionSubmissionError(WalletError):
    """Signing or broadcasting a transaction failed"""


class TransactionConfirmationError(WalletError):
    """Polling the receipt of a broadcast transaction failed"""

    def __init__(self, message: str, tx_hash: str) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash
