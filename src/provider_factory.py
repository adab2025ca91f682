from typing import Callable

from better_proxy import Proxy

from src.exceptions.custom_exceptions import ProviderError, ProviderUnreachableError
from src.logger import AsyncLogger
from src.utils.rpc_errors import is_transient_rpc_error
from src.utils.sleeper import CancellableSleeper
from src.wallet import Wallet


logger = AsyncLogger()


class ProviderFactory:
    """
    Opens RPC connections for wallets.

    ``acquire`` retries transient failures a fixed number of times with a
    fixed delay. ``acquire_until_ready`` keeps calling ``acquire`` through an
    outage, so a dead endpoint stalls the bot instead of crashing it.
    """

    def __init__(
        self,
        rpc_url: str,
        chain_id: int,
        sleeper: CancellableSleeper,
        max_attempts: int = 3,
        retry_delay: float = 5,
        outage_delay: float = 30,
        wallet_factory: Callable[..., Wallet] = Wallet,
    ) -> None:
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self.sleeper = sleeper
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.outage_delay = outage_delay
        self.wallet_factory = wallet_factory

    async def acquire(self, keypair: str, proxy: Proxy | None = None) -> Wallet:
        last_error: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            wallet = self.wallet_factory(keypair, self.rpc_url, proxy)
            try:
                chain_id = await wallet.ping()
            except Exception as error:
                await wallet.close()
                if not is_transient_rpc_error(error):
                    raise ProviderError(f"RPC connection failed: {error}") from error

                last_error = error
                await logger.logger_msg(
                    msg=f"RPC is busy (attempt {attempt}/{self.max_attempts}): {error}",
                    type_msg="warning", address=wallet.wallet_address,
                    class_name=self.__class__.__name__, method_name="acquire"
                )
                if attempt < self.max_attempts:
                    await self.sleeper.sleep(self.retry_delay)
                continue

            if chain_id != self.chain_id:
                await wallet.close()
                raise ProviderError(
                    f"RPC reports chain id {chain_id}, expected {self.chain_id}"
                )
            return wallet

        raise ProviderUnreachableError(
            f"RPC unreachable after {self.max_attempts} attempts: {last_error}"
        )

    async def acquire_until_ready(self, keypair: str, proxy: Proxy | None = None) -> Wallet:
        while True:
            try:
                return await self.acquire(keypair, proxy)
            except ProviderUnreachableError as error:
                if self.sleeper.cancelled:
                    raise
                await logger.logger_msg(
                    msg=f"{error}. Retrying in {self.outage_delay} seconds",
                    type_msg="error",
                    class_name=self.__class__.__name__, method_name="acquire_until_ready"
                )
                await self.sleeper.sleep(self.outage_delay)
