from decimal import Decimal
from typing import Any, Union, Self

import ua_generator
from aiohttp import ClientTimeout
from better_proxy import Proxy
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress, HexStr
from pydantic import HttpUrl
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.contract import AsyncContract
from web3.eth import AsyncEth
from web3.types import Nonce, TxParams, TxReceipt
from web3.middleware import ExtraDataToPOAMiddleware

from src.exceptions.custom_exceptions import WalletError
from src.models.onchain_model import BaseContract, ERC20Contract
from src.logger import AsyncLogger


logger = AsyncLogger()


class BlockchainError(Exception):
    """
    Base class for blockchain-related errors.
    """


class Wallet(AsyncWeb3):
    """
    Chain client bound to one secret key and one RPC connection.

    Thin layer over ``AsyncWeb3``: it signs, broadcasts and reads, but never
    retries. Retry policy lives in the provider factory, the receipt waiter
    and the action modules.
    """

    MAX_UINT256 = 2 ** 256 - 1

    def __init__(
        self,
        keypair: str,
        rpc_url: Union[HttpUrl, str],
        proxy: Proxy | None = None,
        request_timeout: int = 30
    ) -> None:
        user_agent = ua_generator.generate(device='desktop', platform='windows', browser='chrome')
        self._provider = AsyncHTTPProvider(
            str(rpc_url),
            request_kwargs={
                "proxy": proxy.as_url if proxy else None,
                "timeout": ClientTimeout(total=request_timeout),
                "headers": {
                    "Content-Type": "application/json",
                    "User-Agent": user_agent.text,
                },
            }
        )

        super().__init__(self._provider, modules={"eth": AsyncEth})

        self.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

        self.keypair = self._initialize_account(keypair)
        self.proxy = proxy
        self._contracts_cache: dict[str, AsyncContract] = {}
        self._is_closed = False

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self._is_closed:
            return

        try:
            await self._provider.disconnect()
            self._contracts_cache.clear()
        except Exception as e:
            await logger.logger_msg(
                msg=f"Error during wallet cleanup: {str(e)}",
                type_msg="warning",
                class_name=self.__class__.__name__,
                method_name="close"
            )
        finally:
            self._is_closed = True

    @staticmethod
    def _initialize_account(input_str: str) -> LocalAccount:
        key_candidate = input_str.strip().replace(" ", "")
        key_body = key_candidate[2:] if key_candidate.startswith('0x') else key_candidate

        if len(key_body) != 64 or not all(c in '0123456789abcdefABCDEF' for c in key_body):
            raise WalletError("Input must be a 64-character hexadecimal private key")

        try:
            return Account.from_key('0x' + key_body)
        except ValueError as e:
            raise WalletError(f"Invalid private key: {e}") from e

    @property
    def wallet_address(self) -> ChecksumAddress:
        return self.keypair.address

    @staticmethod
    def _get_checksum_address(address: str) -> ChecksumAddress:
        return AsyncWeb3.to_checksum_address(address)

    async def get_chain_id(self) -> int:
        return await self.eth.chain_id

    async def ping(self) -> int:
        """Proves the endpoint answers by asking for the chain id."""
        return await self.get_chain_id()

    async def get_contract(self, contract: Union[BaseContract, str]) -> AsyncContract:
        if isinstance(contract, str):
            contract = ERC20Contract(address=contract)

        if not isinstance(contract, BaseContract):
            raise TypeError("Invalid contract type: expected BaseContract or str")

        address = self._get_checksum_address(contract.address)
        if address not in self._contracts_cache:
            abi = await contract.get_abi()
            self._contracts_cache[address] = self.eth.contract(address=address, abi=abi)
        return self._contracts_cache[address]

    async def get_nonce(self) -> Nonce:
        count = await self.eth.get_transaction_count(self.wallet_address, 'pending')
        return Nonce(count)

    async def get_balance(self) -> int:
        return await self.eth.get_balance(self.wallet_address)

    async def allowance(self, token_address: str, spender_address: str) -> int:
        contract = await self.get_contract(token_address)
        return await contract.functions.allowance(
            self.wallet_address,
            self._get_checksum_address(spender_address)
        ).call()

    def to_wei_amount(self, amount: float | str | Decimal) -> int:
        return self.to_wei(Decimal(str(amount)), 'ether')

    async def get_gas_price(self) -> int:
        return await self.eth.gas_price

    async def build_transaction_params(
        self,
        nonce: int,
        contract_function: Any = None,
        to: str | None = None,
        value: int = 0,
        data: HexStr | None = None,
        gas: int | None = None,
        gas_buffer: float = 1.2,
    ) -> TxParams:
        base_params: dict[str, Any] = {
            "from": self.wallet_address,
            "nonce": Nonce(nonce),
            "value": value,
            "chainId": await self.get_chain_id(),
            "gasPrice": await self.get_gas_price(),
        }

        if contract_function is not None:
            params = dict(base_params)
            if gas is not None:
                params["gas"] = gas
            try:
                tx_params = await contract_function.build_transaction(params)
            except Exception as error:
                raise BlockchainError(f"Failed to build transaction: {error}") from error
            if gas is None:
                tx_params["gas"] = int(tx_params["gas"] * gas_buffer)
            return tx_params

        if to is None:
            raise ValueError("'to' address required for native transfers")

        tx_params = {**base_params, "to": self._get_checksum_address(to)}
        if data is not None:
            tx_params["data"] = data

        if gas is not None:
            tx_params["gas"] = gas
            return tx_params

        try:
            gas_estimate = await self.eth.estimate_gas(tx_params)
        except Exception as error:
            raise BlockchainError(f"Failed to estimate gas: {error}") from error
        tx_params["gas"] = int(gas_estimate * gas_buffer)
        return tx_params

    async def sign_and_send(self, transaction: TxParams) -> HexStr:
        signed = self.keypair.sign_transaction(transaction)
        tx_hash = await self.eth.send_raw_transaction(signed.raw_transaction)
        return HexStr(self.to_hex(tx_hash))

    async def get_receipt(self, tx_hash: str) -> TxReceipt:
        return await self.eth.get_transaction_receipt(tx_hash)
