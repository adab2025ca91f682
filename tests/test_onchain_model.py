import pytest

from src.models import ERC20Contract, PositionManagerContract, SwapRouterContract
from src.models.onchain_model import BaseContract, ContractError


@pytest.fixture(autouse=True)
def fresh_cache():
    BaseContract.clear_cache()
    yield
    BaseContract.clear_cache()


def function_names(abi):
    return {entry["name"] for entry in abi if entry.get("type") == "function"}


class TestContractAbi:
    @pytest.mark.asyncio
    async def test_bundled_abis(self):
        erc20 = await ERC20Contract(address="0x0").get_abi()
        router = await SwapRouterContract(address="0x0").get_abi()
        manager = await PositionManagerContract(address="0x0").get_abi()

        assert {"approve", "allowance", "balanceOf"} <= function_names(erc20)
        assert {"multicall", "exactInputSingle"} <= function_names(router)
        assert {"multicall", "mint", "refundETH"} <= function_names(manager)

    @pytest.mark.asyncio
    async def test_abi_is_cached(self):
        first = await ERC20Contract(address="0x1").get_abi()
        second = await ERC20Contract(address="0x2").get_abi()

        assert first is second

    @pytest.mark.asyncio
    async def test_missing_abi_file(self):
        with pytest.raises(ContractError):
            await BaseContract(address="0x0", abi_file="missing.json").get_abi()
