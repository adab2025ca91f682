import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

import aiofiles


class ContractError(Exception):
    """Base exception for contract-related errors"""


@dataclass(slots=True)
class BaseContract:
    address: str
    abi_file: str = "erc_20.json"

    _abi_cache: ClassVar[dict[str, list[dict[str, Any]]]] = {}
    _abi_path: ClassVar[Path] = Path(__file__).parent.parent.parent / "abi"

    async def get_abi(self) -> list[dict[str, Any]]:
        if self.abi_file not in self._abi_cache:
            self._abi_cache[self.abi_file] = await self._load_abi_file()
        return self._abi_cache[self.abi_file]

    async def _load_abi_file(self) -> list[dict[str, Any]]:
        file_path = self._abi_path / self.abi_file
        try:
            async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
                abi_data = json.loads(await f.read())
        except FileNotFoundError as e:
            raise ContractError(f"ABI file not found: {file_path}") from e
        except json.JSONDecodeError as e:
            raise ContractError(f"Invalid JSON in ABI file: {file_path}") from e

        if not isinstance(abi_data, list):
            raise ContractError(f"Invalid ABI structure in {file_path}")
        return abi_data

    @classmethod
    def clear_cache(cls, abi_file: str | None = None) -> None:
        if abi_file:
            cls._abi_cache.pop(abi_file, None)
        else:
            cls._abi_cache.clear()


@dataclass(slots=True)
class ERC20Contract(BaseContract):
    address: str = ""
    abi_file: str = "erc_20.json"


@dataclass(slots=True)
class SwapRouterContract(BaseContract):
    address: str = ""
    abi_file: str = "swap_router.json"


@dataclass(slots=True)
class PositionManagerContract(BaseContract):
    address: str = ""
    abi_file: str = "position_manager.json"
