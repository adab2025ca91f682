from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChainConfig:
    name: str
    id: int
    name_native_token: str
    tokens: dict[str, str] = field(default_factory=dict)
    contracts: dict[str, str] = field(default_factory=dict)


CHAINS: dict[str, ChainConfig] = {
    'Pharos': ChainConfig(
        name='Pharos Testnet',
        id=688688,
        name_native_token='PHRS',
        tokens={
            "WPHRS": "0x76aaaDA469D23216bE5f7C596fA25F282Ff9b364",
            "USDC": "0xad902cf99c2de2f1ba5ec4d642fd7e49cae9ee37",
            "USDT": "0xed59de2d7ad9c043442e381231ee3646fc3c2939",
        },
        contracts={
            "swap_router": "0x1a4de519154ae51200b0ad7c90f7fac75547888a",
            "position_manager": "0xf8a1d4ff0f9b9af7ce58e1fc1833688f3bfd6115",
        }
    ),
}
