import random
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generator

from better_proxy import Proxy
from pydantic import ValidationError
from ruamel.yaml import YAML

from configs import SHUFFLE_WALLETS
from src.exceptions.custom_exceptions import ConfigurationError
from src.models import Account, Config


yaml = YAML(typ='safe')

PRIVATE_KEY_PATTERN = re.compile(r'^0x[0-9a-fA-F]{64}$')


@dataclass
class FileData:
    path: Path
    required: bool = True
    allow_empty: bool = False


@dataclass
class ConfigLoader:
    base_path: Path = field(default_factory=lambda: Path(__file__).parent.parent.parent)
    shuffle_wallets: bool = SHUFFLE_WALLETS
    notices: list[str] = field(default_factory=list)

    SETTINGS_PARAMS = frozenset({
        'rpc_url',
        'explorer_url',
        'api_url',
        'chain',
        'invite_code',
        'task_id',
        'exit_on_error',
    })

    def __post_init__(self) -> None:
        self.base_path = Path(self.base_path)
        self.config_path = self.base_path / 'config'
        self.data_client_path = self.config_path / 'data' / 'client'
        self.settings_path = self.config_path / 'settings.yaml'
        self.file_paths = {
            'settings': FileData(self.settings_path),
            'private_keys': FileData(self.data_client_path / 'private_keys.txt', required=False),
            'proxies': FileData(self.data_client_path / 'proxies.txt', required=False),
        }

    def _load_yaml(self) -> dict:
        settings_path = self.file_paths['settings'].path
        if not settings_path.exists():
            raise ConfigurationError(f'Settings file not found: {settings_path}')

        try:
            with open(settings_path, 'r', encoding='utf-8') as file:
                config = yaml.load(file)
        except Exception as error:
            raise ConfigurationError(f'Error loading configuration: {error}') from error

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError('Configuration must be a dictionary')

        unknown_fields = set(config) - self.SETTINGS_PARAMS
        if unknown_fields:
            raise ConfigurationError(
                f'Unknown settings: {", ".join(sorted(unknown_fields))}'
            )
        return {key: value for key, value in config.items() if value is not None}

    def _read_lines(self, name: str) -> list[str]:
        file_data = self.file_paths[name]
        if not file_data.path.exists():
            self.notices.append(f'{file_data.path.name} not found, using an empty list')
            return []

        with open(file_data.path, 'r', encoding='utf-8') as file:
            return [line.strip() for line in file if line.strip()]

    def _get_accounts(self) -> Generator[Account, None, None]:
        for line_number, line in enumerate(self._read_lines('private_keys'), start=1):
            if not line.startswith('0x'):
                continue
            if not PRIVATE_KEY_PATTERN.match(line):
                self.notices.append(f'private_keys.txt line {line_number}: malformed key skipped')
                continue
            yield Account(keypair=line)

    def _get_proxies(self) -> Generator[Proxy, None, None]:
        for line_number, line in enumerate(self._read_lines('proxies'), start=1):
            try:
                yield Proxy.from_str(line)
            except ValueError as error:
                self.notices.append(f'proxies.txt line {line_number}: {error}')

    def load(self) -> Config:
        params = self._load_yaml()
        accounts = list(self._get_accounts())
        proxies = list(self._get_proxies())

        if self.shuffle_wallets:
            random.shuffle(accounts)

        try:
            return Config(accounts=accounts, proxies=proxies, **params)
        except ValidationError as error:
            raise ConfigurationError(f'Invalid settings: {error}') from error
