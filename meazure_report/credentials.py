import json
import logging
import os
import typing
from dataclasses import dataclass, field

import click

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIALS_FILE = 'meazure.config.json'
DEFAULT_RATE_KEY = '_default'


@dataclass
class Credentials:
    username: str
    password: str
    rates: typing.Dict[str, float] = field(default_factory=dict)

    def rate_for(self, project: typing.Optional[str]) -> float:
        if project in self.rates:
            return self.rates[project]
        return self.rates.get(DEFAULT_RATE_KEY, 0)

    def to_dict(self) -> dict:
        result = {'uname': self.username, 'pword': self.password}
        if self.rates:
            result['rates'] = dict(self.rates)
        return result

    @classmethod
    def from_dict(cls, config):
        if not isinstance(config, dict):
            raise ConfigError(f'credentials must be a JSON object, got {type(config).__name__}')
        missing = [key for key in ('uname', 'pword') if key not in config]
        if missing:
            raise ConfigError(f'credentials are missing: {", ".join(missing)}')
        rates = config.get('rates') or {}
        if not isinstance(rates, dict):
            raise ConfigError('rates must be a mapping of project name to hourly rate')
        for project, rate in rates.items():
            if isinstance(rate, bool) or not isinstance(rate, (int, float)):
                raise ConfigError(f'rate for {project!r} must be a number, got {rate!r}')
        return cls(username=config['uname'], password=config['pword'], rates=rates)


CredentialProvider = typing.Callable[[], Credentials]


def prompt_credentials() -> Credentials:
    username = click.prompt('Meazure username')
    password = click.prompt('Meazure password', hide_input=True)
    return Credentials(username=username, password=password)


class CredentialStore:

    def __init__(self, path=DEFAULT_CREDENTIALS_FILE, provider: CredentialProvider = prompt_credentials):
        self._path = path
        self._provider = provider

    @property
    def path(self):
        return self._path

    def exists(self) -> bool:
        return os.path.exists(self._path)

    def load(self) -> Credentials:
        if not self.exists():
            logger.info('%s not found, asking for credentials', self._path)
            return self.write(self._provider())
        return self.read()

    def read(self) -> Credentials:
        try:
            with open(self._path, 'r') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f'{self._path} is not valid JSON: {e}') from e
        except OSError as e:
            raise ConfigError(f'cannot read {self._path}: {e}') from e
        return Credentials.from_dict(config)

    def write(self, credentials: Credentials) -> Credentials:
        try:
            with open(self._path, 'x') as f:
                json.dump(credentials.to_dict(), f, indent=2)
        except FileExistsError as e:
            raise ConfigError(f'{self._path} already exists, refusing to overwrite it') from e
        except OSError as e:
            raise ConfigError(f'cannot write {self._path}: {e}') from e
        logger.info('credentials saved to %s, add "rates" there to compute earnings', self._path)
        return credentials
