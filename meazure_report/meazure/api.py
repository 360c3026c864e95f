import logging
import typing

import requests

from ..common import format_date
from ..credentials import Credentials
from ..errors import AuthError, FetchError
from .model import TimeEntry

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://meazure.surgeforward.com'

RETURN_FIELDS = ['Date', 'DurationSeconds', 'ProjectName', 'TaskName']


class MeazureSession:
    """Authenticated handle, owns the cookies Meazure issued at login."""

    def __init__(self, http: requests.Session, username: str):
        self._http = http
        self._username = username

    @property
    def http(self) -> requests.Session:
        return self._http

    @property
    def username(self) -> str:
        return self._username

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class MeazureAPI:

    def __init__(self, base_url=DEFAULT_BASE_URL, session_factory=None):
        self.base_url = base_url.rstrip('/')
        self._session_factory = session_factory or requests.Session

    def call_api(self, http: requests.Session, url, body):
        try:
            response = http.post(f'{self.base_url}{url}',
                                 json=body,
                                 headers={'User-Agent': 'Meazure time entries reporter'})
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f'{url} request failed: {e}') from e
        logger.debug('%s responded with %s', url, response.status_code)
        return response

    def authenticate(self, credentials: Credentials) -> MeazureSession:
        http = self._session_factory()
        logger.info('logging in to %s as %s', self.base_url, credentials.username)
        response = self.call_api(http, '/Auth/Login', {
            'Email': credentials.username,
            'Password': credentials.password
        })
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get('Errors'):
            http.close()
            raise AuthError('Invalid Credentials')
        return MeazureSession(http, credentials.username)

    @staticmethod
    def build_query(from_date, to_date) -> dict:
        return {
            'ContentType': 1,
            'ReturnFields': RETURN_FIELDS,
            'ReturnFieldWidths': None,
            'Criteria': [
                {
                    'JoinOperator': '',
                    'Field': 'Date',
                    'Operator': '>=',
                    'Value': format_date(from_date)
                },
                {
                    'JoinOperator': 'and',
                    'Field': 'Date',
                    'Operator': '<=',
                    'Value': format_date(to_date)
                }
            ],
            'Ordering': None
        }

    def fetch_entries(self, session: MeazureSession, from_date, to_date) -> typing.List[TimeEntry]:
        response = self.call_api(session.http, '/Dashboard/RunQuery', self.build_query(from_date, to_date))
        try:
            records = response.json()
        except ValueError as e:
            raise FetchError(f'query returned a non JSON body: {e}') from e
        if not isinstance(records, list):
            raise FetchError(f'query returned {type(records).__name__} instead of a list of entries')
        logger.info('fetched %d entries for %s - %s', len(records), from_date, to_date)
        return [TimeEntry.from_record(record) for record in records]
