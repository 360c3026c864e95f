"""
Unit tests for the credentials file: first-run prompt, parsing and rate lookup.
"""
import json
from unittest.mock import Mock

import pytest

from meazure_report.credentials import Credentials, CredentialStore
from meazure_report.errors import ConfigError


class TestCredentialStore:

    def test_missing_file_asks_provider_and_saves(self, tmp_path):
        path = tmp_path / "meazure.config.json"
        provider = Mock(return_value=Credentials("jane@example.com", "s3cret"))

        loaded = CredentialStore(str(path), provider=provider).load()

        provider.assert_called_once_with()
        assert loaded == Credentials("jane@example.com", "s3cret")
        assert json.loads(path.read_text()) == {"uname": "jane@example.com", "pword": "s3cret"}

    def test_existing_file_is_read_without_prompt(self, credentials_file, credentials):
        provider = Mock()

        loaded = CredentialStore(str(credentials_file), provider=provider).load()

        provider.assert_not_called()
        assert loaded == credentials

    def test_round_trip(self, tmp_path, credentials):
        store = CredentialStore(str(tmp_path / "creds.json"))

        store.write(credentials)

        assert store.read() == credentials

    def test_round_trip_without_rates(self, tmp_path):
        store = CredentialStore(str(tmp_path / "creds.json"))
        credentials = Credentials("jane@example.com", "s3cret")

        store.write(credentials)

        assert store.read() == credentials

    def test_existing_file_is_never_overwritten(self, credentials_file):
        before = credentials_file.read_text()
        store = CredentialStore(str(credentials_file))

        with pytest.raises(ConfigError, match="refusing to overwrite"):
            store.write(Credentials("other", "other"))

        assert credentials_file.read_text() == before

    @pytest.mark.parametrize("content, message", [
        ("{not json", "not valid JSON"),
        ("[1, 2]", "must be a JSON object"),
        ('{"uname": "jane"}', "missing: pword"),
        ('{"uname": "jane", "pword": "x", "rates": [10]}', "rates must be a mapping"),
        ('{"uname": "jane", "pword": "x", "rates": {"A": "10"}}', "rate for 'A' must be a number"),
        ('{"uname": "jane", "pword": "x", "rates": {"A": null}}', "rate for 'A' must be a number"),
        ('{"uname": "jane", "pword": "x", "rates": {"_default": true}}', "rate for '_default' must be a number"),
    ])
    def test_corrupt_file(self, tmp_path, content, message):
        path = tmp_path / "meazure.config.json"
        path.write_text(content)

        with pytest.raises(ConfigError, match=message):
            CredentialStore(str(path)).load()

    def test_unreadable_path(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read"):
            CredentialStore(str(tmp_path)).read()


class TestRates:

    def test_project_rate_wins(self, credentials):
        assert credentials.rate_for("Acme") == 100

    def test_default_rate(self, credentials):
        assert credentials.rate_for("Globex") == 50
        assert credentials.rate_for(None) == 50

    def test_zero_project_rate_is_respected(self):
        credentials = Credentials("u", "p", {"Internal": 0, "_default": 80})
        assert credentials.rate_for("Internal") == 0

    def test_no_rates(self):
        assert Credentials("u", "p").rate_for("Acme") == 0


def test_integer_and_float_rates_are_accepted(tmp_path):
    path = tmp_path / "meazure.config.json"
    path.write_text('{"uname": "jane", "pword": "x", "rates": {"A": 10, "B": 72.5}}')

    assert CredentialStore(str(path)).read().rates == {"A": 10, "B": 72.5}
