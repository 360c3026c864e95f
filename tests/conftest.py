"""
Shared fixtures: sample Meazure records, credentials and an HTTP double.
"""
import datetime
import json
from unittest.mock import MagicMock

import pytest
import requests

from meazure_report.credentials import Credentials
from meazure_report.meazure.model import TimeEntry


SAMPLE_RECORDS = [
    {"Date": "2026-10-05T00:00:00", "DurationSeconds": 7200, "ProjectName": "Acme", "TaskName": "Development"},
    {"Date": "2026-10-06T00:00:00", "DurationSeconds": 5400, "ProjectName": "Globex", "TaskName": "Meetings"},
    {"Date": "2026-10-06T00:00:00", "DurationSeconds": 3600, "ProjectName": "Acme", "TaskName": "Review"},
    {"Date": "2026-10-07T00:00:00", "DurationSeconds": 1800, "ProjectName": None, "TaskName": "Admin"},
]

SAMPLE_RATES = {"Acme": 100, "_default": 50}


def make_response(body=None, status=200, invalid_json=False):
    response = MagicMock()
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error")
    if invalid_json:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    return response


def make_entry(date, seconds, project="Acme", task="Development"):
    return TimeEntry(date=date, duration_seconds=seconds, project_name=project, task_name=task)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(username="jane@example.com", password="s3cret", rates=dict(SAMPLE_RATES))


@pytest.fixture
def sample_entries():
    return [TimeEntry.from_record(record) for record in SAMPLE_RECORDS]


@pytest.fixture
def meazure_responses():
    """Responses served by the HTTP double, keyed by endpoint path."""
    return {
        "/Auth/Login": make_response({"Errors": None}),
        "/Dashboard/RunQuery": make_response(list(SAMPLE_RECORDS)),
    }


@pytest.fixture
def meazure_http(meazure_responses):
    """requests.Session double routing POSTs to meazure_responses."""
    http = MagicMock(spec=requests.Session)

    def post(url, json=None, headers=None):
        for path, response in meazure_responses.items():
            if url.endswith(path):
                return response
        raise AssertionError(f"unexpected call to {url}")

    http.post.side_effect = post
    return http


@pytest.fixture
def credentials_file(tmp_path):
    path = tmp_path / "meazure.config.json"
    path.write_text(json.dumps({"uname": "jane@example.com", "pword": "s3cret", "rates": SAMPLE_RATES}))
    return path


@pytest.fixture
def monday() -> datetime.date:
    return datetime.date(2026, 10, 19)
