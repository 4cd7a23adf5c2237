"""Shared fixtures for the dashboard tests."""

import json
import sys
import pytest
from pathlib import Path
from unittest.mock import MagicMock

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def full_payload():
    """A canonical response that also carries conflicting legacy root fields."""
    with open(FIXTURES_DIR / "all_data_response.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / "local_storage.json"


def make_response(data, status_code=200):
    """Build a mocked requests.Response."""
    import requests

    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.json.return_value = data
    if resp.ok:
        resp.raise_for_status = MagicMock()
    else:
        resp.raise_for_status = MagicMock(
            side_effect=requests.exceptions.HTTPError(f"{status_code} Error"),
        )
    return resp
