"""Pytest fixtures for testing."""
import json
from unittest.mock import MagicMock

import pytest
import requests

from hypothesis_api import HypothesisAPI

BASE_URL = "http://localhost:4000/api/v1"


def make_response(status_code=200, payload=None, text=None):
    """Build a real requests.Response carrying a JSON (or raw text) body."""
    resp = requests.Response()
    resp.status_code = status_code
    if text is not None:
        resp._content = text.encode("utf-8")
    elif payload is not None:
        resp._content = json.dumps(payload).encode("utf-8")
    else:
        resp._content = b""
    return resp


@pytest.fixture
def http():
    """Stand-in for requests.Session.request; answers 200 with an empty envelope."""
    mock = MagicMock(return_value=make_response(200, {"data": None}))
    return mock


@pytest.fixture
def client(http):
    api = HypothesisAPI("apiKey123")
    api.session.request = http
    return api


def sent(http):
    """(method, url, body) of the most recent request."""
    args, kwargs = http.call_args
    return args[0], args[1], kwargs["json"]
