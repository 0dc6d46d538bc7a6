"""Shared fixtures for FootPress tests."""

import pytest
import requests

from footpress.app import create_app
from footpress.sessions.store import SessionStore
from footpress.suggestions.provider import SuggestionProvider


def reading(great_toe=250, first_met=300, fifth_met=200, heel=350):
    return {
        "greatToe": great_toe,
        "firstMetatarsal": first_met,
        "fifthMetatarsal": fifth_met,
        "heel": heel,
    }


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error
        self.text = str(payload)

    def json(self):
        if self.json_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)


@pytest.fixture
def static_provider():
    provider = SuggestionProvider(mode="static")
    yield provider
    provider.shutdown()


@pytest.fixture
def manual_store(static_provider):
    """Store whose windows never tick on their own; tests drive them by hand."""
    store = SessionStore(fetch=lambda: reading(), provider=static_provider, ticks=1, tick_seconds=60)
    yield store
    store.close()


@pytest.fixture
def app(manual_store):
    app = create_app(store=manual_store, overrides={"TESTING": True})
    return app


@pytest.fixture
def client(app):
    return app.test_client()
