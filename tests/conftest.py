"""
Shared fixtures: every test gets its own empty store.
"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from webmail.db.storage import MemStorage
from webmail.main import create_app


@pytest.fixture
def storage():
    return MemStorage()


@pytest.fixture
def client(storage):
    with TestClient(create_app(storage)) as c:
        yield c


@pytest.fixture
def user(storage):
    return storage.create_user({
        "username": "alice",
        "password": "p",
        "emailAddress": "a@uni.edu",
        "displayName": "Alice",
    })


@pytest.fixture
def make_email(storage, user):
    """Factory storing an email for ``user``; keyword args override fields."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "userId": user.id,
            "messageId": f"<m{counter['n']}@uni.edu>",
            "from": "prof.smith@uni.edu",
            "fromName": "Prof. Smith",
            "to": "a@uni.edu",
            "subject": f"Lecture {counter['n']}",
            "body": "See you in class.",
            "received": datetime(2024, 3, 1, 9, 0, 0),
        }
        data.update(overrides)
        return storage.create_email(data)

    return _make


@pytest.fixture
def email_payload(user):
    return {
        "userId": user.id,
        "messageId": "<welcome@uni.edu>",
        "from": "registrar@uni.edu",
        "fromName": "Registrar",
        "to": "a@uni.edu",
        "subject": "Welcome to the semester",
        "body": "Classes start Monday.",
        "received": "2024-03-01T09:00:00Z",
        "categories": ["Administration"],
        "attachments": [{"name": "calendar.pdf", "type": "application/pdf", "size": 1024}],
    }
