import os
import sys

# Add the parent directory (backend) to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
import sqlite3
import tempfile
from fastapi.testclient import TestClient

from main import app
from core.db_connector import create_engine_from_descriptor
from integrations.ollama_client import GenerationResult
from models.connection import ConnectionDescriptor


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def temp_sqlite_db():
    fd, path = tempfile.mkstemp(suffix=".db")
    try:
        conn = sqlite3.connect(path)
        cur = conn.cursor()
        cur.execute("CREATE TABLE Items (ItemId INTEGER PRIMARY KEY, Name TEXT NOT NULL, Quantity INTEGER);")
        cur.execute("CREATE TABLE Categories (CategoryId INTEGER PRIMARY KEY, Name TEXT NOT NULL);")
        cur.execute("CREATE TABLE AuditLog (AuditLogId INTEGER PRIMARY KEY, Detail TEXT);")
        cur.executemany(
            "INSERT INTO Items (Name, Quantity) VALUES (?, ?);",
            [("Broom", 4), ("Kettle", 2), ("Pillow", 10)],
        )
        conn.commit()
        conn.close()
        yield path
    finally:
        os.close(fd)
        os.remove(path)


@pytest.fixture
def engine(temp_sqlite_db):
    eng = create_engine_from_descriptor(ConnectionDescriptor(db_type="sqlite", file_path=temp_sqlite_db))
    yield eng
    eng.dispose()


class FakeOllama:
    """Stands in for OllamaClient; replies with a canned answer."""

    def __init__(self, reply: str = "", error: Exception = None):
        self.reply = reply
        self.error = error
        self.calls = []

    def chat(self, messages):
        self.calls.append(messages)
        if self.error:
            raise self.error
        return GenerationResult(text=self.reply, prompt_token_count=120, total_token_count=150)

    def context_window(self):
        return 8192

