import os
import random
import sys
import pytest

# Ensure the backend root (containing the `mathemix` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from mathemix import create_app, socketio
from mathemix.services.games.coordinator import RoomCoordinator
from mathemix.services.games.questions import QuestionBank
from mathemix.services.games.store import RoomStore

# One question per category keeps every draw predictable
FIXTURE_CORPUS = {
    'Number & Algebra': [{'definition': 'Six times seven.', 'answer': '42'}],
    'Geometry & Measurement': [{'definition': 'A square on a map grid.', 'answer': 'AB 12'}],
    'Vocabulary': [{'definition': 'Divisible only by 1 and itself.', 'answer': 'PRIME'}],
}


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    DEFAULT_CATEGORY = 'Number & Algebra'
    LOG_LEVEL = 'DEBUG'


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def question_bank():
    return QuestionBank(FIXTURE_CORPUS, rng=random.Random(0))


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def coordinator(question_bank, clock):
    return RoomCoordinator(RoomStore(), question_bank, default_category='Number & Algebra', clock=clock)


@pytest.fixture()
def flask_app(question_bank):
    application = create_app(TestConfig, questions=question_bank)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()
