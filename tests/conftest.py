import os
import sys
import pytest

# Ensure the project root (containing the `mazewalk` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from mazewalk import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MIN_GRID_SIZE = 3
    MAX_GRID_SIZE = 50
    OBSTACLE_DIVISOR = 0.33
    OBSTACLE_SAFETY_RATIO = 0.5
    MAZE_RNG_SEED = 1234
    CORS_ORIGINS = 'http://localhost:5173'
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import mazewalk.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def engine(flask_app):
    return flask_app.extensions['maze_engine']


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')


class FakeClock:
    """Deterministic clock; each call advances by ``step`` seconds."""

    def __init__(self, start, step=1.5):
        from datetime import timedelta
        self.now = start
        self.step = timedelta(seconds=step)

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture()
def fake_clock():
    from datetime import datetime
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0))
