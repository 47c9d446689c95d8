import os
import sys
import random
import pytest

# Ensure the backend root (containing the `triviabot` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from triviabot import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    QUESTION_REFRESH_RATE = 60
    TOP_USERS_DEFAULT = 6
    SLACK_URL = 'https://slack.test'
    SLACK_API_TOKEN = ''
    SLACK_COMMAND_TOKEN = 'command-token'
    SLACK_OUTGOING_TOKEN = 'outgoing-token'
    SLACK_TIMEOUT_SEC = 1


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import triviabot.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def make_user(flask_app):
    from triviabot.models import User
    counter = {'n': 0}

    def _make(name=None, points=0):
        counter['n'] += 1
        user = User(
            external_id=f"U{counter['n']:04d}",
            display_name=name or f"Player {counter['n']}",
            points=points,
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture()
def make_question(flask_app, make_user):
    from triviabot.services.trivia.questions import create_question
    state = {'author': None}

    def _make(text='Is this a question?', answers=('Yes', 'No'), correct=1, author=None):
        if author is None:
            if state['author'] is None:
                state['author'] = make_user('Author')
            author = state['author']
        return create_question(author.id, text, list(answers), correct)

    return _make


@pytest.fixture()
def file_app(tmp_path):
    """App on a file-backed SQLite database, so threads get their own connections."""
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'trivia.db'}"

    application = create_app(FileConfig)
    with application.app_context():
        import triviabot.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()
