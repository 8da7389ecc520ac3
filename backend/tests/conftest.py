import os
import sys
import pytest

# Ensure the backend root (containing the `wordgroups` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from wordgroups import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:3000']
    GROUP_CODE_LENGTH = 6
    SOLVE_TRANSACTION_RETRIES = 2
    LOG_LEVEL = 'DEBUG'


def make_puzzle_payload(difficulty='medium'):
    """Categories A-D holding words a1..a4, b1..b4, c1..c4, d1..d4."""
    colors = ['yellow', 'green', 'blue', 'purple']
    return {
        'difficulty': difficulty,
        'categories': [
            {'name': name.upper(), 'color': color, 'words': [f'{name}{i}' for i in range(1, 5)]}
            for name, color in zip('abcd', colors)
        ],
    }


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    # No app context stays pushed during a test: each test client request
    # gets its own, so the logged-in member is never shared between clients.
    with application.app_context():
        # Ensure models are imported so tables are created
        import wordgroups.models  # noqa: F401
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_context(flask_app):
    with flask_app.app_context():
        yield flask_app
        db.session.remove()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def alice(flask_app):
    """A client logged in as Alice, founder of the 'Puzzlers' group."""
    test_client = flask_app.test_client()
    res = test_client.post('/api/groups', json={'name': 'Puzzlers', 'member_name': 'Alice'})
    assert res.status_code == 201
    data = res.get_json()
    test_client.group = data['group']
    test_client.member = data['member']
    return test_client


@pytest.fixture()
def bob(flask_app, alice):
    """A second member of Alice's group."""
    test_client = flask_app.test_client()
    res = test_client.post('/api/groups/join', json={'code': alice.group['code'], 'name': 'Bob'})
    assert res.status_code == 201
    data = res.get_json()
    test_client.group = data['group']
    test_client.member = data['member']
    return test_client


@pytest.fixture()
def outsider(flask_app):
    """A member of an unrelated group."""
    test_client = flask_app.test_client()
    res = test_client.post('/api/groups', json={'name': 'Others', 'member_name': 'Olga'})
    assert res.status_code == 201
    data = res.get_json()
    test_client.group = data['group']
    test_client.member = data['member']
    return test_client


@pytest.fixture()
def puzzle(alice):
    res = alice.post(f"/api/groups/{alice.group['id']}/puzzles", json=make_puzzle_payload())
    assert res.status_code == 201
    return res.get_json()


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
