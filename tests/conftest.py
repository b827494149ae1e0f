import os

# Must be set before the app module is imported
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['SECRET_KEY'] = 'test-secret-key'

import pytest

from app import app as flask_app
from models import db


@pytest.fixture
def app():
    flask_app.config.update(
        TESTING=True,
        ASSUMED_BODY_WEIGHT_KG=70.0,
        USE_PROFILE_WEIGHT=False,
    )
    with flask_app.app_context():
        db.drop_all()
        db.create_all()

    yield flask_app

    with flask_app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def signup(client, email='alex@example.com', password='secret123', name='Alex', **extra):
    payload = {'email': email, 'password': password, 'name': name}
    payload.update(extra)
    return client.post('/api/user/signup', json=payload)


@pytest.fixture
def auth_client(client):
    response = signup(client)
    assert response.status_code == 200
    return client
