"""Pytest configuration and fixtures."""

import pytest
from flask_jwt_extended import create_access_token

from skillswap import create_app, db


@pytest.fixture
def app():
    """Fresh app with an empty in-memory database."""
    app = create_app('skillswap.config.TestConfig')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    """Build bearer headers the way the identity provider's tokens look."""
    def make(user_id):
        with app.app_context():
            token = create_access_token(identity=user_id)
        return {'Authorization': f'Bearer {token}'}
    return make


@pytest.fixture
def add_skill(client, auth_headers):
    """Add a skill through the API and return the created skill."""
    def add(user_id, name, skill_type, **extra):
        payload = {'skill_name': name, 'skill_type': skill_type, **extra}
        response = client.post('/profile/skills', json=payload, headers=auth_headers(user_id))
        assert response.status_code == 201, response.get_json()
        return response.get_json()['skill']
    return add


@pytest.fixture
def socket_for(app, client, auth_headers):
    """Open Socket.IO test clients authenticated as a user, closed after the test."""
    from skillswap import socketio

    opened = []

    def connect(user_id=None, token=None):
        if token is None and user_id is not None:
            token = auth_headers(user_id)['Authorization'].split('Bearer ')[-1]
        auth = {'token': token} if token else None
        socket = socketio.test_client(app, flask_test_client=client, auth=auth)
        opened.append(socket)
        if socket.is_connected():
            socket.get_received()
        return socket

    yield connect

    for socket in opened:
        if socket.is_connected():
            socket.disconnect()
