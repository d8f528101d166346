import pytest

from newsdesk import create_app
from newsdesk.extensions import db
from newsdesk.services.content_service import content_service

PASSWORD = 'secret123'


@pytest.fixture
def app(tmp_path):
    app = create_app('testing', {'UPLOAD_FOLDER': str(tmp_path / 'uploads')})
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def mock_app(tmp_path):
    """App whose database URL never got filled in"""
    return create_app('testing', {'SQLALCHEMY_DATABASE_URI': 'undefined',
                                  'UPLOAD_FOLDER': str(tmp_path / 'uploads')})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """Request context for calling services directly"""
    with app.test_request_context():
        yield app


@pytest.fixture
def make_author(app):
    def _make(email='writer@example.com', role='author', name='Test Writer', password=PASSWORD):
        with app.test_request_context():
            result = content_service.create_author(
                {'name': name, 'email': email, 'role': role, 'password': password})
        assert result.ok, result.error
        return result.data
    return _make


@pytest.fixture
def make_article(app):
    def _make(title='Budget Passes After Long Debate', status='published', **values):
        with app.test_request_context():
            result = content_service.create_article(
                dict({'title': title, 'content': 'Body of the story', 'status': status}, **values))
        assert result.ok, result.error
        return result.data
    return _make


@pytest.fixture
def login(client):
    def _login(email, password=PASSWORD, remember=False, **query):
        data = {'email': email, 'password': password}
        if remember:
            data['remember_me'] = 'y'
        return client.post('/admin/login', query_string=query, data=data)
    return _login


@pytest.fixture
def admin_client(client, make_author, login):
    make_author('editor@example.com', role='admin', name='Chief Editor')
    response = login('editor@example.com')
    assert response.status_code == 302
    return client
