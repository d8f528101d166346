import pytest

import config
from newsdesk.models import Article, Author, Category
from newsdesk.services.backend import (NOT_CONFIGURED, MockBackend, QueryResult,
                                       is_valid_database_url)


@pytest.mark.parametrize('url', [None, '', '   ', 'undefined', 'null', '${DATABASE_URL}', 'not a url'])
def test_unusable_database_urls(url):
    assert not is_valid_database_url(url)


@pytest.mark.parametrize('url', ['sqlite://', 'sqlite:///newsdesk.db', 'postgresql://news:pw@db:5432/news'])
def test_usable_database_urls(url):
    assert is_valid_database_url(url)


def test_heroku_style_url_is_rewritten(monkeypatch):
    monkeypatch.setenv('DATABASE_URL', 'postgres://news:pw@db/news')
    assert config._database_url() == 'postgresql://news:pw@db/news'


def test_sql_backend_is_picked_for_a_real_url(app):
    assert app.extensions['newsdesk.backend'].name == 'sql'


def test_mock_backend_is_picked_without_a_url(mock_app):
    assert mock_app.extensions['newsdesk.backend'].name == 'mock'
    assert mock_app.config['SQLALCHEMY_DATABASE_URI'] == 'sqlite://'


class TestMockBackend:
    backend = MockBackend()

    def test_reads_are_empty(self):
        query = self.backend.table('articles').select('author').eq('status', 'published') \
            .order('published_at', desc=True).limit(3)
        assert query.execute() == QueryResult([])
        assert query.execute().ok

    def test_everything_else_is_not_configured(self):
        table = self.backend.table('comments')
        assert table.eq('id', 1).single().error == NOT_CONFIGURED
        assert table.insert({'content': 'x'}).error == NOT_CONFIGURED
        assert table.update({'status': 'approved'}).error == NOT_CONFIGURED
        assert table.delete().error == NOT_CONFIGURED
        assert self.backend.storage('images').upload('a.png', None).error == NOT_CONFIGURED
        assert self.backend.sign_in('a@example.com', 'pw').error == NOT_CONFIGURED
        assert self.backend.load_author(1) is None

    def test_unknown_table(self):
        with pytest.raises(KeyError):
            self.backend.table('invoices')


class TestCommands:
    def test_forge_seeds_demo_content(self, app):
        result = app.test_cli_runner().invoke(args=['forge', '--articles', '8'])
        assert result.exit_code == 0, result.output
        assert 'Done' in result.output

        with app.app_context():
            assert Category.query.count() == 6
            assert Author.query.filter_by(role='admin').count() == 1
            assert 0 < Article.query.count() <= 8

    def test_create_admin_then_sign_in(self, app, client, login):
        result = app.test_cli_runner().invoke(args=['create-admin', 'Boss@Example.com', 'topsecret'])
        assert result.exit_code == 0, result.output

        with app.app_context():
            assert Author.query.filter_by(email='boss@example.com').one().role == 'admin'
        login('boss@example.com', password='topsecret')
        assert client.get('/admin/').status_code == 200

    def test_create_admin_promotes_existing_author(self, app, make_author):
        make_author('writer@example.com')
        app.test_cli_runner().invoke(args=['create-admin', 'writer@example.com', 'newpassword'])
        with app.app_context():
            writer = Author.query.filter_by(email='writer@example.com').one()
            assert writer.role == 'admin'
            assert writer.verify_password('newpassword')
            assert Author.query.count() == 1

    def test_status(self, app):
        result = app.test_cli_runner().invoke(args=['status'])
        assert 'Articles' in result.output
        assert 'flask forge' in result.output
