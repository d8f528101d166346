from newsdesk.services.content_service import content_service
from newsdesk.models import Comment


def test_home_page_lists_published_articles(client, make_article):
    make_article('Parliament approves budget')
    make_article('Hidden draft', status='draft')

    response = client.get('/')
    assert response.status_code == 200
    assert b'Parliament approves budget' in response.data
    assert b'Hidden draft' not in response.data


def test_home_page_when_empty(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b'No stories have been published yet.' in response.data


def test_article_page_renders_markdown(client, make_article):
    article = make_article('Election night', content='## Results\n**Turnout** was high <script>')

    response = client.get(f"/article/{article['slug']}")
    assert response.status_code == 200
    assert b'<h2>Results</h2>' in response.data
    assert b'<strong>Turnout</strong>' in response.data
    assert b'&lt;script&gt;' in response.data


def test_unknown_and_draft_articles_are_404(client, make_article):
    draft = make_article('Not yet', status='draft')
    assert client.get('/article/does-not-exist').status_code == 404
    assert client.get(f"/article/{draft['slug']}").status_code == 404


def test_comment_goes_to_moderation(app, client, make_article):
    article = make_article('Talking point')

    response = client.post(f"/article/{article['slug']}/comments", data={
        'name': 'Ann Reader', 'email': 'ann@example.com', 'content': 'Well argued',
    }, follow_redirects=True)
    assert response.status_code == 200
    assert b'It will appear after moderation' in response.data

    with app.app_context():
        comment = Comment.query.one()
        assert comment.status == 'pending'
        assert comment.parent_id is None


def test_reply_keeps_its_parent(app, client, make_article):
    article = make_article('Talking point')
    with app.test_request_context():
        parent = content_service.add_comment(article['id'], 'Ann', 'ann@example.com', 'Hi').data
        content_service.moderate_comment(parent['id'], 'approved')

    response = client.post(f"/article/{article['slug']}/comments", data={
        'name': 'Bob', 'email': 'bob@example.com', 'content': 'Agreed', 'parent_id': str(parent['id']),
    })
    assert response.status_code == 302

    with app.app_context():
        reply = Comment.query.filter_by(name='Bob').one()
        assert reply.parent_id == parent['id']


def test_invalid_comment_is_refused(app, client, make_article):
    article = make_article('Talking point')
    response = client.post(f"/article/{article['slug']}/comments",
                           data={'name': 'Ann', 'email': 'not-an-email', 'content': 'x'},
                           follow_redirects=True)
    assert b'Please fill in your name' in response.data
    with app.app_context():
        assert Comment.query.count() == 0


def test_approved_comments_and_replies_are_shown(app, client, make_article):
    article = make_article('Talking point')
    with app.test_request_context():
        parent = content_service.add_comment(article['id'], 'Ann', 'ann@example.com', 'Top level').data
        reply = content_service.add_comment(article['id'], 'Bob', 'bob@example.com', 'Nested reply',
                                            parent_id=parent['id']).data
        hidden = content_service.add_comment(article['id'], 'Eve', 'eve@example.com', 'Still pending').data
        content_service.moderate_comment(parent['id'], 'approved')
        content_service.moderate_comment(reply['id'], 'approved')

    response = client.get(f"/article/{article['slug']}")
    assert b'Top level' in response.data
    assert b'Nested reply' in response.data
    assert b'Still pending' not in response.data
    assert b'Comments (2)' in response.data
    assert hidden['status'] == 'pending'


def test_comments_can_be_closed(app, client, make_article):
    article = make_article('Talking point')
    with app.test_request_context():
        content_service.save_settings({'comments_enabled': False})

    response = client.post(f"/article/{article['slug']}/comments", data={
        'name': 'Ann', 'email': 'ann@example.com', 'content': 'Hello?',
    }, follow_redirects=True)
    assert b'Comments are closed.' in response.data
    with app.app_context():
        assert Comment.query.count() == 0


def test_category_page(app, client, make_article):
    with app.test_request_context():
        category = content_service.create_category({'name': 'Business', 'description': 'Markets'}).data
    make_article('Markets rally', category_id=category['id'])
    make_article('Cup final')

    response = client.get('/category/business')
    assert response.status_code == 200
    assert b'Markets rally' in response.data
    assert b'Cup final' not in response.data
    assert client.get('/category/astrology').status_code == 404


def test_search_page(client, make_article):
    make_article('Copper exports climb')
    make_article('Cup final')

    response = client.get('/search?q=copper')
    assert response.status_code == 200
    assert b'1 result for' in response.data
    assert b'Copper exports climb' in response.data

    assert b'Enter a search term' in client.get('/search').data
    assert b'Try adjusting your search' in client.get('/search?q=zzz').data


def test_maintenance_mode(app, admin_client):
    with app.test_request_context():
        content_service.save_settings({'maintenance_mode': True})

    # admin_client shares the client fixture, so use a fresh one for the reader
    assert app.test_client().get('/').status_code == 503
    api = app.test_client().get('/api/articles')
    assert api.status_code == 503
    assert api.get_json()['code'] == 503
    assert api.get_json()['success'] is False
    assert admin_client.get('/').status_code == 200


class TestApi:
    def test_articles(self, client, make_article):
        make_article('First')
        make_article('Second', status='draft')

        payload = client.get('/api/articles').get_json()
        assert payload['success'] is True
        assert payload['error'] is None
        assert [a['title'] for a in payload['data']] == ['First']
        assert payload['data'][0]['author'] is None

    def test_bad_paging_is_400(self, client):
        response = client.get('/api/articles?limit=0')
        assert response.status_code == 400
        assert response.get_json()['success'] is False
        assert response.get_json()['errors'] == {'limit': 'must be between 1 and 100'}

    def test_article_by_slug(self, client, make_article):
        article = make_article('Lead story')
        payload = client.get(f"/api/articles/{article['slug']}").get_json()
        assert payload['data']['title'] == 'Lead story'

        response = client.get('/api/articles/missing')
        assert response.status_code == 404
        assert response.get_json()['code'] == 404
        assert response.get_json()['resource'] == 'article'
        assert response.get_json()['key'] == 'missing'

    def test_search(self, client, make_article):
        make_article('Rates on hold')
        assert len(client.get('/api/search?q=rates').get_json()['data']) == 1
        assert client.get('/api/search').get_json()['data'] == []

    def test_unknown_api_path_is_json(self, client):
        response = client.get('/api/nothing-here')
        assert response.status_code == 404
        assert response.is_json


class TestMockBackend:
    """App started without a usable database URL"""

    def test_backend_choice(self, mock_app):
        assert mock_app.extensions['newsdesk.backend'].name == 'mock'

    def test_public_pages_still_render(self, mock_app):
        client = mock_app.test_client()
        assert client.get('/').status_code == 200
        assert client.get('/search?q=budget').status_code == 200
        assert client.get('/api/articles').get_json() == {'success': True, 'data': [], 'error': None}

    def test_category_page_falls_back_to_demo_content(self, mock_app):
        response = mock_app.test_client().get('/category/politics')
        assert response.status_code == 200
        assert b'Parliament Approves New Budget Framework' in response.data
        assert mock_app.test_client().get('/category/astrology').status_code == 404

    def test_sign_in_reports_missing_backend(self, mock_app):
        response = mock_app.test_client().post('/admin/login', data={
            'email': 'editor@example.com', 'password': 'secret123'})
        assert response.status_code == 401
        assert b'Backend not configured' in response.data

    def test_writes_fail_softly(self, mock_app):
        with mock_app.test_request_context():
            result = content_service.create_article({'title': 'Anything', 'content': 'x'})
            assert result.data is None
            assert result.error == 'Backend not configured'
            assert content_service.get_settings().data['site_name'] == 'Newsdesk'
