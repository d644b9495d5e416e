from newsportal.extensions import cache
from newsportal.models.auth import User, UserRole
from newsportal.services.settings_service import CACHE_KEY


def test_users_require_admin(client, make_user, headers_for):
    editor = make_user('editor@news.com')
    resp = client.get('/api/users', headers=headers_for(editor))
    assert resp.status_code == 403
    assert resp.get_json()['error'] == 'Forbidden'

    resp = client.post('/api/users', json={'email': 'x@news.com'}, headers=headers_for(editor))
    assert resp.status_code == 403


def test_token_role_is_not_trusted(client, make_user, headers_for):
    # 令牌声明为 ADMIN，但数据库中的角色才是权限依据
    editor = make_user('editor@news.com')
    editor.role = UserRole.ADMIN
    headers = headers_for(editor)

    assert client.get('/api/users', headers=headers).status_code == 403


def test_list_users_with_published_counts(client, admin_headers, make_user, headers_for, create_article):
    editor = make_user('editor@news.com', name='Writer')
    create_article('one', status='PUBLISHED', headers=headers_for(editor))
    create_article('two', headers=headers_for(editor))

    data = client.get('/api/users', headers=admin_headers).get_json()['data']
    assert data['pagination']['totalCount'] == 2
    counts = {u['email']: u['publishedArticles'] for u in data['users']}
    assert counts['editor@news.com'] == 1

    data = client.get('/api/users?search=WRITER', headers=admin_headers).get_json()['data']
    assert [u['email'] for u in data['users']] == ['editor@news.com']

    data = client.get('/api/users?role=ADMIN', headers=admin_headers).get_json()['data']
    assert all(u['role'] == 'ADMIN' for u in data['users'])


def test_create_user(client, admin_headers):
    resp = client.post('/api/users', json={'email': 'New@News.com', 'name': 'New'}, headers=admin_headers)
    assert resp.status_code == 201
    data = resp.get_json()['data']
    assert data['email'] == 'new@news.com'
    assert data['role'] == UserRole.EDITOR

    resp = client.post('/api/users', json={'email': 'new@news.com'}, headers=admin_headers)
    assert resp.status_code == 409

    resp = client.post('/api/users', json={'email': 'not-an-email'}, headers=admin_headers)
    assert resp.status_code == 400

    resp = client.post('/api/users', json={'email': 'r@news.com', 'role': 'OWNER'}, headers=admin_headers)
    assert resp.status_code == 400


def test_create_user_rejects_malformed_email(app, client, admin_headers):
    for email in ('a..b@news.com', 'editor@news..com', 'x@-bad-.com', 'two@@news.com'):
        resp = client.post('/api/users', json={'email': email}, headers=admin_headers)
        assert resp.status_code == 400, email
        assert resp.get_json()['success'] is False

    with app.app_context():
        assert User.query.filter(User.email != app.config['ADMIN_EMAIL']).count() == 0


def test_settings_defaults_and_update(app, client, admin_headers):
    data = client.get('/api/settings', headers=admin_headers).get_json()['data']
    assert data['siteName'] == 'News Portal'
    assert data['defaultLanguage'] == 'zh'
    assert data['theme'] == 'light'

    resp = client.put('/api/settings', json={
        'siteName': 'Daily', 'defaultLanguage': 'en', 'theme': 'dark'
    }, headers=admin_headers)
    assert resp.status_code == 200
    with app.app_context():
        assert cache.get(CACHE_KEY) is None

    data = client.get('/api/settings', headers=admin_headers).get_json()['data']
    assert (data['siteName'], data['defaultLanguage'], data['theme']) == ('Daily', 'en', 'dark')
    with app.app_context():
        assert cache.get(CACHE_KEY)['siteName'] == 'Daily'


def test_settings_validation(client, admin_headers):
    resp = client.put('/api/settings', json={'siteName': 'x'}, headers=admin_headers)
    assert resp.status_code == 400

    resp = client.put('/api/settings', json={
        'siteName': 'x', 'defaultLanguage': 'fr', 'theme': 'light'
    }, headers=admin_headers)
    assert resp.status_code == 400

    resp = client.put('/api/settings', json={
        'siteName': 'x', 'defaultLanguage': 'zh', 'theme': 'neon'
    }, headers=admin_headers)
    assert resp.status_code == 400


def test_settings_require_admin(client, make_user, headers_for):
    editor = make_user('editor@news.com')
    assert client.get('/api/settings', headers=headers_for(editor)).status_code == 403
    assert client.put('/api/settings', json={}, headers=headers_for(editor)).status_code == 403
