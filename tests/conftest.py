import pytest

from newsportal import create_app
from newsportal.extensions import db
from newsportal.models.auth import User, UserRole
from newsportal.services.auth_service import AuthService


@pytest.fixture
def app():
    # 每个请求各自推入应用上下文，测试体不持有外层上下文
    app = create_app('testing')
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_token(app):
    # 单独的客户端登录，避免 cookie 会话污染 client fixture
    resp = app.test_client().post('/api/auth/login', json={
        'email': app.config['ADMIN_EMAIL'],
        'password': app.config['ADMIN_PASSWORD'],
    })
    assert resp.status_code == 200
    return resp.get_json()['data']['token']


@pytest.fixture
def admin_headers(admin_token):
    return {'Authorization': f'Bearer {admin_token}'}


@pytest.fixture
def make_user(app):
    def _make_user(email, role=UserRole.EDITOR, name=None):
        with app.app_context():
            user = User(email=email, name=name or email.split('@')[0], role=role)
            db.session.add(user)
            db.session.commit()
            db.session.refresh(user)
            db.session.expunge(user)
        return user
    return _make_user


@pytest.fixture
def headers_for(app):
    def _headers_for(user):
        with app.app_context():
            token = AuthService.issue_token(user)
        return {'Authorization': f'Bearer {token}'}
    return _headers_for


@pytest.fixture
def create_article(client, admin_headers):
    def _create_article(slug, locales=None, headers=None, **fields):
        body = {
            'slug': slug,
            'locales': locales or [{'language': 'zh', 'title': slug, 'content': 'c'}],
        }
        body.update(fields)
        resp = client.post('/api/articles', json=body, headers=headers or admin_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()['data']
    return _create_article


@pytest.fixture
def create_category(client, admin_headers):
    def _create_category(slug, zh=None, en=None):
        locales = [{'language': 'zh', 'name': zh or slug}]
        if en:
            locales.append({'language': 'en', 'name': en})
        resp = client.post('/api/categories', json={'slug': slug, 'locales': locales},
                           headers=admin_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()['data']
    return _create_category
