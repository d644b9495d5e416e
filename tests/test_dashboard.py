from datetime import datetime

from newsportal.extensions import db
from newsportal.models.auth import UserRole
from newsportal.models.content import Article
from newsportal.services.dashboard_service import DashboardService, months_ago
from newsportal.utils.permissions import article_scope


def test_article_scope_policy():
    assert article_scope(UserRole.ADMIN, 1) is None
    criterion = article_scope(UserRole.EDITOR, 7)
    assert criterion is not None
    assert criterion.compare(Article.author_id == 7)


def test_months_ago_clamps_day():
    assert months_ago(datetime(2024, 3, 31), 1) == datetime(2024, 2, 29)
    assert months_ago(datetime(2024, 1, 15), 12) == datetime(2023, 1, 15)


def test_stats_requires_login(client):
    assert client.get('/api/dashboard/stats').status_code == 401


def test_admin_sees_everything(client, admin_headers, make_user, headers_for, create_article,
                               create_category):
    tech = create_category('tech', '科技', 'Tech')
    editor = make_user('editor@news.com', name='Editor')
    create_article('admin-pub', status='PUBLISHED', categoryIds=[tech['id']])
    create_article('editor-pub', status='PUBLISHED', categoryIds=[tech['id']],
                   headers=headers_for(editor))
    create_article('editor-draft', headers=headers_for(editor))

    data = client.get('/api/dashboard/stats', headers=admin_headers).get_json()['data']
    assert data['overview'] == {
        'totalArticles': 3,
        'publishedArticles': 2,
        'draftArticles': 1,
        'totalCategories': 1,
    }
    assert data['categoriesWithCount'][0]['articleCount'] == 2
    assert len(data['recentActivity']) == 3
    assert sum(row['count'] for row in data['articlesByMonth']) == 3


def test_editor_sees_only_own_articles(client, admin_headers, make_user, headers_for, create_article,
                                       create_category):
    tech = create_category('tech', '科技', 'Tech')
    editor = make_user('editor@news.com', name='Editor')
    create_article('admin-pub', status='PUBLISHED', categoryIds=[tech['id']])
    create_article('editor-pub', status='PUBLISHED', categoryIds=[tech['id']],
                   headers=headers_for(editor))

    data = client.get('/api/dashboard/stats', headers=headers_for(editor)).get_json()['data']
    assert data['overview']['totalArticles'] == 1
    assert data['overview']['publishedArticles'] == 1
    assert data['categoriesWithCount'][0]['articleCount'] == 1
    assert [item['slug'] for item in data['recentActivity']] == ['editor-pub']
    assert data['recentActivity'][0]['authorName'] == 'Editor'


def test_recent_activity_title_falls_back_to_slug(app, make_user, create_article, headers_for):
    editor = make_user('writer@news.com')
    create_article('english-only', [{'language': 'en', 'title': 'Hello', 'content': 'c'}],
                   headers=headers_for(editor))

    with app.app_context():
        stats = DashboardService.get_stats(editor)
    assert stats['recentActivity'][0]['title'] == 'english-only'


def test_articles_by_month_window(app, make_user):
    editor = make_user('writer@news.com')
    now = datetime(2024, 6, 15)
    with app.app_context():
        for created in (datetime(2024, 6, 1), datetime(2024, 6, 2), datetime(2024, 1, 10),
                        datetime(2023, 1, 1)):
            db.session.add(Article(slug=f'a-{created:%Y%m%d}', author_id=editor.id,
                                   created_at=created, updated_at=created))
        db.session.commit()

        rows = DashboardService.articles_by_month(editor.role, editor.id, now=now)
    assert rows == [{'month': '2024-01', 'count': 1}, {'month': '2024-06', 'count': 2}]


def test_stats_for_unknown_session_user(client, app):
    from newsportal.services.auth_service import AuthService

    class Ghost:
        id = 404
        email = 'ghost@news.com'
        name = 'Ghost'
        role = UserRole.EDITOR

    with app.app_context():
        headers = {'Authorization': f'Bearer {AuthService.issue_token(Ghost())}'}
    resp = client.get('/api/dashboard/stats', headers=headers)
    assert resp.status_code == 404
