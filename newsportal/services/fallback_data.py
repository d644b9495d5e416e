"""
公共列表的内置示例数据。
仅在 CONTENT_FALLBACK_ENABLED 打开且数据库查询失败时使用，保证前台列表页不出现硬错误。
"""
from datetime import datetime

_AUTHOR = {'id': 'mock-author', 'name': '系统管理员'}

_CATEGORIES = [
    {'id': 'cat-tech', 'slug': 'technology', 'names': {'zh': '科技', 'en': 'Technology'}, 'articleCount': 12},
    {'id': 'cat-business', 'slug': 'business', 'names': {'zh': '商业', 'en': 'Business'}, 'articleCount': 8},
    {'id': 'cat-politics', 'slug': 'politics', 'names': {'zh': '政治', 'en': 'Politics'}, 'articleCount': 10},
]

_ARTICLES = [
    {
        'id': 'mock-1',
        'slug': 'ai-revolution-2024',
        'featured': True,
        'category': 'cat-tech',
        'locales': {
            'zh': ('人工智能革命：2024 年的技术突破',
                   '全球范围内的人工智能创新正加速发展，改变各行业格局',
                   '人工智能在 2024 年取得了突破性进展'),
            'en': ('AI Revolution: Breakthroughs in 2024',
                   'Accelerating AI innovation is transforming industries worldwide',
                   'AI achieved groundbreaking progress in 2024'),
        },
    },
    {
        'id': 'mock-2',
        'slug': 'global-economy-trends',
        'featured': False,
        'category': 'cat-business',
        'locales': {
            'zh': ('全球经济趋势：新兴市场崛起',
                   '新兴市场正在驱动全球经济增长的新引擎',
                   '全球经济趋势分析'),
            'en': ('Global Economy Trends: Rise of Emerging Markets',
                   'Emerging markets are driving a new wave of global growth',
                   'Analysis of global economic trends'),
        },
    },
]


def _category(cat, language, with_count=False):
    data = {
        'id': cat['id'],
        'slug': cat['slug'],
        'locales': [{'language': language, 'name': cat['names'][language]}],
    }
    if with_count:
        data['articleCount'] = cat['articleCount']
    return data


def mock_articles(language):
    now = datetime.utcnow().isoformat()
    categories = {cat['id']: cat for cat in _CATEGORIES}
    items = []
    for index, raw in enumerate(_ARTICLES, start=1):
        title, excerpt, meta = raw['locales'][language]
        items.append({
            'id': raw['id'],
            'slug': raw['slug'],
            'status': 'PUBLISHED',
            'featured': raw['featured'],
            'createdAt': now,
            'updatedAt': now,
            'publishedAt': now,
            'authorId': _AUTHOR['id'],
            'locales': [{
                'id': f'mock-locale-{language}-{index}',
                'language': language,
                'title': title,
                'excerpt': excerpt,
                'metaDescription': meta,
            }],
            'categories': [_category(categories[raw['category']], language)],
            'author': dict(_AUTHOR),
        })
    return items


def mock_categories(language, with_count=False):
    return [_category(cat, language, with_count) for cat in _CATEGORIES]
