import click
import random
from datetime import datetime, timedelta
from flask import current_app
from flask.cli import with_appcontext
from newsportal.extensions import db
from newsportal.models.auth import User, UserRole
from newsportal.models.content import Article, ArticleLocale, ArticleStatus, Category, CategoryLocale
from newsportal.models.sys import SiteSetting
from newsportal.utils.fake_gen import fake, fake_en
from newsportal.utils.text import slugify

SEED_CATEGORIES = [
    ('technology', '科技', 'Technology'),
    ('business', '商业', 'Business'),
    ('politics', '政治', 'Politics'),
    ('sports', '体育', 'Sports'),
    ('entertainment', '娱乐', 'Entertainment'),
]

# (slug, featured, category slug, {language: (title, excerpt, content)})
SEED_ARTICLES = [
    ('ai-revolution-2024', True, 'technology', {
        'zh': ('人工智能革命：2024 年的技术突破与未来展望',
               '回顾 2024 年人工智能领域的关键进展：大模型演进与多模态能力。',
               '# 人工智能革命\n\n大型语言模型在推理与生成上持续进步，多模态系统已能同时处理文本、图像与音频。'),
        'en': ('AI Revolution: Breakthroughs and Outlook in 2024',
               'A look at the key AI advances of 2024: evolving language models and multimodal systems.',
               '# AI Revolution\n\nLanguage models keep improving at reasoning and generation, '
               'and multimodal systems now handle text, images and audio together.'),
    }),
    ('global-economy-trends', False, 'business', {
        'zh': ('2024 年全球经济趋势：挑战与机遇并存',
               '数字化转型与绿色经济正在重塑全球增长格局。',
               '# 全球经济趋势\n\n企业数字化转型明显提速，各国持续加大对绿色技术的投入。'),
        'en': ('Global Economic Trends 2024: Challenges and Opportunities',
               'Digital transformation and the green economy are reshaping global growth.',
               '# Global Economic Trends\n\nDigital transformation has accelerated '
               'and investment in green technology keeps rising.'),
    }),
]


@click.command('init-db')
@click.option('--drop', is_flag=True, help='先删除所有表再重建')
@with_appcontext
def init_db(drop):
    """创建数据库表"""
    if drop:
        click.confirm('这将删除数据库中的全部数据，确定继续吗？', abort=True)
        db.drop_all()
    db.create_all()
    click.echo(click.style('✔ 数据库表已就绪', fg='green'))


@click.command('seed')
@with_appcontext
def seed():
    """写入管理员账号、基础分类、示例文章与站点设置（可重复执行）"""
    admin = ensure_admin()
    categories = ensure_categories()
    created = ensure_sample_articles(admin, categories)
    ensure_settings()
    db.session.commit()
    click.echo(click.style('✔ 基础数据写入完成', fg='green'))
    click.echo(f"管理员账号: {admin.email} / 分类: {', '.join(c.slug for c in categories)}")
    click.echo(f"新增示例文章: {created}")


@click.command('forge')
@click.option('--count', default=20, help='生成的演示文章数量 (默认20)')
@with_appcontext
def forge(count):
    """
    生成演示数据：基础数据 + 随机中英文文章。
    警告：这将清除数据库中的现有数据！
    """
    click.echo(click.style(f'⚡ 正在生成演示数据 ({count} 篇文章)...', fg='cyan', bold=True))

    db.drop_all()
    db.create_all()

    admin = ensure_admin()
    categories = ensure_categories()
    ensure_settings()

    editors = []
    for i in range(3):
        u = User(
            email=f'editor{i}@news.com',
            name=fake.name(),
            role=random.choice([UserRole.EDITOR, UserRole.CONTRIBUTOR])
        )
        db.session.add(u)
        editors.append(u)
    db.session.commit()

    authors = [admin] + editors
    now = datetime.utcnow()
    for i in range(count):
        headline = fake.news_headline()
        status = random.choice([ArticleStatus.PUBLISHED, ArticleStatus.PUBLISHED, ArticleStatus.DRAFT])
        created = now - timedelta(days=random.randint(0, 360))
        article = Article(
            slug=f"{slugify(headline['en'])}-{i + 1}",
            status=status,
            featured=random.random() < 0.2,
            published_at=created if status == ArticleStatus.PUBLISHED else None,
            author=random.choice(authors),
            created_at=created,
            updated_at=created,
        )
        article.locales = [
            ArticleLocale(language='zh', title=headline['zh'],
                          content='\n\n'.join(fake.paragraphs(nb=3)),
                          excerpt=fake.sentence()),
            ArticleLocale(language='en', title=headline['en'],
                          content='\n\n'.join(fake_en.paragraphs(nb=3)),
                          excerpt=fake_en.sentence()),
        ]
        article.categories = random.sample(categories, k=random.randint(1, 2))
        db.session.add(article)

    db.session.commit()
    click.echo(click.style('✔ 演示数据构建完成！', fg='green', bold=True))
    click.echo(f"管理员账号: {admin.email} / 密码见 ADMIN_PASSWORD 配置")


@click.command('status')
@with_appcontext
def status():
    """查看当前数据库中的数据统计"""
    click.echo(click.style('📊 新闻门户数据库状态:', fg='cyan', bold=True))

    try:
        a_count = Article.query.count()
        p_count = Article.query.filter_by(status=ArticleStatus.PUBLISHED).count()
        c_count = Category.query.count()
        u_count = User.query.count()

        click.echo(f" - 文章 (Articles): \t{a_count}")
        click.echo(f" - 已发布 (Published): \t{p_count}")
        click.echo(f" - 分类 (Categories): \t{c_count}")
        click.echo(f" - 用户 (Users): \t{u_count}")

        if a_count > 0:
            click.echo(click.style('✔ 数据库连接正常，数据已存在。', fg='green'))
        else:
            click.echo(click.style('⚠ 暂无文章，可运行 flask forge 生成演示数据。', fg='yellow'))

    except Exception as e:
        click.echo(click.style(f'✘ 数据库读取失败: {str(e)}', fg='red'))
        click.echo("请检查是否执行了 'flask init-db' 或 'flask db upgrade'")


def ensure_admin():
    email = current_app.config['ADMIN_EMAIL'].strip().lower()
    admin = User.query.filter_by(email=email).first()
    if admin is None:
        admin = User(email=email, name=current_app.config['ADMIN_NAME'], role=UserRole.ADMIN)
        db.session.add(admin)
        db.session.flush()
    return admin


def ensure_categories():
    categories = []
    for slug, zh_name, en_name in SEED_CATEGORIES:
        category = Category.query.filter_by(slug=slug).first()
        if category is None:
            category = Category(slug=slug)
            category.locales = [
                CategoryLocale(language='zh', name=zh_name),
                CategoryLocale(language='en', name=en_name),
            ]
            db.session.add(category)
        categories.append(category)
    db.session.flush()
    return categories


def ensure_settings():
    if db.session.get(SiteSetting, SiteSetting.SINGLETON_ID) is None:
        defaults = SiteSetting.DEFAULTS
        db.session.add(SiteSetting(
            id=SiteSetting.SINGLETON_ID,
            site_name=defaults['siteName'],
            default_language=defaults['defaultLanguage'],
            theme=defaults['theme'],
        ))


def ensure_sample_articles(author, categories):
    """写入两篇已发布的双语示例文章，已存在的 slug 跳过"""
    by_slug = {c.slug: c for c in categories}
    created = 0
    for slug, featured, category_slug, locales in SEED_ARTICLES:
        if Article.query.filter_by(slug=slug).first() is not None:
            continue
        article = Article(
            slug=slug,
            status=ArticleStatus.PUBLISHED,
            featured=featured,
            published_at=datetime.utcnow(),
            author=author,
        )
        article.locales = [
            ArticleLocale(language=language, title=title, excerpt=excerpt, content=content)
            for language, (title, excerpt, content) in locales.items()
        ]
        article.categories = [by_slug[category_slug]]
        db.session.add(article)
        created += 1
    return created
