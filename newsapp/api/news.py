from flask import Blueprint, request, g, current_app
from newsapp.api.responses import success, failure
from newsapp.errors import ProviderError
from newsapp.extensions import db
from newsapp.middleware.auth import require_auth
from newsapp.models.article import Article
from newsapp.services import feed
from newsapp.services.library import PREFERENCE_CATEGORIES

bp = Blueprint('news', __name__, url_prefix='/api/news')

SOURCES = [
    'BBC',
    'CNN',
    'Reuters',
    'TechCrunch',
    'The Verge',
    'Bloomberg',
    'Associated Press',
    'The Guardian',
    'New York Times',
    'Washington Post',
]


def _articles(articles, **extra):
    return success(
        count=len(articles),
        articles=[a.to_dict() for a in articles],
        **extra,
    )


def _provider_failure(error, e):
    current_app.logger.warning('%s: %s', error, e.detail)
    return failure(error, 500, e.detail)


@bp.route('', methods=['GET'])
def index():
    return success(
        message='Welcome to the News API',
        endpoints={
            'headlines': '/api/news/headlines',
            'search': '/api/news/search',
            'categories': '/api/news/categories',
            'sources': '/api/news/sources',
            'category': '/api/news/category/:category',
            'source': '/api/news/source/:source',
        },
    )


@bp.route('/headlines', methods=['GET'])
@require_auth
def headlines():
    """Top headlines shaped by the caller's preferences."""
    try:
        articles = feed.get_headlines(g.user.preferences)
    except ProviderError as e:
        return _provider_failure('Failed to fetch headlines', e)
    return _articles(articles)


@bp.route('/search', methods=['GET'])
@require_auth
def search():
    query = (request.args.get('q') or '').strip()
    if not query:
        return failure('Query parameter is required', 400)

    try:
        articles = feed.search(query, g.user.preferences)
    except ProviderError as e:
        return _provider_failure('Failed to search news', e)
    return _articles(articles, query=query)


@bp.route('/category/<category>', methods=['GET'])
@require_auth
def by_category(category):
    try:
        articles = feed.by_category(category)
    except ProviderError as e:
        return _provider_failure('Failed to fetch articles by category', e)
    return _articles(articles, category=category)


@bp.route('/source/<source>', methods=['GET'])
@require_auth
def by_source(source):
    try:
        articles = feed.by_source(source)
    except ProviderError as e:
        return _provider_failure('Failed to fetch articles by source', e)
    return _articles(articles, source=source)


@bp.route('/articles/<article_id>', methods=['GET'])
@require_auth
def get_article(article_id):
    article = db.session.get(Article, article_id)
    if not article or not article.is_active:
        return failure('Article not found', 404)
    return success(article=article.to_dict())


@bp.route('/categories', methods=['GET'])
def categories():
    return success(categories=list(PREFERENCE_CATEGORIES))


@bp.route('/sources', methods=['GET'])
def sources():
    return success(sources=SOURCES)
