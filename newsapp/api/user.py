from flask import Blueprint, g
from newsapp.api.responses import json_body, success, failure
from newsapp.middleware.auth import require_auth
from newsapp.services import library

bp = Blueprint('user', __name__, url_prefix='/api/user')


@bp.route('/profile', methods=['GET'])
@require_auth
def get_profile():
    return success(user=g.user.to_dict(include_library=True))


@bp.route('/profile', methods=['PUT'])
@require_auth
def update_profile():
    data = json_body()
    user = library.update_profile(g.user, name=data.get('name'), avatar=data.get('avatar'))
    return success(user=user.to_dict())


@bp.route('/preferences', methods=['PUT'])
@require_auth
def update_preferences():
    """Partial update: only the supplied lists are replaced."""
    data = json_body()
    fields = {k: data.get(k) for k in library.PREFERENCE_FIELDS}
    library.update_preferences(g.user, **fields)
    return success(user=g.user.to_dict())


@bp.route('/change-password', methods=['PUT'])
@require_auth
def change_password():
    data = json_body()
    library.change_password(g.user, data.get('currentPassword'), data.get('newPassword'))
    return success(message='Password changed successfully')


@bp.route('/save-article', methods=['POST'])
@require_auth
def save_article():
    article_id = json_body().get('articleId')
    if not article_id:
        return failure('Article ID is required', 400)

    saved = library.save_article(g.user, article_id)
    return success(message='Article saved successfully', savedArticles=saved)


@bp.route('/save-article/<article_id>', methods=['DELETE'])
@require_auth
def remove_saved_article(article_id):
    saved = library.remove_saved_article(g.user, article_id)
    return success(message='Article removed from saved', savedArticles=saved)


@bp.route('/saved-articles', methods=['GET'])
@require_auth
def list_saved_articles():
    articles = library.saved_articles(g.user)
    return success(
        savedArticles=list(g.user.saved_articles or []),
        articles=[a.to_dict() for a in articles],
    )


@bp.route('/reading-history', methods=['POST'])
@require_auth
def add_reading_history():
    article_id = json_body().get('articleId')
    if not article_id:
        return failure('Article ID is required', 400)

    history = library.record_read(g.user, article_id)
    return success(message='Added to reading history', readingHistory=history)


@bp.route('/reading-history', methods=['GET'])
@require_auth
def get_reading_history():
    return success(readingHistory=list(g.user.reading_history or []))
