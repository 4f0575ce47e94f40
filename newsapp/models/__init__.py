from newsapp.models.article import Article, CATEGORIES  # noqa: F401
from newsapp.models.user import User, PROVIDERS  # noqa: F401
