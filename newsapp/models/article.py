import uuid
from datetime import datetime, timezone
from newsapp.extensions import db

CATEGORIES = (
    'Technology', 'World', 'Business', 'Science', 'Health',
    'Sports', 'Entertainment', 'Politics', 'General',
)


class Article(db.Model):
    __tablename__ = 'articles'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    external_id = db.Column(db.String(2000), nullable=False, unique=True)
    title = db.Column(db.String(500), nullable=False)
    description = db.Column(db.Text, nullable=False)
    content = db.Column(db.Text, nullable=False)
    url = db.Column(db.String(2000), nullable=False, default='')
    image_url = db.Column(db.String(2000), nullable=False, default='')
    published_at = db.Column(db.DateTime, nullable=False)
    source_name = db.Column(db.String(200), nullable=False)
    source_id = db.Column(db.String(200), nullable=False, default='')
    category = db.Column(db.Enum(*CATEGORIES, name='article_category'), nullable=False, default='General')
    author = db.Column(db.String(500), nullable=False, default='Unknown Author')
    read_time = db.Column(db.Integer, nullable=False, default=1)
    credits = db.Column(db.Integer, nullable=False, default=5)
    tags = db.Column(db.JSON, nullable=False, default=list)
    language = db.Column(db.String(10), nullable=False, default='en')
    country = db.Column(db.String(10), nullable=False, default='us')
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        db.Index('ix_articles_published', published_at.desc()),
        db.Index('ix_articles_category', 'category'),
        db.Index('ix_articles_source_name', 'source_name'),
        db.Index('ix_articles_language_country', 'language', 'country'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'externalId': self.external_id,
            'title': self.title,
            'description': self.description,
            'content': self.content,
            'url': self.url,
            'imageUrl': self.image_url,
            'publishedAt': self.published_at.isoformat() if self.published_at else None,
            'source': {'name': self.source_name, 'id': self.source_id},
            'category': self.category,
            'author': self.author,
            'readTime': self.read_time,
            'credits': self.credits,
            'tags': list(self.tags or []),
            'language': self.language,
            'country': self.country,
            'isActive': self.is_active,
        }
