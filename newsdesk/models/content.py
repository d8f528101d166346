from newsdesk.extensions import db
from .base import BaseModel

ARTICLE_STATUSES = ('draft', 'published', 'archived')
COMMENT_STATUSES = ('pending', 'approved', 'rejected')


class Category(BaseModel):
    """Flat article section"""
    __tablename__ = 'categories'

    name = db.Column(db.String(64), nullable=False)
    slug = db.Column(db.String(64), unique=True, index=True, nullable=False)
    color = db.Column(db.String(16), default='#6366f1')
    description = db.Column(db.Text)

    articles = db.relationship('Article', back_populates='category')

    def __repr__(self):
        return f'<Category {self.slug}>'


class Article(BaseModel):
    """News article; `content` holds the markdown source"""
    __tablename__ = 'articles'

    slug = db.Column(db.String(256), unique=True, index=True, nullable=False)
    title = db.Column(db.String(256), nullable=False)
    excerpt = db.Column(db.Text, default='')
    content = db.Column(db.Text, default='')
    featured_image = db.Column(db.String(512))
    status = db.Column(db.String(16), default='draft', index=True)  # draft, published, archived
    tags = db.Column(db.JSON, default=list)
    views = db.Column(db.Integer, default=0, nullable=False)
    published_at = db.Column(db.DateTime, index=True)

    category_id = db.Column(db.Integer, db.ForeignKey('categories.id', ondelete='SET NULL'))
    author_id = db.Column(db.Integer, db.ForeignKey('authors.id', ondelete='SET NULL'))

    category = db.relationship('Category', back_populates='articles')
    author = db.relationship('Author', back_populates='articles')
    comments = db.relationship('Comment', back_populates='article',
                               cascade='all')

    def __repr__(self):
        return f'<Article {self.slug}>'


class Comment(BaseModel):
    """Reader comment; replies point at their parent"""
    __tablename__ = 'comments'

    article_id = db.Column(db.Integer, db.ForeignKey('articles.id', ondelete='CASCADE'),
                           nullable=False, index=True)
    parent_id = db.Column(db.Integer, db.ForeignKey('comments.id', ondelete='CASCADE'))
    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(128), nullable=False)
    content = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(16), default='pending', index=True)  # pending, approved, rejected

    article = db.relationship('Article', back_populates='comments')
    replies = db.relationship('Comment', backref=db.backref('parent', remote_side='Comment.id'),
                              cascade='all')
