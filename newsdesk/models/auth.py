from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from newsdesk.extensions import db
from .base import BaseModel

AUTHOR_ROLES = ('author', 'editor', 'admin')


class Author(UserMixin, BaseModel):
    """Byline and login account; `role` is the only authorization signal"""
    __tablename__ = 'authors'
    __serialize_exclude__ = ('password_hash',)

    name = db.Column(db.String(128), nullable=False, index=True)
    email = db.Column(db.String(128), unique=True, index=True, nullable=False)
    role = db.Column(db.String(16), default='author', nullable=False)
    bio = db.Column(db.Text)
    avatar_url = db.Column(db.String(512))
    password_hash = db.Column(db.String(256))

    articles = db.relationship('Article', back_populates='author')

    @property
    def password(self):
        raise AttributeError('password is not a readable attribute')

    @password.setter
    def password(self, password):
        self.password_hash = generate_password_hash(password)

    def verify_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == 'admin'

    def __repr__(self):
        return f'<Author {self.email} ({self.role})>'
