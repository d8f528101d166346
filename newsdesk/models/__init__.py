# Imported in dependency order
from .base import BaseModel
from .auth import Author, AUTHOR_ROLES
from .content import Category, Article, Comment, ARTICLE_STATUSES, COMMENT_STATUSES
from .sys import SiteSetting
