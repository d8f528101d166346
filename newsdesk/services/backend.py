"""
Content backend
A small chainable query builder over the newsroom tables plus the image bucket.

SqlBackend talks to the relational store through Flask-SQLAlchemy.
MockBackend keeps the site rendering without a database: reads come back empty,
writes, single-row lookups, uploads and sign-in come back with a "not configured" error.

The backend chosen for an app lives in app.extensions; callers fetch it with get_backend().
"""
import os
from typing import Any, NamedTuple, Optional

from flask import current_app, url_for
from sqlalchemy import func, or_, select, update
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import joinedload

from newsdesk.extensions import db
from newsdesk.models import Article, Author, Category, Comment, SiteSetting

EXTENSION_KEY = 'newsdesk.backend'
NOT_CONFIGURED = 'Backend not configured'
ROW_NOT_FOUND = 'Row not found'
INVALID_LOGIN = 'Invalid login credentials'

TABLES = {
    'articles': Article,
    'categories': Category,
    'authors': Author,
    'comments': Comment,
    'site_settings': SiteSetting,
}


class QueryResult(NamedTuple):
    """(data, error) pair returned by every backend call; error is an opaque string"""
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


def _failed(exc):
    db.session.rollback()
    current_app.logger.error(f'Store error: {exc}')
    return QueryResult(None, str(getattr(exc, 'orig', None) or exc))


class SqlQuery:
    """Query against one table; chain filters, then finish with a read or a mutation."""

    def __init__(self, model):
        self.model = model
        self._expand = ()
        self._criteria = []
        self._order_by = []
        self._limit = None
        self._offset = None

    def select(self, *expand):
        self._expand = expand
        return self

    def eq(self, column, value):
        self._criteria.append(getattr(self.model, column) == value)
        return self

    def order(self, column, desc=False):
        col = getattr(self.model, column)
        self._order_by.append(col.desc() if desc else col.asc())
        return self

    def limit(self, count):
        self._limit = count
        return self

    def range(self, start, end):
        """Inclusive row range, like LIMIT end-start+1 OFFSET start"""
        self._offset = start
        self._limit = end - start + 1
        return self

    def text_search(self, columns, term):
        self._criteria.append(or_(*[
            getattr(self.model, name).icontains(term, autoescape=True) for name in columns
        ]))
        return self

    def _statement(self):
        stmt = select(self.model).where(*self._criteria)
        for name in self._expand:
            stmt = stmt.options(joinedload(getattr(self.model, name)))
        if self._order_by:
            stmt = stmt.order_by(*self._order_by)
        if self._offset:
            stmt = stmt.offset(self._offset)
        if self._limit is not None:
            stmt = stmt.limit(self._limit)
        return stmt

    def _rows(self):
        return db.session.scalars(self._statement()).unique().all()

    def execute(self):
        try:
            rows = self._rows()
        except SQLAlchemyError as e:
            return _failed(e)
        return QueryResult([row.to_dict(self._expand) for row in rows])

    def single(self):
        try:
            rows = self._rows()
        except SQLAlchemyError as e:
            return _failed(e)
        if len(rows) != 1:
            return QueryResult(None, ROW_NOT_FOUND)
        return QueryResult(rows[0].to_dict(self._expand))

    def insert(self, values):
        row = self.model(**values)
        try:
            db.session.add(row)
            db.session.commit()
        except SQLAlchemyError as e:
            return _failed(e)
        return QueryResult(row.to_dict(self._expand))

    def update(self, values):
        try:
            rows = self._rows()
            if not rows:
                return QueryResult(None, ROW_NOT_FOUND)
            for row in rows:
                for key, value in values.items():
                    setattr(row, key, value)
            db.session.commit()
        except SQLAlchemyError as e:
            return _failed(e)
        return QueryResult(rows[0].to_dict(self._expand))

    def delete(self):
        # Row by row so ORM cascades (article -> comments -> replies) run
        try:
            for row in self._rows():
                db.session.delete(row)
            db.session.commit()
        except SQLAlchemyError as e:
            return _failed(e)
        return QueryResult()

    def increment(self, column):
        col = getattr(self.model, column)
        try:
            db.session.execute(update(self.model).where(*self._criteria).values({column: col + 1}))
            db.session.commit()
        except SQLAlchemyError as e:
            return _failed(e)
        return QueryResult()


class SqlStorage:
    """Bucket backed by a directory under UPLOAD_FOLDER, served by the site.media route"""

    def __init__(self, bucket):
        self.bucket = bucket

    def upload(self, filename, file):
        folder = os.path.join(current_app.config['UPLOAD_FOLDER'], self.bucket)
        try:
            os.makedirs(folder, exist_ok=True)
            file.save(os.path.join(folder, filename))
        except OSError as e:
            current_app.logger.error(f'Upload to bucket {self.bucket} failed: {e}')
            return QueryResult(None, str(e))
        return QueryResult({'path': f'{self.bucket}/{filename}'})

    def public_url(self, filename):
        return url_for('site.media', bucket=self.bucket, filename=filename)


class SqlBackend:
    name = 'sql'

    def table(self, name):
        return SqlQuery(TABLES[name])

    def storage(self, bucket):
        return SqlStorage(bucket)

    def sign_in(self, email, password):
        """Returns the Author row itself (not a dict) so it can be handed to login_user."""
        try:
            author = db.session.scalars(
                select(Author).where(func.lower(Author.email) == (email or '').strip().lower())
            ).first()
        except SQLAlchemyError as e:
            return _failed(e)
        if author is None or not author.verify_password(password):
            return QueryResult(None, INVALID_LOGIN)
        return QueryResult(author)

    def load_author(self, author_id):
        try:
            return db.session.get(Author, int(author_id))
        except (TypeError, ValueError):
            return None


class MockQuery:
    """Accepts any chain; reads succeed empty, everything else reports the missing backend."""

    def select(self, *expand):
        return self

    def eq(self, column, value):
        return self

    def order(self, column, desc=False):
        return self

    def limit(self, count):
        return self

    def range(self, start, end):
        return self

    def text_search(self, columns, term):
        return self

    def execute(self):
        return QueryResult([])

    def single(self):
        return QueryResult(None, NOT_CONFIGURED)

    def insert(self, values):
        return QueryResult(None, NOT_CONFIGURED)

    def update(self, values):
        return QueryResult(None, NOT_CONFIGURED)

    def delete(self):
        return QueryResult(None, NOT_CONFIGURED)

    def increment(self, column):
        return QueryResult()


class MockStorage:
    def __init__(self, bucket):
        self.bucket = bucket

    def upload(self, filename, file):
        return QueryResult(None, NOT_CONFIGURED)

    def public_url(self, filename):
        return ''


class MockBackend:
    name = 'mock'

    def table(self, name):
        if name not in TABLES:
            raise KeyError(name)
        return MockQuery()

    def storage(self, bucket):
        return MockStorage(bucket)

    def sign_in(self, email, password):
        return QueryResult(None, NOT_CONFIGURED)

    def load_author(self, author_id):
        return None


def is_valid_database_url(url):
    """Rejects blanks, unrendered template placeholders and anything SQLAlchemy cannot parse"""
    if not url or not isinstance(url, str) or not url.strip():
        return False
    if url in ('undefined', 'null') or url.startswith('${'):
        return False
    try:
        make_url(url)
    except (ArgumentError, ValueError):
        return False
    return True


def init_backend(app):
    """
    Pick the backend for this app. Must run before db.init_app: when the URL is unusable the
    SQL layer is pointed at a throwaway in-memory database that nothing queries.
    """
    url = app.config.get('SQLALCHEMY_DATABASE_URI')
    if is_valid_database_url(url):
        backend = SqlBackend()
        safe_url = make_url(url).render_as_string(hide_password=True)
        app.logger.info(f'✅ Content backend: SQL store at {safe_url}')
    else:
        app.logger.warning('⚠️ Missing or invalid database URL. Using the mock content backend.')
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite://'
        backend = MockBackend()
    app.extensions[EXTENSION_KEY] = backend
    return backend


def get_backend():
    return current_app.extensions[EXTENSION_KEY]
