"""
Newsroom data-access layer
Every call issues its query through the app's backend and returns a QueryResult(data, error).
Errors stay opaque strings; screens decide how to show them.
"""
from datetime import datetime

from flask import current_app
from werkzeug.local import LocalProxy

from newsdesk.extensions import cache
from newsdesk.models import ARTICLE_STATUSES, AUTHOR_ROLES
from newsdesk.services.backend import ROW_NOT_FOUND, QueryResult
from newsdesk.utils.file_helper import allowed_image, file_size, format_size, unique_filename
from newsdesk.utils.text import create_slug, extract_tags, parse_datetime, parse_tags

EXTENSION_KEY = 'newsdesk.content'
ARTICLE_EXPAND = ('author', 'category')
SEARCH_COLUMNS = ('title', 'content', 'excerpt')
SETTINGS_CACHE_KEY = 'newsdesk:site_settings'

# Allowed moderation moves; nothing goes back to pending
COMMENT_TRANSITIONS = {
    'pending': {'approved', 'rejected'},
    'approved': {'rejected'},
    'rejected': {'approved'},
}

DEFAULT_SETTINGS = {
    'site_name': 'Newsdesk',
    'site_description': 'Independent news, every day',
    'site_url': 'http://localhost:5000',
    'contact_email': 'contact@example.com',
    'admin_email': 'admin@example.com',
    'comments_enabled': True,
    'registration_enabled': False,
    'maintenance_mode': False,
    'analytics_enabled': True,
    'email_notifications': True,
}


def transition_allowed(current, new):
    return new in COMMENT_TRANSITIONS.get(current, ())


def _optional_id(value):
    if value in (None, '', 'none', 0, '0'):
        return None
    return int(value)


class ContentService:
    """Articles, categories, authors, comments, the image bucket and site settings"""

    def __init__(self, backend):
        self.backend = backend

    def _table(self, name):
        return self.backend.table(name)

    # ---- articles -------------------------------------------------------

    def get_articles(self, limit=None, offset=0, category=None):
        """Published feed, newest first; `category` is a category slug"""
        query = self._table('articles').select(*ARTICLE_EXPAND) \
            .eq('status', 'published') \
            .order('published_at', desc=True)

        if category:
            found = self._table('categories').eq('slug', category).single()
            if found.ok:
                query = query.eq('category_id', found.data['id'])

        if limit:
            query = query.limit(limit)
            if offset:
                query = query.range(offset, offset + limit - 1)
        return query.execute()

    def get_article_by_slug(self, slug, count_view=True):
        """Published article; a successful read also counts a view unless told not to"""
        result = self._table('articles').select(*ARTICLE_EXPAND) \
            .eq('slug', slug) \
            .eq('status', 'published') \
            .single()
        if result.ok and count_view:
            self._record_view(result.data['id'])
        return result

    def _record_view(self, article_id):
        # Best effort: a lost view is not worth failing the page for
        counted = self._table('articles').eq('id', article_id).increment('views')
        if not counted.ok:
            current_app.logger.warning(f'View increment for article {article_id} dropped: {counted.error}')

    def get_article_by_id(self, article_id):
        return self._table('articles').select(*ARTICLE_EXPAND).eq('id', article_id).single()

    def search_articles(self, term):
        term = (term or '').strip()
        if not term:
            return QueryResult([])
        return self._table('articles').select(*ARTICLE_EXPAND) \
            .text_search(SEARCH_COLUMNS, term) \
            .eq('status', 'published') \
            .order('published_at', desc=True) \
            .execute()

    def get_admin_articles(self):
        """Every status, newest created first"""
        return self._table('articles').select(*ARTICLE_EXPAND) \
            .order('created_at', desc=True) \
            .execute()

    def _article_values(self, values, current=None):
        values = dict(values)
        current = current or {}

        if 'title' in values:
            values['title'] = (values['title'] or '').strip()
        if not values.get('slug'):
            if 'slug' in values or not current:
                values['slug'] = create_slug(values.get('title') or current.get('title'))
        else:
            values['slug'] = create_slug(values['slug'])
        if 'tags' in values:
            values['tags'] = parse_tags(values['tags'])
        for key in ('category_id', 'author_id'):
            if key in values:
                try:
                    values[key] = _optional_id(values[key])
                except (TypeError, ValueError):
                    return None, 'Invalid category or author'

        status = values.get('status', current.get('status', 'draft'))
        if status not in ARTICLE_STATUSES:
            return None, f'Invalid article status: {status}'
        values['status'] = status

        if 'published_at' in values:
            values['published_at'] = parse_datetime(values['published_at'])
        if status == 'published' and not values.get('published_at') and not current.get('published_at'):
            values['published_at'] = datetime.utcnow()
        return values, None

    def create_article(self, values):
        if not (values.get('title') or '').strip():
            return QueryResult(None, 'Title is required')
        values, error = self._article_values(values)
        if error:
            return QueryResult(None, error)
        if not values['slug']:
            return QueryResult(None, 'Title must contain letters or digits')
        if not values.get('tags'):
            values['tags'] = parse_tags(extract_tags(values.get('content')))
        return self._table('articles').insert(values)

    def update_article(self, article_id, values):
        current = self._table('articles').eq('id', article_id).single()
        if not current.ok:
            return current
        values, error = self._article_values(values, current.data)
        if error:
            return QueryResult(None, error)
        return self._table('articles').select(*ARTICLE_EXPAND).eq('id', article_id).update(values)

    def delete_article(self, article_id):
        return self._table('articles').eq('id', article_id).delete()

    # ---- categories -----------------------------------------------------

    def get_categories(self):
        return self._table('categories').order('name').execute()

    def get_category(self, category_id):
        return self._table('categories').eq('id', category_id).single()

    def get_category_by_slug(self, slug):
        return self._table('categories').eq('slug', slug).single()

    def create_category(self, values):
        values = dict(values)
        values['slug'] = create_slug(values.get('slug') or values.get('name'))
        if not values['slug']:
            return QueryResult(None, 'Category name is required')
        return self._table('categories').insert(values)

    def update_category(self, category_id, values):
        values = dict(values)
        if 'slug' in values:
            values['slug'] = create_slug(values['slug'] or values.get('name'))
        return self._table('categories').eq('id', category_id).update(values)

    def delete_category(self, category_id):
        return self._table('categories').eq('id', category_id).delete()

    # ---- authors --------------------------------------------------------

    def get_authors(self):
        return self._table('authors').order('name').execute()

    def _author_values(self, values):
        values = {k: v for k, v in values.items() if not (k == 'password' and not v)}
        if 'email' in values:
            values['email'] = (values['email'] or '').strip().lower()
        if 'role' in values and values['role'] not in AUTHOR_ROLES:
            return None, f"Invalid role: {values['role']}"
        return values, None

    def create_author(self, values):
        values, error = self._author_values(values)
        if error:
            return QueryResult(None, error)
        if not values.get('email') or not values.get('name'):
            return QueryResult(None, 'Name and email are required')
        return self._table('authors').insert(values)

    def update_author(self, author_id, values):
        values, error = self._author_values(values)
        if error:
            return QueryResult(None, error)
        return self._table('authors').eq('id', author_id).update(values)

    def delete_author(self, author_id):
        return self._table('authors').eq('id', author_id).delete()

    # ---- comments -------------------------------------------------------

    def get_comments(self, article_id):
        """Approved comments of one article, newest first"""
        return self._table('comments') \
            .eq('article_id', article_id) \
            .eq('status', 'approved') \
            .order('created_at', desc=True) \
            .execute()

    def add_comment(self, article_id, name, email, content, parent_id=None):
        """New comments wait for moderation"""
        if parent_id:
            parent = self._table('comments').eq('id', parent_id).single()
            if not parent.ok:
                return parent
            if parent.data['article_id'] != article_id:
                return QueryResult(None, 'Reply belongs to another article')
        return self._table('comments').insert({
            'article_id': article_id,
            'parent_id': parent_id or None,
            'name': name,
            'email': email,
            'content': content,
            'status': 'pending',
        })

    def get_admin_comments(self):
        return self._table('comments').select('article') \
            .order('created_at', desc=True) \
            .execute()

    def moderate_comment(self, comment_id, status):
        current = self._table('comments').eq('id', comment_id).single()
        if not current.ok:
            return current
        if not transition_allowed(current.data['status'], status):
            return QueryResult(None, f"Cannot move a comment from {current.data['status']} to {status}")
        return self._table('comments').eq('id', comment_id).update({'status': status})

    def delete_comment(self, comment_id):
        return self._table('comments').eq('id', comment_id).delete()

    # ---- image bucket ---------------------------------------------------

    def upload_image(self, file, bucket='images'):
        """Stores an image under a generated name and returns its public URL"""
        if not file or not file.filename:
            return QueryResult(None, 'No file selected')
        if not allowed_image(file.filename):
            return QueryResult(None, 'Invalid file type')
        max_size = current_app.config['MAX_IMAGE_SIZE']
        if file_size(file) > max_size:
            return QueryResult(None, f"File size must be less than {format_size(max_size)}")

        storage = self.backend.storage(bucket)
        name = unique_filename(file.filename)
        stored = storage.upload(name, file)
        if not stored.ok:
            return stored
        return QueryResult({'public_url': storage.public_url(name), 'path': stored.data['path']})

    # ---- settings -------------------------------------------------------

    def get_settings(self):
        settings = cache.get(SETTINGS_CACHE_KEY)
        if settings is not None:
            return QueryResult(settings)
        result = self._table('site_settings').execute()
        if not result.ok:
            return QueryResult(dict(DEFAULT_SETTINGS), result.error)
        settings = dict(DEFAULT_SETTINGS)
        settings.update({row['key']: row['value'] for row in result.data if row['key'] in DEFAULT_SETTINGS})
        cache.set(SETTINGS_CACHE_KEY, settings)
        return QueryResult(settings)

    def save_settings(self, values):
        for key, value in values.items():
            if key not in DEFAULT_SETTINGS:
                continue
            result = self._table('site_settings').eq('key', key).update({'value': value})
            if result.error == ROW_NOT_FOUND:
                result = self._table('site_settings').insert({'key': key, 'value': value})
            if not result.ok:
                return result
        cache.delete(SETTINGS_CACHE_KEY)
        return self.get_settings()


def init_content_service(app, backend):
    app.extensions[EXTENSION_KEY] = ContentService(backend)


content_service = LocalProxy(lambda: current_app.extensions[EXTENSION_KEY])
