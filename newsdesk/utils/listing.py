"""
In-memory filtering, sorting and pagination for admin tables and search results.
Everything here works on lists of row dicts that were already fetched in full.
"""
import math
from collections import namedtuple
from datetime import datetime

from newsdesk.utils.text import parse_datetime

ALL = 'all'
ARTICLE_SORT_FIELDS = ('title', 'status', 'published_at', 'views', 'created_at')
DATE_FIELDS = ('published_at', 'created_at')
SEARCH_SORTS = ('relevance', 'newest', 'popular')

Page = namedtuple('Page', 'items page per_page total pages')


def _matches(value, wanted):
    return wanted == ALL or str(value) == str(wanted)


def filter_articles(articles, search='', status=ALL, category=ALL, author=ALL):
    """Search hits title or excerpt, case-insensitive. An 'all' value switches that filter off."""
    term = (search or '').strip().lower()
    result = []
    for article in articles:
        if term and term not in (article.get('title') or '').lower() \
                and term not in (article.get('excerpt') or '').lower():
            continue
        if not _matches(article.get('status'), status or ALL):
            continue
        if not _matches(article.get('category_id'), category or ALL):
            continue
        if not _matches(article.get('author_id'), author or ALL):
            continue
        result.append(article)
    return result


def _timestamp(value):
    dt = parse_datetime(value)
    return (dt - datetime(1970, 1, 1)).total_seconds() if dt else 0


def _sort_key(field):
    if field in DATE_FIELDS:
        return lambda a: _timestamp(a.get(field))
    if field == 'views':
        return lambda a: a.get('views') or 0
    return lambda a: a.get(field) or ''


def sort_articles(articles, field='created_at', order='desc'):
    if field not in ARTICLE_SORT_FIELDS:
        field = 'created_at'
    return sorted(articles, key=_sort_key(field), reverse=(order != 'asc'))


def sort_search_results(articles, sort_by='relevance'):
    """'relevance' keeps the store's order"""
    if sort_by == 'newest':
        return sorted(articles, key=_sort_key('published_at'), reverse=True)
    if sort_by == 'popular':
        return sorted(articles, key=_sort_key('views'), reverse=True)
    return list(articles)


def paginate(items, page=1, per_page=10):
    total = len(items)
    pages = math.ceil(total / per_page) if per_page else 0
    page = max(page or 1, 1)
    start = (page - 1) * per_page
    return Page(items[start:start + per_page], page, per_page, total, pages)


def page_window(current, total_pages, max_visible=5):
    """Page numbers to show around the current page"""
    half = max_visible // 2
    start = max(1, current - half)
    end = min(total_pages, start + max_visible - 1)
    if end - start < max_visible - 1:
        start = max(1, end - max_visible + 1)
    return list(range(start, end + 1))


def filter_comments(comments, status=ALL):
    return [c for c in comments if _matches(c.get('status'), status or ALL)]


def comment_stats(comments):
    stats = {'total': len(comments), 'pending': 0, 'approved': 0, 'rejected': 0}
    for comment in comments:
        if comment.get('status') in stats:
            stats[comment['status']] += 1
    return stats


def _month_start(dt, months_back=0):
    year, month = dt.year, dt.month - months_back
    while month < 1:
        month += 12
        year -= 1
    return datetime(year, month, 1)


def compute_analytics(articles, now=None):
    """Dashboard numbers over the full article list"""
    now = now or datetime.utcnow()
    total_views = sum(a.get('views') or 0 for a in articles)
    published = [a for a in articles if a.get('status') == 'published']
    avg_views = int(total_views / len(published) + 0.5) if published else 0

    top_articles = sorted(articles, key=_sort_key('views'), reverse=True)[:5]
    recent_activity = sorted(
        articles,
        key=lambda a: _timestamp(a.get('published_at') or a.get('created_at')),
        reverse=True,
    )[:5]

    this_month, last_month = _month_start(now), _month_start(now, 1)
    published_this_month = published_last_month = 0
    for article in published:
        dt = parse_datetime(article.get('published_at'))
        if dt is None:
            continue
        if dt >= this_month:
            published_this_month += 1
        elif dt >= last_month:
            published_last_month += 1
    growth_rate = 0
    if published_last_month:
        growth_rate = round((published_this_month - published_last_month) / published_last_month * 100)

    by_status = {'draft': 0, 'published': 0, 'archived': 0}
    for article in articles:
        if article.get('status') in by_status:
            by_status[article['status']] += 1

    return {
        'total_articles': len(articles),
        'total_views': total_views,
        'avg_views': avg_views,
        'top_articles': top_articles,
        'recent_activity': recent_activity,
        'by_status': by_status,
        'published_this_month': published_this_month,
        'published_last_month': published_last_month,
        'growth_rate': growth_rate,
    }
