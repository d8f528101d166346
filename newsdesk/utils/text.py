"""
Text helpers shared by forms, services and templates
"""
import re
from datetime import datetime, timezone


def create_slug(title):
    """
    URL-safe slug from a title:
    lowercase, keep only a-z, 0-9, spaces and hyphens, whitespace runs -> '-', no hyphen runs or edges.

        >>> create_slug("Mongolia's New Policy!")
        'mongolias-new-policy'
    """
    slug = (title or '').lower()
    slug = re.sub(r'[^a-z0-9 -]', '', slug)
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')


def parse_datetime(value):
    """Accepts a datetime or an ISO string; returns a naive UTC datetime or None"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        except ValueError:
            return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def format_date(value):
    """'Jan 5, 2024'"""
    dt = parse_datetime(value)
    if dt is None:
        return ''
    return f'{dt:%b} {dt.day}, {dt.year}'


def format_relative_date(value, now=None):
    dt = parse_datetime(value)
    if dt is None:
        return ''
    now = now or datetime.utcnow()
    hours = (now - dt).total_seconds() / 3600
    if hours < 1:
        return 'Just now'
    if hours < 24:
        return f'{int(hours)}h ago'
    if hours < 168:
        return f'{int(hours // 24)}d ago'
    return format_date(dt)


def truncate_text(text, max_length):
    text = text or ''
    if len(text) <= max_length:
        return text
    return text[:max_length] + '...'


def extract_tags(content):
    """#hashtags found in free text, without the '#'"""
    return re.findall(r'#([a-zA-Z0-9_]+)', content or '')


def parse_tags(value):
    """Comma-separated string (or list) -> unique, trimmed, order-preserving list"""
    if isinstance(value, str):
        value = value.split(',')
    tags = []
    for tag in value or ():
        tag = str(tag).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags
