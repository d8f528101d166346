from datetime import datetime, timedelta

import pytest

from newsdesk.utils.comments import build_comment_tree, count_comments
from newsdesk.utils.markdown import markdown_to_html
from newsdesk.utils.text import (create_slug, extract_tags, format_date, format_relative_date,
                                 parse_datetime, parse_tags, truncate_text)


@pytest.mark.parametrize('title, slug', [
    ("Mongolia's New Policy!", 'mongolias-new-policy'),
    ('  Hello   World  ', 'hello-world'),
    ('A -- B', 'a-b'),
    ('Covid-19 Update: 2024', 'covid-19-update-2024'),
    ('!!!', ''),
])
def test_create_slug(title, slug):
    assert create_slug(title) == slug


def test_slug_output_is_url_safe():
    slug = create_slug('Ünïcode & Symbols -- Everywhere?!')
    assert slug == create_slug(slug)
    assert not slug.startswith('-') and not slug.endswith('-')
    assert '--' not in slug


def test_parse_datetime_accepts_iso_and_utc_suffix():
    assert parse_datetime('2024-01-05T10:00:00Z') == datetime(2024, 1, 5, 10, 0)
    assert parse_datetime('2024-01-05T12:00:00+02:00') == datetime(2024, 1, 5, 10, 0)
    assert parse_datetime('not a date') is None
    assert parse_datetime(None) is None


def test_format_date():
    assert format_date('2024-01-05T10:00:00') == 'Jan 5, 2024'
    assert format_date(None) == ''


def test_format_relative_date():
    now = datetime(2024, 1, 20, 12, 0)
    assert format_relative_date(now - timedelta(minutes=30), now) == 'Just now'
    assert format_relative_date(now - timedelta(hours=5), now) == '5h ago'
    assert format_relative_date(now - timedelta(days=3), now) == '3d ago'
    assert format_relative_date(datetime(2024, 1, 5), now) == 'Jan 5, 2024'


def test_truncate_text():
    assert truncate_text('short', 10) == 'short'
    assert truncate_text('abcdef', 3) == 'abc...'
    assert truncate_text(None, 3) == ''


def test_tags():
    assert extract_tags('Big win for #sports and #local_news today') == ['sports', 'local_news']
    assert parse_tags(' economy, rates ,economy,, ') == ['economy', 'rates']
    assert parse_tags(['a', ' b ']) == ['a', 'b']


class TestMarkdown:
    def test_headers_bold_and_breaks(self):
        assert markdown_to_html('# Title\n**bold**') == '<h1>Title</h1><br><strong>bold</strong>'

    def test_header_levels(self):
        assert markdown_to_html('### Small') == '<h3>Small</h3>'
        assert markdown_to_html('## Medium') == '<h2>Medium</h2>'

    def test_italic(self):
        assert markdown_to_html('an *aside*') == 'an <em>aside</em>'

    def test_html_is_escaped(self):
        html = markdown_to_html('<script>alert(1)</script> **hi**')
        assert '<script>' not in html
        assert '&lt;script&gt;' in html
        assert '<strong>hi</strong>' in html

    def test_empty(self):
        assert markdown_to_html(None) == ''


class TestCommentTree:
    rows = [
        {'id': 1, 'parent_id': None, 'content': 'first'},
        {'id': 2, 'parent_id': 1, 'content': 'reply'},
        {'id': 3, 'parent_id': 2, 'content': 'reply to reply'},
        {'id': 4, 'parent_id': 99, 'content': 'parent not visible'},
    ]

    def test_nesting(self):
        tree = build_comment_tree(self.rows)
        assert [node['id'] for node in tree] == [1, 4]
        assert [node['id'] for node in tree[0]['replies']] == [2]
        assert [node['id'] for node in tree[0]['replies'][0]['replies']] == [3]

    def test_count_includes_every_reply(self):
        assert count_comments(build_comment_tree(self.rows)) == 4
        assert count_comments([]) == 0
