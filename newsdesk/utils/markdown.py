"""
Minimal markdown preview: headers, bold, italic, line breaks.
Not a parser; no lists, links or nesting.
"""
import re
from markupsafe import Markup, escape

_RULES = [
    (re.compile(r'^### (.*$)', re.I | re.M), r'<h3>\1</h3>'),
    (re.compile(r'^## (.*$)', re.I | re.M), r'<h2>\1</h2>'),
    (re.compile(r'^# (.*$)', re.I | re.M), r'<h1>\1</h1>'),
    (re.compile(r'\*\*(.*?)\*\*', re.I | re.M), r'<strong>\1</strong>'),
    (re.compile(r'\*(.*?)\*', re.I | re.M), r'<em>\1</em>'),
    (re.compile(r'\n', re.M), '<br>'),
]


def markdown_to_html(text):
    """
    Applies the substitutions in order over HTML-escaped input, so reader and author
    content cannot inject markup.

        >>> markdown_to_html('# Title\\n**bold**')
        Markup('<h1>Title</h1><br><strong>bold</strong>')
    """
    html = str(escape(text or ''))
    for pattern, replacement in _RULES:
        html = pattern.sub(replacement, html)
    return Markup(html)
