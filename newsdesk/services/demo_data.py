"""
Built-in demo content shown by the public pages when the store cannot be reached.
Rows use the same dict shape the backend returns for expanded articles.
"""
from newsdesk.utils.listing import filter_articles

DEMO_CATEGORIES = [
    {'id': 1, 'name': 'Politics', 'slug': 'politics', 'color': '#ef4444', 'description': 'Government and elections'},
    {'id': 2, 'name': 'Business', 'slug': 'business', 'color': '#10b981', 'description': 'Markets and the economy'},
    {'id': 3, 'name': 'Technology', 'slug': 'technology', 'color': '#8b5cf6', 'description': 'Science and tech'},
    {'id': 4, 'name': 'Sports', 'slug': 'sports', 'color': '#f59e0b', 'description': 'Results and analysis'},
]

_DEMO_AUTHOR = {'id': 1, 'name': 'Newsroom Staff', 'avatar_url': None, 'role': 'editor', 'bio': ''}


def _article(id, title, slug, excerpt, category_index, published_at, views, tags):
    category = DEMO_CATEGORIES[category_index]
    return {
        'id': id,
        'slug': slug,
        'title': title,
        'excerpt': excerpt,
        'content': excerpt,
        'featured_image': None,
        'status': 'published',
        'tags': tags,
        'views': views,
        'published_at': published_at,
        'created_at': published_at,
        'updated_at': published_at,
        'category_id': category['id'],
        'author_id': _DEMO_AUTHOR['id'],
        'category': category,
        'author': _DEMO_AUTHOR,
    }


DEMO_ARTICLES = [
    _article(1, 'Parliament Approves New Budget Framework', 'parliament-approves-new-budget-framework',
             'Lawmakers passed the spending plan after a week of debate over infrastructure priorities.',
             0, '2024-05-20T08:30:00', 1520, ['budget', 'parliament']),
    _article(2, 'Mining Exports Reach Record High', 'mining-exports-reach-record-high',
             'Copper and coal shipments pushed first-quarter export revenue to its highest level yet.',
             1, '2024-05-19T10:00:00', 980, ['mining', 'exports']),
    _article(3, 'Startups Bet on Renewable Energy Storage', 'startups-bet-on-renewable-energy-storage',
             'A new generation of local companies is building battery systems for remote regions.',
             2, '2024-05-18T14:15:00', 760, ['energy', 'startups']),
    _article(4, 'National Team Qualifies for Continental Finals', 'national-team-qualifies-for-continental-finals',
             'A late goal secured the team its first finals appearance in over a decade.',
             3, '2024-05-17T19:45:00', 2110, ['football']),
    _article(5, 'Central Bank Holds Interest Rates Steady', 'central-bank-holds-interest-rates-steady',
             'Policy makers cited easing inflation but warned about currency pressure.',
             1, '2024-05-16T09:00:00', 640, ['economy', 'rates']),
    _article(6, 'City Launches Open Data Portal', 'city-launches-open-data-portal',
             'Transport, air quality and budget data are now published in machine-readable form.',
             2, '2024-05-15T11:20:00', 430, ['open-data', 'city']),
]


def demo_articles(query='', category=None):
    """Demo rows matching a search term (title or excerpt) and an optional category slug"""
    articles = filter_articles(DEMO_ARTICLES, search=query)
    if category and category != 'all':
        articles = [a for a in articles if a['category']['slug'] == category]
    return articles


def demo_category(slug):
    for category in DEMO_CATEGORIES:
        if category['slug'] == slug:
            return category
    return None
