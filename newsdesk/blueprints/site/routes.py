import os
from flask import (render_template, request, flash, redirect, url_for, abort, jsonify,
                   send_from_directory, current_app)

from newsdesk.blueprints.site import site_bp
from newsdesk.blueprints.site.forms import CommentForm
from newsdesk.exceptions import MaintenanceMode, NotFound, ValidationError
from newsdesk.services.backend import ROW_NOT_FOUND
from newsdesk.services.content_service import content_service
from newsdesk.services.demo_data import DEMO_ARTICLES, DEMO_CATEGORIES, demo_articles, demo_category
from newsdesk.utils.comments import build_comment_tree, count_comments
from newsdesk.utils.listing import paginate, page_window, sort_search_results, SEARCH_SORTS
from newsdesk.utils.markdown import markdown_to_html
from newsdesk.utils.permissions import is_admin

BUCKETS = ('images',)


def _categories():
    result = content_service.get_categories()
    if not result.ok:
        return DEMO_CATEGORIES
    return result.data


@site_bp.before_request
def maintenance_gate():
    """Public pages answer 503 in maintenance mode, except for admins"""
    if request.endpoint == 'site.media':
        return None
    settings = content_service.get_settings().data
    if settings.get('maintenance_mode') and not is_admin():
        if request.path.startswith('/api/'):
            raise MaintenanceMode()
        return render_template('errors/503.html'), 503
    return None


@site_bp.app_context_processor
def inject_site():
    return {
        'site_settings': content_service.get_settings().data,
        'is_admin': is_admin,
    }


@site_bp.route('/')
def index():
    """Home feed: hero, trending, latest and per-category strips"""
    feed = content_service.get_articles(current_app.config['HOME_FEED_SIZE'])
    error = None
    if feed.ok:
        articles = feed.data
    else:
        current_app.logger.error(f'Error fetching articles: {feed.error}')
        error = 'Failed to load articles'
        articles = DEMO_ARTICLES

    categories = _categories()
    sections = []
    for category in categories[:2]:
        picks = [a for a in articles if a.get('category_id') == category['id']][:3]
        sections.append((category, picks))

    return render_template('site/index.html',
                           hero=articles[:3],
                           trending=articles[3:9],
                           latest=articles[9:13],
                           sections=sections,
                           categories=categories,
                           error=error)


@site_bp.route('/article/<slug>')
def article_detail(slug):
    result = content_service.get_article_by_slug(slug)
    if not result.ok:
        abort(404)
    article = result.data

    comments = content_service.get_comments(article['id'])
    tree = build_comment_tree(comments.data or [])

    return render_template('site/article.html',
                           article=article,
                           body=markdown_to_html(article['content']),
                           comments=tree,
                           comment_count=count_comments(tree),
                           form=CommentForm())


@site_bp.route('/article/<slug>/comments', methods=['POST'])
def post_comment(slug):
    """Comments and replies land in the moderation queue"""
    result = content_service.get_article_by_slug(slug, count_view=False)
    if not result.ok:
        abort(404)
    article_url = url_for('site.article_detail', slug=slug) + '#comments'

    if not content_service.get_settings().data.get('comments_enabled'):
        flash('Comments are closed.', 'warning')
        return redirect(article_url)

    form = CommentForm()
    if not form.validate_on_submit():
        flash('Please fill in your name, a valid email and a comment.', 'danger')
        return redirect(article_url)

    parent_id = int(form.parent_id.data) if (form.parent_id.data or '').isdigit() else None
    added = content_service.add_comment(result.data['id'],
                                        form.name.data.strip(),
                                        form.email.data.strip(),
                                        form.content.data.strip(),
                                        parent_id=parent_id)
    if added.ok:
        flash('Comment submitted successfully! It will appear after moderation.', 'success')
    else:
        current_app.logger.error(f'Comment on {slug} failed: {added.error}')
        flash('Error submitting comment. Please try again.', 'danger')
    return redirect(article_url)


@site_bp.route('/category/<slug>')
def category_page(slug):
    found = content_service.get_category_by_slug(slug)
    if found.ok:
        category = found.data
        feed = content_service.get_articles(current_app.config['HOME_FEED_SIZE'], 0, slug)
        articles = feed.data if feed.ok else demo_articles(category=slug)
    elif found.error == ROW_NOT_FOUND:
        abort(404)
    else:
        # Store unavailable: serve the demo section if there is one
        category = demo_category(slug)
        if category is None:
            abort(404)
        articles = demo_articles(category=slug)

    return render_template('site/category.html', category=category, articles=articles)


@site_bp.route('/search')
def search():
    query = request.args.get('q', '', type=str).strip()
    category = request.args.get('category', 'all', type=str) or 'all'
    sort_by = request.args.get('sort', 'relevance', type=str)
    if sort_by not in SEARCH_SORTS:
        sort_by = 'relevance'
    page = request.args.get('page', 1, type=int)

    articles = []
    if query:
        result = content_service.search_articles(query)
        if result.ok:
            articles = result.data
            if category != 'all':
                articles = [a for a in articles if (a.get('category') or {}).get('slug') == category]
        else:
            current_app.logger.error(f'Search error: {result.error}')
            articles = demo_articles(query, category)

    pagination = paginate(sort_search_results(articles, sort_by), page,
                          current_app.config['SEARCH_PAGE_SIZE'])
    return render_template('site/search.html',
                           query=query,
                           current_category=category,
                           sort_by=sort_by,
                           categories=_categories(),
                           pagination=pagination,
                           pages=page_window(pagination.page, pagination.pages))


@site_bp.route('/media/<bucket>/<path:filename>')
def media(bucket, filename):
    """Serve a file from an image bucket"""
    if bucket not in BUCKETS:
        abort(404)
    return send_from_directory(os.path.join(current_app.config['UPLOAD_FOLDER'], bucket), filename)


# ---- JSON API ------------------------------------------------------------

@site_bp.route('/api/articles')
def api_articles():
    limit = request.args.get('limit', 20, type=int)
    offset = request.args.get('offset', 0, type=int)
    errors = {}
    if limit < 1 or limit > 100:
        errors['limit'] = 'must be between 1 and 100'
    if offset < 0:
        errors['offset'] = 'must not be negative'
    if errors:
        raise ValidationError(errors)
    result = content_service.get_articles(limit, offset, request.args.get('category') or None)
    return jsonify({'success': result.ok, 'data': result.data, 'error': result.error})


@site_bp.route('/api/articles/<slug>')
def api_article(slug):
    result = content_service.get_article_by_slug(slug)
    if not result.ok:
        raise NotFound('article', slug)
    return jsonify({'success': True, 'data': result.data, 'error': None})


@site_bp.route('/api/search')
def api_search():
    result = content_service.search_articles(request.args.get('q', '', type=str))
    return jsonify({'success': result.ok, 'data': result.data, 'error': result.error})
