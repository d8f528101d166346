from urllib.parse import urlsplit
from flask import render_template, request, flash, redirect, url_for, abort, jsonify, current_app

from newsdesk.blueprints.admin import admin_bp
from newsdesk.blueprints.admin.forms import (LoginForm, ArticleForm, CategoryForm, AuthorForm,
                                             SettingsForm)
from newsdesk.models import COMMENT_STATUSES
from newsdesk.services.auth_service import sign_in, sign_out
from newsdesk.services.content_service import content_service, DEFAULT_SETTINGS
from newsdesk.utils.listing import (filter_articles, sort_articles, paginate, page_window,
                                    filter_comments, comment_stats, compute_analytics,
                                    ARTICLE_SORT_FIELDS)
from newsdesk.utils.markdown import markdown_to_html
from newsdesk.utils.permissions import get_current_user, is_admin

GENERIC_ERROR = 'Something went wrong. Please try again.'


def _data_or_empty(result, what):
    if not result.ok:
        current_app.logger.error(f'Failed to load {what}: {result.error}')
        flash(f'Failed to load {what}.', 'danger')
        return []
    return result.data


# ---- session ---------------------------------------------------------------

@admin_bp.route('/login', methods=['GET', 'POST'])
def login():
    if is_admin():
        return redirect(url_for('admin.dashboard'))

    form = LoginForm()
    if form.validate_on_submit():
        result = sign_in(form.email.data, form.password.data, remember=form.remember_me.data)
        if not result.ok:
            flash(result.error, 'danger')
            return render_template('admin/login.html', form=form), 401

        # Only follow relative redirects
        next_page = request.args.get('next')
        if not next_page or urlsplit(next_page).netloc != '':
            next_page = url_for('admin.dashboard')
        flash(f"Welcome back, {result.data['name']}.", 'success')
        return redirect(next_page)

    return render_template('admin/login.html', form=form)


@admin_bp.route('/logout')
def logout():
    sign_out()
    flash('You have been signed out.', 'info')
    return redirect(url_for('admin.login'))


# ---- dashboard -------------------------------------------------------------

@admin_bp.route('/')
def dashboard():
    articles = _data_or_empty(content_service.get_admin_articles(), 'articles')
    comments = _data_or_empty(content_service.get_admin_comments(), 'comments')
    categories = _data_or_empty(content_service.get_categories(), 'categories')
    authors = _data_or_empty(content_service.get_authors(), 'authors')

    return render_template('admin/dashboard.html',
                           analytics=compute_analytics(articles),
                           comment_stats=comment_stats(comments),
                           category_count=len(categories),
                           author_count=len(authors),
                           recent_articles=articles[:5],
                           user=get_current_user())


# ---- articles --------------------------------------------------------------

@admin_bp.route('/articles')
def articles():
    """Article table; filters, sort and paging all run over the full list"""
    search = request.args.get('search', '', type=str)
    status = request.args.get('status', 'all', type=str)
    category = request.args.get('category', 'all', type=str)
    author = request.args.get('author', 'all', type=str)
    sort = request.args.get('sort', 'created_at', type=str)
    if sort not in ARTICLE_SORT_FIELDS:
        sort = 'created_at'
    order = 'asc' if request.args.get('order') == 'asc' else 'desc'
    page = request.args.get('page', 1, type=int)

    all_articles = _data_or_empty(content_service.get_admin_articles(), 'articles')
    rows = sort_articles(filter_articles(all_articles, search, status, category, author), sort, order)
    pagination = paginate(rows, page, current_app.config['ADMIN_PAGE_SIZE'])

    return render_template('admin/articles.html',
                           pagination=pagination,
                           pages=page_window(pagination.page, pagination.pages),
                           categories=_data_or_empty(content_service.get_categories(), 'categories'),
                           authors=_data_or_empty(content_service.get_authors(), 'authors'),
                           filters={'search': search, 'status': status, 'category': category,
                                    'author': author, 'sort': sort, 'order': order})


def _article_form(data=None):
    form = ArticleForm(data=data)
    categories = content_service.get_categories().data or []
    authors = content_service.get_authors().data or []
    form.category_id.choices = [('', 'Uncategorized')] + [(str(c['id']), c['name']) for c in categories]
    form.author_id.choices = [('', 'No byline')] + [(str(a['id']), a['name']) for a in authors]
    return form


def _article_values(form):
    """Form -> article values; uploads the image first when one was attached"""
    values = {
        'title': form.title.data,
        'slug': form.slug.data,
        'excerpt': form.excerpt.data or '',
        'content': form.content.data,
        'featured_image': form.featured_image.data or None,
        'category_id': form.category_id.data,
        'author_id': form.author_id.data,
        'tags': form.tags.data or '',
        'status': form.status.data,
    }
    upload = form.image_file.data
    if upload and getattr(upload, 'filename', ''):
        uploaded = content_service.upload_image(upload)
        if not uploaded.ok:
            return None, f'Image upload failed: {uploaded.error}'
        values['featured_image'] = uploaded.data['public_url']
    return values, None


@admin_bp.route('/articles/new', methods=['GET', 'POST'])
def article_new():
    user = get_current_user()
    form = _article_form({'author_id': str(user.id)} if user else None)
    if form.validate_on_submit():
        values, error = _article_values(form)
        if error is None:
            result = content_service.create_article(values)
            if result.ok:
                flash(f"Article \"{result.data['title']}\" created.", 'success')
                return redirect(url_for('admin.articles'))
            error = result.error
        flash(error, 'danger')
    return render_template('admin/article_form.html', form=form, article=None)


@admin_bp.route('/articles/<int:id>/edit', methods=['GET', 'POST'])
def article_edit(id):
    found = content_service.get_article_by_id(id)
    if not found.ok:
        abort(404)
    article = found.data

    form = _article_form(dict(article,
                              category_id=str(article['category_id'] or ''),
                              author_id=str(article['author_id'] or ''),
                              tags=', '.join(article.get('tags') or [])))
    if form.validate_on_submit():
        values, error = _article_values(form)
        if error is None:
            result = content_service.update_article(id, values)
            if result.ok:
                flash('Article updated.', 'success')
                return redirect(url_for('admin.articles'))
            error = result.error
        flash(error, 'danger')
    return render_template('admin/article_form.html', form=form, article=article)


@admin_bp.route('/articles/<int:id>/delete', methods=['POST'])
def article_delete(id):
    result = content_service.delete_article(id)
    if result.ok:
        flash('Article deleted.', 'success')
    else:
        current_app.logger.error(f'Failed to delete article {id}: {result.error}')
        flash('Failed to delete article. Please try again.', 'danger')
    return redirect(url_for('admin.articles'))


@admin_bp.route('/articles/preview', methods=['POST'])
def article_preview():
    """Markdown preview for the editor"""
    return jsonify({'success': True, 'html': str(markdown_to_html(request.form.get('content', '')))})


# ---- categories ------------------------------------------------------------

@admin_bp.route('/categories', methods=['GET', 'POST'])
def categories():
    form = CategoryForm()
    if form.validate_on_submit():
        result = content_service.create_category({
            'name': form.name.data.strip(),
            'slug': form.slug.data,
            'color': form.color.data or '#6366f1',
            'description': form.description.data,
        })
        if result.ok:
            flash(f"Category \"{result.data['name']}\" created.", 'success')
            return redirect(url_for('admin.categories'))
        flash(result.error, 'danger')

    return render_template('admin/categories.html',
                           form=form,
                           categories=_data_or_empty(content_service.get_categories(), 'categories'))


@admin_bp.route('/categories/<int:id>/edit', methods=['GET', 'POST'])
def category_edit(id):
    found = content_service.get_category(id)
    if not found.ok:
        abort(404)
    form = CategoryForm(data=found.data)
    if form.validate_on_submit():
        result = content_service.update_category(id, {
            'name': form.name.data.strip(),
            'slug': form.slug.data,
            'color': form.color.data or '#6366f1',
            'description': form.description.data,
        })
        if result.ok:
            flash('Category updated.', 'success')
            return redirect(url_for('admin.categories'))
        flash(result.error, 'danger')
    return render_template('admin/category_form.html', form=form, category=found.data)


@admin_bp.route('/categories/<int:id>/delete', methods=['POST'])
def category_delete(id):
    result = content_service.delete_category(id)
    flash('Category deleted.' if result.ok else GENERIC_ERROR, 'success' if result.ok else 'danger')
    return redirect(url_for('admin.categories'))


# ---- authors ---------------------------------------------------------------

@admin_bp.route('/authors', methods=['GET', 'POST'])
def authors():
    form = AuthorForm()
    if form.validate_on_submit():
        result = content_service.create_author({
            'name': form.name.data.strip(),
            'email': form.email.data,
            'role': form.role.data,
            'bio': form.bio.data,
            'avatar_url': form.avatar_url.data or None,
            'password': form.password.data,
        })
        if result.ok:
            flash(f"Author {result.data['name']} added.", 'success')
            return redirect(url_for('admin.authors'))
        flash(result.error, 'danger')

    return render_template('admin/authors.html',
                           form=form,
                           authors=_data_or_empty(content_service.get_authors(), 'authors'),
                           roles=[c[0] for c in form.role.choices])


@admin_bp.route('/authors/<int:id>/role', methods=['POST'])
def author_role(id):
    result = content_service.update_author(id, {'role': request.form.get('role', '')})
    if result.ok:
        flash(f"{result.data['name']} is now {result.data['role']}.", 'success')
    else:
        flash(result.error, 'danger')
    return redirect(url_for('admin.authors'))


@admin_bp.route('/authors/<int:id>/delete', methods=['POST'])
def author_delete(id):
    if get_current_user().id == id:
        flash('You cannot delete your own account.', 'warning')
        return redirect(url_for('admin.authors'))
    result = content_service.delete_author(id)
    flash('Author removed.' if result.ok else GENERIC_ERROR, 'success' if result.ok else 'danger')
    return redirect(url_for('admin.authors'))


# ---- comments --------------------------------------------------------------

@admin_bp.route('/comments')
def comments():
    status = request.args.get('status', 'all', type=str)
    rows = _data_or_empty(content_service.get_admin_comments(), 'comments')
    return render_template('admin/comments.html',
                           comments=filter_comments(rows, status),
                           stats=comment_stats(rows),
                           current_status=status,
                           statuses=('all',) + COMMENT_STATUSES)


@admin_bp.route('/comments/<int:id>/moderate', methods=['POST'])
def comment_moderate(id):
    status = request.form.get('status', '')
    result = content_service.moderate_comment(id, status)
    if result.ok:
        flash(f'Comment {status}.', 'success')
    else:
        flash(result.error, 'danger')
    return redirect(request.referrer or url_for('admin.comments'))


@admin_bp.route('/comments/<int:id>/delete', methods=['POST'])
def comment_delete(id):
    result = content_service.delete_comment(id)
    flash('Comment deleted.' if result.ok else GENERIC_ERROR, 'success' if result.ok else 'danger')
    return redirect(url_for('admin.comments'))


# ---- analytics -------------------------------------------------------------

@admin_bp.route('/analytics')
def analytics():
    articles = _data_or_empty(content_service.get_admin_articles(), 'articles')
    return render_template('admin/analytics.html', analytics=compute_analytics(articles))


@admin_bp.route('/api/analytics')
def analytics_data():
    result = content_service.get_admin_articles()
    if not result.ok:
        return jsonify({'success': False, 'error': result.error}), 502
    return jsonify({'success': True, **compute_analytics(result.data)})


# ---- settings --------------------------------------------------------------

@admin_bp.route('/settings', methods=['GET', 'POST'])
def settings():
    current = content_service.get_settings().data
    form = SettingsForm(data=current)
    if form.validate_on_submit():
        result = content_service.save_settings({key: getattr(form, key).data for key in DEFAULT_SETTINGS})
        if result.ok:
            flash('Settings saved.', 'success')
            return redirect(url_for('admin.settings'))
        current_app.logger.error(f'Failed to save settings: {result.error}')
        flash('Failed to save settings. Please try again.', 'danger')
    return render_template('admin/settings.html', form=form)
