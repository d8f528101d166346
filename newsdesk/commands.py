import click
import random
from datetime import datetime, timedelta
from flask.cli import with_appcontext
from newsdesk.extensions import db
from newsdesk.models import Author, Category, Article, Comment
from newsdesk.utils.fake_gen import fake
from newsdesk.utils.text import create_slug


@click.command('status')
@with_appcontext
def status():
    """Row counts for every newsroom table."""
    click.echo(click.style('📊 Newsdesk database status:', fg='cyan', bold=True))

    try:
        counts = {
            'Authors': Author.query.count(),
            'Categories': Category.query.count(),
            'Articles': Article.query.count(),
            'Published': Article.query.filter_by(status='published').count(),
            'Comments': Comment.query.count(),
            'Pending comments': Comment.query.filter_by(status='pending').count(),
        }
        for label, count in counts.items():
            click.echo(f" - {label}: \t{count}")

        if counts['Articles'] > 0:
            click.echo(click.style('✔ Database reachable, content present.', fg='green'))
        else:
            click.echo(click.style('⚠ No articles yet, run flask forge to seed demo content.', fg='yellow'))

    except Exception as e:
        click.echo(click.style(f'✘ Database read failed: {str(e)}', fg='red'))
        click.echo("Check that 'flask db upgrade' has been run")


@click.command('forge')
@click.option('--articles', default=30, help='Number of articles to generate (default 30)')
@click.option('--admin-email', default='admin@example.com', help='Email of the seeded admin')
@click.option('--admin-password', default='admin123', help='Password of the seeded admin')
@with_appcontext
def forge(articles, admin_email, admin_password):
    """
    Reset the database and fill it with demo content.
    WARNING: existing data is dropped!
    """
    click.echo(click.style(f'⚡ Seeding newsroom ({articles} articles)...', fg='cyan', bold=True))

    db.drop_all()
    db.create_all()

    click.echo('Creating sections...')
    categories = init_categories()

    click.echo('Hiring the newsroom...')
    authors = init_authors(admin_email, admin_password)

    click.echo('Writing articles...')
    stories = init_articles(articles, categories, authors)

    click.echo('Opening the comment section...')
    init_comments(stories)

    click.echo(click.style(f'✔ Done. Admin sign-in: {admin_email} / {admin_password}', fg='green'))


@click.command('create-admin')
@click.argument('email')
@click.argument('password')
@click.option('--name', default='Administrator', help='Display name for a new account')
@with_appcontext
def create_admin(email, password, name):
    """Create an admin author, or promote an existing one and reset the password."""
    email = email.strip().lower()
    author = Author.query.filter_by(email=email).first()
    if author is None:
        author = Author(name=name, email=email)
        db.session.add(author)
    author.role = 'admin'
    author.password = password
    db.session.commit()
    click.echo(click.style(f'✔ {email} is an admin.', fg='green'))


def init_categories():
    categories = []
    for name, color in fake.news_sections():
        category = Category(name=name, slug=create_slug(name), color=color,
                            description=fake.sentence(nb_words=8))
        db.session.add(category)
        categories.append(category)
    db.session.commit()
    return categories


def init_authors(admin_email, admin_password):
    admin = Author(name=fake.name(), email=admin_email, role='admin',
                   bio=fake.paragraph(), password=admin_password)
    authors = [admin]
    for role in ('editor', 'author', 'author', 'author'):
        authors.append(Author(name=fake.name(), email=fake.unique.email(), role=role,
                              bio=fake.paragraph(), password='password'))
    db.session.add_all(authors)
    db.session.commit()
    return authors


def init_articles(count, categories, authors):
    articles = []
    seen = set()
    now = datetime.utcnow()
    for _ in range(count):
        title = fake.headline()
        slug = create_slug(title)
        if slug in seen:
            continue
        seen.add(slug)

        status = random.choices(['published', 'draft', 'archived'], weights=[8, 2, 1])[0]
        created = now - timedelta(days=random.randint(0, 60), hours=random.randint(0, 23))
        paragraphs = '\n\n'.join(fake.paragraphs(nb=4))
        articles.append(Article(
            title=title,
            slug=slug,
            excerpt=fake.sentence(nb_words=18),
            content=f"## {fake.sentence(nb_words=5)}\n\n{paragraphs}\n\n**{fake.sentence()}**",
            status=status,
            tags=fake.words(nb=3, unique=True),
            views=random.randint(0, 5000) if status == 'published' else 0,
            created_at=created,
            published_at=created + timedelta(hours=1) if status == 'published' else None,
            category=random.choice(categories),
            author=random.choice(authors),
        ))
    db.session.add_all(articles)
    db.session.commit()
    return articles


def init_comments(articles):
    published = [a for a in articles if a.status == 'published']
    for article in published:
        for _ in range(random.randint(0, 4)):
            comment = Comment(article=article, name=fake.name(), email=fake.email(),
                              content=fake.paragraph(nb_sentences=2),
                              status=random.choice(['approved', 'approved', 'pending', 'rejected']))
            db.session.add(comment)
            if random.random() < 0.3:
                db.session.add(Comment(article=article, parent=comment, name=fake.name(),
                                       email=fake.email(), content=fake.sentence(),
                                       status='approved'))
    db.session.commit()
