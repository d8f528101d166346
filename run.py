import os
from newsdesk import create_app, db
from newsdesk.models import Author, Category, Article, Comment, SiteSetting

# FLASK_ENV (hosting platforms) or FLASK_CONFIG picks the config class
config_name = os.getenv('FLASK_ENV') or os.getenv('FLASK_CONFIG') or 'default'
if config_name == 'dev':
    config_name = 'development'

app = create_app(config_name)


@app.shell_context_processor
def make_shell_context():
    """Names preloaded in `flask shell`."""
    return dict(
        db=db,
        app=app,
        Author=Author,
        Category=Category,
        Article=Article,
        Comment=Comment,
        SiteSetting=SiteSetting,
    )


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=5000)
