from flask import current_app, session
from flask_login import login_user, logout_user, user_loaded_from_cookie

from newsdesk.services.backend import QueryResult, get_backend
from newsdesk.utils.permissions import ROLE_CLAIM


def sign_in(email, password, remember=False):
    """
    Check credentials against the backend and open a session.
    The author's role is stamped into the session as a claim; a later role change
    takes effect at the next sign-in.
    """
    result = get_backend().sign_in(email, password)
    if not result.ok:
        current_app.logger.info(f'Sign-in refused for {email}: {result.error}')
        return result

    author = result.data
    login_user(author, remember=remember)
    session[ROLE_CLAIM] = author.role
    current_app.logger.info(f'Author {author.email} signed in ({author.role})')
    return QueryResult(author.to_dict())


@user_loaded_from_cookie.connect
def restore_role_claim(sender, user, **extra):
    """A remember-me cookie brings the author back without a session; stamp the claim again"""
    session[ROLE_CLAIM] = user.role


def sign_out():
    session.pop(ROLE_CLAIM, None)
    logout_user()
    return QueryResult()
