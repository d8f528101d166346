"""
Auth gate
Current-user lookup, the admin check, and the guards built on them.

The admin check reads the role claim stamped into the signed session at sign-in,
so guarding a page never costs a role query.
"""
from flask import redirect, request, session, url_for
from flask_login import current_user

ROLE_CLAIM = 'author_role'
LOGIN_ENDPOINT = 'admin.login'
HOME_ENDPOINT = 'site.index'


def get_current_user():
    """The signed-in author, or None"""
    if current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def is_admin():
    if get_current_user() is None:
        return False
    return session.get(ROLE_CLAIM) == 'admin'


def admin_redirect():
    """
    Where an admin page request must go instead, or None to let it through:
    anonymous -> login page, signed in without the admin claim -> home page.
    """
    if get_current_user() is None:
        return redirect(url_for(LOGIN_ENDPOINT, next=request.path))
    if not is_admin():
        return redirect(url_for(HOME_ENDPOINT))
    return None


def guard_admin_routes():
    """before_request hook for the admin blueprint; the login page stays open"""
    if request.endpoint in (LOGIN_ENDPOINT, 'static'):
        return None
    return admin_redirect()

