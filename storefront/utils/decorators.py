"""Access decorators for API routes."""

from functools import wraps
from flask_login import current_user
from storefront.policy import AuthorizationPolicy


def with_policy(f):
    """Pass the caller's AuthorizationPolicy to the view as ``policy``."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        kwargs['policy'] = AuthorizationPolicy.for_user(current_user)
        return f(*args, **kwargs)
    return decorated_function


def login_required(f):
    """Require an authenticated user; passes its policy as ``policy``."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        policy = AuthorizationPolicy.for_user(current_user)
        policy.require_authenticated()
        kwargs['policy'] = policy
        return f(*args, **kwargs)
    return decorated_function
