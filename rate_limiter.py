"""
Rate limiting configuration for the civic data service
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os


def get_limiter_storage_uri():
    """
    Get storage URI for rate limiter
    Uses Redis in production, memory in development
    """
    redis_url = os.environ.get('REDIS_URL')
    if redis_url:
        return redis_url
    return "memory://"


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=get_limiter_storage_uri(),
    default_limits=["1000 per hour", "100 per minute"],
    strategy="fixed-window",
)


def civic_limit(blueprint):
    """Apply the public civic endpoint limit (CIVIC_RATE_LIMIT) to a blueprint"""
    return limiter.limit(os.environ.get('CIVIC_RATE_LIMIT', '120 per minute'))(blueprint)


def init_limiter(app):
    """Initialize rate limiter with Flask app"""
    limiter.init_app(app)
    return limiter
