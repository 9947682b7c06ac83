"""
Cache utilities for PromoDesk.

Provides Redis-backed caching with graceful fallback to simple in-memory caching.
Uses Flask-Caching for integration with Flask app.

Usage:
    from promodesk.utils.cache import cache

    cache.set('key', value, timeout=300)
    value = cache.get('key')
    cache.delete('key')

Environment Variables:
    REDIS_URL: Redis connection URL (e.g., redis://localhost:6379/0)
              Falls back to simple cache if not set or unavailable.
"""
import os
import logging
from flask_caching import Cache

logger = logging.getLogger(__name__)

# Global cache instance - initialized in init_cache()
cache = Cache()

DEFAULT_CACHE_CONFIG = {
    'CACHE_TYPE': 'SimpleCache',  # Fallback: in-memory
    'CACHE_DEFAULT_TIMEOUT': 300,
}


def init_cache(app) -> bool:
    """
    Initialize Flask-Caching with Redis or fallback to simple cache.

    Returns:
        bool: True if Redis connected, False if using fallback
    """
    redis_url = os.getenv('REDIS_URL')

    if redis_url and not app.config.get('TESTING'):
        try:
            import redis
            r = redis.from_url(redis_url, socket_connect_timeout=2)
            r.ping()

            app.config['CACHE_TYPE'] = 'RedisCache'
            app.config['CACHE_REDIS_URL'] = redis_url
            app.config.setdefault('CACHE_DEFAULT_TIMEOUT', 300)
            app.config['CACHE_KEY_PREFIX'] = 'promodesk:'

            cache.init_app(app)
            app.config['PUBLIC_VIEW_CACHE_ENABLED'] = True
            logger.info('Cache initialized with Redis')
            return True
        except Exception as e:
            logger.warning(f'Redis unavailable ({e}), falling back to simple cache')

    for key, value in DEFAULT_CACHE_CONFIG.items():
        app.config.setdefault(key, value)
    cache.init_app(app)

    # In-process caches are per worker: without Redis only single-process
    # runs (tests, the dev server) cache public views.
    single_process = bool(app.config.get('TESTING') or app.config.get('DEBUG'))
    app.config.setdefault('PUBLIC_VIEW_CACHE_ENABLED', single_process)
    if not app.config['PUBLIC_VIEW_CACHE_ENABLED']:
        logger.warning('No shared cache configured; public campaign views will not be cached')

    logger.info(f"Cache initialized with {app.config['CACHE_TYPE']}")
    return False


def public_campaign_key(slug: str) -> str:
    """Cache key for the public projection of a campaign."""
    return f'public_campaign:{slug}'
