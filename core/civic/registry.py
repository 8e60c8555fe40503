"""
Civic data collaborator injection.

The handlers never import a concrete data source. ``init_civic_api`` binds
one to the Flask app and ``get_civic_api`` resolves it per request.
"""
from flask import current_app

EXTENSION_KEY = 'civic_api'


def init_civic_api(app, civic_api):
    """Attach the civic data collaborator to ``app``."""
    app.extensions[EXTENSION_KEY] = civic_api
    return civic_api


def get_civic_api():
    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError:
        raise RuntimeError('Civic data API not initialised; call init_civic_api(app, api)') from None
