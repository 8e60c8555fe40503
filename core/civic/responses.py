"""
Response envelope for the civic endpoints: JSON body plus headers, and the
uniform mapping of upstream failures.
"""
from collections.abc import Mapping, Sized
from datetime import datetime, timezone

from flask import jsonify

from core.civic.errors import UpstreamError


def utc_timestamp():
    """ISO-8601 UTC timestamp with millisecond precision and a 'Z' suffix."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def civic_response(result, cache_control, extra_headers=None, status=200):
    """Serialize ``result`` unmodified with the given cache directive."""
    response = jsonify(result)
    response.status_code = status
    response.headers['Cache-Control'] = cache_control
    for name, value in (extra_headers or {}).items():
        if value is not None:
            response.headers[name] = value
    return response


def query_time_header(result):
    """'<ms>ms' from ``result['performance']['queryTime']``, or None if absent."""
    if not isinstance(result, Mapping):
        return None
    performance = result.get('performance')
    if not isinstance(performance, Mapping) or performance.get('queryTime') is None:
        return None
    return f"{performance['queryTime']}ms"


def data_count_header(result):
    if isinstance(result, Sized) and not isinstance(result, (str, bytes, Mapping)):
        return str(len(result))
    return None


def call_upstream(operation, *args, error_message, **kwargs):
    """Invoke a collaborator operation; any failure becomes an UpstreamError."""
    try:
        return operation(*args, **kwargs)
    except Exception as e:
        raise UpstreamError(error_message) from e
