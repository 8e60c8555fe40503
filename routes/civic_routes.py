"""
Civic Data API Routes — dashboard, search, services, meetings, statistics.
Blueprint mounted at /civic

Handlers only normalize query parameters, call the injected civic data
collaborator and wrap the result. Any collaborator failure becomes a 500
with a fixed message; the detail goes to the logs.
"""
import csv
import io
import logging
from datetime import date
from urllib.parse import quote

from flask import Blueprint, Response, jsonify, request

from core.civic import (
    CivicAPIError, ValidationError,
    get_civic_api, call_upstream, civic_response,
    search_options, service_options, meeting_options, statistics_options,
    query_time_header, data_count_header, utc_timestamp,
)
from core.civic.constants import (
    API_VERSION,
    CACHE_DASHBOARD, CACHE_SEARCH, CACHE_SERVICES, CACHE_MEETINGS,
    CACHE_STATISTICS, CACHE_FRESHNESS, CACHE_EXPORT,
    MSG_SEARCH_QUERY_REQUIRED, MSG_DASHBOARD_FAILED, MSG_SEARCH_FAILED,
    MSG_SERVICES_FAILED, MSG_STATISTICS_FAILED, MSG_MEETINGS_FAILED,
    MSG_FRESHNESS_FAILED, MSG_EXPORT_FAILED,
    EXPORT_TYPES, EXPORT_FORMATS,
)
from rate_limiter import civic_limit

logger = logging.getLogger(__name__)

civic_bp = Blueprint('civic', __name__, url_prefix='/civic')
civic_limit(civic_bp)


@civic_bp.after_request
def add_api_version(response):
    response.headers['X-API-Version'] = API_VERSION
    return response


@civic_bp.errorhandler(CivicAPIError)
def handle_civic_error(error):
    if error.__cause__ is not None:
        logger.error("Civic API error on %s: %s", request.path, error.message,
                     exc_info=error.__cause__)
    return jsonify(error.to_dict()), error.status_code


# ===================================================================
# CORE ENDPOINTS
# ===================================================================

@civic_bp.route('/dashboard', methods=['GET'])
def get_dashboard():
    """
    GET /civic/dashboard
    Overview counts, category breakdowns and recent activity.
    """
    result = call_upstream(get_civic_api().get_dashboard_data, error_message=MSG_DASHBOARD_FAILED)
    return civic_response(result, CACHE_DASHBOARD, {'X-Data-Timestamp': utc_timestamp()})


@civic_bp.route('/search', methods=['GET'])
def search():
    """
    GET /civic/search
    Query params:
      - q: search text (required)
      - page, limit: pagination (default 1, 10)
      - category: restrict pages/services to a category
      - includeServices, includeMeetings, includePages: 'false' to skip a source
    """
    query = request.args.get('q')
    if not query:
        raise ValidationError(MSG_SEARCH_QUERY_REQUIRED)

    options = search_options(request.args)
    result = call_upstream(get_civic_api().search, query, error_message=MSG_SEARCH_FAILED, **options)
    return civic_response(result, CACHE_SEARCH, {
        'X-Query-Time': query_time_header(result),
        'X-Search-Query': quote(query, safe=''),
    })


@civic_bp.route('/services', methods=['GET'])
def get_services():
    """
    GET /civic/services
    Query params: page, limit (default 1, 20), category, department,
    onlineOnly ('true' to restrict), search
    """
    options = service_options(request.args)
    result = call_upstream(get_civic_api().get_services, error_message=MSG_SERVICES_FAILED, **options)
    return civic_response(result, CACHE_SERVICES, {'X-Query-Time': query_time_header(result)})


@civic_bp.route('/statistics', methods=['GET'])
def get_statistics():
    """
    GET /civic/statistics
    Query params: category, subcategory, metric, period
    """
    options = statistics_options(request.args)
    result = call_upstream(get_civic_api().get_statistics, error_message=MSG_STATISTICS_FAILED, **options)
    return civic_response(result, CACHE_STATISTICS, {'X-Data-Count': data_count_header(result)})


@civic_bp.route('/meetings', methods=['GET'])
def get_meetings():
    """
    GET /civic/meetings
    Query params: page, limit (default 1, 20), committee, status,
    dateFrom/dateTo (YYYY-MM-DD, inclusive), publicOnly ('true' to restrict)
    """
    options = meeting_options(request.args)
    for param, key in (('dateFrom', 'date_from'), ('dateTo', 'date_to')):
        if key in options:
            try:
                date.fromisoformat(options[key])
            except ValueError:
                raise ValidationError(f'{param} must be a date in YYYY-MM-DD format') from None

    result = call_upstream(get_civic_api().get_meetings, error_message=MSG_MEETINGS_FAILED, **options)
    return civic_response(result, CACHE_MEETINGS, {'X-Query-Time': query_time_header(result)})


# ===================================================================
# DATA OPERATIONS
# ===================================================================

@civic_bp.route('/freshness', methods=['GET'])
def get_data_freshness():
    """GET /civic/freshness — last import time and status per data type."""
    result = call_upstream(get_civic_api().get_data_freshness, error_message=MSG_FRESHNESS_FAILED)
    return civic_response(result, CACHE_FRESHNESS, {'X-Data-Count': data_count_header(result)})


@civic_bp.route('/export/<data_type>', methods=['GET'])
def export_data(data_type):
    """
    GET /civic/export/<services|meetings|statistics|pages>?format=json|csv
    Returns the full table as an attachment.
    """
    if data_type not in EXPORT_TYPES:
        raise ValidationError(f'Unsupported export type: {data_type}')
    fmt = request.args.get('format') or 'json'
    if fmt not in EXPORT_FORMATS:
        raise ValidationError(f'Unsupported export format: {fmt}')

    response = call_upstream(_build_export, data_type, fmt, error_message=MSG_EXPORT_FAILED)
    response.headers['Cache-Control'] = CACHE_EXPORT
    return response


def _build_export(data_type, fmt):
    """Fetch and render an export; a malformed result fails like the fetch itself."""
    export = get_civic_api().export_data(data_type, fmt)
    rows = list(export['data'])
    if fmt == 'csv':
        response = Response(_to_csv(rows), mimetype=export['contentType'])
    else:
        response = jsonify(rows)
        response.mimetype = export['contentType']
    response.headers['Content-Disposition'] = f"attachment; filename={export['filename']}"
    response.headers['X-Data-Count'] = str(len(rows))
    return response


def _to_csv(rows):
    buf = io.StringIO()
    if rows:
        writer = csv.DictWriter(buf, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)
    return buf.getvalue()
