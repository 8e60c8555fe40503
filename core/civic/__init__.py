"""
core.civic — Request adapter for the public civic data endpoints.

Public API:
    get_civic_api, init_civic_api              — collaborator injection
    search_options, service_options,
    meeting_options, statistics_options        — query-string normalization
    civic_response, call_upstream              — response envelope
    CivicAPIError, ValidationError, UpstreamError — error kinds
"""

from core.civic.errors import CivicAPIError, ValidationError, UpstreamError
from core.civic.params import (
    parse_int, opt_out_flag, opt_in_flag, optional_str,
    search_options, service_options, meeting_options, statistics_options,
)
from core.civic.responses import (
    civic_response, call_upstream,
    query_time_header, data_count_header, utc_timestamp,
)
from core.civic.registry import get_civic_api, init_civic_api

__all__ = [
    'CivicAPIError', 'ValidationError', 'UpstreamError',
    'parse_int', 'opt_out_flag', 'opt_in_flag', 'optional_str',
    'search_options', 'service_options', 'meeting_options', 'statistics_options',
    'civic_response', 'call_upstream',
    'query_time_header', 'data_count_header', 'utc_timestamp',
    'get_civic_api', 'init_civic_api',
]
