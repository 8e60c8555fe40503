"""
Civic API constants — cache policies, versioning, error messages.
"""

API_VERSION = '1.0'

# CDN cache directives per endpoint.
CACHE_DASHBOARD = 'public, s-maxage=600, stale-while-revalidate=1800'
CACHE_SEARCH = 'public, s-maxage=60, stale-while-revalidate=300'
CACHE_SERVICES = 'public, s-maxage=300, stale-while-revalidate=600'
CACHE_MEETINGS = 'public, s-maxage=300, stale-while-revalidate=600'
CACHE_STATISTICS = 'public, s-maxage=900, stale-while-revalidate=1800'
CACHE_FRESHNESS = 'public, s-maxage=300, stale-while-revalidate=600'
CACHE_EXPORT = 'no-store'

# Pagination defaults
DEFAULT_PAGE = 1
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_LIST_LIMIT = 20

# Caller-facing messages. Upstream detail never goes into these.
MSG_SEARCH_QUERY_REQUIRED = 'Search query is required'
MSG_DASHBOARD_FAILED = 'Failed to fetch dashboard data'
MSG_SEARCH_FAILED = 'Failed to search civic data'
MSG_SERVICES_FAILED = 'Failed to fetch civic services'
MSG_STATISTICS_FAILED = 'Failed to fetch civic statistics'
MSG_MEETINGS_FAILED = 'Failed to fetch civic meetings'
MSG_FRESHNESS_FAILED = 'Failed to fetch data freshness'
MSG_EXPORT_FAILED = 'Failed to export civic data'

EXPORT_TYPES = frozenset({'services', 'meetings', 'statistics', 'pages'})
EXPORT_FORMATS = frozenset({'json', 'csv'})
