"""
Query-string normalization for the civic endpoints.

Each ``*_options`` builder turns ``request.args`` into the keyword
arguments passed to the civic data collaborator. Optional string fields
are left out entirely when missing or empty.
"""
import logging
import re

from core.civic.constants import DEFAULT_PAGE, DEFAULT_SEARCH_LIMIT, DEFAULT_LIST_LIMIT

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(args, name, default):
    """ASCII base-10 integer from ``args[name]``; malformed or missing values yield ``default``."""
    raw = args.get(name)
    if raw is None or raw == '':
        return default
    if _INT_RE.fullmatch(raw.strip()):
        try:
            return int(raw)
        except ValueError:
            pass  # past the interpreter's int string-length limit
    logger.warning("Ignoring non-integer %s=%r, using %s", name, raw, default)
    return default


def opt_out_flag(args, name):
    """True unless the raw value is exactly 'false'."""
    return args.get(name) != 'false'


def opt_in_flag(args, name):
    """True only if the raw value is exactly 'true'."""
    return args.get(name) == 'true'


def optional_str(args, name):
    return args.get(name) or None


def _with_strings(options, args, fields):
    # fields: iterable of (query param, option key)
    for param, key in fields:
        value = optional_str(args, param)
        if value is not None:
            options[key] = value
    return options


def search_options(args):
    options = {
        'page': parse_int(args, 'page', DEFAULT_PAGE),
        'limit': parse_int(args, 'limit', DEFAULT_SEARCH_LIMIT),
        'include_services': opt_out_flag(args, 'includeServices'),
        'include_meetings': opt_out_flag(args, 'includeMeetings'),
        'include_pages': opt_out_flag(args, 'includePages'),
    }
    return _with_strings(options, args, [('category', 'category')])


def service_options(args):
    options = {
        'page': parse_int(args, 'page', DEFAULT_PAGE),
        'limit': parse_int(args, 'limit', DEFAULT_LIST_LIMIT),
        'online_only': opt_in_flag(args, 'onlineOnly'),
    }
    return _with_strings(options, args, [
        ('category', 'category'),
        ('department', 'department'),
        ('search', 'search'),
    ])


def meeting_options(args):
    options = {
        'page': parse_int(args, 'page', DEFAULT_PAGE),
        'limit': parse_int(args, 'limit', DEFAULT_LIST_LIMIT),
        'public_only': opt_in_flag(args, 'publicOnly'),
    }
    return _with_strings(options, args, [
        ('committee', 'committee'),
        ('status', 'status'),
        ('dateFrom', 'date_from'),
        ('dateTo', 'date_to'),
    ])


def statistics_options(args):
    return _with_strings({}, args, [
        ('category', 'category'),
        ('subcategory', 'subcategory'),
        ('metric', 'metric'),
        ('period', 'period'),
    ])
