"""
Civic data access layer.
Read-only queries over the civic tables, shaped as the JSON envelopes the
public /civic endpoints return.
"""
import logging
import math
import time
from datetime import date

from core.civic.responses import utc_timestamp
from models import db, CivicService, CivicMeeting, CivicStatistic, CivicPage, DataFreshness

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
HIGH_QUALITY_THRESHOLD = 0.7
RECENT_ACTIVITY_LIMIT = 5

EXPORT_SOURCES = {
    'services': (CivicService, 'civic_services', (CivicService.category, CivicService.name)),
    'meetings': (CivicMeeting, 'civic_meetings', (CivicMeeting.meeting_date.desc(),)),
    'statistics': (CivicStatistic, 'civic_statistics', (CivicStatistic.category, CivicStatistic.metric)),
    'pages': (CivicPage, 'civic_pages', (CivicPage.quality_score.desc(),)),
}

CONTENT_TYPES = {
    'json': 'application/json',
    'csv': 'text/csv',
}


def _elapsed_ms(started):
    return int((time.perf_counter() - started) * 1000)


def _normalize_paging(page, limit):
    page = max(int(page or 1), 1)
    limit = min(max(int(limit or 1), 1), MAX_PAGE_SIZE)
    return page, limit


def _page_of(query, total, page, limit):
    """Rows for ``page``; empty without touching the database once the offset is past ``total``."""
    offset = (page - 1) * limit
    if offset >= total:
        return []
    return query.limit(limit).offset(offset).all()


def _paginated(data, total, page, limit, started):
    return {
        'data': data,
        'meta': {
            'total': total,
            'page': page,
            'pageSize': limit,
            'totalPages': math.ceil(total / limit),
            'hasNext': page * limit < total,
            'hasPrev': page > 1,
        },
        'performance': {
            'queryTime': _elapsed_ms(started),
            'timestamp': utc_timestamp(),
        },
    }


def _contains(value):
    return f'%{value}%'


class CivicDataAPI:
    """Civic data queries backed by the Flask-SQLAlchemy session.

    Must be called inside an application context.
    """

    def get_services(self, page=1, limit=20, category=None, department=None,
                     online_only=False, search=None):
        """Paginated civic services, most recently updated first."""
        started = time.perf_counter()
        page, limit = _normalize_paging(page, limit)

        query = CivicService.query
        if category:
            query = query.filter(CivicService.category == category)
        if department:
            query = query.filter(CivicService.department == department)
        if online_only:
            query = query.filter(CivicService.online_access.is_(True))
        if search:
            query = query.filter(db.or_(
                CivicService.name.ilike(_contains(search)),
                CivicService.description.ilike(_contains(search)),
            ))

        total = query.count()
        rows = _page_of(query.order_by(
            CivicService.last_updated.desc(), CivicService.name.asc()
        ), total, page, limit)

        return _paginated([s.to_dict() for s in rows], total, page, limit, started)

    def get_meetings(self, page=1, limit=20, committee=None, status=None,
                     date_from=None, date_to=None, public_only=False):
        """Paginated meetings, newest first. ``date_from``/``date_to`` are inclusive ISO dates."""
        started = time.perf_counter()
        page, limit = _normalize_paging(page, limit)

        query = CivicMeeting.query
        if committee:
            query = query.filter(CivicMeeting.committee == committee)
        if status:
            query = query.filter(CivicMeeting.status == status)
        if date_from:
            query = query.filter(CivicMeeting.meeting_date >= date.fromisoformat(date_from))
        if date_to:
            query = query.filter(CivicMeeting.meeting_date <= date.fromisoformat(date_to))
        if public_only:
            query = query.filter(CivicMeeting.public_access.is_(True))

        total = query.count()
        rows = _page_of(query.order_by(
            CivicMeeting.meeting_date.desc(), CivicMeeting.title.asc()
        ), total, page, limit)

        return _paginated([m.to_dict() for m in rows], total, page, limit, started)

    def get_statistics(self, category=None, subcategory=None, metric=None, period=None):
        query = CivicStatistic.query
        if category:
            query = query.filter(CivicStatistic.category == category)
        if subcategory:
            query = query.filter(CivicStatistic.subcategory == subcategory)
        if metric:
            query = query.filter(CivicStatistic.metric == metric)
        if period:
            query = query.filter(CivicStatistic.period == period)

        rows = query.order_by(
            CivicStatistic.category, CivicStatistic.subcategory, CivicStatistic.metric
        ).all()
        return [s.to_dict() for s in rows]

    def search(self, query, page=1, limit=10, category=None,
               include_services=True, include_meetings=True, include_pages=True):
        """
        Search pages, services and meetings for ``query``.

        Matches are concatenated pages -> services -> meetings, the requested
        page is sliced from the combined list and split back per type.
        """
        started = time.perf_counter()
        page, limit = _normalize_paging(page, limit)
        pattern = _contains(query)

        pages, services, meetings = [], [], []

        if include_pages:
            q = CivicPage.query.filter(db.or_(
                CivicPage.title.ilike(pattern),
                CivicPage.description.ilike(pattern),
            ))
            if category:
                q = q.filter(CivicPage.category == category)
            pages = q.order_by(CivicPage.quality_score.desc(), CivicPage.indexed_at.desc()).all()

        if include_services:
            q = CivicService.query.filter(db.or_(
                CivicService.name.ilike(pattern),
                CivicService.description.ilike(pattern),
            ))
            if category:
                q = q.filter(CivicService.category == category)
            services = q.order_by(CivicService.online_access.desc(), CivicService.name.asc()).all()

        if include_meetings:
            meetings = CivicMeeting.query.filter(db.or_(
                CivicMeeting.title.ilike(pattern),
                CivicMeeting.committee.ilike(pattern),
            )).order_by(CivicMeeting.meeting_date.desc(), CivicMeeting.title.asc()).all()

        combined = (
            [('page', p.to_dict()) for p in pages]
            + [('service', s.to_dict()) for s in services]
            + [('meeting', m.to_dict()) for m in meetings]
        )
        total = len(combined)
        search_time = _elapsed_ms(started)

        offset = (page - 1) * limit
        window = combined[offset:offset + limit]

        def _of(kind):
            return [dict(record, type=kind) for k, record in window if k == kind]

        return _paginated({
            'pages': _of('page'),
            'services': _of('service'),
            'meetings': _of('meeting'),
            'totalResults': total,
            'searchTime': search_time,
        }, total, page, limit, started)

    def get_dashboard_data(self):
        """Overview counts, category breakdowns and recent activity."""
        total_services = CivicService.query.count()
        online_services = CivicService.query.filter(CivicService.online_access.is_(True)).count()
        total_meetings = CivicMeeting.query.count()
        total_pages = CivicPage.query.count()
        avg_quality = db.session.query(db.func.avg(CivicPage.quality_score)).scalar() or 0

        online_case = db.func.sum(db.case((CivicService.online_access.is_(True), 1), else_=0))
        service_count = db.func.count(CivicService.id)
        service_categories = db.session.query(
            CivicService.category, service_count, online_case
        ).group_by(CivicService.category).order_by(service_count.desc()).all()

        public_case = db.func.sum(db.case((CivicMeeting.public_access.is_(True), 1), else_=0))
        meeting_count = db.func.count(CivicMeeting.id)
        meeting_committees = db.session.query(
            CivicMeeting.committee, meeting_count, public_case
        ).group_by(CivicMeeting.committee).order_by(meeting_count.desc()).all()

        page_quality = db.func.avg(CivicPage.quality_score)
        content_quality = db.session.query(
            CivicPage.category, page_quality, db.func.count(CivicPage.id)
        ).group_by(CivicPage.category).order_by(page_quality.desc()).all()

        recent_services = CivicService.query.order_by(
            CivicService.last_updated.desc()
        ).limit(RECENT_ACTIVITY_LIMIT).all()
        upcoming_meetings = CivicMeeting.query.filter(
            CivicMeeting.meeting_date >= date.today()
        ).order_by(CivicMeeting.meeting_date.asc()).limit(RECENT_ACTIVITY_LIMIT).all()
        high_quality_pages = CivicPage.query.filter(
            CivicPage.quality_score > HIGH_QUALITY_THRESHOLD
        ).order_by(
            CivicPage.quality_score.desc(), CivicPage.indexed_at.desc()
        ).limit(RECENT_ACTIVITY_LIMIT).all()

        if total_services:
            digitalization_rate = round(online_services / total_services * 100, 1)
        else:
            digitalization_rate = 0.0

        return {
            'overview': {
                'totalServices': total_services,
                'onlineServices': online_services,
                'totalMeetings': total_meetings,
                'totalPages': total_pages,
                'averageQuality': round(float(avg_quality), 2),
            },
            'serviceCategories': [
                {'category': c, 'count': n, 'onlineCount': int(online or 0)}
                for c, n, online in service_categories
            ],
            'meetingCommittees': [
                {'committee': c, 'count': n, 'publicCount': int(public or 0)}
                for c, n, public in meeting_committees
            ],
            'digitalTransformation': {
                'onlineServices': online_services,
                'offlineServices': total_services - online_services,
                'digitalizationRate': digitalization_rate,
            },
            'contentQuality': [
                {'category': c, 'averageQuality': round(float(q or 0), 2), 'pageCount': n}
                for c, q, n in content_quality
            ],
            'recentActivity': {
                'recentServices': [s.to_dict() for s in recent_services],
                'upcomingMeetings': [m.to_dict() for m in upcoming_meetings],
                'highQualityPages': [p.to_dict() for p in high_quality_pages],
            },
        }

    def get_data_freshness(self):
        rows = DataFreshness.query.order_by(DataFreshness.last_import.desc()).all()
        return [r.to_dict() for r in rows]

    def export_data(self, data_type, fmt='json'):
        """Full table dump for ``data_type``. Returns {data, filename, contentType}."""
        if data_type not in EXPORT_SOURCES:
            raise ValueError(f'Unknown export type: {data_type}')
        if fmt not in CONTENT_TYPES:
            raise ValueError(f'Unknown export format: {fmt}')

        model, table_name, ordering = EXPORT_SOURCES[data_type]
        rows = model.query.order_by(*ordering).all()
        filename = f'{table_name}_export_{date.today().isoformat()}.{fmt}'
        logger.info("Exported %d rows from %s as %s", len(rows), table_name, fmt)

        return {
            'data': [r.to_dict() for r in rows],
            'filename': filename,
            'contentType': CONTENT_TYPES[fmt],
        }
