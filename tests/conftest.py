"""
Pytest configuration and shared fixtures for Civic Data API tests
"""
import pytest
import os
import sys
import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Point the app at a throwaway database before it is imported
_db_fd, _db_path = tempfile.mkstemp(suffix='.db')
os.environ['DATABASE_URL'] = f'sqlite:///{_db_path}'
os.environ['TESTING'] = 'true'


@pytest.fixture(scope='session')
def app():
    """Create and configure a test Flask application instance"""
    from server import app as flask_app
    from models import db
    from rate_limiter import limiter

    flask_app.config.update({
        'TESTING': True,
    })

    # Disable rate limiting for tests (must be done after init_limiter ran)
    limiter.enabled = False

    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()

    os.close(_db_fd)
    os.unlink(_db_path)


@pytest.fixture(autouse=True)
def _clean_db(app):
    """Clean up rows between tests."""
    from models import db
    yield
    db.session.rollback()
    for table in reversed(db.metadata.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()


@pytest.fixture(scope='function')
def client(app):
    """Create a test client for the Flask application"""
    return app.test_client()


def _envelope(data, query_time=12):
    return {
        'data': data,
        'meta': {'total': 0, 'page': 1, 'pageSize': 20, 'totalPages': 0,
                 'hasNext': False, 'hasPrev': False},
        'performance': {'queryTime': query_time, 'timestamp': '2024-01-01T00:00:00.000Z'},
    }


@pytest.fixture
def civic_api(app):
    """Swap a MagicMock in as the civic data collaborator."""
    from core.civic.registry import EXTENSION_KEY

    stub = MagicMock(name='civic_api')
    stub.get_dashboard_data.return_value = {'overview': {'totalServices': 0}}
    stub.search.return_value = _envelope(
        {'pages': [], 'services': [], 'meetings': [], 'totalResults': 0, 'searchTime': 3},
        query_time=7,
    )
    stub.get_services.return_value = _envelope([])
    stub.get_meetings.return_value = _envelope([])
    stub.get_statistics.return_value = []
    stub.get_data_freshness.return_value = []
    stub.export_data.return_value = {
        'data': [], 'filename': 'civic_services_export_2024-01-01.json',
        'contentType': 'application/json',
    }

    original = app.extensions[EXTENSION_KEY]
    app.extensions[EXTENSION_KEY] = stub
    yield stub
    app.extensions[EXTENSION_KEY] = original


@pytest.fixture
def civic_data(app):
    """Seed a small, known civic dataset."""
    from models import db, CivicService, CivicMeeting, CivicStatistic, CivicPage, DataFreshness

    now = datetime(2024, 3, 1, 12, 0, 0)
    today = date.today()

    services = [
        CivicService(name='Bin Collection', description='Weekly waste collection',
                     department='Environment', category='waste', online_access=True,
                     last_updated=now),
        CivicService(name='Park Bookings', description='Reserve a park pavilion',
                     department='Parks', category='leisure', online_access=False,
                     last_updated=now - timedelta(days=1)),
        CivicService(name='Allotments', description='Allotment waiting list in the park',
                     department='Parks', category='leisure', online_access=True,
                     last_updated=now - timedelta(days=2)),
    ]
    meetings = [
        CivicMeeting(title='Planning Committee', committee='Planning',
                     meeting_date=today - timedelta(days=10), status='held', public_access=True),
        CivicMeeting(title='Parks Review', committee='Environment',
                     meeting_date=today + timedelta(days=5), status='scheduled', public_access=False),
        CivicMeeting(title='Full Council', committee='Full Council',
                     meeting_date=today + timedelta(days=20), status='scheduled', public_access=True),
    ]
    statistics = [
        CivicStatistic(category='spending', subcategory='capital', metric='total_spend',
                       value=1000.0, unit='GBP', period='2024-Q1'),
        CivicStatistic(category='spending', subcategory='revenue', metric='total_spend',
                       value=2500.0, unit='GBP', period='2024-Q1'),
        CivicStatistic(category='waste', subcategory='recycling', metric='recycling_rate',
                       value=47.3, unit='percent', period='2023-Q4'),
    ]
    pages = [
        CivicPage(url='https://council.example/parks', title='Parks and open spaces',
                  description='Facilities in council parks', category='leisure',
                  quality_score=0.9, indexed_at=now),
        CivicPage(url='https://council.example/bins', title='Bins',
                  description='Collection days', category='waste',
                  quality_score=0.6, indexed_at=now),
    ]
    freshness = [
        DataFreshness(data_type='services', record_count=3, last_import=now,
                      data_age_days=0, freshness_status='fresh'),
        DataFreshness(data_type='meetings', record_count=3, last_import=now - timedelta(days=40),
                      data_age_days=40, freshness_status='stale'),
    ]

    for row in services + meetings + statistics + pages + freshness:
        db.session.add(row)
    db.session.commit()

    return {
        'services': services,
        'meetings': meetings,
        'statistics': statistics,
        'pages': pages,
        'freshness': freshness,
    }
