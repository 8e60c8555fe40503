"""
Seed civic data: sample services, meetings, statistics, pages and freshness rows.

Usage:
    python scripts/seed_civic.py
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date, datetime, timedelta
from server import app
from models import db, CivicService, CivicMeeting, CivicStatistic, CivicPage, DataFreshness


# (name, description, department, category, online_access)
SERVICES = [
    ('Bin Collection', 'Household waste and recycling collection schedule', 'Environment', 'waste', True),
    ('Bulky Waste Pickup', 'Book a collection for large household items', 'Environment', 'waste', True),
    ('Planning Applications', 'Submit and track planning applications', 'Planning', 'planning', True),
    ('Parking Permits', 'Apply for a resident parking permit', 'Highways', 'transport', True),
    ('Park Bookings', 'Reserve pitches and pavilions in council parks', 'Parks', 'leisure', False),
    ('Allotments', 'Join the waiting list for a council allotment', 'Parks', 'leisure', False),
    ('Council Tax', 'Pay council tax and apply for discounts', 'Finance', 'finance', True),
    ('Library Membership', 'Register for a library card', 'Libraries', 'leisure', False),
]

# (title, committee, days from today, status, public_access, attendees, decisions)
MEETINGS = [
    ('Full Council', 'Full Council', -30, 'held', True, 42, 7),
    ('Planning Committee', 'Planning', -14, 'held', True, 11, 5),
    ('Parks and Open Spaces Review', 'Environment', -7, 'held', True, 9, 2),
    ('Budget Scrutiny', 'Finance', 7, 'scheduled', False, 0, 0),
    ('Planning Committee', 'Planning', 14, 'scheduled', True, 0, 0),
    ('Full Council', 'Full Council', 30, 'scheduled', True, 0, 0),
]

# (category, subcategory, metric, value, unit, period)
STATISTICS = [
    ('spending', 'capital', 'total_spend', 1250000.0, 'GBP', '2024-Q1'),
    ('spending', 'revenue', 'total_spend', 3400000.0, 'GBP', '2024-Q1'),
    ('planning', 'applications', 'received', 184.0, 'count', '2024-Q1'),
    ('planning', 'applications', 'approved', 151.0, 'count', '2024-Q1'),
    ('waste', 'recycling', 'recycling_rate', 47.3, 'percent', '2024-Q1'),
    ('population', 'residents', 'estimate', 28650.0, 'count', '2023'),
]

# (path, title, description, category, quality)
PAGES = [
    ('/bins', 'Bins and recycling', 'Collection days, missed bins and recycling rules', 'waste', 0.92),
    ('/parks', 'Parks and open spaces', 'Opening times and facilities in council parks', 'leisure', 0.81),
    ('/planning', 'Planning and building control', 'How to apply for planning permission', 'planning', 0.88),
    ('/council-tax', 'Council tax', 'Bands, payments and discounts', 'finance', 0.76),
    ('/news/park-refurbishment', 'Park refurbishment update', 'Progress on the park playground works', 'leisure', 0.55),
]

BASE_URL = 'https://www.example-council.gov.uk'


def seed_services():
    added = 0
    for name, description, department, category, online in SERVICES:
        if CivicService.query.filter_by(name=name).first():
            continue
        db.session.add(CivicService(
            name=name,
            description=description,
            department=department,
            category=category,
            online_access=online,
        ))
        added += 1
    db.session.commit()
    print(f"  Services: {added} rows added ({len(SERVICES)} total)")


def seed_meetings():
    today = date.today()
    added = 0
    for title, committee, offset, status, public, attendees, decisions in MEETINGS:
        meeting_date = today + timedelta(days=offset)
        if CivicMeeting.query.filter_by(title=title, meeting_date=meeting_date).first():
            continue
        db.session.add(CivicMeeting(
            title=title,
            committee=committee,
            meeting_date=meeting_date,
            status=status,
            public_access=public,
            attendee_count=attendees,
            decision_count=decisions,
        ))
        added += 1
    db.session.commit()
    print(f"  Meetings: {added} rows added ({len(MEETINGS)} total)")


def seed_statistics():
    added = 0
    for category, subcategory, metric, value, unit, period in STATISTICS:
        existing = CivicStatistic.query.filter_by(
            category=category, subcategory=subcategory, metric=metric, period=period
        ).first()
        if existing:
            continue
        db.session.add(CivicStatistic(
            category=category,
            subcategory=subcategory,
            metric=metric,
            value=value,
            unit=unit,
            period=period,
            date_recorded=date.today(),
            source_document=f'{BASE_URL}/open-data/{category}.csv',
        ))
        added += 1
    db.session.commit()
    print(f"  Statistics: {added} rows added ({len(STATISTICS)} total)")


def seed_pages():
    now = datetime.utcnow()
    added = 0
    for path, title, description, category, quality in PAGES:
        url = BASE_URL + path
        if CivicPage.query.filter_by(url=url).first():
            continue
        db.session.add(CivicPage(
            url=url,
            title=title,
            description=description,
            category=category,
            content_length=len(description) * 40,
            quality_score=quality,
            crawled_at=now,
            indexed_at=now,
        ))
        added += 1
    db.session.commit()
    print(f"  Pages: {added} rows added ({len(PAGES)} total)")


def refresh_freshness():
    now = datetime.utcnow()
    counts = {
        'services': CivicService.query.count(),
        'meetings': CivicMeeting.query.count(),
        'statistics': CivicStatistic.query.count(),
        'pages': CivicPage.query.count(),
    }
    for data_type, count in counts.items():
        row = DataFreshness.query.filter_by(data_type=data_type).first()
        if row is None:
            row = DataFreshness(data_type=data_type)
            db.session.add(row)
        row.record_count = count
        row.last_import = now
        row.data_age_days = 0
        row.freshness_status = 'fresh'
    db.session.commit()
    print(f"  Freshness: {len(counts)} data types marked fresh")


def main():
    print("=== Civic Data Seed Script ===\n")

    with app.app_context():
        db.create_all()

        print("[1/5] Seeding services...")
        seed_services()
        print("[2/5] Seeding meetings...")
        seed_meetings()
        print("[3/5] Seeding statistics...")
        seed_statistics()
        print("[4/5] Seeding pages...")
        seed_pages()
        print("[5/5] Updating freshness...")
        refresh_freshness()

    print("\nDone.")


if __name__ == '__main__':
    main()
