"""
Database models for the civic data service
"""
from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def _iso(value):
    return value.isoformat() if value is not None else None


class CivicService(db.Model):
    """A council service residents can use (bin collection, permits, ...)"""
    __tablename__ = 'civic_services'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    description = db.Column(db.Text)
    department = db.Column(db.String(255), index=True)
    category = db.Column(db.String(100), index=True)
    online_access = db.Column(db.Boolean, default=False, nullable=False)
    last_updated = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<CivicService {self.name}>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'department': self.department,
            'category': self.category,
            'online_access': self.online_access,
            'last_updated': _iso(self.last_updated),
            'created_at': _iso(self.created_at),
        }


class CivicMeeting(db.Model):
    """Council or committee meeting"""
    __tablename__ = 'civic_meetings'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(500), nullable=False)
    committee = db.Column(db.String(255), index=True)
    meeting_date = db.Column(db.Date, index=True)
    status = db.Column(db.String(50), index=True)  # 'scheduled', 'held', 'cancelled'
    public_access = db.Column(db.Boolean, default=True, nullable=False)
    attendee_count = db.Column(db.Integer, default=0)
    decision_count = db.Column(db.Integer, default=0)
    last_updated = db.Column(db.DateTime, default=datetime.utcnow)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<CivicMeeting {self.committee} {self.meeting_date}>'

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'committee': self.committee,
            'meeting_date': _iso(self.meeting_date),
            'status': self.status,
            'public_access': self.public_access,
            'attendee_count': self.attendee_count,
            'decision_count': self.decision_count,
            'last_updated': _iso(self.last_updated),
            'created_at': _iso(self.created_at),
        }


class CivicStatistic(db.Model):
    """A single published metric value (e.g. spending / Q1 2024)"""
    __tablename__ = 'civic_statistics'

    id = db.Column(db.Integer, primary_key=True)
    category = db.Column(db.String(100), nullable=False, index=True)
    subcategory = db.Column(db.String(100), index=True)
    metric = db.Column(db.String(100), nullable=False, index=True)
    value = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(50))
    period = db.Column(db.String(50), index=True)
    date_recorded = db.Column(db.Date)
    source_document = db.Column(db.String(1000))
    last_updated = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<CivicStatistic {self.category}/{self.metric}={self.value}>'

    def to_dict(self):
        return {
            'id': self.id,
            'category': self.category,
            'subcategory': self.subcategory,
            'metric': self.metric,
            'value': self.value,
            'unit': self.unit,
            'period': self.period,
            'date_recorded': _iso(self.date_recorded),
            'source_document': self.source_document,
            'last_updated': _iso(self.last_updated),
        }


class CivicPage(db.Model):
    """Crawled council web page, indexed for search"""
    __tablename__ = 'civic_pages'

    id = db.Column(db.Integer, primary_key=True)
    url = db.Column(db.String(1000), unique=True, nullable=False)
    title = db.Column(db.String(500))
    description = db.Column(db.Text)
    category = db.Column(db.String(100), index=True)
    content_length = db.Column(db.Integer, default=0)
    quality_score = db.Column(db.Float, default=0.0, index=True)  # 0..1
    crawled_at = db.Column(db.DateTime)
    indexed_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<CivicPage {self.url}>'

    def to_dict(self):
        return {
            'id': self.id,
            'url': self.url,
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'content_length': self.content_length,
            'quality_score': self.quality_score,
            'crawled_at': _iso(self.crawled_at),
            'indexed_at': _iso(self.indexed_at),
        }


class DataFreshness(db.Model):
    """Import bookkeeping per data type"""
    __tablename__ = 'data_freshness'

    id = db.Column(db.Integer, primary_key=True)
    data_type = db.Column(db.String(50), unique=True, nullable=False)
    record_count = db.Column(db.Integer, default=0)
    last_import = db.Column(db.DateTime, index=True)
    data_age_days = db.Column(db.Integer, default=0)
    freshness_status = db.Column(db.String(20), default='unknown')  # 'fresh', 'stale', 'unknown'

    def __repr__(self):
        return f'<DataFreshness {self.data_type} {self.freshness_status}>'

    def to_dict(self):
        return {
            'dataType': self.data_type,
            'recordCount': self.record_count,
            'lastImport': _iso(self.last_import),
            'dataAge': self.data_age_days,
            'status': self.freshness_status,
        }
