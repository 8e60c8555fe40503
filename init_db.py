"""
Initialize the database with tables and freshness bookkeeping rows
"""
import logging

from server import app
from models import db, DataFreshness

logger = logging.getLogger(__name__)

DATA_TYPES = ('services', 'meetings', 'statistics', 'pages')


def init_database():
    """Create all database tables"""
    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

        added = 0
        for data_type in DATA_TYPES:
            if DataFreshness.query.filter_by(data_type=data_type).first() is None:
                db.session.add(DataFreshness(data_type=data_type, freshness_status='unknown'))
                added += 1
        db.session.commit()

        if added:
            logger.info("Seeded %d data_freshness rows", added)
        else:
            logger.info("data_freshness rows already exist, skipping seed")


if __name__ == '__main__':
    init_database()
