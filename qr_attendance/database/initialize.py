# initialize.py
import logging

from qr_attendance.database.session import engine, Base
import qr_attendance.models  # noqa: F401  registers every table on Base.metadata

logger = logging.getLogger(__name__)


def create_tables(bind=engine):
    Base.metadata.create_all(bind=bind)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_tables()
    logger.info("Tables created successfully")
