from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from qr_attendance.config import DB_URL_STRING

connect_args = {}
if DB_URL_STRING.startswith("sqlite"):
    # FastAPI serves sync routes from a threadpool
    connect_args = {"check_same_thread": False}

# Create SQLAlchemy engine
engine = create_engine(DB_URL_STRING, connect_args=connect_args, pool_pre_ping=True)

# Create a configured "Session" class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Declare a base class for your ORM models
Base = declarative_base()


def get_db():
    db = SessionLocal()  # Create a new session
    try:
        yield db  # Yield the session to be used
    finally:
        db.close()  # Close the session when done
