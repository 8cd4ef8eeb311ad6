from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from matrimony.core import config
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()

connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(config.DATABASE_URL, connect_args=connect_args)
Session = sessionmaker(bind=engine)


def init_db():
    """Create all tables that do not exist yet"""
    Base.metadata.create_all(engine)
    logger.info("Database tables ensured")
