import logging
import os

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Load .env file to get DB connection string
load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./parish.db")
SQL_ECHO = os.getenv("SQL_ECHO", "").lower() in {"1", "true", "yes"}

# SQLite connections are handed across threads by the test client
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

logger.debug("DATABASE_URL = %s", DATABASE_URL)

engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

