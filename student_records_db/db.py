import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

# PUBLIC_INTERFACE
def get_database_url():
    """
    Retrieves the database URL from the environment variable DATABASE_URL.
    """
    load_dotenv()
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise ValueError("DATABASE_URL environment variable not set.")
    return db_url

# PUBLIC_INTERFACE
def build_engine(database_url: str):
    """Creates an engine; in-memory SQLite shares one connection across threads."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, future=True, echo=False, **kwargs)
    return create_engine(database_url, future=True, echo=False, pool_pre_ping=True)

# PUBLIC_INTERFACE
def create_session_factory(engine):
    """Returns a session factory bound to the given engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
