"""
Database initialization script.

Run this script to create all required tables in the database
pointed to by DATABASE_URL.
"""
from student_records_db.db import build_engine, get_database_url
from student_records_db.models import Base

# PUBLIC_INTERFACE
def init_db(engine):
    """Initializes the database by creating all tables if they do not exist."""
    Base.metadata.create_all(bind=engine)

if __name__ == "__main__":
    init_db(build_engine(get_database_url()))
    print("Database tables created successfully.")
