"""
Database configuration and initialization for the Academic Metrics Engine
"""

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine
import logging
import sqlite3

logger = logging.getLogger(__name__)

# Initialize SQLAlchemy instance
db = SQLAlchemy()

@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite"""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

def init_db(app):
    """Initialize database with application context"""
    with app.app_context():
        # Import all models to ensure they are registered
        import models  # noqa: F401

        # Create all tables
        db.create_all()

        logger.info("Database initialized")

def reset_database(app):
    """Reset database - WARNING: This will delete all data"""
    with app.app_context():
        import models  # noqa: F401

        db.drop_all()
        db.create_all()
        logger.warning("Database reset completed")

class DatabaseError(Exception):
    """Raised when the record store rejects a unit of work"""
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message
