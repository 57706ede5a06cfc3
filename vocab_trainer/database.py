"""
Database operations for the vocabulary trainer
"""

# Direct import from the modular structure
from .config import get_database_path
from .core.database.database_manager import DatabaseManager, get_db_manager


# Simple init function
def init_db(database_url=None):
    """Initialize database"""
    return get_db_manager(database_url)


# Clean exports
__all__ = ["DatabaseManager", "get_database_path", "get_db_manager", "init_db"]
