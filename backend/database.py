"""
Database configuration and schema management for the snake game.

This module provides SQLite connection management with environment-aware
path selection and schema initialization.
"""

import os
import sqlite3
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def get_database_path() -> str:
    """
    Determine the database path.

    Returns:
        Path to the SQLite database file.
        - SNAKE_DB_PATH if set (its directory is created when missing)
        - otherwise backend/snake.db
    """
    db_path = os.getenv('SNAKE_DB_PATH')
    if db_path:
        parent = os.path.dirname(db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        return db_path

    backend_dir = Path(__file__).parent
    return str(backend_dir / 'snake.db')


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """
    Get a database connection with appropriate settings.

    Returns:
        sqlite3.Connection: Database connection with row factory enabled.
    """
    conn = sqlite3.connect(db_path or get_database_path())
    conn.row_factory = sqlite3.Row  # Enable column access by name
    return conn


def create_schema(cursor: sqlite3.Cursor) -> None:
    """Create all tables. Safe to call repeatedly (IF NOT EXISTS)."""
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS high_scores (
            key TEXT PRIMARY KEY,
            score INTEGER NOT NULL DEFAULT 0 CHECK(score >= 0),
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)


def init_database(db_path: Optional[str] = None) -> None:
    """
    Initialize the database schema with all required tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    print(f"Initializing database at: {db_path or get_database_path()}")

    conn = get_connection(db_path)
    cursor = conn.cursor()

    try:
        create_schema(cursor)
        conn.commit()
        print("Database schema initialized successfully")

    except Exception as e:
        conn.rollback()
        print(f"Error initializing database: {e}")
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    # Allow running this module directly to initialize the database
    init_database()
    print(f"Database ready at: {get_database_path()}")
