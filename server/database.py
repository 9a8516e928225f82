import sqlite3
from pathlib import Path

from config import DB_PATH


def get_connection(path=None):
    conn = sqlite3.connect(str(path or DB_PATH))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def bootstrap_schema(conn):
    with conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT UNIQUE NOT NULL,
                password_hash TEXT NOT NULL,
                role TEXT NOT NULL DEFAULT 'User',
                blue INTEGER NOT NULL DEFAULT 0,
                bio TEXT NOT NULL DEFAULT ''
            );

            CREATE TABLE IF NOT EXISTS posts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                author_id INTEGER NOT NULL,
                contents TEXT NOT NULL,
                timestamp INTEGER NOT NULL,
                FOREIGN KEY(author_id) REFERENCES users(id)
            );
            """
        )


def remove_database(path: Path):
    Path(path).unlink(missing_ok=True)
