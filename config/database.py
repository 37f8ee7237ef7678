"""
Picks the board's database from the environment.

PostgreSQL is used when DATABASE_URL or DB_HOST is set; otherwise the board
runs on a local SQLite file, which is also what the test suite uses.
"""
import os
import re
from pathlib import Path

DATABASE_URL_PATTERN = re.compile(
    r'postgres(?:ql)?://(?P<user>[^:]+):(?P<password>[^@]+)'
    r'@(?P<host>[^:/]+)(?::(?P<port>\d+))?/(?P<name>.+)'
)


def get_database_config(base_dir: Path) -> dict:
    """
    Build the ``DATABASES['default']`` entry.

    Order of precedence: DATABASE_URL, then DB_HOST with its DB_* siblings,
    then ``<base_dir>/db.sqlite3``.
    """
    database_url = os.getenv('DATABASE_URL', '')
    if database_url.startswith('postgres'):
        return _from_url(database_url)

    if os.getenv('DB_HOST'):
        return _from_env()

    return {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': base_dir / 'db.sqlite3',
    }


def _from_url(url: str) -> dict:
    match = DATABASE_URL_PATTERN.match(url)
    if not match:
        raise ValueError(f"Invalid DATABASE_URL format: {url}")

    return {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': match.group('name'),
        'USER': match.group('user'),
        'PASSWORD': match.group('password'),
        'HOST': match.group('host'),
        'PORT': match.group('port') or '5432',
    }


def _from_env() -> dict:
    config = {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': os.getenv('DB_NAME', 'taskboard'),
        'USER': os.getenv('DB_USER', 'postgres'),
        'HOST': os.getenv('DB_HOST'),
        'PORT': os.getenv('DB_PORT', '5432'),
    }
    # Left out entirely so libpq can fall back to ~/.pgpass
    if os.getenv('DB_PASSWORD'):
        config['PASSWORD'] = os.getenv('DB_PASSWORD')
    return config
