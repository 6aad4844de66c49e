"""Pytest configuration.

Puts the project root on ``sys.path`` and points the audit trail at a
throwaway SQLite file before anything from ``inventory`` is imported.
"""

import os
import sys
import tempfile

# A file rather than sqlite:// so every connection of the app engine sees the same tables
_DB_DIR = tempfile.mkdtemp(prefix="carbon-inventory-tests-")
os.environ.setdefault(
    "CARBON_INVENTORY_DB_URL", f"sqlite:///{os.path.join(_DB_DIR, 'audit.db')}"
)

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inventory.database import Base
import inventory.models  # noqa: F401  registers ApprovalLog on Base


@pytest.fixture
def session():
    """Isolated SQLAlchemy session on a fresh in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, future=True)
    with Session() as s:
        yield s
    engine.dispose()


@pytest.fixture
def data_dir():
    return os.path.join(PROJECT_ROOT, "data")
