import os
import sys
from pathlib import Path
import pytest

# Tests use a local sqlite file unless DATABASE_URL is already set
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

# Ensure project root is on sys.path so tests can import 'cutting_tracker' package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from datetime import datetime

from cutting_tracker.db import Base, engine


@pytest.fixture(autouse=True)
def reset_db():
    # Drop all and re-create so the test DB matches the current models exactly
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def now():
    return datetime(2026, 3, 1, 8, 30)


@pytest.fixture
def batch_data():
    return {
        "program_number": "P-100",
        "pattern": "Polo",
        "line_number": "L1",
        "sizes": ["S", "M", "L", "XL", "XXL"],
    }
