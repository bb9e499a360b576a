"""
Test fixtures for the occupancy analytics backend.

Creates a temporary SQLite store with seed data and points the report
routes at it, so tests never touch a real database.
"""
import sqlite3
import pytest
import tempfile
from datetime import datetime
from pathlib import Path

from httpx import AsyncClient, ASGITransport
from leasedash.main import app
from leasedash.api.reports import get_repository
from leasedash.db.repository import PropertyRepository
from leasedash.db.schema import STORE_SCHEMA
from leasedash.models import CallerSession
from leasedash.services.auth_service import create_token, register_user


# ── Seed data ──────────────────────────────────────────────────────────

HARBOR_ID = "prop_harbor"
CEDAR_ID = "prop_cedar"
WINDOW_START = datetime(2025, 1, 1)
WINDOW_END = datetime(2025, 1, 31)

TEST_USER = "manager"
TEST_PASSWORD = "s3cret-pass"


def _seed_store(db_path: Path):
    """
    Two properties:

    Harbor Point (COMMERCIAL), one unit per status:
      H101 OCCUPIED    rent 3000, ACTIVE lease L1 2024-06-01..2025-05-31
      H102 VACANT      rent 4500, EXPIRED lease L2 2024-01-01..2025-01-10
      H103 MAINTENANCE rent 6000, no leases
      H104 RESERVED    rent 1500, PENDING lease L3 2025-02-01..2026-01-31

    Cedar Court (RESIDENTIAL), two occupied units sharing ACTIVE lease L4.
    """
    conn = sqlite3.connect(str(db_path))
    conn.executescript(STORE_SCHEMA)

    conn.executemany("""
        INSERT INTO properties
            (id, property_code, property_name, address, property_type, leasable_area, total_units)
        VALUES (?, ?, ?, ?, ?, ?, ?)
    """, [
        (HARBOR_ID, "HP-01", "Harbor Point", "1 Quay Road", "COMMERCIAL", 1000.0, 4),
        (CEDAR_ID, "CC-01", "Cedar Court", "22 Cedar Lane", "RESIDENTIAL", 500.0, 3),
    ])

    conn.executemany("""
        INSERT INTO units (id, property_id, unit_number, total_area, total_rent, status)
        VALUES (?, ?, ?, ?, ?, ?)
    """, [
        ("H101", HARBOR_ID, "101", 100.0, 3000.0, "OCCUPIED"),
        ("H102", HARBOR_ID, "102", 150.0, 4500.0, "VACANT"),
        ("H103", HARBOR_ID, "103", 200.0, 6000.0, "MAINTENANCE"),
        ("H104", HARBOR_ID, "104", 50.0, 1500.0, "RESERVED"),
        ("C1", CEDAR_ID, "1", 80.0, 1200.0, "OCCUPIED"),
        ("C2", CEDAR_ID, "2", 80.0, 1200.0, "OCCUPIED"),
    ])

    conn.executemany("INSERT INTO tenants (id, bp_code, business_name) VALUES (?, ?, ?)", [
        ("T1", "BP-001", "Anchor Coffee"),
        ("T2", "BP-002", "Bright Optics"),
        ("T3", "BP-003", "Copper Kitchen"),
        ("T4", "BP-004", "Delta Family"),
    ])

    conn.executemany("""
        INSERT INTO leases (id, tenant_id, start_date, end_date, total_rent_amount, status)
        VALUES (?, ?, ?, ?, ?, ?)
    """, [
        ("L1", "T1", "2024-06-01T00:00:00", "2025-05-31T00:00:00", 3000.0, "ACTIVE"),
        ("L2", "T2", "2024-01-01T00:00:00", "2025-01-10T00:00:00", 4500.0, "EXPIRED"),
        ("L3", "T3", "2025-02-01T00:00:00", "2026-01-31T00:00:00", 1500.0, "PENDING"),
        ("L4", "T4", "2024-01-01T00:00:00", "2025-12-31T00:00:00", 2400.0, "ACTIVE"),
    ])

    conn.executemany("INSERT INTO lease_units (lease_id, unit_id) VALUES (?, ?)", [
        ("L1", "H101"),
        ("L2", "H102"),
        ("L3", "H104"),
        ("L4", "C1"),
        ("L4", "C2"),
    ])

    conn.commit()
    conn.close()


# ── Fixtures ───────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def test_db_dir():
    """Create a temporary directory with a seeded store and an empty one."""
    with tempfile.TemporaryDirectory(prefix="leasedash_test_") as tmpdir:
        tmpdir_path = Path(tmpdir)
        _seed_store(tmpdir_path / "store.db")

        conn = sqlite3.connect(str(tmpdir_path / "empty.db"))
        conn.executescript(STORE_SCHEMA)
        conn.commit()
        conn.close()

        yield tmpdir_path


@pytest.fixture
def repository(test_db_dir) -> PropertyRepository:
    return PropertyRepository(test_db_dir / "store.db")


@pytest.fixture
def empty_repository(test_db_dir) -> PropertyRepository:
    return PropertyRepository(test_db_dir / "empty.db")


@pytest.fixture
def session() -> CallerSession:
    return CallerSession(user_id=TEST_USER, display_name="Portfolio Manager")


@pytest.fixture(scope="session")
def auth_token():
    register_user(TEST_USER, TEST_PASSWORD, "Portfolio Manager")
    return create_token({"username": TEST_USER, "display_name": "Portfolio Manager"})


@pytest.fixture
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def client(repository):
    """Async test client for the FastAPI app, reading the seeded store."""
    app.dependency_overrides[get_repository] = lambda: repository
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_repository, None)
