"""
Database Schema Definitions for the property store.

Tables mirror the back-office entities the analytics engine reads:
properties, units, tenants, leases and the lease_units join (a lease may
span several units; a unit has many leases over time).

Dates are stored as ISO-8601 timestamps (TEXT).
"""

import sqlite3
from pathlib import Path

from leasedash.config import get_settings


STORE_SCHEMA = """
CREATE TABLE IF NOT EXISTS properties (
    id TEXT PRIMARY KEY,
    property_code TEXT UNIQUE NOT NULL,
    property_name TEXT NOT NULL,
    address TEXT DEFAULT '',
    property_type TEXT NOT NULL,          -- COMMERCIAL | RESIDENTIAL | MIXED
    leasable_area REAL DEFAULT 0,
    total_units INTEGER                   -- declared, administrative
);

CREATE TABLE IF NOT EXISTS units (
    id TEXT PRIMARY KEY,
    property_id TEXT NOT NULL REFERENCES properties(id),
    unit_number TEXT NOT NULL,
    total_area REAL DEFAULT 0,
    total_rent REAL DEFAULT 0,            -- monthly
    status TEXT NOT NULL,                 -- OCCUPIED | VACANT | MAINTENANCE | RESERVED
    UNIQUE(property_id, unit_number)
);

CREATE TABLE IF NOT EXISTS tenants (
    id TEXT PRIMARY KEY,
    bp_code TEXT UNIQUE NOT NULL,
    business_name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS leases (
    id TEXT PRIMARY KEY,
    tenant_id TEXT NOT NULL REFERENCES tenants(id),
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,               -- last leased day, inclusive
    total_rent_amount REAL DEFAULT 0,
    status TEXT NOT NULL                  -- ACTIVE | PENDING | EXPIRED | TERMINATED
);

CREATE TABLE IF NOT EXISTS lease_units (
    lease_id TEXT NOT NULL REFERENCES leases(id),
    unit_id TEXT NOT NULL REFERENCES units(id),
    PRIMARY KEY (lease_id, unit_id)
);

CREATE INDEX IF NOT EXISTS idx_units_property ON units(property_id);
CREATE INDEX IF NOT EXISTS idx_lease_units_unit ON lease_units(unit_id);
CREATE INDEX IF NOT EXISTS idx_leases_dates ON leases(start_date, end_date);
"""


def init_database(db_path: Path = None, schema: str = STORE_SCHEMA) -> None:
    """Initialize a database with the given schema."""
    if db_path is None:
        db_path = get_settings().database_path
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        conn.executescript(schema)
        conn.commit()
        print(f"✅ Initialized database: {db_path}")
    finally:
        conn.close()


if __name__ == "__main__":
    init_database()
