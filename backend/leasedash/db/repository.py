"""
Property store reads for the analytics engine.

Loads an eager snapshot (properties → units → leases → tenant) in a handful
of queries. READ-ONLY: no statement here modifies the store.
"""
import logging
import sqlite3
from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from leasedash.config import get_settings
from leasedash.models import Lease, Property, PropertyType, Tenant, Unit

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The property store could not be read."""


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)


class PropertyRepository:
    """Reads typed snapshot records from the SQLite property store."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path else get_settings().database_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def count_properties(self) -> int:
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT COUNT(*) FROM properties").fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to count properties: {e}") from e
        return row[0]

    def list_properties(
        self,
        property_id: Optional[str] = None,
        property_type: Optional[PropertyType] = None,
    ) -> List[Property]:
        """
        Load properties ordered by name, with units and lease history eager-loaded.

        Args:
            property_id: Restrict to a single property
            property_type: Restrict to one classification tag

        Returns:
            List of Property records; units ordered by unit number,
            each unit's leases ordered by start date.
        """
        where = []
        params: list = []
        if property_id:
            where.append("id = ?")
            params.append(property_id)
        if property_type:
            where.append("property_type = ?")
            params.append(PropertyType(property_type).value)

        sql = """
            SELECT id, property_code, property_name, address, property_type,
                   leasable_area, total_units
            FROM properties
        """
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY property_name ASC"

        try:
            conn = self._connect()
            try:
                property_rows = conn.execute(sql, params).fetchall()
                property_ids = [row["id"] for row in property_rows]
                units_by_property = self._load_units(conn, property_ids)
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to load properties: {e}") from e

        properties = [
            Property(
                id=row["id"],
                property_code=row["property_code"],
                property_name=row["property_name"],
                address=row["address"] or "",
                property_type=PropertyType(row["property_type"]),
                leasable_area=row["leasable_area"] or 0,
                total_units=row["total_units"],
                units=units_by_property.get(row["id"], []),
            )
            for row in property_rows
        ]
        logger.info(f"[STORE] Loaded {len(properties)} properties")
        return properties

    def _load_units(self, conn: sqlite3.Connection, property_ids: List[str]) -> Dict[str, List[Unit]]:
        if not property_ids:
            return {}
        marks = ",".join("?" * len(property_ids))
        unit_rows = conn.execute(f"""
            SELECT id, property_id, unit_number, total_area, total_rent, status
            FROM units
            WHERE property_id IN ({marks})
            ORDER BY unit_number ASC
        """, property_ids).fetchall()

        leases_by_unit = self._load_leases(conn, [row["id"] for row in unit_rows])

        units: Dict[str, List[Unit]] = defaultdict(list)
        for row in unit_rows:
            units[row["property_id"]].append(Unit(
                id=row["id"],
                property_id=row["property_id"],
                unit_number=row["unit_number"],
                total_area=row["total_area"] or 0,
                total_rent=row["total_rent"] or 0,
                status=row["status"],
                leases=leases_by_unit.get(row["id"], []),
            ))
        return units

    def _load_leases(self, conn: sqlite3.Connection, unit_ids: List[str]) -> Dict[str, List[Lease]]:
        if not unit_ids:
            return {}
        marks = ",".join("?" * len(unit_ids))
        rows = conn.execute(f"""
            SELECT lu.unit_id, l.id, l.tenant_id, l.start_date, l.end_date,
                   l.total_rent_amount, l.status,
                   t.bp_code, t.business_name
            FROM lease_units lu
            JOIN leases l ON l.id = lu.lease_id
            LEFT JOIN tenants t ON t.id = l.tenant_id
            WHERE lu.unit_id IN ({marks})
            ORDER BY l.start_date ASC, l.id ASC
        """, unit_ids).fetchall()

        # A lease spanning several units is shared by every unit it covers
        leases: Dict[str, Lease] = {}
        by_unit: Dict[str, List[Lease]] = defaultdict(list)
        for row in rows:
            lease = leases.get(row["id"])
            if lease is None:
                tenant = None
                if row["bp_code"] is not None:
                    tenant = Tenant(
                        id=row["tenant_id"],
                        bp_code=row["bp_code"],
                        business_name=row["business_name"],
                    )
                lease = Lease(
                    id=row["id"],
                    tenant_id=row["tenant_id"],
                    tenant=tenant,
                    start_date=_parse_timestamp(row["start_date"]),
                    end_date=_parse_timestamp(row["end_date"]),
                    total_rent_amount=row["total_rent_amount"] or 0,
                    status=row["status"],
                )
                leases[row["id"]] = lease
            by_unit[row["unit_id"]].append(lease)
        return by_unit
