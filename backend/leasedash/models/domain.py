"""
Snapshot records loaded from the property store.
These are the typed rows the analytics engine reads: properties with their
units eagerly loaded, and each unit with its lease history (and tenant).
"""
from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime
from enum import Enum


class PropertyType(str, Enum):
    """Property classification tag."""
    COMMERCIAL = "COMMERCIAL"
    RESIDENTIAL = "RESIDENTIAL"
    MIXED = "MIXED"


class UnitStatus(str, Enum):
    """Current-state status of a unit. Not a history."""
    OCCUPIED = "OCCUPIED"
    VACANT = "VACANT"
    MAINTENANCE = "MAINTENANCE"
    RESERVED = "RESERVED"


class LeaseStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    EXPIRED = "EXPIRED"
    TERMINATED = "TERMINATED"


TERMINAL_LEASE_STATUSES = (LeaseStatus.EXPIRED, LeaseStatus.TERMINATED)


class Tenant(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    bp_code: str
    business_name: str


class Lease(BaseModel):
    """A lease contract. May span several units through the lease_units join."""
    model_config = ConfigDict(frozen=True)

    id: str
    tenant_id: str
    tenant: Optional[Tenant] = None
    start_date: datetime
    end_date: datetime  # last leased day, inclusive
    total_rent_amount: float = 0
    status: LeaseStatus


class Unit(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    property_id: str
    unit_number: str
    total_area: float = 0
    total_rent: float = 0  # monthly
    status: UnitStatus
    leases: List[Lease] = []  # ordered by start date


class Property(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    property_code: str
    property_name: str
    address: str = ""
    property_type: PropertyType
    leasable_area: float = 0
    total_units: Optional[int] = None  # declared, may drift from len(units)
    units: List[Unit] = []
