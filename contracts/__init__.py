"""Contract interfaces for simbook.

This module exports the Protocol interfaces of the SIM phonebook
collaborators. Implementations code against these contracts, not against
each other.
"""

from contracts.phonebook import (
    COLUMN_ID,
    COLUMN_NAME,
    COLUMN_NUMBER,
    CapacityCache,
    Contact,
    RecordStore,
    StoreIdentitySource,
)

__all__ = [
    # Value types
    "Contact",
    # Raw ADN columns
    "COLUMN_ID",
    "COLUMN_NAME",
    "COLUMN_NUMBER",
    # Collaborators
    "RecordStore",
    "CapacityCache",
    "StoreIdentitySource",
]
