"""Repository pattern for record store access.

Repositories wrap the raw SIM record store behind typed interfaces so the
capacity discovery and normalization code depends on Contacts, not columns.
"""

from simbook.repositories.base import BaseRepository
from simbook.repositories.sim_contact_repository import SimContactRepository

__all__ = ["BaseRepository", "SimContactRepository"]
