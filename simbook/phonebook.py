"""SIM phonebook facade.

Bundles the contact repository and the capacity discoverer behind one
object, which is what a host application talks to.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from contracts.phonebook import CapacityCache, Contact, RecordStore, StoreIdentitySource
from simbook.cache import JsonCapacityCache
from simbook.capacity import CapacityDiscoverer
from simbook.config import SimbookConfig
from simbook.errors import ConfigurationError
from simbook.repositories.sim_contact_repository import SimContactRepository
from simbook.store import SQLiteSimStore

logger = logging.getLogger(__name__)


@dataclass
class CopyReport:
    """Result of copying contacts onto the card.

    All lists hold normalized contacts.
    """

    created: list[Contact] = field(default_factory=list)
    skipped: list[Contact] = field(default_factory=list)
    failed: list[Contact] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.created) + len(self.skipped) + len(self.failed)


class SimPhonebook:
    """High-level access to a SIM card's contacts."""

    def __init__(
        self,
        store: RecordStore,
        cache: CapacityCache,
        identity_source: StoreIdentitySource | None = None,
    ) -> None:
        """Wire a phonebook around a record store.

        The name limit is resolved immediately, probing the card on a
        cache miss.

        Args:
            store: Raw SIM record store.
            cache: Persistent capacity cache.
            identity_source: Source of the card serial. Defaults to the store
                itself when it can report one.

        Raises:
            ConfigurationError: If no identity source is available.
            StoreIdentityError: If the card reports no identity.
        """
        if identity_source is None:
            if not isinstance(store, StoreIdentitySource):
                raise ConfigurationError(
                    "An identity source is required for stores that cannot report a serial",
                    config_key="identity_source",
                )
            identity_source = store

        self.store = store
        self.repository = SimContactRepository(store)
        self.discoverer = CapacityDiscoverer(self.repository, cache, identity_source)

    @classmethod
    def from_config(cls, config: SimbookConfig) -> SimPhonebook:
        """Open the configured card database and capacity cache."""
        store = SQLiteSimStore(config.store.db_path)
        logger.debug("Opened SIM %s at %s", store.uri, config.store.db_path)
        try:
            return cls(store, JsonCapacityCache(config.cache.path))
        except Exception:
            store.close()
            raise

    @property
    def max_name_length(self) -> int:
        return self.discoverer.max_name_length

    @property
    def store_identity(self) -> str | None:
        return self.discoverer.store_identity

    def contacts(self) -> list[Contact]:
        return self.repository.list()

    def create(self, contact: Contact) -> bool:
        return self.repository.create(contact)

    def delete(self, contact: Contact) -> bool:
        return self.repository.delete(contact)

    def normalize(self, contact: Contact) -> Contact:
        return self.discoverer.normalize(contact)

    def copy_contacts(self, contacts: Iterable[Contact]) -> CopyReport:
        """Normalize contacts and create the ones not already on the card.

        A contact is skipped when a record with the same normalized name and
        number is already stored, or appeared earlier in ``contacts``.
        """
        report = CopyReport()
        present = {(c.name, c.number) for c in self.repository.list()}

        for contact in contacts:
            sim_contact = self.normalize(contact)
            key = (sim_contact.name, sim_contact.number)
            if key in present:
                report.skipped.append(sim_contact)
                continue
            if self.repository.create(sim_contact):
                report.created.append(sim_contact)
                present.add(key)
            else:
                report.failed.append(sim_contact)

        logger.info(
            "Copied %d of %d contact(s) to SIM (%d skipped, %d failed)",
            len(report.created),
            report.total,
            len(report.skipped),
            len(report.failed),
        )
        return report

    def close(self) -> None:
        close = getattr(self.store, "close", None)
        if close is not None:
            close()
