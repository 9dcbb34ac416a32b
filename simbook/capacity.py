"""Maximum contact name length discovery for SIM cards.

SIM cards limit contact name length, the limit differs from card to card,
and the phonebook provider has no way to ask for it. The only way to learn it
is to write probe contacts with decreasing name lengths until the card
accepts one, then delete that probe again.

Probing is destructive and slow, so the result is cached per card identity
(serial number) and never probed again for that card. A failed discovery
(no length accepted) yields 0, which means "do not truncate", and is not
cached so the next lookup retries.

Precondition: nothing else writes to the card while discovery runs.

Usage:
    discoverer = CapacityDiscoverer(repository, cache, store)
    sim_contact = discoverer.normalize(phone_contact)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from contracts.phonebook import CapacityCache, Contact, StoreIdentitySource
from simbook.errors import CacheError, identity_missing
from simbook.repositories.sim_contact_repository import SimContactRepository
from simbook.utils.latency_tracker import track_latency

logger = logging.getLogger(__name__)

PROBE_NAME = "abcdefghijklmnopqrstuvwxyz" * 2
PROBE_NUMBER = "24448888888"
MAX_PROBE_LENGTH = len(PROBE_NAME)

NO_LIMIT = 0


@dataclass(frozen=True)
class DiscoveryResult:
    """Outcome of one probing run.

    Attributes:
        max_name_length: Longest accepted name length, 0 if none was accepted.
        attempts: Name lengths tried, in order.
        cleanup_removed: Whether the cleanup delete removed a record.
        elapsed_ms: Wall time of the run.
    """

    max_name_length: int
    attempts: tuple[int, ...]
    cleanup_removed: bool
    elapsed_ms: float

    @property
    def succeeded(self) -> bool:
        return self.max_name_length > NO_LIMIT


def probe_contact(length: int) -> Contact:
    """Build the trial contact used to test a name length."""
    return Contact(id=None, name=PROBE_NAME[:length], number=PROBE_NUMBER)


class CapacityDiscoverer:
    """Finds, caches and applies the maximum name length of a SIM card.

    Once a positive length is known it is kept for the lifetime of the
    instance. ``normalize`` never touches the store.
    """

    def __init__(
        self,
        repository: SimContactRepository,
        cache: CapacityCache,
        identity_source: StoreIdentitySource,
        *,
        resolve_on_init: bool = True,
    ) -> None:
        """Initialize the discoverer.

        Args:
            repository: Contact access used for probing.
            cache: Persistent identity -> length mapping.
            identity_source: Reports the serial of the attached card.
            resolve_on_init: Look up (or discover) the limit immediately.

        Raises:
            StoreIdentityError: If resolve_on_init is set and the card has
                no identity.
        """
        self._repository = repository
        self._cache = cache
        self._identity_source = identity_source
        self._identity: str | None = None
        self._max_name_length = NO_LIMIT

        if resolve_on_init:
            self.get_max_name_length()

    @property
    def max_name_length(self) -> int:
        """Last known limit, without any I/O. 0 when unknown."""
        return self._max_name_length

    @property
    def store_identity(self) -> str | None:
        """Identity the current limit was resolved for."""
        return self._identity

    def get_max_name_length(self) -> int:
        """Return the longest name the attached card accepts.

        Tries, in order: the value already known to this instance, the
        persistent cache, and finally a probing run. Positive results of a
        probe are written to the cache.

        Returns:
            The limit, or 0 if it could not be determined.

        Raises:
            StoreIdentityError: If the card reports no identity.
        """
        if self._max_name_length > NO_LIMIT:
            return self._max_name_length

        identity = self._identity_source.get_store_identity()
        if not identity:
            raise identity_missing(type(self._identity_source).__name__)
        self._identity = identity

        cached = self._read_cache(identity)
        if cached is not None and cached > NO_LIMIT:
            logger.debug("Using cached name limit %d for SIM %s", cached, identity)
            self._max_name_length = cached
            return cached

        result = self.discover()
        if result.succeeded:
            self._write_cache(identity, result.max_name_length)
        self._max_name_length = result.max_name_length
        return result.max_name_length

    def discover(self) -> DiscoveryResult:
        """Probe the card for its name limit, bypassing the cache.

        Writes probe contacts from MAX_PROBE_LENGTH characters down to 1
        and stops at the first one the card accepts. Exactly one cleanup
        delete is issued for the probe that ended the loop.
        """
        attempts: list[int] = []
        accepted = NO_LIMIT
        trial: Contact | None = None
        start = time.perf_counter()

        with track_latency("capacity_discovery"):
            for length in range(MAX_PROBE_LENGTH, 0, -1):
                trial = probe_contact(length)
                attempts.append(length)
                if self._repository.create(trial):
                    accepted = length
                    break
                logger.debug("SIM rejected probe name of %d chars", length)

            removed = self._repository.delete(trial) if trial is not None else False

        elapsed_ms = (time.perf_counter() - start) * 1000
        if accepted:
            logger.info(
                "Discovered SIM name limit %d after %d probe(s) in %.0fms",
                accepted,
                len(attempts),
                elapsed_ms,
            )
            if not removed:
                logger.warning("Probe contact %r could not be removed", trial.name)
        else:
            logger.warning(
                "SIM accepted no probe contact (%d tried); names will not be truncated",
                len(attempts),
            )

        return DiscoveryResult(
            max_name_length=accepted,
            attempts=tuple(attempts),
            cleanup_removed=removed,
            elapsed_ms=elapsed_ms,
        )

    def normalize(self, contact: Contact) -> Contact:
        """Convert a contact into one the card will accept.

        The id is cleared, dashes are stripped from the number and the name
        is cut to the known limit. With no known limit the name is kept.
        """
        name = contact.name
        if self._max_name_length > NO_LIMIT:
            name = name[: self._max_name_length]
        return Contact(id=None, name=name, number=contact.number.replace("-", ""))

    def _read_cache(self, identity: str) -> int | None:
        try:
            return self._cache.get(identity)
        except CacheError as e:
            logger.warning("Capacity cache unreadable, probing SIM instead: %s", e)
            return None

    def _write_cache(self, identity: str, value: int) -> None:
        try:
            self._cache.put(identity, value)
        except CacheError as e:
            logger.error("Could not cache name limit for SIM %s: %s", identity, e)
