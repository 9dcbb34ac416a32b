"""Repository for contacts stored on a SIM card.

Translates between ``Contact`` and the raw ADN columns (``_id``, ``tag``,
``number``) of the record store. The store gives no structured errors, so
create and delete report only success or failure.
"""

from __future__ import annotations

import logging

from contracts.phonebook import COLUMN_ID, COLUMN_NAME, COLUMN_NUMBER, Contact
from simbook.repositories.base import BaseRepository
from simbook.utils.latency_tracker import track_latency

logger = logging.getLogger(__name__)

_PROJECTION = (COLUMN_NAME, COLUMN_NUMBER, COLUMN_ID)


class SimContactRepository(BaseRepository):
    """CRUD access to the SIM phonebook."""

    def list(self) -> list[Contact]:
        """Load every contact on the card, ordered by name ascending.

        Returns:
            Contacts, or an empty list if the store yields no rows.
        """
        with track_latency("sim_query"):
            rows = self.store.query(_PROJECTION, order_by=COLUMN_NAME)

        if not rows:
            return []

        return [
            Contact(
                id=None if row.get(COLUMN_ID) is None else str(row[COLUMN_ID]),
                name=row.get(COLUMN_NAME) or "",
                number=row.get(COLUMN_NUMBER) or "",
            )
            for row in rows
        ]

    def create(self, contact: Contact) -> bool:
        """Insert a contact's name and number.

        The id of ``contact`` is ignored; the card assigns its own.

        Returns:
            True if the store acknowledged the insert. Any rejection,
            including a name the card considers too long, is False.
        """
        values = {COLUMN_NAME: contact.name, COLUMN_NUMBER: contact.number}
        with track_latency("sim_insert", name_length=len(contact.name)):
            row_uri = self.store.insert(values)

        if row_uri is None:
            logger.debug("SIM rejected contact %r (%d chars)", contact.name, len(contact.name))
            return False
        return True

    def delete(self, contact: Contact) -> bool:
        """Delete records whose name and number exactly match ``contact``.

        Matching is case-sensitive on both fields. The id is never used:
        the card does not hand back identifiers on insert.

        Returns:
            True if at least one record was removed.
        """
        where = {COLUMN_NAME: contact.name, COLUMN_NUMBER: contact.number}
        with track_latency("sim_delete"):
            removed = self.store.delete(where)

        if removed:
            logger.debug("Deleted %d SIM record(s) matching %r", removed, contact.name)
        return removed > 0
