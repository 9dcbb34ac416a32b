"""Tests for simbook/repositories/sim_contact_repository.py."""

from contracts.phonebook import Contact
from simbook.repositories import SimContactRepository
from tests.helpers import FakeRecordStore


class TestList:
    """Test reading contacts."""

    def test_empty_store(self):
        repo = SimContactRepository(FakeRecordStore())
        assert repo.list() == []

    def test_maps_columns_and_sorts_by_name(self):
        store = FakeRecordStore()
        store.insert({"tag": "Carol", "number": "3"})
        store.insert({"tag": "Alice", "number": "1"})
        store.insert({"tag": "Bob", "number": "2"})

        contacts = SimContactRepository(store).list()

        assert [c.name for c in contacts] == ["Alice", "Bob", "Carol"]
        assert contacts[0] == Contact(id="2", name="Alice", number="1")

    def test_ids_are_strings(self, sim_store):
        sim_store.insert({"tag": "Alice", "number": "1"})
        (contact,) = SimContactRepository(sim_store).list()
        assert isinstance(contact.id, str)


class TestCreate:
    """Test inserting contacts."""

    def test_accepted_insert(self):
        store = FakeRecordStore()
        assert SimContactRepository(store).create(Contact(None, "Alice", "555")) is True
        assert store.inserts == [{"tag": "Alice", "number": "555"}]

    def test_rejected_insert_is_false(self):
        store = FakeRecordStore(name_limit=3)
        assert SimContactRepository(store).create(Contact(None, "Alice", "555")) is False

    def test_id_is_not_sent(self):
        store = FakeRecordStore()
        SimContactRepository(store).create(Contact("42", "Alice", "555"))
        assert "_id" not in store.inserts[0]


class TestDelete:
    """Test exact-match deletion."""

    def test_deletes_by_name_and_number(self):
        store = FakeRecordStore()
        repo = SimContactRepository(store)
        repo.create(Contact(None, "Alice", "555"))

        assert repo.delete(Contact("999", "Alice", "555")) is True
        assert store.deletes == [{"tag": "Alice", "number": "555"}]
        assert store.rows == []

    def test_no_match_is_false(self):
        store = FakeRecordStore()
        repo = SimContactRepository(store)
        repo.create(Contact(None, "Alice", "555"))

        assert repo.delete(Contact(None, "Alice", "556")) is False
        assert len(store.rows) == 1

    def test_match_is_case_sensitive(self, sim_store):
        repo = SimContactRepository(sim_store)
        repo.create(Contact(None, "Alice", "555"))

        assert repo.delete(Contact(None, "alice", "555")) is False
        assert repo.delete(Contact(None, "Alice", "555")) is True
