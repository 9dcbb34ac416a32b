"""Tests for simbook/store.py - the SQLite simulated SIM card."""

import sqlite3

import pytest

from contracts.phonebook import RecordStore, StoreIdentitySource
from simbook.config import LEGACY_SIM_ADN_URI
from simbook.errors import ErrorCode, StoreError
from simbook.store import SQLiteSimStore
from tests.helpers import DEFAULT_IDENTITY


class TestProvision:
    """Test card creation and opening."""

    def test_provisioned_card_metadata(self, sim_store):
        assert sim_store.name_limit == 14
        assert sim_store.capacity == 10
        assert sim_store.number_limit == 20
        assert sim_store.uri == "content://icc/adn"
        assert sim_store.get_store_identity() == DEFAULT_IDENTITY

    def test_reopen_existing_card(self, sim_store, sim_path):
        sim_store.insert({"tag": "Alice", "number": "1"})
        with SQLiteSimStore(sim_path) as reopened:
            assert reopened.get_store_identity() == DEFAULT_IDENTITY
            assert len(reopened.query(["tag"])) == 1

    def test_provision_twice_raises(self, sim_store, sim_path):
        with pytest.raises(StoreError) as exc_info:
            SQLiteSimStore.provision(sim_path, "other", name_limit=5, capacity=5)
        assert exc_info.value.details["serial"] == DEFAULT_IDENTITY

    def test_provision_rejects_bad_limits(self, tmp_path):
        with pytest.raises(ValueError):
            SQLiteSimStore.provision(tmp_path / "x.db", "s", name_limit=0, capacity=5)

    def test_card_without_serial(self, tmp_path):
        with SQLiteSimStore.provision(
            tmp_path / "x.db", None, name_limit=5, capacity=5, uri=LEGACY_SIM_ADN_URI
        ) as store:
            assert store.get_store_identity() is None
            assert store.uri == LEGACY_SIM_ADN_URI

    def test_missing_file_not_provisioned(self, tmp_path):
        with pytest.raises(StoreError) as exc_info:
            SQLiteSimStore(tmp_path / "missing.db")
        assert exc_info.value.code == ErrorCode.STORE_NOT_PROVISIONED

    def test_foreign_database_not_provisioned(self, tmp_path):
        path = tmp_path / "other.db"
        conn = sqlite3.connect(str(path))
        conn.execute("CREATE TABLE t (x INTEGER)")
        conn.close()

        with pytest.raises(StoreError) as exc_info:
            SQLiteSimStore(path)
        assert exc_info.value.code == ErrorCode.STORE_NOT_PROVISIONED

    def test_conforms_to_protocols(self, sim_store):
        assert isinstance(sim_store, StoreIdentitySource)
        store: RecordStore = sim_store
        assert store.query(["_id"]) == []


class TestInsert:
    """Test the card's silent rejection rules."""

    def test_accepted_insert_returns_fixed_row_uri(self, sim_store):
        assert sim_store.insert({"tag": "Alice", "number": "+15550100"}) == "content://icc/adn/0"

    def test_name_at_limit_accepted(self, sim_store):
        assert sim_store.insert({"tag": "a" * 14, "number": "1"}) is not None

    def test_name_over_limit_rejected(self, sim_store):
        assert sim_store.insert({"tag": "a" * 15, "number": "1"}) is None
        assert sim_store.query(["tag"]) == []

    @pytest.mark.parametrize("number", ["", "555-0100", "555 0100", "1" * 21, "abc"])
    def test_unstorable_number_rejected(self, sim_store, number):
        assert sim_store.insert({"tag": "Alice", "number": number}) is None

    def test_empty_name_rejected(self, sim_store):
        assert sim_store.insert({"tag": "", "number": "1"}) is None

    def test_unknown_column_rejected(self, sim_store):
        assert sim_store.insert({"tag": "A", "number": "1", "email": "a@b"}) is None

    def test_full_card_rejects(self, sim_store):
        for i in range(10):
            assert sim_store.insert({"tag": f"C{i}", "number": str(i)}) is not None
        assert sim_store.insert({"tag": "Overflow", "number": "1"}) is None


class TestQuery:
    """Test projection and ordering."""

    def test_order_by_name(self, sim_store):
        for name in ["Carol", "Alice", "Bob"]:
            sim_store.insert({"tag": name, "number": "1"})

        rows = sim_store.query(["tag", "number"], order_by="tag")

        assert [r["tag"] for r in rows] == ["Alice", "Bob", "Carol"]
        assert set(rows[0]) == {"tag", "number"}

    def test_unknown_column_raises(self, sim_store):
        with pytest.raises(ValueError):
            sim_store.query(["tag; DROP TABLE adn"])

    def test_unknown_order_column_raises(self, sim_store):
        with pytest.raises(ValueError):
            sim_store.query(["tag"], order_by="rowid DESC")


class TestDelete:
    """Test exact-match, parameterized deletion."""

    def test_removes_all_exact_matches(self, sim_store):
        sim_store.insert({"tag": "Alice", "number": "1"})
        sim_store.insert({"tag": "Alice", "number": "1"})
        sim_store.insert({"tag": "Alice", "number": "2"})

        assert sim_store.delete({"tag": "Alice", "number": "1"}) == 2
        assert [r["number"] for r in sim_store.query(["number"])] == ["2"]

    def test_quotes_are_matched_literally(self, sim_store):
        sim_store.insert({"tag": "Alice", "number": "1"})
        sim_store.insert({"tag": "O'Brien", "number": "2"})

        assert sim_store.delete({"tag": "x' OR '1'='1", "number": "1"}) == 0
        assert sim_store.delete({"tag": "O'Brien", "number": "2"}) == 1
        assert len(sim_store.query(["tag"])) == 1

    def test_empty_filter_raises(self, sim_store):
        with pytest.raises(ValueError):
            sim_store.delete({})

    def test_unknown_filter_column_raises(self, sim_store):
        with pytest.raises(ValueError):
            sim_store.delete({"1=1 OR tag": "x"})
