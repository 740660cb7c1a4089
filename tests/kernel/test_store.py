"""
Tests for the collection store and unit of work.

Every test in this module runs against both backends (``any_store``).
"""

import pytest

from erp_kernel.exceptions import NotFoundError, OptimisticLockError
from erp_kernel.store.base import Collections
from erp_modules.partners.models import Partner, PartnerType


def _partner(pid, name="Acme"):
    return Partner(id=pid, name=name, partner_type=PartnerType.CUSTOMER)


class TestGetPut:

    def test_unwritten_collection_is_empty(self, any_store):
        assert any_store.get(Collections.PRODUCTS) == []
        assert any_store.read(Collections.PRODUCTS) == ([], 0)
        assert any_store.is_empty(Collections.PRODUCTS)

    def test_put_then_get(self, any_store):
        any_store.put("things", [{"id": "a"}, {"id": "b"}])
        assert any_store.get("things") == [{"id": "a"}, {"id": "b"}]
        assert any_store.read("things")[1] == 1

    def test_put_bumps_version(self, any_store):
        any_store.put("things", [])
        any_store.put("things", [{"id": "a"}])
        assert any_store.read("things")[1] == 2

    def test_read_returns_independent_copy(self, any_store):
        any_store.put("things", [{"id": "a"}])
        records = any_store.get("things")
        records.append({"id": "b"})
        records[0]["id"] = "mutated"
        assert any_store.get("things") == [{"id": "a"}]


class TestWriteMany:

    def test_stale_version_rejected(self, any_store):
        any_store.put("things", [{"id": "a"}])

        with pytest.raises(OptimisticLockError) as exc_info:
            any_store.write_many({"things": [{"id": "b"}]}, {"things": 0})

        assert exc_info.value.code == "OPTIMISTIC_LOCK_CONFLICT"
        assert any_store.get("things") == [{"id": "a"}]

    def test_conflict_on_one_collection_writes_none(self, any_store):
        any_store.put("left", [{"id": "l"}])
        any_store.put("right", [{"id": "r"}])

        with pytest.raises(OptimisticLockError):
            any_store.write_many(
                {"left": [], "right": []},
                {"left": 1, "right": 99},
            )

        assert any_store.get("left") == [{"id": "l"}]
        assert any_store.get("right") == [{"id": "r"}]


class TestTransaction:

    def test_commit_writes_only_dirty_collections(self, any_store):
        with any_store.transaction("test") as uow:
            uow.records("untouched")
            uow.records("things").append({"id": "x"})
            uow.mark_dirty("things")

        assert any_store.get("things") == [{"id": "x"}]
        assert any_store.read("untouched")[1] == 0

    def test_exception_discards_all_changes(self, any_store):
        any_store.put("things", [{"id": "a"}])

        with pytest.raises(RuntimeError, match="boom"):
            with any_store.transaction("test") as uow:
                uow.records("things").clear()
                uow.mark_dirty("things")
                uow.records("others").append({"id": "o"})
                uow.mark_dirty("others")
                raise RuntimeError("boom")

        assert any_store.get("things") == [{"id": "a"}]
        assert any_store.get("others") == []

    def test_nested_transaction_joins_outer(self, any_store):
        with any_store.transaction("outer") as outer:
            with any_store.transaction("inner") as inner:
                assert inner is outer
                inner.records("things").append({"id": "n"})
                inner.mark_dirty("things")
            # Not yet committed: the outer block owns the commit
            assert any_store.get("things") == []

        assert any_store.get("things") == [{"id": "n"}]

    def test_closed_unit_of_work_refuses_use(self, any_store):
        with any_store.transaction("test") as uow:
            pass
        with pytest.raises(RuntimeError, match="closed"):
            uow.records("things")

    def test_mark_dirty_requires_loaded_collection(self, any_store):
        with pytest.raises(RuntimeError, match="not loaded"):
            with any_store.transaction("test") as uow:
                uow.mark_dirty("never-read")


class TestRepository:

    def test_add_find_replace(self, any_store):
        with any_store.transaction() as uow:
            repo = uow.repository(Collections.PARTNERS, Partner, "Partner")
            repo.add(_partner("P1"))
            repo.add(_partner("P2", "Beta"), prepend=True)

        with any_store.transaction() as uow:
            repo = uow.repository(Collections.PARTNERS, Partner, "Partner")
            assert [p.id for p in repo.all()] == ["P2", "P1"]
            assert repo.get("P1").name == "Acme"
            assert repo.find("nope") is None
            assert repo.exists("P2")
            assert len(repo) == 2
            repo.replace(_partner("P1", "Acme Ltd"))

        assert any_store.get(Collections.PARTNERS)[1]["name"] == "Acme Ltd"

    def test_get_missing_raises_not_found(self, any_store):
        with any_store.transaction() as uow:
            repo = uow.repository(Collections.PARTNERS, Partner, "Partner")
            with pytest.raises(NotFoundError) as exc_info:
                repo.get("P404")

        assert exc_info.value.entity_type == "Partner"
        assert exc_info.value.entity_id == "P404"

    def test_replace_missing_raises_not_found(self, any_store):
        with pytest.raises(NotFoundError):
            with any_store.transaction() as uow:
                uow.repository(Collections.PARTNERS, Partner, "Partner").replace(_partner("P9"))

        assert any_store.get(Collections.PARTNERS) == []

    def test_filter(self, any_store):
        with any_store.transaction() as uow:
            repo = uow.repository(Collections.PARTNERS, Partner, "Partner")
            repo.add(_partner("P1", "Acme"))
            repo.add(_partner("P2", "Beta"))
            assert [p.id for p in repo.filter(lambda p: p.name.startswith("B"))] == ["P2"]
