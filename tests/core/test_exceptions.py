"""Tests for the domain exception hierarchy."""

from aurora.core.exceptions import (
    AuroraError,
    ConcurrencyError,
    ConflictError,
    IllegalTransitionError,
    IndeterminateError,
    InsufficientStockError,
    InventoryError,
    NotFoundError,
    OverReleaseError,
    StorageError,
    StoreTimeoutError,
    ValidationError,
)


class TestAuroraError:
    def test_defaults_code_to_class_name(self):
        err = AuroraError("boom")
        assert err.code == "AuroraError"
        assert err.details == {}
        assert str(err) == "boom"

    def test_to_dict(self):
        err = AuroraError("boom", code="X", details={"a": 1})
        assert err.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}


class TestStorageErrors:
    def test_not_found(self):
        err = NotFoundError("orders", "o1")
        assert isinstance(err, StorageError)
        assert err.code == "NOT_FOUND"
        assert err.details == {"collection": "orders", "doc_id": "o1"}

    def test_conflict_carries_versions(self):
        err = ConflictError("threadInventory", "lot1", 3, 4)
        assert err.code == "VERSION_CONFLICT"
        assert err.details["expected_version"] == 3
        assert err.details["actual_version"] == 4

    def test_store_timeout_is_storage_error(self):
        assert isinstance(StoreTimeoutError("get_document", 1.0), StorageError)


class TestLedgerErrors:
    def test_insufficient_stock(self):
        err = InsufficientStockError("lot1", 30.01, 30.0)
        assert isinstance(err, InventoryError)
        assert err.code == "INSUFFICIENT_STOCK"
        assert err.details["requested"] == 30.01
        assert err.details["available"] == 30.0

    def test_over_release(self):
        err = OverReleaseError("lot1", 5.0, 2.0)
        assert isinstance(err, InventoryError)
        assert err.code == "OVER_RELEASE"
        assert err.details["allocated"] == 2.0


class TestWorkflowErrors:
    def test_illegal_transition_exposes_statuses(self):
        err = IllegalTransitionError("task", "t1", "PENDING_APPROVAL", "IN_PROGRESS")
        assert err.current == "PENDING_APPROVAL"
        assert err.attempted == "IN_PROGRESS"
        assert "PENDING_APPROVAL -> IN_PROGRESS" in err.message

    def test_concurrency_and_indeterminate_are_not_storage_errors(self):
        assert not isinstance(ConcurrencyError("orders", "o1", 5), StorageError)
        assert not isinstance(IndeterminateError("update", "orders", "o1", 1.0), StorageError)

    def test_validation_error_truncates_value(self):
        err = ValidationError("notes", "too long", "x" * 500)
        assert len(err.details["value"]) == 100
        assert err.code == "VALIDATION_ERROR"
