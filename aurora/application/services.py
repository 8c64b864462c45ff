"""
Service factory functions for dependency injection.

This module wires the SQLite document store to the core services. Use cases
and API dependencies import from here.
"""

from aurora.core.services import (
    AllocationEngine,
    NotificationService,
    OptimisticExecutor,
    SequenceGenerator,
    StockLedger,
)

# Singleton service instances
_executor: OptimisticExecutor | None = None
_stock_ledger: StockLedger | None = None
_allocation_engine: AllocationEngine | None = None
_notification_service: NotificationService | None = None
_sequence_generator: SequenceGenerator | None = None


async def get_executor() -> OptimisticExecutor:
    """Get the optimistic executor bound to the global document store."""
    global _executor
    if _executor is None:
        # Lazy import infrastructure to avoid circular imports
        from aurora.infrastructure.storage.sqlite import get_document_store

        _executor = OptimisticExecutor(await get_document_store())
    return _executor


async def get_stock_ledger() -> StockLedger:
    global _stock_ledger
    if _stock_ledger is None:
        _stock_ledger = StockLedger(await get_executor())
    return _stock_ledger


async def get_allocation_engine() -> AllocationEngine:
    global _allocation_engine
    if _allocation_engine is None:
        _allocation_engine = AllocationEngine(
            await get_executor(), ledger=await get_stock_ledger()
        )
    return _allocation_engine


async def get_notification_service() -> NotificationService:
    global _notification_service
    if _notification_service is None:
        _notification_service = NotificationService(await get_executor())
    return _notification_service


async def get_sequence_generator() -> SequenceGenerator:
    global _sequence_generator
    if _sequence_generator is None:
        _sequence_generator = SequenceGenerator(await get_executor())
    return _sequence_generator


def reset_services() -> None:
    """Drop cached services (for testing)."""
    global _executor, _stock_ledger, _allocation_engine
    global _notification_service, _sequence_generator
    _executor = None
    _stock_ledger = None
    _allocation_engine = None
    _notification_service = None
    _sequence_generator = None
