"""Domain services: stock ledger, allocation, aggregates and workflow rules."""

from aurora.core.services.aggregator import (
    OrderTotals,
    apply_order_totals,
    compute_order_totals,
    recompute_order_totals,
    recompute_task_wage,
)
from aurora.core.services.allocation import AllocationEngine, apply_allocation, apply_release
from aurora.core.services.notifier import NotificationService
from aurora.core.services.optimistic import OptimisticExecutor
from aurora.core.services.sequences import CodeKind, SequenceGenerator, format_code
from aurora.core.services.status_guard import (
    ORDER_TRANSITIONS,
    TASK_TRANSITIONS,
    can_transition,
    transition,
)
from aurora.core.services.stock_ledger import (
    LedgerUpdate,
    StockLedger,
    apply_adjustment,
    apply_issue,
    apply_restock,
    recompute_alerts,
)
from aurora.core.services.task_progress import apply_progress

__all__ = [
    "OrderTotals",
    "apply_order_totals",
    "compute_order_totals",
    "recompute_order_totals",
    "recompute_task_wage",
    "AllocationEngine",
    "apply_allocation",
    "apply_release",
    "NotificationService",
    "OptimisticExecutor",
    "CodeKind",
    "SequenceGenerator",
    "format_code",
    "ORDER_TRANSITIONS",
    "TASK_TRANSITIONS",
    "can_transition",
    "transition",
    "LedgerUpdate",
    "StockLedger",
    "apply_adjustment",
    "apply_issue",
    "apply_restock",
    "recompute_alerts",
    "apply_progress",
]
