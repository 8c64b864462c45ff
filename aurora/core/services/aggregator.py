"""
Order and task aggregates.

Totals are always derived from the line items; nothing else writes them.
Item-mutating operations call ``apply_order_totals`` as their last step before
the record is persisted.
"""

from pydantic import BaseModel

from aurora.core.entities.order import Order, OrderItem
from aurora.core.entities.task import Task
from aurora.core.entities.thread_inventory import KG_PRECISION


class OrderTotals(BaseModel):
    """Aggregates derived from an order's items."""

    total_items: int = 0
    total_quantity: int = 0
    total_value: float = 0.0
    total_thread_kg: float = 0.0
    total_labor_hours: float = 0.0
    total_cost: float = 0.0
    estimated_profit: float = 0.0


def _money(value: float) -> float:
    return round(value, 2)


def compute_order_totals(items: list[OrderItem]) -> OrderTotals:
    """Sum the line items. Item ``total_price`` is derived per item first."""
    total_value = sum(item.total_price for item in items)
    thread_kg = sum(a.allocated_kg for item in items for a in item.thread_allocations)
    thread_cost = sum(a.cost for item in items for a in item.thread_allocations)
    total_cost = thread_cost + sum(item.total_wage for item in items)

    return OrderTotals(
        total_items=len(items),
        total_quantity=sum(item.quantity for item in items),
        total_value=_money(total_value),
        total_thread_kg=round(thread_kg, KG_PRECISION),
        total_labor_hours=round(sum(item.estimated_labor_hours for item in items), 2),
        total_cost=_money(total_cost),
        estimated_profit=_money(total_value - total_cost),
    )


def recompute_order_totals(order: Order) -> Order:
    """Return a copy of the order with its aggregates recomputed."""
    totals = compute_order_totals(order.items)
    return order.model_copy(update=totals.model_dump())


def apply_order_totals(order: Order) -> OrderTotals:
    """Recompute the aggregates onto ``order`` in place."""
    totals = compute_order_totals(order.items)
    for field, value in totals.model_dump().items():
        setattr(order, field, value)
    return totals


def recompute_task_wage(task: Task) -> float:
    return _money(task.quantity * task.wage_per_piece)
