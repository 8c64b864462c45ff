"""Daily progress reporting on production tasks."""

from datetime import datetime

from aurora.core.entities.document import utcnow
from aurora.core.entities.task import DailyProgress, Task, TaskStatus
from aurora.core.exceptions import ValidationError


def progress_percentage(pieces_completed: int, quantity: int) -> int:
    if quantity <= 0:
        return 0
    return min(100, round(pieces_completed / quantity * 100))


def apply_progress(
    task: Task,
    pieces_completed: int,
    hours_worked: float,
    worker_ids: list[str] | None = None,
    notes: str | None = None,
    at: datetime | None = None,
) -> DailyProgress:
    """
    Append one day of work to a task and refresh its totals.

    Raises:
        ValidationError: The task is not in progress, the figures are
            negative, or the pieces would exceed the task quantity
    """
    if task.status != TaskStatus.IN_PROGRESS:
        raise ValidationError("status", "progress can only be logged on a task in progress", task.status.value)
    if pieces_completed < 0:
        raise ValidationError("pieces_completed", "cannot be negative", pieces_completed)
    if hours_worked < 0:
        raise ValidationError("hours_worked", "cannot be negative", hours_worked)
    if pieces_completed == 0 and hours_worked == 0:
        raise ValidationError("pieces_completed", "nothing to log")

    total_pieces = task.pieces_completed + pieces_completed
    if total_pieces > task.quantity:
        raise ValidationError(
            "pieces_completed",
            f"would bring the task to {total_pieces} of {task.quantity} pieces",
            pieces_completed,
        )

    entry = DailyProgress(
        date=at or utcnow(),
        pieces_completed=pieces_completed,
        hours_worked=hours_worked,
        worker_ids=worker_ids or [],
        notes=notes,
    )
    task.daily_progress.append(entry)
    task.pieces_completed = total_pieces
    task.hours_logged = round(task.hours_logged + hours_worked, 2)
    task.progress_percentage = progress_percentage(total_pieces, task.quantity)
    return entry
