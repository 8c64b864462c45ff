"""Production task endpoints."""

from fastapi import APIRouter, Depends, Query, status

from aurora.api.dependencies import (
    get_actor,
    get_change_task_status_use_case,
    get_create_task_use_case,
    get_exec,
    get_record_progress_use_case,
)
from aurora.application.dto.requests import (
    ChangeTaskStatusRequest,
    CreateTaskRequest,
    TaskProgressRequest,
)
from aurora.application.dto.responses import ErrorResponse, TaskListResponse
from aurora.application.use_cases import (
    ChangeTaskStatusUseCase,
    CreateTaskUseCase,
    RecordTaskProgressUseCase,
)
from aurora.core.entities import Actor, Task, TaskStatus, UserRole
from aurora.core.services import OptimisticExecutor

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def visibility_filter(actor: Actor) -> dict[str, str]:
    """Contractors see their own tasks, employees the tasks they created."""
    if actor.role == UserRole.CONTRACTOR:
        return {"contractorId": actor.user_id}
    if actor.role == UserRole.INTERNAL_EMPLOYEE:
        return {"createdBy": actor.user_id}
    return {}


@router.post(
    "",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_task(
    request: CreateTaskRequest,
    actor: Actor = Depends(get_actor),
    use_case: CreateTaskUseCase = Depends(get_create_task_use_case),
) -> Task:
    """Assign an order item to a contractor. The task starts pending approval."""
    return await use_case.execute(request, actor)


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    status_filter: TaskStatus | None = Query(default=None, alias="status"),
    order_id: str | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(get_actor),
    executor: OptimisticExecutor = Depends(get_exec),
) -> TaskListResponse:
    """List the tasks visible to the acting user."""
    filters: dict = visibility_filter(actor)
    if status_filter:
        filters["status"] = status_filter
    if order_id:
        filters["orderId"] = order_id
    tasks = await executor.find(Task, filters, limit=limit, offset=offset)
    return TaskListResponse(
        items=tasks,
        count=len(tasks),
        limit=limit,
        offset=offset,
        has_more=len(tasks) == limit,
    )


@router.get(
    "/{task_id}",
    response_model=Task,
    responses={404: {"model": ErrorResponse}},
)
async def get_task(
    task_id: str,
    executor: OptimisticExecutor = Depends(get_exec),
) -> Task:
    return await executor.get(Task, task_id)


@router.post(
    "/{task_id}/status",
    response_model=Task,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def change_task_status(
    task_id: str,
    request: ChangeTaskStatusRequest,
    actor: Actor = Depends(get_actor),
    use_case: ChangeTaskStatusUseCase = Depends(get_change_task_status_use_case),
) -> Task:
    """Approve, reject, start, complete or cancel a task."""
    return await use_case.execute(task_id, request, actor)


@router.post(
    "/{task_id}/progress",
    response_model=Task,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_progress(
    task_id: str,
    request: TaskProgressRequest,
    actor: Actor = Depends(get_actor),
    use_case: RecordTaskProgressUseCase = Depends(get_record_progress_use_case),
) -> Task:
    """Log a day of work on a task in progress."""
    return await use_case.execute(task_id, request, actor)
