"""Task procedures for the Daily Planner."""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from planner.constants.constants import DATE_PATTERN
from planner.core.config import settings
from planner.core.database import aget_store
from planner.core.limiter import limiter
from planner.core.security import get_current_user
from planner.models.task import Task
from planner.models.user import User
from planner.schemas.taskSchema import (
    TaskCreateRequest,
    TaskDeleteRequest,
    TaskDeleteResponse,
    TaskResponse,
    TaskUpdateRequest,
    check_calendar_date,
)
from planner.services.TaskStore import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/task",
    tags=["task"]
)


def check_task_owner(task: Task, user: User):
    """Reject mutations on tasks owned by someone else."""
    if task.user_id != user.id:
        logger.warning(f"User {user.id} attempted to modify task {task.id} owned by {task.user_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to modify this task"
        )


@router.post("/create", response_model=TaskResponse)
@limiter.limit(settings.RATE_LIMIT)
async def create_task(
    request: Request,
    task_data: TaskCreateRequest,
    current_user: User = Depends(get_current_user),
    store: TaskStore = Depends(aget_store)
):
    """
    Create a task owned by the caller.
    New tasks start not completed and not notified.
    """
    task = await store.create_task(
        user_id=current_user.id,
        name=task_data.name,
        description=task_data.description,
        due_date=task_data.due_date,
        due_time=task_data.due_time,
    )
    logger.info(f"Task {task.id} created for user {current_user.id} on {task.due_date} {task.due_time}")
    return task


@router.get("/listByDate", response_model=List[TaskResponse])
async def list_tasks_by_date(
    date: str = Query(..., pattern=DATE_PATTERN),
    current_user: User = Depends(get_current_user),
    store: TaskStore = Depends(aget_store)
):
    """All of the caller's tasks due on the given date."""
    try:
        check_calendar_date(date)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )
    return await store.get_tasks_by_user_and_date(current_user.id, date)


@router.get("/listAll", response_model=List[TaskResponse])
async def list_all_tasks(
    current_user: User = Depends(get_current_user),
    store: TaskStore = Depends(aget_store)
):
    return await store.get_tasks_by_user(current_user.id)


@router.post("/update", response_model=TaskResponse)
@limiter.limit(settings.RATE_LIMIT)
async def update_task(
    request: Request,
    task_data: TaskUpdateRequest,
    current_user: User = Depends(get_current_user),
    store: TaskStore = Depends(aget_store)
):
    """
    Update the completed / notificationSent flags of one of the caller's tasks.
    Only the flags present in the request are written.
    """
    task = await store.get_task(task_data.id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    check_task_owner(task, current_user)

    updates = task_data.model_dump(exclude={"id"}, exclude_none=True)
    return await store.update_task(task.id, **updates)


@router.post("/delete", response_model=TaskDeleteResponse)
@limiter.limit(settings.RATE_LIMIT)
async def delete_task(
    request: Request,
    task_data: TaskDeleteRequest,
    current_user: User = Depends(get_current_user),
    store: TaskStore = Depends(aget_store)
):
    """
    Delete one of the caller's tasks.
    Deleting an id that does not exist succeeds without doing anything.
    """
    task = await store.get_task(task_data.id)
    if not task:
        return TaskDeleteResponse(deleted=False)
    check_task_owner(task, current_user)

    deleted = await store.delete_task(task.id)
    logger.info(f"Task {task_data.id} deleted by user {current_user.id}")
    return TaskDeleteResponse(deleted=deleted)
