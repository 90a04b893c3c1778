# backend/routers/tasks.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.deps import AuthenticatedUser, get_current_user
from backend.models.task import Task
from backend.utils.database import get_db
from backend.utils.errors import ApiError, ValidationFailed, server_error
from backend.utils.response import send_success
from backend.utils.validation import (
    STATUS_ERROR,
    TITLE_EMPTY_ERROR,
    TITLE_REQUIRED_ERROR,
    validate_task_status,
    validate_task_title,
)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])
logger = logging.getLogger("backend.tasks")

TASK_NOT_FOUND = "Task not found or not authorized"


# --- Request Models ---
class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


# --- Helpers ---
def escape_like(term: str) -> str:
    """Make user input a literal LIKE pattern."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_task_query(user_id: str, search: Optional[str] = None, status_filter: Optional[str] = None):
    query = select(Task).where(Task.user_id == user_id)
    if search:
        pattern = f"%{escape_like(search)}%"
        query = query.where(
            or_(
                Task.title.ilike(pattern, escape="\\"),
                Task.description.ilike(pattern, escape="\\"),
            )
        )
    if status_filter:
        query = query.where(Task.status == status_filter)
    return query.order_by(Task.created_at.desc())


async def get_owned_task(db: AsyncSession, task_id: str, user: AuthenticatedUser) -> Task:
    """Missing and foreign tasks look the same to the caller."""
    task = await db.get(Task, task_id)
    if task is None or not task.is_owned_by(user.id):
        raise ApiError(status.HTTP_404_NOT_FOUND, TASK_NOT_FOUND)
    return task


# --- Routes ---
@router.get("")
async def list_tasks(
    request: Request,
    search: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    try:
        result = await db.execute(build_task_query(current_user.id, search, status_filter))
        tasks = [task.to_dict() for task in result.scalars().all()]
        return send_success(status.HTTP_200_OK, tasks, "Tasks retrieved successfully")
    except Exception as e:
        return server_error(request, e)


@router.get("/{task_id}")
async def get_task(
    task_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    try:
        task = await get_owned_task(db, task_id, current_user)
        return send_success(status.HTTP_200_OK, task.to_dict(), "Task retrieved successfully")
    except ApiError:
        raise
    except Exception as e:
        return server_error(request, e)


@router.post("")
async def create_task(
    payload: TaskCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    errors = []
    if not validate_task_title(payload.title):
        errors.append(TITLE_REQUIRED_ERROR)
    if payload.status is not None and not validate_task_status(payload.status):
        errors.append(STATUS_ERROR)
    if errors:
        raise ValidationFailed(errors)

    try:
        # owner always comes from the token, never from the body
        task = Task(
            user_id=current_user.id,
            title=payload.title,
            description=payload.description or None,
            status=payload.status or "pending",
        )
        db.add(task)
        await db.commit()
        logger.info(f"Task {task.id} created by user {current_user.id}")
        return send_success(status.HTTP_201_CREATED, task.to_dict(), "Task created successfully")
    except Exception as e:
        await db.rollback()
        return server_error(request, e)


@router.put("/{task_id}")
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    supplied = payload.model_fields_set

    errors = []
    if "title" in supplied and not validate_task_title(payload.title):
        errors.append(TITLE_EMPTY_ERROR)
    if "status" in supplied and not validate_task_status(payload.status):
        errors.append(STATUS_ERROR)
    if errors:
        raise ValidationFailed(errors)

    try:
        task = await get_owned_task(db, task_id, current_user)

        # absent fields keep their value; an empty description clears it
        if "title" in supplied:
            task.title = payload.title
        if "description" in supplied:
            task.description = payload.description or None
        if "status" in supplied:
            task.status = payload.status

        await db.commit()
        logger.info(f"Task {task.id} updated by user {current_user.id}")
        return send_success(status.HTTP_200_OK, task.to_dict(), "Task updated successfully")
    except ApiError:
        raise
    except Exception as e:
        await db.rollback()
        return server_error(request, e)


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    try:
        task = await get_owned_task(db, task_id, current_user)
        await db.delete(task)
        await db.commit()
        logger.info(f"Task {task_id} deleted by user {current_user.id}")
        return send_success(status.HTTP_200_OK, None, "Task deleted successfully")
    except ApiError:
        raise
    except Exception as e:
        await db.rollback()
        return server_error(request, e)
