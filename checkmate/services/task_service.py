"""Task service: every task read/write goes through these functions."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from checkmate.core.errors import NotFoundError, RequestError, StorageError, describe_validation_error
from checkmate.models.task import Task, utcnow
from checkmate.schemas.task import TaskCreate, TaskReplace, TaskPatch
from checkmate.services.status import (
    DONE_STATUS,
    resolve_create_status,
    resolve_replace_status,
    validate_patch_status,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100

# Plus grand entier stocké par SQLite (INTEGER signé 64 bits)
MAX_DB_INT = 2**63 - 1

# Champs assignés par le serveur, jamais modifiables par un patch
PROTECTED_FIELDS = ("id", "created_at", "updated_at")


@dataclass
class TaskPage:
    page: int
    limit: int
    total: int
    tasks: List[Task] = field(default_factory=list)


def _to_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def normalize_page(value) -> int:
    page = _to_int(value)
    if page is None or page < 1:
        return DEFAULT_PAGE
    return page


def normalize_limit(value) -> int:
    limit = _to_int(value)
    if limit is None or limit < 1 or limit > MAX_LIMIT:
        return DEFAULT_LIMIT
    return limit


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _commit(db: Session, task: Task, action: str) -> Task:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to {action} task")
        raise StorageError(f"failed to {action} task")
    db.refresh(task)
    return task


def create_task(db: Session, data: TaskCreate) -> Task:
    status = resolve_create_status(data.status)
    task = Task(
        title=data.title,
        description=data.description,
        status=status,
        due_date=data.due_date,
    )
    db.add(task)
    task = _commit(db, task, "create")
    logger.info(f"Created task {task.id}")
    return task


def get_task(db: Session, task_id: int) -> Task:
    if not -MAX_DB_INT <= task_id <= MAX_DB_INT:
        raise NotFoundError("task not found")
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise NotFoundError("task not found")
    return task


def list_tasks(
    db: Session,
    status: Optional[str] = None,
    q: Optional[str] = None,
    page=DEFAULT_PAGE,
    limit=DEFAULT_LIMIT,
) -> TaskPage:
    """Une page de tâches (plus récentes d'abord) + le total filtré.

    Le total ignore page/limit: il compte toutes les lignes qui
    correspondent aux filtres.
    """
    page = normalize_page(page)
    limit = normalize_limit(limit)

    query = db.query(Task)
    if status:
        query = query.filter(Task.status == status)
    if q:
        like = f"%{_escape_like(q)}%"
        query = query.filter(
            or_(Task.title.like(like, escape="\\"), Task.description.like(like, escape="\\"))
        )

    offset = (page - 1) * limit
    try:
        total = query.count()
        # Offset hors plage: page forcément vide
        if offset > MAX_DB_INT:
            tasks = []
        else:
            tasks = (
                query.order_by(Task.created_at.desc(), Task.id.desc())
                .offset(offset)
                .limit(limit)
                .all()
            )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to query tasks")
        raise StorageError("failed to query tasks")

    return TaskPage(page=page, limit=limit, total=total, tasks=tasks)


def recent_tasks(db: Session, limit: int, status: Optional[str] = None, q: Optional[str] = None) -> List[Task]:
    return list_tasks(db, status=status, q=q, page=1, limit=limit).tasks


def replace_task(db: Session, task_id: int, data: TaskReplace) -> Task:
    task = get_task(db, task_id)

    # Quirk conservé: un statut vide/absent laisse le statut actuel,
    # alors que title/description/due_date sont toujours écrasés.
    status = resolve_replace_status(data.status, task.status)

    task.title = data.title
    task.description = data.description
    task.due_date = data.due_date
    task.status = status
    task.updated_at = utcnow()
    return _commit(db, task, "update")


def patch_task(db: Session, task_id: int, payload: dict) -> Task:
    task = get_task(db, task_id)

    changes = {key: value for key, value in payload.items() if key not in PROTECTED_FIELDS}
    if "status" in changes:
        validate_patch_status(changes["status"])

    try:
        data = TaskPatch.model_validate(changes)
    except ValidationError as exc:
        raise RequestError(describe_validation_error(exc.errors()))

    for field_name, value in data.model_dump(exclude_unset=True).items():
        setattr(task, field_name, value)
    task.updated_at = utcnow()
    return _commit(db, task, "patch")


def complete_task(db: Session, task_id: int) -> Task:
    task = get_task(db, task_id)
    task.status = DONE_STATUS
    task.updated_at = utcnow()
    return _commit(db, task, "complete")


def delete_task(db: Session, task_id: int) -> None:
    task = get_task(db, task_id)
    db.delete(task)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to delete task {task_id}")
        raise StorageError("failed to delete task")
    logger.info(f"Deleted task {task_id}")
