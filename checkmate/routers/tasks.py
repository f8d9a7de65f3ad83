from fastapi import APIRouter, Depends, Query, Body, Response, status
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional

from checkmate.core.database import get_db
from checkmate.schemas.task import TaskCreate, TaskReplace, TaskResponse, TaskListResponse
from checkmate.services import task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task_data: TaskCreate, db: Session = Depends(get_db)):
    return task_service.create_task(db, task_data)


@router.get("", response_model=TaskListResponse)
def list_tasks(
    db: Session = Depends(get_db),
    # page/limit bruts: les valeurs invalides retombent sur les défauts
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    q: Optional[str] = Query(None),
):
    task_page = task_service.list_tasks(db, status=status_filter, q=q, page=page, limit=limit)
    return TaskListResponse.model_validate(task_page)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, db: Session = Depends(get_db)):
    return task_service.get_task(db, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
def replace_task(task_id: int, task_data: TaskReplace, db: Session = Depends(get_db)):
    return task_service.replace_task(db, task_id, task_data)


@router.patch("/{task_id}", response_model=TaskResponse)
def patch_task(task_id: int, payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    return task_service.patch_task(db, task_id, payload)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    task_service.delete_task(db, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{task_id}/complete", response_model=TaskResponse)
def complete_task(task_id: int, db: Session = Depends(get_db)):
    return task_service.complete_task(db, task_id)
