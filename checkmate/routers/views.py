"""
HTML routes: full index page and list fragments.

Fragments are swapped in place by htmx after create/complete/delete; they
always re-render the current top of the list instead of patching rows.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request, Form, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from sqlalchemy.orm import Session

from checkmate.core.config import settings
from checkmate.core.database import get_db
from checkmate.core.errors import AppError, RequestError, describe_validation_error
from checkmate.schemas.task import TaskCreate
from checkmate.services import task_service
from checkmate.services.status import DEFAULT_STATUS, TASK_STATUSES

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

router = APIRouter(tags=["ui"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def format_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")


templates.env.filters["format_date"] = format_date


def _context(db: Session, status_filter: Optional[str] = None, q: Optional[str] = None, error: Optional[str] = None):
    return {
        "tasks": task_service.recent_tasks(db, settings.INDEX_PAGE_SIZE, status=status_filter, q=q),
        "statuses": sorted(TASK_STATUSES),
        "filters": {"status": status_filter or "", "q": q or ""},
        "error": error,
    }


def _render_list(request: Request, db: Session, status_code: int = status.HTTP_200_OK, error: Optional[str] = None):
    return templates.TemplateResponse(
        request,
        "_task_list.html",
        _context(db, error=error),
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    db: Session = Depends(get_db),
    status_filter: Optional[str] = Query(None, alias="status"),
    q: Optional[str] = Query(None),
):
    """Page complète: formulaire + liste"""
    return templates.TemplateResponse(request, "index.html", _context(db, status_filter, q))


@router.get("/ui/tasks", response_class=HTMLResponse)
def task_list_fragment(
    request: Request,
    db: Session = Depends(get_db),
    status_filter: Optional[str] = Query(None, alias="status"),
    q: Optional[str] = Query(None),
):
    return templates.TemplateResponse(request, "_task_list.html", _context(db, status_filter, q))


@router.post("/ui/tasks", response_class=HTMLResponse)
def create_task_fragment(
    request: Request,
    db: Session = Depends(get_db),
    title: str = Form(""),
    description: Optional[str] = Form(None),
    due_date: Optional[str] = Form(None),
    task_status: Optional[str] = Form(None, alias="status"),
):
    try:
        try:
            data = TaskCreate(
                title=title,
                description=description or None,
                due_date=due_date or None,
                status=task_status or None,
            )
        except ValidationError as exc:
            raise RequestError(describe_validation_error(exc.errors()))
        task_service.create_task(db, data)
    except AppError as exc:
        return _render_list(request, db, status_code=exc.status_code, error=exc.message)
    return _render_list(request, db, status_code=status.HTTP_201_CREATED)


@router.post("/ui/tasks/{task_id}/complete", response_class=HTMLResponse)
def complete_task_fragment(task_id: int, request: Request, db: Session = Depends(get_db)):
    try:
        task_service.complete_task(db, task_id)
    except AppError as exc:
        return _render_list(request, db, status_code=exc.status_code, error=exc.message)
    return _render_list(request, db)


@router.post("/ui/tasks/{task_id}/delete", response_class=HTMLResponse)
def delete_task_fragment(task_id: int, request: Request, db: Session = Depends(get_db)):
    try:
        task_service.delete_task(db, task_id)
    except AppError as exc:
        return _render_list(request, db, status_code=exc.status_code, error=exc.message)
    return _render_list(request, db)


@router.post("/add")
def add_task_classic(
    request: Request,
    db: Session = Depends(get_db),
    title: str = Form(""),
    description: Optional[str] = Form(None),
    due_date: Optional[str] = Form(None),
):
    """Création sans JS: statut pending, date illisible ignorée, redirection vers /"""
    due = None
    if due_date:
        try:
            due = date.fromisoformat(due_date)
        except ValueError:
            logger.info(f"Ignoring unparsable due date {due_date!r}")

    if not title:
        return templates.TemplateResponse(
            request,
            "index.html",
            _context(db, error="title is required"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    data = TaskCreate(title=title, description=description, due_date=due, status=DEFAULT_STATUS)
    try:
        task_service.create_task(db, data)
    except AppError as exc:
        return templates.TemplateResponse(
            request,
            "index.html",
            _context(db, error=exc.message),
            status_code=exc.status_code,
        )
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
