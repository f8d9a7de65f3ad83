"""Task status validation.

The set of legal statuses is built once at import and never mutated;
callers may pass another set by reference (tests, future statuses).
"""

from typing import Optional, AbstractSet

from checkmate.core.errors import RequestError

PENDING = "pending"
IN_PROGRESS = "in_progress"
DONE = "done"

TASK_STATUSES = frozenset({PENDING, IN_PROGRESS, DONE})
DEFAULT_STATUS = PENDING
DONE_STATUS = DONE

INVALID_STATUS = "invalid status"


def is_valid_status(value, allowed: AbstractSet[str] = TASK_STATUSES) -> bool:
    return isinstance(value, str) and value in allowed


def resolve_create_status(value: Optional[str], allowed: AbstractSet[str] = TASK_STATUSES) -> str:
    # Création: vide ou absent → statut par défaut
    if value is None or value == "":
        return DEFAULT_STATUS
    if not is_valid_status(value, allowed):
        raise RequestError(INVALID_STATUS)
    return value


def resolve_replace_status(
    value: Optional[str],
    current: str,
    allowed: AbstractSet[str] = TASK_STATUSES,
) -> str:
    # Remplacement: vide ou absent → on garde le statut actuel
    if value is None or value == "":
        return current
    if not is_valid_status(value, allowed):
        raise RequestError(INVALID_STATUS)
    return value


def validate_patch_status(value, allowed: AbstractSet[str] = TASK_STATUSES) -> str:
    # Patch: une clé "status" présente doit toujours être valide
    if not is_valid_status(value, allowed):
        raise RequestError(INVALID_STATUS)
    return value
