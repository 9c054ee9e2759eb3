"""Helper utilities shared across API route handlers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import HTTPException, status

from eventpass.domain.exceptions import (
    AlreadyRegisteredError,
    InvalidTransitionError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


@contextmanager
def domain_errors_as_http() -> Iterator[None]:
    """Translate domain exceptions raised inside the block into HTTP errors."""

    try:
        yield
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except UnauthorizedError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except AlreadyRegisteredError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def run_in_background(task: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
    """Run a deferred notification step, logging instead of raising on failure."""

    try:
        task(*args, **kwargs)
    except Exception as exc:  # pragma: no cover - background processing guard
        logger.exception("Error en la tarea en segundo plano %s: %s", task.__name__, exc)


__all__ = ["domain_errors_as_http", "run_in_background"]
