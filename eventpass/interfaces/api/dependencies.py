"""FastAPI dependency utilities."""

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from eventpass.application.use_cases.notifications import FanOutEngine
from eventpass.config import get_settings
from eventpass.domain.entities import User
from eventpass.infrastructure.database import SessionLocal, get_db
from eventpass.infrastructure.notifications import realtime_event_publisher
from eventpass.infrastructure.push import build_push_client
from eventpass.infrastructure.repositories import UserRepository
from eventpass.infrastructure.security import decode_access_token, password_signature

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def _credentials_error(detail: str = "Credenciales inválidas") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    email = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise _credentials_error()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_error("Usuario no encontrado")

    if signature_claim != password_signature(user.password):
        raise _credentials_error()

    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_optional_user(
    token: str | None = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """Return the caller's account when a valid token is sent, ``None`` for guests."""

    if not token:
        return None
    return resolve_current_user(token, db)


@lru_cache
def get_fan_out_engine() -> FanOutEngine:
    """Return the process wide fan-out engine.

    The engine opens its own sessions so it can keep working after the
    request session is closed.
    """

    settings = get_settings()
    return FanOutEngine(
        SessionLocal,
        realtime=realtime_event_publisher,
        push_client=build_push_client(),
        chunk_size=settings.fanout_chunk_size,
    )
