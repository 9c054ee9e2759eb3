"""Endpoints de registro, inicio de sesión y token de notificaciones push."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from eventpass.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    create_user,
    record_login,
    update_push_token,
)
from eventpass.config import get_settings
from eventpass.domain.entities import User
from eventpass.infrastructure.database import get_db
from eventpass.infrastructure.security import create_access_token, password_signature
from eventpass.interfaces.api.dependencies import get_current_user
from eventpass.interfaces.api.routes_helpers import domain_errors_as_http
from eventpass.interfaces.api.schemas import PushTokenUpdate, SignupRequest, Token, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])
settings = get_settings()
logger = logging.getLogger(__name__)


def _issue_token(user: User) -> Token:
    access_token = create_access_token(
        data={
            "sub": user.email,
            "role": user.role,
            "pwd_sig": password_signature(user.password),
        },
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    return Token(access_token=access_token, token_type="bearer", role=user.role)


def user_to_read_model(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        has_push_token=bool(user.push_token),
        last_login=user.last_login,
        created_at=user.created_at,
    )


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: Session = Depends(get_db)) -> Token:
    """Crea una cuenta, vincula sus inscripciones como invitado y devuelve un token."""

    with domain_errors_as_http():
        user = create_user(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
        )
    logger.info("Cuenta %s creada con rol %s", user.id, user.role)
    return _issue_token(user)


# Nota: se conserva la firma esperada por OAuth2PasswordRequestForm.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    """Autentica al usuario por correo electrónico y devuelve un token JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS or user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales incorrectas",
            headers={"WWW-Authenticate": "Bearer"},
        )

    record_login(db, user.id)
    return _issue_token(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return user_to_read_model(current_user)


@router.put("/push-token", response_model=UserRead)
def register_push_token(
    payload: PushTokenUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    """Registra (o elimina) el token de notificaciones push del dispositivo."""

    with domain_errors_as_http():
        user = update_push_token(db, user_id=current_user.id, push_token=payload.push_token)
    return user_to_read_model(user)
