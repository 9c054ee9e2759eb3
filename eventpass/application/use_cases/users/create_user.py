"""Use case for signing up new accounts."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventpass.domain.entities import ROLE_PARTICIPANT, ROLES, User
from eventpass.domain.identity import normalize_email
from eventpass.infrastructure.repositories import UserRepository
from eventpass.infrastructure.security import get_password_hash
from eventpass.utils import now_in_app_timezone

from ..identity import heal_guest_registrations


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str = ROLE_PARTICIPANT,
) -> User:
    """Create a new account ensuring unique email addresses.

    Guest registrations made earlier with the same email are linked to the
    new account right away.
    """

    normalized_email = normalize_email(email)
    if not normalized_email or "@" not in normalized_email:
        raise ValueError("El correo electrónico no es válido")
    if not name or not name.strip():
        raise ValueError("El nombre es obligatorio")
    if not password:
        raise ValueError("La contraseña es obligatoria")

    role_alias = (role or ROLE_PARTICIPANT).lower()
    if role_alias not in ROLES:
        raise ValueError("Rol no permitido")

    repository = UserRepository(session)
    if repository.get_by_email(normalized_email):
        raise ValueError("El correo electrónico ya está registrado")

    user = User(
        id=None,
        name=name.strip(),
        email=normalized_email,
        password=get_password_hash(password),
        role=role_alias,
        push_token=None,
        last_login=None,
        created_at=now_in_app_timezone(),
    )
    try:
        created = repository.create(user)
    except IntegrityError as exc:
        session.rollback()
        raise ValueError("El correo electrónico ya está registrado") from exc

    heal_guest_registrations(session, email=created.email, account_id=created.id)
    return created
