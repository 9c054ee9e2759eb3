"""Utility script to create an initial account in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from eventpass.application.use_cases.users import create_user
from eventpass.domain.entities import ROLE_ORGANIZER, ROLES
from eventpass.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for account creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial account for the EventPass API.",
    )
    parser.add_argument(
        "--name",
        default="Organizador",
        help="Nombre completo del usuario (por defecto: Organizador)",
    )
    parser.add_argument(
        "--email",
        default="organizer@example.com",
        help="Correo electrónico del usuario (por defecto: organizer@example.com)",
    )
    parser.add_argument(
        "--role",
        default=ROLE_ORGANIZER,
        choices=ROLES,
        help="Rol de la cuenta (por defecto: organizer)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Contraseña del usuario. Si no se proporciona se solicitará interactivamente.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an account using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Ingrese la contraseña del usuario: ")
    if not password:
        raise SystemExit("No se proporcionó una contraseña válida.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=args.role,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"No se pudo crear el usuario: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error al guardar el usuario en la base de datos: {exc}") from exc
    else:
        print(
            "Usuario creado exitosamente:\n"
            f"  ID: {user.id}\n"
            f"  Nombre: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Rol: {user.role}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
