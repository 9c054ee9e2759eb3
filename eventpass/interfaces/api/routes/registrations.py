"""Endpoints para consultar y cambiar el estado de las inscripciones."""

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from eventpass.application.use_cases.notifications import (
    FanOutEngine,
    announce_registration_update,
)
from eventpass.application.use_cases.registrations import (
    bulk_transition_registrations,
    get_registration,
    list_check_ins,
    list_user_tickets,
    transition_registration,
)
from eventpass.domain.entities import User
from eventpass.infrastructure.database import get_db
from eventpass.interfaces.api.dependencies import get_current_user, get_fan_out_engine
from eventpass.interfaces.api.routes_helpers import domain_errors_as_http, run_in_background
from eventpass.interfaces.api.schemas import (
    BulkStatusUpdate,
    BulkStatusUpdateResult,
    CheckInRead,
    RegistrationRead,
    RegistrationStatusUpdate,
)

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.get("/my-tickets", response_model=list[RegistrationRead])
def read_my_tickets(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[RegistrationRead]:
    """Devuelve las entradas aprobadas o utilizadas del usuario autenticado."""

    with domain_errors_as_http():
        tickets = list_user_tickets(db, user_id=current_user.id)
    return [RegistrationRead.model_validate(ticket) for ticket in tickets]


@router.post("/bulk-update", response_model=BulkStatusUpdateResult)
def bulk_update_status(
    payload: BulkStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    engine: FanOutEngine = Depends(get_fan_out_engine),
) -> BulkStatusUpdateResult:
    """Aprueba o rechaza varias inscripciones de forma independiente."""

    with domain_errors_as_http():
        result = bulk_transition_registrations(
            db,
            registration_ids=payload.registration_ids,
            target_status=payload.status,
            actor_id=current_user.id,
        )
    for registration in result.registrations:
        background_tasks.add_task(
            run_in_background, announce_registration_update, registration, engine=engine
        )
    return BulkStatusUpdateResult(updated=result.updated, total=result.total)


@router.get("/{registration_id}", response_model=RegistrationRead)
def read_registration(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RegistrationRead:
    with domain_errors_as_http():
        registration = get_registration(db, registration_id)
    return RegistrationRead.model_validate(registration)


@router.patch("/{registration_id}/status", response_model=RegistrationRead)
def update_registration_status(
    registration_id: int,
    payload: RegistrationStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    engine: FanOutEngine = Depends(get_fan_out_engine),
) -> RegistrationRead:
    """Aplica una acción (aprobar, rechazar, ingreso o salida) a la inscripción."""

    with domain_errors_as_http():
        registration = transition_registration(
            db,
            registration_id=registration_id,
            action=payload.action,
            actor_id=current_user.id,
        )
    background_tasks.add_task(
        run_in_background, announce_registration_update, registration, engine=engine
    )
    return RegistrationRead.model_validate(registration)


@router.get("/{registration_id}/check-ins", response_model=list[CheckInRead])
def read_check_ins(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[CheckInRead]:
    with domain_errors_as_http():
        records = list_check_ins(db, registration_id=registration_id)
    return [CheckInRead.model_validate(record) for record in records]
