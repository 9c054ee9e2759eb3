"""Endpoints para eventos, sus inscripciones y difusiones del organizador."""

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from eventpass.application.use_cases.events import (
    create_event,
    get_event,
    get_event_by_public_link,
    get_event_stats,
)
from eventpass.application.use_cases.notifications import (
    FanOutEngine,
    announce_new_registration,
    deliver_broadcast,
    list_broadcasts,
    prepare_broadcast,
)
from eventpass.application.use_cases.registrations import (
    get_registration_status,
    list_event_registrations,
    submit_registration,
)
from eventpass.domain.entities import RegistrationStatus, User
from eventpass.infrastructure.database import get_db
from eventpass.interfaces.api.dependencies import (
    get_current_user,
    get_fan_out_engine,
    get_optional_user,
)
from eventpass.interfaces.api.routes_helpers import domain_errors_as_http, run_in_background
from eventpass.interfaces.api.schemas import (
    BroadcastAccepted,
    BroadcastCreate,
    BroadcastRead,
    EventCreate,
    EventRead,
    EventStatsRead,
    RegistrationCreate,
    RegistrationLookup,
    RegistrationRead,
)

router = APIRouter(prefix="/events", tags=["events"])


@router.post("/", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def create_event_endpoint(
    payload: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EventRead:
    """Crea un evento organizado por el usuario autenticado."""

    with domain_errors_as_http():
        event = create_event(
            db,
            organizer_id=current_user.id,
            title=payload.title,
            description=payload.description,
            location=payload.location,
            start_date=payload.start_date,
            end_date=payload.end_date,
            requires_approval=payload.requires_approval,
            check_in_enabled=payload.check_in_enabled,
        )
    return EventRead.model_validate(event)


@router.get("/public/{public_link}", response_model=EventRead)
def read_public_event(public_link: str, db: Session = Depends(get_db)) -> EventRead:
    with domain_errors_as_http():
        event = get_event_by_public_link(db, public_link)
    return EventRead.model_validate(event)


@router.post(
    "/public/{public_link}/register",
    response_model=RegistrationRead,
    status_code=status.HTTP_201_CREATED,
)
def register_by_public_link(
    public_link: str,
    payload: RegistrationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
    engine: FanOutEngine = Depends(get_fan_out_engine),
) -> RegistrationRead:
    """Inscribe a un asistente, con o sin cuenta, usando el enlace público del evento."""

    with domain_errors_as_http():
        registration, event = submit_registration(
            db,
            public_link=public_link,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            form_data=payload.form_data,
            account_id=current_user.id if current_user else None,
        )
    background_tasks.add_task(
        run_in_background, announce_new_registration, registration, event, engine=engine
    )
    return RegistrationRead.model_validate(registration)


@router.get("/{event_id}", response_model=EventRead)
def read_event(event_id: int, db: Session = Depends(get_db)) -> EventRead:
    with domain_errors_as_http():
        event = get_event(db, event_id)
    return EventRead.model_validate(event)


@router.post(
    "/{event_id}/registrations",
    response_model=RegistrationRead,
    status_code=status.HTTP_201_CREATED,
)
def register_for_event(
    event_id: int,
    payload: RegistrationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
    engine: FanOutEngine = Depends(get_fan_out_engine),
) -> RegistrationRead:
    """Inscribe a un asistente en el evento indicado."""

    with domain_errors_as_http():
        registration, event = submit_registration(
            db,
            event_id=event_id,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            form_data=payload.form_data,
            account_id=current_user.id if current_user else None,
        )
    background_tasks.add_task(
        run_in_background, announce_new_registration, registration, event, engine=engine
    )
    return RegistrationRead.model_validate(registration)


@router.get("/{event_id}/registration-status", response_model=RegistrationLookup)
def read_registration_status(
    event_id: int,
    email: str | None = Query(default=None, description="Correo usado al inscribirse como invitado"),
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
) -> RegistrationLookup:
    """Devuelve la inscripción del usuario (o del correo indicado) en el evento, si existe."""

    with domain_errors_as_http():
        registration = get_registration_status(
            db,
            event_id=event_id,
            account_id=current_user.id if current_user else None,
            email=email,
        )
    if registration is None:
        return RegistrationLookup(registration=None)
    return RegistrationLookup(registration=RegistrationRead.model_validate(registration))


@router.get("/{event_id}/registrations", response_model=list[RegistrationRead])
def list_registrations(
    event_id: int,
    status_filter: RegistrationStatus | None = Query(default=None, alias="status"),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[RegistrationRead]:
    """Lista las inscripciones del evento; solo para su organizador."""

    with domain_errors_as_http():
        registrations = list_event_registrations(
            db,
            event_id=event_id,
            organizer_id=current_user.id,
            status=status_filter,
            skip=skip,
            limit=limit,
        )
    return [RegistrationRead.model_validate(registration) for registration in registrations]


@router.get("/{event_id}/stats", response_model=EventStatsRead)
def read_event_stats(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EventStatsRead:
    with domain_errors_as_http():
        stats = get_event_stats(db, event_id=event_id, organizer_id=current_user.id)
    return EventStatsRead.model_validate(stats)


@router.post(
    "/{event_id}/broadcast",
    response_model=BroadcastAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
def broadcast_to_attendees(
    event_id: int,
    payload: BroadcastCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    engine: FanOutEngine = Depends(get_fan_out_engine),
) -> BroadcastAccepted:
    """Envía un mensaje a todos los inscritos y responde con el número de destinatarios.

    La entrega se realiza en segundo plano por lotes.
    """

    with domain_errors_as_http():
        plan = prepare_broadcast(
            db,
            event_id=event_id,
            organizer_id=current_user.id,
            title=payload.title,
            message=payload.message,
        )
    background_tasks.add_task(run_in_background, deliver_broadcast, plan, engine=engine)
    return BroadcastAccepted(recipient_count=plan.recipient_count)


@router.get("/{event_id}/broadcasts", response_model=list[BroadcastRead])
def read_broadcast_history(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[BroadcastRead]:
    with domain_errors_as_http():
        records = list_broadcasts(db, event_id=event_id, organizer_id=current_user.id)
    return [BroadcastRead.model_validate(record) for record in records]
