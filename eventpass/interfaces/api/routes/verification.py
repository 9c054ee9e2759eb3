"""Endpoints usados por los verificadores en la puerta del evento."""

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from eventpass.application.use_cases.notifications import (
    FanOutEngine,
    announce_registration_update,
)
from eventpass.application.use_cases.registrations import (
    check_in_registration,
    check_out_registration,
    verify_scan,
)
from eventpass.domain.entities import User
from eventpass.infrastructure.database import get_db
from eventpass.interfaces.api.dependencies import get_current_user, get_fan_out_engine
from eventpass.interfaces.api.routes_helpers import domain_errors_as_http, run_in_background
from eventpass.interfaces.api.schemas import (
    CheckInRead,
    CheckInRequest,
    RegistrationRead,
    ScanRequest,
    ScanResult,
)

router = APIRouter(prefix="/verify", tags=["verification"])


@router.post("", response_model=ScanResult)
def scan_ticket(
    payload: ScanRequest,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> ScanResult:
    """Valida un código QR sin modificar la inscripción.

    Un segundo escaneo de una entrada ya utilizada no es un error: se
    informa con ``already_checked_in``.
    """

    with domain_errors_as_http():
        verification = verify_scan(db, code=payload.qr_code)
    return ScanResult(
        registration=RegistrationRead.model_validate(verification.registration),
        event_title=verification.event.title,
        already_checked_in=verification.already_checked_in,
    )


@router.post("/check-in", response_model=CheckInRead)
def check_in(
    payload: CheckInRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    engine: FanOutEngine = Depends(get_fan_out_engine),
) -> CheckInRead:
    """Registra el ingreso del asistente."""

    with domain_errors_as_http():
        result = check_in_registration(
            db, registration_id=payload.registration_id, verifier_id=current_user.id
        )
    background_tasks.add_task(
        run_in_background, announce_registration_update, result.registration, engine=engine
    )
    return CheckInRead.model_validate(result.check_in)


@router.post("/check-out", response_model=CheckInRead)
def check_out(
    payload: CheckInRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    engine: FanOutEngine = Depends(get_fan_out_engine),
) -> CheckInRead:
    """Registra la salida del asistente."""

    with domain_errors_as_http():
        result = check_out_registration(
            db, registration_id=payload.registration_id, verifier_id=current_user.id
        )
    background_tasks.add_task(
        run_in_background, announce_registration_update, result.registration, engine=engine
    )
    return CheckInRead.model_validate(result.check_in)
