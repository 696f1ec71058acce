# Vault API - RESTful endpoints for credential records
#
# API endpoints for vault operations:
# - Create / list / get / delete credential records
# - Vault-wide security report
# - Strength check and password generation
# - All operations require a logged-in session

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from ..auth import SessionContext
from ..core import EventType, get_audit_logger, get_settings
from ..core.config import GENERATOR_MAX_LENGTH, GENERATOR_MIN_LENGTH, STORAGE_SQLITE
from ..vault import (
    CredentialStore,
    InMemoryRecordStorage,
    SecurityAggregator,
    SQLiteRecordStorage,
    ValidationError,
    evaluate_strength,
    filter_records,
    generate_password,
)
from .security import verify_session_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/vault", tags=["vault"])

_store: Optional[CredentialStore] = None


def get_store() -> CredentialStore:
    """Get or create the global CredentialStore singleton."""
    global _store
    if _store is None:
        settings = get_settings()
        if settings.storage == STORAGE_SQLITE:
            storage = SQLiteRecordStorage(settings.db_path)
        else:
            storage = InMemoryRecordStorage()
        logger.info("Credential store backed by %s", type(storage).__name__)
        _store = CredentialStore(storage)
    return _store


def set_store(store: Optional[CredentialStore]):
    """Allow DI for testing."""
    global _store
    _store = store


# Request/Response Models
class AddRecordRequest(BaseModel):
    title: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    secret: str = Field(..., min_length=1)
    website: Optional[str] = None
    notes: Optional[str] = None


class StrengthRequest(BaseModel):
    secret: str


# Endpoints

@router.post("/records")
def add_record(
    request: AddRecordRequest,
    session: SessionContext = Depends(verify_session_token),
):
    """Add a credential record. The response never contains the secret."""
    try:
        record = get_store().create(
            title=request.title,
            username=request.username,
            secret=request.secret,
            website=request.website,
            notes=request.notes,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {"success": True, "record": record.to_dict()}


@router.get("/records")
def list_records(
    q: Optional[str] = None,
    session: SessionContext = Depends(verify_session_token),
):
    """
    List records, newest first, optionally filtered by a search query.

    Secrets are not returned; use GET /records/{id} for a single record.
    """
    records = filter_records(get_store().list(), q)

    items = []
    for record in records:
        item = record.to_dict()
        strength = evaluate_strength(record.secret)
        item["strength"] = strength.category.value
        item["strength_score"] = strength.score
        items.append(item)

    return {"records": items, "count": len(items)}


@router.get("/records/{record_id}")
def get_record(
    record_id: str,
    session: SessionContext = Depends(verify_session_token),
):
    """Get one record including its secret."""
    record = get_store().get(record_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Record not found"
        )

    get_audit_logger().log_vault_event(
        EventType.VAULT_RECORD_ACCESSED,
        f"Record accessed: {record.title}",
        details={"record_id": record.id, "username": session.username},
    )

    data = record.to_dict(include_secret=True)
    data["strength"] = evaluate_strength(record.secret).to_dict()
    return data


@router.delete("/records/{record_id}")
def delete_record(
    record_id: str,
    session: SessionContext = Depends(verify_session_token),
):
    """Delete a record. Deleting an unknown id is not an error."""
    removed = get_store().delete(record_id)
    return {"success": True, "removed": removed}


@router.get("/security")
def security_report(session: SessionContext = Depends(verify_session_token)):
    """Overall score, status, weak records, duplicates and recommendations."""
    report = SecurityAggregator.report(get_store().list())

    get_audit_logger().log_vault_event(
        EventType.VAULT_REPORT_GENERATED,
        "Security report generated",
        details={
            "overall_score": report.overall_score,
            "weak_count": len(report.weak_records),
            "duplicate_count": len(report.duplicates),
        },
    )

    return report.to_dict()


@router.post("/strength")
def check_strength(
    request: StrengthRequest,
    session: SessionContext = Depends(verify_session_token),
):
    """Score an arbitrary secret without storing it."""
    return evaluate_strength(request.secret).to_dict()


@router.get("/generate")
def generate(
    length: Optional[int] = Query(None, ge=GENERATOR_MIN_LENGTH, le=GENERATOR_MAX_LENGTH),
    session: SessionContext = Depends(verify_session_token),
):
    """Generate a random password and report its strength."""
    password = generate_password(length)
    return {"password": password, "strength": evaluate_strength(password).to_dict()}
