# portfolio_admin/services/records.py
"""
Education / experience lists with replace-all semantics: every submission
becomes the owner's complete set. Validation runs before anything is deleted,
so a rejected submission never loses data.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Type

from pydantic import BaseModel, ValidationError
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..database import Base
from ..errors import InvalidInputError
from ..logging import get_logger
from ..models import Education, Experience
from ..schemas import EducationIn, ExperienceIn

logger = get_logger("portfolio_admin.records")


@dataclass(frozen=True)
class RecordKind:
    model: Type[Base]
    schema: Type[BaseModel]
    required: Tuple[str, ...]   # wire names
    label: str
    requirement: str


KINDS: Dict[str, RecordKind] = {
    "education": RecordKind(
        model=Education,
        schema=EducationIn,
        required=("degreeName", "collegeName", "fromYear", "toYear"),
        label="education",
        requirement="Each education object must include degreeName, collegeName, fromYear, and toYear",
    ),
    "experience": RecordKind(
        model=Experience,
        schema=ExperienceIn,
        required=("designation", "companyName", "fromTime", "toTime"),
        label="experience",
        requirement="Each experience object must include designation, companyName, fromTime, and toTime",
    ),
}


def _kind(kind: str) -> RecordKind:
    try:
        return KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown record kind: {kind}") from None


def normalize_entries(payload: Any, label: str) -> List[Any]:
    """A list is used as-is, a single object becomes a one-item list."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        return [payload]
    raise InvalidInputError(f"Invalid {label} data format")


def _present(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None and value is not False


def validate_entries(rec: RecordKind, entries: List[Any], owner_id: int) -> List[BaseModel]:
    stamped = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise InvalidInputError(rec.requirement)
        entry = {**entry, "ownerId": owner_id}
        if not all(_present(entry.get(name)) for name in rec.required):
            raise InvalidInputError(rec.requirement)
        stamped.append(entry)

    try:
        return [rec.schema.model_validate(entry) for entry in stamped]
    except ValidationError as exc:
        raise InvalidInputError(f"{rec.requirement}: {exc.error_count()} invalid value(s)") from exc


def replace_all(db: Session, kind: str, owner_id: int, payload: Any) -> list:
    rec = _kind(kind)
    entries = validate_entries(rec, normalize_entries(payload, rec.label), owner_id)

    try:
        removed = db.execute(delete(rec.model).where(rec.model.owner_id == owner_id)).rowcount
        rows = [rec.model(**e.model_dump()) for e in entries]
        db.add_all(rows)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("records_replaced", kind=kind, owner_id=owner_id, removed=removed, inserted=len(rows))
    return rows


def list_all(db: Session, kind: str) -> list:
    """Every entry of a kind, across all owners."""
    rec = _kind(kind)
    return list(db.scalars(select(rec.model).order_by(rec.model.id)))
