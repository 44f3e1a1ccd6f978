# portfolio_admin/routes/records.py
"""
Education and experience lists. Writes replace the caller's whole list;
reads return every owner's entries (single-owner portfolio site).
"""
from typing import Any, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ..auth import require_caller_id
from ..database import get_db
from ..schemas import EducationOut, ExperienceOut
from ..services import records

router = APIRouter(tags=["records"])


@router.post("/add-education", response_model=List[EducationOut])
def add_education(
    payload: Any = Body(None),
    owner_id: int = Depends(require_caller_id),
    db: Session = Depends(get_db),
):
    return records.replace_all(db, "education", owner_id, payload)


@router.get("/get-education", response_model=List[EducationOut])
def get_education(db: Session = Depends(get_db)):
    return records.list_all(db, "education")


@router.post("/add-experience", response_model=List[ExperienceOut])
def add_experience(
    payload: Any = Body(None),
    owner_id: int = Depends(require_caller_id),
    db: Session = Depends(get_db),
):
    return records.replace_all(db, "experience", owner_id, payload)


@router.get("/get-experience", response_model=List[ExperienceOut])
def get_experience(db: Session = Depends(get_db)):
    return records.list_all(db, "experience")
