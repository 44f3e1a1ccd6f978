# portfolio_admin/routes/profile.py
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.orm import Session

from ..auth import get_caller_id
from ..database import get_db
from ..schemas import ProfileFetched, ProfileOut, ProfileSaved
from ..services import profiles
from ..services.profiles import ProfileUpdate, UserDetails
from ..services.storage import FileStore

router = APIRouter(tags=["profile"])


def get_file_store(request: Request) -> FileStore:
    return request.app.state.file_store


# --- Create or update the caller's profile (multipart) ---
@router.post("/update-profile", response_model=ProfileSaved)
def update_profile(
    name: Optional[str] = Form(None),
    phone_number: Optional[str] = Form(None, alias="phoneNumber"),
    degree: Optional[str] = Form(None),
    birthday: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    experience: Optional[str] = Form(None),
    about_text: Optional[str] = Form(None, alias="aboutText"),
    profile_pic: Optional[UploadFile] = File(None, alias="profilePic"),
    profile_pic2: Optional[UploadFile] = File(None, alias="profilePic2"),
    resume_pdf: Optional[UploadFile] = File(None, alias="resumePdf"),
    video: Optional[UploadFile] = File(None),
    caller_id: Optional[int] = Depends(get_caller_id),
    db: Session = Depends(get_db),
    store: FileStore = Depends(get_file_store),
):
    incoming = ProfileUpdate(
        name=(name or "").strip() or None,
        about_text=about_text,
        user=UserDetails(
            phone_number=phone_number, degree=degree, birthday=birthday,
            address=address, experience_summary=experience,
        ),
    )
    uploads = {
        "profilePic": profile_pic, "profilePic2": profile_pic2,
        "resumePdf": resume_pdf, "video": video,
    }
    prof = profiles.update_profile(db, store, caller_id, incoming, uploads)
    return ProfileSaved(data=ProfileOut.from_profile(prof))


# --- Public view; anonymous callers see the site owner's profile ---
@router.get("/get-profile", response_model=ProfileFetched)
def get_profile(
    caller_id: Optional[int] = Depends(get_caller_id),
    db: Session = Depends(get_db),
):
    return ProfileFetched(data=profiles.get_profile(db, caller_id))
