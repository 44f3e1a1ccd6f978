# portfolio_admin/services/profiles.py
"""
Profile update/read workflow.

An update merges a partial submission into the owner's Profile and User rows:
uploaded slots replace (and reclaim) the previous file, slots without an upload
keep their value, and user fields are only overwritten by non-empty input.
The merge itself is pure (frozen values in, frozen values out); the functions at
the bottom load, persist and clean up around it.

Two concurrent updates for the same owner are not serialized: both may see the
same prior file as superseded and the last commit wins.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Dict, List, Optional, Tuple

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import InvalidInputError, NotFoundError, UnauthorizedError
from ..logging import get_logger
from ..models import Profile, User
from ..schemas import ProfileView
from .storage import SLOTS, FileStore

logger = get_logger("portfolio_admin.profiles")


@dataclass(frozen=True)
class ProfileState:
    name: str
    profile_pic_path: Optional[str] = None
    profile_pic2_path: Optional[str] = None
    resume_pdf_path: Optional[str] = None
    video_path: Optional[str] = None
    about_text: Optional[str] = None

    @classmethod
    def of(cls, prof: Profile) -> "ProfileState":
        return cls(**{f.name: getattr(prof, f.name) for f in fields(cls)})


@dataclass(frozen=True)
class UserDetails:
    name: Optional[str] = None
    phone_number: Optional[str] = None
    degree: Optional[str] = None
    birthday: Optional[str] = None
    address: Optional[str] = None
    experience_summary: Optional[str] = None

    @classmethod
    def of(cls, user: User) -> "UserDetails":
        return cls(**{f.name: getattr(user, f.name) for f in fields(cls)})


@dataclass(frozen=True)
class ProfileUpdate:
    """Text part of an update-profile submission."""
    name: Optional[str] = None
    about_text: Optional[str] = None
    user: UserDetails = field(default_factory=UserDetails)


def merge_profile(
    existing: Optional[ProfileState],
    incoming: ProfileUpdate,
    new_paths: Dict[str, Optional[str]],
) -> Tuple[ProfileState, List[str]]:
    """
    Returns the merged state and the stored paths it supersedes.
    new_paths is keyed by slot name (see storage.SLOTS).
    """
    uploaded = {SLOTS[slot]: path for slot, path in new_paths.items() if path}

    if existing is None:
        return ProfileState(name=incoming.name, about_text=incoming.about_text, **uploaded), []

    superseded = [
        getattr(existing, col) for col, path in uploaded.items()
        if getattr(existing, col) and getattr(existing, col) != path
    ]
    merged = replace(
        existing,
        name=incoming.name,
        about_text=incoming.about_text or existing.about_text,
        **uploaded,
    )
    return merged, superseded


def merge_user(existing: UserDetails, incoming: UserDetails) -> UserDetails:
    """Non-empty incoming values win; everything else keeps the stored value."""
    return UserDetails(**{
        f.name: getattr(incoming, f.name) or getattr(existing, f.name)
        for f in fields(UserDetails)
    })


def _apply(row, state) -> None:
    for f in fields(state):
        setattr(row, f.name, getattr(state, f.name))


def update_profile(
    db: Session,
    store: FileStore,
    owner_id: Optional[int],
    incoming: ProfileUpdate,
    uploads: Dict[str, Optional[UploadFile]],
) -> Profile:
    if owner_id is None:
        raise UnauthorizedError("Unauthorized: Missing user ID")
    if not incoming.name:
        raise InvalidInputError("Name is required")

    new_paths = store.save_slots(uploads)

    prof = db.scalars(select(Profile).where(Profile.owner_id == owner_id)).first()
    user = db.get(User, owner_id)

    merged, superseded = merge_profile(
        ProfileState.of(prof) if prof else None, incoming, new_paths
    )
    if prof is None:
        prof = Profile(owner_id=owner_id)
        db.add(prof)
    _apply(prof, merged)

    if user is not None:
        _apply(user, merge_user(UserDetails.of(user), replace(incoming.user, name=incoming.name)))
    else:
        logger.warning("profile_owner_missing", owner_id=owner_id)

    db.commit()
    db.refresh(prof)

    for path in superseded:
        store.delete(path)

    logger.info(
        "profile_saved",
        owner_id=owner_id,
        uploaded=sorted(slot for slot, path in new_paths.items() if path),
        reclaimed=len(superseded),
    )
    return prof


def get_profile(db: Session, owner_id: Optional[int]) -> ProfileView:
    """
    Public profile view. Anonymous callers get the first user's profile;
    the portfolio site is single-owner.
    """
    if owner_id is None:
        owner_id = db.scalars(select(User.id).order_by(User.id)).first()

    prof = db.scalars(select(Profile).where(Profile.owner_id == owner_id)).first() if owner_id else None
    user = db.get(User, owner_id) if owner_id else None
    if prof is None or user is None:
        raise NotFoundError("Profile or user not found")

    return ProfileView(
        name=prof.name or "",
        email=user.email or "",
        profile_pic=prof.profile_pic_path or "",
        profile_pic2=prof.profile_pic2_path or "",
        resume_pdf=prof.resume_pdf_path or "",
        video=prof.video_path or "",
        about_text=prof.about_text or "",
        phone_number=user.phone_number or "",
        degree=user.degree or "",
        birthday=user.birthday or "",
        address=user.address or "",
        experience=user.experience_summary or "",
    )
