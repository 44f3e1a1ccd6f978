# portfolio_admin/schemas.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .models import Profile


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        coerce_numbers_to_str=True,
    )


# --- Profile ---
class ProfileOut(CamelModel):
    id: int
    owner_id: int
    name: str
    profile_pic: str | None = None
    profile_pic2: str | None = None
    resume_pdf: str | None = None
    video: str | None = None
    about_text: str | None = None

    @classmethod
    def from_profile(cls, prof: Profile) -> "ProfileOut":
        return cls(
            id=prof.id, owner_id=prof.owner_id, name=prof.name,
            profile_pic=prof.profile_pic_path, profile_pic2=prof.profile_pic2_path,
            resume_pdf=prof.resume_pdf_path, video=prof.video_path,
            about_text=prof.about_text,
        )


class ProfileView(CamelModel):
    """Profile and user fields merged for the public page; never null."""
    name: str = ""
    email: str = ""
    profile_pic: str = ""
    profile_pic2: str = ""
    resume_pdf: str = ""
    video: str = ""
    about_text: str = ""
    phone_number: str = ""
    degree: str = ""
    birthday: str = ""
    address: str = ""
    experience: str = ""


class ProfileSaved(BaseModel):
    message: str = "Profile saved successfully"
    data: ProfileOut


class ProfileFetched(BaseModel):
    message: str = "Profile data fetched successfully"
    data: ProfileView


# --- Repeatable records ---
class EducationIn(CamelModel):
    owner_id: int
    degree_name: str
    college_name: str
    from_year: str
    to_year: str


class EducationOut(EducationIn):
    id: int


class ExperienceIn(CamelModel):
    owner_id: int
    designation: str
    company_name: str
    from_time: str
    to_time: str


class ExperienceOut(ExperienceIn):
    id: int
