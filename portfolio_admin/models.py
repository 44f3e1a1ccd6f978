"""
SQLAlchemy ORM models: User, Profile and the two repeatable record tables.
Users are provisioned by the login service; this app only edits their descriptive fields.
"""

from datetime import datetime
from sqlalchemy import String, Text, Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from .database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    degree: Mapped[str | None] = mapped_column(String(200), nullable=True)
    birthday: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    experience_summary: Mapped[str | None] = mapped_column(Text, nullable=True)


class Profile(Base):
    """
    Public portfolio profile, at most one per user.
    The *_path columns hold stored upload paths like /uploads/images/<ms>-<name>.
    """
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(Integer, unique=True, index=True)  # users.id, logical reference only
    name: Mapped[str] = mapped_column(String(200))
    profile_pic_path: Mapped[str | None] = mapped_column(String(512), nullable=True)
    profile_pic2_path: Mapped[str | None] = mapped_column(String(512), nullable=True)
    resume_pdf_path: Mapped[str | None] = mapped_column(String(512), nullable=True)
    video_path: Mapped[str | None] = mapped_column(String(512), nullable=True)
    about_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())


class Education(Base):
    __tablename__ = "education_entries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(Integer, index=True)
    degree_name: Mapped[str] = mapped_column(String(200))
    college_name: Mapped[str] = mapped_column(String(200))
    from_year: Mapped[str] = mapped_column(String(20))   # "2018", or free text like "Present"
    to_year: Mapped[str] = mapped_column(String(20))


class Experience(Base):
    __tablename__ = "experience_entries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(Integer, index=True)
    designation: Mapped[str] = mapped_column(String(200))
    company_name: Mapped[str] = mapped_column(String(200))
    from_time: Mapped[str] = mapped_column(String(50))
    to_time: Mapped[str] = mapped_column(String(50))
