# portfolio_admin/services/storage.py
"""
Upload storage on local disk.

Files land in one bucket per media category and are addressed by their stored
path, ``/uploads/<bucket>/<ms>-<name>``, which is what the profile columns hold.
"""
from __future__ import annotations

import re
import shutil
import time
from pathlib import Path, PurePosixPath
from typing import Dict, Optional

from fastapi import UploadFile

from ..logging import get_logger

logger = get_logger("portfolio_admin.storage")

IMAGES, PDFS, VIDEOS, OTHERS = "images", "pdfs", "videos", "others"
BUCKETS = (IMAGES, PDFS, VIDEOS, OTHERS)

# (match kind, content type or prefix, bucket); first match wins
BUCKET_POLICY = (
    ("prefix", "image/", IMAGES),
    ("exact", "application/pdf", PDFS),
    ("prefix", "video/", VIDEOS),
)

# form field name -> Profile column
SLOTS = {
    "profilePic": "profile_pic_path",
    "profilePic2": "profile_pic2_path",
    "resumePdf": "resume_pdf_path",
    "video": "video_path",
}

_WHITESPACE = re.compile(r"\s+")


def classify(content_type: Optional[str]) -> str:
    """Pick the bucket for a declared media type."""
    ctype = (content_type or "").strip().lower()
    for kind, pattern, bucket in BUCKET_POLICY:
        if kind == "exact" and ctype == pattern:
            return bucket
        if kind == "prefix" and ctype.startswith(pattern):
            return bucket
    return OTHERS


def safe_filename(original: str, now_ms: Optional[int] = None) -> str:
    """'my cv.pdf' -> '1700000000000-my_cv.pdf'. Client directory parts are dropped."""
    base = PurePosixPath(original.replace("\\", "/")).name
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}-{_WHITESPACE.sub('_', base)}"


class FileStore:
    def __init__(self, root: Path, url_prefix: str = "/uploads"):
        self.root = Path(root)
        self.url_prefix = "/" + url_prefix.strip("/")

    def init_buckets(self) -> None:
        for bucket in BUCKETS:
            (self.root / bucket).mkdir(parents=True, exist_ok=True)
        logger.info("storage_ready", root=str(self.root), buckets=list(BUCKETS))

    def save(self, upload: Optional[UploadFile]) -> Optional[str]:
        """Write one upload into its bucket; None when the slot carried no file."""
        if upload is None or not upload.filename:
            return None
        bucket = classify(upload.content_type)
        name = safe_filename(upload.filename)
        dest = self.root / bucket / name
        with dest.open("wb") as f:
            shutil.copyfileobj(upload.file, f)
        stored = f"{self.url_prefix}/{bucket}/{name}"
        logger.info("upload_stored", path=stored, content_type=upload.content_type)
        return stored

    def save_slots(self, uploads: Dict[str, Optional[UploadFile]]) -> Dict[str, Optional[str]]:
        return {slot: self.save(uploads.get(slot)) for slot in SLOTS}

    def resolve(self, stored_path: Optional[str]) -> Optional[Path]:
        """Absolute location of a stored path, or None if it points outside the store."""
        if not stored_path:
            return None
        rel = stored_path.strip()
        if rel.startswith(self.url_prefix + "/"):
            rel = rel[len(self.url_prefix) + 1:]
        rel = rel.lstrip("/")
        if not rel:
            return None
        root = self.root.resolve()
        full = (root / rel).resolve()
        if full == root or not full.is_relative_to(root):
            logger.warning("stored_path_outside_root", path=stored_path)
            return None
        return full

    def delete(self, stored_path: Optional[str]) -> bool:
        """Remove a stored file. Missing files are fine; returns whether one was removed."""
        full = self.resolve(stored_path)
        if full is None or not full.is_file():
            return False
        full.unlink(missing_ok=True)
        logger.info("upload_reclaimed", path=stored_path)
        return True
