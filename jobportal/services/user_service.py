"""
User Service - read-only lookups on the users collection.

Only two fields matter here:
    name    - used to build a download filename
    resume  - either a stored file url ("/files/<id>") or an external url
"""

import re
from dataclasses import dataclass
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection

from jobportal.core.exceptions import NotFoundError

_STORED_FILE_RE = re.compile(r"(?:^|/)files/([0-9a-fA-F]{24})/?$")
_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


@dataclass
class ResumeReference:
    user_id: str
    user_name: str
    location: str

    @property
    def stored_file_id(self) -> Optional[str]:
        """GridFS id when the resume lives in our bucket, else None."""
        return stored_file_id(self.location)

    def download_filename(self, extension: str) -> str:
        base = _UNSAFE_NAME_CHARS.sub("_", self.user_name.strip()).strip("_") or "User"
        return f"{base}_Resume{extension}"


def stored_file_id(location: str) -> Optional[str]:
    """
    Extract a GridFS id from a resume reference.

    "/files/<id>", "/api/files/<id>" and a bare 24-hex ObjectId all count;
    anything with a scheme (https://res.cloudinary.com/...) is external.
    """
    if not location:
        return None
    if "://" in location:
        return None
    if ObjectId.is_valid(location):
        return location
    match = _STORED_FILE_RE.search(location)
    return match.group(1) if match else None


class UserService:
    """Handles user document lookups needed by the resume route."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def get_resume(self, user_id: str) -> ResumeReference:
        """
        Resolve a user's resume reference.

        Raises:
            NotFoundError if the id is malformed, the user does not exist
            or has no resume.
        """
        try:
            oid = ObjectId(user_id)
        except (InvalidId, TypeError):
            raise NotFoundError("Resume not found")

        doc = self.collection.find_one({"_id": oid}, {"name": 1, "resume": 1})
        if not doc or not doc.get("resume"):
            raise NotFoundError("Resume not found")

        return ResumeReference(
            user_id=str(doc["_id"]),
            user_name=doc.get("name") or "",
            location=doc["resume"],
        )
