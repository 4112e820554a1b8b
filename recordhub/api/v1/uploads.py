"""Reading uploaded text files."""

from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile

from recordhub.core.exceptions import ValidationError

ALLOWED_MIME_TYPES = frozenset({
    "text/plain",
    "text/csv",
    "application/json",
    "text/log",
    "application/octet-stream",
})


@dataclass
class TextUpload:
    name: str
    size: int
    content: str


def is_allowed_upload(file_name: str, content_type: Optional[str]) -> bool:
    """Accept text, CSV, JSON and generic binary uploads, or any ``.log`` file."""
    mime_type = (content_type or "").split(";")[0].strip().lower()
    return mime_type in ALLOWED_MIME_TYPES or file_name.endswith(".log")


async def read_text_upload(file: Optional[UploadFile], max_bytes: int) -> TextUpload:
    """Validate an upload and decode it as UTF-8.

    Invalid byte sequences are replaced rather than rejected.

    Raises:
        ValidationError: Missing file, wrong type, too large or empty
    """
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")

    if not is_allowed_upload(file.filename, file.content_type):
        raise ValidationError("Invalid file type. Only text files, logs, and JSON files are allowed.")

    # Read one byte past the limit to detect oversize files without buffering them fully
    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ValidationError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)} MB.")

    content = data.decode("utf-8", errors="replace")
    if not content.strip():
        raise ValidationError("File is empty")

    return TextUpload(name=file.filename, size=len(data), content=content)
