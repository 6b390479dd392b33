"""
Document validation utilities.

Upload checks that run before any engine call. The order is fixed:
file, then title, then size. Title and author limits match the metadata
columns so an accepted upload can always be recorded.

Dependencies: docportal.core.exceptions
System role: Document request validation
"""

from fastapi import UploadFile

from docportal.application.services import UploadedFile
from docportal.boundary.db.models.document_model import AUTHOR_MAX_LENGTH, TITLE_MAX_LENGTH
from docportal.core.exceptions import ValidationError


def validate_title(title: str | None) -> str:
    """
    Require a non-blank title that fits the metadata column.

    Returns:
        str: Title stripped of surrounding whitespace

    Raises:
        ValidationError: If the title is missing, blank or too long
    """
    if title is None or not title.strip():
        raise ValidationError("Title is required", field="title")
    clean_title = title.strip()
    if len(clean_title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters",
            field="title",
            details={"length": len(clean_title), "max_length": TITLE_MAX_LENGTH},
        )
    return clean_title


def validate_author(author: str | None) -> str | None:
    """Optional author; blank becomes None. Raises ValidationError when too long."""
    if author is None or not author.strip():
        return None
    clean_author = author.strip()
    if len(clean_author) > AUTHOR_MAX_LENGTH:
        raise ValidationError(
            f"Author must be at most {AUTHOR_MAX_LENGTH} characters",
            field="author",
            details={"length": len(clean_author), "max_length": AUTHOR_MAX_LENGTH},
        )
    return clean_author


async def validate_upload(
    file: UploadFile | None,
    title: str | None,
    max_file_size_bytes: int,
) -> tuple[UploadedFile, str]:
    """
    Validate an upload form.

    Args:
        file: Uploaded file part, if any
        title: Title form field, if any
        max_file_size_bytes: Size limit (inclusive)

    Returns:
        tuple[UploadedFile, str]: File contents and cleaned title

    Raises:
        ValidationError: Missing file, missing or overlong title, or oversized file
    """
    if file is None or not file.filename:
        raise ValidationError("No file provided", field="file")

    clean_title = validate_title(title)

    content = await file.read()
    if len(content) > max_file_size_bytes:
        limit_mb = max_file_size_bytes / (1024 * 1024)
        raise ValidationError(
            f"File size exceeds {limit_mb:g}MB limit",
            field="file",
            details={"file_size": len(content), "max_file_size_bytes": max_file_size_bytes},
        )

    return UploadedFile(filename=file.filename, content=content, content_type=file.content_type), clean_title
