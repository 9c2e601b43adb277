"""Pydantic schemas for document payloads coming from the UI."""

import datetime
import mimetypes
from typing import Optional

from pydantic import BaseModel, field_validator

from common.constants import DEFAULT_FILE_CONTENT_TYPE
from documents.locator import DocumentType


class DocumentUpload(BaseModel):
    """Form submission for one uploaded document."""
    type: DocumentType
    date: str
    description: str = ""
    file_name: str
    content: bytes
    content_type: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        datetime.date.fromisoformat(value)
        return value

    @field_validator("file_name")
    @classmethod
    def check_file_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("file_name cannot be empty")
        return value

    def media_type(self) -> str:
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.file_name)
        return guessed or DEFAULT_FILE_CONTENT_TYPE
