"""Document storage and sharing on Solid pods."""

from common.logging_config import setup_logging
from documents.config import Config
from documents.deletion import delete_document, delete_document_container, delete_document_file
from documents.exceptions import (
    DocumentError,
    DocumentNotFoundError,
    PartialDeletionError,
    UnknownDocumentTypeError,
)
from documents.locator import DocumentType, FetchMode, fetch_url
from documents.permissions import get_doc_acl_permission, set_doc_acl_permission
from documents.retrieval import fetch_document_metadata, fetch_documents
from documents.schemas import DocumentUpload
from documents.session import Session, create_session
from documents.types import DocumentRecord, UploadResult
from documents.upload import upload_document

setup_logging('documents')
setup_logging('podclient')

__all__ = [
    "Config",
    "delete_document",
    "delete_document_container",
    "delete_document_file",
    "DocumentError",
    "DocumentNotFoundError",
    "PartialDeletionError",
    "UnknownDocumentTypeError",
    "DocumentType",
    "FetchMode",
    "fetch_url",
    "get_doc_acl_permission",
    "set_doc_acl_permission",
    "fetch_document_metadata",
    "fetch_documents",
    "DocumentUpload",
    "Session",
    "create_session",
    "DocumentRecord",
    "UploadResult",
    "upload_document",
]
