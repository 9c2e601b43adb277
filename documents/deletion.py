"""Two-phase removal of a document container: its files first, then the container."""

import asyncio
from typing import Optional

from common.constants import FETCH_SELF
from common.logging_config import get_logger
from documents.config import Config
from documents.exceptions import PartialDeletionError, UnknownDocumentTypeError
from documents.locator import fetch_url
from documents.session import Session
from podclient.dataset import get_contained_items

logger = get_logger(__name__)


async def delete_document_file(session: Session, file_type: str, config: Optional[Config] = None) -> str:
    """
    Delete every file in the caller's container for a document type.

    The pod refuses to delete a container that still has members, so this
    runs before delete_document_container. All deletes are issued together
    and awaited before returning.

    Args:
        session: Authenticated session
        file_type: Document type
        config: Configuration instance

    Returns:
        URL of the now empty container

    Raises:
        UnknownDocumentTypeError: If file_type has no container
        PartialDeletionError: If any file could not be deleted
    """
    document_url = fetch_url(file_type, FETCH_SELF, web_id=session.web_id, config=config)
    if document_url is None:
        raise UnknownDocumentTypeError(f"Unsupported document type: {file_type}")

    container = await session.pod.get_dataset(document_url)
    files = [item.url for item in get_contained_items(container) if not item.is_container]

    delete_tasks = [session.pod.delete_file(url) for url in files]
    results = await asyncio.gather(*delete_tasks, return_exceptions=True)

    failures = {url: result for url, result in zip(files, results) if isinstance(result, BaseException)}
    for url, error in failures.items():
        logger.warning(f"Delete of {url} failed: {error}")
    logger.info(f"Deleted {len(files) - len(failures)}/{len(files)} files from {document_url}")
    if failures:
        raise PartialDeletionError(document_url, failures)

    return container.url


async def delete_document_container(session: Session, document_url: str) -> None:
    """
    Delete an emptied document container.

    Raises:
        ContainerNotEmptyError: If files are still present
    """
    await session.pod.delete_container(document_url)
    logger.info(f"Deleted document container {document_url}")


async def delete_document(session: Session, file_type: str, config: Optional[Config] = None) -> str:
    """
    Delete a document type's files and then its container.

    The container is left in place if any file could not be deleted.

    Returns:
        URL of the deleted container
    """
    document_url = await delete_document_file(session, file_type, config=config)
    await delete_document_container(session, document_url)
    return document_url
