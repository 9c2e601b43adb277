"""Lookup of document containers on the caller's or another user's pod."""

from typing import List, Optional

import httpx

from common.logging_config import get_logger
from documents.config import Config
from documents.exceptions import DocumentNotFoundError
from documents.locator import fetch_url
from documents.session import Session
from documents.types import DocumentRecord
from documents.upload import find_metadata_dataset
from podclient.dataset import SolidDataset, get_string_no_locale, get_thing_all
from podclient.exceptions import PodError
from podclient.vocab import SCHEMA

logger = get_logger(__name__)


async def _read_container(
    session: Session,
    file_type: str,
    fetch_type: str,
    other_pod: str,
    config: Optional[Config]
) -> SolidDataset:
    try:
        document_url = fetch_url(file_type, fetch_type, web_id=session.web_id, other_pod=other_pod, config=config)
        if document_url is None:
            raise DocumentNotFoundError()
        return await session.pod.get_dataset(document_url)
    except (PodError, httpx.HTTPError, ValueError) as e:
        logger.info(f"No data found or unauthorized: type={file_type} mode={fetch_type} ({e})")
        raise DocumentNotFoundError() from e


async def fetch_documents(
    session: Session,
    file_type: str,
    fetch_type: str,
    other_pod: str = "",
    config: Optional[Config] = None
) -> str:
    """
    Return the URL of a document container if the caller can read it.

    Args:
        session: Authenticated session
        file_type: Document type
        fetch_type: "self-fetch" or "cross-fetch"
        other_pod: Host or user name of the other pod (cross-fetch)
        config: Configuration instance

    Returns:
        Container URL

    Raises:
        DocumentNotFoundError: If the container is missing or not readable
    """
    container = await _read_container(session, file_type, fetch_type, other_pod, config)
    return container.url


async def fetch_document_metadata(
    session: Session,
    file_type: str,
    fetch_type: str,
    other_pod: str = "",
    config: Optional[Config] = None
) -> List[DocumentRecord]:
    """
    Read the metadata stored for every file of a document type.

    Raises:
        DocumentNotFoundError: If the container or its metadata is missing or not readable
    """
    container = await _read_container(session, file_type, fetch_type, other_pod, config)
    metadata_url = find_metadata_dataset(container)
    if metadata_url is None:
        return []

    try:
        dataset = await session.pod.get_dataset(metadata_url)
    except (PodError, httpx.HTTPError) as e:
        logger.info(f"No data found or unauthorized: {metadata_url} ({e})")
        raise DocumentNotFoundError() from e

    return [
        DocumentRecord(
            url=thing.url,
            name=get_string_no_locale(thing, SCHEMA.name),
            identifier=get_string_no_locale(thing, SCHEMA.identifier),
            end_date=get_string_no_locale(thing, SCHEMA.endDate),
            description=get_string_no_locale(thing, SCHEMA.description),
        )
        for thing in get_thing_all(dataset)
    ]
