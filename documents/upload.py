"""Upload pipeline: container, file, metadata dataset and owner ACL."""

from typing import Optional, Union
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from common.constants import FETCH_SELF, METADATA_EXTENSION, METADATA_SLUG
from common.logging_config import get_logger
from documents.acl_builder import owner_acl
from documents.config import Config
from documents.exceptions import UnknownDocumentTypeError
from documents.locator import fetch_url
from documents.schemas import DocumentUpload
from documents.session import Session
from documents.types import (
    UPLOAD_CREATED,
    UPLOAD_MERGED,
    UPLOAD_PLACEMENT_FAILED,
    PlacementResult,
    UploadResult,
)
from podclient.acl import create_acl
from podclient.dataset import (
    SolidDataset,
    Thing,
    build_thing,
    create_dataset,
    create_thing,
    get_contained_items,
    set_thing,
)
from podclient.exceptions import PodError
from podclient.vocab import SCHEMA

logger = get_logger(__name__)


async def place_file_in_container(
    session: Session,
    upload: DocumentUpload,
    container_url: str
) -> PlacementResult:
    """
    Store the uploaded file in its container.

    Failures are logged and returned rather than raised, so the caller can
    decide what happens to the metadata.
    """
    try:
        file_url = await session.pod.save_file_in_container(
            container_url,
            upload.content,
            slug=upload.file_name,
            content_type=upload.media_type()
        )
        return PlacementResult(file_url=file_url)
    except (PodError, httpx.HTTPError) as e:
        logger.error(f"Failed to place {upload.file_name} in {container_url}: {e}", exc_info=True)
        return PlacementResult(error=e)


def find_metadata_dataset(container: SolidDataset, exclude: Optional[str] = None) -> Optional[str]:
    """
    Return the URL of the container's metadata dataset, if there is one.

    Args:
        container: Container listing
        exclude: URL of a member that must not be taken for the dataset
            (the file that was just uploaded)

    Returns:
        URL of the member named metadata.ttl, else of the first other
        Turtle member, else None
    """
    candidates = [
        item.url for item in get_contained_items(container)
        if not item.is_container and item.url != exclude
        and item.url.endswith(f".{METADATA_EXTENSION}")
    ]
    for url in candidates:
        if urlparse(url).path.rsplit('/', 1)[-1] == METADATA_SLUG:
            return url
    return candidates[0] if candidates else None


def build_metadata_thing(upload: DocumentUpload, file_url: str) -> Thing:
    return (
        build_thing(create_thing(file_url))
        .add_string_no_locale(SCHEMA.name, upload.file_name)
        .add_string_no_locale(SCHEMA.identifier, upload.type.value)
        .add_string_no_locale(SCHEMA.endDate, upload.date)
        .add_string_no_locale(SCHEMA.description, upload.description)
        .build()
    )


async def create_doc_acl_for_user(session: Session, document_url: str) -> None:
    """
    Generate the container's ACL, giving its owner full control of it and its contents.
    """
    resource = await session.pod.get_dataset(document_url)
    acl = owner_acl(create_acl(resource), session.web_id)
    await session.pod.save_acl_for(resource, acl)
    logger.info(f"ACL generated for {document_url}")


async def upload_document(
    session: Session,
    upload: Union[DocumentUpload, dict],
    config: Optional[Config] = None
) -> UploadResult:
    """
    Upload a document to the caller's pod and record its metadata.

    1. Ensure the container for the document type exists
    2. Store the file in it
    3. Merge a metadata Thing into the container's dataset, or create the
       dataset and the owner's ACL when this is the first upload

    Args:
        session: Authenticated session
        upload: Form payload (a DocumentUpload or its dict form)
        config: Configuration instance

    Returns:
        UploadResult; status is "placement_failed" when the file could not be
        stored, in which case no metadata was written

    Raises:
        UnknownDocumentTypeError: If the payload names an unsupported type
        pydantic.ValidationError: If any other field is invalid
        PodError: If a container, dataset or ACL call fails
    """
    if not isinstance(upload, DocumentUpload):
        try:
            upload = DocumentUpload.model_validate(upload)
        except ValidationError as e:
            if any(error["loc"] == ("type",) for error in e.errors()):
                raise UnknownDocumentTypeError(f"Unsupported document type: {upload.get('type')}") from e
            raise

    document_url = fetch_url(upload.type, FETCH_SELF, web_id=session.web_id, config=config)
    pod = session.pod

    await pod.ensure_container(document_url)

    placement = await place_file_in_container(session, upload, document_url)
    if not placement.ok:
        logger.warning(f"Skipping metadata for {upload.file_name}: file was not stored in {document_url}")
        return UploadResult(
            container_url=document_url,
            status=UPLOAD_PLACEMENT_FAILED,
            error=placement.error
        )

    container = await pod.get_dataset(document_url)
    metadata_url = find_metadata_dataset(container, exclude=placement.file_url)
    thing = build_metadata_thing(upload, placement.file_url)

    if metadata_url is not None:
        dataset = await pod.get_dataset(metadata_url)
        dataset = await pod.save_dataset_at(metadata_url, set_thing(dataset, thing))
        status = UPLOAD_MERGED
        logger.debug(f"Merged metadata for {placement.file_url} into {metadata_url}")
    else:
        dataset = await pod.save_dataset_in_container(
            document_url,
            set_thing(create_dataset(), thing),
            slug=METADATA_SLUG
        )
        status = UPLOAD_CREATED
        logger.debug(f"Created metadata dataset {dataset.url}")

        await create_doc_acl_for_user(session, document_url)

    logger.info(
        f"Uploaded {upload.file_name} to pod successfully and set identifier to {upload.type.value}, "
        f"end date to {upload.date}, and description to {upload.description}"
    )
    return UploadResult(
        container_url=document_url,
        status=status,
        file_url=placement.file_url,
        metadata_url=dataset.url
    )
