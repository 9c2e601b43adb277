"""Grants and revokes read access to a document container for another user."""

from typing import Optional

from common.constants import ACCESS_GIVE, ACCESS_REVOKE, FETCH_SELF
from common.logging_config import get_logger
from common.types import AccessModes
from documents.acl_builder import setup_acl
from documents.config import Config
from documents.exceptions import UnknownDocumentTypeError
from documents.locator import fetch_url, web_id_for_pod
from documents.session import Session
from podclient.acl import AclDataset, get_agent_resource_access, get_resource_acl
from podclient.exceptions import AclNotFoundError

logger = get_logger(__name__)


async def _own_container_acl(session: Session, file_type: str, config: Optional[Config]):
    document_url = fetch_url(file_type, FETCH_SELF, web_id=session.web_id, config=config)
    if document_url is None:
        raise UnknownDocumentTypeError(f"Unsupported document type: {file_type}")

    resource_with_acl = await session.pod.get_dataset_with_acl(document_url)
    resource_acl: Optional[AclDataset] = get_resource_acl(resource_with_acl)
    if resource_acl is None:
        raise AclNotFoundError(f"{document_url} has no ACL of its own; upload a document first")

    return resource_with_acl.resource, resource_acl


async def set_doc_acl_permission(
    session: Session,
    file_type: str,
    access_type: str,
    other_pod: str,
    config: Optional[Config] = None
) -> None:
    """
    Give or revoke another user's read access to one of the caller's document types.

    Only the other user's entries in the container's ACL change; the
    owner's own access is never read or rewritten.

    Args:
        session: Authenticated session of the container owner
        file_type: Document type
        access_type: "Give" or "Revoke"
        other_pod: Host or user name of the other user's pod
        config: Configuration instance

    Raises:
        ValueError: If access_type is neither "Give" nor "Revoke", or other_pod
            is the caller's own pod
        AclNotFoundError: If the container has no ACL yet
    """
    if access_type not in (ACCESS_GIVE, ACCESS_REVOKE):
        raise ValueError(f"access_type must be '{ACCESS_GIVE}' or '{ACCESS_REVOKE}', got '{access_type}'")

    web_id = web_id_for_pod(other_pod, config)
    if web_id == session.web_id:
        raise ValueError("The container owner's own access cannot be given or revoked")

    resource, resource_acl = await _own_container_acl(session, file_type, config)
    access = AccessModes(read=access_type == ACCESS_GIVE)

    updated_acl = setup_acl(resource_acl, web_id, access)
    await session.pod.save_acl_for(resource, updated_acl)
    logger.info(f'Permissions for {file_type} has been set to: "{access_type}" [web_id={web_id}]')


async def get_doc_acl_permission(
    session: Session,
    file_type: str,
    other_pod: str,
    config: Optional[Config] = None
) -> AccessModes:
    """Return the access another user has to one of the caller's document containers."""
    _, resource_acl = await _own_container_acl(session, file_type, config)
    return get_agent_resource_access(resource_acl, web_id_for_pod(other_pod, config))
