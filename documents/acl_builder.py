"""Composes agent access into ACLs for document containers."""

from common.types import FULL_ACCESS, AccessModes
from podclient.acl import AclDataset, set_agent_default_access, set_agent_resource_access


def setup_acl(resource_acl: AclDataset, web_id: str, access: AccessModes) -> AclDataset:
    """
    Give web_id the same access to the container and to everything inside it.

    Args:
        resource_acl: ACL of the document container
        web_id: Agent whose access is set
        access: Modes to grant; unset modes are removed for this agent

    Returns:
        Updated ACL; rules of other agents are left as they were
    """
    acl = set_agent_resource_access(resource_acl, web_id, access)
    return set_agent_default_access(acl, web_id, access)


def owner_acl(resource_acl: AclDataset, owner_web_id: str) -> AclDataset:
    return setup_acl(resource_acl, owner_web_id, FULL_ACCESS)
