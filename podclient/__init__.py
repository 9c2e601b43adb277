"""Solid pod client: datasets, Things, ACLs and the HTTP calls behind them."""

from podclient.acl import (
    AclDataset,
    SolidDatasetWithAcl,
    create_acl,
    get_agent_default_access,
    get_agent_resource_access,
    get_resource_acl,
    set_agent_default_access,
    set_agent_resource_access,
)
from podclient.client import PodClient
from podclient.dataset import (
    SolidDataset,
    Thing,
    build_thing,
    create_dataset,
    create_thing,
    get_contained_items,
    get_string_no_locale,
    get_thing,
    get_thing_all,
    set_thing,
)

__all__ = [
    "AclDataset",
    "SolidDatasetWithAcl",
    "create_acl",
    "get_agent_default_access",
    "get_agent_resource_access",
    "get_resource_acl",
    "set_agent_default_access",
    "set_agent_resource_access",
    "PodClient",
    "SolidDataset",
    "Thing",
    "build_thing",
    "create_dataset",
    "create_thing",
    "get_contained_items",
    "get_string_no_locale",
    "get_thing",
    "get_thing_all",
    "set_thing",
]
