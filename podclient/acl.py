"""Web Access Control documents attached to pod resources."""

import uuid
from dataclasses import dataclass, replace
from typing import Optional

from rdflib import RDF, Graph, URIRef

from common.types import AccessModes
from podclient.dataset import SolidDataset
from podclient.exceptions import AclNotFoundError
from podclient.vocab import ACL


MODE_TERMS = {
    "read": ACL.Read,
    "append": ACL.Append,
    "write": ACL.Write,
    "control": ACL.Control,
}

GRANTEE_PREDICATES = (ACL.agent, ACL.agentClass, ACL.agentGroup, ACL.origin)
SCOPE_PREDICATES = (ACL.accessTo, ACL.default)


@dataclass
class AclDataset:
    """
    ACL resource at url protecting the resource at target.
    """
    url: str
    target: str
    graph: Graph
    etag: Optional[str] = None


@dataclass
class SolidDatasetWithAcl:
    """
    A resource fetched together with its own ACL, if it has one.
    """
    resource: SolidDataset
    resource_acl: Optional[AclDataset] = None


def create_acl(resource: SolidDataset) -> AclDataset:
    """
    Create an empty ACL for a fetched resource.

    Raises:
        AclNotFoundError: If the pod did not advertise where the ACL lives
    """
    if resource.url is None or resource.acl_url is None:
        raise AclNotFoundError(f"Resource {resource.url} does not advertise an ACL location")
    return AclDataset(url=resource.acl_url, target=resource.url, graph=Graph())


def get_resource_acl(resource_with_acl: SolidDatasetWithAcl) -> Optional[AclDataset]:
    return resource_with_acl.resource_acl


def parse_acl(body: str, url: str, target: str, etag: Optional[str] = None) -> AclDataset:
    graph = Graph()
    if body.strip():
        graph.parse(data=body, format="turtle", publicID=url)
    return AclDataset(url=url, target=target, graph=graph, etag=etag)


def serialize_acl(acl: AclDataset) -> str:
    acl.graph.bind("acl", ACL)
    return acl.graph.serialize(format="turtle")


def set_agent_resource_access(acl: AclDataset, web_id: str, access: AccessModes) -> AclDataset:
    """Set the modes web_id has on the ACL's target itself."""
    return _set_agent_access(acl, web_id, access, ACL.accessTo)


def set_agent_default_access(acl: AclDataset, web_id: str, access: AccessModes) -> AclDataset:
    """Set the modes web_id inherits on the children of the ACL's target."""
    return _set_agent_access(acl, web_id, access, ACL.default)


def get_agent_resource_access(acl: AclDataset, web_id: str) -> AccessModes:
    return _get_agent_access(acl, web_id, ACL.accessTo)


def get_agent_default_access(acl: AclDataset, web_id: str) -> AccessModes:
    return _get_agent_access(acl, web_id, ACL.default)


def _new_rule(acl: AclDataset) -> URIRef:
    return URIRef(f"{acl.url}#{uuid.uuid4().hex}")


def _has_grantee(graph: Graph, rule: URIRef) -> bool:
    return any(graph.value(rule, predicate) is not None for predicate in GRANTEE_PREDICATES)


def _agent_rules(graph: Graph, agent: URIRef, scope: URIRef, target: URIRef):
    return [
        rule for rule in graph.subjects(ACL.agent, agent)
        if (rule, RDF.type, ACL.Authorization) in graph and (rule, scope, target) in graph
    ]


def _set_agent_access(acl: AclDataset, web_id: str, access: AccessModes, scope: URIRef) -> AclDataset:
    graph = Graph()
    graph += acl.graph
    agent = URIRef(web_id)
    target = URIRef(acl.target)

    for rule in _agent_rules(graph, agent, scope, target):
        graph.remove((rule, ACL.agent, agent))

        # The agent keeps whatever this rule gave it through its other scopes.
        other_scopes = [
            (predicate, obj)
            for predicate in SCOPE_PREDICATES
            for obj in graph.objects(rule, predicate)
            if (predicate, obj) != (scope, target)
        ]
        if other_scopes:
            clone = _new_rule(acl)
            graph.add((clone, RDF.type, ACL.Authorization))
            graph.add((clone, ACL.agent, agent))
            for mode in list(graph.objects(rule, ACL.mode)):
                graph.add((clone, ACL.mode, mode))
            for predicate, obj in other_scopes:
                graph.add((clone, predicate, obj))

        if not _has_grantee(graph, rule):
            graph.remove((rule, None, None))

    if access.any():
        rule = _new_rule(acl)
        graph.add((rule, RDF.type, ACL.Authorization))
        graph.add((rule, ACL.agent, agent))
        graph.add((rule, scope, target))
        for name, term in MODE_TERMS.items():
            if getattr(access, name):
                graph.add((rule, ACL.mode, term))

    return replace(acl, graph=graph)


def _get_agent_access(acl: AclDataset, web_id: str, scope: URIRef) -> AccessModes:
    granted = set()
    for rule in _agent_rules(acl.graph, URIRef(web_id), scope, URIRef(acl.target)):
        granted.update(acl.graph.objects(rule, ACL.mode))
    return AccessModes(**{name: term in granted for name, term in MODE_TERMS.items()})
