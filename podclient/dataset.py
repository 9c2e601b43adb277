"""RDF datasets and Things as stored in pod resources."""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from rdflib import RDF, BNode, Graph, Literal, URIRef
from rdflib.term import Node

from common.types import ContainerItem
from podclient.vocab import CONTAINER_TYPES, LDP, SCHEMA


@dataclass
class SolidDataset:
    """
    Graph of a pod resource plus the response details needed to write it back.

    A dataset built locally has no url until it is saved.
    """
    graph: Graph
    url: Optional[str] = None
    etag: Optional[str] = None
    acl_url: Optional[str] = None


@dataclass(frozen=True)
class Thing:
    """
    All statements about one subject URL.
    """
    url: str
    values: Tuple[Tuple[URIRef, Node], ...] = ()


class ThingBuilder:
    """Fluent builder returned by build_thing()."""

    def __init__(self, thing: Thing):
        self._url = thing.url
        self._values = list(thing.values)

    def add_string_no_locale(self, predicate: str, value: str) -> "ThingBuilder":
        self._values.append((URIRef(str(predicate)), Literal(value)))
        return self

    def build(self) -> Thing:
        return Thing(url=self._url, values=tuple(self._values))


def create_dataset() -> SolidDataset:
    """Create an empty, unsaved dataset."""
    return SolidDataset(graph=Graph())


def parse_dataset(
    body: str,
    url: str,
    etag: Optional[str] = None,
    acl_url: Optional[str] = None
) -> SolidDataset:
    """
    Parse a Turtle body into a dataset, resolving relative IRIs against url.

    Args:
        body: Turtle document
        url: URL the body was fetched from
        etag: ETag header of the response, if any
        acl_url: Absolute URL of the resource's ACL, if advertised

    Returns:
        SolidDataset bound to url
    """
    graph = Graph()
    if body.strip():
        graph.parse(data=body, format="turtle", publicID=url)
    return SolidDataset(graph=graph, url=url, etag=etag, acl_url=acl_url)


def serialize_dataset(dataset: SolidDataset) -> str:
    dataset.graph.bind("schema", SCHEMA)
    return dataset.graph.serialize(format="turtle")


def create_thing(url: str) -> Thing:
    return Thing(url=url)


def build_thing(thing: Thing) -> ThingBuilder:
    return ThingBuilder(thing)


def set_thing(dataset: SolidDataset, thing: Thing) -> SolidDataset:
    """
    Return a copy of dataset in which thing replaces any Thing with the same URL.
    """
    graph = Graph()
    graph += dataset.graph
    subject = URIRef(thing.url)
    graph.remove((subject, None, None))
    for predicate, value in thing.values:
        graph.add((subject, predicate, value))
    return replace(dataset, graph=graph)


def get_thing(dataset: SolidDataset, url: str) -> Optional[Thing]:
    values = tuple(dataset.graph.predicate_objects(URIRef(url)))
    if not values:
        return None
    return Thing(url=url, values=values)


def get_thing_all(dataset: SolidDataset) -> List[Thing]:
    """All Things with a URL subject, ordered by URL."""
    subjects = {s for s in dataset.graph.subjects() if not isinstance(s, BNode)}
    return [get_thing(dataset, str(s)) for s in sorted(subjects, key=str)]


def get_string_no_locale(thing: Thing, predicate: str) -> Optional[str]:
    predicate = URIRef(str(predicate))
    for key, value in thing.values:
        if key == predicate and isinstance(value, Literal) and value.language is None:
            return str(value)
    return None


def get_contained_items(dataset: SolidDataset) -> List[ContainerItem]:
    """
    List the members of a container dataset.

    Sub-containers are recognized by the rdf:type the pod reports for them
    in the listing.
    """
    if dataset.url is None:
        return []

    graph = dataset.graph
    items = []
    for member in graph.objects(URIRef(dataset.url), LDP.contains):
        is_container = any((member, RDF.type, t) in graph for t in CONTAINER_TYPES)
        items.append(ContainerItem(url=str(member), is_container=is_container))
    return sorted(items, key=lambda item: item.url)
