"""RDF vocabularies used by pod datasets and ACLs."""

from rdflib import Namespace

ACL = Namespace("http://www.w3.org/ns/auth/acl#")
LDP = Namespace("http://www.w3.org/ns/ldp#")
SCHEMA = Namespace("http://schema.org/")

CONTAINER_TYPES = (LDP.Container, LDP.BasicContainer)
