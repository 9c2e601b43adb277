"""In-memory Solid pod served through httpx.MockTransport."""

import hashlib
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple
from urllib.parse import quote

import httpx
from rdflib import RDF, Graph, URIRef

from documents.schemas import DocumentUpload

ACL_NS = "http://www.w3.org/ns/auth/acl#"
TURTLE = "text/turtle"

ALICE_ROOT = "https://alice.opencommons.net/"
ALICE_WEBID = f"{ALICE_ROOT}profile/card#me"
BOB_ROOT = "https://bob.opencommons.net/"
BOB_WEBID = f"{BOB_ROOT}profile/card#me"


@dataclass
class StoredResource:
    body: bytes
    content_type: str
    etag: str


def _new_etag() -> str:
    return f'"{uuid.uuid4().hex}"'


class FakePod:
    """
    Minimal Solid server for tests.

    Pod owners may do anything on their pod; other agents get what the
    nearest ACL grants them. Requests are identified by bearer token.
    """

    def __init__(self):
        self.resources: Dict[str, StoredResource] = {}
        self.containers: Set[str] = set()
        self.owners: Dict[str, str] = {}
        self.tokens: Dict[str, str] = {}
        self.requests: List[Tuple[str, str]] = []
        self.failures: Dict[Tuple[str, str], int] = {}
        self.failing_slugs: Dict[str, int] = {}
        self.transport = httpx.MockTransport(self.handle)

    def add_pod(self, root: str, web_id: str, token: str) -> None:
        self.containers.add(root)
        self.owners[root] = web_id
        self.tokens[token] = web_id

    # -------------------------------------------------------------------
    # Inspection helpers
    # -------------------------------------------------------------------

    def children(self, container_url: str) -> List[str]:
        members = [url for url in self.containers | set(self.resources) if url != container_url]
        return sorted(
            url for url in members
            if url.startswith(container_url)
            and not url.endswith('.acl')
            and '/' not in url[len(container_url):].rstrip('/')
        )

    def exists(self, url: str) -> bool:
        return url in self.containers or url in self.resources

    def count(self, method: str, prefix: str = '') -> int:
        return sum(1 for m, url in self.requests if m == method and url.startswith(prefix))

    def acl_graph(self, url: str) -> Optional[Graph]:
        stored = self.resources.get(f"{url}.acl")
        if stored is None:
            return None
        graph = Graph()
        graph.parse(data=stored.body.decode(), format='turtle', publicID=f"{url}.acl")
        return graph

    # -------------------------------------------------------------------
    # Request handling
    # -------------------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        method = request.method
        self.requests.append((method, url))

        if (method, url) in self.failures:
            return httpx.Response(self.failures[(method, url)])

        root = self._root_of(url)
        if root is None:
            return httpx.Response(404)

        agent = self._agent(request)
        is_owner = agent is not None and agent == self.owners[root]

        if url.endswith('.acl'):
            if not is_owner:
                return self._denied(agent)
            return self._handle_acl(request, url)

        if method == 'GET':
            if not (is_owner or self._allowed(url, agent, 'Read')):
                return self._denied(agent)
            return self._get(url)

        if not is_owner:
            return self._denied(agent)

        if method == 'PUT':
            return self._put(request, url)
        if method == 'POST':
            return self._post(request, url)
        if method == 'DELETE':
            return self._delete(url)
        return httpx.Response(405)

    def _root_of(self, url: str) -> Optional[str]:
        for root in self.owners:
            if url.startswith(root):
                return root
        return None

    def _agent(self, request: httpx.Request) -> Optional[str]:
        auth = request.headers.get('Authorization', '')
        if not auth.startswith('Bearer '):
            return None
        return self.tokens.get(auth[len('Bearer '):])

    @staticmethod
    def _denied(agent: Optional[str]) -> httpx.Response:
        return httpx.Response(401 if agent is None else 403)

    def _link(self, url: str) -> str:
        name = '' if url.endswith('/') else url.rsplit('/', 1)[1]
        return f'<{name}.acl>; rel="acl"'

    def _allowed(self, url: str, agent: Optional[str], mode: str) -> bool:
        if agent is None:
            return False

        target = url
        scope = 'accessTo'
        while True:
            graph = self.acl_graph(target)
            if graph is not None:
                return self._graph_grants(graph, target, agent, mode, scope)
            if target in self.owners:
                return False
            target = target[:target.rstrip('/').rfind('/') + 1]
            scope = 'default'

    @staticmethod
    def _graph_grants(graph: Graph, target: str, agent: str, mode: str, scope: str) -> bool:
        for rule in graph.subjects(RDF.type, URIRef(ACL_NS + 'Authorization')):
            if (rule, URIRef(ACL_NS + 'agent'), URIRef(agent)) not in graph:
                continue
            if (rule, URIRef(ACL_NS + scope), URIRef(target)) not in graph:
                continue
            if (rule, URIRef(ACL_NS + 'mode'), URIRef(ACL_NS + mode)) in graph:
                return True
        return False

    def _listing(self, url: str) -> bytes:
        lines = [
            '@prefix ldp: <http://www.w3.org/ns/ldp#> .',
            f'<{url}> a ldp:Container, ldp:BasicContainer .',
        ]
        for child in self.children(url):
            lines.append(f'<{url}> ldp:contains <{child}> .')
            if child in self.containers:
                lines.append(f'<{child}> a ldp:Container, ldp:BasicContainer, ldp:Resource .')
            else:
                lines.append(f'<{child}> a ldp:Resource .')
        return '\n'.join(lines).encode()

    def _get(self, url: str) -> httpx.Response:
        if url in self.containers:
            body = self._listing(url)
            etag = f'"{hashlib.md5(body).hexdigest()}"'
            return httpx.Response(
                200,
                content=body,
                headers={'Content-Type': TURTLE, 'ETag': etag, 'Link': self._link(url)}
            )

        stored = self.resources.get(url)
        if stored is None:
            return httpx.Response(404)
        return httpx.Response(
            200,
            content=stored.body,
            headers={'Content-Type': stored.content_type, 'ETag': stored.etag, 'Link': self._link(url)}
        )

    def _ensure_parents(self, url: str) -> None:
        parent = url[:url.rstrip('/').rfind('/') + 1]
        while parent not in self.containers:
            self.containers.add(parent)
            parent = parent[:parent.rstrip('/').rfind('/') + 1]

    def _put(self, request: httpx.Request, url: str) -> httpx.Response:
        exists = self.exists(url)
        if request.headers.get('If-None-Match') == '*' and exists:
            return httpx.Response(412)

        if url.endswith('/'):
            if exists:
                return httpx.Response(409)
            self._ensure_parents(url)
            self.containers.add(url)
            return httpx.Response(201)

        if_match = request.headers.get('If-Match')
        if if_match is not None:
            stored = self.resources.get(url)
            if stored is None or stored.etag != if_match:
                return httpx.Response(412)

        return self._store(request, url, 205 if exists else 201)

    def _store(self, request: httpx.Request, url: str, status: int) -> httpx.Response:
        self._ensure_parents(url)
        etag = _new_etag()
        self.resources[url] = StoredResource(
            body=request.content,
            content_type=request.headers.get('Content-Type', 'application/octet-stream'),
            etag=etag
        )
        return httpx.Response(status, headers={'ETag': etag})

    def _post(self, request: httpx.Request, url: str) -> httpx.Response:
        if url not in self.containers:
            return httpx.Response(405)

        slug = request.headers.get('Slug') or uuid.uuid4().hex
        if slug in self.failing_slugs:
            return httpx.Response(self.failing_slugs[slug])

        child = f"{url}{quote(slug, safe='.-_~')}"
        if self.exists(child):
            child = f"{url}{uuid.uuid4().hex[:8]}-{quote(slug, safe='.-_~')}"

        response = self._store(request, child, 201)
        response.headers['Location'] = child
        return response

    def _delete(self, url: str) -> httpx.Response:
        if url in self.containers:
            if url in self.owners:
                return httpx.Response(405)
            if self.children(url):
                return httpx.Response(409)
            self.containers.discard(url)
        elif url in self.resources:
            del self.resources[url]
        else:
            return httpx.Response(404)

        self.resources.pop(f"{url}.acl", None)
        return httpx.Response(205)

    def _handle_acl(self, request: httpx.Request, url: str) -> httpx.Response:
        if request.method == 'GET':
            stored = self.resources.get(url)
            if stored is None:
                return httpx.Response(404)
            return httpx.Response(
                200,
                content=stored.body,
                headers={'Content-Type': TURTLE, 'ETag': stored.etag}
            )
        if request.method == 'PUT':
            if_match = request.headers.get('If-Match')
            stored = self.resources.get(url)
            if if_match is not None and (stored is None or stored.etag != if_match):
                return httpx.Response(412)
            etag = _new_etag()
            self.resources[url] = StoredResource(body=request.content, content_type=TURTLE, etag=etag)
            return httpx.Response(205 if stored else 201, headers={'ETag': etag})
        return httpx.Response(405)


def make_upload(file_name: str, doc_type: str = 'Passport', date: str = '2025-06-30',
                description: str = 'Sample document') -> DocumentUpload:
    return DocumentUpload(
        type=doc_type,
        date=date,
        description=description,
        file_name=file_name,
        content=f'contents of {file_name}'.encode(),
    )
