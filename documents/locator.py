"""Maps document types to container URLs on the caller's or another user's pod."""

from enum import Enum
from typing import Optional
from urllib.parse import quote, urlparse

from common.constants import FETCH_CROSS, FETCH_SELF, WEBID_PROFILE_PATH
from documents.config import Config


class DocumentType(str, Enum):
    BANK_STATEMENT = "Bank Statement"
    PASSPORT = "Passport"
    DRIVERS_LICENSE = "Drivers License"


class FetchMode(str, Enum):
    SELF = FETCH_SELF
    CROSS = FETCH_CROSS


def pod_root_from_web_id(web_id: str) -> str:
    """
    Derive the pod root from a WebID such as https://alice.example/profile/card#me.

    The profile document path is stripped from the end of the URL path; a
    WebID with some other path resolves to the folder holding its document.
    """
    parsed = urlparse(web_id)
    profile_path = WEBID_PROFILE_PATH.split("#")[0]
    path = parsed.path
    if path.endswith(f"/{profile_path}"):
        path = path[:-len(profile_path)]
    else:
        path = path[:path.rfind("/") + 1]
    return f"{parsed.scheme}://{parsed.netloc}{path or '/'}"


def other_pod_root(other_pod: str, config: Optional[Config] = None) -> str:
    """
    Build the root URL of another user's pod.

    Args:
        other_pod: Pod host ("bob.opencommons.net"), or a bare user name that
            lives on the configured identity provider ("bob")
        config: Configuration instance

    Returns:
        Pod root URL ending in '/'
    """
    config = config or Config()
    host = other_pod.strip()
    if '://' in host:
        host = urlparse(host).netloc
    host = host.strip('/')

    if not host:
        raise ValueError("A pod host is required to address another pod")
    if '.' not in host and ':' not in host:
        host = f"{host}.{config.get_identity_provider_host()}"

    return f"{config.get_pod_scheme()}://{host}/"


def web_id_for_pod(other_pod: str, config: Optional[Config] = None) -> str:
    return f"{other_pod_root(other_pod, config)}{WEBID_PROFILE_PATH}"


def fetch_url(
    document_type: str,
    fetch_mode: str,
    web_id: Optional[str] = None,
    other_pod: str = "",
    config: Optional[Config] = None
) -> Optional[str]:
    """
    Return the container URL holding documents of the given type.

    Args:
        document_type: One of the DocumentType values
        fetch_mode: "self-fetch" for the caller's pod, "cross-fetch" for other_pod
        web_id: Caller's WebID (self-fetch)
        other_pod: Host or user name of the other pod (cross-fetch)
        config: Configuration instance

    Returns:
        Container URL, or None if the document type is not supported
    """
    try:
        doc_type = DocumentType(document_type)
    except ValueError:
        return None

    if FetchMode(fetch_mode) is FetchMode.SELF:
        if not web_id:
            raise ValueError("The caller's WebID is required for self-fetch")
        root = pod_root_from_web_id(web_id)
    else:
        root = other_pod_root(other_pod, config)

    return f"{root}{quote(doc_type.value)}/"
