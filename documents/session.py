"""Authenticated pod session handed in by the login collaborator."""

from dataclasses import dataclass
from typing import Optional

import httpx

from common.logging_config import get_logger
from documents.config import Config
from podclient.client import PodClient

logger = get_logger(__name__)


@dataclass
class Session:
    """
    Caller identity plus an HTTP client that carries its credentials.
    """
    web_id: str
    http: httpx.AsyncClient

    @property
    def pod(self) -> PodClient:
        return PodClient(self.http)

    async def close(self) -> None:
        await self.http.aclose()


def create_session(
    web_id: str,
    access_token: Optional[str] = None,
    config: Optional[Config] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> Session:
    """
    Wrap an already obtained access token in a Session.

    Args:
        web_id: WebID of the logged-in user
        access_token: Bearer token issued by the identity provider, if any
        config: Configuration instance (timeout)
        transport: Optional transport override (testing)

    Returns:
        Session for web_id
    """
    config = config or Config()
    headers = {}
    if access_token:
        headers['Authorization'] = f'Bearer {access_token}'

    http = httpx.AsyncClient(headers=headers, timeout=config.get_timeout(), transport=transport)
    logger.info(f"Created session [web_id={web_id}]")
    return Session(web_id=web_id, http=http)
