"""Async HTTP client for resources, containers and ACLs on a Solid pod."""

from dataclasses import replace
from typing import Optional
from urllib.parse import urljoin

import httpx
from rdflib import Graph

from common.constants import TURTLE_CONTENT_TYPE
from common.logging_config import get_logger
from podclient.acl import AclDataset, SolidDatasetWithAcl, parse_acl, serialize_acl
from podclient.dataset import SolidDataset, parse_dataset, serialize_dataset
from podclient.exceptions import (
    ContainerNotEmptyError,
    MissingLocationError,
    PodConflictError,
    PodNotFoundError,
    PodRequestError,
    PodUnauthorizedError,
    ResourceExistsError,
)

logger = get_logger(__name__)

BASIC_CONTAINER_LINK = '<http://www.w3.org/ns/ldp#BasicContainer>; rel="type"'


class PodClient:
    """
    Thin Solid protocol client over an authenticated httpx.AsyncClient.

    Every call is attempted exactly once; error statuses are raised as
    PodRequestError subclasses and transport errors surface as httpx errors.
    """

    def __init__(self, http: httpx.AsyncClient):
        """
        Initialize pod client.

        Args:
            http: Client carrying the caller's authentication
        """
        self.http = http

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        logger.debug(f"Making request: {method} {url}")
        response = await self.http.request(method, url, **kwargs)
        logger.debug(f"Response received: {method} {url} status={response.status_code}")

        if 400 <= response.status_code < 500:
            logger.warning(f"Client error: {method} {url} status={response.status_code}")
        elif response.status_code >= 500:
            logger.error(f"Server error: {method} {url} status={response.status_code}")

        return response

    def _raise_for_status(self, response: httpx.Response, url: str, action: str) -> None:
        """
        Map pod error statuses to exceptions.

        Args:
            response: HTTP response object
            url: Target URL of the request
            action: Short description used in the error message

        Raises:
            PodNotFoundError, PodUnauthorizedError or PodRequestError
        """
        status = response.status_code
        if status < 400:
            return

        message = f"{action} failed for {url} (status {status})"
        if status == 404:
            raise PodNotFoundError(message, status_code=status, url=url)
        if status in (401, 403):
            raise PodUnauthorizedError(message, status_code=status, url=url)
        raise PodRequestError(message, status_code=status, url=url)

    @staticmethod
    def _acl_url(response: httpx.Response, url: str) -> Optional[str]:
        link = response.links.get("acl")
        if not link or not link.get("url"):
            return None
        return urljoin(url, link["url"])

    @staticmethod
    def _location(response: httpx.Response, container_url: str) -> str:
        location = response.headers.get("Location")
        if not location:
            raise MissingLocationError(f"Pod did not report the URL of the resource created in {container_url}")
        return urljoin(container_url, location)

    async def create_container_at(self, url: str) -> SolidDataset:
        """
        Create an empty container at url.

        Raises:
            ResourceExistsError: If something already lives at url
        """
        response = await self._request(
            'PUT',
            url,
            content=b'',
            headers={
                'Content-Type': TURTLE_CONTENT_TYPE,
                'Link': BASIC_CONTAINER_LINK,
                'If-None-Match': '*',
            }
        )
        if response.status_code in (409, 412):
            raise ResourceExistsError(f"Container already exists: {url}", status_code=response.status_code, url=url)
        self._raise_for_status(response, url, "Container creation")

        logger.info(f"Created container {url}")
        return SolidDataset(graph=Graph(), url=url, etag=response.headers.get("ETag"))

    async def ensure_container(self, url: str) -> bool:
        """
        Create the container at url unless it is already there.

        Returns:
            True if the container was created by this call
        """
        try:
            await self.create_container_at(url)
            return True
        except ResourceExistsError:
            logger.debug(f"Container already present: {url}")
            return False

    async def save_file_in_container(
        self,
        container_url: str,
        data: bytes,
        slug: Optional[str] = None,
        content_type: str = "application/octet-stream"
    ) -> str:
        """
        Store a non-RDF file in a container.

        Args:
            container_url: URL of the target container
            data: File contents
            slug: Suggested file name; the pod may pick a different one
            content_type: Media type of the file

        Returns:
            URL the pod assigned to the new file
        """
        headers = {'Content-Type': content_type}
        if slug:
            headers['Slug'] = slug

        response = await self._request('POST', container_url, content=data, headers=headers)
        self._raise_for_status(response, container_url, "File upload")

        file_url = self._location(response, container_url)
        logger.info(f"Stored file {file_url} ({len(data)} bytes)")
        return file_url

    async def get_dataset(self, url: str) -> SolidDataset:
        response = await self._request('GET', url, headers={'Accept': TURTLE_CONTENT_TYPE})
        self._raise_for_status(response, url, "Dataset read")

        return parse_dataset(
            response.text,
            url,
            etag=response.headers.get("ETag"),
            acl_url=self._acl_url(response, url)
        )

    async def save_dataset_at(self, url: str, dataset: SolidDataset) -> SolidDataset:
        """
        Write dataset to url, replacing the stored copy.

        A dataset that was read from the pod carries its ETag, which is sent
        as If-Match so that a concurrent change is not overwritten.

        Raises:
            PodConflictError: If the stored copy changed since it was read
        """
        headers = {'Content-Type': TURTLE_CONTENT_TYPE}
        if dataset.etag:
            headers['If-Match'] = dataset.etag

        response = await self._request('PUT', url, content=serialize_dataset(dataset), headers=headers)
        if response.status_code == 412:
            raise PodConflictError(f"Dataset changed since it was read: {url}", status_code=412, url=url)
        self._raise_for_status(response, url, "Dataset write")

        logger.info(f"Saved dataset {url}")
        return replace(dataset, url=url, etag=response.headers.get("ETag"))

    async def save_dataset_in_container(
        self,
        container_url: str,
        dataset: SolidDataset,
        slug: Optional[str] = None
    ) -> SolidDataset:
        headers = {'Content-Type': TURTLE_CONTENT_TYPE}
        if slug:
            headers['Slug'] = slug

        response = await self._request('POST', container_url, content=serialize_dataset(dataset), headers=headers)
        self._raise_for_status(response, container_url, "Dataset creation")

        dataset_url = self._location(response, container_url)
        logger.info(f"Created dataset {dataset_url}")
        return replace(dataset, url=dataset_url, etag=response.headers.get("ETag"))

    async def delete_file(self, url: str) -> None:
        response = await self._request('DELETE', url)
        self._raise_for_status(response, url, "File deletion")
        logger.info(f"Deleted file {url}")

    async def delete_container(self, url: str) -> None:
        """
        Delete an empty container.

        Raises:
            ContainerNotEmptyError: If the container still holds resources
        """
        response = await self._request('DELETE', url)
        if response.status_code == 409:
            raise ContainerNotEmptyError(f"Container is not empty: {url}", status_code=409, url=url)
        self._raise_for_status(response, url, "Container deletion")
        logger.info(f"Deleted container {url}")

    async def get_dataset_with_acl(self, url: str) -> SolidDatasetWithAcl:
        """
        Fetch a resource together with its own ACL.

        resource_acl is None when the resource has no ACL of its own.
        """
        resource = await self.get_dataset(url)
        if resource.acl_url is None:
            logger.debug(f"No ACL advertised for {url}")
            return SolidDatasetWithAcl(resource=resource)

        response = await self._request('GET', resource.acl_url, headers={'Accept': TURTLE_CONTENT_TYPE})
        if response.status_code == 404:
            return SolidDatasetWithAcl(resource=resource)
        self._raise_for_status(response, resource.acl_url, "ACL read")

        acl = parse_acl(response.text, resource.acl_url, url, etag=response.headers.get("ETag"))
        return SolidDatasetWithAcl(resource=resource, resource_acl=acl)

    async def save_acl_for(self, resource: SolidDataset, acl: AclDataset) -> AclDataset:
        headers = {'Content-Type': TURTLE_CONTENT_TYPE}
        if acl.etag:
            headers['If-Match'] = acl.etag

        response = await self._request('PUT', acl.url, content=serialize_acl(acl), headers=headers)
        if response.status_code == 412:
            raise PodConflictError(f"ACL changed since it was read: {acl.url}", status_code=412, url=acl.url)
        self._raise_for_status(response, acl.url, "ACL write")

        logger.info(f"Saved ACL {acl.url} for {resource.url}")
        return replace(acl, etag=response.headers.get("ETag"))
