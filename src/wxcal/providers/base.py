"""Base forecast provider abstraction.

A provider fetches the forecast for a point and returns it as a validated
`ForecastResponse`. Everything that can go wrong while doing so (transport
errors, HTTP error statuses, undecodable or unexpected bodies) surfaces as a
`ProviderError`, which is what the retry wrapper retries on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from wxcal import PRODUCT_NAME, __version__
from wxcal.models.forecast import ForecastResponse
from wxcal.models.location import Coordinates

ModelT = TypeVar("ModelT", bound=BaseModel)


class ProviderError(Exception):
    """Base exception for forecast provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


def user_agent(contact_email: str | None = None) -> str:
    """User-Agent identifying this software, and its operator if known."""
    if contact_email:
        return f"{PRODUCT_NAME} {__version__} (contact: {contact_email})"
    return f"{PRODUCT_NAME} {__version__}"


class ForecastProvider(ABC):
    """Abstract base class for forecast data providers.

    Attributes:
        name: Human-readable provider name
        base_url: Base URL for the API
        accept: Media type requested from the API
    """

    name: str
    base_url: str
    accept: str = "application/json"

    def __init__(
        self,
        contact_email: str | None = None,
        timeout: float = 5.0,
        force_ipv4: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the provider.

        Args:
            contact_email: Contact email for the User-Agent header
            timeout: Per-request timeout in seconds
            force_ipv4: Only connect over IPv4
            transport: Custom transport (used by tests)
        """
        self.user_agent = user_agent(contact_email)
        self.timeout = timeout
        self.force_ipv4 = force_ipv4
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ForecastProvider:
        """Enter async context manager."""
        self._client = self._make_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _make_client(self) -> httpx.AsyncClient:
        transport = self._transport
        if transport is None and self.force_ipv4:
            # Binding the local side to 0.0.0.0 restricts connections to IPv4.
            transport = httpx.AsyncHTTPTransport(local_address="0.0.0.0")
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=transport,
            headers=self._get_default_headers(),
            follow_redirects=True,
        )

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = self._make_client()
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
        }

    async def _fetch_model(self, url: str, model: type[ModelT]) -> ModelT:
        """GET `url` and decode its JSON body into `model`.

        Raises:
            ProviderError: On transport errors, HTTP errors or bad bodies
        """
        client = self._get_client()
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise ProviderError(
                f"Request to {url} failed: {e}",
                provider=self.name,
            ) from e

        if response.status_code >= 400:
            raise ProviderError(
                f"API request failed: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise ProviderError(
                f"Error decoding JSON response from {url}: {e}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    @abstractmethod
    async def get_forecast(self, coordinates: Coordinates) -> ForecastResponse:
        """Get the period forecast for a location.

        Raises:
            ProviderError: If the forecast cannot be retrieved
        """
        pass
