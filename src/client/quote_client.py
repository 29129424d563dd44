"""HTTP client for submitting quote requests to the Quote Request API."""
from typing import Optional
from httpx import AsyncClient, Response

from src.client.schemas import QuoteRequestAcceptedResponse, QuoteRequestSubmission


class QuoteDeskClient:
    """HTTP client for interacting with the Quote Request API."""

    def __init__(self, base_url: str, client: Optional[AsyncClient] = None):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the API (e.g., "http://localhost:4000")
            client: Optional httpx.AsyncClient instance. If not provided, a new one will be created.
        """
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        """Async context manager entry."""
        if self._owns_client:
            self._client = AsyncClient(base_url=self.base_url)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._owns_client and self._client:
            await self._client.aclose()

    @property
    def client(self) -> AsyncClient:
        """Get the underlying httpx client."""
        if self._client is None:
            raise RuntimeError("Client not initialized. Use async context manager.")
        return self._client

    async def submit_quote_request(self, request: QuoteRequestSubmission) -> QuoteRequestAcceptedResponse:
        """
        Submit a quote request.

        Args:
            request: Quote request form fields

        Returns:
            The stored record with the confirmation message

        Raises:
            httpx.HTTPStatusError: If the request fails (400 invalid, 429 rate limited, 500 server error)
        """
        response: Response = await self.client.post(
            "/api/quote-request",
            json=request.model_dump(mode="json", by_alias=True),
        )
        response.raise_for_status()
        return QuoteRequestAcceptedResponse(**response.json())

    async def health(self) -> bool:
        """Return True when the API reports itself healthy."""
        response: Response = await self.client.get("/health")
        return response.status_code == 200 and response.json().get("status") == "healthy"
