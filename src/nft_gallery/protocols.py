"""Protocols for dependency injection in the gallery."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FetcherProtocol(Protocol):
    """Protocol for content store clients."""

    async def fetch_text(self, url: str) -> str:
        """Fetch a document and return its body as text."""
        ...

    async def fetch_json(self, url: str) -> Any:
        """Fetch a document and return its decoded JSON body."""
        ...
