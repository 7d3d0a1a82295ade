from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import httpx
import structlog

logger = structlog.get_logger(__name__)

TOXICITY_ATTRIBUTE = "TOXICITY"


class PerspectiveAdapterError(Exception):
    pass


@dataclass(slots=True)
class AttributeScore:
    attribute: str
    value: float


class PerspectiveClient:
    """Thin async client for the Perspective comment analyzer.

    A single request is sent per call; failures surface as
    ``PerspectiveAdapterError`` and are never retried here.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://commentanalyzer.googleapis.com/v1alpha1",
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        if client is None:
            options: dict[str, Any] = {"base_url": self._base_url, "params": {"key": api_key}}
            if timeout is not None:
                options["timeout"] = timeout
            client = httpx.AsyncClient(**options)
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client

    async def post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        logger.debug("perspective_request", path=path)
        try:
            response = await self._client.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise PerspectiveAdapterError(f"Transport error: {exc}") from exc
        if response.status_code >= 400:
            raise PerspectiveAdapterError(f"API error: {response.status_code} {response.text}")
        try:
            data = response.json()
        except ValueError as exc:
            raise PerspectiveAdapterError("Response body is not JSON") from exc
        logger.debug("perspective_response", path=path, status=response.status_code)
        return data

    async def analyze(
        self,
        text: str,
        *,
        languages: Sequence[str] = ("en",),
        attribute: str = TOXICITY_ATTRIBUTE,
    ) -> AttributeScore:
        payload = {
            "comment": {"text": text},
            "languages": list(languages),
            "requestedAttributes": {attribute: {}},
        }
        logger.debug("perspective_api_call", attribute=attribute, text_preview=text[:60])
        data = await self.post("/comments:analyze", payload)
        try:
            value = data["attributeScores"][attribute]["summaryScore"]["value"]
            return AttributeScore(attribute=attribute, value=float(value))
        except (KeyError, TypeError, ValueError) as exc:
            raise PerspectiveAdapterError(f"Malformed {attribute} score in response") from exc

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
