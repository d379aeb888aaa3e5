"""Async client for the CMS translation endpoints."""

from typing import Any, List, Optional, Sequence, Type, TypeVar
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from ..config import config
from ..exceptions import CMSApiError
from ..models.content import (
    CancelResponse,
    ContentSummary,
    TranslateAllRequest,
    TranslateAllResponse,
    TranslateRequest,
    TranslationRecord,
    TranslationStatusReport,
)

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def _segment(value: str) -> str:
    """Escape a path segment so ids cannot reach another route."""
    return quote(value, safe="")


def _error_message(response: httpx.Response) -> str:
    """Pull the most useful error text out of a failed response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:500] or response.reason_phrase
    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            if payload.get(key):
                return str(payload[key])
    return str(payload)[:500]


class CMSClient:
    """Client for the CMS REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the CMS client.

        Args:
            base_url: API root. If not provided, uses CMS_API_URL from environment.
            api_token: Bearer token. If not provided, uses CMS_API_TOKEN.
            timeout: Request timeout in seconds; None disables the client-side timeout.
            transport: Optional httpx transport (used to talk to in-process apps)
        """
        self.base_url = (base_url or config.api_url).rstrip("/")
        token = api_token if api_token is not None else config.api_token
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if timeout is None:
            timeout = config.request_timeout
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "CMSClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: Any = None, **kwargs) -> Any:
        try:
            response = await self._http.request(method, path, json=json, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("cms_request_failed", method=method, path=path, error=str(e))
            raise CMSApiError(
                f"Request to {path} failed: {e}",
                code="network_error",
            ) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "cms_request_rejected",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise CMSApiError(
                f"CMS API error ({response.status_code}): {message}",
                code="http_error",
                details={"path": path},
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise CMSApiError(
                f"Invalid JSON from {path}",
                code="invalid_response",
                status_code=response.status_code,
            ) from e

    def _parse(self, model: Type[M], data: Any, path: str) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise CMSApiError(
                f"Unexpected payload from {path}",
                code="invalid_response",
                details={"errors": e.errors()},
            ) from e

    # Listing

    async def list_published_contents(
        self, content_type: Optional[str] = None
    ) -> List[ContentSummary]:
        """
        List published content items.

        Drafts are never offered for translation, so they are dropped here.

        Args:
            content_type: Optional type filter ("attraction", "hotel", ...)
        """
        path = "/api/contents"
        data = await self._request("GET", path)
        contents = [self._parse(ContentSummary, item, path) for item in data or []]
        return [
            c for c in contents
            if c.is_published and (not content_type or c.type == content_type)
        ]

    async def list_translations(self) -> List[TranslationRecord]:
        """List every stored translation record (used for the status matrix)."""
        path = "/api/translations"
        data = await self._request("GET", path)
        return [self._parse(TranslationRecord, item, path) for item in data or []]

    # Per-content translation

    async def translate_content(self, content_id: str, locales: Sequence[str]) -> Any:
        """Dispatch translation of one content item into the given locales."""
        body = TranslateRequest(locales=list(locales)).model_dump(by_alias=True)
        return await self._request("POST", f"/api/translations/{_segment(content_id)}/translate", json=body)

    async def get_translation_status(self, content_id: str) -> TranslationStatusReport:
        path = f"/api/contents/{_segment(content_id)}/translation-status"
        data = await self._request("GET", path)
        return self._parse(TranslationStatusReport, data, path)

    async def get_translations(self, content_id: str) -> List[TranslationRecord]:
        path = f"/api/contents/{_segment(content_id)}/translations"
        data = await self._request("GET", path)
        return [self._parse(TranslationRecord, item, path) for item in data or []]

    async def translate_all(
        self, content_id: str, tiers: Optional[Sequence[int]] = None
    ) -> TranslateAllResponse:
        """
        Start translating one content item into every locale of the given tiers.

        An empty or missing tier list means all supported locales.
        """
        request = TranslateAllRequest(tiers=sorted(tiers) if tiers else None)
        body = request.model_dump(by_alias=True, exclude_none=True)
        path = f"/api/contents/{_segment(content_id)}/translate-all"
        data = await self._request("POST", path, json=body)
        return self._parse(TranslateAllResponse, data, path)

    async def cancel_translation(self, content_id: str) -> CancelResponse:
        path = f"/api/contents/{_segment(content_id)}/cancel-translation"
        data = await self._request("POST", path)
        return self._parse(CancelResponse, data or {}, path)
