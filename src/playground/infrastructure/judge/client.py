"""
Remote judge HTTP client.

Implements IJudgePort against a Judge0 compatible service: resolves the
language alias through the cached catalog, posts one synchronous
base64-encoded submission and decodes the outcome.
"""

import base64
import binascii
from typing import Any, Dict, List, Optional

import httpx

from playground.domain.errors import RemoteServiceError, UnsupportedLanguageAliasError
from playground.domain.ports import IJudgePort
from playground.domain.value_objects import JudgeOutcome, JudgeSubmission, LanguageCatalogEntry
from playground.infrastructure.judge.catalog import DEFAULT_TTL_SECONDS, LanguageCatalog
from playground.infrastructure.logging import get_logger

logger = get_logger(__name__)


def encode_text(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_field(value: Any) -> str:
    """
    Decode a base64 response field.

    Missing or empty fields become ``""``; anything that is not valid
    base64 of UTF-8 text is returned as-is. Line breaks inside the
    encoded text are allowed, the service wraps long fields.
    """
    if not value:
        return ""
    raw = str(value)
    try:
        compact = raw.replace("\r", "").replace("\n", "")
        return base64.b64decode(compact, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return raw


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        logger.warning("Judge answered with a non-JSON body", status_code=response.status_code)
        raise RemoteServiceError(response.text, status_code=502) from e


class JudgeClient(IJudgePort):
    """
    Judge0 client.

    One attempt per call; failures are surfaced to the caller as
    RemoteServiceError carrying the upstream status and body.
    """

    def __init__(
        self,
        base_url: str = "https://ce.judge0.com",
        api_key: str = "",
        api_host: str = "",
        timeout: float = 30.0,
        connect_timeout: float = 5.0,
        catalog_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
        catalog: Optional[LanguageCatalog] = None,
    ):
        """
        Args:
            base_url: Service root, without trailing slash
            api_key: RapidAPI key, sent only when set
            api_host: RapidAPI host, sent only when set
            timeout: Read timeout in seconds
            connect_timeout: Connect timeout in seconds
            catalog_ttl_seconds: Freshness window of the language list
            client: Preconfigured HTTP client, mainly for tests
            catalog: Preconfigured catalog, mainly for tests
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._api_host = api_host
        self._timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self._client = client
        self.catalog = catalog or LanguageCatalog(self._fetch_languages, ttl_seconds=catalog_ttl_seconds)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["X-RapidAPI-Key"] = self._api_key
        if self._api_host:
            headers["X-RapidAPI-Host"] = self._api_host
        return headers

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self._base_url}{path}"
        try:
            return await self._get_client().request(method, url, headers=self._headers(), **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("Judge request timed out", path=path)
            raise RemoteServiceError(f"Judge service timed out: {url}", status_code=504) from e
        except httpx.HTTPError as e:
            logger.warning("Judge request failed", path=path, error=str(e))
            raise RemoteServiceError(f"Failed to reach judge service: {e}", status_code=502) from e

    async def _fetch_languages(self) -> List[LanguageCatalogEntry]:
        response = await self._request("GET", "/languages")
        if response.status_code != 200:
            raise RemoteServiceError(
                f"Failed to fetch Judge0 languages: {response.status_code}",
                status_code=502,
                details={"body": response.text},
            )
        body = _json_body(response)
        try:
            return [LanguageCatalogEntry.from_dict(entry) for entry in body]
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteServiceError(
                f"Malformed Judge0 language list: {e}",
                status_code=502,
                details={"body": response.text},
            ) from e

    async def submit(self, language_alias: str, source: str, stdin: Optional[str] = None) -> JudgeOutcome:
        """
        Implementation of IJudgePort.submit().
        """
        language_id = await self.catalog.resolve(language_alias)
        if language_id is None:
            raise UnsupportedLanguageAliasError(language_alias)

        submission = JudgeSubmission(
            language_id=language_id,
            source_base64=encode_text(source),
            stdin_base64=encode_text(stdin) if isinstance(stdin, str) else None,
        )

        logger.info("Submitting to judge", language=language_alias, language_id=language_id, source_length=len(source))
        response = await self._request(
            "POST",
            "/submissions",
            params={"base64_encoded": "true", "wait": "true"},
            json=submission.to_payload(),
        )

        if not response.is_success:
            logger.warning("Judge rejected submission", status_code=response.status_code)
            raise RemoteServiceError(response.text, status_code=response.status_code)

        body = _json_body(response)
        if not isinstance(body, dict):
            raise RemoteServiceError(response.text, status_code=502)
        outcome = JudgeOutcome(
            status=body.get("status"),
            stdout=decode_field(body.get("stdout")),
            stderr=decode_field(body.get("stderr")),
            compile_output=decode_field(body.get("compile_output")),
            time=body.get("time"),
            memory=body.get("memory"),
            language_id=language_id,
        )
        logger.info("Judge submission finished", language_id=language_id, status=outcome.status)
        return outcome

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
