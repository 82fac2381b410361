"""
GitHub contents API client.

Pushes a single text file to a branch with the caller's token: read the
branch head, look up the existing file sha, then create or overwrite the
file. The token is forwarded as-is and never stored or logged.
"""

import base64
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from playground.domain.errors import GitHubAPIError, RemoteServiceError
from playground.domain.ports import IGitHubPort
from playground.infrastructure.logging import get_logger

logger = get_logger(__name__)


class GitHubClient(IGitHubPort):
    """Three-call file push over the GitHub REST API."""

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @staticmethod
    def _headers(token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "Content-Type": "application/json",
        }

    async def _request(self, token: str, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._get_client().request(method, url, headers=self._headers(token), **kwargs)
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Failed to reach GitHub: {e}", status_code=502) from e

        if not response.is_success:
            raise GitHubAPIError(response.status_code, response.text)
        return response.json()

    async def push_file(
        self,
        token: str,
        owner: str,
        repo: str,
        path: str,
        message: str,
        content: str,
        branch: str = "main",
    ) -> Dict[str, Any]:
        """
        Implementation of IGitHubPort.push_file().
        """
        base = f"{self._api_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
        encoded_branch = quote(branch, safe="/")
        encoded_path = quote(path.lstrip("/"), safe="/")

        ref = await self._request(token, "GET", f"{base}/git/refs/heads/{encoded_branch}")
        base_commit = ref["object"]["sha"]

        # Any failure here means the file does not exist yet
        sha: Optional[str] = None
        try:
            existing = await self._request(
                token, "GET", f"{base}/contents/{encoded_path}", params={"ref": branch}
            )
            sha = existing.get("sha")
        except (GitHubAPIError, RemoteServiceError):
            sha = None

        body: Dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if sha:
            body["sha"] = sha

        written = await self._request(token, "PUT", f"{base}/contents/{encoded_path}", json=body)
        logger.info(
            "File pushed to GitHub",
            owner=owner,
            repo=repo,
            branch=branch,
            path=path,
            overwrite=sha is not None,
        )

        written_content = written.get("content") or {}
        return {
            "content": {"path": written_content.get("path"), "sha": written_content.get("sha")},
            "commit": (written.get("commit") or {}).get("sha"),
            "base_commit": base_commit,
        }

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
