"""
GitHub repository provider.

Tree strategy: repository -> default branch -> heads ref SHA -> one
recursive tree call. Content strategy: contents API returning base64, with
a raw-media refetch when GitHub omits the encoded payload (large blobs).

Dependencies: httpx, repo_audit.boundary.providers.base
System role: GitHub REST adapter for repository indexing
"""

import base64
import logging
from urllib.parse import quote

import httpx

from repo_audit.boundary.providers.base import MALFORMED_BODY_ERRORS, RepositoryProvider, TreeEntry
from repo_audit.core.exceptions import PerFileFetchError, ValidationError

logger = logging.getLogger(__name__)

GITHUB_JSON = "application/vnd.github+json"
GITHUB_RAW = "application/vnd.github.raw"


class GitHubProvider(RepositoryProvider):
    """GitHub REST v3 adapter."""

    name = "github"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        owner, _, repo = self.repository.partition("/")
        if not owner or not repo or "/" in repo:
            raise ValidationError(
                f"Invalid GitHub repository name: {self.repository!r}",
                field="repository",
            )
        base_url = self.settings.github_api_url.rstrip("/")
        self.repo_url = f"{base_url}/repos/{quote(owner)}/{quote(repo)}"

    @property
    def headers(self) -> dict[str, str]:
        return {**super().headers, "Accept": GITHUB_JSON}

    async def resolve_default_branch(self) -> str:
        operation = "resolve default branch"
        response = await self._get_structural(self.repo_url, operation)
        try:
            return response.json().get("default_branch") or "main"
        except MALFORMED_BODY_ERRORS as e:
            raise self._malformed_response(operation, e) from e

    async def list_tree(self, branch: str) -> list[TreeEntry]:
        operation = "resolve branch ref"
        ref = await self._get_structural(
            f"{self.repo_url}/git/ref/heads/{quote(branch, safe='/')}",
            operation,
        )
        try:
            commit_sha = ref.json()["object"]["sha"]
        except MALFORMED_BODY_ERRORS as e:
            raise self._malformed_response(operation, e) from e

        tree = await self._get_structural(
            f"{self.repo_url}/git/trees/{commit_sha}",
            "list tree",
            params={"recursive": "1"},
        )
        try:
            data = tree.json()
            entries = [
                TreeEntry(path=item["path"], type=item["type"], size=item.get("size"))
                for item in data.get("tree", [])
            ]
        except MALFORMED_BODY_ERRORS as e:
            raise self._malformed_response("list tree", e) from e
        if data.get("truncated"):
            logger.warning(
                f"{__name__}:list_tree - GitHub tree response was truncated, repository may be too large",
                extra={"repository": self.repository},
            )
        return entries

    async def fetch_file_content(self, path: str, branch: str) -> str:
        url = f"{self.repo_url}/contents/{quote(path, safe='/')}"
        try:
            response = await self.client.get(
                url,
                params={"ref": branch},
                headers=self.headers,
                timeout=self.settings.request_timeout,
            )
            response.raise_for_status()
            data = response.json()
            if isinstance(data, dict) and data.get("encoding") == "base64":
                return base64.b64decode(data["content"]).decode("utf-8", errors="replace")

            raw = await self.client.get(
                url,
                params={"ref": branch},
                headers={**self.headers, "Accept": GITHUB_RAW},
                timeout=self.settings.request_timeout,
            )
            raw.raise_for_status()
            return raw.content.decode("utf-8", errors="replace")
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise PerFileFetchError(
                f"Failed to fetch GitHub file: {type(e).__name__}: {e}",
                path=path,
            ) from e
