"""
GitLab repository provider.

Projects are addressed by their URL-encoded full path. The tree endpoint is
paginated (X-Next-Page); content comes from the raw file endpoint.

Dependencies: httpx, repo_audit.boundary.providers.base
System role: GitLab REST adapter for repository indexing
"""

from urllib.parse import quote

import httpx

from repo_audit.boundary.providers.base import MALFORMED_BODY_ERRORS, RepositoryProvider, TreeEntry
from repo_audit.core.exceptions import PerFileFetchError

TREE_PAGE_SIZE = 100


class GitLabProvider(RepositoryProvider):
    """GitLab REST v4 adapter."""

    name = "gitlab"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        base_url = self.settings.gitlab_api_url.rstrip("/")
        self.project_url = f"{base_url}/projects/{quote(self.repository, safe='')}"

    async def resolve_default_branch(self) -> str:
        operation = "resolve default branch"
        response = await self._get_structural(self.project_url, operation)
        try:
            return response.json().get("default_branch") or "main"
        except MALFORMED_BODY_ERRORS as e:
            raise self._malformed_response(operation, e) from e

    async def list_tree(self, branch: str) -> list[TreeEntry]:
        entries: list[TreeEntry] = []
        page: int | None = 1
        while page:
            operation = f"list tree page {page}"
            response = await self._get_structural(
                f"{self.project_url}/repository/tree",
                operation,
                params={
                    "recursive": "true",
                    "per_page": TREE_PAGE_SIZE,
                    "page": page,
                    "ref": branch,
                },
            )
            try:
                items = response.json()
                if not isinstance(items, list):
                    raise TypeError(f"expected a list of tree items, got {type(items).__name__}")
                entries.extend(TreeEntry(path=item["path"], type=item["type"]) for item in items)
            except MALFORMED_BODY_ERRORS as e:
                raise self._malformed_response(operation, e) from e
            next_page = response.headers.get("X-Next-Page", "").strip()
            page = int(next_page) if next_page.isdigit() else None
        return entries

    async def fetch_file_content(self, path: str, branch: str) -> str:
        url = f"{self.project_url}/repository/files/{quote(path, safe='')}/raw"
        try:
            response = await self.client.get(
                url,
                params={"ref": branch},
                headers=self.headers,
                timeout=self.settings.request_timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise PerFileFetchError(
                f"Failed to fetch GitLab file: {type(e).__name__}: {e}",
                path=path,
            ) from e
        return response.content.decode("utf-8", errors="replace")
