# pyright: reportAny=false
"""Per-workspace disk cache for embedded and remote template bodies.

Bodies live under `.specman/cache/templates/`:

- `embedded-<key>.md` for built-in defaults
- `url-<sha256>.md` for remote bodies, with a `url-<sha256>.json` sidecar
  recording the source URL and its Last-Modified marker

All writes are whole-file atomic replacements. Concurrent invocations are not
coordinated; the last writer wins.
"""

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Final

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError
from structlog.typing import FilteringBoundLogger
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from specman.config import TemplatesConfig
from specman.exceptions import (
    SpecmanIOError,
    TemplateCacheError,
    TemplateFetchError,
    TemplateFetchRejectedError,
)
from specman.utils import create_null_logger, read_json, write_json_atomic, write_text_atomic

class CacheMetadata(BaseModel):
    """Sidecar metadata stored next to a cached remote body."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    locator: str
    last_modified: str | None = None


@dataclass(frozen=True, slots=True)
class CacheHit:
    """A cached body on disk.

    Attributes:
        path: Absolute path to the cached body.
        last_modified: Last-Modified marker recorded for the body, if any.
    """

    path: Path
    last_modified: str | None = None


def url_cache_key(url: str) -> str:
    """Return the SHA-256 hex digest used to name a URL's cache files."""
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


class TemplateCache:
    """Materializes template bodies under the workspace cache directory.

    Args:
        root: Cache directory (`.specman/cache/templates`).
        config: Fetch settings. Defaults are used if None.
        client: HTTP client to use. If None, a client is created per fetch
            from the configuration. An injected client is never closed here.
        logger: Logger for fetch diagnostics.
    """

    __slots__: Final = ("_client", "_config", "_logger", "_root")

    _root: Path
    _config: TemplatesConfig
    _client: httpx.Client | None
    _logger: FilteringBoundLogger

    def __init__(
        self,
        root: Path,
        *,
        config: TemplatesConfig | None = None,
        client: httpx.Client | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._root = root
        self._config = config or TemplatesConfig()
        self._client = client
        self._logger = logger or create_null_logger()

    @property
    def root(self) -> Path:
        return self._root

    def ensure_root(self) -> None:
        """Create the cache directory if needed.

        Raises:
            SpecmanIOError: If the directory cannot be created.
        """
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Failed to create template cache {self._root}: {e}"
            raise SpecmanIOError(msg, path=self._root, operation="write", cause=e) from e

    def embedded_path(self, key: str) -> Path:
        return self._root / f"embedded-{key}.md"

    def url_paths(self, url: str) -> tuple[Path, Path]:
        """Return the (body, sidecar) paths for a URL."""
        key = url_cache_key(url)
        return self._root / f"url-{key}.md", self._root / f"url-{key}.json"

    def write_embedded(self, key: str, body: str) -> Path:
        """Write a built-in body to `embedded-<key>.md`, overwriting any copy.

        Returns:
            Path to the cache file.

        Raises:
            SpecmanIOError: If the cache cannot be written.
        """
        self.ensure_root()
        path = self.embedded_path(key)
        write_text_atomic(path, body)
        return path

    def read_metadata(self, path: Path) -> CacheMetadata | None:
        """Read a sidecar file.

        Returns:
            The metadata, or None if the sidecar does not exist.

        Raises:
            TemplateCacheError: If the sidecar is unreadable or invalid.
        """
        if not path.is_file():
            return None
        try:
            return CacheMetadata.model_validate(read_json(path))
        except (SpecmanIOError, ValueError, ValidationError) as e:
            msg = f"Invalid template cache metadata {path}: {e}"
            raise TemplateCacheError(msg, path=path) from e

    def fetch(self, url: str) -> CacheHit:
        """Download a remote body into the cache.

        Any answer other than a success status is a rejection and is never
        masked by a cached copy. When no answer arrives at all (connection
        failure, timeout, redirect loop, undecodable body), a previously cached
        body is returned with its recorded Last-Modified marker.

        Args:
            url: An `http://` or `https://` URL.

        Returns:
            The cached body and its Last-Modified marker.

        Raises:
            TemplateFetchRejectedError: If the server answers with a non-2xx status.
            TemplateFetchError: If the server is unreachable and nothing is cached.
            TemplateCacheError: If a cached fallback's sidecar is invalid.
            SpecmanIOError: If the cache cannot be written.
        """
        self.ensure_root()
        body_path, meta_path = self.url_paths(url)

        try:
            response = self._download(url)
        except httpx.RequestError as e:
            if body_path.is_file():
                metadata = self.read_metadata(meta_path)
                self._logger.warning(
                    "template_fetch_using_cache",
                    url=url,
                    path=str(body_path),
                    error=str(e),
                )
                return CacheHit(
                    path=body_path,
                    last_modified=metadata.last_modified if metadata else None,
                )
            msg = f"Failed to download template {url}: {e}"
            raise TemplateFetchError(msg, url=url, cause=e) from e

        if not response.is_success:
            self._logger.warning(
                "template_fetch_rejected", url=url, status=response.status_code
            )
            msg = f"Failed to download template {url}: status {response.status_code}"
            raise TemplateFetchRejectedError(
                msg, url=url, status_code=response.status_code
            )

        last_modified = response.headers.get("Last-Modified")
        write_text_atomic(body_path, response.text)
        metadata = CacheMetadata(locator=url, last_modified=last_modified)
        write_json_atomic(meta_path, metadata.model_dump())
        self._logger.debug(
            "template_fetched", url=url, path=str(body_path), last_modified=last_modified
        )
        return CacheHit(path=body_path, last_modified=last_modified)

    def _download(self, url: str) -> httpx.Response:
        retrying = Retrying(
            retry=retry_if_exception_type(httpx.TransportError),
            stop=stop_after_attempt(self._config.fetch_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                if self._client is not None:
                    return self._client.get(url)
                with httpx.Client(
                    timeout=self._config.fetch_timeout,
                    follow_redirects=self._config.follow_redirects,
                    headers={"User-Agent": self._config.user_agent},
                ) as client:
                    return client.get(url)

        # Retrying with reraise=True either returns above or raises
        msg = f"Failed to download template {url}"
        raise TemplateFetchError(msg, url=url)
