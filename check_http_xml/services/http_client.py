"""HTTP(S) fetcher for the checked document."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import httpx

from ..__version__ import USER_AGENT
from ..utils.errors import FetchError

METADATA_CONTENT_TYPE = "application/xml"


@dataclass(frozen=True)
class FetchResponse:
    """Successful HTTP response."""

    status_code: int
    reason: str
    headers: Dict[str, str] = field(default_factory=dict)  # lower-case names
    content: bytes = b""

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")


class DocumentFetcher:
    """Fetches the document with a single GET request, no retries."""

    def __init__(
        self,
        url: str,
        timeout: float,
        verify: bool = True,
        metadata: Optional[str] = None,
        accept: str = "application/xml",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize fetcher.

        Args:
            url: Document URL
            timeout: Request deadline in seconds
            verify: Verify TLS certificates
            metadata: Optional request body, sent as XML
            accept: Value of the Accept header
            logger: Optional parent logger
        """
        self.url = url
        self.timeout = timeout
        self.verify = verify
        self.metadata = metadata
        self.accept = accept
        logger = logger or logging.getLogger(__name__)
        self.logger = logger.getChild(self.__class__.__name__)

    async def fetch(self) -> FetchResponse:
        """
        Fetch the document.

        Returns:
            FetchResponse: Status, headers and body of a 2xx response

        Raises:
            FetchError: On transport, TLS or timeout failures and non-2xx responses
        """
        headers = {"User-Agent": USER_AGENT, "Accept": self.accept}
        content = None
        if self.metadata:
            headers["Content-Type"] = METADATA_CONTENT_TYPE
            content = self.metadata.encode("utf-8")

        self.logger.info(f"Fetching {self.url}", extra={"timeout": self.timeout, "verify": self.verify})

        try:
            async with httpx.AsyncClient(
                verify=self.verify,
                timeout=self.timeout,
                follow_redirects=True
            ) as client:
                response = await client.request("GET", self.url, headers=headers, content=content)

        except httpx.TimeoutException:
            raise FetchError(f"Connection failed: timeout after {self.timeout:g}s")

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Connection failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise FetchError(
                f"Connection failed: {response.status_code} {response.reason_phrase}".rstrip()
            )

        self.logger.info(
            f"HTTP {response.status_code} from {self.url}",
            extra={"bytes": len(response.content)}
        )

        return FetchResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            headers={k.lower(): v for k, v in response.headers.items()},
            content=response.content
        )
