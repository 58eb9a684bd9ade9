"""
Transport collaborator: fetches one feed document and hands back its bytes
"""

import logging
import time
from typing import Iterable, Optional

import requests

from seismic_feed.config.settings import FEED_CONFIG
from seismic_feed.processing.shared.error_handling import FeedTransportError


class FeedDownloader:
    """Downloads feed documents over HTTP and validates the response"""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: int = FEED_CONFIG['timeout'],
        max_retries: int = FEED_CONFIG['max_retries'],
        retry_delay: int = FEED_CONFIG['retry_delay'],
        accepted_content_types: Iterable[str] = FEED_CONFIG['accepted_content_types'],
        logger: Optional[logging.Logger] = None,
        session: Optional[requests.Session] = None
    ):
        self.url = url or FEED_CONFIG['url']
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.accepted_content_types = tuple(accepted_content_types)
        self.logger = logger or logging.getLogger(__name__)
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': 'seismic-feed/0.1'})

    def fetch(self, url: Optional[str] = None) -> bytes:
        """
        Download a complete feed document.

        Connection problems are retried; HTTP error statuses and non-XML
        responses are not.

        Raises:
            FeedTransportError: if no valid XML document could be obtained
        """
        url = url or self.url
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                self.logger.info(f"Fetching feed {url} (attempt {attempt}/{self.max_retries})")
                response = self.session.get(url, timeout=self.timeout)
            except (requests.ConnectionError, requests.Timeout) as e:
                last_error = e
                self.logger.warning(f"Attempt {attempt} failed for {url}: {str(e)}")
                if attempt < self.max_retries:
                    time.sleep(self.retry_delay)
                continue
            except requests.RequestException as e:
                raise FeedTransportError(f"Request for {url} failed: {e}") from e

            return self._validate(response, url)

        raise FeedTransportError(
            f"Giving up on {url} after {self.max_retries} attempts: {last_error}"
        ) from last_error

    def _validate(self, response: requests.Response, url: str) -> bytes:
        if response.status_code // 100 != 2:
            raise FeedTransportError(
                f"HTTP error {response.status_code} fetching {url}",
                status_code=response.status_code
            )

        content_type = response.headers.get('Content-Type', '').split(';')[0].strip().lower()
        if content_type not in self.accepted_content_types:
            raise FeedTransportError(
                f"Unexpected content type {content_type!r} from {url}",
                status_code=response.status_code
            )

        self.logger.info(f"Fetched {len(response.content)} bytes from {url}")
        return response.content

    def close(self) -> None:
        self.session.close()
