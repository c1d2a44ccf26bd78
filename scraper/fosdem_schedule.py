"""Schedule fetcher for the FOSDEM XML export."""
import logging
import time

import requests

from processor.constants import SCHEDULE_LINK
from processor.errors import RetrievalError
from processor.schedule_builder import validate_year

logger = logging.getLogger(__name__)


class ScheduleFetcher:
    """Downloads the schedule XML of a FOSDEM edition."""

    MAX_RETRIES = 3
    BASE_DELAY = 1  # seconds

    def __init__(self, timeout: int = 30, url_template: str = SCHEDULE_LINK):
        """
        Initialize the schedule fetcher.

        Args:
            timeout: HTTP request timeout in seconds (default: 30)
            url_template: Schedule URL with a ``{year}`` placeholder
        """
        self.timeout = timeout
        self.url_template = url_template

    def fetch_schedule(self, year: str) -> str:
        """
        Fetch the schedule XML with retry logic.

        Args:
            year: Edition of the conference (YYYY)

        Returns:
            XML content as string

        Raises:
            InputShapeError: If the year is malformed
            RetrievalError: If all retry attempts fail
        """
        validate_year(year)
        url = self.url_template.format(year=year)

        for attempt in range(self.MAX_RETRIES):
            try:
                logger.info(
                    f"Fetching schedule from {url} "
                    f"(attempt {attempt + 1}/{self.MAX_RETRIES})"
                )
                response = requests.get(url, timeout=self.timeout)
                response.raise_for_status()
                logger.info(f"Fetched {len(response.text)} characters of schedule XML")
                return response.text

            except requests.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    # Calculate exponential backoff delay
                    delay = self.BASE_DELAY * (2 ** attempt)
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}. "
                        f"Retrying in {delay} seconds..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"All {self.MAX_RETRIES} retry attempts failed. Last error: {e}"
                    )
                    raise RetrievalError(f"Failed to fetch schedule: {e}") from e
