"""
Instrument discovery from MOHRE index pages.

Index pages list laws, decrees and resolutions as links. Every link whose
label looks like a legal instrument becomes an Instrument keyed by the slug
of its label.
"""
import logging
import re
from typing import Callable, Dict, Iterable, List, Optional
from urllib.parse import urljoin

from uae_laws.consolidation.identity import clean_title, slug_from_title
from uae_laws.consolidation.models import Instrument
from uae_laws.core.exceptions import FatalPipelineError, TransportError
from uae_laws.parser.link_extractor import Link, extract_links

logger = logging.getLogger(__name__)


class IndexCrawler:
    """
    Discovers instruments from index pages.

    Fetching and link extraction are injected so they can be swapped out;
    the crawler only sees page text and (href, label) pairs.
    """

    INSTRUMENT_LABEL_PATTERN = r"decree|law|resolution|regulation|domestic|emiratisation"

    def __init__(
        self,
        fetch: Callable[[str], str],
        link_extractor: Optional[Callable[[str], List[Link]]] = None,
    ):
        """
        Initialize the crawler.

        Args:
            fetch: Callable returning page text for a URL, raising TransportError
            link_extractor: Callable returning anchors for page markup
        """
        self.fetch = fetch
        self.link_extractor = link_extractor or extract_links
        self.label_regex = re.compile(self.INSTRUMENT_LABEL_PATTERN, re.IGNORECASE)

    def parse_index(self, url: str, html: str) -> List[Instrument]:
        """
        Turn one index page into instruments, deduplicated by id.

        Args:
            url: Page URL, used to resolve relative hrefs
            html: Page markup

        Returns:
            Instruments in first-seen order; a repeated id keeps the last link
        """
        by_id: Dict[str, Instrument] = {}
        for link in self.link_extractor(html):
            if not self.label_regex.search(link.label):
                continue
            title = clean_title(link.label)
            if not title:
                continue
            instrument_id = slug_from_title(title)
            by_id[instrument_id] = Instrument(
                id=instrument_id,
                title=title,
                source_url=urljoin(url, link.href),
            )
        return list(by_id.values())

    def discover(self, index_urls: Iterable[str]) -> List[Instrument]:
        """
        Discover instruments across all index pages.

        Args:
            index_urls: Index page URLs, in order

        Returns:
            Instruments deduplicated by id across pages

        Raises:
            FatalPipelineError: If any index page cannot be fetched
        """
        by_id: Dict[str, Instrument] = {}
        for url in index_urls:
            logger.info(f"Discovering instruments from {url}")
            try:
                html = self.fetch(url)
            except TransportError as e:
                raise FatalPipelineError(
                    f"Cannot fetch index page {url}",
                    stage="discovery",
                    original_error=e,
                ) from e

            found = self.parse_index(url, html)
            logger.info(f"  Found {len(found)} instrument(s)")
            for instrument in found:
                by_id[instrument.id] = instrument

        logger.info(f"Discovered {len(by_id)} instrument(s) in total")
        return list(by_id.values())
