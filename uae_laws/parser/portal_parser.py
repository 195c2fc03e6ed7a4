"""
Portal enrichment from uaelegislation.gov.ae.

The legislation portal's details page for an instrument carries its status
and effective date. This module reads:
1. Status cues (repealed / in force / amended)
2. The effective date, normalized to ISO form
3. A short SHA-1 fingerprint of the page, for change detection between runs

Enrichment failure for one instrument never stops the sync: the instrument
keeps its previous status (or "unknown") and the run continues.
"""
import hashlib
import logging
import re
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from uae_laws.core.config import META_HASH_LENGTH
from uae_laws.core.exceptions import EnrichmentError, TransportError
from uae_laws.consolidation.models import AMENDED, IN_FORCE, REPEALED, UNKNOWN, Instrument

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
DAY_MONTH_YEAR_PATTERN = re.compile(r"\d{1,2}\s+\w+\s+\d{4}")

REPEAL_CUE = re.compile(r"repeal|repealed|replaced", re.IGNORECASE)
IN_FORCE_CUE = re.compile(r"in\s*force|active", re.IGNORECASE)
AMENDMENT_CUE = re.compile(r"amend|amended", re.IGNORECASE)

# Accepted spellings for "day month year" dates
DAY_MONTH_YEAR_FORMATS = ("%d %B %Y", "%d %b %Y")


def text_between(html: str, start: str, end: str) -> str:
    """
    Get the text between the first ``start`` marker and the next ``end``.

    Returns "" when either marker is missing.
    """
    i = html.find(start)
    if i == -1:
        return ""
    j = html.find(end, i + len(start))
    if j == -1:
        return ""
    return html[i + len(start):j]


def normalize_date(raw: Optional[str]) -> Optional[str]:
    """
    Normalize a date string to ISO ``YYYY-MM-DD``.

    Accepts ISO dates and "day month year" dates such as "1 February 2022"
    or "1 Feb 2022". Invalid or unparseable input gives None.
    """
    if not raw:
        return None

    if ISO_DATE_PATTERN.fullmatch(raw):
        try:
            return datetime.strptime(raw, "%Y-%m-%d").date().isoformat()
        except ValueError:
            return None

    cleaned = " ".join(raw.split())
    for fmt in DAY_MONTH_YEAR_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date().isoformat()
        except ValueError:
            continue
    return None


def extract_effective_date(html: str) -> Optional[str]:
    """Get the ISO effective date from the page's "Effective Date" region."""
    block = text_between(html, "Effective Date", "</")
    match = ISO_DATE_PATTERN.search(block) or DAY_MONTH_YEAR_PATTERN.search(block)
    return normalize_date(match.group(0)) if match else None


def extract_status(html: str) -> str:
    """Get the lifecycle status the page signals."""
    if REPEAL_CUE.search(html):
        return REPEALED
    if IN_FORCE_CUE.search(text_between(html, "Status", "</")):
        return IN_FORCE
    if AMENDMENT_CUE.search(html):
        return AMENDED
    return UNKNOWN


def page_fingerprint(html: str, length: int = META_HASH_LENGTH) -> str:
    """Short SHA-1 hex digest of the page text."""
    return hashlib.sha1(html.encode("utf-8")).hexdigest()[:length]


class PortalEnricher:
    """
    Enriches instruments from their legislation portal page.

    Args:
        fetch: Callable returning page text for a URL, raising TransportError
    """

    def __init__(self, fetch: Callable[[str], str]):
        self.fetch = fetch

    def enrich(self, instrument: Instrument, url: Optional[str]) -> Instrument:
        """
        Enrich one instrument from its portal page.

        Args:
            instrument: Instrument to enrich
            url: Portal details page; empty or None means no enrichment

        Returns:
            A new Instrument with uae_portal, status, effective_from and
            meta_hash set, or the same instrument when url is empty
        """
        if not url:
            return instrument

        try:
            return self._enrich_from_page(instrument, url)
        except EnrichmentError as e:
            logger.warning(f"Enrichment failed, keeping prior status: {e}")
            return replace(
                instrument,
                uae_portal=url,
                status=instrument.status or UNKNOWN,
                as_amended_by=list(instrument.as_amended_by),
            )

    def _enrich_from_page(self, instrument: Instrument, url: str) -> Instrument:
        try:
            html = self.fetch(url)
        except TransportError as e:
            raise EnrichmentError(
                "Cannot fetch portal page",
                instrument_id=instrument.id,
                url=url,
                original_error=e,
            ) from e

        try:
            status = extract_status(html)
            effective_from = extract_effective_date(html)
            meta_hash = page_fingerprint(html)
        except (TypeError, ValueError, AttributeError) as e:
            raise EnrichmentError(
                "Cannot read portal page",
                instrument_id=instrument.id,
                url=url,
                original_error=e,
            ) from e

        logger.info(f"Enriched {instrument.id}: status={status}, effective_from={effective_from}")
        return replace(
            instrument,
            uae_portal=url,
            status=status,
            effective_from=effective_from,
            meta_hash=meta_hash,
            as_amended_by=list(instrument.as_amended_by),
        )
