"""
Instrument identity resolution.

Titles are normalized into slugs that serve as stable instrument identifiers.
Two titles that normalize to the same slug are the same instrument; that
collision risk is accepted. Seeds from configuration are merged into the
discovered set by identifier.
"""
import logging
import re
from typing import Dict, Iterable

from uae_laws.core.config import DEFAULT_TOPIC, SLUG_MAX_LENGTH
from uae_laws.consolidation.models import Instrument
from uae_laws.sources import SeedInstrument

logger = logging.getLogger(__name__)

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9/ ]+")
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-+")
_ZERO_WIDTH = re.compile("[\u200b-\u200d\ufeff]")


def slug_from_title(title: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """
    Derive a deterministic identifier from a title.

    Examples:
        >>> slug_from_title("Federal Decree-Law No. 33 of 2021")
        'federal-decreelaw-no-33-of-2021'
    """
    slug = _DISALLOWED_CHARS.sub("", title.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug[:max_length]


def clean_title(label: str) -> str:
    """Collapse whitespace and drop zero-width characters from a link label."""
    title = _WHITESPACE.sub(" ", label)
    return _ZERO_WIDTH.sub("", title).strip()


def merge_seeds(
    discovered: Iterable[Instrument],
    seeds: Iterable[SeedInstrument],
) -> Dict[str, Instrument]:
    """
    Merge discovered instruments with configuration seeds by identifier.

    The seed's topic takes precedence; a discovered record keeps its own
    title and source URL, and the seed's title hint and MOHRE reference fill
    in whatever is missing.

    Args:
        discovered: Instruments found on index pages
        seeds: Configured seed descriptors

    Returns:
        Insertion-ordered map of identifier to instrument. Seeds that were
        not discovered are appended after the discovered instruments.
    """
    by_id: Dict[str, Instrument] = {}
    for instrument in discovered:
        by_id[instrument.id] = instrument

    for seed in seeds:
        base = by_id.get(seed.id)
        if base is None:
            logger.debug(f"Seed {seed.id} not discovered, adding from configuration")
            base = Instrument(id=seed.id)
            by_id[seed.id] = base

        base.title = base.title or seed.title_hint
        base.source_url = base.source_url or seed.mohre_ref or None
        base.topic = seed.topic or base.topic or DEFAULT_TOPIC

    return by_id
