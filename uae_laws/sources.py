"""
Instrument source registry.

This module lists the MOHRE index pages that instruments are discovered from
and the seed instruments pinned by configuration. Each seed fixes an
instrument's identifier, topic and its canonical page on the UAE legislation
portal (an empty portal URL means the page is not known yet).
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from uae_laws.core.exceptions import ConfigurationError


@dataclass
class SeedInstrument:
    """Configuration-supplied instrument descriptor."""

    id: str
    title_hint: str
    topic: str = ""
    mohre_ref: str = ""  # MOHRE index page listing the instrument
    uae_portal: str = ""  # uaelegislation.gov.ae details page, "" if unknown

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "SeedInstrument":
        return cls(
            id=data["id"],
            title_hint=data.get("titleHint", ""),
            topic=data.get("topic", ""),
            mohre_ref=data.get("mohreRef", ""),
            uae_portal=data.get("uaePortal", ""),
        )


@dataclass
class Sources:
    """Ordered index pages and seed instruments for one sync run."""

    index_pages: List[str] = field(default_factory=list)
    instruments: List[SeedInstrument] = field(default_factory=list)

    def get_seed(self, instrument_id: str) -> Optional[SeedInstrument]:
        """Get a seed by identifier."""
        for seed in self.instruments:
            if seed.id == instrument_id:
                return seed
        return None

    def list_seed_ids(self) -> List[str]:
        """Get seed identifiers in configuration order."""
        return [seed.id for seed in self.instruments]


MOHRE_LAWS_URL = "https://www.mohre.gov.ae/en/laws-and-regulations/laws.aspx"

SOURCES = Sources(
    index_pages=[
        MOHRE_LAWS_URL,
        "https://www.mohre.gov.ae/en/laws-and-regulations/resolutions-and-circulars.aspx",
    ],
    instruments=[
        SeedInstrument(
            id="fdl-33-2021",
            title_hint="Federal Decree-Law No. 33 of 2021",
            topic="labour",
            mohre_ref=MOHRE_LAWS_URL,
            uae_portal="https://uaelegislation.gov.ae/En/Legislation/Details/1541",
        ),
        SeedInstrument(
            id="cab-res-1-2022",
            title_hint="Cabinet Resolution No. 1 of 2022",
            topic="labour",
            mohre_ref=MOHRE_LAWS_URL,
            uae_portal="https://uaelegislation.gov.ae/En/Legislation/Details/1547",
        ),
        SeedInstrument(
            id="fdl-20-2023",
            title_hint="Federal Decree-Law No. 20 of 2023",
            topic="labour",
            mohre_ref=MOHRE_LAWS_URL,
            uae_portal="",
        ),
        SeedInstrument(
            id="fdl-9-2022",
            title_hint="Federal Decree-Law No. 9 of 2022",
            topic="domestic-workers",
            mohre_ref=MOHRE_LAWS_URL,
            uae_portal="https://uaelegislation.gov.ae/En/Legislation/Details/1593",
        ),
    ],
)


def load_sources(path: Union[str, Path]) -> Sources:
    """
    Load index pages and seeds from a JSON file.

    The file uses the same keys as the built-in registry:
    ``{"indexPages": [...], "instruments": [{"id", "titleHint", "topic",
    "mohreRef", "uaePortal"}, ...]}``.

    Args:
        path: Path to the JSON sources file

    Returns:
        Sources read from the file

    Raises:
        ConfigurationError: If the file cannot be read or is malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            f"Cannot read sources file: {e}", config_file=str(path)
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError("Sources file must hold a JSON object", config_file=str(path))

    index_pages = data.get("indexPages", [])
    if not isinstance(index_pages, list) or not all(isinstance(u, str) for u in index_pages):
        raise ConfigurationError(
            "indexPages must be a list of URLs",
            config_key="indexPages",
            config_file=str(path),
        )

    instruments = data.get("instruments", [])
    if not isinstance(instruments, list):
        raise ConfigurationError(
            "instruments must be a list of seed descriptors",
            config_key="instruments",
            config_file=str(path),
        )

    seeds = []
    for raw in instruments:
        if not isinstance(raw, dict) or not raw.get("id"):
            raise ConfigurationError(
                "Every instrument needs an id",
                config_key="instruments",
                config_file=str(path),
            )
        seeds.append(SeedInstrument.from_dict(raw))

    return Sources(index_pages=index_pages, instruments=seeds)


def get_sources(path: Optional[Union[str, Path]] = None) -> Sources:
    """Get the sources from ``path`` if given, otherwise the built-in registry."""
    if path:
        return load_sources(path)
    return SOURCES
