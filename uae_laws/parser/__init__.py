"""
Page readers: anchor extraction for index pages and portal enrichment.
"""

from .link_extractor import Link, extract_links
from .portal_parser import PortalEnricher

__all__ = [
    "Link",
    "extract_links",
    "PortalEnricher",
]
