"""
Anchor extraction from index page markup.
"""
from dataclasses import dataclass
from typing import List

from bs4 import BeautifulSoup


@dataclass(frozen=True)
class Link:
    """An anchor's href and its visible label."""
    href: str
    label: str


def extract_links(html: str) -> List[Link]:
    """
    Extract every anchor with an href, in document order.

    Nested markup inside the anchor is dropped from the label.

    Args:
        html: Page markup

    Returns:
        List of Link objects
    """
    soup = BeautifulSoup(html or "", "html.parser")
    return [
        Link(href=anchor["href"], label=anchor.get_text().strip())
        for anchor in soup.find_all("a", href=True)
    ]
