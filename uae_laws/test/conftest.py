"""
pytest configuration and shared fixtures for registry tests.
No test touches the network: pages are served from in-memory dicts.
"""

import pytest

from uae_laws.core.exceptions import TransportError
from uae_laws.sources import SeedInstrument, Sources

LAWS_INDEX_URL = "https://www.mohre.gov.ae/en/laws-and-regulations/laws.aspx"
PORTAL_33_URL = "https://uaelegislation.gov.ae/En/Legislation/Details/1541"
PORTAL_1_URL = "https://uaelegislation.gov.ae/En/Legislation/Details/1547"

LAWS_INDEX_HTML = """
<html><body>
<ul>
  <li><a href="/en/docs/fdl-33-2021.pdf"><span>Federal Decree-Law No. 33 of 2021</span></a></li>
  <li><a href="/en/docs/cab-1-2022.pdf">Cabinet Resolution No. 1 of 2022 Amending
      Federal Decree-Law No. 33 of 2021</a></li>
  <li><a href="https://example.org/about">About us</a></li>
  <li><a href="/en/docs/dw.pdf">Domestic Workers\u200b Law</a></li>
</ul>
</body></html>
"""

PORTAL_33_HTML = """
<div>Status: In Force</div>
<div>Effective Date: 2022-02-02</div>
"""

PORTAL_1_HTML = """
<div>Status: Active</div>
<div>Effective Date 1 February 2022</div>
"""


class FakeFetcher:
    """Serves pages from a dict; unknown URLs raise TransportError(404)."""

    def __init__(self, pages):
        self.pages = dict(pages)
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        if url not in self.pages:
            raise TransportError(f"GET {url} -> 404", status_code=404, url=url)
        return self.pages[url]


@pytest.fixture
def fake_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher


@pytest.fixture
def site_pages():
    """Index page plus two portal pages."""
    return {
        LAWS_INDEX_URL: LAWS_INDEX_HTML,
        PORTAL_33_URL: PORTAL_33_HTML,
        PORTAL_1_URL: PORTAL_1_HTML,
    }


@pytest.fixture
def sources():
    """One index page and three seeds, one of them without a portal URL."""
    return Sources(
        index_pages=[LAWS_INDEX_URL],
        instruments=[
            SeedInstrument(
                id="federal-decreelaw-no-33-of-2021",
                title_hint="Federal Decree-Law No. 33 of 2021",
                topic="labour",
                mohre_ref=LAWS_INDEX_URL,
                uae_portal=PORTAL_33_URL,
            ),
            SeedInstrument(
                id="cab-res-1-2022",
                title_hint="Cabinet Resolution No. 1 of 2022",
                topic="labour",
                mohre_ref=LAWS_INDEX_URL,
                uae_portal=PORTAL_1_URL,
            ),
            SeedInstrument(
                id="fdl-9-2022",
                title_hint="Federal Decree-Law No. 9 of 2022",
                topic="domestic-workers",
                mohre_ref=LAWS_INDEX_URL,
                uae_portal="",
            ),
        ],
    )
