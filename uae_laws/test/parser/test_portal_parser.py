"""
Tests for portal enrichment (uae_laws/parser/portal_parser.py)

Tests cover:
- Marker-delimited text regions
- Date normalization (ISO, day-month-year, invalid input)
- Status cue precedence
- Enrichment success, no-op and failure paths
"""

import hashlib
from unittest.mock import MagicMock

import pytest

from uae_laws.consolidation.models import Instrument
from uae_laws.core.exceptions import TransportError
from uae_laws.parser.portal_parser import (
    PortalEnricher,
    extract_effective_date,
    extract_status,
    normalize_date,
    page_fingerprint,
    text_between,
)

PORTAL_URL = "https://uaelegislation.gov.ae/En/Legislation/Details/1541"


class TestTextBetween:
    """Tests for text_between."""

    def test_region_found(self):
        assert text_between("<p>Status: In Force</p>", "Status", "</") == ": In Force"

    def test_missing_start(self):
        assert text_between("<p>nothing</p>", "Status", "</") == ""

    def test_missing_end(self):
        assert text_between("Status: In Force", "Status", "</") == ""


class TestNormalizeDate:
    """Tests for normalize_date."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("2022-02-02", "2022-02-02"),
            ("2 February 2022", "2022-02-02"),
            ("02 Feb 2022", "2022-02-02"),
            ("1  January   2023", "2023-01-01"),
        ],
    )
    def test_valid_dates(self, raw, expected):
        """Test supported formats normalize to ISO."""
        assert normalize_date(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "2022-13-45", "31 February 2022", "5 Brumaire 2022"])
    def test_invalid_dates_are_none(self, raw):
        """Test invalid or unparseable dates give None without raising."""
        assert normalize_date(raw) is None


class TestExtractEffectiveDate:
    """Tests for extract_effective_date."""

    def test_iso_date_preferred(self):
        """Test an ISO date in the region wins over a day-month-year date."""
        html = "<td>Effective Date 1 March 2022 (2022-02-02)</td>"
        assert extract_effective_date(html) == "2022-02-02"

    def test_day_month_year(self):
        """Test the day-month-year fallback."""
        assert extract_effective_date("<td>Effective Date: 2 February 2022</td>") == "2022-02-02"

    def test_date_outside_region_ignored(self):
        """Test dates outside the Effective Date region are not used."""
        html = "<p>Issued 2021-09-20</p><td>Effective Date: to be announced</td>"
        assert extract_effective_date(html) is None

    def test_no_region(self):
        assert extract_effective_date("<p>2022-02-02</p>") is None


class TestExtractStatus:
    """Tests for extract_status precedence."""

    def test_repeal_cue_anywhere_wins(self):
        """Test a repeal cue anywhere beats an in-force status region."""
        html = "<p>Status: In Force</p><p>This law was replaced by Decree-Law 33</p>"
        assert extract_status(html) == "repealed"

    @pytest.mark.parametrize("region", ["In Force", "in force", "Active", "InForce"])
    def test_in_force_region(self, region):
        assert extract_status(f"<p>Status: {region}</p>") == "in_force"

    def test_in_force_cue_outside_region_ignored(self):
        """Test in-force wording outside the Status region does not count."""
        assert extract_status("<p>Status</p><p>remains in force</p>") == "unknown"

    def test_amendment_cue(self):
        assert extract_status("<p>Status: Published</p><p>Amendments: 2</p>") == "amended"

    def test_unknown(self):
        assert extract_status("<p>Nothing useful</p>") == "unknown"


class TestPageFingerprint:
    """Tests for page_fingerprint."""

    def test_twelve_hex_chars_of_sha1(self):
        html = "<html>page</html>"
        assert page_fingerprint(html) == hashlib.sha1(html.encode("utf-8")).hexdigest()[:12]

    def test_fingerprint_changes_with_page(self):
        assert page_fingerprint("a") != page_fingerprint("b")


class TestPortalEnricher:
    """Tests for PortalEnricher.enrich."""

    def test_empty_url_is_noop(self):
        """Test an empty portal URL returns the instrument untouched without fetching."""
        fetch = MagicMock()
        instrument = Instrument(id="fdl-20-2023", title="Federal Decree-Law No. 20 of 2023", topic="labour")

        result = PortalEnricher(fetch).enrich(instrument, "")

        assert result is instrument
        assert result.uae_portal is None
        assert result.status is None
        fetch.assert_not_called()

    def test_enrich_success(self):
        """Test status, date, hash and portal URL are set from the page."""
        html = "<div>Status: In Force</div><div>Effective Date: 2022-02-02</div>"
        fetch = MagicMock(return_value=html)
        instrument = Instrument(id="fdl-33-2021", title="Federal Decree-Law No. 33 of 2021")

        result = PortalEnricher(fetch).enrich(instrument, PORTAL_URL)

        fetch.assert_called_once_with(PORTAL_URL)
        assert result.uae_portal == PORTAL_URL
        assert result.status == "in_force"
        assert result.effective_from == "2022-02-02"
        assert result.meta_hash == page_fingerprint(html)
        assert result.title == "Federal Decree-Law No. 33 of 2021"
        assert instrument.status is None

    def test_transport_failure_degrades_to_unknown(self):
        """Test a failed fetch keeps the instrument with unknown status."""
        fetch = MagicMock(side_effect=TransportError("GET -> 500", status_code=500, url=PORTAL_URL))
        instrument = Instrument(id="fdl-33-2021", title="T", effective_from="2022-02-02")

        result = PortalEnricher(fetch).enrich(instrument, PORTAL_URL)

        assert result.uae_portal == PORTAL_URL
        assert result.status == "unknown"
        assert result.effective_from == "2022-02-02"
        assert result.meta_hash is None

    def test_transport_failure_keeps_prior_status(self):
        """Test a failed fetch keeps an already known status."""
        fetch = MagicMock(side_effect=TransportError("boom", url=PORTAL_URL))

        result = PortalEnricher(fetch).enrich(Instrument(id="a", status="amended"), PORTAL_URL)

        assert result.status == "amended"

    def test_unreadable_page_degrades(self):
        """Test a page that cannot be read degrades like a fetch failure."""
        fetch = MagicMock(return_value=None)

        result = PortalEnricher(fetch).enrich(Instrument(id="a"), PORTAL_URL)

        assert result.status == "unknown"
        assert result.uae_portal == PORTAL_URL
