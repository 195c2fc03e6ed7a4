"""
Relationship inference between instruments.

Runs over the whole merged instrument set in two ordered passes:
1. Amendment linking: "Cabinet Resolution No. 1 of 2022 Amending Federal
   Decree-Law No. 33 of 2021" is recorded in the target's as_amended_by.
2. Repeal linking: an instrument whose title says it repeals or replaces
   another is set as repealed_by on the latest earlier instrument of the
   same topic.

Both passes only add information and check current values before writing,
so running inference again over the same data changes nothing.
"""
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from uae_laws.consolidation.models import Instrument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Designation:
    """Number and year that designate an instrument, e.g. No. 33 of 2021."""
    number: str
    year: str

    def __str__(self) -> str:
        return f"{self.number}/{self.year}"


class RelationshipInferencer:
    """
    Links amending and repealing instruments to their targets.

    Targets are recognised from designation patterns in titles
    ("No. 33 of 2021", "33/2021"), never from identifiers.
    """

    AMENDMENT_CUE = r"amend"
    REPEAL_CUE = r"repeal|replaced"

    # "No. 33 of 2021", "No 33 of 2021", "33 of 2021", "33/2021"
    DESIGNATION_PATTERN = r"(?:No\.?\s*)?(\d+)\s*(?:of|/)\s*((?:19|20)\d{2})\b"

    def __init__(self):
        """Initialize the inferencer."""
        self.amendment_regex = re.compile(self.AMENDMENT_CUE, re.IGNORECASE)
        self.repeal_regex = re.compile(self.REPEAL_CUE, re.IGNORECASE)
        self.designation_regex = re.compile(self.DESIGNATION_PATTERN, re.IGNORECASE)

    def infer(self, instruments: Dict[str, Instrument]) -> Dict[str, Instrument]:
        """
        Run both passes over the id-keyed instrument map in place.

        Args:
            instruments: Merged instruments keyed by id

        Returns:
            The same map, for chaining
        """
        amendments = self.link_amendments(instruments)
        repeals = self.link_repeals(instruments)
        logger.info(f"Inferred {amendments} amendment link(s), {repeals} repeal link(s)")
        return instruments

    # ------------------------------------------------------------------
    # Amendment pass
    # ------------------------------------------------------------------

    def link_amendments(self, instruments: Dict[str, Instrument]) -> int:
        """Append amending ids to their targets' as_amended_by. Returns links added."""
        added = 0
        for amending_id, target_id in self._amendment_pairs(instruments):
            target = instruments[target_id]
            if amending_id in target.as_amended_by:
                continue
            target.as_amended_by.append(amending_id)
            added += 1
            logger.debug(f"{target_id} amended by {amending_id}")
        return added

    def _amendment_pairs(self, instruments: Dict[str, Instrument]) -> List[Tuple[str, str]]:
        pairs = []
        for instrument in list(instruments.values()):
            reference = self.referenced_designation(instrument.title)
            if reference is None:
                continue
            target = self.find_by_designation(instruments, reference, exclude_id=instrument.id)
            if target is None:
                logger.debug(f"{instrument.id} amends {reference}, which is not tracked")
                continue
            pairs.append((instrument.id, target.id))
        return pairs

    def referenced_designation(self, title: str) -> Optional[Designation]:
        """
        Get the designation an amending title refers to.

        Only designations after the amendment cue count, so the amending
        instrument's own number is not mistaken for its target.
        """
        if not title:
            return None
        cue = self.amendment_regex.search(title)
        if cue is None:
            return None
        match = self.designation_regex.search(title, cue.end())
        if match is None:
            return None
        return Designation(number=match.group(1).lstrip("0") or "0", year=match.group(2))

    def primary_designation(self, title: str) -> Optional[Designation]:
        """Get the first designation in a title, which names the instrument itself."""
        if not title:
            return None
        match = self.designation_regex.search(title)
        if match is None:
            return None
        return Designation(number=match.group(1).lstrip("0") or "0", year=match.group(2))

    def find_by_designation(
        self,
        instruments: Dict[str, Instrument],
        designation: Designation,
        exclude_id: Optional[str] = None,
    ) -> Optional[Instrument]:
        """Get the first instrument whose own title carries ``designation``."""
        for candidate in instruments.values():
            if candidate.id == exclude_id:
                continue
            if self.primary_designation(candidate.title) == designation:
                return candidate
        return None

    # ------------------------------------------------------------------
    # Repeal pass
    # ------------------------------------------------------------------

    def link_repeals(self, instruments: Dict[str, Instrument]) -> int:
        """Set repealed_by on repeal candidates that have none yet. Returns links set."""
        linked = 0
        for instrument in list(instruments.values()):
            if not instrument.title or not self.repeal_regex.search(instrument.title):
                continue
            candidate = self.find_repeal_candidate(instruments, instrument)
            if candidate is None:
                continue
            if candidate.repealed_by:
                logger.debug(
                    f"{candidate.id} already repealed by {candidate.repealed_by}, "
                    f"ignoring {instrument.id}"
                )
                continue
            candidate.repealed_by = instrument.id
            linked += 1
            logger.debug(f"{candidate.id} repealed by {instrument.id}")
        return linked

    @staticmethod
    def find_repeal_candidate(
        instruments: Dict[str, Instrument],
        repealing: Instrument,
    ) -> Optional[Instrument]:
        """
        Get the instrument ``repealing`` most plausibly repeals.

        Candidates share the topic and took effect strictly before the
        repealing instrument; the latest one wins. Effective dates are ISO
        strings and are compared as strings.
        """
        if not repealing.effective_from:
            return None

        best = None
        for candidate in instruments.values():
            if candidate.topic != repealing.topic or not candidate.effective_from:
                continue
            if not candidate.effective_from < repealing.effective_from:
                continue
            if best is None or candidate.effective_from > best.effective_from:
                best = candidate
        return best


def infer_relationships(instruments: Dict[str, Instrument]) -> Dict[str, Instrument]:
    """Convenience wrapper running both inference passes."""
    return RelationshipInferencer().infer(instruments)
