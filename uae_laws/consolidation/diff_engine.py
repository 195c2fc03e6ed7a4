"""
Snapshot Diff Engine for the instrument registry.

Compares two snapshots by instrument id:
- Added: ids only in the current snapshot (full current record)
- Removed: ids only in the previous snapshot (full previous record)
- Changed: ids in both whose tracked fields differ, with {from, to} per field

Missing, null and empty values all compare as null.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from uae_laws.consolidation.models import Diff, Instrument, InstrumentChange, Snapshot

logger = logging.getLogger(__name__)

# attribute name -> reported field name
TRACKED_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("title", "title"),
    ("status", "status"),
    ("effective_from", "effectiveFrom"),
    ("effective_to", "effectiveTo"),
    ("repealed_by", "repealedBy"),
)


def _normalized(value: Any) -> Any:
    return value or None


def compare_instruments(previous: Instrument, current: Instrument) -> Dict[str, Dict[str, Any]]:
    """
    Compare the tracked fields of two versions of an instrument.

    Returns:
        Map of field name to {"from": ..., "to": ...} for differing fields only
    """
    changes = {}
    for attr, name in TRACKED_FIELDS:
        old = _normalized(getattr(previous, attr))
        new = _normalized(getattr(current, attr))
        if old != new:
            changes[name] = {"from": old, "to": new}
    return changes


def compute_diff(
    previous: Snapshot,
    current: Snapshot,
    generated_at: Optional[str] = None,
) -> Diff:
    """
    Diff two snapshots.

    Args:
        previous: Last persisted snapshot (may be empty)
        current: Snapshot produced by this run
        generated_at: ISO timestamp for the diff (default: now, UTC)

    Returns:
        Diff with added, removed and changed entries
    """
    before = previous.by_id()
    after = current.by_id()

    diff = Diff(generated_at=generated_at or datetime.now(timezone.utc).isoformat())

    for instrument_id, instrument in after.items():
        old = before.get(instrument_id)
        if old is None:
            diff.added.append(instrument)
            continue
        changes = compare_instruments(old, instrument)
        if changes:
            diff.changed.append(InstrumentChange(id=instrument_id, changes=changes))

    for instrument_id, instrument in before.items():
        if instrument_id not in after:
            diff.removed.append(instrument)

    logger.info(
        f"Diff {previous.date or '(none)'} -> {current.date}: "
        f"{len(diff.added)} added, {len(diff.removed)} removed, {len(diff.changed)} changed"
    )
    return diff
