"""
Lifecycle status derivation.

Applied after relationship inference. Precedence is fixed:
repeal > amendment > status from enrichment > in_force.
"""
from dataclasses import replace
from typing import Iterable, List

from uae_laws.consolidation.models import AMENDED, IN_FORCE, REPEALED, Instrument


def derive_status(instrument: Instrument, run_date: str) -> Instrument:
    """Return a copy of ``instrument`` with status and effective_to derived."""
    if instrument.repealed_by:
        return replace(
            instrument,
            status=REPEALED,
            effective_to=run_date,
            as_amended_by=list(instrument.as_amended_by),
        )

    if instrument.as_amended_by:
        status = REPEALED if instrument.status == REPEALED else AMENDED
    else:
        status = instrument.status or IN_FORCE

    return replace(instrument, status=status, as_amended_by=list(instrument.as_amended_by))


def derive_statuses(instruments: Iterable[Instrument], run_date: str) -> List[Instrument]:
    """
    Derive final statuses for a fully linked instrument set.

    Args:
        instruments: Instruments after relationship inference
        run_date: ISO date of the run, used as effective_to on repeal

    Returns:
        New instruments in the same order; inputs are not modified
    """
    return [derive_status(instrument, run_date) for instrument in instruments]
