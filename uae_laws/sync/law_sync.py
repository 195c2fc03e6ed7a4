"""
Registry sync for UAE legal instruments.

Discovers instruments on the MOHRE index pages, merges the configured seeds,
enriches seeds from the UAE legislation portal, links amendments and repeals,
derives statuses, and persists the dated snapshot, the in-force view and the
diff against the previous snapshot.
"""
import argparse
import logging
import sys
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from uae_laws.core.config import LOG_LEVEL, OUT_DIR, SOURCES_FILE
from uae_laws.core.exceptions import RegistryError
from uae_laws.core.logging import setup_logging
from uae_laws.consolidation.diff_engine import compute_diff
from uae_laws.consolidation.identity import merge_seeds
from uae_laws.consolidation.models import Snapshot
from uae_laws.consolidation.relationships import RelationshipInferencer
from uae_laws.consolidation.status import derive_statuses
from uae_laws.crawler.http_client import HttpClient
from uae_laws.crawler.index_crawler import IndexCrawler
from uae_laws.parser.portal_parser import PortalEnricher
from uae_laws.sources import Sources, get_sources
from uae_laws.sync.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of one sync run."""
    run_date: str
    snapshot_path: Path
    in_force_path: Path
    diff_path: Optional[Path] = None
    total: int = 0
    in_force: int = 0
    added: int = 0
    removed: int = 0
    changed: int = 0

    def summary_lines(self) -> List[str]:
        return [
            f"Snapshot: {self.snapshot_path}",
            f"In-force: {self.in_force_path}",
            f"Added: {self.added}, Removed: {self.removed}, Changed: {self.changed}",
        ]


class LawSyncService:
    """
    Runs the full registry sync.

    Collaborators are injectable; by default pages are fetched with a shared
    HttpClient and outputs go to the configured output directory.
    """

    def __init__(
        self,
        sources: Optional[Sources] = None,
        store: Optional[SnapshotStore] = None,
        fetch: Optional[Callable[[str], str]] = None,
    ):
        """
        Initialize the sync service.

        Args:
            sources: Index pages and seeds (default: built-in registry)
            store: Snapshot store (default: configured output directory)
            fetch: Page fetcher (default: HttpClient.fetch)
        """
        self.sources = sources or get_sources()
        self.store = store or SnapshotStore()
        self.http_client = None
        if fetch is None:
            self.http_client = HttpClient()
            fetch = self.http_client.fetch

        self.crawler = IndexCrawler(fetch)
        self.enricher = PortalEnricher(fetch)
        self.inferencer = RelationshipInferencer()

    def run(
        self,
        previous: Optional[Snapshot] = None,
        run_date: Optional[str] = None,
    ) -> SyncResult:
        """
        Run one sync.

        Args:
            previous: Previous snapshot to diff against; when None the store's
                      latest snapshot is used (if any). Snapshot.empty()
                      means "no previous run" and skips the diff file.
            run_date: ISO date of the run (default: today, UTC)

        Returns:
            SyncResult with written paths and diff counts

        Raises:
            FatalPipelineError: If discovery or persistence fails
        """
        run_date = run_date or datetime.now(timezone.utc).date().isoformat()

        logger.info("=" * 60)
        logger.info("UAE Laws Registry Sync")
        logger.info("=" * 60)
        logger.info(f"Run date: {run_date}")

        if previous is None:
            previous = self.store.load_latest()

        # Step 1: Discovery
        discovered = self.crawler.discover(self.sources.index_pages)

        # Step 2: Identity merge
        instruments = merge_seeds(discovered, self.sources.instruments)
        logger.info(f"Merged set: {len(instruments)} instrument(s)")

        # Step 3: Enrichment, seeds only
        for seed in self.sources.instruments:
            instruments[seed.id] = self.enricher.enrich(instruments[seed.id], seed.uae_portal)

        # Step 4: Relationships over the whole set
        self.inferencer.infer(instruments)

        # Step 5: Status derivation
        snapshot = Snapshot(
            date=run_date,
            instruments=derive_statuses(instruments.values(), run_date),
        )
        in_force = snapshot.in_force()

        # Step 6: Diff and persist
        diff = compute_diff(previous or Snapshot.empty(), snapshot)
        has_previous = previous is not None and previous.date is not None
        commit = self.store.commit(
            snapshot,
            in_force,
            diff=diff if has_previous else None,
            previous_date=previous.date if has_previous else None,
        )

        result = SyncResult(
            run_date=run_date,
            snapshot_path=commit.snapshot_path,
            in_force_path=commit.in_force_path,
            diff_path=commit.diff_path,
            total=len(snapshot),
            in_force=len(in_force),
            added=len(diff.added),
            removed=len(diff.removed),
            changed=len(diff.changed),
        )
        logger.info(f"Sync completed: {result.total} instrument(s), {result.in_force} in force")
        return result

    def close(self):
        """Close the HTTP session if this service owns one."""
        if self.http_client is not None:
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _iso_date(value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the registry sync."""
    parser = argparse.ArgumentParser(description="UAE laws registry sync")
    parser.add_argument("--out-dir", default=str(OUT_DIR), help="Output directory")
    parser.add_argument("--sources", default=SOURCES_FILE or None, help="JSON sources file")
    parser.add_argument("--date", type=_iso_date, help="Run date (YYYY-MM-DD)")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Log level")
    parser.add_argument("--log-file", help="Also write logs to this file under UAE_LAWS_LOG_DIR")

    args = parser.parse_args(argv)

    setup_logging("uae_laws", level=args.log_level, log_file=args.log_file, stream=sys.stderr)

    try:
        sources = get_sources(args.sources)
        with LawSyncService(sources=sources, store=SnapshotStore(args.out_dir)) as service:
            result = service.run(run_date=args.date)
    except (RegistryError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in result.summary_lines():
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
