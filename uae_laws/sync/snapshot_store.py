"""
On-disk snapshot storage.

Layout under the output directory:
- snapshots/<YYYY-MM-DD>.json   full snapshot of each run
- laws.json                     in-force view, overwritten each run
- diff/<prev>_to_<date>.json    diff against the previous snapshot

All files of one run are written through ``commit``: each payload is staged
as a temp file next to its target and then renamed into place, so a failing
write leaves the output directory as it was before the run.
"""
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from uae_laws.core.config import (
    IN_FORCE_FILE_NAME,
    get_diff_dir,
    get_out_dir,
    get_snapshot_dir,
)
from uae_laws.core.exceptions import FatalPipelineError, ParseError
from uae_laws.consolidation.models import Diff, Instrument, Snapshot

logger = logging.getLogger(__name__)


@dataclass
class CommitResult:
    """Paths written by one commit."""
    snapshot_path: Path
    in_force_path: Path
    diff_path: Optional[Path] = None


class SnapshotStore:
    """Reads and writes the registry's JSON artifacts."""

    def __init__(self, out_dir: Union[str, Path, None] = None):
        """
        Initialize the store.

        Args:
            out_dir: Root output directory (defaults to config)
        """
        self.out_dir = Path(out_dir or get_out_dir())
        self.snapshot_dir = get_snapshot_dir(self.out_dir)
        self.diff_dir = get_diff_dir(self.out_dir)
        self.in_force_path = self.out_dir / IN_FORCE_FILE_NAME

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def snapshot_path(self, snapshot_date: str) -> Path:
        return self.snapshot_dir / f"{snapshot_date}.json"

    def diff_path(self, previous_date: str, current_date: str) -> Path:
        return self.diff_dir / f"{previous_date}_to_{current_date}.json"

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def list_snapshot_dates(self) -> List[str]:
        """Dates of persisted snapshots, oldest first (lexical order)."""
        if not self.snapshot_dir.is_dir():
            return []
        return sorted(p.stem for p in self.snapshot_dir.glob("*.json") if p.is_file())

    def read_snapshot(self, snapshot_date: str) -> Snapshot:
        """
        Read one snapshot file.

        Raises:
            ParseError: If the file does not hold a JSON array of instruments
        """
        path = self.snapshot_path(snapshot_date)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except ValueError as e:
            raise ParseError(f"Malformed snapshot JSON: {e}", path=str(path)) from e

        if not isinstance(data, list) or not all(isinstance(r, dict) and "id" in r for r in data):
            raise ParseError("Snapshot must be a JSON array of instruments", path=str(path))

        try:
            return Snapshot.from_records(snapshot_date, data)
        except TypeError as e:
            raise ParseError(f"Unexpected instrument fields: {e}", path=str(path)) from e

    def load_latest(self) -> Optional[Snapshot]:
        """
        Load the most recent snapshot.

        Returns:
            The latest snapshot, an empty snapshot carrying its date when the
            file is malformed, or None when no snapshot exists

        Raises:
            FatalPipelineError: If the snapshot file cannot be read at all
        """
        dates = self.list_snapshot_dates()
        if not dates:
            logger.info("No previous snapshot found")
            return None

        latest = dates[-1]
        try:
            snapshot = self.read_snapshot(latest)
        except ParseError as e:
            logger.warning(f"Ignoring unreadable snapshot: {e}")
            return Snapshot(date=latest)
        except OSError as e:
            raise FatalPipelineError(
                f"Cannot read snapshot {latest}",
                stage="load",
                original_error=e,
            ) from e

        logger.info(f"Loaded previous snapshot {latest} ({len(snapshot)} instruments)")
        return snapshot

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def commit(
        self,
        snapshot: Snapshot,
        in_force: List[Instrument],
        diff: Optional[Diff] = None,
        previous_date: Optional[str] = None,
    ) -> CommitResult:
        """
        Persist a run's snapshot, in-force view and optional diff together.

        Args:
            snapshot: The run's full snapshot (its date names the file)
            in_force: Instruments for the in-force view
            diff: Diff against the previous snapshot, if one existed
            previous_date: Date of the previous snapshot, names the diff file

        Returns:
            CommitResult with the written paths

        Raises:
            FatalPipelineError: If any file cannot be written
        """
        result = CommitResult(
            snapshot_path=self.snapshot_path(snapshot.date),
            in_force_path=self.in_force_path,
        )
        payloads: Dict[Path, Any] = {
            result.snapshot_path: snapshot.to_records(),
            result.in_force_path: [i.to_dict() for i in in_force],
        }
        if diff is not None and previous_date:
            result.diff_path = self.diff_path(previous_date, snapshot.date)
            payloads[result.diff_path] = diff.to_dict()

        staged: Dict[Path, str] = {}
        backups: Dict[Path, bytes] = {}
        replaced: List[Path] = []
        try:
            for target in payloads:
                if target.exists():
                    backups[target] = target.read_bytes()
            for target, payload in payloads.items():
                staged[target] = self._stage(target, payload)
            for target, temp_name in staged.items():
                os.replace(temp_name, target)
                replaced.append(target)
        except OSError as e:
            self._roll_back(staged, replaced, backups)
            raise FatalPipelineError(
                "Cannot write sync outputs",
                stage="persistence",
                original_error=e,
            ) from e

        logger.info(f"Wrote snapshot {result.snapshot_path}")
        return result

    @staticmethod
    def _roll_back(
        staged: Dict[Path, str],
        replaced: List[Path],
        backups: Dict[Path, bytes],
    ) -> None:
        """Remove staged temp files and restore every target already replaced."""
        for temp_name in staged.values():
            if os.path.exists(temp_name):
                os.unlink(temp_name)
        for target in reversed(replaced):
            try:
                if target in backups:
                    target.write_bytes(backups[target])
                else:
                    target.unlink()
            except OSError as e:
                logger.error(f"Cannot roll back {target}: {e}")

    @staticmethod
    def _stage(target: Path, payload: Any) -> str:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError:
            os.unlink(temp_name)
            raise
        return temp_name
