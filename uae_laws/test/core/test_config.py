"""
Tests for configuration defaults (uae_laws/core/config.py)
"""

from pathlib import Path

from uae_laws.core.config import (
    DEFAULT_TOPIC,
    HTTP_USER_AGENT,
    META_HASH_LENGTH,
    SLUG_MAX_LENGTH,
    get_diff_dir,
    get_snapshot_dir,
)


class TestConfig:
    """Tests for settings and path helpers."""

    def test_registry_defaults(self):
        assert SLUG_MAX_LENGTH == 60
        assert META_HASH_LENGTH == 12
        assert DEFAULT_TOPIC == "labour"
        assert HTTP_USER_AGENT == "uae-laws-sync/1.0"

    def test_output_dirs(self, tmp_path):
        assert get_snapshot_dir(tmp_path) == tmp_path / "snapshots"
        assert get_diff_dir(str(tmp_path)) == Path(tmp_path) / "diff"
