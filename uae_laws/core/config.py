"""
UAE Laws Registry Configuration
Centralized configuration loaded from the environment and an optional .env file
"""
import os
from dotenv import load_dotenv
from pathlib import Path

# Load from .env file with UTF-8 encoding (Windows compatibility)
env_path = Path(__file__).parent.parent.parent / '.env'
load_dotenv(dotenv_path=env_path, encoding='utf-8')

# =============================================================================
# HTTP Configuration
# =============================================================================
HTTP_TIMEOUT = int(os.getenv("HTTP_TIMEOUT", "30"))
HTTP_USER_AGENT = os.getenv("HTTP_USER_AGENT", "uae-laws-sync/1.0")

# =============================================================================
# Registry Configuration
# =============================================================================
SLUG_MAX_LENGTH = int(os.getenv("SLUG_MAX_LENGTH", "60"))
DEFAULT_TOPIC = os.getenv("DEFAULT_TOPIC", "labour")
META_HASH_LENGTH = int(os.getenv("META_HASH_LENGTH", "12"))

# Optional JSON file overriding the built-in index pages and seeds
SOURCES_FILE = os.getenv("SOURCES_FILE", "")

# =============================================================================
# Logging Configuration
# =============================================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# =============================================================================
# Paths
# =============================================================================
OUT_DIR = Path(os.getenv("UAE_LAWS_OUT_DIR", "api"))
SNAPSHOT_DIR_NAME = "snapshots"
DIFF_DIR_NAME = "diff"
IN_FORCE_FILE_NAME = "laws.json"


def get_out_dir() -> Path:
    """Get the root output directory."""
    return OUT_DIR


def get_snapshot_dir(out_dir: Path = None) -> Path:
    """Get the directory holding dated snapshot files."""
    return Path(out_dir or OUT_DIR) / SNAPSHOT_DIR_NAME


def get_diff_dir(out_dir: Path = None) -> Path:
    """Get the directory holding diff files."""
    return Path(out_dir or OUT_DIR) / DIFF_DIR_NAME

