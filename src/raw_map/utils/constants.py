"""Shared constants for snapshot layout and encoding."""
from __future__ import annotations

from pathlib import Path

DATA_ROOT = Path("data")
RAW_MAP_PATH_TEMPLATE = "input/{country}/{city}/raw_maps/{map}.bin"

SNAPSHOT_FORMAT_VERSION = "1"
SNAPSHOT_SCHEMA_PATH = Path(__file__).resolve().parents[1] / "data" / "snapshot.schema.json"
DEFAULT_COMPRESSION_LEVEL = 3
