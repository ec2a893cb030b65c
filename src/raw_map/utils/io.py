"""Snapshot persistence for raw maps.

A snapshot is the JSON payload from :mod:`raw_map.serialize.codec`,
compressed with zstandard and stored at a path derived from the map name.
"""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List

import zstandard as zstd
from jsonschema import Draft7Validator

from ..serialize.codec import decode_raw_map, encode_raw_map
from .constants import (
    DATA_ROOT,
    DEFAULT_COMPRESSION_LEVEL,
    RAW_MAP_PATH_TEMPLATE,
    SNAPSHOT_FORMAT_VERSION,
    SNAPSHOT_SCHEMA_PATH,
)
from .errors import (
    IoError,
    SnapshotDecodeError,
    SnapshotNotFound,
    SnapshotValidationError,
    UnsupportedVersionError,
)
from .logging import get_logger

if TYPE_CHECKING:
    from ..domain.models import RawMap
    from ..domain.names import MapName

LOG = get_logger()


def path_raw_map(name: "MapName", data_root: Path = DATA_ROOT) -> Path:
    relative = RAW_MAP_PATH_TEMPLATE.format(
        country=name.city.country,
        city=name.city.city,
        map=name.map,
    )
    return Path(data_root) / relative


@lru_cache(maxsize=1)
def _snapshot_validator() -> Draft7Validator:
    with SNAPSHOT_SCHEMA_PATH.open("r", encoding="utf-8") as f:
        schema_json = json.load(f)
    return Draft7Validator(schema_json)


def _format_json_path(path_iterable) -> str:
    parts: List[str] = ["root"]
    for p in path_iterable:
        if isinstance(p, int):
            parts[-1] = parts[-1] + f"[{p}]"
        else:
            parts.append(str(p))
    return ".".join(parts)


def validate_snapshot_payload(payload: Dict) -> None:
    """Check a decoded payload against the snapshot schema."""

    errors = sorted(
        _snapshot_validator().iter_errors(payload),
        key=lambda e: (list(map(str, e.path)), list(map(str, e.schema_path))),
    )
    if not errors:
        return
    LOG.error("[SCH] snapshot validation: FAILED (count=%d)", len(errors))
    for i, err in enumerate(errors, start=1):
        LOG.error(
            "[SCH] #%d path=%s | msg=%s | validator=%s",
            i,
            _format_json_path(err.path),
            err.message,
            err.validator,
        )
    raise SnapshotValidationError(f"snapshot validation failed with {len(errors)} error(s)")


def write_snapshot(path: Path, raw_map: "RawMap", *, level: int = DEFAULT_COMPRESSION_LEVEL) -> None:
    """Serialize ``raw_map`` to ``path``, replacing whatever was there.

    The payload is checked against the snapshot schema first, so nothing is
    written that :func:`read_snapshot` would reject.
    """

    payload = encode_raw_map(raw_map)
    validate_snapshot_payload(payload)
    raw = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    compressed = zstd.ZstdCompressor(level=level).compress(raw)

    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(compressed)
        tmp_path.replace(path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise IoError(f"failed to write snapshot {path}: {exc}") from exc
    LOG.info(
        "wrote raw map %s: %s (bytes=%d, uncompressed=%d)",
        raw_map.name.describe(),
        path,
        len(compressed),
        len(raw),
    )


def read_snapshot(path: Path) -> "RawMap":
    if not path.exists():
        raise SnapshotNotFound(f"Snapshot not found: {path}")
    try:
        compressed = path.read_bytes()
    except OSError as exc:
        raise IoError(f"failed to read snapshot {path}: {exc}") from exc

    try:
        raw = zstd.ZstdDecompressor().decompress(compressed)
        payload = json.loads(raw.decode("utf-8"))
    except (zstd.ZstdError, UnicodeDecodeError, ValueError) as exc:
        raise SnapshotDecodeError(f"cannot decode snapshot {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise SnapshotDecodeError(f"snapshot {path} does not hold an object")

    version = str(payload.get("version", ""))
    if version != SNAPSHOT_FORMAT_VERSION:
        raise UnsupportedVersionError(
            f'unsupported snapshot "version": {version} (expected {SNAPSHOT_FORMAT_VERSION})'
        )
    validate_snapshot_payload(payload)

    try:
        raw_map = decode_raw_map(payload)
    except (KeyError, ValueError) as exc:
        raise SnapshotDecodeError(f"inconsistent snapshot {path}: {exc}") from exc
    LOG.info("loaded raw map %s: %s", raw_map.name.describe(), path)
    return raw_map


__all__ = [
    "path_raw_map",
    "read_snapshot",
    "validate_snapshot_payload",
    "write_snapshot",
]
