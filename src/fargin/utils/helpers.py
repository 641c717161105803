"""Helper functions for YAML persistence, timestamps and paths."""

import datetime as dt
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

import yaml

PathLike = Union[str, Path]


def load_yaml(file_path: PathLike) -> Any:
    """Load YAML file and return parsed content."""
    with open(file_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


def dump_yaml(data: Any, *, indent: int = 2) -> str:
    """Serialize data to a YAML string, keeping key order."""
    return yaml.safe_dump(
        data,
        default_flow_style=False,
        allow_unicode=True,
        indent=indent,
        sort_keys=False
    )


def save_yaml(data: Any, file_path: PathLike, *, indent: int = 2) -> None:
    """
    Save data to YAML file atomically.

    The content is written to a temporary file in the target directory and
    then moved over the destination with os.replace, so readers see either
    the previous file or the complete new one.
    """
    target = Path(file_path)
    content = dump_yaml(data, indent=indent)

    fd, tmp_path = tempfile.mkstemp(
        dir=str(target.parent), prefix=f'.{target.name}.', suffix='.tmp'
    )
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def ensure_dir(path: PathLike) -> None:
    """Ensure directory exists, create if necessary."""
    os.makedirs(path, exist_ok=True)


def get_timestamp() -> str:
    """Get current UTC timestamp in ISO-8601 format."""
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec='microseconds')


def truncate_text(text: str, max_length: int = 80, suffix: str = "...") -> str:
    """Truncate text to max_length with suffix if needed."""
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def parse_timestamp(value: str) -> Optional[dt.datetime]:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken as UTC and a trailing 'Z' is accepted. Returns
    None for text that is not a timestamp.
    """
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        parsed = dt.datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed
