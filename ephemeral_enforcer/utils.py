"""Utility functions for matching, paths and object metadata."""

import logging
import os
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from dateutil.parser import isoparse

from .config import KUBECONFIG_DIR, KUBECONFIG_FILE

logger = logging.getLogger(__name__)


def home_dir() -> str:
    """Return $HOME, falling back to $USERPROFILE on Windows."""
    home = os.environ.get("HOME")
    if home:
        return home
    return os.environ.get("USERPROFILE", "")


def default_kubeconfig_path() -> str:
    """Return the kubeconfig path under the user's home directory."""
    return os.path.join(home_dir(), KUBECONFIG_DIR, KUBECONFIG_FILE)


def find_substring_match(
    value: str,
    candidates: Iterable[str],
    ignore_case: bool = False
) -> Optional[str]:
    """
    Return the first non-empty candidate contained in value.

    Empty candidates never match, so splitting an empty list string
    does not produce a catch-all entry.

    Examples:
        ("web-1", ["", "web"]) -> "web"
        ("Secrets", ["secret"], ignore_case=True) -> "secret"
        ("pod-1", [""]) -> None
    """
    haystack = value.lower() if ignore_case else value
    for candidate in candidates:
        if not candidate:
            continue
        needle = candidate.lower() if ignore_case else candidate
        if needle in haystack:
            return candidate
    return None


def to_utc(timestamp: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp, returning None if it is malformed.

    Examples:
        "2024-01-01T00:00:00Z" -> datetime(2024, 1, 1, tzinfo=UTC)
        "2024-01-01T00:00:00.123456789Z" -> microseconds truncated
        "yesterday" -> None
    """
    try:
        return isoparse(value)
    except (ValueError, OverflowError) as e:
        logger.debug(f"Ignoring malformed timestamp {value!r}: {e}")
        return None


def get_name_and_creation_time(obj) -> Tuple[str, Optional[datetime]]:
    """
    Extract metadata.name and metadata.creation_timestamp from an object.

    Accepts Kubernetes client models as well as plain dicts, such as the
    ones returned by the custom objects API, whose timestamps are RFC 3339
    strings.
    """
    if isinstance(obj, dict):
        metadata = obj.get("metadata") or {}
        created = metadata.get("creationTimestamp")
        if isinstance(created, str):
            created = parse_timestamp(created)
        return metadata.get("name") or "", created

    try:
        metadata = obj.metadata
        return metadata.name or "", metadata.creation_timestamp
    except AttributeError:
        return "", None
