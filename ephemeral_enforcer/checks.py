"""Deletion checks for ephemeral resources."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from .config import EnforcerSettings, load_settings
from .utils import find_substring_match, get_name_and_creation_time, to_utc

logger = logging.getLogger(__name__)


def passed_time_to_live(
    creation_time: datetime,
    settings: Optional[EnforcerSettings] = None,
    now: Optional[datetime] = None
) -> bool:
    """Check if a resource was created strictly before now minus the TTL."""
    settings = settings or load_settings()
    now = to_utc(now) if now else datetime.now(timezone.utc)

    try:
        cutoff = now - timedelta(minutes=settings.ttl_minutes)
    except OverflowError:
        # Cutoff falls outside the datetime range
        logger.debug(f"TTL of {settings.ttl_minutes} minutes is out of range")
        return settings.ttl_minutes < 0
    return to_utc(creation_time) < cutoff


def name_check(name: str, settings: Optional[EnforcerSettings] = None) -> bool:
    """
    Check whether a resource name is allowed to be deleted.

    Returns False when the name contains the enforcer's own name or any
    non-empty skipped prefix. Matching is case-sensitive.
    """
    settings = settings or load_settings()

    if settings.enforcer_name in name:
        logger.debug(f"{name} contains enforcer name {settings.enforcer_name}, skipping")
        return False

    prefix = find_substring_match(name, settings.skipped_prefixes)
    if prefix is not None:
        logger.debug(f"{name} matches skipped prefix {prefix}, skipping")
        return False

    return True


def should_delete(
    name: str,
    creation_time: datetime,
    settings: Optional[EnforcerSettings] = None,
    now: Optional[datetime] = None
) -> bool:
    """Return True if the resource is past its TTL and not exempt by name."""
    settings = settings or load_settings()
    return passed_time_to_live(creation_time, settings, now) and name_check(name, settings)


@dataclass
class EphemeralChecks:
    """Holds the information of a resource that could be deleted."""
    name: str
    creation_time: datetime
    delete: bool = False

    def run_checks(
        self,
        settings: Optional[EnforcerSettings] = None,
        now: Optional[datetime] = None
    ) -> bool:
        """
        Run the checks to see if the resource should be deleted.

        The flag is overwritten: it ends up True only when the TTL has
        passed and the name is not exempt.

        Returns:
            The resulting delete flag
        """
        self.delete = should_delete(self.name, self.creation_time, settings, now)
        return self.delete


def check_delete_resource_allowed(
    resource_type: str,
    settings: Optional[EnforcerSettings] = None
) -> bool:
    """Check that the resource type is not in the disallow list (case-insensitive)."""
    settings = settings or load_settings()

    entry = find_substring_match(resource_type, settings.disallow_list, ignore_case=True)
    if entry is not None:
        logger.debug(f"Resource type {resource_type} is disallowed by {entry}")
        return False
    return True


def evaluate_object(
    obj,
    resource_type: str,
    settings: Optional[EnforcerSettings] = None,
    now: Optional[datetime] = None
) -> bool:
    """
    Decide whether a Kubernetes object should be deleted.

    Args:
        obj: Kubernetes client model or dict with metadata
        resource_type: Kind or plural name of the object
        settings: Settings to use (loaded from the environment if omitted)
        now: Reference time (defaults to the current UTC time)

    Returns:
        True if the type is allowed and the object passes the deletion checks
    """
    settings = settings or load_settings()

    if not check_delete_resource_allowed(resource_type, settings):
        return False

    name, creation_time = get_name_and_creation_time(obj)
    if creation_time is None:
        logger.debug(f"{resource_type} {name} has no creation timestamp, skipping")
        return False

    return should_delete(name, creation_time, settings, now)
