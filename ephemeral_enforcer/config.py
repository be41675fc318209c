"""Configuration settings for the Ephemeral Enforcer."""

import logging
import os
import re
from dataclasses import dataclass
from typing import Tuple

logger = logging.getLogger(__name__)

# Environment variables
WORKLOAD_TTL_ENV = "WORKLOAD_TTL"
ENFORCER_NAME_ENV = "EPHEMERAL_ENFORCER_NAME"
SKIPPED_PREFIXES_ENV = "SKIPPED_PREFIXES"
DISALLOW_LIST_ENV = "DISALLOW_LIST"

# Defaults
DEFAULT_ENFORCER_NAME = "ephemeral-enforcer"
DEFAULT_SKIPPED_PREFIXES = ""
DEFAULT_DISALLOW_LIST = ""

# Separator for list-valued variables
LIST_SEPARATOR = ","

# Kubeconfig settings
KUBECONFIG_DIR = ".kube"
KUBECONFIG_FILE = "config"
KUBECONFIG_FLAG_HELP = "(optional) absolute path to the kubeconfig file"

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def get_env(key: str, fallback: str) -> str:
    """Look up an environment variable, returning fallback only if it is unset."""
    value = os.environ.get(key)
    if value is None:
        return fallback
    return value


def parse_ttl_minutes(raw: str) -> int:
    """
    Parse a TTL value in minutes.

    Anything that is not a plain (optionally signed) integer yields 0.

    Examples:
        "10" -> 10
        "-3" -> -3
        "" -> 0
        "ten" -> 0
    """
    if not raw or not _INTEGER_PATTERN.fullmatch(raw):
        return 0
    return int(raw)


@dataclass(frozen=True)
class EnforcerSettings:
    """Environment-derived settings used by the deletion checks."""
    ttl_minutes: int = 0
    enforcer_name: str = DEFAULT_ENFORCER_NAME
    skipped_prefixes: Tuple[str, ...] = ("",)
    disallow_list: Tuple[str, ...] = ("",)


def load_settings() -> EnforcerSettings:
    """Build EnforcerSettings from the current process environment."""
    settings = EnforcerSettings(
        ttl_minutes=parse_ttl_minutes(get_env(WORKLOAD_TTL_ENV, "")),
        enforcer_name=get_env(ENFORCER_NAME_ENV, DEFAULT_ENFORCER_NAME),
        skipped_prefixes=tuple(
            get_env(SKIPPED_PREFIXES_ENV, DEFAULT_SKIPPED_PREFIXES).split(LIST_SEPARATOR)
        ),
        disallow_list=tuple(
            get_env(DISALLOW_LIST_ENV, DEFAULT_DISALLOW_LIST).split(LIST_SEPARATOR)
        ),
    )
    logger.debug(f"Loaded settings: {settings}")
    return settings
