#!/usr/bin/env python3
"""
Ephemeral Enforcer - Preflight Entry Point

Resolves the enforcer settings and the Kubernetes configuration the
controller would run with, builds the client set and reports the result.
Nothing is listed or deleted.

Usage:
    python run.py [--kubeconfig PATH] [--in-cluster] [--verbose]
"""

import argparse
import logging
import sys

from kubernetes.config import ConfigException

from ephemeral_enforcer.config import KUBECONFIG_FLAG_HELP, load_settings
from ephemeral_enforcer.kube_client import ClientSetError, get_client_set, get_config
from ephemeral_enforcer.utils import default_kubeconfig_path

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Ephemeral Enforcer - Check settings and cluster access"
    )
    parser.add_argument(
        "-kubeconfig", "--kubeconfig",
        default=default_kubeconfig_path(),
        help=KUBECONFIG_FLAG_HELP
    )
    parser.add_argument(
        "--in-cluster",
        action="store_true",
        help="Use in-cluster config (for running inside Kubernetes)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose/debug logging"
    )

    args = parser.parse_args(argv)

    # Set log level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    settings = load_settings()
    logger.info(f"Workload TTL: {settings.ttl_minutes} minutes")
    logger.info(f"Enforcer name: {settings.enforcer_name}")
    logger.info(f"Skipped prefixes: {[p for p in settings.skipped_prefixes if p]}")
    logger.info(f"Disallow list: {[d for d in settings.disallow_list if d]}")

    # Load Kubernetes configuration
    try:
        configuration = get_config(args.kubeconfig, in_cluster=args.in_cluster)
        client_set = get_client_set(configuration)
    except (ConfigException, ClientSetError) as e:
        logger.error(f"Failed to load Kubernetes config: {e}")
        return 1

    with client_set:
        logger.info(f"Kubernetes API server: {client_set.host}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
