"""Kubernetes client construction for the Ephemeral Enforcer."""

import argparse
import logging
from typing import List, Optional

import yaml
from kubernetes import client, config
from kubernetes.config import ConfigException

from .config import KUBECONFIG_FLAG_HELP
from .utils import default_kubeconfig_path

logger = logging.getLogger(__name__)


class ClientSetError(ValueError):
    """Raised when a client set cannot be built from a configuration."""


class ClientSet:
    """API handles built on a single shared ApiClient."""

    def __init__(self, configuration: client.Configuration):
        self.configuration = configuration
        self.api_client = client.ApiClient(configuration=configuration)
        self.core_v1 = client.CoreV1Api(self.api_client)
        self.apps_v1 = client.AppsV1Api(self.api_client)
        self.batch_v1 = client.BatchV1Api(self.api_client)

    @property
    def host(self) -> str:
        """API server URL of the configuration."""
        return self.configuration.host

    def close(self) -> None:
        """Release the underlying connection pool."""
        self.api_client.close()

    def __enter__(self) -> "ClientSet":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def parse_kubeconfig_flag(argv: Optional[List[str]] = None) -> str:
    """
    Read the optional kubeconfig flag from the command line.

    Both "-kubeconfig" and "--kubeconfig" are accepted; unrelated
    arguments are left alone.

    Returns:
        The flag value, or the default path under the home directory
    """
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "-kubeconfig", "--kubeconfig",
        dest="kubeconfig",
        default=default_kubeconfig_path(),
        help=KUBECONFIG_FLAG_HELP
    )
    args, _ = parser.parse_known_args(argv)
    return args.kubeconfig


def get_config(
    kubeconfig: Optional[str] = None,
    in_cluster: bool = False
) -> client.Configuration:
    """
    Get the Kubernetes config from a local kubeconfig file, or from the
    service account when running in cluster.

    Args:
        kubeconfig: Path to the kubeconfig file. None reads the command line
            flag; an empty string selects in-cluster credentials.
        in_cluster: Use the pod's service account credentials

    Returns:
        A populated client Configuration

    Raises:
        ConfigException: If no usable configuration can be loaded
    """
    configuration = client.Configuration()

    if in_cluster or kubeconfig == "":
        try:
            config.load_incluster_config(client_configuration=configuration)
        except ConfigException as e:
            logger.error(f"Failed to load in-cluster configuration: {e}")
            raise
        logger.debug("Loaded in-cluster configuration")
        return configuration

    if kubeconfig is None:
        kubeconfig = parse_kubeconfig_flag()

    try:
        config.load_kube_config(
            config_file=kubeconfig,
            client_configuration=configuration
        )
    except ConfigException as e:
        logger.error(f"Failed to load kubeconfig {kubeconfig}: {e}")
        raise
    except (yaml.YAMLError, OSError) as e:
        logger.error(f"Failed to read kubeconfig {kubeconfig}: {e}")
        raise ConfigException(f"Invalid kube-config file {kubeconfig}: {e}") from e

    logger.debug(f"Loaded kubeconfig from {kubeconfig}")
    return configuration


def get_client_set(configuration: client.Configuration) -> ClientSet:
    """
    Generate a client set from a configuration.

    No request is sent to the API server.

    Raises:
        ClientSetError: If the configuration is not usable
    """
    if not isinstance(configuration, client.Configuration):
        raise ClientSetError(
            f"Expected a kubernetes Configuration, got {type(configuration).__name__}"
        )
    if not configuration.host:
        raise ClientSetError("Configuration has no API server host")

    return ClientSet(configuration)
