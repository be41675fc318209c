"""Shared fixtures for the enforcer tests."""

from __future__ import annotations

from pathlib import Path

import pytest

ENFORCER_ENV_VARS = (
    "WORKLOAD_TTL",
    "EPHEMERAL_ENFORCER_NAME",
    "SKIPPED_PREFIXES",
    "DISALLOW_LIST",
)

KUBECONFIG_TEMPLATE = """\
apiVersion: v1
kind: Config
clusters:
- name: test-cluster
  cluster:
    server: {server}
contexts:
- name: test-context
  context:
    cluster: test-cluster
    user: test-user
current-context: test-context
users:
- name: test-user
  user:
    token: test-token
"""


@pytest.fixture(autouse=True)
def clean_enforcer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENFORCER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def kubeconfig_file(tmp_path: Path) -> Path:
    path = tmp_path / "config"
    path.write_text(KUBECONFIG_TEMPLATE.format(server="https://10.0.0.1:6443"))
    return path
