import logging
import textwrap
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from swift_driver.cli import app as cli_app

runner = CliRunner()


@pytest.fixture
def node_file(tmp_path: Path) -> Path:
    f = tmp_path / "node.yaml"
    f.write_text(textwrap.dedent("""
        metadata:
          name: node-a
          namespace: swift
        spec:
          storage_network:
            ips: [10.96.10.1]
    """))
    return f


@pytest.fixture
def cluster_file(tmp_path: Path) -> Path:
    f = tmp_path / "cluster.yaml"
    f.write_text("metadata:\n  name: demo\n  namespace: swift\n")
    return f


@pytest.fixture
def log_dirs():
    return []


@pytest.fixture
def wired(monkeypatch, api, tmp_path, log_dirs):
    """Point the CLI at the in-memory client and a throwaway log dir."""
    def fake_init_logging(*, base_dir=None, verbose=False):
        log_dirs.append(base_dir)
        return logging.getLogger("cli-test"), "run", tmp_path / "x.log"

    monkeypatch.setattr(
        cli_app.KubernetesClusterClient, "connect", classmethod(lambda cls, ctx=None: api)
    )
    monkeypatch.setattr(cli_app, "init_logging", fake_init_logging)
    monkeypatch.delenv("SWIFT_DRIVER_CONFIG", raising=False)
    return api


def test_render_node_prints_deployment_and_service(node_file):
    result = runner.invoke(cli_app.app, ["render-node", str(node_file)])
    assert result.exit_code == 0, result.output
    deploy, svc = list(yaml.safe_load_all(result.output))
    assert deploy["kind"] == "Deployment"
    assert deploy["spec"]["template"]["spec"]["containers"][0]["image"] == "thiagodasilva/swift-storage:dev-v1"
    assert svc["kind"] == "Service"
    assert svc["spec"]["clusterIP"] == "10.96.10.1"
    assert svc["spec"]["selector"] == {"swift_storage": "node-a"}


def test_add_and_delete_cluster(wired, cluster_file):
    result = runner.invoke(cli_app.app, ["add-cluster", str(cluster_file)])
    assert result.exit_code == 0, result.output
    assert len(wired.objects) == 5

    result = runner.invoke(cli_app.app, ["delete-cluster", str(cluster_file)])
    assert result.exit_code == 0, result.output
    assert wired.objects == {}


def test_delete_cluster_reports_not_found(wired, cluster_file):
    result = runner.invoke(cli_app.app, ["delete-cluster", str(cluster_file)])
    assert result.exit_code == 1
    assert "error:" in result.output


def test_add_and_delete_node(wired, node_file):
    assert runner.invoke(cli_app.app, ["add-node", str(node_file)]).exit_code == 0
    assert wired.names("Service") == ["node-a-svc"]
    assert runner.invoke(cli_app.app, ["delete-node", str(node_file)]).exit_code == 0
    assert wired.names("Service") == []


def test_log_dir_option_reaches_logging(wired, log_dirs, node_file, tmp_path):
    logs = tmp_path / "logs"
    result = runner.invoke(cli_app.app, ["add-node", str(node_file), "--log-dir", str(logs)])
    assert result.exit_code == 0, result.output
    assert log_dirs == [logs]


def test_log_dir_from_settings_file(wired, log_dirs, node_file, tmp_path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text(f"log_dir: {tmp_path / 'from-settings'}\n")
    result = runner.invoke(cli_app.app, ["add-node", str(node_file), "-c", str(cfg)])
    assert result.exit_code == 0, result.output
    assert log_dirs == [tmp_path / "from-settings"]


def test_invalid_node_document_is_reported(wired, tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("metadata:\n  namespace: swift\n")   # no name
    result = runner.invoke(cli_app.app, ["add-node", str(bad)])
    assert result.exit_code == 1
    assert "error:" in result.output
    assert wired.ops == []


def test_unparsable_yaml_is_reported(wired, tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("metadata: [unclosed\n")
    result = runner.invoke(cli_app.app, ["add-cluster", str(bad)])
    assert result.exit_code == 1
    assert "error:" in result.output


def test_unusable_kube_config_is_reported(monkeypatch, wired, cluster_file):
    from kubernetes.config import ConfigException

    def refuse(cls, ctx=None):
        raise ConfigException("Invalid kube-config file. No configuration found.")

    monkeypatch.setattr(cli_app.KubernetesClusterClient, "connect", classmethod(refuse))
    result = runner.invoke(cli_app.app, ["add-cluster", str(cluster_file)])
    assert result.exit_code == 1
    assert "No configuration found" in result.output
