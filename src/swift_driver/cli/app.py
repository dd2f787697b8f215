# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import typer
import yaml
from kubernetes import client
from kubernetes.config import ConfigException
from pydantic import ValidationError

from swift_driver.config.loader import load_cluster, load_node, load_settings
from swift_driver.config.settings import DriverSettings
from swift_driver.descriptors import node_endpoint, node_workload
from swift_driver.driver import SwiftStorage
from swift_driver.k8s import manifests
from swift_driver.k8s.client import KubernetesClusterClient
from swift_driver.k8s.errors import DriverError
from swift_driver.logging.log import init_logging
from swift_driver.observers.dispatcher import EventBus
from swift_driver.observers.logger import LoggerObserver


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Swift storage driver CLI")

CONFIG_OPT = typer.Option(None, "--config", "-c", help="Driver settings YAML")
CONTEXT_OPT = typer.Option(None, "--context", help="Kubernetes context to use")
VERBOSE_OPT = typer.Option(False, "--verbose", "-v", help="DEBUG output on console")
LOG_DIR_OPT = typer.Option(None, "--log-dir", help="Directory for per-run log files")

# Everything a bad input file, settings file or kube config can raise
CLI_ERRORS = (DriverError, ValidationError, yaml.YAMLError, ConfigException)


def _settings(config: Optional[Path], context: Optional[str], log_dir: Optional[Path]) -> DriverSettings:
    settings = load_settings(config)
    overrides = {}
    if context:
        overrides["kube_context"] = context
    if log_dir:
        overrides["log_dir"] = log_dir
    return settings.model_copy(update=overrides) if overrides else settings


def _driver(
    config: Optional[Path],
    context: Optional[str],
    verbose: bool,
    log_dir: Optional[Path],
) -> SwiftStorage:
    settings = _settings(config, context, log_dir)
    logger, _, _ = init_logging(base_dir=settings.log_dir, verbose=verbose)
    bus = EventBus(observers=[LoggerObserver(logger)])
    driver = SwiftStorage(
        KubernetesClusterClient.connect(settings.kube_context),
        settings,
        bus=bus,
        logger=logger,
        context=settings.kube_context,
    )
    driver.init()
    return driver


def _run(fn: Callable[[], None]) -> None:
    try:
        fn()
    except CLI_ERRORS as e:
        typer.secho(f"error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


# ------------------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------------------

@app.command("add-cluster")
def add_cluster(
    cluster_file: Path = typer.Argument(..., exists=True, help="StorageCluster YAML"),
    config: Optional[Path] = CONFIG_OPT,
    context: Optional[str] = CONTEXT_OPT,
    verbose: bool = VERBOSE_OPT,
    log_dir: Optional[Path] = LOG_DIR_OPT,
):
    """Publish topology, start ring master and proxy."""
    def go():
        cluster = load_cluster(cluster_file)
        _driver(config, context, verbose, log_dir).add_cluster(cluster)
    _run(go)


@app.command("delete-cluster")
def delete_cluster(
    cluster_file: Path = typer.Argument(..., exists=True, help="StorageCluster YAML"),
    config: Optional[Path] = CONFIG_OPT,
    context: Optional[str] = CONTEXT_OPT,
    verbose: bool = VERBOSE_OPT,
    log_dir: Optional[Path] = LOG_DIR_OPT,
):
    """Remove the proxy, ring master and topology of a cluster."""
    def go():
        cluster = load_cluster(cluster_file)
        _driver(config, context, verbose, log_dir).delete_cluster(cluster)
    _run(go)


@app.command("add-node")
def add_node(
    node_file: Path = typer.Argument(..., exists=True, help="StorageNode YAML"),
    config: Optional[Path] = CONFIG_OPT,
    context: Optional[str] = CONTEXT_OPT,
    verbose: bool = VERBOSE_OPT,
    log_dir: Optional[Path] = LOG_DIR_OPT,
):
    """Create the Service of a running storage node."""
    def go():
        node = load_node(node_file)
        _driver(config, context, verbose, log_dir).add_node(node)
    _run(go)


@app.command("delete-node")
def delete_node(
    node_file: Path = typer.Argument(..., exists=True, help="StorageNode YAML"),
    config: Optional[Path] = CONFIG_OPT,
    context: Optional[str] = CONTEXT_OPT,
    verbose: bool = VERBOSE_OPT,
    log_dir: Optional[Path] = LOG_DIR_OPT,
):
    """Delete the Service of a storage node."""
    def go():
        node = load_node(node_file)
        _driver(config, context, verbose, log_dir).delete_node(node)
    _run(go)


@app.command("render-node")
def render_node(
    node_file: Path = typer.Argument(..., exists=True, help="StorageNode YAML"),
    config: Optional[Path] = CONFIG_OPT,
):
    """Print a node's Deployment and Service as YAML. Talks to no cluster."""
    def go():
        node = load_node(node_file)
        workload = node_workload(node, load_settings(config))

        api = client.ApiClient()
        docs = [
            api.sanitize_for_serialization(manifests.deployment(workload)),
            api.sanitize_for_serialization(manifests.service(node_endpoint(node))),
        ]
        typer.echo(yaml.safe_dump_all(docs, sort_keys=False))
    _run(go)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
