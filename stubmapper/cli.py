"""CLI entry point: stubmapper.

Subcommands:
    stubmapper detect scan.yaml [--json]                  # Scan document -> component stubs
    stubmapper attach devfile.yaml --name svc --image img  # Add a component to an app devfile
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
import pydantic
import yaml

from stubmapper.core.logging import setup_logging
from stubmapper.devfile.parser import parse_devfile
from stubmapper.errors import MapperError
from stubmapper.models import (
    ComponentDetectionDescription,
    ComponentDetectionMap,
    ComponentSource,
    ComponentSpec,
    GitSource,
    ResourceList,
)
from stubmapper.schemas import load_scan_document
from stubmapper.synthesizer import APPLICATION_PLACEHOLDER, synthesize
from stubmapper.updater import attach_component


def _resources_to_dict(resources: ResourceList) -> dict[str, str]:
    return {name.value: str(quantity) for name, quantity in resources.items()}


def _description_to_dict(description: ComponentDetectionDescription) -> dict[str, Any]:
    stub = description.component_stub
    git = stub.source.git_source
    return {
        "devfile_found": description.devfile_found,
        "language": description.language,
        "project_type": description.project_type,
        "component_stub": {
            "component_name": stub.component_name,
            "application": stub.application,
            "source": {
                "git": {
                    "url": git.url,
                    "revision": git.revision,
                    "context": git.context,
                    "devfile_url": git.devfile_url,
                    "dockerfile_url": git.dockerfile_url,
                }
                if git is not None
                else None,
                "container_image": stub.source.container_image,
            },
            "target_port": stub.target_port,
            "route": stub.route,
            "replicas": stub.replicas,
            "resources": {
                "limits": _resources_to_dict(stub.resources.limits),
                "requests": _resources_to_dict(stub.resources.requests),
            },
            "env": [{"name": e.name, "value": e.value} for e in stub.env],
        },
    }


def _print_detected(detected: ComponentDetectionMap, as_json: bool) -> None:
    if as_json:
        rows = {name: _description_to_dict(desc) for name, desc in detected.items()}
        click.echo(json.dumps(rows, indent=2))
        return

    if not detected:
        click.echo("No components detected.")
        return

    click.echo(f"Detected {len(detected)} component(s)\n")
    for name, desc in sorted(detected.items()):
        git = desc.component_stub.source.git_source
        context = git.context if git is not None else "-"
        origin = "devfile" if desc.devfile_found else "no devfile"
        click.echo(f"  {name}  ({desc.language or 'unknown'}, {origin})")
        click.echo(f"    context: {context}")
        if desc.component_stub.target_port:
            click.echo(f"    port:    {desc.component_stub.target_port}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """stubmapper: map repository scans to component stubs."""
    setup_logging("DEBUG" if verbose else None)


@main.command()
@click.argument("scan_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def detect(scan_file: Path, as_json: bool) -> None:
    """Synthesize component stubs from a JSON/YAML scan document."""
    try:
        document = load_scan_document(scan_file)
        scan = document.to_scan_result(scan_file.parent)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, pydantic.ValidationError) as e:
        raise click.ClickException(f"Invalid scan document {scan_file}: {e}") from e

    try:
        detected = synthesize(scan, document.to_git_source())
    except MapperError as e:
        raise click.ClickException(str(e)) from e
    _print_detected(detected, as_json)


@main.command()
@click.argument("devfile_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", "component_name", required=True, help="Component name")
@click.option("--git-url", default=None, help="Git repository URL of the component")
@click.option("--image", default=None, help="Container image of the component")
@click.option("--application", default=APPLICATION_PLACEHOLDER, help="Application name")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the updated devfile (default: in place)",
)
def attach(
    devfile_path: Path,
    component_name: str,
    git_url: str | None,
    image: str | None,
    application: str,
    output: Path | None,
) -> None:
    """Attach a git- or image-sourced component to an application devfile."""
    if git_url and image:
        raise click.UsageError("--git-url and --image are mutually exclusive")

    component = ComponentSpec(
        component_name=component_name,
        application=application,
        source=ComponentSource(
            git_source=GitSource(url=git_url) if git_url else None,
            container_image=image,
        ),
    )
    try:
        devfile = parse_devfile(devfile_path.read_bytes())
        attach_component(devfile, component)
    except MapperError as e:
        raise click.ClickException(str(e)) from e

    target = output or devfile_path
    target.write_text(devfile.to_yaml(), encoding="utf-8")
    click.echo(f"Attached {component_name} to {target}")


if __name__ == "__main__":
    main()
