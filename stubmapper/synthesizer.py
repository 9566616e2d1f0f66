"""Stub synthesis: turn a repository scan into a component detection map."""

from __future__ import annotations

from dataclasses import replace

import structlog

from stubmapper.devfile.parser import parse_devfile
from stubmapper.errors import DuplicateNameError, NilInputError
from stubmapper.extractor import extract_from_devfile
from stubmapper.models import (
    ComponentDetectionDescription,
    ComponentDetectionMap,
    ComponentSource,
    ComponentSpec,
    GitSource,
    ResourceRequirements,
    ScanResult,
)
from stubmapper.naming import get_component_name

log = structlog.get_logger("stubmapper.engine")

APPLICATION_PLACEHOLDER = "insert-application-name"
DOCKERFILE_SENTINEL = "Dockerfile"
# Retries when a freshly suffixed name already sits in the result map
MAX_NAME_ATTEMPTS = 10


def _unique_name(git_source: GitSource, detected: ComponentDetectionMap) -> str:
    for _ in range(MAX_NAME_ATTEMPTS):
        name = get_component_name(git_source)
        if name not in detected:
            return name
        log.debug("synthesizer.name_collision", name=name)
    raise DuplicateNameError(name)


def _devfile_stub(
    context: str,
    devfile_bytes: bytes,
    scan: ScanResult,
    template: GitSource,
    detected: ComponentDetectionMap,
) -> tuple[str, ComponentDetectionDescription]:
    devfile = parse_devfile(devfile_bytes)
    metadata = devfile.metadata
    # A scanned port wins; the devfile's deployment/containerPort is then
    # never read.
    scanned_port = scan.first_port(context)
    attrs = extract_from_devfile(devfile, read_port=not scanned_port)

    git_source = replace(
        template,
        context=context,
        devfile_url=scan.devfile_urls.get(context) or None,
        dockerfile_url=scan.dockerfile_urls.get(context) or None,
    )
    name = _unique_name(git_source, detected)

    target_port = scanned_port or attrs.target_port

    stub = ComponentSpec(
        component_name=name,
        application=APPLICATION_PLACEHOLDER,
        source=ComponentSource(git_source=git_source),
        target_port=target_port,
        route=attrs.route,
        replicas=attrs.replicas,
        resources=ResourceRequirements(limits=attrs.limits, requests=attrs.requests),
        env=attrs.env,
    )
    # No devfile URL means the devfile came from an embedded/default
    # source rather than the repository itself.
    description = ComponentDetectionDescription(
        devfile_found=bool(scan.devfile_urls.get(context)),
        language=metadata.language,
        project_type=metadata.project_type,
        component_stub=stub,
    )
    return name, description


def _dockerfile_stub(
    context: str,
    dockerfile_url: str,
    template: GitSource,
    detected: ComponentDetectionMap,
) -> tuple[str, ComponentDetectionDescription]:
    git_source = replace(
        template,
        context=context,
        devfile_url=None,
        dockerfile_url=dockerfile_url,
    )
    name = _unique_name(git_source, detected)
    description = ComponentDetectionDescription(
        devfile_found=False,
        language=DOCKERFILE_SENTINEL,
        project_type=DOCKERFILE_SENTINEL,
        component_stub=ComponentSpec(
            component_name=name,
            application=APPLICATION_PLACEHOLDER,
            source=ComponentSource(git_source=git_source),
        ),
    )
    return name, description


def synthesize(
    scan: ScanResult | None,
    git_source: GitSource | None,
    detected: ComponentDetectionMap | None = None,
) -> ComponentDetectionMap:
    """Build component stubs for every context in ``scan``.

    Args:
        scan: Scan output. On success, every context that had a devfile is
            removed from ``scan.dockerfile_urls``.
        git_source: Repository descriptor; its URL and revision are copied
            into every stub, context and file URLs are filled per context.
        detected: Previously detected components to merge with. Not mutated.

    Returns:
        A new map from component name to detection description.

    Any parse or extraction error propagates and leaves ``scan`` and
    ``detected`` untouched.
    """
    if scan is None:
        raise NilInputError("scan result")
    if git_source is None:
        raise NilInputError("git source")

    result: ComponentDetectionMap = dict(detected or {})
    remaining_dockerfiles = dict(scan.dockerfile_urls)

    log.info("synthesizer.devfiles_detected", count=len(scan.devfiles))
    for context, devfile_bytes in scan.devfiles.items():
        log.debug("synthesizer.reading_devfile", context=context)
        name, description = _devfile_stub(context, devfile_bytes, scan, git_source, result)
        result[name] = description
        # The dockerfile is informational once a devfile covers the context.
        remaining_dockerfiles.pop(context, None)

    log.info("synthesizer.dockerfiles_detected", count=len(remaining_dockerfiles))
    for context, dockerfile_url in remaining_dockerfiles.items():
        log.debug("synthesizer.reading_dockerfile", context=context)
        name, description = _dockerfile_stub(context, dockerfile_url, git_source, result)
        result[name] = description

    for context in scan.devfiles:
        scan.dockerfile_urls.pop(context, None)
    return result
