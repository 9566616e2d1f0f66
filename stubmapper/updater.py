"""Attach a component to an application-level devfile model.

Git-sourced components become ``projects`` entries; image-sourced ones
become ``containerImage/<name>`` top-level attributes. Component names
are unique within one application devfile. The update is all or
nothing: on any error the devfile is left exactly as it was.
"""

from __future__ import annotations

import structlog

from stubmapper.devfile.attributes import Attributes
from stubmapper.devfile.parser import DevfileData, DevfileProject
from stubmapper.errors import DuplicateNameError, InvalidSourceError, MalformedValueError
from stubmapper.models import ComponentSpec

log = structlog.get_logger("stubmapper.engine")

CONTAINER_IMAGE_ATTR_PREFIX = "containerImage/"


def container_image_key(component_name: str) -> str:
    return f"{CONTAINER_IMAGE_ATTR_PREFIX}{component_name}"


def _attach_git(devfile: DevfileData, name: str, repo_url: str) -> None:
    project = DevfileProject(name=name, remotes={"origin": repo_url})
    for existing in devfile.get_projects():
        if existing.name == project.name:
            raise DuplicateNameError(project.name)
    devfile.add_projects([project])


def _attach_image(devfile: DevfileData, name: str, image: str) -> None:
    attributes = devfile.attributes or Attributes()
    key = container_image_key(name)

    lookup = attributes.get_string(key)
    if lookup.malformed:
        raise MalformedValueError(key, lookup.reason or "unreadable value")
    if lookup.value_or(""):
        raise DuplicateNameError(name)

    # Only written here, so a rejected attach never leaves an empty
    # attributes block behind.
    devfile.set_attributes(attributes.put_string(key, image))


def attach_component(devfile: DevfileData, component: ComponentSpec) -> None:
    """Add ``component`` to the application ``devfile`` in place.

    Raises:
        DuplicateNameError: a project or image attribute with the same
            component name already exists.
        InvalidSourceError: the component has neither a git source nor a
            container image.
        MalformedValueError: the existing image attribute is not a string.
    """
    source = component.source
    if source.git_source is not None:
        _attach_git(devfile, component.component_name, source.git_source.url)
        kind = "git"
    elif source.container_image:
        _attach_image(devfile, component.component_name, source.container_image)
        kind = "image"
    else:
        raise InvalidSourceError()
    log.info("updater.component_attached", name=component.component_name, source=kind)
