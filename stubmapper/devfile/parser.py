"""Devfile parsing and the in-memory devfile model.

Only the parts of the devfile 2.x schema the mapper touches are modelled:
``metadata``, ``components`` (with their ``attributes``), ``projects`` and
the top-level ``attributes``. Everything else in the document is kept
as-is so that :meth:`DevfileData.to_yaml` round-trips it.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

import yaml

from stubmapper.devfile.attributes import Attributes
from stubmapper.errors import DevfileParseError

# Component type is whichever of these keys the component entry carries.
COMPONENT_TYPES = ("container", "kubernetes", "openshift", "volume", "image", "custom")
KUBERNETES_COMPONENT_TYPE = "kubernetes"


@dataclass(frozen=True)
class DevfileMetadata:
    name: str = ""
    language: str = ""
    project_type: str = ""


@dataclass(frozen=True)
class DevfileComponent:
    name: str
    component_type: str
    attributes: Attributes = field(default_factory=Attributes)


@dataclass(frozen=True)
class DevfileProject:
    """A ``projects`` entry; only git-backed projects are produced here."""

    name: str
    remotes: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "git": {"remotes": dict(self.remotes)}}


def _component_type(entry: dict[str, Any]) -> str:
    for kind in COMPONENT_TYPES:
        if kind in entry:
            return kind
    return ""


class DevfileData:
    """Mutable devfile document."""

    def __init__(self, document: dict[str, Any]) -> None:
        self._doc = document

    @property
    def schema_version(self) -> str:
        return str(self._doc.get("schemaVersion", ""))

    @property
    def metadata(self) -> DevfileMetadata:
        meta = self._doc.get("metadata") or {}
        return DevfileMetadata(
            name=str(meta.get("name") or ""),
            language=str(meta.get("language") or ""),
            project_type=str(meta.get("projectType") or ""),
        )

    def get_components(self, component_type: str | None = None) -> list[DevfileComponent]:
        """Return components in document order, optionally filtered by type."""
        components: list[DevfileComponent] = []
        for entry in self._doc.get("components") or []:
            kind = _component_type(entry)
            if component_type is not None and kind != component_type:
                continue
            components.append(
                DevfileComponent(
                    name=entry["name"],
                    component_type=kind,
                    attributes=Attributes(entry.get("attributes") or {}),
                )
            )
        return components

    def get_projects(self) -> list[DevfileProject]:
        projects: list[DevfileProject] = []
        for entry in self._doc.get("projects") or []:
            remotes = (entry.get("git") or {}).get("remotes") or {}
            projects.append(DevfileProject(name=entry["name"], remotes=dict(remotes)))
        return projects

    def add_projects(self, projects: list[DevfileProject]) -> None:
        existing = {p.name for p in self.get_projects()}
        for project in projects:
            if project.name in existing:
                raise ValueError(f"project {project.name} already exists in devfile")
            existing.add(project.name)
        entries = self._doc.setdefault("projects", [])
        entries.extend(p.to_dict() for p in projects)

    @property
    def attributes(self) -> Attributes | None:
        """Top-level attributes, or None when the devfile declares none."""
        raw = self._doc.get("attributes")
        if raw is None:
            return None
        return Attributes(raw)

    def set_attributes(self, attributes: Attributes) -> None:
        self._doc["attributes"] = attributes.to_dict()

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._doc)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self._doc, sort_keys=False)


def _validate(document: Any) -> dict[str, Any]:
    if not isinstance(document, dict):
        raise DevfileParseError("devfile must be a mapping")
    if not document.get("schemaVersion"):
        raise DevfileParseError("devfile is missing schemaVersion")

    for key in ("metadata", "attributes"):
        if document.get(key) is not None and not isinstance(document[key], dict):
            raise DevfileParseError(f"devfile {key} must be a mapping")

    for key in ("components", "projects"):
        entries = document.get(key)
        if entries is None:
            continue
        if not isinstance(entries, list):
            raise DevfileParseError(f"devfile {key} must be a list")
        for entry in entries:
            if not isinstance(entry, dict) or not entry.get("name"):
                raise DevfileParseError(f"every entry in devfile {key} needs a name")
            attrs = entry.get("attributes")
            if attrs is not None and not isinstance(attrs, dict):
                raise DevfileParseError(f"attributes of {entry['name']} must be a mapping")
    return document


def parse_devfile(source: bytes | str) -> DevfileData:
    """Parse raw devfile text into a :class:`DevfileData`.

    Raises DevfileParseError on invalid YAML or a document that is not a
    devfile.
    """
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DevfileParseError(f"devfile is not valid UTF-8: {exc}") from exc
    try:
        document = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        raise DevfileParseError(f"invalid devfile yaml: {exc}") from exc
    return DevfileData(_validate(document))
