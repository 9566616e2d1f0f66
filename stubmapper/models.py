"""Data models for component detection and application devfile updates.

These are pure data structures. No parsing or I/O happens here apart
from :meth:`Quantity.parse`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from kubernetes.utils.quantity import parse_quantity

# <signed number><binary SI | decimal SI | decimal exponent>, no whitespace
_QUANTITY_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+|[KMGTPE]i|[numkMGTPE])?"
)


class ResourceName(str, Enum):
    """Resource kinds carried in limits and requests."""

    CPU = "cpu"
    MEMORY = "memory"
    STORAGE = "storage"


@dataclass(frozen=True)
class Quantity:
    """A Kubernetes resource quantity such as ``500m`` or ``1Gi``.

    Two quantities are equal when they denote the same amount, so
    ``Quantity.parse("1Gi") == Quantity.parse("1024Mi")``.
    """

    value: Decimal
    text: str = field(compare=False)

    @classmethod
    def parse(cls, text: str) -> Quantity:
        """Parse ``text`` with Kubernetes quantity semantics.

        Raises ValueError when ``text`` is not a valid quantity.
        """
        if not isinstance(text, str) or not _QUANTITY_RE.fullmatch(text):
            raise ValueError(f"invalid quantity {text!r}")
        value = parse_quantity(text)
        if not value.is_finite():
            raise ValueError(f"invalid quantity {text!r}")
        return cls(value=value, text=text)

    def __str__(self) -> str:
        return self.text


ResourceList = dict[ResourceName, Quantity]


@dataclass
class ResourceRequirements:
    limits: ResourceList = field(default_factory=dict)
    requests: ResourceList = field(default_factory=dict)


@dataclass(frozen=True)
class EnvVar:
    name: str
    value: str = ""


@dataclass(frozen=True)
class GitSource:
    """Where a component's source lives in git.

    ``context`` is the sub-path inside the repository; None or ``./``
    mean the repository root.
    """

    url: str
    revision: str | None = None
    context: str | None = None
    devfile_url: str | None = None
    dockerfile_url: str | None = None


@dataclass(frozen=True)
class ComponentSource:
    """Source union: at most one of ``git_source`` / ``container_image``."""

    git_source: GitSource | None = None
    container_image: str | None = None

    def __post_init__(self) -> None:
        if self.git_source is not None and self.container_image:
            raise ValueError("component source must be either git or container image, not both")


@dataclass
class ComponentAttributes:
    """Deployment hints pulled from a devfile's Kubernetes component.

    Zero / empty values mean the attribute was not set.
    """

    env: list[EnvVar] = field(default_factory=list)
    target_port: int = 0
    route: str = ""
    replicas: int = 0
    limits: ResourceList = field(default_factory=dict)
    requests: ResourceList = field(default_factory=dict)


@dataclass
class ComponentSpec:
    """A component stub produced by detection, or a component to attach."""

    component_name: str
    application: str
    source: ComponentSource = field(default_factory=ComponentSource)
    target_port: int = 0
    route: str = ""
    replicas: int = 0
    resources: ResourceRequirements = field(default_factory=ResourceRequirements)
    env: list[EnvVar] = field(default_factory=list)


@dataclass
class ComponentDetectionDescription:
    devfile_found: bool
    language: str
    project_type: str
    component_stub: ComponentSpec


ComponentDetectionMap = dict[str, ComponentDetectionDescription]


@dataclass
class ScanResult:
    """Output of a repository scan, keyed by context (relative sub-path).

    ``devfiles`` holds raw devfile text per context, ``devfile_urls`` and
    ``dockerfile_urls`` the URLs they were found at, ``component_ports``
    the container ports detected per context (first one wins).
    """

    devfiles: dict[str, bytes] = field(default_factory=dict)
    devfile_urls: dict[str, str] = field(default_factory=dict)
    dockerfile_urls: dict[str, str] = field(default_factory=dict)
    component_ports: dict[str, list[int]] = field(default_factory=dict)

    def first_port(self, context: str) -> int:
        ports = self.component_ports.get(context) or []
        return ports[0] if ports else 0
