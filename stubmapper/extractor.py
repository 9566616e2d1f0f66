"""Attribute extraction: deployment hints from a devfile's Kubernetes component.

A key that is not set leaves its field at the zero value. A key that is
set but holds a value of the wrong shape, or a quantity that does not
parse, raises MalformedValueError and aborts the extraction.
"""

from __future__ import annotations

from typing import Any

from stubmapper.devfile.attributes import AttributeLookup, Attributes
from stubmapper.devfile.parser import KUBERNETES_COMPONENT_TYPE, DevfileData
from stubmapper.errors import MalformedValueError
from stubmapper.models import ComponentAttributes, EnvVar, Quantity, ResourceList, ResourceName

CONTAINER_ENV_KEY = "deployment/containerENV"
CONTAINER_PORT_KEY = "deployment/containerPort"
ROUTE_KEY = "deployment/route"
REPLICA_KEY = "deployment/replicas"
CPU_LIMIT_KEY = "deployment/cpuLimit"
MEMORY_LIMIT_KEY = "deployment/memoryLimit"
STORAGE_LIMIT_KEY = "deployment/storageLimit"
CPU_REQUEST_KEY = "deployment/cpuRequest"
MEMORY_REQUEST_KEY = "deployment/memoryRequest"
STORAGE_REQUEST_KEY = "deployment/storageRequest"

LIMIT_KEYS: dict[ResourceName, str] = {
    ResourceName.CPU: CPU_LIMIT_KEY,
    ResourceName.MEMORY: MEMORY_LIMIT_KEY,
    ResourceName.STORAGE: STORAGE_LIMIT_KEY,
}

REQUEST_KEYS: dict[ResourceName, str] = {
    ResourceName.CPU: CPU_REQUEST_KEY,
    ResourceName.MEMORY: MEMORY_REQUEST_KEY,
    ResourceName.STORAGE: STORAGE_REQUEST_KEY,
}


def decode_env(raw: Any) -> list[EnvVar]:
    """Decode a ``[{name, value}, ...]`` list into EnvVar entries."""
    if not isinstance(raw, list):
        raise TypeError(f"expected list of env vars, got {type(raw).__name__}")
    env: list[EnvVar] = []
    for item in raw:
        if not isinstance(item, dict):
            raise TypeError(f"expected env var mapping, got {type(item).__name__}")
        name = item.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("env var is missing a name")
        value = item.get("value", "")
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise TypeError(f"env var {name} value must be a string")
        env.append(EnvVar(name=name, value=value))
    return env


def _unwrap(lookup: AttributeLookup, default: Any) -> Any:
    if lookup.malformed:
        raise MalformedValueError(lookup.key, lookup.reason or "unreadable value")
    return lookup.value_or(default)


def _number(attributes: Attributes, key: str) -> int:
    value = _unwrap(attributes.get_number(key), 0)
    if isinstance(value, float) and not value.is_integer():
        raise MalformedValueError(key, f"expected whole number, got {value}")
    return int(value)


def _resources(attributes: Attributes, keys: dict[ResourceName, str]) -> ResourceList:
    resources: ResourceList = {}
    for resource, key in keys.items():
        text = _unwrap(attributes.get_string(key), "")
        if not text:
            continue
        try:
            resources[resource] = Quantity.parse(text)
        except ValueError as exc:
            raise MalformedValueError(key, str(exc)) from exc
    return resources


def extract_attributes(attributes: Attributes, read_port: bool = True) -> ComponentAttributes:
    """Pull the deployment attribute catalog out of one component's attributes.

    With ``read_port`` False the container port is not looked up and
    ``target_port`` stays 0.
    """
    return ComponentAttributes(
        env=_unwrap(attributes.get_into(CONTAINER_ENV_KEY, decode_env), []),
        target_port=_number(attributes, CONTAINER_PORT_KEY) if read_port else 0,
        route=_unwrap(attributes.get_string(ROUTE_KEY), ""),
        replicas=_number(attributes, REPLICA_KEY),
        limits=_resources(attributes, LIMIT_KEYS),
        requests=_resources(attributes, REQUEST_KEYS),
    )


def extract_from_devfile(devfile: DevfileData, read_port: bool = True) -> ComponentAttributes:
    """Extract attributes from the first Kubernetes component of ``devfile``.

    A devfile can declare any number of components; only the first
    Kubernetes one is consulted. No Kubernetes component yields an empty
    ComponentAttributes.
    """
    components = devfile.get_components(KUBERNETES_COMPONENT_TYPE)
    if not components:
        return ComponentAttributes()
    return extract_attributes(components[0].attributes, read_port=read_port)
