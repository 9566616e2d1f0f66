"""Devfile model: parsing, attribute store and accessors."""

from stubmapper.devfile.attributes import Attributes, AttributeLookup, LookupStatus
from stubmapper.devfile.parser import (
    KUBERNETES_COMPONENT_TYPE,
    DevfileComponent,
    DevfileData,
    DevfileMetadata,
    DevfileProject,
    parse_devfile,
)

__all__ = [
    "KUBERNETES_COMPONENT_TYPE",
    "AttributeLookup",
    "Attributes",
    "DevfileComponent",
    "DevfileData",
    "DevfileMetadata",
    "DevfileProject",
    "LookupStatus",
    "parse_devfile",
]
