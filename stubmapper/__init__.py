"""stubmapper: repository scan results -> component stubs + application devfile updates."""

__version__ = "0.1.0"

from stubmapper.errors import (
    DevfileParseError,
    DuplicateNameError,
    InvalidSourceError,
    MalformedValueError,
    MapperError,
    NilInputError,
)
from stubmapper.extractor import extract_attributes, extract_from_devfile
from stubmapper.models import (
    ComponentAttributes,
    ComponentDetectionDescription,
    ComponentDetectionMap,
    ComponentSource,
    ComponentSpec,
    EnvVar,
    GitSource,
    Quantity,
    ResourceName,
    ResourceRequirements,
    ScanResult,
)
from stubmapper.naming import derive_raw_name, get_component_name, sanitize_component_name
from stubmapper.synthesizer import synthesize
from stubmapper.updater import attach_component

__all__ = [
    "ComponentAttributes",
    "ComponentDetectionDescription",
    "ComponentDetectionMap",
    "ComponentSource",
    "ComponentSpec",
    "DevfileParseError",
    "DuplicateNameError",
    "EnvVar",
    "GitSource",
    "InvalidSourceError",
    "MalformedValueError",
    "MapperError",
    "NilInputError",
    "Quantity",
    "ResourceName",
    "ResourceRequirements",
    "ScanResult",
    "attach_component",
    "derive_raw_name",
    "extract_attributes",
    "extract_from_devfile",
    "get_component_name",
    "sanitize_component_name",
    "synthesize",
]
