"""Tests for the deployment attribute extractor."""

from __future__ import annotations

import pytest

from stubmapper.devfile.attributes import Attributes
from stubmapper.devfile.parser import parse_devfile
from stubmapper.errors import MalformedValueError
from stubmapper.extractor import (
    CONTAINER_ENV_KEY,
    CONTAINER_PORT_KEY,
    CPU_LIMIT_KEY,
    MEMORY_LIMIT_KEY,
    REPLICA_KEY,
    ROUTE_KEY,
    STORAGE_REQUEST_KEY,
    extract_attributes,
    extract_from_devfile,
)
from stubmapper.models import ComponentAttributes, EnvVar, Quantity, ResourceName


class TestExtractAttributes:
    def test_all_absent(self):
        assert extract_attributes(Attributes()) == ComponentAttributes()

    def test_cpu_and_memory_limits(self):
        attrs = Attributes({CPU_LIMIT_KEY: "2", MEMORY_LIMIT_KEY: "2Gi"})
        result = extract_attributes(attrs)
        assert result.limits == {
            ResourceName.CPU: Quantity.parse("2"),
            ResourceName.MEMORY: Quantity.parse("2Gi"),
        }
        assert ResourceName.STORAGE not in result.limits
        assert result.requests == {}

    def test_quantity_keeps_text(self):
        result = extract_attributes(Attributes({MEMORY_LIMIT_KEY: "1Gi"}))
        assert str(result.limits[ResourceName.MEMORY]) == "1Gi"
        assert result.limits[ResourceName.MEMORY] == Quantity.parse("1024Mi")

    def test_empty_quantity_string_skipped(self):
        result = extract_attributes(Attributes({CPU_LIMIT_KEY: ""}))
        assert result.limits == {}

    def test_storage_request(self):
        result = extract_attributes(Attributes({STORAGE_REQUEST_KEY: "5Gi"}))
        assert result.requests == {ResourceName.STORAGE: Quantity.parse("5Gi")}

    def test_scalar_fields(self):
        attrs = Attributes(
            {
                CONTAINER_PORT_KEY: 8080,
                ROUTE_KEY: "my-route",
                REPLICA_KEY: 2,
                CONTAINER_ENV_KEY: [{"name": "A", "value": "1"}, {"name": "B"}],
            }
        )
        result = extract_attributes(attrs)
        assert result.target_port == 8080
        assert result.route == "my-route"
        assert result.replicas == 2
        assert result.env == [EnvVar("A", "1"), EnvVar("B", "")]

    def test_float_number_accepted_when_whole(self):
        assert extract_attributes(Attributes({REPLICA_KEY: 3.0})).replicas == 3

    def test_fractional_number_malformed(self):
        with pytest.raises(MalformedValueError, match="deployment/replicas"):
            extract_attributes(Attributes({REPLICA_KEY: 1.5}))

    @pytest.mark.parametrize("text", ["lots", "NaN", "Infinity", "-Infinity", " 2 ", "1_000"])
    def test_bad_quantity_is_malformed(self, text):
        with pytest.raises(MalformedValueError) as exc_info:
            extract_attributes(Attributes({CPU_LIMIT_KEY: text}))
        assert exc_info.value.key == CPU_LIMIT_KEY
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.parametrize("text", ["1e3", "+1", ".5", "250m", "2E", "3Ti"])
    def test_quantity_grammar_accepted(self, text):
        result = extract_attributes(Attributes({CPU_LIMIT_KEY: text}))
        assert str(result.limits[ResourceName.CPU]) == text

    def test_port_wrong_type_is_malformed(self):
        with pytest.raises(MalformedValueError, match="deployment/containerPort"):
            extract_attributes(Attributes({CONTAINER_PORT_KEY: "8080"}))

    def test_port_not_read_when_disabled(self):
        attrs = Attributes({CONTAINER_PORT_KEY: "8080", REPLICA_KEY: 2})
        result = extract_attributes(attrs, read_port=False)
        assert result.target_port == 0
        assert result.replicas == 2

    def test_route_wrong_type_is_malformed(self):
        with pytest.raises(MalformedValueError, match="deployment/route"):
            extract_attributes(Attributes({ROUTE_KEY: ["a"]}))

    def test_env_wrong_shape_is_malformed(self):
        with pytest.raises(MalformedValueError, match="deployment/containerENV"):
            extract_attributes(Attributes({CONTAINER_ENV_KEY: [{"value": "no-name"}]}))

    def test_unquoted_numeric_quantity_is_malformed(self):
        with pytest.raises(MalformedValueError, match="expected string"):
            extract_attributes(Attributes({CPU_LIMIT_KEY: 2}))


class TestExtractFromDevfile:
    def test_first_kubernetes_component(self, node_devfile_bytes):
        result = extract_from_devfile(parse_devfile(node_devfile_bytes))
        assert result.replicas == 3
        assert result.target_port == 3000
        assert result.route == "my-route"
        assert result.limits == {
            ResourceName.CPU: Quantity.parse("2"),
            ResourceName.MEMORY: Quantity.parse("2Gi"),
        }
        assert result.requests == {
            ResourceName.CPU: Quantity.parse("500m"),
            ResourceName.MEMORY: Quantity.parse("512Mi"),
            ResourceName.STORAGE: Quantity.parse("1Gi"),
        }
        assert result.env == [EnvVar("FOO", "bar"), EnvVar("EMPTY", "")]

    def test_only_first_kubernetes_component_used(self):
        devfile = parse_devfile(
            b"""\
schemaVersion: 2.2.0
components:
  - name: first
    attributes:
      deployment/replicas: 1
    kubernetes: {uri: a.yaml}
  - name: second
    attributes:
      deployment/replicas: 5
    kubernetes: {uri: b.yaml}
"""
        )
        assert extract_from_devfile(devfile).replicas == 1

    def test_no_kubernetes_component(self, plain_devfile_bytes):
        result = extract_from_devfile(parse_devfile(plain_devfile_bytes))
        assert result == ComponentAttributes()

    def test_read_port_disabled(self, node_devfile_bytes):
        result = extract_from_devfile(parse_devfile(node_devfile_bytes), read_port=False)
        assert result.target_port == 0
        assert result.replicas == 3
