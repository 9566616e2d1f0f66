"""Tests for attaching components to an application devfile."""

from __future__ import annotations

import pytest

from stubmapper.devfile.attributes import Attributes
from stubmapper.devfile.parser import DevfileProject, parse_devfile
from stubmapper.errors import DuplicateNameError, InvalidSourceError, MalformedValueError
from stubmapper.models import ComponentSource, ComponentSpec, GitSource
from stubmapper.updater import attach_component, container_image_key


def _git_component(name: str, url: str = "https://github.com/org/repo") -> ComponentSpec:
    return ComponentSpec(
        component_name=name,
        application="my-app",
        source=ComponentSource(git_source=GitSource(url=url)),
    )


def _image_component(name: str, image: str) -> ComponentSpec:
    return ComponentSpec(
        component_name=name,
        application="my-app",
        source=ComponentSource(container_image=image),
    )


class TestAttachGit:
    def test_adds_project(self, app_devfile):
        attach_component(app_devfile, _git_component("svc1"))
        assert app_devfile.get_projects() == [
            DevfileProject(name="svc1", remotes={"origin": "https://github.com/org/repo"})
        ]

    def test_second_distinct_project(self, app_devfile):
        attach_component(app_devfile, _git_component("svc1"))
        attach_component(app_devfile, _git_component("svc2", "https://github.com/org/other"))
        assert [p.name for p in app_devfile.get_projects()] == ["svc1", "svc2"]

    def test_duplicate_rejected_unchanged(self, app_devfile):
        attach_component(app_devfile, _git_component("svc1"))
        before = app_devfile.to_yaml()
        with pytest.raises(DuplicateNameError, match="already has a component with name svc1"):
            attach_component(app_devfile, _git_component("svc1", "https://github.com/org/other"))
        assert app_devfile.to_yaml() == before


class TestAttachImage:
    def test_writes_attribute(self, app_devfile):
        attach_component(app_devfile, _image_component("svc1", "quay.io/org/svc1:latest"))
        assert app_devfile.attributes.get_string("containerImage/svc1").value == (
            "quay.io/org/svc1:latest"
        )

    def test_duplicate_rejected_unchanged(self, app_devfile):
        attach_component(app_devfile, _image_component("svc1", "quay.io/org/svc1:latest"))
        before = app_devfile.to_yaml()
        with pytest.raises(DuplicateNameError, match="svc1"):
            attach_component(app_devfile, _image_component("svc1", "quay.io/org/other:1.0"))
        assert app_devfile.to_yaml() == before

    def test_keeps_existing_attributes(self):
        devfile = parse_devfile(
            "schemaVersion: 2.2.0\nattributes:\n  gitOpsRepository.url: https://gitops\n"
        )
        attach_component(devfile, _image_component("svc1", "img"))
        assert devfile.attributes.to_dict() == {
            "gitOpsRepository.url": "https://gitops",
            "containerImage/svc1": "img",
        }

    def test_empty_existing_value_is_not_duplicate(self, app_devfile):
        app_devfile.set_attributes(Attributes({container_image_key("svc1"): ""}))
        attach_component(app_devfile, _image_component("svc1", "img"))
        assert app_devfile.attributes["containerImage/svc1"] == "img"

    def test_malformed_existing_value(self, app_devfile):
        app_devfile.set_attributes(Attributes({container_image_key("svc1"): {"nested": 1}}))
        before = app_devfile.to_yaml()
        with pytest.raises(MalformedValueError):
            attach_component(app_devfile, _image_component("svc1", "img"))
        assert app_devfile.to_yaml() == before

    def test_git_project_and_image_namespaces_independent(self, app_devfile):
        attach_component(app_devfile, _git_component("svc1"))
        attach_component(app_devfile, _image_component("svc1", "img"))
        assert [p.name for p in app_devfile.get_projects()] == ["svc1"]
        assert app_devfile.attributes["containerImage/svc1"] == "img"


class TestAttachInvalidSource:
    def test_no_source(self, app_devfile):
        before = app_devfile.to_dict()
        component = ComponentSpec(component_name="svc1", application="my-app")
        with pytest.raises(InvalidSourceError, match="component source is nil"):
            attach_component(app_devfile, component)
        assert app_devfile.to_dict() == before
        assert app_devfile.attributes is None

    def test_empty_image_is_no_source(self, app_devfile):
        with pytest.raises(InvalidSourceError):
            attach_component(app_devfile, _image_component("svc1", ""))

    def test_both_sources_rejected_at_construction(self):
        with pytest.raises(ValueError, match="not both"):
            ComponentSource(git_source=GitSource(url="https://h/r"), container_image="img")
