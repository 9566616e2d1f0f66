"""Shared pytest fixtures for stubmapper tests."""

import pytest

from stubmapper.devfile.parser import DevfileData, parse_devfile

NODE_DEVFILE = b"""\
schemaVersion: 2.2.0
metadata:
  name: nodejs
  language: JavaScript
  projectType: Node.js
components:
  - name: runtime
    container:
      image: registry.access.redhat.com/ubi8/nodejs-16:latest
  - name: kubernetes-deploy
    attributes:
      deployment/replicas: 3
      deployment/cpuLimit: "2"
      deployment/memoryLimit: 2Gi
      deployment/cpuRequest: 500m
      deployment/memoryRequest: 512Mi
      deployment/storageRequest: 1Gi
      deployment/containerPort: 3000
      deployment/route: my-route
      deployment/containerENV:
        - name: FOO
          value: bar
        - name: EMPTY
    kubernetes:
      uri: deploy.yaml
"""

PLAIN_DEVFILE = b"""\
schemaVersion: 2.2.0
metadata:
  name: python
  language: Python
  projectType: Python
components:
  - name: py
    container:
      image: quay.io/python:3.11
"""

APP_DEVFILE = """\
schemaVersion: 2.2.0
metadata:
  name: my-app
"""


@pytest.fixture
def node_devfile_bytes() -> bytes:
    return NODE_DEVFILE


@pytest.fixture
def plain_devfile_bytes() -> bytes:
    return PLAIN_DEVFILE


@pytest.fixture
def app_devfile() -> DevfileData:
    return parse_devfile(APP_DEVFILE)
