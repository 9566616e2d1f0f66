"""On-disk scan document schema (input of ``stubmapper detect``)."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from stubmapper.models import GitSource, ScanResult


class GitSourceSchema(BaseModel):
    url: str = ""
    revision: str | None = None

    @field_validator("url", mode="before")
    @classmethod
    def _strip_whitespace(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v


class ContextScanSchema(BaseModel):
    """What the repository scan found in one context."""

    devfile: str | None = None
    devfile_path: str | None = None
    devfile_url: str | None = None
    dockerfile_url: str | None = None
    ports: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def _single_devfile_source(self) -> ContextScanSchema:
        if self.devfile is not None and self.devfile_path is not None:
            raise ValueError("set either devfile or devfile_path, not both")
        return self


class ScanDocument(BaseModel):
    git_source: GitSourceSchema
    contexts: dict[str, ContextScanSchema] = Field(default_factory=dict)

    def to_git_source(self) -> GitSource:
        return GitSource(url=self.git_source.url, revision=self.git_source.revision)

    def to_scan_result(self, base_dir: Path) -> ScanResult:
        """Build a ScanResult, reading ``devfile_path`` entries relative to ``base_dir``."""
        scan = ScanResult()
        for context, entry in self.contexts.items():
            if entry.devfile is not None:
                scan.devfiles[context] = entry.devfile.encode("utf-8")
            elif entry.devfile_path is not None:
                scan.devfiles[context] = (base_dir / entry.devfile_path).read_bytes()
            if entry.devfile_url:
                scan.devfile_urls[context] = entry.devfile_url
            if entry.dockerfile_url:
                scan.dockerfile_urls[context] = entry.dockerfile_url
            if entry.ports:
                scan.component_ports[context] = list(entry.ports)
        return scan


def load_scan_document(path: Path) -> ScanDocument:
    """Load a JSON or YAML scan document.

    Raises yaml.YAMLError or pydantic.ValidationError on bad input.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return ScanDocument.model_validate(data)
