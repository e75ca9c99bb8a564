"""Read and validate the YAML organization declaration."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path

import yaml
from pydantic import ValidationError

from orgsync.config.errors import DeclarationError
from orgsync.domain.model import OrganizationDeclaration

log = getLogger(__name__)


def parse_declaration(content: str, *, source: str = "<string>") -> OrganizationDeclaration:
    """Parse YAML ``content`` into a validated declaration.

    An empty document, or one that leaves top-level lists blank, yields empty
    collections rather than an error.
    """

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise DeclarationError(f"Invalid YAML in {source}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DeclarationError(f"Expected a mapping at the top of {source}")

    try:
        return OrganizationDeclaration.model_validate(data)
    except ValidationError as exc:
        raise DeclarationError(f"Invalid declaration in {source}:\n{exc}") from exc


def read_declaration_file(path: str | Path) -> OrganizationDeclaration:
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DeclarationError(f"Cannot read declaration file {file_path}: {exc}") from exc
    log.debug("declaration file content: path=%s\n%s", file_path, content)
    return parse_declaration(content, source=str(file_path))
