"""Component name derivation and sanitization.

A component name must be a valid cluster identifier:
    - at most 63 characters
    - only lowercase alphanumerics or '-'
    - starts with a letter, ends with an alphanumeric
    - never all digits

Names are derived from the git URL + context and then made unique with a
random 4-character suffix. Callers must treat the resulting map as the
authority on uniqueness; names are not reproducible across runs.
"""

from __future__ import annotations

import re
import secrets
import string

from faker import Faker

from stubmapper.models import GitSource

MAX_NAME_LENGTH = 63
SUFFIX_LENGTH = 4
# Room for "-" + suffix
MAX_BASE_LENGTH = MAX_NAME_LENGTH - SUFFIX_LENGTH - 1
NUMERIC_PREFIX = "comp-"

_INVALID_CHARS_RE = re.compile(r"[^a-zA-Z0-9-]")
_ROOT_CONTEXTS = frozenset({"", ".", "./"})
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits

_faker = Faker("en_US")


def random_string(length: int) -> str:
    """Random lowercase alphanumeric token."""
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


def random_noun() -> str:
    return _faker.word(part_of_speech="noun")


def derive_raw_name(git_source: GitSource) -> str:
    """Build the unsanitized component name ``<context>-<repo>``.

    The repository name is the last path segment of the URL with one
    trailing ``/`` and a trailing ``.git`` removed. Root contexts
    (``""``, ``.``, ``./``) add no prefix. An empty URL yields ``""``.
    """
    repo_url = git_source.url
    if not repo_url:
        return ""

    if repo_url.endswith("/"):
        repo_url = repo_url[:-1]
    repo_name = repo_url[repo_url.rfind("/") + 1 :]
    if repo_name.endswith(".git"):
        repo_name = repo_name[: -len(".git")]

    context = git_source.context or ""
    if context in _ROOT_CONTEXTS:
        return repo_name
    return f"{context}-{repo_name}"


def sanitize_component_name(name: str) -> str:
    """Turn ``name`` into a unique, cluster-safe component name."""
    name = _INVALID_CHARS_RE.sub("", name).strip("-")
    # A proper name should never be empty, but fall back to a random noun.
    while not name:
        name = _INVALID_CHARS_RE.sub("", random_noun()).strip("-")

    if name[0].isdigit():
        name = f"{NUMERIC_PREFIX}{name}"
    name = name.lower()

    # Truncation can land right after a hyphen.
    name = name[:MAX_BASE_LENGTH].rstrip("-")

    return f"{name}-{random_string(SUFFIX_LENGTH)}"


def get_component_name(git_source: GitSource) -> str:
    return sanitize_component_name(derive_raw_name(git_source))
