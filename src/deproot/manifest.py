"""
deproot.manifest — manifest.json parsing.

manifest.json format:

    {
        "dependencies": {
            "github.com/pkg/errors": {"version": ">=0.8.0"},
            "github.com/Sirupsen/logrus": {"branch": "master"}
        },
        "overrides": {
            "github.com/sdboyer/gps": {"source": "github.com/me/gps"}
        },
        "ignores": ["github.com/foo/bar/internal"]
    }

Constraint values are opaque and kept verbatim. Unknown top-level fields
are preserved in `extra` and written back by write_manifest().
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from deproot.errors import ManifestSyntaxError


MANIFEST_NAME = "manifest.json"

_KNOWN_FIELDS = ("dependencies", "overrides", "ignores")


@dataclass
class Manifest:
    """Parsed manifest.json."""
    dependencies: dict[str, Any] = field(default_factory=dict)
    overrides: dict[str, Any] = field(default_factory=dict)
    ignored: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    # known top-level keys present in the source document
    declared: frozenset[str] = field(
        default=frozenset({"dependencies"}), repr=False, compare=False,
    )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.dependencies or "dependencies" in self.declared:
            data["dependencies"] = dict(self.dependencies)
        if self.overrides or "overrides" in self.declared:
            data["overrides"] = dict(self.overrides)
        if self.ignored or "ignores" in self.declared:
            data["ignores"] = list(self.ignored)
        data.update(self.extra)
        return data


def read_manifest(path: str | Path) -> Manifest:
    """Read and parse a manifest file.

    Raises:
        ManifestSyntaxError: unreadable file, invalid JSON or wrong structure
    """
    p = Path(path)
    try:
        with open(p, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestSyntaxError(p, f"invalid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestSyntaxError(p, f"cannot read manifest: {e}") from e

    return parse_manifest_dict(data, p)


def parse_manifest_dict(data: Any, path: str | Path = MANIFEST_NAME) -> Manifest:
    """Create a Manifest from decoded JSON."""
    if not isinstance(data, dict):
        raise ManifestSyntaxError(
            path, f"manifest must be a JSON object, got {type(data).__name__}"
        )

    dependencies = data.get("dependencies", {})
    if not isinstance(dependencies, dict):
        raise ManifestSyntaxError(path, "dependencies must be an object")

    overrides = data.get("overrides", {})
    if not isinstance(overrides, dict):
        raise ManifestSyntaxError(path, "overrides must be an object")

    ignored = data.get("ignores", [])
    if not isinstance(ignored, list) or not all(isinstance(i, str) for i in ignored):
        raise ManifestSyntaxError(path, "ignores must be a list of strings")

    return Manifest(
        dependencies=dict(dependencies),
        overrides=dict(overrides),
        ignored=list(ignored),
        extra={k: v for k, v in data.items() if k not in _KNOWN_FIELDS},
        declared=frozenset(k for k in _KNOWN_FIELDS if k in data),
    )


def write_manifest(manifest: Manifest, path: str | Path) -> None:
    """Write a manifest file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(manifest.to_dict(), f, indent=4)
        f.write("\n")
