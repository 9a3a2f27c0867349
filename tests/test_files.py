"""
tests/test_files.py — manifest.json / lock.json tests.

Parse, structural validation, write, unknown-field preservation,
project discovery helpers.
"""

import os
import sys
import json
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from deproot.errors import (
    ManifestSyntaxError, LockSyntaxError, LockUnreadable, NoManifestFound,
)
from deproot.lock import Lock, LockedProject, read_lock, write_lock, parse_lock_dict
from deproot.manifest import Manifest, read_manifest, write_manifest, parse_manifest_dict
from deproot.project import find_project_root, read_project_files
from deproot.version import VersionKind, new_branch, new_revision, new_tag


REV = "645ef00459ed84a119197bfb8d8205042c6df63d"


def _write(path, content) -> str:
    with open(path, "w") as f:
        if isinstance(content, (dict, list)):
            json.dump(content, f)
        else:
            f.write(content)
    return str(path)


# ─────────────────────────────────────────────
# MANIFEST
# ─────────────────────────────────────────────
class TestManifest:
    def test_parse(self, tmp_path):
        path = _write(tmp_path / "manifest.json", {
            "dependencies": {
                "github.com/pkg/errors": {"version": ">=0.8.0"},
                "github.com/Sirupsen/logrus": {"branch": "master"},
            },
            "overrides": {"github.com/sdboyer/gps": {"source": "github.com/me/gps"}},
            "ignores": ["github.com/foo/bar"],
        })
        m = read_manifest(path)
        assert m.dependencies["github.com/pkg/errors"] == {"version": ">=0.8.0"}
        assert "github.com/sdboyer/gps" in m.overrides
        assert m.ignored == ["github.com/foo/bar"]

    def test_empty_object(self, tmp_path):
        m = read_manifest(_write(tmp_path / "manifest.json", "{}"))
        assert m.dependencies == {}

    def test_constraints_are_opaque(self):
        m = parse_manifest_dict({"dependencies": {"a/b": "^1.2", "c/d": [1, None]}})
        assert m.dependencies == {"a/b": "^1.2", "c/d": [1, None]}

    @pytest.mark.parametrize("content", [
        ' "dependencies":{} ',
        "",
        "[]",
        '{"dependencies": []}',
        '{"overrides": "x"}',
        '{"ignores": [1]}',
    ])
    def test_syntax_errors(self, tmp_path, content):
        path = _write(tmp_path / "manifest.json", content)
        with pytest.raises(ManifestSyntaxError) as exc:
            read_manifest(path)
        assert str(tmp_path) in str(exc.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestSyntaxError, match="cannot read"):
            read_manifest(tmp_path / "manifest.json")

    def test_unknown_fields_round_trip(self, tmp_path):
        data = {
            "dependencies": {"a/b": {"version": "1.0"}},
            "required": ["x/y"],
            "meta": {"nested": [1, 2, 3]},
        }
        path = _write(tmp_path / "manifest.json", data)
        m = read_manifest(path)
        assert m.extra == {"required": ["x/y"], "meta": {"nested": [1, 2, 3]}}

        out = tmp_path / "out.json"
        write_manifest(m, out)
        assert json.loads(out.read_text()) == data

    def test_known_fields_round_trip_as_read(self, tmp_path):
        data = {"overrides": {}, "ignores": [], "required": ["x"]}
        m = read_manifest(_write(tmp_path / "manifest.json", data))

        out = tmp_path / "out.json"
        write_manifest(m, out)
        assert json.loads(out.read_text()) == data

    def test_new_manifest_writes_dependencies(self, tmp_path):
        out = tmp_path / "manifest.json"
        write_manifest(Manifest(), out)
        assert json.loads(out.read_text()) == {"dependencies": {}}


# ─────────────────────────────────────────────
# LOCK
# ─────────────────────────────────────────────
class TestLock:
    def test_parse_empty(self, tmp_path):
        lock = read_lock(_write(tmp_path / "lock.json", {"memo": "abc", "projects": []}))
        assert lock.memo == "abc"
        assert lock.projects == []

    def test_parse_projects(self, tmp_path):
        lock = read_lock(_write(tmp_path / "lock.json", {
            "memo": "abc",
            "projects": [
                {"name": "github.com/pkg/errors", "version": "v0.8.0",
                 "revision": REV, "packages": ["."]},
                {"name": "github.com/a/b", "branch": "master", "revision": REV,
                 "source": "github.com/me/b"},
                {"name": "github.com/c/d", "revision": REV},
            ],
        }))
        errors, ab, cd = lock.projects

        assert errors.version.kind is VersionKind.TAG
        assert errors.version.name == "v0.8.0"
        assert errors.version.revision == REV
        assert errors.packages == ["."]

        assert ab.version.kind is VersionKind.BRANCH
        assert ab.source == "github.com/me/b"

        assert cd.version.kind is VersionKind.REVISION
        assert lock.get("github.com/c/d") is cd
        assert lock.get("missing") is None

    def test_order_preserved(self):
        names = ["z/z", "a/a", "m/m"]
        lock = parse_lock_dict({
            "memo": "",
            "projects": [{"name": n, "revision": REV} for n in names],
        })
        assert [p.name for p in lock.projects] == names

    @pytest.mark.parametrize("data", [
        ' "memo":"x","projects":[] ',
        "null",
        '{"memo": 5}',
        '{"projects": {}}',
        '{"projects": ["x"]}',
        '{"projects": [{"revision": "abc"}]}',
        '{"projects": [{"name": "a/b"}]}',
        '{"projects": [{"name": "a/b", "branch": "m", "version": "v1", "revision": "abc"}]}',
        '{"projects": [{"name": "a/b", "revision": 5}]}',
        '{"projects": [{"name": "a/b", "revision": "abc", "packages": "."}]}',
    ])
    def test_syntax_errors(self, tmp_path, data):
        path = _write(tmp_path / "lock.json", data)
        with pytest.raises(LockSyntaxError):
            read_lock(path)

    def test_unreadable(self, tmp_path):
        (tmp_path / "lock.json").mkdir()
        with pytest.raises(LockUnreadable):
            read_lock(tmp_path / "lock.json")

    def test_unreadable_is_a_lock_error(self):
        assert issubclass(LockUnreadable, LockSyntaxError)

    def test_write_and_read(self, tmp_path):
        lock = Lock(
            memo="cdafe864",
            projects=[
                LockedProject("github.com/pkg/errors", new_tag("v0.8.0").bind(REV)),
                LockedProject("github.com/a/b", new_branch("dev").bind(REV),
                              source="github.com/me/b", packages=[".", "sub"]),
                LockedProject("github.com/c/d", new_revision(REV),
                              extra={"custom": True}),
            ],
            extra={"solver": "gps"},
        )
        path = tmp_path / "lock.json"
        write_lock(lock, path)
        assert read_lock(path) == lock

        data = json.loads(path.read_text())
        assert data["solver"] == "gps"
        assert data["projects"][0] == {
            "name": "github.com/pkg/errors", "version": "v0.8.0", "revision": REV,
        }
        assert data["projects"][2]["custom"] is True

    def test_memo_untouched(self, tmp_path):
        memo = "not-even-hex!"
        lock = read_lock(_write(tmp_path / "lock.json", {"memo": memo, "projects": []}))
        assert lock.memo == memo


# ─────────────────────────────────────────────
# DISCOVERY
# ─────────────────────────────────────────────
class TestFindProjectRoot:
    def test_found_at_start(self, tmp_path):
        _write(tmp_path / "manifest.json", "{}")
        assert find_project_root(tmp_path) == tmp_path

    def test_found_above(self, tmp_path):
        _write(tmp_path / "manifest.json", "{}")
        deep = tmp_path / "a" / "b" / "c"
        deep.mkdir(parents=True)
        assert find_project_root(deep) == tmp_path

    def test_nearest_wins(self, tmp_path):
        _write(tmp_path / "manifest.json", "{}")
        (tmp_path / "inner").mkdir()
        _write(tmp_path / "inner" / "manifest.json", "{}")
        assert find_project_root(tmp_path / "inner") == tmp_path / "inner"

    def test_directory_named_manifest_ignored(self, tmp_path):
        (tmp_path / "proj" / "manifest.json").mkdir(parents=True)
        with pytest.raises(NoManifestFound):
            find_project_root(tmp_path / "proj", stop_at=tmp_path)

    def test_stop_at(self, tmp_path):
        _write(tmp_path / "manifest.json", "{}")
        deep = tmp_path / "a" / "b"
        deep.mkdir(parents=True)
        with pytest.raises(NoManifestFound):
            find_project_root(deep, stop_at=tmp_path / "a")
        assert find_project_root(deep, stop_at=tmp_path) == tmp_path

    def test_read_project_files_without_lock(self, tmp_path):
        _write(tmp_path / "manifest.json", '{"dependencies": {"a/b": {}}}')
        manifest, lock = read_project_files(tmp_path)
        assert manifest.dependencies == {"a/b": {}}
        assert lock is None

    def test_valid_manifest_invalid_lock(self, tmp_path):
        _write(tmp_path / "manifest.json", "{}")
        _write(tmp_path / "lock.json", "{")
        with pytest.raises(LockSyntaxError):
            read_project_files(tmp_path)
