"""Shared fixtures: manifest writers and an in-memory git transport."""

import json
import os

import pytest

from gitpkg.versioning.models import TagRecord


def _write_manifest(directory, data):
    os.makedirs(directory, exist_ok=True)
    with open(os.path.join(directory, "package.json"), "w", encoding="utf-8") as fh:
        json.dump(data, fh)
    return str(directory)


class FakeTransport:
    """GitTransport that serves tags from memory and clones by writing manifests.

    ``repos`` maps url -> {tag: (annotated, commit, manifest_dict)};
    ``branches`` maps url -> {branch: manifest_dict}.
    """

    def __init__(self, repos=None, branches=None, verify_error=None, verify_result=True):
        self.repos = repos or {}
        self.branches = branches or {}
        self.verify_error = verify_error
        self.verify_result = verify_result
        self.calls = []

    def _calls(self, kind):
        return [c for c in self.calls if c[0] == kind]

    @property
    def clones(self):
        return self._calls("clone")

    @property
    def verifies(self):
        return self._calls("verify")

    async def list_tags(self, url):
        self.calls.append(("list_tags", url))
        return {
            tag: TagRecord(annotated=annotated, commit=commit)
            for tag, (annotated, commit, _) in self.repos.get(url, {}).items()
        }

    async def clone(self, ref, url, dest):
        self.calls.append(("clone", ref, url, dest))
        if ref in self.repos.get(url, {}):
            manifest = self.repos[url][ref][2]
        else:
            manifest = self.branches[url][ref]
        _write_manifest(dest, manifest)
        return True

    async def verify(self, tag, commit, dest):
        self.calls.append(("verify", tag, commit, dest))
        if self.verify_error is not None:
            raise self.verify_error
        return self.verify_result


@pytest.fixture
def write_manifest():
    """Return a helper writing a package.json into a directory."""
    return _write_manifest


@pytest.fixture
def fake_transport():
    """Return the FakeTransport class for per-test construction."""
    return FakeTransport
