"""Shared fixtures for sitegraph tests."""

import sys

import pytest

from sitegraph.data_sources import DataSourceRegistry
from sitegraph.data_sources import InlineDataSource
from sitegraph.site import Site


class RecordingDataSource(InlineDataSource):
    """Inline data source that logs its lifecycle and can be told to fail.

    The ``name`` config key labels log entries; ``faults`` (shared with the
    test) names the steps that should raise.
    """

    def __init__(self, events, faults, *args):
        super().__init__(*args)
        self.events = events
        self.faults = faults
        self.name = self.config.get("name", "?")

    def _step(self, step):
        if step in self.faults.get(self.name, ()):
            self.events.append(f"{step}-failed {self.name}")
            raise RuntimeError(f"{step} failed in {self.name}")
        self.events.append(f"{step} {self.name}")

    def up(self):
        self._step("up")

    def down(self):
        self._step("down")

    def items(self):
        self._step("items")
        return super().items()

    def layouts(self):
        self._step("layouts")
        return super().layouts()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every test from an empty directory with a fresh snippet namespace."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    for name in [m for m in sys.modules if m == "sitegraph_lib" or m.startswith("sitegraph_lib.")]:
        monkeypatch.delitem(sys.modules, name)
    return workdir


@pytest.fixture
def events():
    return []


@pytest.fixture
def faults():
    return {}


@pytest.fixture
def registry(events, faults):
    """Registry holding the inline and recording data sources, without entry points."""
    reg = DataSourceRegistry(entry_point_group=None)
    reg.register("inline", InlineDataSource)
    reg.register("recording", lambda *args: RecordingDataSource(events, faults, *args))
    return reg


@pytest.fixture
def make_site(registry):
    """Build a site from a list of data source entries."""

    def _make(data_sources, **config):
        config.setdefault("lib_dirs", [])
        return Site({"data_sources": data_sources, **config}, registry=registry)

    return _make
