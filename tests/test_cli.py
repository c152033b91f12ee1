"""Tests for the sitegraph command line."""

import json

import pytest
import yaml
from click.testing import CliRunner

from sitegraph.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def site_dir(tmp_path):
    directory = tmp_path / "site"
    directory.mkdir()
    config = {
        "data_sources": [
            {
                "type": "inline",
                "items": [
                    {"identifier": "/", "attributes": {"title": "Home"}},
                    {"identifier": "/about/"},
                ],
                "layouts": [{"identifier": "/default/"}],
            },
            {"type": "inline", "items_root": "/blog/", "items": [{"identifier": "/post1/"}]},
        ]
    }
    (directory / "sitegraph.yaml").write_text(yaml.safe_dump(config))
    return directory


class TestCheck:
    def test_check_reports_counts(self, runner, site_dir):
        result = runner.invoke(cli, ["--site-dir", str(site_dir), "check"])

        assert result.exit_code == 0, result.output
        assert "Site loaded" in result.output
        assert "items:         3" in result.output
        assert "layouts:       1" in result.output

    def test_missing_config(self, runner, tmp_path):
        result = runner.invoke(cli, ["--site-dir", str(tmp_path), "check"])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output

    def test_duplicate_identifier(self, runner, site_dir):
        (site_dir / "sitegraph.yaml").write_text(
            yaml.safe_dump(
                {
                    "data_sources": [
                        {"type": "inline", "items": [{"identifier": "/about/"}]},
                        {"type": "inline", "items": [{"identifier": "/about/"}]},
                    ]
                }
            )
        )

        result = runner.invoke(cli, ["-C", str(site_dir), "check"])

        assert result.exit_code == 1
        assert "Duplicate Identifier" in result.output

    def test_unknown_data_source(self, runner, site_dir):
        (site_dir / "sitegraph.yaml").write_text("data_sources:\n  - type: no-such-source\n")

        result = runner.invoke(cli, ["-C", str(site_dir), "check"])

        assert result.exit_code == 1
        assert "Unknown Data Source" in result.output


class TestShowData:
    def test_tree_and_layouts(self, runner, site_dir):
        result = runner.invoke(cli, ["-C", str(site_dir), "show-data"])

        assert result.exit_code == 0, result.output
        assert "/about/" in result.output
        assert "/blog/post1/" in result.output
        assert "Home" in result.output
        assert "/default/" in result.output


class TestShowConfig:
    def test_resolved_yaml(self, runner, site_dir):
        result = runner.invoke(cli, ["-C", str(site_dir), "show-config"])

        assert result.exit_code == 0, result.output
        config = yaml.safe_load(result.output)
        assert config["output_dir"] == "output"
        assert config["data_sources"][1]["items_root"] == "/blog/"
        assert config["data_sources"][1]["layouts_root"] == "/"


class TestCompile:
    def test_compile(self, runner, site_dir):
        result = runner.invoke(cli, ["-C", str(site_dir), "compile"])

        assert result.exit_code == 0, result.output
        assert "Compiled 3 items" in result.output


class TestLogFile:
    def test_log_file_receives_jsonl(self, runner, site_dir, tmp_path):
        import logging

        from sitegraph.logging_setup import JsonlHandler

        log_path = tmp_path / "logs" / "run.jsonl"
        root = logging.getLogger()
        level = root.level
        try:
            result = runner.invoke(cli, ["-C", str(site_dir), "--log-file", str(log_path), "check"])
        finally:
            for handler in list(root.handlers):
                if isinstance(handler, JsonlHandler):
                    root.removeHandler(handler)
                    handler.close()
            root.setLevel(level)

        assert result.exit_code == 0, result.output
        records = [json.loads(line) for line in log_path.read_text().splitlines()]
        (loaded,) = [r for r in records if r["message"].startswith("Loaded site with 3 items")]
        assert loaded["site_dir"] == str(site_dir.resolve())
