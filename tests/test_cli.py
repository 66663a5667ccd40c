"""
Tests for the command line interface.
"""

import json
import logging

import pytest
import structlog

from jobseeker import cli
from jobseeker.cli import build_parser, main
from jobseeker.scrapers import default_domain_groups


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'jobseeker.db'}"


@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    structlog.reset_defaults()


@pytest.mark.unit
class TestParser:
    """Test argument parsing."""

    def test_list_options(self):
        args = build_parser().parse_args(["list", "-t", "contract", "-s", "discovered", "-l", "5"])

        assert args.command == "list"
        assert args.job_type == "contract"
        assert args.status == "discovered"
        assert args.limit == 5

    def test_rejects_unknown_job_type(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["list", "--type", "internship"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


@pytest.mark.database
@pytest.mark.integration
class TestCommands:
    """Test commands against a temporary SQLite database."""

    @pytest.mark.asyncio
    async def test_init_then_list(self, database_url, capsys):
        base = ["--database", database_url, "--email", "jane@example.com"]

        assert await main(base + ["init", "--name", "Jane Doe"]) == 0
        assert await main(base + ["list"]) == 0

        out = capsys.readouterr().out
        assert "Initialized user: Jane Doe (jane@example.com)" in out
        assert "No jobs found" in out

    @pytest.mark.asyncio
    async def test_scan_requires_init(self, database_url, capsys):
        code = await main(["--database", database_url, "--email", "new@example.com", "scan"])

        assert code == 1
        assert "Run 'jobseeker init' first" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_scan_with_no_enabled_boards(self, database_url, tmp_path, capsys):
        config = tmp_path / "boards.json"
        config.write_text(json.dumps({"job_boards": {"seek": {"enabled": False}}}))
        base = ["--database", database_url, "--email", "jane@example.com"]

        await main(base + ["init"])
        code = await main(base + ["scan", "--config", str(config), "--delay-ms", "0"])

        out = capsys.readouterr().out
        assert code == 0
        assert "No job boards enabled" in out
        assert "Found 0 total jobs (0 new)" in out

    @pytest.mark.asyncio
    async def test_invalid_config_reports_error(self, database_url, tmp_path, capsys):
        config = tmp_path / "boards.json"
        config.write_text("{broken")
        base = ["--database", database_url, "--email", "jane@example.com"]

        await main(base + ["init"])
        code = await main(base + ["scan", "--config", str(config)])

        assert code == 1
        assert "Error loading job boards configuration" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_scan_applies_board_politeness(self, database_url, tmp_path, monkeypatch):
        built = []

        def recording_groups(delay, overrides=None):
            groups = default_domain_groups(delay=delay, overrides=overrides)
            built.extend(groups)
            return groups

        monkeypatch.setattr(cli, "default_domain_groups", recording_groups)
        config = tmp_path / "boards.json"
        config.write_text(json.dumps({"job_boards": {
            "linkedin": {"enabled": False, "delay_ms": 6000, "jitter_ms": 500, "max_concurrent": 2},
        }}))
        base = ["--database", database_url, "--email", "jane@example.com"]

        await main(base + ["init"])
        code = await main(base + ["scan", "--config", str(config), "--delay-ms", "1000"])

        groups = {g.name: g for g in built}
        assert code == 0
        assert groups["linkedin"].delay == 6.0
        assert groups["linkedin"].jitter == 0.5
        assert groups["linkedin"].max_concurrent == 2
        assert groups["seek"].delay == 1.0
