"""Tests for the command line entry point"""
from unittest.mock import patch

import pytest

from turtle_farm.farm import FarmOrchestrator
from turtle_farm.main import load_factory, main, parse_args
from turtle_farm.simulator import build_demo_world


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])

        assert args.cycles is None
        assert args.growth_wait is None
        assert args.turtle is None
        assert args.json_logs is False

    def test_options(self):
        args = parse_args(["--cycles", "3", "--growth-wait", "1.5", "--turtle", "pkg.mod:make"])

        assert args.cycles == 3
        assert args.growth_wait == 1.5
        assert args.turtle == "pkg.mod:make"


class TestLoadFactory:
    def test_resolves_callable(self):
        assert load_factory("turtle_farm.simulator:build_demo_world") is build_demo_world

    @pytest.mark.parametrize("spec", ["turtle_farm.simulator", ":factory", "turtle_farm.simulator:"])
    def test_rejects_malformed(self, spec):
        with pytest.raises(ValueError, match="module:callable"):
            load_factory(spec)


@pytest.mark.usefixtures("clean_logging")
class TestMain:
    """Test exit codes of full runs"""

    @pytest.fixture(autouse=True)
    def isolated(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TURTLE_FARM_LOG_DIR", str(tmp_path / "logs"))

    def test_simulated_cycle_succeeds(self, tmp_path):
        exit_code = main(["--cycles", "1", "--growth-wait", "0"])

        assert exit_code == 0
        assert list((tmp_path / "logs").glob("turtle_farm_*.log"))

    def test_fatal_error_exits_with_one(self):
        exit_code = main(["--cycles", "1", "--turtle", "mocks:short_on_saplings"])

        assert exit_code == 1

    def test_interrupt_exits_with_130(self):
        with patch.object(FarmOrchestrator, "run", side_effect=KeyboardInterrupt):
            exit_code = main(["--cycles", "1"])

        assert exit_code == 130
