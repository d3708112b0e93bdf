"""
Unit tests for the command-line entry point

Each test runs ``main`` against a temporary data directory with the
``test`` environment.
"""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import pandas as pd

from helpdesk import run
from helpdesk.config import apply_overrides, load_helpdesk_config
from helpdesk.domains.insights.models import Recommendation
from tests.fixtures.sample_data import write_sample_csv


class TestMain(unittest.TestCase):
    """Test suite for CLI commands."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.config = apply_overrides(
            load_helpdesk_config("test"),
            {"data_dir": str(self.test_dir / "data")},
        )
        patcher = patch("helpdesk.run.load_config", return_value=self.config)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.workspace = run.open_workspace(self.config)

    def tearDown(self):
        """Clean up test fixtures."""
        if self.test_dir.exists():
            shutil.rmtree(self.test_dir)

    def test_upload_saves_tickets(self):
        csv = write_sample_csv(self.test_dir)
        self.assertEqual(run.main(["--env", "test", "--upload", str(csv)]), 0)
        self.assertEqual([t.id for t in self.workspace.repository.load()], ["1", "2", "3"])

    def test_upload_empty_file_fails(self):
        empty = self.test_dir / "empty.csv"
        empty.write_text("")
        self.assertEqual(run.main(["--env", "test", "--upload", str(empty)]), 1)
        self.assertEqual(self.workspace.repository.load(), [])

    def test_upload_unsupported_file_fails(self):
        notes = self.test_dir / "notes.txt"
        notes.write_text("hello")
        self.assertEqual(run.main(["--env", "test", "--upload", str(notes)]), 1)

    def test_validate(self):
        run.main(["--env", "test", "--upload", str(write_sample_csv(self.test_dir))])
        self.assertEqual(run.main(["--env", "test", "--validate"]), 0)

    def test_reset(self):
        run.main(["--env", "test", "--demo"])
        self.assertTrue(self.workspace.repository.load())
        self.assertEqual(run.main(["--env", "test", "--reset"]), 0)
        self.assertEqual(self.workspace.repository.load(), [])

    def test_empty_store_without_demo(self):
        self.assertEqual(run.load_tickets(self.workspace), ([], False))
        self.assertEqual(run.main(["--env", "test", "--range", "all"]), 0)

    @patch("helpdesk.run.print_dashboard")
    def test_saved_tickets_default_to_all_time(self, mock_dashboard):
        """Test that a later run over a saved export reports all time."""
        run.main(["--env", "test", "--upload", str(write_sample_csv(self.test_dir))])
        self.assertEqual(run.main(["--env", "test"]), 0)

        report = mock_dashboard.call_args.args[0]
        self.assertEqual(report["label"], "All Time")
        self.assertEqual(report["stats"].total, 3)

    @patch("helpdesk.run.print_dashboard")
    def test_explicit_range_wins_over_saved_default(self, mock_dashboard):
        run.main(["--env", "test", "--upload", str(write_sample_csv(self.test_dir))])
        run.main(["--env", "test", "--range", "last-7-days"])

        report = mock_dashboard.call_args.args[0]
        self.assertEqual(report["label"], "Last 7 Days")

    @patch("helpdesk.run.print_dashboard")
    def test_demo_fallback_uses_configured_range(self, mock_dashboard):
        demo_config = apply_overrides(self.config, {"demo_on_empty": True})
        with patch("helpdesk.run.load_config", return_value=demo_config):
            self.assertEqual(run.main(["--env", "test"]), 0)

        report = mock_dashboard.call_args.args[0]
        self.assertEqual(report["label"], "Last 30 Days")
        self.assertEqual(self.workspace.repository.load(), [])

    def test_save_llm_settings(self):
        run.main(["--env", "test", "--provider", "custom", "--model", "llama3",
                  "--base-url", "http://localhost:11434/v1"])
        settings = run.load_llm_settings(self.workspace)
        self.assertEqual(settings.provider, "custom")
        self.assertEqual(settings.model, "llama3")
        self.assertEqual(settings.base_url, "http://localhost:11434/v1")

    def test_export_agents(self):
        csv = write_sample_csv(self.test_dir)
        out = self.test_dir / "agents.csv"
        self.assertEqual(
            run.main(["--env", "test", "--upload", str(csv), "--export", str(out)]),
            0,
        )
        frame = pd.read_csv(out)
        self.assertEqual(list(frame["email"]), ["a@corp.com", "b@corp.com", "c@corp.com"])

    @patch("helpdesk.run.InsightClient.generate_insights")
    def test_insights_are_cached(self, mock_generate):
        mock_generate.return_value = Recommendation(
            summary="ok",
            period_context="Insights for All Time",
            resource_allocation="-",
            ticket_reduction_strategy="-",
        )
        csv = write_sample_csv(self.test_dir)
        run.main(["--env", "test", "--upload", str(csv), "--insights"])
        run.main(["--env", "test", "--range", "all", "--insights"])
        mock_generate.assert_called_once()


class TestLoadConfig(unittest.TestCase):
    """Test suite for the yaml override file."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_yaml_override(self):
        path = self.test_dir / "helpdesk.yaml"
        path.write_text("top_n: 5\nllm:\n  model: llama3.1\n")
        config = run.load_config("development", override_path=path)
        self.assertEqual(config.top_n, 5)
        self.assertEqual(config.llm.model, "llama3.1")

    def test_missing_yaml(self):
        config = run.load_config("test", override_path=self.test_dir / "absent.yaml")
        self.assertEqual(config.top_n, 10)


if __name__ == "__main__":
    unittest.main()
