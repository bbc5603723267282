"""Tests for the command-line interface."""

import json
from datetime import date, timedelta

from click.testing import CliRunner

from training_planner.cli import cli


def write_activities(path, days=30):
    start = date(2024, 1, 1) - timedelta(days=days)
    records = [
        {
            "id": i,
            "name": f"Run {i}",
            "sport_type": "Run",
            "start_date_local": f"{(start + timedelta(days=i)).isoformat()}T07:00:00",
            "moving_time": 3600,
            "distance": 10000,
            "average_heartrate": 140 + i % 10,
            "max_heartrate": 180,
        }
        for i in range(days)
    ]
    path.write_text(json.dumps(records))
    return str(path)


class TestCli:
    """Test CLI commands over JSON exports."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_thresholds(self, tmp_path):
        """Thresholds are estimated from the export."""
        path = write_activities(tmp_path / "activities.json")
        result = self.runner.invoke(cli, ["thresholds", "--activities", path])
        assert result.exit_code == 0
        assert "Max HR" in result.output
        assert "180 bpm" in result.output

    def test_metrics_empty_history(self, tmp_path):
        """An empty export reports the no-data recommendation."""
        path = tmp_path / "activities.json"
        path.write_text("[]")
        result = self.runner.invoke(cli, ["metrics", "--activities", str(path)])
        assert result.exit_code == 0
        assert "RECOVER" in result.output

    def test_metrics_wrapped_export(self, tmp_path):
        """Exports may wrap records in an object."""
        path = tmp_path / "activities.json"
        path.write_text(json.dumps({"activities": []}))
        result = self.runner.invoke(cli, ["metrics", "--activities", str(path)])
        assert result.exit_code == 0

    def test_today(self, tmp_path):
        """Today's workout is shown for the reference date."""
        path = write_activities(tmp_path / "activities.json")
        result = self.runner.invoke(cli, ["today", "--activities", path, "--date", "2024-01-01"])
        assert result.exit_code == 0
        assert "Today's Workout" in result.output

    def test_today_with_weather_and_goals(self, tmp_path):
        """Goals and weather reach the recommendation."""
        path = write_activities(tmp_path / "activities.json")
        goals = tmp_path / "goals.json"
        goals.write_text(json.dumps([{"id": 1, "metric_type": "average_pace", "target_value": 5}]))
        result = self.runner.invoke(cli, [
            "today", "--activities", path, "--goals", str(goals),
            "--temperature", "30", "--date", "2024-01-01",
        ])
        assert result.exit_code == 0
        assert "INTERVAL" in result.output
        assert "Pace goal" in result.output

    def test_today_without_history(self, tmp_path):
        """No history falls back to a basic easy run."""
        path = tmp_path / "activities.json"
        path.write_text("[]")
        result = self.runner.invoke(cli, ["today", "--activities", str(path), "--date", "2024-01-01"])
        assert result.exit_code == 0
        assert "EASY" in result.output

    def test_plan_fallback(self, tmp_path):
        """An empty export yields the fallback week."""
        path = tmp_path / "activities.json"
        path.write_text("[]")
        result = self.runner.invoke(cli, ["plan", "--activities", str(path), "--date", "2024-01-01"])
        assert result.exit_code == 0
        assert "BASE" in result.output
        assert "Monday" in result.output
        assert "90 min" in result.output

    def test_plan(self, tmp_path):
        """A week is planned from history."""
        path = write_activities(tmp_path / "activities.json")
        result = self.runner.invoke(cli, [
            "plan", "--activities", path, "--experience", "advanced", "--date", "2024-01-01",
        ])
        assert result.exit_code == 0
        assert "Weekly Plan" in result.output
        assert "Saturday" in result.output

    def test_missing_file(self, tmp_path):
        """Unreadable exports exit non-zero."""
        result = self.runner.invoke(cli, ["metrics", "--activities", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_malformed_json(self, tmp_path):
        """Malformed exports exit non-zero."""
        path = tmp_path / "activities.json"
        path.write_text("{not json")
        result = self.runner.invoke(cli, ["plan", "--activities", str(path)])
        assert result.exit_code == 1

    def test_invalid_record(self, tmp_path):
        """Records without required fields exit non-zero."""
        path = tmp_path / "activities.json"
        path.write_text(json.dumps([{"name": "No start"}]))
        result = self.runner.invoke(cli, ["thresholds", "--activities", str(path)])
        assert result.exit_code == 1

    def test_non_object_records(self, tmp_path):
        """Records that are not objects exit non-zero with an error message."""
        path = tmp_path / "activities.json"
        path.write_text("[5]")
        result = self.runner.invoke(cli, ["metrics", "--activities", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error" in result.output
        assert "objects" in result.output

    def test_mixed_timestamp_forms(self, tmp_path):
        """Exports mixing Z-suffixed and plain local times are accepted."""
        path = tmp_path / "activities.json"
        path.write_text(json.dumps([
            {"start_date_local": "2024-01-01T10:00:00Z", "moving_time": 3600},
            {"start_date_local": "2024-01-02T10:00:00", "moving_time": 3600},
        ]))
        result = self.runner.invoke(cli, ["metrics", "--activities", str(path)])
        assert result.exit_code == 0
        assert "Training Load" in result.output

    def test_weather_options_need_temperature(self, tmp_path):
        """Precipitation or wind without a temperature is rejected."""
        path = tmp_path / "activities.json"
        path.write_text("[]")
        result = self.runner.invoke(cli, ["today", "--activities", str(path), "--wind", "30"])
        assert result.exit_code == 1
        assert "--temperature" in result.output

    def test_today_without_history_adjusted_for_weather(self, tmp_path):
        """The fallback workout is adjusted for the weather too."""
        path = tmp_path / "activities.json"
        path.write_text("[]")
        result = self.runner.invoke(cli, [
            "today", "--activities", str(path), "--temperature", "30", "--date", "2024-01-01",
        ])
        assert result.exit_code == 0
        assert "3/10" in result.output
        assert "High temperature" in result.output

    def test_invalid_date(self, tmp_path):
        """Bad reference dates exit non-zero."""
        path = tmp_path / "activities.json"
        path.write_text("[]")
        result = self.runner.invoke(cli, ["plan", "--activities", str(path), "--date", "01/02/2024"])
        assert result.exit_code == 1
        assert "YYYY-MM-DD" in result.output
