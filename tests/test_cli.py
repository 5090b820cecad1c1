"""Tests for the command line interface."""

import json

import pytest

from progress_analytics.cli import build_parser, main


@pytest.fixture
def snapshot_file(tmp_path, bench_history):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({
        "workouts": bench_history,
        "measurements": [
            {"type": "body_weight", "value": 80, "unit": "kg", "date": "2024-06-01"},
            {"type": "body_weight", "value": 79, "unit": "kg", "date": "2024-06-10"},
        ],
    }))
    return path


class TestParser:
    def test_period_choices(self):
        args = build_parser().parse_args(["trends", "snap.json", "--period", "quarter"])

        assert args.command == "trends"
        assert args.period == "quarter"
        assert args.snapshot == "snap.json"

    def test_unknown_period_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["trends", "snap.json", "--period", "decade"])


class TestMain:
    """Tests for command dispatch and exit codes."""

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_report_prints_json(self, snapshot_file, capsys):
        assert main(["report", str(snapshot_file)]) == 0

        report = json.loads(capsys.readouterr().out)
        assert len(report["personalRecords"]) == 7
        assert report["measurementStats"]["totalMeasurements"] == 2

    @pytest.mark.parametrize("command", ["records", "progress", "trends", "stats", "insights"])
    def test_table_commands(self, command, snapshot_file):
        assert main([command, str(snapshot_file)]) == 0

    def test_stats_with_gender(self, snapshot_file):
        assert main(["stats", str(snapshot_file), "--gender", "female"]) == 0

    def test_missing_file(self, tmp_path):
        assert main(["records", str(tmp_path / "missing.json")]) == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        assert main(["records", str(path)]) == 1

    def test_non_object_entries_are_skipped(self, tmp_path, bench_history, capsys):
        path = tmp_path / "noisy.json"
        path.write_text(json.dumps({
            "workouts": bench_history + ["garbage", None],
            "measurements": [None, {"type": "waist", "value": 85, "date": "2024-06-01"}],
        }))

        assert main(["report", str(path)]) == 0

        report = json.loads(capsys.readouterr().out)
        assert len(report["personalRecords"]) == 7
        assert report["measurementStats"]["totalMeasurements"] == 1


class TestValidateCommand:
    """Tests for range-checking a single value."""

    def test_valid_value(self, capsys):
        assert main(["validate", "body_weight", "82.5"]) == 0
        assert "within range" in capsys.readouterr().out

    def test_out_of_range(self, capsys):
        assert main(["validate", "body_weight", "500"]) == 2

        out = capsys.readouterr().out
        assert "MEASUREMENT_VALIDATION_ERROR" in out
        assert "Value must not exceed 300 kg" in out

    def test_unknown_type(self, capsys):
        assert main(["validate", "height", "180"]) == 2
        assert "UNKNOWN_MEASUREMENT_TYPE" in capsys.readouterr().out

    def test_takes_no_snapshot(self):
        args = build_parser().parse_args(["validate", "waist", "90"])

        assert args.value == 90.0
        assert not hasattr(args, "snapshot")
