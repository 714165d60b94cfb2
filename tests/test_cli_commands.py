import json

from typer.testing import CliRunner

from panchangam.cli import ConsoleSink, app
from panchangam.config import Settings
from panchangam.present import PresentationSink

runner = CliRunner()


def test_show_text(sample_file):
    result = runner.invoke(app, ["show", "--source", str(sample_file), "--now", "2025/12/05 12:00"])
    assert result.exit_code == 0, result.output
    assert "Current : Prathama" in result.stdout
    assert "12 hours 56 minutes remaining" in result.stdout
    assert "Samvatsaram : Vishwaavasu" in result.stdout


def test_show_json(sample_file):
    result = runner.invoke(
        app, ["show", "--source", str(sample_file), "--now", "2025/12/05 13:20", "--json"]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["status"] == "ok"
    # 13:20 is the Siddha/Sadhya boundary: the new yogam has started
    assert data["categories"]["yogam"]["current"] == "Sadhya"
    assert data["categories"]["yogam"]["next"] == "–"
    assert data["backend_timestamp"] == "2025/12/02 04:45:42"


def test_show_uses_configured_location(sample_file):
    result = runner.invoke(
        app,
        ["--set", f"source.location={sample_file}", "show", "--now", "2025/12/05 12:00", "--json"],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["categories"]["karanam"]["current"] == "Vanija"


def test_show_missing_source(tmp_path):
    result = runner.invoke(app, ["show", "--source", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    assert "Error loading panchangam data." in result.stdout


def test_show_empty_source(tmp_path):
    empty = tmp_path / "empty.txt"
    empty.write_text("\n\n")
    result = runner.invoke(app, ["show", "--source", str(empty), "--json"])
    assert result.exit_code == 1
    assert json.loads(result.stdout)["status"] == "error"


def test_show_rejects_bad_now(sample_file):
    result = runner.invoke(app, ["show", "--source", str(sample_file), "--now", "tomorrow"])
    assert result.exit_code != 0


def test_intervals(sample_file):
    result = runner.invoke(app, ["intervals", "Yogam", "--source", str(sample_file)])
    assert result.exit_code == 0, result.output
    lines = result.stdout.strip().splitlines()
    assert lines == [
        "Siddha  2025/12/04 16:00 -> 2025/12/05 13:20",
        "Sadhya  2025/12/05 13:20 -> 2025/12/06 09:31",
    ]


def test_intervals_unknown_category(sample_file):
    result = runner.invoke(app, ["intervals", "rahukalam", "--source", str(sample_file)])
    assert result.exit_code != 0


def test_check_clean(sample_file):
    result = runner.invoke(app, ["check", "--source", str(sample_file)])
    assert result.exit_code == 0, result.output
    assert "non-overlapping" in result.stdout


def test_check_reports_overlap(tmp_path):
    path = tmp_path / "overlap.txt"
    path.write_text(
        "Karanam details:\n"
        "Bava: 2025/12/05 11:26 to 2025/12/05 21:30\n"
        "Balava: 2025/12/05 20:00 to 2025/12/06 08:00\n"
    )
    result = runner.invoke(app, ["check", "--source", str(path)])
    assert result.exit_code == 1
    assert "karanam: #1 Balava: overlaps preceding Bava" in result.stdout


def test_bad_override_key(sample_file):
    result = runner.invoke(app, ["--set", "nosuch.key=1", "show", "--source", str(sample_file)])
    assert result.exit_code != 0


def test_config_file(tmp_path, sample_file):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"source": {"location": str(sample_file)}, "display": {"not_in_range": "n/a"}}))
    result = runner.invoke(app, ["--config", str(cfg), "show", "--now", "2030/01/01 00:00", "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["categories"]["tithi"]["current"] == "n/a"


def test_override_values_are_coerced_by_settings(sample_file):
    result = runner.invoke(
        app,
        [
            "--set", f"source.location={sample_file}",
            "--set", "timezone.target_offset=+05:45",
            "--set", "source.timeout=2.5",
            "intervals", "tithi",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Pournami  2025/12/04 07:49 -> 2025/12/05 04:59" in result.stdout


def test_override_section_label(sample_file):
    result = runner.invoke(
        app,
        ["--set", "layout.sections.yogam=Karanam details", "intervals", "yogam", "--source", str(sample_file)],
    )
    assert result.exit_code == 0, result.output
    assert "Vanija" in result.stdout
    assert "Siddha" not in result.stdout


def test_override_rejects_unknown_or_partial_keys(sample_file):
    for override in ["timezone=330", "display.nosuch=x", "layout.sections.other=X", "=x", "source.location"]:
        result = runner.invoke(app, ["--set", override, "show", "--source", str(sample_file)])
        assert result.exit_code != 0, override


def test_override_rejects_invalid_value(sample_file):
    result = runner.invoke(app, ["--set", "timezone.target_offset=soon", "show", "--source", str(sample_file)])
    assert result.exit_code != 0


def test_console_sink_is_a_presentation_sink():
    assert isinstance(ConsoleSink(Settings()), PresentationSink)
