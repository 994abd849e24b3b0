"""Tests for src.monitor.cli and src.monitor.frames — terminal viewer."""

from __future__ import annotations

from datetime import date

import pytest

from src.contracts.enums import RecordKind
from src.monitor.cli import build_parser, main, parse_filter, render_page
from src.monitor.frames import to_frame
from src.monitor.specs import table_spec
from src.monitor.table import RecordTable
from tests.conftest import make_events, make_incident


@pytest.fixture
def small_config(tmp_path):
    cfg = tmp_path / "console.yaml"
    cfg.write_text(
        "console:\n"
        "  log_level: WARNING\n"
        "  counts:\n"
        "    event: 30\n"
        "    incident: 12\n"
        "    raw_log: 8\n"
    )
    return str(cfg)


class TestFrames:
    def test_labels(self):
        df = to_frame(make_events(3), RecordKind.EVENT)
        assert list(df.columns)[:3] == ["Timestamp", "Event Type", "Event Name"]
        assert len(df) == 3

    def test_raw_field_names(self):
        df = to_frame(make_events(1), "event", labels=False)
        assert "attacker_ip" in df.columns

    def test_incident_event_count_text(self):
        df = to_frame([make_incident(event_count=12, is_correlated=True),
                       make_incident(event_count=3, is_correlated=False)], RecordKind.INCIDENT)
        assert df["Event Count"].tolist() == ["12 (correlated)", "3 (isolated)"]

    def test_empty_has_columns(self):
        df = to_frame([], RecordKind.RAW_LOG)
        assert df.empty
        assert list(df.columns) == ["Time", "Log Message", "Source", "Hostname"]


class TestParseFilter:
    @pytest.fixture
    def table(self):
        return RecordTable(table_spec("events"), make_events(5))

    def test_plain(self, table):
        assert parse_filter(table, "severity=High") == ("severity", "High")

    def test_date_range(self, table):
        assert parse_filter(table, "date=2026-03-01..2026-03-05") == (
            "date", (date(2026, 3, 1), date(2026, 3, 5)),
        )

    def test_open_date_range(self, table):
        assert parse_filter(table, "date=..2026-03-05") == ("date", (None, date(2026, 3, 5)))

    def test_missing_equals(self, table):
        with pytest.raises(ValueError):
            parse_filter(table, "severity")


class TestRenderPage:
    def test_footer(self):
        t = RecordTable(table_spec("events"), make_events(45))
        out = render_page(t)
        assert "Page 1/3 | 45 of 45 records | sort: timestamp desc" in out
        assert "EVT-00001" not in out     # ids are not a display column

    def test_empty_state(self):
        t = RecordTable(table_spec("events"), make_events(5))
        t.set_filter("severity", "Critical")
        assert "No records match the current filters." in render_page(t)


class TestMain:
    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.table == "realtime"
        assert args.page == 1
        assert not args.follow

    def test_incidents_page(self, small_config, capsys):
        main(["--table", "incidents", "--config", small_config, "--seed", "1",
              "--page", "5", "--sort", "mitre_id:asc"])
        out = capsys.readouterr().out
        assert "Page 1/1 | 12 of 12 records | sort: mitre_id asc" in out

    def test_filter_and_no_sort(self, small_config, capsys):
        main(["--table", "rawlogs", "--config", small_config, "--seed", "2",
              "--filter", "log_message=zzz-no-such-text", "--no-sort"])
        out = capsys.readouterr().out
        assert "No records match the current filters." in out
        assert "sort: none" in out

    def test_follow_ignored_for_static_table(self, small_config, capsys):
        main(["--table", "events", "--config", small_config, "--follow"])
        assert "Page 1/2" in capsys.readouterr().out

    def test_unknown_table_rejected(self):
        with pytest.raises(SystemExit):
            main(["--table", "alerts"])
