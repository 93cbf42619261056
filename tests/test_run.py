"""
Tests for the package entry points and the command-line runner.
"""

import sys

import pandas as pd
import pytest
from rich.console import Console

import po_analytics
from po_analytics import run as cli


def test_validate_ok(sample_csv):
    result = po_analytics.validate(sample_csv)
    assert result == {"status": "ok", "row_count": 4}


def test_validate_missing_file(tmp_path):
    result = po_analytics.validate(tmp_path / "missing.csv")
    assert result["status"] == "error"
    assert "not found" in result["message"]


def test_run_builds_all_views(sample_csv):
    result = po_analytics.run(sample_csv, period_type="quarter")

    assert [i.item_code for i in result["items"]] == ["3002360", "3004410"]
    assert {v.vendor_code for v in result["vendors"]} == {"9004449", "9004501"}
    assert [b.key for b in result["periods"]] == ["2025-Q2", "2025-Q3"]
    assert result["delivery"].total_orders == 4
    assert result["delivery"].pending == 2


def _run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["po-analytics", *map(str, argv)])
    monkeypatch.setattr(cli, "console", Console(width=240))
    cli.main()


def test_cli_vendor_ranking(monkeypatch, capsys, sample_csv, tmp_path):
    output = tmp_path / "vendors.csv"
    _run_cli(monkeypatch, sample_csv, "--view", "vendors", "--output", output)

    out = capsys.readouterr().out
    assert "Vendor ranking" in out
    assert "SHREE ALLOYS" in out
    assert pd.read_csv(output, dtype={"vendor_code": str})["vendor_code"].tolist() == ["9004449", "9004501"]


def test_cli_periods_and_items(monkeypatch, capsys, sample_csv):
    _run_cli(monkeypatch, sample_csv, "--view", "periods", "--period", "halfYear")
    assert "2025-H1" in capsys.readouterr().out

    _run_cli(monkeypatch, sample_csv, "--view", "items", "--search", "graphite")
    out = capsys.readouterr().out
    assert "Graphite Electrode" in out
    assert "Ferro Silicon" not in out


def test_cli_item_drilldown(monkeypatch, capsys, sample_csv):
    _run_cli(monkeypatch, sample_csv, "--item", "3002360", "--price-mode", "proportional")
    out = capsys.readouterr().out
    assert "Vendors for 3002360" in out

    with pytest.raises(SystemExit) as exc:
        _run_cli(monkeypatch, sample_csv, "--item", "0000")
    assert exc.value.code == 1


def test_cli_validate(monkeypatch, capsys, sample_csv):
    _run_cli(monkeypatch, sample_csv, "--validate")
    assert "passed validation" in capsys.readouterr().out


def test_cli_delivery_export(monkeypatch, capsys, sample_csv, tmp_path):
    output = tmp_path / "delivery.json"
    _run_cli(monkeypatch, sample_csv, "--view", "delivery", "--output", output, "--format", "json")

    rows = pd.read_json(output).to_dict(orient="records")
    assert len(rows) == 1
    assert rows[0]["total_orders"] == 4
    assert rows[0]["pending"] == 2


def test_cli_period_export_parquet(monkeypatch, sample_csv, tmp_path):
    output = tmp_path / "periods.parquet"
    _run_cli(monkeypatch, sample_csv, "--view", "periods", "--period", "quarter",
             "--output", output, "--format", "parquet")
    assert pd.read_parquet(output)["period"].tolist() == ["2025-Q2", "2025-Q3"]


def test_cli_rejects_unknown_format(monkeypatch, sample_csv, tmp_path):
    with pytest.raises(SystemExit) as exc:
        _run_cli(monkeypatch, sample_csv, "--output", tmp_path / "x.xml", "--format", "xml")
    assert exc.value.code == 2
    assert not (tmp_path / "x.xml").exists()


def test_invalid_vendor_frame_is_not_written(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "console", Console(width=240))
    frame = pd.DataFrame([{"vendor_code": "V1", "total_score": 140, "price": 30,
                           "quality": 100, "delivery": 10, "on_time_rate_pct": 100.0,
                           "total_orders": 1}])
    output = tmp_path / "vendors.csv"
    with pytest.raises(SystemExit) as exc:
        cli._write_view(frame, "vendors", str(output), "csv")
    assert exc.value.code == 1
    assert not output.exists()
