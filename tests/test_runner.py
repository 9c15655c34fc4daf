# tests/test_runner.py
import json
import sys
from copy import deepcopy

import pytest

from config.loader import DEFAULTS
from pipeline import runner
from pipeline.runner import run_pipeline_for_dir, run_pipeline_for_file


def test_run_pipeline_for_file_writes_json(tmp_path, sample_report_docx):
    outdir = tmp_path / "out"
    json_path, metrics = run_pipeline_for_file(sample_report_docx, outdir, generated_by="test")
    assert json_path == outdir / "0900-04.0987.report.json"
    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data["file-name"] == sample_report_docx.name
    assert data["metadata"]["generated-by"] == "test"
    assert metrics["sections"] == 3
    assert metrics["units"] == 3
    assert metrics["turn"] == "0900-04"


def test_unsupported_extension(tmp_path):
    p = tmp_path / "report.pdf"
    p.write_bytes(b"%PDF-1.4")
    with pytest.raises(ValueError):
        run_pipeline_for_file(p, tmp_path / "out")


def test_dir_mode_skips_bad_files(tmp_path, sample_report_txt):
    (tmp_path / "empty.txt").write_bytes(b"")
    (tmp_path / "binary.txt").write_bytes(b"\x00\x01\x02\x03")
    outs = run_pipeline_for_dir(tmp_path, tmp_path / "out")
    assert [p.name for p in outs] == ["0900-04.0987.report.json"]


def test_cli_defaults_to_config_indir(tmp_path, monkeypatch, sample_report_txt):
    cfg = deepcopy(DEFAULTS)
    cfg["paths"] = {"indir": str(sample_report_txt.parent), "outdir": str(tmp_path / "out")}
    monkeypatch.setattr(runner, "load_config", lambda **kw: cfg)
    monkeypatch.setattr(sys, "argv", ["runner"])

    runner._cli()
    assert (tmp_path / "out" / f"{sample_report_txt.stem}.json").exists()
