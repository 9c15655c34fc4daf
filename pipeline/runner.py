# pipeline/runner.py
"""
End-to-end pipeline:
  (docx|txt) --parse--> sections --assemble--> outdir/*.json

CLI examples (run from repo root):
  python -m pipeline.runner --input data/input/0900-04.0987.report.docx
  python -m pipeline.runner --indir data/input
  python -m pipeline.runner            # [paths] indir from config.toml
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Iterable, List, Tuple

from config.loader import load_config
from tn_utils.logging_setup import setup_logging

from pipeline.parse import parse_sections
from turn_parser.assembler import report_to_json, to_report

log = logging.getLogger("pipeline")

REPORT_EXTS = (".txt", ".docx")


def run_pipeline_for_file(
    inp: Path,
    outdir: Path,
    generated_by: str = "tn3",
) -> Tuple[Path, dict]:
    """
    Returns: (report_json_path, metrics)
    """
    started = time.perf_counter()
    ext = inp.suffix.lower()
    if ext not in REPORT_EXTS:
        raise ValueError(f"Unsupported file type: {ext}")

    log.info("Parse: %s", inp)
    sections = parse_sections(inp.read_bytes())
    report = to_report(inp.name, sections, generated_by=generated_by)

    outdir.mkdir(parents=True, exist_ok=True)
    out_path = outdir / f"{inp.stem}.json"
    out_path.write_text(report_to_json(report), encoding="utf-8")

    metrics = {
        "sections": len(sections),
        "units": len(report.units),
        "turn": report.turn_id,
        "elapsed": round(time.perf_counter() - started, 4),
    }
    log.info(
        "%s: parsed %3d sections in %.4fs", inp.name, metrics["sections"], metrics["elapsed"]
    )
    return out_path, metrics


def run_pipeline_for_dir(
    indir: Path,
    outdir: Path,
    exts: Iterable[str] = REPORT_EXTS,
    **kw,
) -> List[Path]:
    """Every report in indir, sorted by name. A bad file is logged and skipped."""
    exts = tuple(e.lower() for e in exts)
    outputs: List[Path] = []
    failed = 0
    for p in sorted(indir.iterdir()):
        if p.is_dir() or p.suffix.lower() not in exts:
            continue
        try:
            out_json, _ = run_pipeline_for_file(p, outdir, **kw)
        except ValueError as e:
            failed += 1
            log.error("%s: %s", p.name, e)
            continue
        outputs.append(out_json)
    log.info("parsed %d files, %d failed", len(outputs), failed)
    return outputs


def _cli():
    # load config first to set logging
    cfg = load_config(required=False)
    setup_logging(cfg["logging"]["level"])

    ap = argparse.ArgumentParser(description="Parse turn reports into JSON")
    g = ap.add_mutually_exclusive_group()
    g.add_argument("--input", help="Path to a single report (.txt/.docx)")
    g.add_argument(
        "--indir",
        default=cfg["paths"]["indir"],
        help="Directory containing reports (default: [paths] indir)",
    )
    ap.add_argument(
        "--outdir", default=cfg["paths"]["outdir"], help="Where to write report .json"
    )
    args = ap.parse_args()

    outdir = Path(args.outdir)
    generated_by = cfg["report"]["generated_by"]

    if args.input:
        inp = Path(args.input)
        if not inp.exists():
            raise FileNotFoundError(f"Input not found: {inp}")
        json_p, m = run_pipeline_for_file(inp, outdir, generated_by=generated_by)
        print("[OK] Pipeline complete")
        print(f" • Report:   {json_p}")
        print(
            f" • Metrics:  sections={m['sections']} units={m['units']} turn={m['turn']}"
        )
    else:
        indir = Path(args.indir)
        if not indir.exists():
            raise FileNotFoundError(f"Input dir not found: {indir}")
        outs = run_pipeline_for_dir(
            indir,
            outdir,
            exts=cfg["input"]["extensions"],
            generated_by=generated_by,
        )
        print(f"[OK] Pipeline complete for {len(outs)} files -> {outdir}")


if __name__ == "__main__":
    _cli()
