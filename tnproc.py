# tnproc.py
# Command-line front end for the TribeNet turn report parser.
# - Single report to JSON (parse)
# - Batch over folders/files (parse-batch)
# - Mapping lines only, as text (docx2text)
#
# Examples:
#   python tnproc.py parse data/input/0900-04.0987.report.docx --json
#   python tnproc.py parse-batch data/input --ext .docx,.txt --outdir data/output
#   python tnproc.py docx2text data/input/0900-04.0987.report.docx
#
# Notes:
# - .docx files are read with python-docx; anything else is treated as text.
# - The whole report is lower-cased before it is classified.

from __future__ import annotations

import json
import logging
from dataclasses import asdict
import os
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

import click

from config.loader import load_config
from pipeline.parse import filter_text, parse_sections
from pipeline.runner import run_pipeline_for_file
from tn_core.errors import ReportError
from tn_utils.logging_setup import setup_logging
from turn_parser.assembler import report_to_json, to_report

LOGGER = logging.getLogger("tnproc")

DEFAULT_EXTS = (".docx", ".txt")


# ----------------------------- Helpers -----------------------------


def _exts_from_csv(csv: str | None) -> Tuple[str, ...]:
    if not csv:
        return DEFAULT_EXTS
    parts = [p.strip().lower() for p in csv.split(",") if p.strip()]
    parts = [p if p.startswith(".") else f".{p}" for p in parts]
    return tuple(parts) if parts else DEFAULT_EXTS


def discover_files(
    paths: Iterable[str], *, exts: Tuple[str, ...], recurse: bool
) -> List[str]:
    seen: Set[str] = set()
    out: List[str] = []
    for root in paths:
        root = os.path.abspath(root)
        if os.path.isfile(root):
            if root.lower().endswith(exts) and root not in seen:
                seen.add(root)
                out.append(root)
            continue
        if not os.path.isdir(root):
            continue
        if recurse:
            candidates = (
                os.path.join(dirpath, fn)
                for dirpath, _dirs, files in os.walk(root)
                for fn in files
            )
        else:
            candidates = (
                os.path.join(root, fn)
                for fn in os.listdir(root)
                if os.path.isfile(os.path.join(root, fn))
            )
        for fp in candidates:
            if fp.lower().endswith(exts) and fp not in seen:
                seen.add(fp)
                out.append(fp)
    out.sort()
    return out


def _section_summary(sections) -> str:
    lines = []
    for s in sections:
        moves = sum(1 for m in (s.movement, s.follows, s.goes_to, s.fleet) if m)
        lines.append(
            f"{s.id:3d}  {s.header.split(',', 1)[0]:<18} "
            f"moves={moves} scouts={len(s.scouts)} status={'yes' if s.status else 'no'}"
        )
    return "\n".join(lines)


# ----------------------------- CLI -----------------------------
@click.group()
@click.option("--quiet", is_flag=True, help="Only warnings and errors.")
@click.option("--verbose", is_flag=True, help="Verbose logging.")
@click.pass_context
def cli(ctx: click.Context, quiet: bool, verbose: bool) -> None:
    """TribeNet turn report processor."""
    cfg = load_config(required=False)
    level = cfg["logging"]["level"]
    if quiet:
        level = "WARNING"
    if verbose:
        level = "DEBUG"
    setup_logging(level)
    ctx.obj = cfg


@cli.command("parse")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.option(
    "--jsonl", is_flag=True, help="Print one JSON line per section instead."
)
@click.option(
    "--out",
    "out_path",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the report JSON to this file.",
)
@click.pass_obj
def parse_cmd(
    cfg: dict, path: str, as_json: bool, jsonl: bool, out_path: Optional[str]
) -> None:
    """Parse a single turn report."""
    src = Path(path)
    try:
        sections = parse_sections(src.read_bytes())
        report = to_report(
            src.name, sections, generated_by=cfg["report"]["generated_by"]
        )
    except ReportError as e:
        raise click.ClickException(f"{src.name}: {e}") from e

    if out_path:
        Path(out_path).write_text(report_to_json(report), encoding="utf-8")
        click.echo(f"[ok] {len(sections)} sections -> {out_path}")
    elif jsonl:
        for s in sections:
            click.echo(json.dumps(asdict(s), ensure_ascii=True))
    elif as_json:
        click.echo(report_to_json(report))
    else:
        click.echo(f"Report : {src.name}")
        click.echo(f"Turn   : {report.turn_id or 'N/A'}")
        click.echo(f"Units  : {len(report.units)}")
        click.echo(_section_summary(sections))


@cli.command("parse-batch")
@click.argument("paths", nargs=-1, type=click.Path(exists=True, readable=True))
@click.option(
    "--ext",
    "ext_csv",
    default=",".join(DEFAULT_EXTS),
    show_default=True,
    help="Comma-separated list of file extensions to include.",
)
@click.option(
    "--recurse/--no-recurse",
    default=False,
    show_default=True,
    help="Recurse into subdirectories when PATH is a folder.",
)
@click.option(
    "--outdir",
    default=None,
    help="Where to write report JSON (default: [paths] outdir from config.toml).",
)
@click.pass_obj
def parse_batch_cmd(
    cfg: dict, paths: Tuple[str, ...], ext_csv: str, recurse: bool, outdir: str
) -> None:
    """
    Parse many reports and/or folders of reports.
    Without PATHS, reads [paths] indir from config.toml.
    Exits with status 1 when any report fails.
    """
    if not paths:
        indir = cfg["paths"]["indir"]
        if not os.path.isdir(indir):
            raise click.UsageError(
                f"No PATHS given and [paths] indir does not exist: {indir}"
            )
        paths = (indir,)

    files = discover_files(paths, exts=_exts_from_csv(ext_csv), recurse=recurse)
    if not files:
        click.echo("[info] no matching files found.")
        return

    out_dir = Path(outdir or cfg["paths"]["outdir"])
    stats = {"ok": 0, "error": 0}
    for fp in files:
        try:
            json_path, m = run_pipeline_for_file(
                Path(fp), out_dir, generated_by=cfg["report"]["generated_by"]
            )
        except ValueError as e:
            stats["error"] += 1
            LOGGER.error("%s: %s", fp, e)
            click.echo(f"[error] {fp} :: {e}")
            continue
        stats["ok"] += 1
        click.echo(f"[ok] sections={m['sections']} | {fp} -> {json_path}")
    click.echo(f"[sum] ok={stats['ok']} error={stats['error']}")
    if stats["error"]:
        raise SystemExit(1)


@cli.command("docx2text")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "--out",
    "out_path",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Output .txt (default: next to the input).",
)
def docx2text_cmd(path: str, out_path: Optional[str]) -> None:
    """Write only the lines a mapper needs, one per line."""
    src = Path(path)
    try:
        text = filter_text(src.read_bytes())
    except ReportError as e:
        raise click.ClickException(f"{src.name}: {e}") from e
    dst = Path(out_path) if out_path else src.with_suffix(".txt")
    if dst.resolve() == src.resolve():
        dst = src.with_name(src.stem + ".mapping.txt")
    dst.write_text(text, encoding="utf-8")
    LOGGER.info("%s: wrote %d lines", dst, text.count("\n") + 1 if text else 0)
    click.echo(f"[ok] {dst}")


if __name__ == "__main__":
    cli()
