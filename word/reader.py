# word/reader.py
from __future__ import annotations

import argparse
import io
import zipfile
from pathlib import Path

import docx
from docx.opc.exceptions import PackageNotFoundError

from tn_core.errors import UnknownFormatError

ZIP_MAGIC = b"PK\x03\x04"
DOCUMENT_PART = "word/document.xml"


def is_docx(data: bytes) -> bool:
    """Zip container holding a Word main document part."""
    if not data or not data.startswith(ZIP_MAGIC):
        return False
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            return DOCUMENT_PART in zf.namelist()
    except zipfile.BadZipFile:
        return False


def read_docx(data: bytes) -> bytes:
    """Return the document's paragraph text, one paragraph per line, as UTF-8."""
    if not is_docx(data):
        raise UnknownFormatError("not a word document")
    try:
        document = docx.Document(io.BytesIO(data))
    except (PackageNotFoundError, KeyError, ValueError) as e:
        raise UnknownFormatError(str(e)) from e
    text = "\n".join(p.text for p in document.paragraphs)
    return text.encode("utf-8")


def _cli():
    p = argparse.ArgumentParser(description="Extract the text from a .docx turn report")
    p.add_argument("--input", required=True)
    p.add_argument("--outdir", default="data/interim/text")
    args = p.parse_args()

    inp = Path(args.input)
    if not inp.exists():
        raise FileNotFoundError(f"Input not found: {inp}")
    text = read_docx(inp.read_bytes())
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    out_path = outdir / (inp.stem + ".txt")
    out_path.write_bytes(text)
    print(f"[OK] Text extracted -> {out_path}")


if __name__ == "__main__":
    _cli()
