"""
Text extraction for policy documents.

PDFs go through PyMuPDF, then pdfplumber, then a scrape of the raw text
operators; the first stage that yields text wins. DOCX is read with
python-docx. Legacy DOC files only get a best-effort scrape of printable runs.
"""

import io
import logging
import re
import zlib
from typing import Callable, List, Tuple

import fitz  # PyMuPDF
import pdfplumber
from docx import Document

from src.app.services.text_extractor import ExtractedText, ITextExtractor, TextExtractionError

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 50

PDF_TYPES = {"application/pdf"}
DOCX_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
DOC_TYPES = {"application/msword"}
TEXT_TYPES = {"text/plain"}

_STREAM_RE = re.compile(rb"stream\r?\n(.*?)\r?\nendstream", re.S)
_TJ_RE = re.compile(rb"\(((?:\\.|[^\\)])*)\)\s*Tj")
_TJ_ARRAY_RE = re.compile(rb"\[((?:\\.|[^\]])*)\]\s*TJ")
_ARRAY_STRING_RE = re.compile(rb"\(((?:\\.|[^\\)])*)\)")
_PDF_ESCAPES = {b"n": b"\n", b"r": b"\r", b"t": b"\t", b"b": b"\b", b"f": b"\f"}


def clean_text(text: str) -> str:
    """Collapse runs of spaces and blank lines"""
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\x00", "")
    text = re.sub(r"[ \t\f\v]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _unescape_pdf_string(raw: bytes) -> bytes:
    out = bytearray()
    i = 0
    while i < len(raw):
        ch = raw[i : i + 1]
        if ch != b"\\" or i + 1 >= len(raw):
            out += ch
            i += 1
            continue
        nxt = raw[i + 1 : i + 2]
        if nxt in _PDF_ESCAPES:
            out += _PDF_ESCAPES[nxt]
            i += 2
        elif nxt in b"01234567":
            octal = re.match(rb"[0-7]{1,3}", raw[i + 1 : i + 4]).group(0)
            out.append(int(octal, 8) & 0xFF)
            i += 1 + len(octal)
        else:
            out += nxt
            i += 2
    return bytes(out)


def scrape_pdf_text(data: bytes) -> str:
    """Pull strings out of Tj/TJ operators, inflating Flate streams when possible"""
    chunks: List[bytes] = []
    for stream in _STREAM_RE.findall(data) or [data]:
        try:
            content = zlib.decompress(stream)
        except zlib.error:
            content = stream
        for match in re.finditer(_TJ_RE.pattern + rb"|" + _TJ_ARRAY_RE.pattern, content):
            if match.group(1) is not None:
                chunks.append(_unescape_pdf_string(match.group(1)))
            else:
                parts = _ARRAY_STRING_RE.findall(match.group(2))
                chunks.append(b"".join(_unescape_pdf_string(p) for p in parts))
    return "\n".join(c.decode("latin-1") for c in chunks if c.strip())


def _pymupdf_text(data: bytes) -> str:
    with fitz.open(stream=data, filetype="pdf") as doc:
        return "\n".join(page.get_text() for page in doc)


def _pdfplumber_text(data: bytes) -> str:
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        return "\n".join(page.extract_text() or "" for page in pdf.pages)


def _docx_text(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    lines = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)


def _legacy_doc_text(data: bytes) -> str:
    utf16 = re.findall(rb"(?:[\x20-\x7e]\x00){4,}", data)
    ascii_runs = re.findall(rb"[\x20-\x7e\r\n\t]{8,}", data)
    from_utf16 = "\n".join(run.decode("utf-16-le") for run in utf16)
    from_ascii = "\n".join(run.decode("latin-1") for run in ascii_runs)
    return from_utf16 if len(from_utf16) >= len(from_ascii) else from_ascii


def _plain_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


class DocumentTextExtractor(ITextExtractor):
    """Fallback-chain extractor for PDF, Word and plain text"""

    def _stages(self, content_type: str, filename: str) -> List[Tuple[str, Callable[[bytes], str]]]:
        lowered = filename.lower()
        if content_type in PDF_TYPES or lowered.endswith(".pdf"):
            return [
                ("pymupdf", _pymupdf_text),
                ("pdfplumber", _pdfplumber_text),
                ("regex", scrape_pdf_text),
            ]
        if content_type in DOCX_TYPES or lowered.endswith(".docx"):
            return [("python-docx", _docx_text)]
        if content_type in DOC_TYPES or lowered.endswith(".doc"):
            return [("doc-scrape", _legacy_doc_text)]
        if content_type in TEXT_TYPES or lowered.endswith(".txt"):
            return [("plain", _plain_text)]
        return []

    def extract(self, data: bytes, content_type: str, filename: str) -> ExtractedText:
        stages = self._stages(content_type, filename)
        if not stages:
            raise TextExtractionError(f"Unsupported document type: {content_type}")

        failures: List[str] = []
        for method, stage in stages:
            try:
                text = clean_text(stage(data))
            except Exception as e:
                logger.warning(f"{method} failed on {filename}: {e}")
                failures.append(f"{method}: {e}")
                continue

            if not text:
                failures.append(f"{method}: no text")
                continue

            warnings: List[str] = []
            if len(text) < MIN_TEXT_LENGTH:
                warnings.append("Extracted text is very short; the document may be scanned")
            if method == "doc-scrape":
                warnings.append("Legacy .doc extraction is approximate")
            logger.info(f"Extracted {len(text)} chars from {filename} using {method}")
            return ExtractedText(
                text=text, method=method, word_count=len(text.split()), warnings=warnings
            )

        raise TextExtractionError(f"No text could be extracted from {filename}: {'; '.join(failures)}")
