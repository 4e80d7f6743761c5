"""
PDF text extraction.
Uses PyMuPDF as the primary reader and pdfplumber as a fallback when
PyMuPDF finds no text layer.
"""
import io
from typing import Dict

import fitz  # PyMuPDF
import pdfplumber

from question_importer.errors import PdfExtractionError
from utils.logger import get_logger

logger = get_logger(__name__)


def extract_pdf_text(pdf_bytes: bytes) -> Dict[str, str]:
    """
    Returns {"text": <plain text of all pages in order>}.
    Raises PdfExtractionError if the bytes are not a readable PDF.
    """
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as e:
        raise PdfExtractionError(f"Could not open PDF: {e}") from e

    with doc:
        if doc.needs_pass:
            raise PdfExtractionError("PDF is password protected")

        logger.info(f"Opened PDF with {len(doc)} pages")
        try:
            text = "".join(_extract_with_pymupdf(page) for page in doc)
        except Exception as e:
            raise PdfExtractionError(f"Could not read PDF pages: {e}") from e

    if not text.strip():
        logger.warning("PyMuPDF found no text. Trying pdfplumber...")
        text = _extract_with_pdfplumber(pdf_bytes)

    logger.info(f"Extracted {len(text)} characters from PDF")
    return {"text": text}


def _extract_with_pymupdf(page) -> str:
    return page.get_text("text")


def _extract_with_pdfplumber(pdf_bytes: bytes) -> str:
    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        logger.error(f"pdfplumber failed: {e}")
        return ""
    return "\n".join(pages)
