import fitz
import pytest

from question_importer.errors import PdfExtractionError
from question_importer.pdf_text import extract_pdf_text


def test_text_of_all_pages_in_order(pdf_factory):
    pdf = pdf_factory("ODD System No. 1\nSum two numbers", "EVEN System No. 2\nReverse a list")

    text = extract_pdf_text(pdf)["text"]

    assert "ODD System No. 1" in text
    assert "EVEN System No. 2" in text
    assert text.index("ODD System No. 1") < text.index("EVEN System No. 2")


def test_blank_pdf_gives_empty_text(pdf_factory):
    assert extract_pdf_text(pdf_factory("")) == {"text": ""}


def test_garbage_bytes_raise():
    with pytest.raises(PdfExtractionError):
        extract_pdf_text(b"definitely not a pdf")


def test_password_protected_pdf_raises(pdf_factory):
    doc = fitz.open(stream=pdf_factory("ODD System No. 1"), filetype="pdf")
    locked = doc.tobytes(encryption=fitz.PDF_ENCRYPT_AES_256, owner_pw="owner", user_pw="user")
    doc.close()

    with pytest.raises(PdfExtractionError):
        extract_pdf_text(locked)
