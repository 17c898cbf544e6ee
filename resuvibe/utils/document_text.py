"""
Plain-text extraction from uploaded resume documents.

Supports PDF (pypdf), DOCX (python-docx) and plain text.
"""
import io
import logging
import zipfile
from typing import Optional

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PdfReadError


logger = logging.getLogger("resuvibe.documents")

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class DocumentExtractionError(Exception):
    """Raised when a supported document cannot be read."""
    pass


class UnsupportedDocumentError(DocumentExtractionError):
    """Raised for file types other than PDF, DOCX and TXT."""
    pass


def detect_document_type(filename: Optional[str], content_type: Optional[str]) -> str:
    """Return "pdf", "docx" or "txt" from the MIME type, falling back to the extension."""
    content_type = (content_type or "").lower()
    name = (filename or "").lower()

    if "pdf" in content_type or name.endswith(".pdf"):
        return "pdf"
    if content_type == DOCX_MIME or name.endswith(".docx"):
        return "docx"
    if content_type.startswith("text/") or name.endswith(".txt"):
        return "txt"
    raise UnsupportedDocumentError("Unsupported file type. Use PDF, DOCX, or TXT.")


def _pdf_text(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def _docx_text(data: bytes) -> str:
    document = Document(io.BytesIO(data))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def extract_text(filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
    """
    Extract the text of an uploaded document.

    Raises:
        UnsupportedDocumentError: File type is not PDF, DOCX or TXT
        DocumentExtractionError: The file could not be parsed
    """
    doc_type = detect_document_type(filename, content_type)

    if doc_type == "txt":
        return data.decode("utf-8", errors="replace").strip()

    try:
        text = _pdf_text(data) if doc_type == "pdf" else _docx_text(data)
    except (PdfReadError, PackageNotFoundError, zipfile.BadZipFile, ValueError, KeyError, OSError) as e:
        logger.warning("Failed to read %s upload %r: %s", doc_type, filename, e)
        raise DocumentExtractionError(f"Could not read the {doc_type.upper()} file.") from e

    return text.strip()
