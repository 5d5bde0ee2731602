"""
Text Extraction
Turns uploaded .txt, .docx and .pdf files into plain text for analysis.
"""

import io
import logging
from pathlib import Path

import pdfplumber
from docx import Document

from legalens.errors import NoContentError


logger = logging.getLogger(__name__)


TEXT_EXTENSIONS = {'.txt', '.md'}
SUPPORTED_EXTENSIONS = TEXT_EXTENSIONS | {'.docx', '.pdf'}


def extract_docx_text(data: bytes) -> str:
    """Extract paragraphs, then table rows, from a .docx file."""
    doc = Document(io.BytesIO(data))
    paragraphs = []

    for para in doc.paragraphs:
        text = para.text.strip()
        if text:
            paragraphs.append(text)

    # Also extract text from tables
    for table in doc.tables:
        for row in table.rows:
            row_text = []
            for cell in row.cells:
                cell_text = cell.text.strip()
                if cell_text:
                    row_text.append(cell_text)
            if row_text:
                paragraphs.append(" | ".join(row_text))

    return "\n\n".join(paragraphs)


def extract_pdf_text(data: bytes) -> str:
    pages = []
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for page in pdf.pages:
            text = (page.extract_text() or "").strip()
            if text:
                pages.append(text)
    return "\n\n".join(pages)


def extract_text(filename: str, data: bytes) -> str:
    """
    Extract plain text from an uploaded file.

    Raises NoContentError for unsupported or unreadable files and for
    files that hold no text.
    """
    suffix = Path(filename or "").suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise NoContentError(f"Unsupported file type: {suffix or 'unknown'}. Upload a PDF, DOCX or text file.")

    try:
        if suffix in TEXT_EXTENSIONS:
            text = data.decode('utf-8', errors='replace')
        elif suffix == '.docx':
            text = extract_docx_text(data)
        else:
            text = extract_pdf_text(data)
    except Exception as e:
        logger.warning(f"Error extracting text from {filename}: {e}")
        raise NoContentError(f"Could not read {filename}") from e

    if not text.strip():
        raise NoContentError(f"No text found in {filename}")
    return text


def title_from_filename(filename: str) -> str:
    """File name without its extension."""
    return Path(filename or "").stem or "Uploaded Document"
