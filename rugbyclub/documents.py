"""Text extraction for uploaded schedule documents."""

import logging
from typing import Protocol, runtime_checkable

import pymupdf

from .errors import UnreadableDocumentError

logger = logging.getLogger('rugbyclub.documents')


@runtime_checkable
class DocumentDecoder(Protocol):
    """Anything that can turn document bytes into plain text, one line per line."""

    def extract_text(self, data: bytes) -> str:
        ...


class PyMuPdfDecoder:
    """Extract visible text from a PDF with PyMuPDF, page by page."""

    def extract_text(self, data: bytes) -> str:
        """Return the text of every page joined by newlines.

        Raises:
            UnreadableDocumentError: If the bytes are not a PDF PyMuPDF can open,
                or the document contains no extractable text
        """
        try:
            doc = pymupdf.open(stream=data, filetype='pdf')
        except Exception as e:
            logger.error(f'Could not open PDF: {e}')
            raise UnreadableDocumentError(
                'Failed to parse PDF file. Please ensure the PDF contains readable text.'
            ) from e

        try:
            pages = [page.get_text('text') for page in doc]
        finally:
            doc.close()

        text = '\n'.join(pages)
        logger.debug(f'Extracted {len(text)} characters from {len(pages)} PDF page(s)')

        if not text.strip():
            raise UnreadableDocumentError(
                'Failed to parse PDF file. Please ensure the PDF contains readable text.'
            )
        return text


def decode_text(data: bytes) -> str:
    """Decode a plain-text upload as UTF-8, tolerating a byte order mark."""
    try:
        return data.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        logger.error(f'Text upload is not valid UTF-8: {e}')
        raise UnreadableDocumentError('Could not read file: text is not valid UTF-8') from e
