"""
Page-container I/O used by the assembly operations.

The operations only ever talk to a port: open a source, hand out page
references, append them to a fresh document and save it. FitzDocumentPort
implements this on top of PyMuPDF.
"""

import os
import logging
import tempfile
import fitz  # PyMuPDF
from assemble_pdfs.errors import SourceOpenError, SaveError, PageRefReusedError

# garbage=4 removes duplicate objects without changing image quality
SAVE_OPTIONS = {'garbage': 4, 'deflate': True, 'clean': True}


class PageRef:
    """Handle to one page of an opened document. Appendable exactly once."""

    def __init__(self, document, page_number):
        self.document = document
        self.page_number = page_number  # 1-based
        self.consumed = False

    def consume(self):
        if self.consumed:
            raise PageRefReusedError(
                f"Page {self.page_number} of '{self.document.path}' was already appended to an output"
            )
        self.consumed = True

    def __repr__(self):
        return f"PageRef({os.path.basename(self.document.path)}#{self.page_number})"


class OpenedDocument:
    """A source PDF opened for reading"""

    def __init__(self, path, doc):
        self.path = path
        self._doc = doc

    @property
    def page_count(self):
        return self._doc.page_count

    @property
    def fitz_document(self):
        return self._doc

    def page(self, page_number):
        """Return a PageRef for the 1-based page_number"""
        if not 1 <= page_number <= self.page_count:
            raise IndexError(f"Page {page_number} is out of range (1-{self.page_count}) in '{self.path}'")
        return PageRef(self, page_number)

    def close(self):
        if not self._doc.is_closed:
            self._doc.close()
            logging.debug(f"Closed '{self.path}'")


class OutputDocument:
    """A new PDF being assembled page by page"""

    def __init__(self):
        self._doc = fitz.open()

    @property
    def page_count(self):
        return self._doc.page_count

    def append_page(self, page_ref, rotate=0):
        """
        Copy the referenced page to the end of this document.

        Args:
            page_ref: PageRef obtained from OpenedDocument.page
            rotate: Extra clockwise rotation in degrees, a multiple of 90
        """
        page_ref.consume()
        index = page_ref.page_number - 1
        # Keep links and annotations with the copied page
        self._doc.insert_pdf(page_ref.document.fitz_document, from_page=index, to_page=index,
                             links=True, annots=True)
        if rotate % 360:
            new_page = self._doc[self._doc.page_count - 1]
            new_page.set_rotation((new_page.rotation + rotate) % 360)

    def save(self, path):
        """
        Write the document to path.

        The file is written next to the destination first and renamed into
        place, so a failed save never leaves a partial file at path.
        """
        directory = os.path.dirname(os.path.abspath(path))
        try:
            fd, temp_path = tempfile.mkstemp(suffix='.pdf', prefix='.assemble_', dir=directory)
        except OSError as e:
            raise SaveError(path, e) from e
        os.close(fd)
        try:
            self._doc.save(temp_path, **SAVE_OPTIONS)
            os.replace(temp_path, path)
        except Exception as e:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise SaveError(path, e) from e
        logging.info(f"Saved '{path}' ({self.page_count} pages, {os.path.getsize(path)/1024:,.1f} KB)")

    def close(self):
        if not self._doc.is_closed:
            self._doc.close()


class FitzDocumentPort:
    """DocumentPort backed by PyMuPDF"""

    def open(self, path):
        if not os.path.exists(path):
            raise SourceOpenError(path, "file does not exist")
        try:
            doc = fitz.open(path)
        except Exception as e:
            raise SourceOpenError(path, e) from e
        if not doc.is_pdf or doc.page_count < 1:
            doc.close()
            raise SourceOpenError(path, "not a PDF with at least one page")
        logging.info(f"Opened '{path}' with {doc.page_count} pages")
        return OpenedDocument(path, doc)

    def new_document(self):
        return OutputDocument()


default_port = FitzDocumentPort()


def get_port(port=None):
    """Return port, or the shared PyMuPDF port when none is given"""
    return port if port is not None else default_port
