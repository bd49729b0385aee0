"""
Source documents and the per-output page selections built on top of them
"""

import os
import logging
from assemble_pdfs.page_range import PageRange
from assemble_pdfs.document_port import get_port
from assemble_pdfs.errors import SourceOpenError


class SourceDocument:
    """
    A source PDF with its page count and the active range used by merge and interleave.

    The page count is fixed when the document is created; start_page and
    end_page can be edited through set_start_page/set_end_page, which refuse
    edits that would leave the range invalid.
    """

    def __init__(self, file_path, page_count, on_change=None):
        self._file_path = file_path
        self.page_range = PageRange(page_count, on_change=on_change)

    @classmethod
    def from_file(cls, file_path, port=None):
        """Open file_path once to read its page count, then release it"""
        document = get_port(port).open(file_path)
        try:
            page_count = document.page_count
        finally:
            document.close()
        if page_count < 1:
            raise SourceOpenError(file_path, "document has no pages")
        return cls(file_path, page_count)

    @property
    def file_path(self):
        return self._file_path

    @property
    def file_name(self):
        return os.path.basename(self._file_path)

    @property
    def page_count(self):
        return self.page_range.page_count

    @property
    def start_page(self):
        return self.page_range.start

    @property
    def end_page(self):
        return self.page_range.end

    def set_start_page(self, value):
        return self.page_range.set_start(value)

    def set_end_page(self, value):
        return self.page_range.set_end(value)

    def selected_pages(self):
        return self.page_range.pages()

    def __repr__(self):
        return f"SourceDocument('{self.file_name}', pages {self.start_page}-{self.end_page} of {self.page_count})"


class ExtractSpec:
    """One output of a split: a destination file and a range of the parent document"""

    def __init__(self, parent, destination_path, on_change=None):
        self._parent = parent
        self.destination_path = destination_path
        self.page_range = PageRange(parent.page_count, on_change=on_change)

    @property
    def parent(self):
        return self._parent

    @property
    def start_page(self):
        return self.page_range.start

    @property
    def end_page(self):
        return self.page_range.end

    def set_start_page(self, value):
        return self.page_range.set_start(value)

    def set_end_page(self, value):
        return self.page_range.set_end(value)

    def selected_pages(self):
        return self.page_range.pages()

    def __repr__(self):
        return f"ExtractSpec('{self.destination_path}', pages {self.start_page}-{self.end_page})"


class RotationSpec:
    """A range of the parent document and the number of clockwise quarter turns to apply"""

    def __init__(self, parent, quarter_turns=0, on_change=None):
        self._parent = parent
        self._quarter_turns = quarter_turns % 4
        self.on_change = on_change
        self.page_range = PageRange(parent.page_count, on_change=on_change)

    @property
    def parent(self):
        return self._parent

    @property
    def quarter_turns(self):
        return self._quarter_turns

    @property
    def degrees(self):
        return self._quarter_turns * 90

    def set_quarter_turns(self, value):
        """Store value modulo 4. Returns True if the stored value changed."""
        value = value % 4
        if value == self._quarter_turns:
            return False
        self._quarter_turns = value
        logging.debug(f"Rotation for '{self._parent.file_name}' set to {self.degrees} degrees")
        if self.on_change is not None:
            self.on_change('quarter_turns', value)
        return True

    @property
    def start_page(self):
        return self.page_range.start

    @property
    def end_page(self):
        return self.page_range.end

    def set_start_page(self, value):
        return self.page_range.set_start(value)

    def set_end_page(self, value):
        return self.page_range.set_end(value)
