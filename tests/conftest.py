"""
Pytest fixtures for the assembly tests.

Provides:
- make_pdf: writes a small PDF whose pages carry text labels like "A1", "A2"
- page_labels: reads those labels back in page order
- RecordingPort: an in-memory DocumentPort that records opens, closes and saves
"""

import os

import fitz  # PyMuPDF
import pytest

from assemble_pdfs.errors import SourceOpenError, SaveError
from assemble_pdfs.models import SourceDocument


@pytest.fixture
def make_pdf(tmp_path):
    """Factory: make_pdf('A', 3) -> path of a 3-page PDF labelled A1..A3"""
    def _make_pdf(label, page_count, filename=None):
        path = tmp_path / (filename or f"{label}.pdf")
        doc = fitz.open()
        for number in range(1, page_count + 1):
            page = doc.new_page(width=200, height=200)
            page.insert_text((50, 100), f"{label}{number}", fontsize=24)
        doc.save(str(path))
        doc.close()
        return str(path)
    return _make_pdf


def read_labels(path):
    doc = fitz.open(path)
    try:
        return [page.get_text().strip() for page in doc]
    finally:
        doc.close()


def read_rotations(path):
    doc = fitz.open(path)
    try:
        return [page.rotation for page in doc]
    finally:
        doc.close()


@pytest.fixture
def page_labels():
    return read_labels


@pytest.fixture
def page_rotations():
    return read_rotations


class FakePageRef:
    def __init__(self, label):
        self.label = label


class FakeOpened:
    def __init__(self, port, path, page_count):
        self.port = port
        self.path = path
        self.page_count = page_count
        self.closed = False

    def page(self, page_number):
        if not 1 <= page_number <= self.page_count:
            raise IndexError(page_number)
        return FakePageRef(f"{os.path.basename(self.path)}#{page_number}")

    def close(self):
        self.closed = True
        self.port.closed.append(self.path)


class FakeOutput:
    def __init__(self, port):
        self.port = port
        self.pages = []

    @property
    def page_count(self):
        return len(self.pages)

    def append_page(self, page_ref, rotate=0):
        if self.port.fail_on_append is not None and len(self.pages) == self.port.fail_on_append:
            raise RuntimeError("append failed")
        self.pages.append((page_ref.label, rotate))

    def save(self, path):
        if path in self.port.fail_save:
            raise SaveError(path, "disk full")
        self.port.saved[path] = [label for label, _ in self.pages]

    def close(self):
        pass


class RecordingPort:
    """DocumentPort over a dict of path -> page_count that records every open and close"""

    def __init__(self, documents):
        self.documents = dict(documents)
        self.opened = []
        self.closed = []
        self.saved = {}
        self.fail_save = set()
        self.fail_on_append = None

    def open(self, path):
        if path not in self.documents:
            raise SourceOpenError(path, "file does not exist")
        self.opened.append(path)
        return FakeOpened(self, path, self.documents[path])

    def new_document(self):
        return FakeOutput(self)

    def source(self, path):
        return SourceDocument(path, self.documents[path])


@pytest.fixture
def recording_port():
    return RecordingPort
