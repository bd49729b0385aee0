"""
Editable collections the caller builds before running an operation,
and the predicates that say whether each operation can run
"""

import os
import logging
from assemble_pdfs.models import SourceDocument, ExtractSpec
from assemble_pdfs.errors import AssemblyError, DuplicateDestinationError
from utils.filename_utils import same_destination

PDF_EXTENSION = '.pdf'


class SourceList:
    """Ordered list of source documents for merge or interleave. Paths are unique."""

    def __init__(self, port=None):
        self._items = []
        self._port = port

    def add_files(self, paths):
        """
        Add every path that is an existing PDF not already in the list.

        Returns:
            list: The SourceDocuments that were added, in input order
        """
        added = []
        for path in paths:
            if not os.path.isfile(path):
                logging.warning(f"Skipping '{path}': file does not exist")
                continue
            if os.path.splitext(path)[1].lower() != PDF_EXTENSION:
                logging.warning(f"Skipping '{path}': not a .pdf file")
                continue
            if self.contains_path(path):
                logging.warning(f"Skipping '{path}': already in the list")
                continue
            try:
                document = SourceDocument.from_file(path, port=self._port)
            except AssemblyError as e:
                logging.warning(f"Skipping '{path}': {e}")
                continue
            self._items.append(document)
            added.append(document)
        return added

    def add(self, document):
        """Append an already-built SourceDocument. Returns False for a duplicate path."""
        if self.contains_path(document.file_path):
            return False
        self._items.append(document)
        return True

    def remove(self, document):
        if document not in self._items:
            return False
        self._items.remove(document)
        return True

    def contains_path(self, path):
        return any(item.file_path == path for item in self._items)

    def move_up(self, document):
        """Swap document with its predecessor. No-op when it is first or absent."""
        if not self.can_move_up(document):
            return False
        index = self._items.index(document)
        self._items[index - 1], self._items[index] = self._items[index], self._items[index - 1]
        return True

    def move_down(self, document):
        """Swap document with its successor. No-op when it is last or absent."""
        if not self.can_move_down(document):
            return False
        index = self._items.index(document)
        self._items[index + 1], self._items[index] = self._items[index], self._items[index + 1]
        return True

    def can_move_up(self, document):
        return document in self._items and self._items.index(document) > 0

    def can_move_down(self, document):
        return document in self._items and self._items.index(document) < len(self._items) - 1

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def __getitem__(self, index):
        return self._items[index]


class SplitJob:
    """A document to split and the extracts to cut out of it"""

    def __init__(self, source=None):
        self._source = source
        self._extracts = []

    @property
    def source(self):
        return self._source

    @property
    def extracts(self):
        return list(self._extracts)

    def set_source(self, source):
        """Choose a new document to split. Extracts bound to the old one are dropped."""
        if source is self._source:
            return
        if self._extracts:
            logging.info(f"Dropping {len(self._extracts)} extracts of the previous split source")
        self._source = source
        self._extracts = []

    def add_extract(self, destination_path):
        """
        Register a new extract covering the whole source.

        Raises:
            DuplicateDestinationError: If another extract already writes to destination_path
            ValueError: If no source document has been chosen yet
        """
        if not can_add_extract(self):
            raise ValueError("Choose a document to split before adding extracts")
        if self.uses_destination(destination_path):
            raise DuplicateDestinationError(destination_path)
        extract = ExtractSpec(self._source, destination_path)
        self._extracts.append(extract)
        return extract

    def rename_extract(self, extract, destination_path):
        """Change an extract's destination. Returns False if another extract already uses it."""
        if self.uses_destination(destination_path, ignore=extract):
            return False
        extract.destination_path = destination_path
        return True

    def remove_extract(self, extract):
        if extract not in self._extracts:
            return False
        self._extracts.remove(extract)
        return True

    def uses_destination(self, destination_path, ignore=None):
        return any(same_destination(e.destination_path, destination_path)
                   for e in self._extracts if e is not ignore)


def can_merge(sources):
    return sources is not None and len(sources) > 1


def can_interleave(sources):
    return sources is not None and len(sources) > 1


def can_split(job):
    return job is not None and job.source is not None and len(job.extracts) > 0


def can_add_extract(job):
    return job is not None and job.source is not None


def can_reorder(document):
    return document is not None
