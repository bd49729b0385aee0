#!/usr/bin/env python3
"""
Round-robin interleaving of several PDFs.

One page is taken from each source in turn. Sources that run out of
selected pages drop out of later rounds while the others keep going, so
selected-page counts [2, 3, 1] give A1 B1 C1 A2 B2 B3.
"""

import sys
import logging
from collections import deque
from assemble_pdfs.document_port import get_port
from assemble_pdfs.page_range import split_path_and_range
from assemble_pdfs.models import SourceDocument
from assemble_pdfs.working_sets import SourceList, can_interleave
from assemble_pdfs.errors import AssemblyError

logging.basicConfig(level=logging.INFO)


def interleave_order(counts):
    """
    Draw order for queues holding counts[i] pages each.

    Args:
        counts (list): Number of selected pages per source

    Returns:
        list: (source_index, offset) pairs, offset being the 0-based position inside that source's queue
    """
    queues = [deque(range(count)) for count in counts]
    order = []
    pages_added = True
    while pages_added:
        pages_added = False
        for index, queue in enumerate(queues):
            if queue:
                order.append((index, queue.popleft()))
                pages_added = True
    return order


def interleave_pdfs(sources, output_path, port=None, progress_callback=None):
    """
    Interleave the selected pages of every source into one document.

    Every source stays open until the output is saved; all of them are
    closed afterwards whether or not the interleave succeeded.

    Args:
        sources: Ordered SourceDocuments, at least two
        output_path: Where to save the interleaved document
        port: DocumentPort to use, PyMuPDF by default
        progress_callback: Optional callable(current_page, total_pages, message)

    Returns:
        bool: True once the output is saved, False if there was nothing to interleave
    """
    sources = list(sources)
    if not can_interleave(sources):
        logging.warning(f"Interleave needs at least two documents, got {len(sources)}. Nothing to do.")
        return False

    port = get_port(port)
    open_documents = []
    try:
        page_queues = []
        for source in sources:
            document = port.open(source.file_path)
            open_documents.append(document)
            page_queues.append(deque(document.page(n) for n in source.selected_pages()))

        total_pages = sum(len(queue) for queue in page_queues)
        logging.info(f"Interleaving {len(sources)} documents ({total_pages} pages) into '{output_path}'")

        output = port.new_document()
        try:
            for index, _ in interleave_order([len(queue) for queue in page_queues]):
                page_ref = page_queues[index].popleft()
                logging.debug(f"Appending {page_ref}")
                output.append_page(page_ref)
                if progress_callback:
                    progress_callback(output.page_count, total_pages, f"Added page {output.page_count} of {total_pages}")
            if progress_callback:
                progress_callback(total_pages, total_pages, "Saving interleaved PDF...")
            output.save(output_path)
        finally:
            output.close()
    finally:
        for document in open_documents:
            document.close()

    logging.info(f"Interleaved PDF saved to '{output_path}'")
    return True


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description='Interleave pages of several PDF files round-robin')
    parser.add_argument('inputs', nargs='+', help='Input PDF files, optionally with a range: file.pdf:2-5')
    parser.add_argument('output_pdf', help='Path of the interleaved PDF file')
    args = parser.parse_args(argv)

    sources = SourceList()
    try:
        for argument in args.inputs:
            path, page_range = split_path_and_range(argument)
            source = SourceDocument.from_file(path)
            if page_range and not source.page_range.set(*page_range):
                logging.error(f"Range {page_range[0]}-{page_range[1]} is not valid for '{path}'")
                return 1
            if not sources.add(source):
                logging.warning(f"Skipping duplicate input '{path}'")
        if not interleave_pdfs(sources, args.output_pdf):
            return 1
    except (AssemblyError, ValueError) as e:
        logging.error(f"Error interleaving PDFs: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
