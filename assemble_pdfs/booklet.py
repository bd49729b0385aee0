#!/usr/bin/env python3
"""
Booklet reorder for manual duplex printing.

Pages are paired front/back from the outside in: 1, N, 2, N-1, ...
meeting in the middle. With an odd page count the middle page appears once.
"""

import sys
import logging
from assemble_pdfs.document_port import get_port
from assemble_pdfs.models import SourceDocument
from assemble_pdfs.errors import AssemblyError
from utils.filename_utils import booklet_output_path

logging.basicConfig(level=logging.INFO)


def booklet_order(page_count):
    """
    0-based page indices in booklet order.

    Examples: 4 -> [0, 3, 1, 2], 5 -> [0, 4, 1, 3, 2], 1 -> [0]
    """
    is_even = page_count % 2 == 0
    middle = page_count // 2 if is_even else page_count // 2 + 1
    order = []
    for i in range(middle):
        order.append(i)
        # For odd counts the last front page is the true middle; it has no back
        if i < middle - 1 or is_even:
            order.append(page_count - i - 1)
    return order


def booklet_reorder(source, output_path, port=None, progress_callback=None):
    """
    Save every page of source in booklet order.

    The active page range of source is ignored; the whole document is used.

    Args:
        source: SourceDocument to reorder
        output_path: Destination chosen by the caller (see booklet_output_path)
        port: DocumentPort to use, PyMuPDF by default
        progress_callback: Optional callable(current_page, total_pages, message)

    Returns:
        bool: True once the output is saved, False if no document was given
    """
    if source is None:
        logging.warning("No document chosen for booklet reorder. Nothing to do.")
        return False

    port = get_port(port)
    document = port.open(source.file_path)
    try:
        page_count = document.page_count
        order = booklet_order(page_count)
        logging.info(f"Reordering {page_count} pages of '{source.file_name}' for booklet printing")
        output = port.new_document()
        try:
            for position, index in enumerate(order, 1):
                output.append_page(document.page(index + 1))
                if progress_callback:
                    progress_callback(position, page_count, f"Placed page {index + 1} at position {position}")
            output.save(output_path)
        finally:
            output.close()
    finally:
        document.close()

    logging.info(f"File reordered successfully to '{output_path}'")
    return True


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description='Reorder a PDF for manual duplex booklet printing')
    parser.add_argument('input_pdf', help='Path to the input PDF file')
    parser.add_argument('output_pdf', nargs='?', help='Path of the reordered PDF (default: <input>_2.pdf)')
    args = parser.parse_args(argv)

    output_pdf = args.output_pdf or booklet_output_path(args.input_pdf)
    try:
        booklet_reorder(SourceDocument.from_file(args.input_pdf), output_pdf)
    except AssemblyError as e:
        logging.error(f"Error reordering PDF: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
