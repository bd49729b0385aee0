import sys
import logging
from assemble_pdfs.document_port import get_port
from assemble_pdfs.page_range import split_path_and_range
from assemble_pdfs.models import SourceDocument
from assemble_pdfs.working_sets import SourceList, can_merge
from assemble_pdfs.errors import AssemblyError

logging.basicConfig(level=logging.INFO)

# Usage: python -m assemble_pdfs.merge file1.pdf[:start-end] file2.pdf[:start-end] ... output.pdf


def merge_order(sources):
    """Pages drawn by a merge, as (source_index, page_number) pairs in output order"""
    return [(index, page_number)
            for index, source in enumerate(sources)
            for page_number in source.selected_pages()]


def merge_pdfs(sources, output_path, port=None, progress_callback=None):
    """
    Concatenate the selected range of every source into one document.

    Args:
        sources: Ordered SourceDocuments, at least two
        output_path: Where to save the merged document
        port: DocumentPort to use, PyMuPDF by default
        progress_callback: Optional callable(current_page, total_pages, message)

    Returns:
        bool: True once the output is saved, False if there was nothing to merge

    Raises:
        SourceOpenError, SaveError: The merge was aborted and nothing was written
    """
    sources = list(sources)
    if not can_merge(sources):
        logging.warning(f"Merge needs at least two documents, got {len(sources)}. Nothing to do.")
        return False

    port = get_port(port)
    total_pages = len(merge_order(sources))
    logging.info(f"Merging {len(sources)} documents ({total_pages} pages) into '{output_path}'")
    current_page = 0

    output = port.new_document()
    try:
        for i, source in enumerate(sources, 1):
            document = port.open(source.file_path)
            try:
                for page_number in source.selected_pages():
                    logging.debug(f"Appending page {page_number} of '{source.file_name}'")
                    output.append_page(document.page(page_number))
                    current_page += 1
                    if progress_callback:
                        progress_callback(current_page, total_pages, f"Added page {page_number} of {source.file_name}")
            finally:
                document.close()
            logging.info(f"Added '{source.file_name}' pages {source.start_page}-{source.end_page} "
                         f"({i}/{len(sources)}, {output.page_count} total pages)")

        if progress_callback:
            progress_callback(current_page, total_pages, "Saving merged PDF...")
        output.save(output_path)
    finally:
        output.close()

    logging.info(f"Merged PDF saved to '{output_path}'")
    return True


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description='Merge page ranges of several PDF files into one')
    parser.add_argument('inputs', nargs='+', help='Input PDF files, optionally with a range: file.pdf:2-5')
    parser.add_argument('output_pdf', help='Path of the merged PDF file')
    args = parser.parse_args(argv)

    sources = SourceList()
    try:
        for argument in args.inputs:
            path, page_range = split_path_and_range(argument)
            # Raises SourceOpenError for a missing or unreadable input
            source = SourceDocument.from_file(path)
            if page_range and not source.page_range.set(*page_range):
                logging.error(f"Range {page_range[0]}-{page_range[1]} is not valid for '{path}'")
                return 1
            if not sources.add(source):
                logging.warning(f"Skipping duplicate input '{path}'")
        if not merge_pdfs(sources, args.output_pdf):
            return 1
    except (AssemblyError, ValueError) as e:
        logging.error(f"Error merging PDFs: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
