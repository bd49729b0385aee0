import sys
import logging
from assemble_pdfs.document_port import get_port
from assemble_pdfs.models import SourceDocument
from assemble_pdfs.page_range import split_path_and_range
from assemble_pdfs.working_sets import SplitJob
from assemble_pdfs.errors import AssemblyError, DuplicateDestinationError, SaveError
from utils.filename_utils import same_destination

logging.basicConfig(level=logging.INFO)


def check_destinations(extracts):
    """Raise DuplicateDestinationError if two extracts write to the same file"""
    seen = []
    for extract in extracts:
        if any(same_destination(extract.destination_path, path) for path in seen):
            raise DuplicateDestinationError(extract.destination_path)
        seen.append(extract.destination_path)


def split_pdf(source, extracts, port=None, progress_callback=None):
    """
    Write each extract's page range of source to the extract's destination.

    The source is opened once and shared by every extract. The first failing
    extract aborts the split: extracts saved before it are kept, later ones are
    not written.

    Args:
        source: SourceDocument to split
        extracts: Ordered ExtractSpecs bound to source
        port: DocumentPort to use, PyMuPDF by default
        progress_callback: Optional callable(current_extract, total_extracts, message)

    Returns:
        list: Destination paths written, in extract order. Empty if there was nothing to split.
    """
    extracts = list(extracts)
    if source is None or not extracts:
        logging.warning("Split needs a source document and at least one extract. Nothing to do.")
        return []
    for extract in extracts:
        if extract.parent is not source:
            raise ValueError(f"Extract '{extract.destination_path}' belongs to a different document")
    check_destinations(extracts)

    port = get_port(port)
    total_extracts = len(extracts)
    padding_width = len(str(total_extracts))
    written = []

    document = port.open(source.file_path)
    try:
        for idx, extract in enumerate(extracts, 1):
            label = str(idx).zfill(padding_width)
            if progress_callback:
                progress_callback(idx - 1, total_extracts, f"Starting extract {label} ({len(extract.page_range)} pages)")
            output = port.new_document()
            try:
                for page_number in extract.selected_pages():
                    logging.debug(f"Inserting page {page_number} into extract {label}")
                    output.append_page(document.page(page_number))
                output.save(extract.destination_path)
            except SaveError:
                logging.error(f"Extract {label} failed, {total_extracts - idx} remaining extracts skipped")
                raise
            finally:
                output.close()
            written.append(extract.destination_path)
            logging.info(f"Saved extract {label}: '{extract.destination_path}' "
                         f"(pages {extract.start_page}-{extract.end_page})")
            if progress_callback:
                progress_callback(idx, total_extracts, f"Completed extract {label}")
    finally:
        document.close()

    logging.info(f"Split '{source.file_name}' into {len(written)} files")
    return written


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description='Cut page ranges out of a PDF into separate files')
    parser.add_argument('input_pdf', help='Path to the PDF file to split')
    parser.add_argument('extracts', nargs='+', help='Output files with their ranges: out.pdf:1-3')
    args = parser.parse_args(argv)

    try:
        job = SplitJob(SourceDocument.from_file(args.input_pdf))
        for argument in args.extracts:
            path, page_range = split_path_and_range(argument)
            extract = job.add_extract(path)
            if page_range and not extract.page_range.set(*page_range):
                logging.error(f"Range {page_range[0]}-{page_range[1]} is not valid for '{args.input_pdf}'")
                return 1
        written = split_pdf(job.source, job.extracts)
    except (AssemblyError, ValueError) as e:
        logging.error(f"Error splitting PDF: {e}")
        return 1
    print(f"Wrote {len(written)} files")
    return 0


if __name__ == "__main__":
    sys.exit(main())
