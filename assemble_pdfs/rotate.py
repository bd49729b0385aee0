import sys
import logging
from assemble_pdfs.document_port import get_port
from assemble_pdfs.models import SourceDocument, RotationSpec
from assemble_pdfs.page_range import parse_range
from assemble_pdfs.errors import AssemblyError

logging.basicConfig(level=logging.INFO)

# Usage: python -m assemble_pdfs.rotate input.pdf output.pdf --turns 1 [--pages 2-5]


def rotation_plan(page_count, rotation):
    """(page_number, extra_degrees) for every page; pages outside the range get 0"""
    return [(page_number, rotation.degrees if rotation.start_page <= page_number <= rotation.end_page else 0)
            for page_number in range(1, page_count + 1)]


def rotate_pages(source, rotation, output_path, port=None, progress_callback=None):
    """
    Save source with the pages in rotation's range turned clockwise.

    Pages keep their order; the rotation is added to any rotation they already have.

    Returns:
        bool: True once the output is saved
    """
    if rotation.parent is not source:
        raise ValueError(f"Rotation is bound to '{rotation.parent.file_name}', not '{source.file_name}'")

    port = get_port(port)
    document = port.open(source.file_path)
    try:
        plan = rotation_plan(document.page_count, rotation)
        logging.info(f"Rotating pages {rotation.start_page}-{rotation.end_page} of '{source.file_name}' "
                     f"by {rotation.degrees} degrees")
        output = port.new_document()
        try:
            for page_number, degrees in plan:
                output.append_page(document.page(page_number), rotate=degrees)
                if progress_callback:
                    progress_callback(page_number, len(plan), f"Processed page {page_number}")
            output.save(output_path)
        finally:
            output.close()
    finally:
        document.close()

    logging.info(f"Rotated PDF saved to '{output_path}'")
    return True


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description='Rotate a range of pages in a PDF file')
    parser.add_argument('input_pdf', help='Path to the input PDF file')
    parser.add_argument('output_pdf', help='Path of the rotated PDF file')
    parser.add_argument('--turns', type=int, default=1, help='Clockwise quarter turns (default: 1)')
    parser.add_argument('--pages', help='Pages to rotate, e.g. "2-5" (default: all)')
    args = parser.parse_args(argv)

    try:
        source = SourceDocument.from_file(args.input_pdf)
        rotation = RotationSpec(source, args.turns)
        if args.pages and not rotation.page_range.set(*parse_range(args.pages)):
            logging.error(f"Range '{args.pages}' is not valid for '{args.input_pdf}'")
            return 1
        rotate_pages(source, rotation, args.output_pdf)
    except (AssemblyError, ValueError) as e:
        logging.error(f"Error rotating PDF: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
