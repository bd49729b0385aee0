"""
Utility functions for naming output files
"""
import os
import re
from pathlib import Path

BOOKLET_SUFFIX = '_2'

# Matches "name (3)" so numbering continues instead of nesting
NUMBERED_NAME = re.compile(r'^(.+?)\s*\((\d+)\)$')


def make_unique_filename(file_path, max_attempts=1000):
    """
    Return file_path, or "name (N).ext" with the first free N if it already exists.

    Args:
        file_path (str): The desired file path
        max_attempts (int): How many numbered candidates to try

    Returns:
        str: A path that does not exist yet
    """
    if not os.path.exists(file_path):
        return file_path

    path_obj = Path(file_path)
    match = NUMBERED_NAME.match(path_obj.stem)
    if match:
        base_name, number = match.group(1).strip(), int(match.group(2))
    else:
        base_name, number = path_obj.stem, 0

    for counter in range(number + 1, number + max_attempts + 1):
        candidate = path_obj.parent / f"{base_name} ({counter}){path_obj.suffix}"
        if not candidate.exists():
            return str(candidate)
    raise ValueError(f"Unable to create unique filename after {max_attempts} attempts for: {file_path}")


def ensure_pdf_extension(filename):
    if not filename.lower().endswith('.pdf'):
        filename += '.pdf'
    return filename


def booklet_output_path(input_path, suffix=BOOKLET_SUFFIX):
    """Default booklet destination: the input name with suffix added before the extension"""
    path_obj = Path(input_path)
    return str(path_obj.with_name(f"{path_obj.stem}{suffix}{path_obj.suffix or '.pdf'}"))


def same_destination(first, second):
    """Case-insensitive comparison of two output paths after normalisation"""
    return (os.path.normcase(os.path.abspath(first)).lower()
            == os.path.normcase(os.path.abspath(second)).lower())


def strip_unique_counter(file_path):
    """Undo make_unique_filename numbering: "name (2).pdf" -> "name.pdf" """
    path_obj = Path(file_path)
    match = NUMBERED_NAME.match(path_obj.stem)
    if not match:
        return file_path
    return str(path_obj.with_name(f"{match.group(1).strip()}{path_obj.suffix}"))
