#!/usr/bin/env python3
"""
Default location for assembled documents
"""

import os
import logging
import tempfile

OUTPUT_FOLDER_NAME = 'PDF_Assembler_Output'


def get_default_output_folder():
    """Get default output folder - Documents/PDF_Assembler_Output, created if missing"""
    output_folder = os.path.join(os.path.expanduser('~'), 'Documents', OUTPUT_FOLDER_NAME)
    try:
        os.makedirs(output_folder, exist_ok=True)
        return output_folder
    except OSError as e:
        # Documents is not writable (service accounts, sandboxes)
        logging.warning(f"Cannot use '{output_folder}' ({e}), falling back to a temporary folder")
        return tempfile.mkdtemp(prefix='pdf_assembler_')


def resolve_output_folder(requested, default):
    """Use the requested folder when given, creating it if needed"""
    folder = requested or default
    os.makedirs(folder, exist_ok=True)
    return folder
