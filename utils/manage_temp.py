#!/usr/bin/env python3
"""
Utility functions for managing temporary directories
"""

import os
import shutil
import logging
import tempfile


def create_temp_folder(prefix='pdf_assembler_temp_'):
    temp_folder = tempfile.mkdtemp(prefix=prefix)
    logging.debug(f"Created temporary folder: {temp_folder}")
    return temp_folder


def cleanup_temp_folder(temp_folder):
    if os.path.exists(temp_folder):
        shutil.rmtree(temp_folder, ignore_errors=True)
        logging.debug(f"Cleaned up temporary folder: {temp_folder}")
