# Load necessary libraries
from flask import Flask, request, jsonify
import os
import uuid
import atexit
import logging
from werkzeug.utils import secure_filename
from assemble_pdfs.models import SourceDocument, RotationSpec
from assemble_pdfs.working_sets import SourceList, SplitJob, can_merge, can_interleave, can_split
from assemble_pdfs.errors import AssemblyError, DuplicateDestinationError
from assemble_pdfs.merge import merge_pdfs
from assemble_pdfs.split import split_pdf
from assemble_pdfs.interleave import interleave_pdfs
from assemble_pdfs.booklet import booklet_reorder
from assemble_pdfs.rotate import rotate_pages
from utils.manage_temp import create_temp_folder, cleanup_temp_folder
from utils.manage_output_dir import get_default_output_folder, resolve_output_folder
from utils.process_with_progress import start_job
from utils.filename_utils import (make_unique_filename, ensure_pdf_extension, booklet_output_path,
                                  same_destination, strip_unique_counter)

DEBUG = os.environ.get('PDF_ASSEMBLER_DEBUG', '1') == '1'

# Configure logging
if DEBUG:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(levelname)s - %(message)s')
else:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

# Create default output directory
DEFAULT_OUTPUT_FOLDER = get_default_output_folder()
logging.debug(f"Default output folder: {DEFAULT_OUTPUT_FOLDER}")

# Uploaded sources live here until the process exits
TEMP_FOLDER = create_temp_folder()
atexit.register(lambda: cleanup_temp_folder(TEMP_FOLDER))

app = Flask(__name__)
app.config['UPLOAD_FOLDER'] = TEMP_FOLDER
app.config['OUTPUT_FOLDER'] = DEFAULT_OUTPUT_FOLDER
ALLOWED_EXTENSIONS = {'pdf'}

# Progress of every background job, keyed by job id
job_progress = {}


class InvalidRequest(Exception):
    """Request fields are missing or invalid"""


def allowed_file(filename, allowed=ALLOWED_EXTENSIONS):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed


def save_upload(upload):
    """Store an uploaded PDF in the upload folder and wrap it as a SourceDocument"""
    if not upload or not upload.filename or not allowed_file(upload.filename):
        raise InvalidRequest('Only PDF files can be uploaded.')
    filename = ensure_pdf_extension(secure_filename(upload.filename) or 'upload')
    path = make_unique_filename(os.path.join(app.config['UPLOAD_FOLDER'], filename))
    upload.save(path)
    return SourceDocument.from_file(path)


def apply_range(target, start, end):
    """Apply optional start/end form values to target.page_range"""
    if not start and not end:
        return
    try:
        start = int(start) if start else target.page_range.start
        end = int(end) if end else target.page_range.end
    except ValueError:
        raise InvalidRequest(f'Page range must be numeric, got {start!r}-{end!r}.')
    if not target.page_range.set(start, end):
        raise InvalidRequest(f'Invalid page range {start}-{end} (document has {target.page_range.page_count} pages).')


def output_path_for(filename, output_folder):
    folder = resolve_output_folder(output_folder, app.config['OUTPUT_FOLDER'])
    return make_unique_filename(os.path.join(folder, secure_filename(ensure_pdf_extension(filename))))


def build_source_list():
    """SourceList from the pdf_list uploads and their optional start_page/end_page lists"""
    uploads = request.files.getlist('pdf_list')
    starts = request.form.getlist('start_page')
    ends = request.form.getlist('end_page')
    sources = SourceList()
    for i, upload in enumerate(uploads):
        source = save_upload(upload)
        apply_range(source,
                    starts[i] if i < len(starts) else None,
                    ends[i] if i < len(ends) else None)
        sources.add(source)
    return sources


def launch(operation, *args):
    job_id = str(uuid.uuid4())
    start_job(job_id, job_progress, operation, *args)
    return jsonify({'success': True, 'job_id': job_id})


@app.errorhandler(InvalidRequest)
def handle_bad_request(e):
    return jsonify({'success': False, 'error': str(e)}), 400


@app.errorhandler(AssemblyError)
def handle_assembly_error(e):
    logging.error(f"Request failed: {e}")
    return jsonify({'success': False, 'error': str(e)}), 400


@app.errorhandler(404)
def handle_404(e):
    return jsonify({'success': False, 'error': 'Not found'}), 404


@app.route('/api/get_default_output_folder')
def get_default_output_folder_api():
    """Return the default output folder path"""
    return jsonify({'folder': app.config['OUTPUT_FOLDER']})


@app.route('/api/page_count', methods=['POST'])
def api_page_count():
    source = save_upload(request.files.get('input_pdf'))
    return jsonify({'success': True, 'file_name': source.file_name, 'page_count': source.page_count})


@app.route('/api/merge_pdfs', methods=['POST'])
def api_merge_pdfs():
    output_filename = request.form.get('output_filename')
    if not request.files.getlist('pdf_list') or not output_filename:
        raise InvalidRequest('Missing required fields.')
    sources = build_source_list()
    if not can_merge(sources):
        raise InvalidRequest('At least two different PDF files are needed to merge.')
    output_path = output_path_for(output_filename, request.form.get('output_folder'))
    return launch(merge_pdfs, list(sources), output_path)


@app.route('/api/interleave_pdfs', methods=['POST'])
def api_interleave_pdfs():
    output_filename = request.form.get('output_filename')
    if not request.files.getlist('pdf_list') or not output_filename:
        raise InvalidRequest('Missing required fields.')
    sources = build_source_list()
    if not can_interleave(sources):
        raise InvalidRequest('At least two different PDF files are needed to interleave.')
    output_path = output_path_for(output_filename, request.form.get('output_folder'))
    return launch(interleave_pdfs, list(sources), output_path)


@app.route('/api/split_pdf', methods=['POST'])
def api_split_pdf():
    input_pdf = request.files.get('input_pdf')
    filenames = request.form.getlist('extract_filename')
    if not input_pdf or not filenames:
        raise InvalidRequest('Missing required fields.')
    starts = request.form.getlist('extract_start')
    ends = request.form.getlist('extract_end')
    folder = resolve_output_folder(request.form.get('output_folder'), app.config['OUTPUT_FOLDER'])

    job = SplitJob(save_upload(input_pdf))
    requested = []
    for i, filename in enumerate(filenames):
        destination = os.path.join(folder, secure_filename(ensure_pdf_extension(filename)))
        # DuplicateDestinationError is answered with 400 before any page is written
        if any(same_destination(destination, other) for other in requested):
            raise DuplicateDestinationError(destination)
        requested.append(destination)
        extract = job.add_extract(make_unique_filename(destination))
        apply_range(extract,
                    starts[i] if i < len(starts) else None,
                    ends[i] if i < len(ends) else None)
    if not can_split(job):
        raise InvalidRequest('Nothing to split.')
    return launch(split_pdf, job.source, job.extracts)


@app.route('/api/booklet_pdf', methods=['POST'])
def api_booklet_pdf():
    input_pdf = request.files.get('input_pdf')
    if not input_pdf:
        raise InvalidRequest('Missing required fields.')
    source = save_upload(input_pdf)
    output_filename = request.form.get('output_filename') or os.path.basename(
        booklet_output_path(strip_unique_counter(source.file_name)))
    output_path = output_path_for(output_filename, request.form.get('output_folder'))
    return launch(booklet_reorder, source, output_path)


@app.route('/api/rotate_pdf', methods=['POST'])
def api_rotate_pdf():
    input_pdf = request.files.get('input_pdf')
    output_filename = request.form.get('output_filename')
    if not input_pdf or not output_filename:
        raise InvalidRequest('Missing required fields.')
    try:
        quarter_turns = int(request.form.get('quarter_turns', '1'))
    except ValueError:
        raise InvalidRequest('quarter_turns must be an integer.')
    source = save_upload(input_pdf)
    rotation = RotationSpec(source, quarter_turns)
    apply_range(rotation, request.form.get('start_page'), request.form.get('end_page'))
    output_path = output_path_for(output_filename, request.form.get('output_folder'))
    return launch(rotate_pages, source, rotation, output_path)


@app.route('/api/job_progress/<job_id>')
def get_job_progress(job_id):
    """Get progress for a background job"""
    if job_id in job_progress:
        return jsonify(job_progress[job_id])
    return jsonify({'error': 'Job not found'}), 404


if __name__ == '__main__':
    app.run(debug=DEBUG)
