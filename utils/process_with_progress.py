import logging
import threading
from assemble_pdfs.errors import AssemblyError


def start_job(job_id, job_progress, operation, *args, **kwargs):
    """Run operation in a daemon thread, reporting into job_progress[job_id]"""
    job_progress[job_id] = {
        'status': 'starting',
        'current': 0,
        'total': 0,
        'percentage': 0,
        'message': 'Initializing...'
    }
    job_thread = threading.Thread(
        target=run_with_progress,
        args=(job_id, job_progress, operation) + args,
        kwargs=kwargs,
        daemon=True
    )
    job_thread.start()
    return job_thread


def run_with_progress(job_id, job_progress, operation, *args, **kwargs):
    """
    Run an assembly operation and record its progress and outcome.

    operation must accept a progress_callback keyword. Its return value is
    turned into the list of written files: a list is used as-is, True means
    the output_path keyword (or the last positional argument) was written.
    Success or failure is recorded once, after the operation finishes.
    """
    job_progress.setdefault(job_id, {'status': 'starting', 'message': 'Initializing...'})

    def progress_callback(current, total, message):
        percentage = int((current / total) * 100) if total > 0 else 0
        job_progress[job_id].update({
            'status': 'processing',
            'current': current,
            'total': total,
            # Hold back 100% until the outcome is known
            'percentage': min(percentage, 99),
            'message': message
        })
        logging.debug(f"Job {job_id} progress: {current}/{total}, {percentage}% - {message}")

    try:
        result = operation(*args, progress_callback=progress_callback, **kwargs)
    except AssemblyError as e:
        logging.error(f"Job {job_id} failed: {e}")
        job_progress[job_id] = {
            'status': 'error',
            'message': f'Error: {str(e)}',
            'percentage': 0
        }
        return
    except Exception as e:
        logging.exception(f"Job {job_id} failed unexpectedly")
        job_progress[job_id] = {
            'status': 'error',
            'message': f'Error: {str(e)}',
            'percentage': 0
        }
        return

    if isinstance(result, list):
        output_paths = result
    elif result:
        output_paths = [kwargs['output_path'] if 'output_path' in kwargs else args[-1]]
    else:
        output_paths = []

    if output_paths:
        logging.info(f"Job {job_id} complete: {len(output_paths)} file(s) written")
        job_progress[job_id] = {
            'status': 'complete',
            'percentage': 100,
            'message': 'Complete!',
            'output_paths': output_paths
        }
    else:
        job_progress[job_id] = {
            'status': 'error',
            'message': 'Nothing to do',
            'percentage': 0
        }
