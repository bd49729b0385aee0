from assemble_pdfs.errors import SaveError
from utils.process_with_progress import run_with_progress, start_job


def test_successful_single_output_job():
    job_progress = {}

    def operation(source, output_path, progress_callback=None):
        progress_callback(1, 2, "half way")
        assert job_progress['job']['percentage'] == 50
        progress_callback(2, 2, "saving")
        assert job_progress['job']['percentage'] == 99
        return True

    run_with_progress('job', job_progress, operation, 'in.pdf', 'out.pdf')
    assert job_progress['job']['status'] == 'complete'
    assert job_progress['job']['output_paths'] == ['out.pdf']
    assert job_progress['job']['percentage'] == 100


def test_multi_output_job_reports_every_file():
    job_progress = {}
    run_with_progress('job', job_progress, lambda progress_callback=None: ['a.pdf', 'b.pdf'])
    assert job_progress['job']['output_paths'] == ['a.pdf', 'b.pdf']


def test_failure_is_reported_once_with_message():
    job_progress = {}

    def operation(progress_callback=None):
        raise SaveError('out.pdf', 'disk full')

    run_with_progress('job', job_progress, operation)
    assert job_progress['job']['status'] == 'error'
    assert 'disk full' in job_progress['job']['message']


def test_unexpected_exception_is_reported():
    job_progress = {}

    def operation(progress_callback=None):
        raise RuntimeError('boom')

    run_with_progress('job', job_progress, operation)
    assert job_progress['job'] == {'status': 'error', 'message': 'Error: boom', 'percentage': 0}


def test_noop_operation_is_an_error():
    job_progress = {}
    run_with_progress('job', job_progress, lambda output_path, progress_callback=None: False, 'out.pdf')
    assert job_progress['job']['status'] == 'error'


def test_start_job_runs_in_background_thread():
    job_progress = {}
    thread = start_job('job', job_progress, lambda output_path, progress_callback=None: True, output_path='x.pdf')
    thread.join(timeout=5)
    assert job_progress['job']['output_paths'] == ['x.pdf']
