import pytest

from assemble_pdfs.errors import DuplicateDestinationError
from assemble_pdfs.models import SourceDocument
from assemble_pdfs.working_sets import (SourceList, SplitJob, can_merge, can_interleave, can_split,
                                        can_add_extract, can_reorder)


def names(sources):
    return [source.file_name for source in sources]


def test_add_files_keeps_existing_unique_pdfs(make_pdf, tmp_path):
    first = make_pdf('A', 2)
    second = make_pdf('B', 3, filename='B.PDF')
    text_file = tmp_path / 'notes.txt'
    text_file.write_text('hello')
    sources = SourceList()
    added = sources.add_files([first, str(tmp_path / 'missing.pdf'), str(text_file), second, first])
    assert names(added) == ['A.pdf', 'B.PDF']
    assert names(sources) == ['A.pdf', 'B.PDF']


def test_add_files_skips_unreadable_pdf(tmp_path):
    broken = tmp_path / 'broken.pdf'
    broken.write_bytes(b'garbage')
    sources = SourceList()
    assert sources.add_files([str(broken)]) == []
    assert len(sources) == 0


def test_add_rejects_duplicate_path():
    sources = SourceList()
    assert sources.add(SourceDocument('a.pdf', 1))
    assert sources.add(SourceDocument('a.pdf', 1)) is False
    assert len(sources) == 1


def make_list(*paths):
    sources = SourceList()
    for path in paths:
        sources.add(SourceDocument(path, 2))
    return sources


def test_move_up_and_down_swap_neighbours():
    sources = make_list('a.pdf', 'b.pdf', 'c.pdf')
    c = sources[2]
    assert sources.move_up(c)
    assert names(sources) == ['a.pdf', 'c.pdf', 'b.pdf']
    assert sources.move_down(sources[0])
    assert names(sources) == ['c.pdf', 'a.pdf', 'b.pdf']


def test_move_up_first_and_move_down_last_are_noops():
    sources = make_list('a.pdf', 'b.pdf', 'c.pdf')
    assert sources.can_move_up(sources[0]) is False
    assert sources.move_up(sources[0]) is False
    assert sources.can_move_down(sources[2]) is False
    assert sources.move_down(sources[2]) is False
    assert names(sources) == ['a.pdf', 'b.pdf', 'c.pdf']


def test_move_of_unknown_document_is_noop():
    sources = make_list('a.pdf', 'b.pdf')
    stranger = SourceDocument('x.pdf', 1)
    assert sources.move_up(stranger) is False
    assert sources.move_down(stranger) is False


def test_remove():
    sources = make_list('a.pdf', 'b.pdf')
    assert sources.remove(sources[0])
    assert names(sources) == ['b.pdf']
    assert sources.remove(SourceDocument('x.pdf', 1)) is False


def test_merge_and_interleave_need_two_sources():
    assert can_merge(make_list('a.pdf')) is False
    assert can_interleave(make_list('a.pdf')) is False
    assert can_merge(make_list('a.pdf', 'b.pdf'))
    assert can_interleave(make_list('a.pdf', 'b.pdf'))
    assert can_merge(None) is False


def test_split_job_predicates():
    job = SplitJob()
    assert can_add_extract(job) is False
    assert can_split(job) is False
    with pytest.raises(ValueError):
        job.add_extract('out.pdf')
    job.set_source(SourceDocument('a.pdf', 5))
    assert can_add_extract(job)
    assert can_split(job) is False
    job.add_extract('out.pdf')
    assert can_split(job)


def test_duplicate_destination_rejected_at_registration(tmp_path):
    job = SplitJob(SourceDocument('a.pdf', 5))
    job.add_extract(str(tmp_path / 'Part.pdf'))
    with pytest.raises(DuplicateDestinationError):
        job.add_extract(str(tmp_path / 'part.PDF'))
    assert len(job.extracts) == 1


def test_rename_extract_rejects_taken_destination(tmp_path):
    job = SplitJob(SourceDocument('a.pdf', 5))
    first = job.add_extract(str(tmp_path / 'one.pdf'))
    second = job.add_extract(str(tmp_path / 'two.pdf'))
    assert job.rename_extract(second, str(tmp_path / 'ONE.pdf')) is False
    assert job.rename_extract(first, str(tmp_path / 'One.pdf'))
    assert first.destination_path == str(tmp_path / 'One.pdf')


def test_remove_extract_and_change_source():
    job = SplitJob(SourceDocument('a.pdf', 5))
    extract = job.add_extract('one.pdf')
    job.add_extract('two.pdf')
    assert job.remove_extract(extract)
    assert job.remove_extract(extract) is False
    assert len(job.extracts) == 1
    job.set_source(SourceDocument('b.pdf', 3))
    assert job.extracts == []


def test_can_reorder():
    assert can_reorder(None) is False
    assert can_reorder(SourceDocument('a.pdf', 1))
