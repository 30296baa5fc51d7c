import pytest

from settings_lib.file import (
    InvalidStateError,
    SettingsAccessor,
    SettingsFileError,
    SettingsIOError,
    check,
    iter_lines,
    reading,
    writing,
)
from settings_lib.file.types import FileStatus, SettingsFileResult as R
from settings_lib.medium import MemoryMedium
from tests.helpers import FaultyMedium


def test_check_maps_results():
    assert check(R.SUCCESS) == R.SUCCESS
    assert check(R.END_OF_FILE) == R.END_OF_FILE
    with pytest.raises(InvalidStateError):
        check(R.INVALID_STATE)
    with pytest.raises(SettingsIOError):
        check(R.IO_ERROR)
    assert issubclass(SettingsIOError, OSError)
    assert issubclass(InvalidStateError, SettingsFileError)


def test_writing_then_reading(medium):
    a = SettingsAccessor(medium)
    with writing(a) as f:
        f.write('a=1\n')
        f.write('b=2')
    assert a.get_open_state() == FileStatus.FILE_CLOSED

    with reading(a) as f:
        assert list(iter_lines(f)) == [b'a=1\n', b'b=2']
    assert a.get_open_state() == FileStatus.FILE_CLOSED


def test_writing_persists_on_exception(medium, store):
    a = SettingsAccessor(medium)
    with pytest.raises(RuntimeError):
        with writing(a) as f:
            f.write('partial\n')
            raise RuntimeError('boom')
    assert a.get_open_state() == FileStatus.FILE_CLOSED
    assert store.get('settings') == b'partial\n'


def test_reading_an_open_file_raises(medium):
    a = SettingsAccessor(medium)
    a.open_for_write()
    with pytest.raises(InvalidStateError):
        with reading(a):
            pass
    assert a.get_open_state() == FileStatus.FILE_OPENED_FOR_WRITE


def test_writing_raises_on_close_failure(store):
    faulty = FaultyMedium(MemoryMedium(store, 'settings'))
    a = SettingsAccessor(faulty)
    with pytest.raises(SettingsIOError):
        with writing(a) as f:
            f.write('x')
            faulty.fail_close = 1
    # the follow-up force_close committed the flushed bytes
    assert a.get_open_state() == FileStatus.FILE_CLOSED
    assert store.get('settings') == b'x'


def test_iter_lines_raises_on_medium_fault(store):
    store.set('settings', b'a\n')
    faulty = FaultyMedium(MemoryMedium(store, 'settings'))
    a = SettingsAccessor(faulty)
    faulty.fail_read_chunk = 1
    with reading(a):
        with pytest.raises(SettingsIOError):
            list(iter_lines(a))
    assert a.get_open_state() == FileStatus.FILE_CLOSED
