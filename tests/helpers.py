from typing import Any, List

from settings_lib.file.types import SettingsFileResult


class FaultyMedium:
    """Wrap a storage medium and fail selected operations on demand.

    Set `fail_<operation>` to the number of upcoming calls that should raise
    `OSError` (for example `fail_write_chunk = 1`). Every call is recorded in
    `calls` as its operation name.
    """

    OPERATIONS = ('open_read', 'read_chunk', 'open_write', 'write_chunk', 'flush', 'close', 'discard')

    def __init__(self, inner: Any) -> None:
        self.inner = inner
        self.calls: List[str] = []
        for op in self.OPERATIONS:
            setattr(self, f'fail_{op}', 0)

    @property
    def identity(self) -> str:
        return self.inner.identity

    def _call(self, op: str, *args):
        self.calls.append(op)
        remaining = getattr(self, f'fail_{op}')
        if remaining:
            setattr(self, f'fail_{op}', remaining - 1)
            raise OSError(f'injected {op} failure')
        return getattr(self.inner, op)(*args)

    def open_read(self) -> None:
        return self._call('open_read')

    def read_chunk(self, size: int) -> bytes:
        return self._call('read_chunk', size)

    def open_write(self) -> None:
        return self._call('open_write')

    def write_chunk(self, data: bytes) -> None:
        return self._call('write_chunk', data)

    def flush(self) -> None:
        return self._call('flush')

    def close(self) -> None:
        return self._call('close')

    def discard(self) -> None:
        return self._call('discard')


def read_all_lines(accessor) -> list:
    """Read `accessor` line by line, returning (result, bytes) pairs."""
    out = []
    while True:
        buf = bytearray()
        res = accessor.read_line(buf)
        out.append((res, bytes(buf)))
        if res != SettingsFileResult.SUCCESS:
            return out
