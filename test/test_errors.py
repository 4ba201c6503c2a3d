from pytest import raises
from types import SimpleNamespace

from disposables import DisposedError, throw_if_disposed


class Connection:
    def __init__(self):
        self.is_disposed = False

    def dispose(self):
        self.is_disposed = True


class TestThrowIfDisposed:
    def test_none(self):
        with raises(DisposedError, match="object is None"):
            throw_if_disposed(None)

        with raises(DisposedError, match="conn is None"):
            throw_if_disposed(None, "conn")

    def test_disposed_objects(self):
        conn = Connection()
        conn.dispose()

        with raises(DisposedError, match="Connection is disposed"):
            throw_if_disposed(conn)

        with raises(DisposedError, match="conn is disposed"):
            throw_if_disposed(conn, "conn")

    def test_live_objects(self):
        throw_if_disposed(Connection())
        throw_if_disposed(SimpleNamespace(closed=False))
        throw_if_disposed(object(), "anything")

    def test_error_kind(self):
        assert issubclass(DisposedError, RuntimeError)
