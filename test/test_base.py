from anyio import sleep
from pytest import fixture, mark, raises

from disposables import (
    AsyncDisposable,
    Disposable,
    DisposedError,
    dispose,
    dispose_async,
)


class Connection(Disposable):
    def __init__(self, error=None):
        self.error = error
        self.release_count = 0

    def _dispose(self):
        self.release_count += 1
        if self.error is not None:
            raise self.error

    def send(self):
        self._ensure_not_disposed()
        return "sent"


class AsyncConnection(AsyncDisposable):
    def __init__(self):
        self.release_count = 0

    async def _dispose(self):
        await sleep(0)
        self.release_count += 1


@fixture
def connection():
    return Connection()


class TestDisposable:
    def test_disposes_once(self, connection):
        assert not connection.is_disposed
        connection.dispose()
        connection.dispose()
        assert connection.is_disposed
        assert connection.release_count == 1

    def test_disposed_objects_are_skipped(self, connection):
        dispose(connection)
        dispose(connection, [connection])
        assert connection.release_count == 1

    def test_ensure_not_disposed(self, connection):
        assert connection.send() == "sent"
        connection.dispose()
        with raises(DisposedError, match="Connection is disposed"):
            connection.send()

    def test_context_manager(self, connection):
        with connection as entered:
            assert entered is connection
        assert connection.is_disposed

    def test_context_manager_keeps_original_error(self, ignored_errors):
        original, secondary = ValueError("original"), RuntimeError("secondary")
        connection = Connection(error=secondary)
        with raises(ValueError) as info:
            with connection:
                raise original
        assert info.value is original
        assert connection.is_disposed
        assert ignored_errors == [secondary]

    def test_abstract(self):
        with raises(TypeError):
            Disposable()


@mark.anyio
class TestAsyncDisposable:
    async def test_disposes_once(self):
        connection = AsyncConnection()
        await connection.dispose()
        await connection.dispose()
        assert connection.is_disposed
        assert connection.release_count == 1

    async def test_dispose_async(self):
        connection = AsyncConnection()
        await dispose_async(connection, [connection])
        assert connection.release_count == 1

    async def test_context_manager(self):
        async with AsyncConnection() as connection:
            assert not connection.is_disposed
        assert connection.is_disposed
        assert connection.release_count == 1

    async def test_abstract(self):
        with raises(TypeError):
            AsyncDisposable()
