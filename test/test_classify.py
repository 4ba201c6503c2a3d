from io import StringIO
from pytest import mark, raises
from types import SimpleNamespace

from disposables import Shape, classify, is_awaitable, is_disposable, is_disposed


async def produce(value=None):
    return value


class Closeable:
    def close(self):
        pass


class TestIsDisposable:
    @mark.parametrize("method", ["dispose", "destroy", "delete", "close", "aclose"])
    def test_objects_with_release_method(self, method):
        assert is_disposable(SimpleNamespace(**{method: lambda: None}))

    def test_non_disposables(self):
        for value in (None, False, True, 1, 2.5, "x", b"x", {}, [], object()):
            assert not is_disposable(value)

    def test_delete_requiring_arguments(self):
        assert not is_disposable(SimpleNamespace(delete=lambda key: None))
        assert is_disposable(SimpleNamespace(delete=lambda key=None: None))
        assert is_disposable(SimpleNamespace(delete=lambda *args: None))

    def test_classes_and_functions(self):
        def func():
            pass

        func.dispose = lambda: None

        assert not is_disposable(Closeable)
        assert not is_disposable(func)
        assert is_disposable(Closeable())

    def test_streams(self):
        assert is_disposable(StringIO())

    def test_coroutines(self):
        coro = produce()
        try:
            assert not is_disposable(coro)
        finally:
            coro.close()


class TestIsDisposed:
    def test_none(self):
        assert is_disposed(None)

    def test_objects_without_marker(self):
        assert not is_disposed(object())
        assert not is_disposed(SimpleNamespace(dispose=lambda: None))

    def test_marker_attribute(self):
        assert is_disposed(SimpleNamespace(is_disposed=True))
        assert not is_disposed(SimpleNamespace(is_disposed=False))
        assert is_disposed(SimpleNamespace(closed=True))
        assert not is_disposed(SimpleNamespace(closed=False))

    def test_marker_method(self):
        assert is_disposed(SimpleNamespace(is_disposed=lambda: True))
        assert not is_disposed(SimpleNamespace(is_disposed=lambda: False))

    def test_marker_method_errors_are_not_masked(self):
        def fail():
            raise ValueError("boom")

        with raises(ValueError):
            is_disposed(SimpleNamespace(is_disposed=fail))

    def test_streams(self):
        stream = StringIO()
        assert not is_disposed(stream)
        stream.close()
        assert is_disposed(stream)

    def test_classes(self):
        assert not is_disposed(StringIO)


class TestIsAwaitable:
    def test_coroutines(self):
        coro = produce()
        try:
            assert is_awaitable(coro)
        finally:
            coro.close()

    def test_objects_with_await(self):
        class Waiter:
            def __await__(self):
                yield

        assert is_awaitable(Waiter())

    def test_non_awaitables(self):
        assert not is_awaitable(None)
        assert not is_awaitable(produce)
        assert not is_awaitable([])


class TestClassify:
    def test_scalars_and_none(self):
        assert classify(None).shape is Shape.NULLISH
        for value in (False, 1, 2.5, "x", b"x", bytearray(b"x")):
            assert classify(value).shape is Shape.OPAQUE

    def test_released(self):
        value = SimpleNamespace(is_disposed=True, dispose=lambda: None)
        assert classify(value) == (Shape.RELEASED, None)

    def test_releasable(self):
        value = SimpleNamespace(close=lambda: None)
        shape, release = classify(value)
        assert shape is Shape.RELEASABLE
        assert release is value.close

    def test_precedence_of_release_methods(self):
        value = SimpleNamespace(
            close=lambda: None,
            delete=lambda: None,
            destroy=lambda: None,
            dispose=lambda: None,
        )
        assert classify(value).release is value.dispose

        del value.dispose
        assert classify(value).release is value.destroy

        del value.destroy
        assert classify(value).release is value.delete

        value.delete = lambda key: None
        assert classify(value).release is value.close

        del value.close
        assert classify(value).shape is Shape.OPAQUE

    def test_pending(self):
        coro = produce()
        try:
            assert classify(coro).shape is Shape.PENDING
        finally:
            coro.close()

    def test_sequences(self):
        for value in ([], (), {1, 2}, {"a": 1}, iter([1, 2])):
            assert classify(value).shape is Shape.SEQUENCE

    def test_factories(self):
        assert classify(lambda: None).shape is Shape.FACTORY
        assert classify(produce).shape is Shape.FACTORY

    def test_opaque(self):
        assert classify(object()).shape is Shape.OPAQUE
        assert classify(Closeable).shape is Shape.OPAQUE
