from pytest import fixture

from disposables import reporting_ignored_errors_to


@fixture(params=["asyncio", "trio"])
def anyio_backend(request):
    return request.param


@fixture
def ignored_errors():
    """Collects the errors passed to the handler of ignored errors while the
    test is running.
    """
    errors = []
    with reporting_ignored_errors_to(errors.append):
        yield errors
