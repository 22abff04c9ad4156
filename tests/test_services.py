import pytest

from spriteforge import services


class _Clock:
    pass


class _FastClock(_Clock):
    pass


@pytest.fixture(autouse=True)
def _clean_registry():
    services.reset()
    yield
    services.reset()


def test_provided_service_is_returned():
    clock = _Clock()
    services.provide(_Clock, clock)
    assert services.get(_Clock) is clock


def test_missing_service_is_none():
    assert services.get(_Clock) is None


def test_provide_replaces_previous_service():
    first, second = _Clock(), _Clock()
    services.provide(_Clock, first)
    services.provide(_Clock, second)
    assert services.get(_Clock) is second


def test_keys_are_exact_types():
    services.provide(_FastClock, _FastClock())
    assert services.get(_Clock) is None
    assert isinstance(services.get(_FastClock), _FastClock)


def test_reset_forgets_everything():
    services.provide(_Clock, _Clock())
    services.provide("name", "value")
    services.reset()
    assert services.get(_Clock) is None
    assert services.get("name") is None