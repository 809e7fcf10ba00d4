import pytest

from catalog_api.rate_limit import RequestRateLimiter


@pytest.fixture
def limiter():
    return RequestRateLimiter("3 per 15 minute", "Slow down")


def test_limit_string_is_parsed(limiter):
    assert limiter.limit.amount == 3
    assert limiter.limit.get_expiry() == 15 * 60


def test_hits_beyond_limit_are_refused(limiter):
    assert [limiter.hit("10.0.0.1") for _ in range(4)] == [True, True, True, False]


def test_addresses_are_counted_separately(limiter):
    for _ in range(3):
        limiter.hit("10.0.0.1")

    assert limiter.hit("10.0.0.1") is False
    assert limiter.hit("10.0.0.2") is True


def test_default_limit_from_settings(settings):
    limiter = RequestRateLimiter(settings.rate_limit, settings.rate_limit_message)
    assert limiter.limit.amount == 100
    assert limiter.limit.get_expiry() == 15 * 60
