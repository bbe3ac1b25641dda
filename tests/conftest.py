import pytest

from tests.fixtures.gateway_fixtures import FakeClock, make_gateway


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def gateway(clock):
    return make_gateway(clock=clock)
