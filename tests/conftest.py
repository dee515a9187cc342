"""Shared fixtures for the rangefp tests."""

import pytest
from hypothesis import settings

from rangefp import inrange
from rangefp.core.ops import Strategy


# the portable primitives loop once per power of the radix, so the first
# examples for a wide format can be slow
settings.register_profile('rangefp', deadline=None)
settings.load_profile('rangefp')


@pytest.fixture(autouse=True)
def fresh_boundaries():
    inrange.clear_cache()
    yield
    inrange.clear_cache()


@pytest.fixture(params=[Strategy.PLATFORM, Strategy.PORTABLE], ids=['platform', 'portable'])
def strategy(request):
    return request.param
