from .gateway_fixtures import (
    ALL_ACTIONS,
    DummyBackend,
    EchoProvider,
    FailingProvider,
    FakeClock,
    make_gateway,
    make_permissions,
)

__all__ = [
    "ALL_ACTIONS",
    "DummyBackend",
    "EchoProvider",
    "FailingProvider",
    "FakeClock",
    "make_gateway",
    "make_permissions",
]
