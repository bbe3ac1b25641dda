"""Test doubles for the gateway: providers, a controllable clock, a backend stub."""
from app.llm.governor import RequestGovernor
from app.llm.types import GenerationOptions, PermissionSet
from app.services.gateway import GatewayService

ALL_ACTIONS = frozenset({"updateUI", "modifyLayout", "accessData", "suggestChanges", "executeCommands"})


class EchoProvider:
    """Returns a fixed reply and remembers what it was called with."""

    def __init__(self, reply: str = "ok"):
        self.reply = reply
        self.calls: list[tuple[str, GenerationOptions]] = []

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        self.calls.append((prompt, options))
        return self.reply


class FailingProvider:
    def __init__(self, exc: Exception):
        self.exc = exc
        self.calls = 0

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        self.calls += 1
        raise self.exc


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DummyBackend:
    def __init__(self):
        self.ui_updates = []
        self.commands = []
        self.closed = False

    async def update_ui(self, changes):
        self.ui_updates.append(changes)
        return {"applied": True, "changes": changes}

    async def execute_command(self, command):
        self.commands.append(command)
        return {"ok": True, "command": command}

    async def aclose(self):
        self.closed = True


def make_permissions(actions=ALL_ACTIONS, limit: int = 60, **kw) -> PermissionSet:
    return PermissionSet(allowed_actions=frozenset(actions), max_requests_per_minute=limit, **kw)


def make_gateway(permissions: PermissionSet | None = None, clock: FakeClock | None = None, **kw) -> GatewayService:
    permissions = permissions or make_permissions()
    governor = RequestGovernor(permissions, clock=clock or FakeClock())
    kw.setdefault("backend", DummyBackend())
    return GatewayService(permissions, governor=governor, **kw)
