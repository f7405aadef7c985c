from collections.abc import AsyncGenerator, Sequence

import pytest
from httpx import ASGITransport, AsyncClient

from krishi_sakhi.core.config import settings

# Override settings for tests
settings.gemini_api_key = "test-key"
settings.gemini_models = "model-a,model-b,model-c"
settings.min_interval_ms = 3000
settings.app_env = "development"

from krishi_sakhi.advisor.completion_client import BaseCompletionClient  # noqa: E402
from krishi_sakhi.advisor.service import AdvisorService, get_advisor, reset_advisor  # noqa: E402
from krishi_sakhi.advisor.throttle import ThrottleGate  # noqa: E402
from krishi_sakhi.main import app  # noqa: E402


class FakeCompletionClient(BaseCompletionClient):
    """Scripted completion client: model → reply text or exception to raise."""

    def __init__(self, script: dict[str, str | BaseException] | None = None, default: str = "Advice text"):
        self.script = script or {}
        self.default = default
        self.calls: list[tuple[str, str]] = []

    async def generate(self, model: str, prompt: str) -> str:
        self.calls.append((model, prompt))
        outcome = self.script.get(model, self.default)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def called_models(self) -> list[str]:
        return [model for model, _ in self.calls]


class ManualClock:
    """Monotonic-ms clock advanced by hand."""

    def __init__(self, start: float = 10_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def make_advisor(
    client: FakeCompletionClient,
    models: Sequence[str] = ("model-a", "model-b", "model-c"),
    api_key: str = "test-key",
    clock: ManualClock | None = None,
    min_interval_ms: int = 3000,
) -> AdvisorService:
    throttle = ThrottleGate(min_interval_ms=min_interval_ms, clock=clock or ManualClock())
    return AdvisorService(api_key=api_key, model_candidates=models, client=client, throttle=throttle)


@pytest.fixture(autouse=True)
def _fresh_advisor():
    """Each test starts without a cached process-wide advisor."""
    reset_advisor()
    yield
    reset_advisor()
    app.dependency_overrides.clear()


@pytest.fixture
def fake_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def scripted_client():
    """Factory for a FakeCompletionClient with a per-model script."""
    return FakeCompletionClient


@pytest.fixture
def advisor_factory():
    """Factory building an AdvisorService around a fake client and manual clock."""
    return make_advisor


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def override_advisor():
    """Install an AdvisorService as the API dependency."""

    def _install(advisor: AdvisorService) -> AdvisorService:
        app.dependency_overrides[get_advisor] = lambda: advisor
        return advisor

    return _install
