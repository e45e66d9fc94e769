import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def disable_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("time.sleep", lambda *_args, **_kwargs: None)


@pytest.fixture(autouse=True)
def isolated_combiner_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "COMBINER_DATABASE_URL",
        "COMBINER_LLM_API_KEY",
        "GROQ_API_KEY",
        "COMBINER_GENERATIVE_ENABLED",
        "COMBINER_LOOKUP_CACHE_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_http_circuits():
    from combiner.infrastructure.resilient_http import reset_circuit_breakers

    reset_circuit_breakers()
    yield
    reset_circuit_breakers()
