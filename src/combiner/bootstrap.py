import os
import random
import socket
from urllib.parse import urlparse

from combiner.application.services.activity_tracking import register_activity_handlers
from combiner.application.services.combination_ledger import CombinationLedger
from combiner.application.services.combination_service import CombinationSession
from combiner.application.services.combination_settings import CombinationSettings
from combiner.application.services.cooldown_guard import CooldownGuard
from combiner.application.services.event_bus import EventBus
from combiner.application.services.icon_resolver import IconResolver
from combiner.application.services.rate_limiter import SlidingWindowRateLimiter
from combiner.application.services.resolution_pipeline import ResolutionPipeline
from combiner.application.services.translation_resolver import TranslationResolver
from combiner.domain.repositories import CombinationRecordRepository
from combiner.infrastructure.generative_text_client import GenerativeTextClient
from combiner.infrastructure.inmemory.inmemory_combination_repo import InMemoryCombinationRecordRepository
from combiner.infrastructure.lookup_cache import FileLookupCache


_DEFAULT_PORTS = {"postgresql": 5432, "mysql": 3306}


def _is_truthy(value: str | None, *, default: str = "0") -> bool:
    normalized = str(value if value is not None else default).strip().lower()
    return normalized in {"1", "true", "yes"}


def _api_key() -> str:
    return (os.getenv("COMBINER_LLM_API_KEY") or os.getenv("GROQ_API_KEY") or "").strip()


def _looks_like_local_database_unreachable(database_url: str) -> bool:
    parsed = urlparse(database_url)
    scheme = parsed.scheme.split("+", 1)[0]
    if scheme not in _DEFAULT_PORTS:
        return False

    host = (parsed.hostname or "").strip().lower()
    if host not in {"localhost", "127.0.0.1", "::1"}:
        return False

    port = parsed.port or _DEFAULT_PORTS[scheme]
    timeout = float(os.getenv("COMBINER_DB_CONNECT_TIMEOUT_S", "0.35"))
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return False
    except OSError:
        return True


def build_text_client() -> GenerativeTextClient | None:
    api_key = _api_key()
    enabled = _is_truthy(os.getenv("COMBINER_GENERATIVE_ENABLED"), default="1" if api_key else "0")
    if not enabled or not api_key:
        return None

    return GenerativeTextClient(
        api_key=api_key,
        base_url=os.getenv("COMBINER_LLM_BASE_URL", GenerativeTextClient.BASE_URL),
        word_model=os.getenv("COMBINER_LLM_WORD_MODEL", GenerativeTextClient.WORD_MODEL),
        lookup_model=os.getenv("COMBINER_LLM_LOOKUP_MODEL", GenerativeTextClient.LOOKUP_MODEL),
        timeout=float(os.getenv("COMBINER_LLM_TIMEOUT_S", "8")),
        retries=int(os.getenv("COMBINER_LLM_RETRIES", "0")),
        backoff_seconds=float(os.getenv("COMBINER_LLM_BACKOFF_S", "0.2")),
    )


def build_lookup_store() -> FileLookupCache | None:
    cache_dir = os.getenv("COMBINER_LOOKUP_CACHE_DIR", "").strip()
    if not cache_dir:
        return None
    ttl_seconds = int(os.getenv("COMBINER_LOOKUP_CACHE_TTL_S", "604800"))
    return FileLookupCache(cache_dir, ttl_seconds=ttl_seconds)


def _build_sql_repository(database_url: str) -> CombinationRecordRepository:
    from combiner.infrastructure.db.sql.connection import build_engine, build_session_factory
    from combiner.infrastructure.db.sql.repos import SqlCombinationRecordRepository
    from combiner.infrastructure.db.sql.schema import ensure_schema

    engine = build_engine(database_url)
    # Creating the schema doubles as the connectivity check.
    ensure_schema(engine)
    return SqlCombinationRecordRepository(build_session_factory(engine))


def build_ledger_repository() -> CombinationRecordRepository:
    database_url = os.getenv("COMBINER_DATABASE_URL")
    if database_url:
        if _looks_like_local_database_unreachable(database_url):
            print("Ledger database appears unreachable, falling back to in-memory.")
            return InMemoryCombinationRecordRepository()
        return _build_sql_repository(database_url)
    return InMemoryCombinationRecordRepository()


def create_combination_session(
    settings: CombinationSettings | None = None,
    *,
    repository: CombinationRecordRepository | None = None,
    text_client: GenerativeTextClient | None = None,
    activity_sink=None,
    rng: random.Random | None = None,
) -> CombinationSession:
    settings = settings or CombinationSettings.from_env()
    repository = repository if repository is not None else build_ledger_repository()
    text_client = text_client if text_client is not None else build_text_client()
    store = build_lookup_store()
    rng = rng or random.Random()

    rate_limiter = SlidingWindowRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_ms=settings.rate_limit_window_ms,
    )
    pipeline = ResolutionPipeline(
        rate_limiter,
        text_client=text_client,
        icon_resolver=IconResolver(text_client=text_client, store=store, rng=rng),
        translation_resolver=TranslationResolver(text_client=text_client, store=store),
        settings=settings,
        rng=rng,
    )
    guard = CooldownGuard(cooldown_ms=settings.cooldown_ms, release_delay_s=settings.release_delay_s)
    event_bus = EventBus()
    register_activity_handlers(event_bus, sink=activity_sink)

    return CombinationSession(
        pipeline,
        guard,
        ledger=CombinationLedger(repository, max_attempts=settings.ledger_max_attempts),
        event_bus=event_bus,
    )
