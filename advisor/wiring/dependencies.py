from collections import OrderedDict
from functools import lru_cache
import logging
import re
from pathlib import Path

from fastapi import Header, HTTPException

from advisor.core.config import settings
from advisor.application.ports.catalog import CatalogPort
from advisor.application.ports.completion import CompletionPort
from advisor.application.ports.key_value_store import KeyValueStorePort
from advisor.application.use_cases.advisor_session import AdvisorSession
from advisor.infrastructure.catalog.http_catalog import HttpCatalog
from advisor.infrastructure.catalog.json_catalog import JsonFileCatalog
from advisor.infrastructure.completion.mock_completion import MockCompletion
from advisor.infrastructure.completion.openai_completion import OpenAICompletion
from advisor.infrastructure.completion.worker_client import WorkerCompletionClient
from advisor.infrastructure.store.json_store import JsonKeyValueStore
from advisor.infrastructure.store.memory_store import MemoryKeyValueStore
from advisor.infrastructure.store.selection_persistence import SelectionPersistence


SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,64}")

_sessions: OrderedDict[str, AdvisorSession] = OrderedDict()
logger = logging.getLogger(__name__)


@lru_cache
def get_completion() -> CompletionPort:
    provider = settings.COMPLETION_PROVIDER.lower()
    if provider == "mock":
        return MockCompletion()
    if provider in {"auto", "worker"} and settings.COMPLETION_ENDPOINT:
        logger.info("Using worker completion endpoint")
        return WorkerCompletionClient(
            endpoint=settings.COMPLETION_ENDPOINT,
            timeout=settings.COMPLETION_TIMEOUT_SECONDS,
        )
    if provider in {"auto", "openai"} and settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        logger.info("Using OpenAI completion (model=%s)", settings.OPENAI_MODEL)
        return OpenAICompletion()
    if provider != "auto":
        raise ValueError(f"COMPLETION_PROVIDER={provider} is not configured.")
    logger.info("Using MockCompletion (no endpoint or API key configured)")
    return MockCompletion()


@lru_cache
def get_catalog() -> CatalogPort:
    if settings.CATALOG_URL:
        return HttpCatalog(url=settings.CATALOG_URL, timeout=settings.CATALOG_TIMEOUT_SECONDS)
    return JsonFileCatalog(path=settings.CATALOG_PATH)


def get_key_value_store(session_id: str) -> KeyValueStorePort:
    if settings.STORE_PROVIDER.lower() == "memory":
        return MemoryKeyValueStore()
    return JsonKeyValueStore(data_dir=Path(settings.STORE_DATA_DIR) / session_id)


def build_session(session_id: str) -> AdvisorSession:
    session = AdvisorSession(
        session_id=session_id,
        catalog=get_catalog(),
        completion=get_completion(),
        selection_store=SelectionPersistence(
            store=get_key_value_store(session_id),
            key=settings.SELECTION_STORAGE_KEY,
        ),
        system_instruction=settings.SYSTEM_INSTRUCTION,
        tooltip_grace_seconds=settings.TOOLTIP_GRACE_SECONDS,
    )
    session.start()
    return session


async def get_session(x_session_id: str = Header("default")) -> AdvisorSession:
    if not SESSION_ID_PATTERN.fullmatch(x_session_id):
        raise HTTPException(status_code=400, detail="Invalid X-Session-Id")
    session = _sessions.get(x_session_id)
    if session is not None:
        _sessions.move_to_end(x_session_id)
        return session

    session = build_session(x_session_id)
    _sessions[x_session_id] = session
    while len(_sessions) > settings.MAX_SESSIONS:
        evicted_id, _ = _sessions.popitem(last=False)
        logger.info("Session evicted", extra={"session_id": evicted_id})
    return session
