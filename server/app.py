"""FastAPI server for wordmatch application."""

import logging
import os
import threading
from collections import OrderedDict, deque
from contextlib import asynccontextmanager
from enum import Enum

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from core.config import DEFAULT_WORDS_FILE
from core.engine import GameEngine, EVENT_CLICK, EVENT_ROUND_COMPLETE
from core.interfaces import Storage, WordSource
from core.models import Column
from core.words import TextWordSource

from server.file_storage import FileStorage
from server.postgres_storage import PostgresStorage
from server.preferences import UserPreferences


def configure_logging(level: str = None) -> None:
    """Configure logging for the process that serves the app (uvicorn's reload worker included)."""
    level = level or os.environ.get('WORDMATCH_LOG_LEVEL', 'INFO')
    logging.basicConfig(level=level)
    for name in ('core', 'server'):
        logging.getLogger(name).setLevel(level)


configure_logging()
logger = logging.getLogger(__name__)

MAX_QUEUED_EVENTS = 100
MAX_ENGINES = int(os.environ.get('WORDMATCH_MAX_ENGINES', '64'))  # live engines (one ticker thread each)


# Pydantic models for API
class ColumnName(str, Enum):
    left = "left"
    right = "right"


class SelectRequest(BaseModel):
    column: ColumnName
    pair_id: int
    user_id: str = "default"


class HintRequest(BaseModel):
    pair_id: int
    user_id: str = "default"


class UserRequest(BaseModel):
    user_id: str = "default"


class EventsResponse(BaseModel):
    events: list[dict]
    last_seq: int


# Global state (in production, use proper DI)
storage: Storage = None
word_source: WordSource = None
engines: OrderedDict[str, GameEngine] = OrderedDict()  # least recently used first
event_queues: dict[str, deque] = {}
event_seq: dict[str, int] = {}
engines_lock = threading.Lock()


def record_event(user_id: str, event: str, snapshot: dict) -> None:
    """Queue a discrete engine event for the client to poll."""
    if event not in (EVENT_CLICK, EVENT_ROUND_COMPLETE):
        return
    with engines_lock:
        if user_id not in engines:
            return
        seq = event_seq.get(user_id, 0) + 1
        event_seq[user_id] = seq
        queue = event_queues.setdefault(user_id, deque(maxlen=MAX_QUEUED_EVENTS))
        queue.append({
            'seq': seq,
            'event': event,
            'matched': len(snapshot['matched_ids']),
            'pair_count': snapshot['pair_count'],
            'current_streak': snapshot['stats']['current_streak']
        })
    if event == EVENT_ROUND_COMPLETE:
        logger.info(f"Round complete for {user_id}: accuracy {snapshot['stats']['accuracy']:.1f}%")


def evict_engine(user_id: str) -> None:
    """Stop and forget a user's engine. Caller holds engines_lock."""
    engine = engines.pop(user_id)
    event_queues.pop(user_id, None)
    event_seq.pop(user_id, None)
    engine.close()
    logger.info(f"Evicted engine for {user_id}")


def get_engine(user_id: str = "default") -> GameEngine:
    """Get or create the game engine for a user, evicting the least recently used past MAX_ENGINES."""
    with engines_lock:
        engine = engines.get(user_id)
        if engine is not None:
            engines.move_to_end(user_id)
            return engine
        while engines and len(engines) >= MAX_ENGINES:
            evict_engine(next(iter(engines)))
        engine = GameEngine(word_source, UserPreferences(storage, user_id))
        engine.subscribe(lambda event, snapshot: record_event(user_id, event, snapshot))
        engines[user_id] = engine
        logger.info(f"Created engine for {user_id}")
        return engine


def run_command(user_id: str, command: str, *args) -> dict:
    """Run an engine command and return the resulting snapshot."""
    try:
        engine = get_engine(user_id)
        getattr(engine, command)(*args)
        return engine.snapshot()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error in {command} for {user_id}: {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Internal error: {type(e).__name__}: {str(e)}")


def create_storage() -> Storage:
    """Pick the storage backend from WORDMATCH_STORAGE (file or postgres)."""
    storage_type = os.environ.get('WORDMATCH_STORAGE', 'file')
    if storage_type == 'postgres':
        logger.info("Using PostgreSQL storage")
        return PostgresStorage()
    logger.info("Using file storage")
    return FileStorage(os.environ.get('WORDMATCH_STATE_DIR'))


def close_engines() -> None:
    with engines_lock:
        for engine in engines.values():
            engine.close()
        engines.clear()
        event_queues.clear()
        event_seq.clear()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize storage and word source on startup, stop timers on shutdown."""
    global storage, word_source

    storage = create_storage()
    words_file = os.environ.get('WORDMATCH_WORDS_FILE', DEFAULT_WORDS_FILE)
    word_source = TextWordSource(words_file)
    logger.info(f"Word source ready: {len(word_source.all_pairs())} pairs from {words_file}")
    yield
    close_engines()
    storage.close()


app = FastAPI(title="WordMatch API", description="Two-column vocabulary matching game API",
              lifespan=lifespan)


@app.get("/")
async def root():
    """Health check."""
    return {"service": "wordmatch", "status": "ok", "words": len(word_source.all_pairs())}


@app.get("/api/users")
async def list_users():
    """List users with stored preferences."""
    return {"users": storage.list_users()}


@app.get("/api/state")
async def get_state(user_id: str = "default"):
    """Get the current game state."""
    return get_engine(user_id).snapshot()


@app.post("/api/round/new")
async def new_round(request: UserRequest):
    """Abandon the current round and draw a new one."""
    return run_command(request.user_id, 'load_new_round')


@app.post("/api/select")
async def select(request: SelectRequest):
    """Tap a card in the left or right column."""
    return run_command(request.user_id, 'select', Column(request.column.value), request.pair_id)


@app.post("/api/hint")
async def reveal_hint(request: HintRequest):
    """Reveal the hint for a pair in the current round."""
    return run_command(request.user_id, 'reveal_hint', request.pair_id)


@app.post("/api/hint/hide")
async def hide_hint(request: UserRequest):
    """Hide the visible hint."""
    return run_command(request.user_id, 'hide_hint')


@app.post("/api/swap")
async def toggle_swap(request: UserRequest):
    """Swap which language sits in which column."""
    return run_command(request.user_id, 'toggle_swap')


@app.post("/api/session/reset")
async def reset_session(request: UserRequest):
    """Reset session counters and start a new round. Best streak is kept."""
    return run_command(request.user_id, 'reset_session')


@app.get("/api/events", response_model=EventsResponse)
async def get_events(user_id: str = "default", after: int = 0):
    """Get click and round-complete events newer than `after`."""
    get_engine(user_id)
    with engines_lock:
        queue = event_queues.get(user_id, ())
        events = [e for e in queue if e['seq'] > after]
        last_seq = event_seq.get(user_id, 0)
    return EventsResponse(events=events, last_seq=last_seq)


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
