"""Round and session state machine for the matching game."""

import logging
import random
import threading
import time
from typing import Callable

from .config import ROUND_SIZE, MISMATCH_CLEAR_DELAY, ROUND_ADVANCE_DELAY, TIMER_INTERVAL
from .interfaces import WordSource, PreferenceStore, Scheduler
from .models import (
    Column, Role, RoundState, SessionStats, Side,
    role_for_side, side_for_column
)
from .rotation import draw_pairs
from .scheduler import ThreadingScheduler
from .utils import format_session_time

logger = logging.getLogger(__name__)

# Events delivered to subscribers
EVENT_STATE = 'state'
EVENT_CLICK = 'click'
EVENT_ROUND_COMPLETE = 'round_complete'


class GameEngine:
    """Owns all mutable game state and serializes every change to it.

    Commands may be called from any thread. Each one runs its
    read-modify-write under a single lock, then notifies subscribers with a
    fresh snapshot once the lock is released. Delayed continuations
    (mismatch clear, round advance) apply against whatever state exists
    when they fire.
    """

    def __init__(self, word_source: WordSource, preferences: PreferenceStore,
                 scheduler: Scheduler = None, clock: Callable[[], float] = time.monotonic,
                 round_size: int = ROUND_SIZE, rng=None):
        self.word_source = word_source
        self.preferences = preferences
        self.scheduler = scheduler or ThreadingScheduler()
        self.clock = clock
        self.round_size = round_size
        self.rng = rng or random.Random()

        self._lock = threading.RLock()
        self._listeners = []
        self._closed = False

        self.corpus = word_source.all_pairs()
        self.best_streak = preferences.get_best_streak()
        self.swapped = preferences.get_swapped()

        self.stats = SessionStats(started_at=self.clock())
        self.session_time_seconds = 0
        self.used_ids = set()
        self.hint_viewed_ids = set()
        self.hint_visible_for = None
        self.round = RoundState([], [], [])

        self.load_new_round()
        self._ticker = self.scheduler.start_ticker(TIMER_INTERVAL, self._tick)
        logger.info(f"Engine started with {len(self.corpus)} pairs, best streak {self.best_streak}")

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[str, dict], None]) -> Callable[[], None]:
        """Register listener(event, snapshot). Returns a function that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return unsubscribe

    def _notify(self, events: list[str]) -> None:
        if not events:
            return
        with self._lock:
            listeners = list(self._listeners)
            snapshot = self._snapshot()
        for event in events:
            for listener in listeners:
                try:
                    listener(event, snapshot)
                except Exception as e:
                    logger.error(f"Listener failed on {event}: {type(e).__name__}: {e}")

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def _snapshot(self) -> dict:
        hint = None
        if self.hint_visible_for is not None and self.round.contains(self.hint_visible_for):
            hint = self.round.pairs[self.hint_visible_for].hint
        state = self.round.to_dict(self.swapped)
        state.update({
            'swapped': self.swapped,
            'hint_visible_for': self.hint_visible_for,
            'hint': hint,
            'stats': self.stats.to_dict(),
            'best_streak': self.best_streak,
            'session_time_seconds': self.session_time_seconds,
            'session_time_display': format_session_time(self.session_time_seconds),
            'used_ids': sorted(self.used_ids),
            'hint_viewed_ids': sorted(self.hint_viewed_ids),
            'corpus_size': len(self.corpus)
        })
        return state

    def snapshot(self) -> dict:
        """Read-only copy of the current state."""
        with self._lock:
            return self._snapshot()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def load_new_round(self) -> None:
        """Draw the next round. Session counters are left alone."""
        with self._lock:
            pairs = draw_pairs(self.corpus, self.used_ids, self.round_size, self.rng)
            ids = [pair.id for pair in pairs]
            order_a = self.rng.sample(ids, len(ids))
            order_b = self.rng.sample(ids, len(ids))
            self.round = RoundState(pairs, order_a, order_b)
            self.hint_visible_for = None
            self.session_time_seconds = self.stats.elapsed_seconds(self.clock())
            logger.info(f"Loaded round with {len(pairs)} pairs ({len(self.used_ids)}/{len(self.corpus)} used)")
        self._notify([EVENT_STATE])

    def select(self, column: Column, pair_id: int) -> None:
        """Handle a tap on a card in a physical column."""
        events = []
        with self._lock:
            side = side_for_column(self.swapped, column)
            if not self.round.contains(pair_id) or self.round.is_matched(pair_id):
                return
            events.append(EVENT_CLICK)
            role = role_for_side(self.swapped, side)
            first_side = side if role == Role.FIRST else side.other
            # a pair still shown as wrong cannot be paired again
            pending_first = None if self.round.mismatch else self.round.selected[first_side]

            if role == Role.SECOND and pending_first is not None:
                events.extend(self._resolve(first_side, pending_first, pair_id))
            else:
                self.round.clear_selection()
                self.round.selected[side] = pair_id
                self.hint_visible_for = None
            events.append(EVENT_STATE)
        self._notify(events)

    def select_left(self, pair_id: int) -> None:
        self.select(Column.LEFT, pair_id)

    def select_right(self, pair_id: int) -> None:
        self.select(Column.RIGHT, pair_id)

    def _resolve(self, first_side: Side, first_id: int, second_id: int) -> list[str]:
        """Evaluate a completed pairing attempt. Caller holds the lock."""
        if first_id != second_id:
            self.stats.record_mismatch(first_id)
            self.round.selected[first_side] = first_id
            self.round.selected[first_side.other] = second_id
            self.round.mismatch = (first_id, second_id)
            self.hint_visible_for = None
            self.scheduler.call_later(MISMATCH_CLEAR_DELAY, self._clear_mismatch)
            return []

        if self.stats.record_match(second_id) and self.stats.current_streak > self.best_streak:
            self.best_streak = self.stats.current_streak
            self._persist('best_streak', self.preferences.set_best_streak, self.best_streak)
        if second_id not in self.hint_viewed_ids:
            self.used_ids.add(second_id)
        self.round.mark_matched(second_id)
        self.round.clear_selection()
        self.hint_visible_for = None
        self.session_time_seconds = self.stats.elapsed_seconds(self.clock())

        if self.round.is_complete:
            logger.info(f"Round complete, streak {self.stats.current_streak}, accuracy {self.stats.accuracy:.1f}%")
            self.scheduler.call_later(ROUND_ADVANCE_DELAY, self.load_new_round)
            return [EVENT_ROUND_COMPLETE]
        return []

    def _clear_mismatch(self) -> None:
        with self._lock:
            self.round.clear_selection()
        self._notify([EVENT_STATE])

    def reveal_hint(self, pair_id: int) -> None:
        """Show the hint for one pair of the current round."""
        with self._lock:
            if not self.round.contains(pair_id) or self.round.is_matched(pair_id):
                return
            self.hint_viewed_ids.add(pair_id)
            self.hint_visible_for = pair_id
        self._notify([EVENT_STATE])

    def hide_hint(self) -> None:
        with self._lock:
            if self.hint_visible_for is None:
                return
            self.hint_visible_for = None
        self._notify([EVENT_STATE])

    def toggle_swap(self) -> None:
        """Swap which language sits in which column. Round and stats are untouched."""
        with self._lock:
            self.swapped = not self.swapped
            self._persist('swapped', self.preferences.set_swapped, self.swapped)
        self._notify([EVENT_STATE])

    def reset_session(self) -> None:
        """Start a fresh session. The best streak survives."""
        with self._lock:
            self.stats = SessionStats(started_at=self.clock())
            self.session_time_seconds = 0
            self.used_ids.clear()
            self.hint_viewed_ids.clear()
            logger.info("Session reset")
        self.load_new_round()

    def close(self) -> None:
        """Stop the session timer."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._ticker.cancel()
        logger.info("Engine closed")

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _tick(self) -> None:
        with self._lock:
            if self._closed:
                return
            elapsed = self.stats.elapsed_seconds(self.clock())
            if elapsed == self.session_time_seconds:
                return
            self.session_time_seconds = elapsed
        self._notify([EVENT_STATE])

    def _persist(self, name: str, setter: Callable, value) -> None:
        try:
            setter(value)
        except Exception as e:
            logger.warning(f"Could not persist {name}={value}: {type(e).__name__}: {e}")
