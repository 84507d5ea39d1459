from .models import WordPair, RoundState, SessionStats, Side, Column, Role
from .interfaces import WordSource, PreferenceStore, Scheduler, Storage
from .engine import GameEngine, EVENT_STATE, EVENT_CLICK, EVENT_ROUND_COMPLETE
from .rotation import draw_pairs
from .utils import parse_word_lines, format_session_time
from .words import TextWordSource, StaticWordSource
from .config import (
    ROUND_SIZE, MISMATCH_CLEAR_DELAY, ROUND_ADVANCE_DELAY, TIMER_INTERVAL,
    DEFAULT_WORDS_FILE
)

__all__ = [
    'WordPair', 'RoundState', 'SessionStats', 'Side', 'Column', 'Role',
    'WordSource', 'PreferenceStore', 'Scheduler', 'Storage',
    'GameEngine', 'EVENT_STATE', 'EVENT_CLICK', 'EVENT_ROUND_COMPLETE',
    'draw_pairs',
    'parse_word_lines', 'format_session_time',
    'TextWordSource', 'StaticWordSource',
    'ROUND_SIZE', 'MISMATCH_CLEAR_DELAY', 'ROUND_ADVANCE_DELAY', 'TIMER_INTERVAL',
    'DEFAULT_WORDS_FILE'
]
