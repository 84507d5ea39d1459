"""Configuration constants for wordmatch application."""

import os

ROUND_SIZE = 6                # Pairs drawn per round

# Delayed continuations
MISMATCH_CLEAR_DELAY = 0.8    # seconds - wrong pair stays highlighted this long
ROUND_ADVANCE_DELAY = 1.5     # seconds - pause between a completed round and the next

# Session timer
TIMER_INTERVAL = 1.0          # seconds between elapsed-time updates

# Word file format
WORD_DELIMITER = ','
WORD_FIELD_COUNT = 3          # term_a, term_b, hint (hint may contain the delimiter)

# Preference defaults
DEFAULT_BEST_STREAK = 0
DEFAULT_SWAPPED = False

# Bundled corpus
DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')
DEFAULT_WORDS_FILE = os.path.join(DATA_DIR, 'words.txt')
