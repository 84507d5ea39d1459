"""Domain models for wordmatch application."""

from enum import Enum
from typing import NamedTuple


class WordPair(NamedTuple):
    """A term in language A, its translation in language B and a memory hint."""
    id: int
    term_a: str
    term_b: str
    hint: str

    def term(self, side: 'Side') -> str:
        return self.term_a if side == Side.A else self.term_b


class Side(Enum):
    """Which language a card shows."""
    A = "a"
    B = "b"

    @property
    def other(self) -> 'Side':
        return Side.B if self == Side.A else Side.A


class Column(Enum):
    """Physical column on screen."""
    LEFT = "left"
    RIGHT = "right"


class Role(Enum):
    """Position of a pick in the pairing protocol."""
    FIRST = "first"
    SECOND = "second"


def side_for_column(swapped: bool, column: Column) -> Side:
    """Language shown in a physical column. LEFT shows A unless swapped."""
    if (column == Column.LEFT) != swapped:
        return Side.A
    return Side.B


def column_for_side(swapped: bool, side: Side) -> Column:
    """Inverse of side_for_column."""
    if (side == Side.A) != swapped:
        return Column.LEFT
    return Column.RIGHT


def role_for_side(swapped: bool, side: Side) -> Role:
    """Selection role of a language. A is picked first unless swapped."""
    if (side == Side.A) != swapped:
        return Role.FIRST
    return Role.SECOND


class RoundState:
    """The pairs of one round and what has happened to them so far."""

    def __init__(self, pairs: list[WordPair], order_a: list[int], order_b: list[int]):
        self.pairs = {pair.id: pair for pair in pairs}
        self.order = {Side.A: list(order_a), Side.B: list(order_b)}
        self.selected = {Side.A: None, Side.B: None}  # side -> pair id
        self.matched_ids = set()
        self.mismatch = None  # (first_id, second_id) while shown as wrong

    def __len__(self) -> int:
        return len(self.pairs)

    def contains(self, pair_id: int) -> bool:
        return pair_id in self.pairs

    def is_matched(self, pair_id: int) -> bool:
        return pair_id in self.matched_ids

    @property
    def is_complete(self) -> bool:
        return len(self.matched_ids) == len(self.pairs)

    def clear_selection(self) -> None:
        self.selected = {Side.A: None, Side.B: None}
        self.mismatch = None

    def mark_matched(self, pair_id: int) -> None:
        if pair_id in self.pairs:
            self.matched_ids.add(pair_id)

    def column_cards(self, side: Side) -> list[dict]:
        """Cards of one language in display order."""
        wrong = set(self.mismatch) if self.mismatch else set()
        cards = []
        for pair_id in self.order[side]:
            pair = self.pairs[pair_id]
            cards.append({
                'id': pair_id,
                'text': pair.term(side),
                'side': side.value,
                'selected': self.selected[side] == pair_id,
                'matched': pair_id in self.matched_ids,
                'wrong': pair_id in wrong and self.selected[side] == pair_id
            })
        return cards

    def to_dict(self, swapped: bool) -> dict:
        left = side_for_column(swapped, Column.LEFT)
        right = left.other
        return {
            'left': self.column_cards(left),
            'right': self.column_cards(right),
            'left_side': left.value,
            'right_side': right.value,
            'selected_a': self.selected[Side.A],
            'selected_b': self.selected[Side.B],
            'matched_ids': sorted(self.matched_ids),
            'mismatch': list(self.mismatch) if self.mismatch else None,
            'pair_count': len(self.pairs),
            'round_complete': self.is_complete
        }


class SessionStats:
    """Cumulative counters between two explicit session resets."""

    def __init__(self, started_at: float = 0.0):
        self.total_attempts = 0
        self.correct_first_attempts = 0
        self.current_streak = 0
        self.mistaken_ids = set()
        self.started_at = started_at

    @property
    def accuracy(self) -> float:
        """Percentage of attempts that were first-try matches. 100 with no attempts."""
        if self.total_attempts == 0:
            return 100.0
        return self.correct_first_attempts / self.total_attempts * 100

    def record_match(self, pair_id: int) -> bool:
        """Count a correct pairing. Returns True if it was a first-try match."""
        self.total_attempts += 1
        if pair_id in self.mistaken_ids:
            return False
        self.correct_first_attempts += 1
        self.current_streak += 1
        return True

    def record_mismatch(self, first_id: int) -> None:
        """Count a wrong pairing against the first-picked card."""
        self.total_attempts += 1
        self.current_streak = 0
        self.mistaken_ids.add(first_id)

    def elapsed_seconds(self, now: float) -> int:
        return max(0, int(now - self.started_at))

    def to_dict(self) -> dict:
        return {
            'total_attempts': self.total_attempts,
            'correct_first_attempts': self.correct_first_attempts,
            'current_streak': self.current_streak,
            'mistaken_ids': sorted(self.mistaken_ids),
            'accuracy': self.accuracy
        }
