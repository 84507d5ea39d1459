"""Word sources backed by a delimited text file or an in-memory list."""

import logging

from .config import WORD_DELIMITER
from .interfaces import WordSource
from .models import WordPair
from .utils import parse_word_lines

logger = logging.getLogger(__name__)


class TextWordSource(WordSource):
    """Reads `term_a,term_b,hint` lines from a file on first use and caches them."""

    def __init__(self, path: str, delimiter: str = WORD_DELIMITER, encoding: str = 'utf-8'):
        self.path = path
        self.delimiter = delimiter
        self.encoding = encoding
        self._pairs = None

    def load(self) -> tuple:
        """Parse the file. Missing or unreadable files give an empty corpus."""
        try:
            with open(self.path, 'r', encoding=self.encoding) as f:
                lines = [line.rstrip('\n') for line in f]
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read word file {self.path}: {e}")
            return ()

        pairs = parse_word_lines(lines, self.delimiter)
        non_blank = sum(1 for line in lines if line.strip())
        if non_blank != len(pairs):
            logger.warning(f"Dropped {non_blank - len(pairs)} malformed lines from {self.path}")
        logger.info(f"Loaded {len(pairs)} word pairs from {self.path}")
        return tuple(pairs)

    def all_pairs(self) -> list[WordPair]:
        if self._pairs is None:
            self._pairs = self.load()
        return list(self._pairs)


class StaticWordSource(WordSource):
    """Word source over a fixed list of (term_a, term_b, hint) tuples or WordPairs."""

    def __init__(self, items: list):
        pairs = []
        for index, item in enumerate(items):
            if isinstance(item, WordPair):
                pairs.append(item)
            else:
                term_a, term_b, hint = item
                pairs.append(WordPair(index, term_a, term_b, hint))
        self._pairs = tuple(pairs)

    def all_pairs(self) -> list[WordPair]:
        return list(self._pairs)
