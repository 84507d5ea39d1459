"""Word pool rotation: every pair is served once before any repeats."""

import random


def draw_pairs(corpus: list, used_ids: set, count: int, rng=None) -> list:
    """Draw up to `count` distinct pairs that are not in `used_ids`.

    When `used_ids` already covers the whole corpus it is cleared in place so
    every pair becomes eligible again. Near exhaustion fewer than `count`
    pairs are returned.
    """
    rng = rng or random
    if all(pair.id in used_ids for pair in corpus):
        used_ids.clear()

    available = [pair for pair in corpus if pair.id not in used_ids]
    if len(available) >= count:
        return rng.sample(available, count)
    return rng.sample(available, len(available))
