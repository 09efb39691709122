import math
import re

MAX_ROUND_SCORE = 100
MIN_ROUND_SCORE = 10
SCORE_DECAY_PER_SECOND = 2

_MASKED_CHARS = re.compile(r'[A-Z0-9()]')


def normalize_answer(answer: str) -> str:
    return answer.upper()


def grade(submitted: str, expected: str) -> bool:
    """Case-insensitive exact comparison of a submission to the stored answer."""
    return normalize_answer(submitted) == normalize_answer(expected)


def round_score(elapsed_sec: float) -> int:
    """Points for a correct answer given `elapsed_sec` seconds after dispatch.

    Starts at 100 and loses 2 points per second elapsed (floored), never
    dropping below 10. There is no deadline: a late answer still earns the
    floor.
    """
    elapsed_sec = max(0.0, elapsed_sec)
    return max(MIN_ROUND_SCORE, MAX_ROUND_SCORE - math.floor(elapsed_sec * SCORE_DECAY_PER_SECOND))


def answer_mask(answer: str) -> str:
    """Hide letters, digits and parentheses; keep spaces and punctuation visible."""
    masked = []
    for char in answer:
        upper = char.upper()
        # upper() can widen a character ('ß' -> 'SS'); those stay as they are
        masked.append('_' if len(upper) == 1 and _MASKED_CHARS.match(upper) else char)
    return ''.join(masked)
