"""Heuristic mapping of AI review text onto a 1-5 rating."""

from typing import Sequence, Tuple

BASELINE_RATING = 4

# Evaluated top to bottom, first match wins: "excellent" outranks "critical".
# Keywords are lowercase and matched against the lowercased review text.
RATING_RULES: Sequence[Tuple[Tuple[str, ...], int]] = (
    (("excellent", "perfect", "great job"), 5),
    (("critical", "major issues", "security risk"), 2),
    (("poor", "bad", "issues"), 3),
)


def classify(review_text: str) -> int:
    text = review_text.lower()
    for keywords, rating in RATING_RULES:
        if any(keyword in text for keyword in keywords):
            return rating
    return BASELINE_RATING
