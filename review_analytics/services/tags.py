from typing import Dict, List, Tuple

TAG_TRIGGERS: Dict[str, Tuple[str, ...]] = {
    "security": ("security",),
    "performance": ("performance",),
    "readability": ("readability",),
    "best-practices": ("best practices",),
    "bugs": ("bug", "error"),
}

FIXED_VOCABULARY = frozenset(TAG_TRIGGERS)


def extract_tags(review_text: str) -> List[str]:
    """Return every vocabulary tag whose trigger occurs in the text, in vocabulary order.

    Matching ignores case, like the rating classifier.
    """

    text = review_text.lower()
    return [
        tag
        for tag, triggers in TAG_TRIGGERS.items()
        if any(trigger in text for trigger in triggers)
    ]
