"""
Weighted multi-field fuzzy search over catalog resources.

Each field is compared with rapidfuzz; a field matches when its distance
(1 - similarity) is within the threshold. Matching fields combine into one
score as a weighted product of distances, so a strong title match outranks
a strong id match. Lower score is better.
"""
import logging
from typing import Dict, List, Optional, Sequence

from rapidfuzz import fuzz
from rapidfuzz.utils import default_process

from constants import (
    DEFAULT_FUZZY_THRESHOLD,
    FUZZY_FIELD_WEIGHTS,
    FUZZY_MIN_MATCH_CHAR_LENGTH,
    SEARCH_PAGE_SIZE,
)
from models import ResourceRecord

logger = logging.getLogger("main")

# Stand-in for an exact match so it still participates in the product
EPSILON = 1e-3


def field_distance(query: str, value: str) -> float:
    """Distance in [0, 1] between a processed query and a processed field.

    Partial matching ignores where in the field the query lands; fields
    shorter than the query are compared whole so a short abbreviation does
    not match every query containing it.
    """
    if len(value) >= len(query):
        similarity = fuzz.partial_ratio(query, value)
    else:
        similarity = fuzz.ratio(query, value)
    return 1.0 - similarity / 100.0


class FuzzyIndex:
    def __init__(
        self,
        records: Sequence[ResourceRecord],
        threshold: float = DEFAULT_FUZZY_THRESHOLD,
        weights: Optional[Dict[str, float]] = None,
        min_match_char_length: int = FUZZY_MIN_MATCH_CHAR_LENGTH,
    ):
        self.records = list(records)
        self.threshold = threshold
        self.min_match_char_length = min_match_char_length

        weights = weights or FUZZY_FIELD_WEIGHTS
        total = sum(weights.values()) or 1.0
        self.weights = {name: weight / total for name, weight in weights.items()}

        # Pre-processed (lower-cased, punctuation-stripped) field values
        self._entries: List[Dict[str, str]] = []
        for record in self.records:
            entry = {}
            for name in self.weights:
                value = getattr(record, name, None)
                if value:
                    processed = default_process(value)
                    if processed:
                        entry[name] = processed
            self._entries.append(entry)

    @classmethod
    def build(cls, records: Sequence[ResourceRecord], threshold: float = DEFAULT_FUZZY_THRESHOLD) -> Optional["FuzzyIndex"]:
        if not records:
            return None
        index = cls(records, threshold=threshold)
        logger.debug(f"Built fuzzy index over {len(index.records)} resources (threshold={threshold})")
        return index

    def __len__(self):
        return len(self.records)

    def score(self, query: str, position: int) -> Optional[float]:
        """Composite score for one record, None when no field matches"""
        total = 1.0
        matched = False
        for name, value in self._entries[position].items():
            distance = field_distance(query, value)
            if distance > self.threshold:
                continue
            matched = True
            total *= max(distance, EPSILON) ** self.weights[name]
        return total if matched else None

    def search(self, query: str, limit: int = SEARCH_PAGE_SIZE) -> List[ResourceRecord]:
        limit = max(0, min(limit, SEARCH_PAGE_SIZE))
        text = (query or "").strip()
        if not text:
            return self.records[:limit]

        processed = default_process(text)
        if len(processed) < self.min_match_char_length:
            return []

        hits = []
        for position in range(len(self.records)):
            score = self.score(processed, position)
            if score is not None:
                hits.append((score, position))

        # Position breaks ties, keeping title order among equal scores
        hits.sort()
        return [self.records[position] for _, position in hits[:limit]]


def search_records(
    index: Optional[FuzzyIndex],
    records: Sequence[ResourceRecord],
    query: str,
    limit: int = SEARCH_PAGE_SIZE,
) -> List[ResourceRecord]:
    """Default view for blank queries, ranked fuzzy matches otherwise"""
    limit = max(0, min(limit, SEARCH_PAGE_SIZE))
    if not (query or "").strip():
        return list(records[:limit])
    if index is None:
        return []
    return index.search(query, limit)
