"""Fuzzy matching of ingredient names against the composition table."""

from collections.abc import Sequence
from dataclasses import dataclass

from meal_nutrition.domain.composition import CompositionRecord
from meal_nutrition.services.text import normalize, normalize_text

EXACT_MATCH_SCORE = 100
PREFIX_MATCH_SCORE = 50
FIRST_TOKEN_SCORE = 20
TOKEN_EXACT_SCORE = 10
TOKEN_PREFIX_SCORE = 5
TOKEN_SUBSTRING_SCORE = 2
MIN_QUERY_LENGTH = 2
DEFAULT_LIMIT = 15


@dataclass(frozen=True)
class ScoredRecord:
    """Composition record with its match score."""

    record: CompositionRecord
    score: int


def score_description(query: str, description: str) -> int:
    """Score how well a record description matches a query; higher wins."""
    normalized_query = normalize_text(query)
    query_tokens = normalize(query)
    return _score(normalized_query, query_tokens, description)


def rank(
    query: str, records: Sequence[CompositionRecord], limit: int = DEFAULT_LIMIT
) -> list[ScoredRecord]:
    """Return records with a positive score, best first, ties in table order."""
    normalized_query = normalize_text(query)
    if len(normalized_query) < MIN_QUERY_LENGTH:
        return []
    query_tokens = normalize(query)

    scored = []
    for record in records:
        score = _score(normalized_query, query_tokens, record.description)
        if score > 0:
            scored.append(ScoredRecord(record=record, score=score))
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored[:limit]


def match(
    query: str, records: Sequence[CompositionRecord], limit: int = DEFAULT_LIMIT
) -> list[CompositionRecord]:
    """Return the ranked records for a query."""
    return [item.record for item in rank(query, records, limit)]


def best_match(
    query: str, records: Sequence[CompositionRecord]
) -> CompositionRecord | None:
    """Return the highest-ranked record, if any record scores above zero."""
    ranked = rank(query, records, limit=1)
    if not ranked:
        return None
    return ranked[0].record


def _score(normalized_query: str, query_tokens: list[str], description: str) -> int:
    normalized_description = normalize_text(description)
    description_tokens = normalize(description)

    score = 0
    if normalized_description == normalized_query:
        score += EXACT_MATCH_SCORE
    if normalized_description.startswith(normalized_query):
        score += PREFIX_MATCH_SCORE
    if (
        query_tokens
        and description_tokens
        and description_tokens[0].startswith(query_tokens[0])
    ):
        score += FIRST_TOKEN_SCORE

    for token in query_tokens:
        if token in description_tokens:
            score += TOKEN_EXACT_SCORE
        elif any(candidate.startswith(token) for candidate in description_tokens):
            score += TOKEN_PREFIX_SCORE
        elif token in normalized_description:
            score += TOKEN_SUBSTRING_SCORE
    return score
