"""Order eligible candidates: nearest first, newest first among equals."""

from typing import List, Sequence

from .types import Candidate

RESULT_LIMIT = 20


def rank_candidates(candidates: Sequence[Candidate], limit: int = RESULT_LIMIT) -> List[Candidate]:
    # Two stable sorts: secondary key (created_at DESC) first, then primary (distance ASC)
    ranked = sorted(candidates, key=lambda c: c.order.created_at, reverse=True)
    ranked.sort(key=lambda c: c.distance)
    return ranked[:limit]
