"""Group blank candidates into cards."""

from __future__ import annotations

from collections.abc import Sequence

from code_cloze.domain.entities.cloze import Batch, BlankCandidate


def batch_candidates(
    candidates: Sequence[BlankCandidate], max_per_batch: int
) -> list[Batch]:
    """Partition candidates, in order, into batches of at most ``max_per_batch``.

    Each batch numbers its blanks 1..len(batch) independently.
    """
    if max_per_batch < 1:
        raise ValueError("max_per_batch must be at least 1")
    return [
        Batch(index=i, candidates=tuple(candidates[start : start + max_per_batch]))
        for i, start in enumerate(range(0, len(candidates), max_per_batch))
    ]
