"""
Ordered merge-join of prescribed drugs against interaction rows.
"""

from typing import Iterable, Iterator, Sequence

from prescriber.core.exceptions import EmptyCandidateSetError
from prescriber.schemas.interactions import Drug


def merge_join(
    candidates: Sequence[Drug],
    rows: Iterable[tuple[int, str]]
) -> Iterator[tuple[Drug, str]]:
    """
    Match interaction rows to the candidate drugs they name.

    Both inputs must be ascending: ``candidates`` by ``id``, ``rows`` by
    their target id. The candidate cursor only moves forward, so each input
    is walked once. A run of rows sharing a target id all match the same
    candidate, since the cursor advances only while it is strictly behind.

    Args:
        candidates: Prescribed drugs, sorted by id, at least one.
        rows: ``(target_id, description)`` pairs, sorted by target_id.

    Yields:
        ``(candidate, description)`` for every row whose target is a candidate,
        in row order.

    Raises:
        EmptyCandidateSetError: ``candidates`` is empty.
    """
    if not candidates:
        raise EmptyCandidateSetError()

    cursor = 0
    last = len(candidates) - 1
    for target_id, description in rows:
        while candidates[cursor].id < target_id and cursor < last:
            cursor += 1
        if candidates[cursor].id == target_id:
            yield candidates[cursor], description
