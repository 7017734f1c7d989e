"""Bounded search over ways of truncating the words of a name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence

__all__ = [
    "DEFAULT_PREFIX_TRY_COUNT",
    "Candidate",
    "generate_candidates",
]

DEFAULT_PREFIX_TRY_COUNT = 16


@dataclass(frozen=True, order=True)
class Candidate:
    """A possible prefix for a new name, ordered best first.

    Field order is the selection order: least ambiguous, then smallest
    number, then generation order, then the prefix text itself.
    """

    ambiguity: int
    number: int
    order: int
    prefix: str


def _outward_from_midpoint(low: int, high: int) -> Iterator[int]:
    midpoint = (low + high) // 2
    below, above = midpoint, midpoint + 1
    while below >= low or above <= high:
        if below >= low:
            yield below
        if above <= high:
            yield above
        below -= 1
        above += 1


def generate_candidates(
    name_parts: Sequence[str],
    prefix_length: int,
    budget: int = DEFAULT_PREFIX_TRY_COUNT,
) -> List[str]:
    """Return up to ``budget`` prefixes of at most ``prefix_length`` letters.

    Every word part contributes at least one leading letter, so only the
    first ``prefix_length`` parts are used. For each part the truncation
    lengths are tried from the middle of the allowed range outwards, which
    favours balanced prefixes such as ``KoAr`` over ``KArc`` for
    "Kobold Archer". The search is depth first and stops as soon as
    ``budget`` candidates have been found.
    """

    parts = tuple(name_parts[:prefix_length])
    if not parts or budget <= 0:
        return []

    # following_lengths[i] is the total length of the parts after part i
    following_lengths = [0] * len(parts)
    for index in range(len(parts) - 1, 0, -1):
        following_lengths[index - 1] = following_lengths[index] + len(parts[index])
    target_length = min(prefix_length, len(parts[0]) + following_lengths[0])

    candidates: List[str] = []
    stack: List[tuple[int, str]] = [(0, "")]
    while stack and len(candidates) < budget:
        index, built = stack.pop()
        if index == len(parts) or target_length == 0:
            candidates.append(built)
            continue

        remaining_parts = len(parts) - (index + 1)
        remaining_length = target_length - len(built)
        if remaining_parts > remaining_length:
            raise RuntimeError(
                f"At {index}: found {remaining_parts} remaining parts but only "
                f"{remaining_length} prefix length remaining"
            )
        longest = min(remaining_length - remaining_parts, len(parts[index]))
        shortest = max(1, remaining_length - following_lengths[index])
        if shortest > longest:
            raise RuntimeError(f"At {index}: got bad length bounds {shortest}, {longest}")

        # Pushed in reverse so the first length to try is popped first.
        lengths = list(_outward_from_midpoint(shortest, longest))
        for length in reversed(lengths):
            stack.append((index + 1, built + parts[index][:length]))
    return candidates
