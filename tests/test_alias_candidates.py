"""Coverage for candidate prefix generation and number allocation."""

from __future__ import annotations

from tabletop.aliases import Candidate, NumbersInUse, generate_candidates, smallest_free_number

THREE_PART_CANDIDATES = [
    "AbGhMn",
    "AbGhiM",
    "AbGMno",
    "AbcGMn",
    "AbcGhM",
    "AGhMno",
    "AGhiMn",
    "AGMnop",
    "AGhijM",
    "AbcdGM",
]


def test_generate_candidates_starts_from_balanced_truncations() -> None:
    assert generate_candidates(("Kobold", "Archer"), 4) == ["KoAr", "KobA", "KArc"]


def test_generate_candidates_explores_depth_first_from_midpoint() -> None:
    parts = ("Abcdef", "Ghijkl", "Mnopqr")
    assert generate_candidates(parts, 6) == THREE_PART_CANDIDATES


def test_generate_candidates_stops_at_budget() -> None:
    parts = ("Abcdef", "Ghijkl", "Mnopqr")
    assert generate_candidates(parts, 6, budget=4) == THREE_PART_CANDIDATES[:4]
    assert generate_candidates(("Kobold", "Archer"), 4, budget=1) == ["KoAr"]
    assert generate_candidates(("Kobold", "Archer"), 4, budget=0) == []


def test_generate_candidates_respects_length_limits() -> None:
    assert generate_candidates(("Goblin",), 3) == ["Gob"]
    # Names shorter than the requested length use every letter.
    assert generate_candidates(("Al",), 5) == ["Al"]
    # Only as many words as there are letters to spend take part.
    assert generate_candidates(("A", "B", "C", "D", "E"), 3) == ["ABC"]
    assert generate_candidates((), 3) == []


def test_generate_candidates_are_distinct_and_bounded() -> None:
    parts = ("Kobold", "War", "Hero")
    candidates = generate_candidates(parts, 8, budget=50)
    assert len(candidates) == len(set(candidates))
    assert all(len(candidate) <= 8 for candidate in candidates)
    assert all(candidate.startswith("K") for candidate in candidates)


def test_candidate_ordering_follows_tie_break() -> None:
    candidates = [
        Candidate(ambiguity=1, number=0, order=0, prefix="KoAr"),
        Candidate(ambiguity=0, number=2, order=1, prefix="KobA"),
        Candidate(ambiguity=0, number=1, order=3, prefix="KArc"),
        Candidate(ambiguity=0, number=1, order=2, prefix="KoA"),
    ]
    assert min(candidates).prefix == "KoA"


def test_smallest_free_number_fills_gaps() -> None:
    assert smallest_free_number("Gob", {}, False) == 0
    assert smallest_free_number("Gob", {}, True) == 1

    numbers = NumbersInUse(0)
    numbers.add(2)
    in_use = {"Gob": numbers}
    assert smallest_free_number("Gob", in_use, False) == 1
    assert smallest_free_number("Gob", in_use, True) == 1

    numbers.add(1)
    assert smallest_free_number("Gob", in_use, False) == 3
    assert list(numbers) == [0, 1, 2]
    assert numbers.max_value == 2


def test_smallest_free_number_with_only_zero_taken() -> None:
    in_use = {"Gob": NumbersInUse(0)}
    assert smallest_free_number("Gob", in_use, False) == 1
    assert smallest_free_number("Gob", in_use, True) == 1
    assert smallest_free_number("Orc", in_use, False) == 0
