"""Tests for diff/engine.py: compute, apply, invert and fold differences."""

import random

import pytest

from decklog.diff.engine import (
    apply_difference,
    apply_difference_sequence,
    compute_difference,
    has_difference,
    invert_difference,
    revert_difference,
)
from decklog.models import (
    Added,
    CardCategory,
    CardEntry,
    Changed,
    DiffType,
    Removed,
    Snapshot,
)


def _pokemon(name, count, card_id=None):
    return CardEntry(name=name, category=CardCategory.POKEMON, count=count, card_id=card_id)


def _trainer(name, count):
    return CardEntry(name=name, category=CardCategory.TRAINER, count=count)


# =========================================================================
# compute_difference
# =========================================================================

class TestComputeDifference:
    def test_empty_to_single_card_is_one_added(self):
        diff = compute_difference([], [_pokemon("Pikachu", 2)])
        assert diff == [Added("Pikachu", CardCategory.POKEMON, after=2)]
        assert diff[0].type == DiffType.ADDED

    def test_single_card_to_empty_is_one_removed(self):
        diff = compute_difference([_pokemon("Pikachu", 2)], [])
        assert diff == [Removed("Pikachu", CardCategory.POKEMON, before=2)]
        assert diff[0].type == DiffType.REMOVED

    def test_count_change_is_one_changed(self):
        diff = compute_difference([_pokemon("Pikachu", 2)], [_pokemon("Pikachu", 4)])
        assert diff == [Changed("Pikachu", CardCategory.POKEMON, before=2, after=4)]
        assert diff[0].type == DiffType.CHANGED

    def test_identical_snapshots_have_no_entries(self):
        cards = [_pokemon("Pikachu", 2), _trainer("Nest Ball", 4)]
        assert compute_difference(cards, list(cards)) == []

    def test_both_empty(self):
        assert compute_difference([], []) == []

    def test_added_and_changed_precede_removed(self):
        before = [_pokemon("Mew", 1), _pokemon("Pikachu", 2)]
        after = [_pokemon("Pikachu", 3), _trainer("Nest Ball", 4)]
        diff = compute_difference(before, after)
        assert [entry.type for entry in diff] == [
            DiffType.CHANGED,
            DiffType.ADDED,
            DiffType.REMOVED,
        ]
        assert [entry.name for entry in diff] == ["Pikachu", "Nest Ball", "Mew"]

    def test_enumeration_order_is_ignored(self):
        before = [_pokemon("A", 1), _pokemon("B", 2), _pokemon("C", 3)]
        after = [_pokemon("C", 3), _pokemon("A", 1), _pokemon("B", 2)]
        assert compute_difference(before, after) == []

    def test_added_carries_after_card_fields(self):
        diff = compute_difference([], [_pokemon("Pikachu", 1, card_id="sv1-63")])
        assert diff[0].card_id == "sv1-63"
        assert diff[0].category == CardCategory.POKEMON

    def test_removed_carries_before_card_fields(self):
        diff = compute_difference([_trainer("Nest Ball", 2)], [])
        assert diff[0].category == CardCategory.TRAINER

    def test_category_only_change_is_not_a_difference(self):
        before = [_pokemon("Pikachu", 2)]
        after = [CardEntry("Pikachu", CardCategory.TRAINER, 2)]
        assert compute_difference(before, after) == []

    def test_accepts_snapshots(self):
        before = Snapshot([_pokemon("Pikachu", 2)])
        after = Snapshot([_pokemon("Pikachu", 3)])
        assert len(compute_difference(before, after)) == 1

    def test_does_not_mutate_inputs(self):
        before = [_pokemon("Pikachu", 2)]
        after = [_pokemon("Mew", 1)]
        compute_difference(before, after)
        assert before == [_pokemon("Pikachu", 2)]
        assert after == [_pokemon("Mew", 1)]


# =========================================================================
# has_difference
# =========================================================================

class TestHasDifference:
    def test_same_cards_no_difference(self):
        cards = [_pokemon("Pikachu", 2)]
        assert has_difference(cards, list(cards)) is False

    def test_both_empty(self):
        assert has_difference([], []) is False

    def test_length_mismatch(self):
        assert has_difference([_pokemon("Pikachu", 2)], []) is True

    def test_same_length_different_names(self):
        assert has_difference([_pokemon("Pikachu", 2)], [_pokemon("Mew", 2)]) is True

    def test_same_length_different_counts(self):
        assert has_difference([_pokemon("Pikachu", 2)], [_pokemon("Pikachu", 3)]) is True

    def test_order_is_ignored(self):
        a = [_pokemon("A", 1), _pokemon("B", 2)]
        b = [_pokemon("B", 2), _pokemon("A", 1)]
        assert has_difference(a, b) is False

    @pytest.mark.parametrize(
        "before, after",
        [
            ([], []),
            ([_pokemon("A", 1)], []),
            ([], [_pokemon("A", 1)]),
            ([_pokemon("A", 1)], [_pokemon("A", 2)]),
            ([_pokemon("A", 1), _pokemon("B", 1)], [_pokemon("B", 1), _pokemon("A", 1)]),
            ([_pokemon("A", 1), _pokemon("B", 1)], [_pokemon("A", 1), _pokemon("C", 1)]),
        ],
    )
    def test_agrees_with_compute_difference(self, before, after):
        assert has_difference(before, after) == bool(compute_difference(before, after))


# =========================================================================
# apply_difference
# =========================================================================

class TestApplyDifference:
    def test_added_inserts_card(self):
        result = apply_difference([], [Added("Pikachu", CardCategory.POKEMON, after=2)])
        assert result == Snapshot([_pokemon("Pikachu", 2)])
        assert result["Pikachu"].category == CardCategory.POKEMON

    def test_added_overwrites_existing_card(self):
        base = [_pokemon("Pikachu", 2)]
        result = apply_difference(base, [Added("Pikachu", CardCategory.POKEMON, after=3)])
        assert result.counts() == {"Pikachu": 3}

    def test_added_keeps_card_id(self):
        result = apply_difference(
            [], [Added("Pikachu", CardCategory.POKEMON, after=1, card_id="sv1-63")]
        )
        assert result["Pikachu"].card_id == "sv1-63"

    def test_removed_deletes_card(self):
        base = [_pokemon("Pikachu", 2), _pokemon("Mew", 1)]
        result = apply_difference(base, [Removed("Pikachu", CardCategory.POKEMON, before=2)])
        assert result.counts() == {"Mew": 1}

    def test_removed_absent_card_is_noop(self):
        base = [_pokemon("Mew", 1)]
        result = apply_difference(base, [Removed("Pikachu", CardCategory.POKEMON, before=2)])
        assert result == Snapshot(base)

    def test_changed_updates_count_and_keeps_other_fields(self):
        base = [_pokemon("Pikachu", 2, card_id="sv1-63")]
        result = apply_difference(
            base, [Changed("Pikachu", CardCategory.POKEMON, before=2, after=4)]
        )
        assert result["Pikachu"].count == 4
        assert result["Pikachu"].card_id == "sv1-63"

    def test_changed_absent_card_is_inert(self):
        """Documented permissive policy: no card is created, nothing raises."""
        result = apply_difference(
            [_pokemon("Mew", 1)],
            [Changed("Pikachu", CardCategory.POKEMON, before=2, after=4)],
        )
        assert result.counts() == {"Mew": 1}
        assert "Pikachu" not in result

    def test_changed_ignores_recorded_prior_count(self):
        """The prior count is not checked against the base."""
        result = apply_difference(
            [_pokemon("Pikachu", 3)],
            [Changed("Pikachu", CardCategory.POKEMON, before=2, after=4)],
        )
        assert result.counts() == {"Pikachu": 4}

    def test_empty_difference_returns_equal_snapshot(self):
        base = [_pokemon("Pikachu", 2)]
        assert apply_difference(base, []) == Snapshot(base)

    def test_base_snapshot_not_mutated(self):
        base = Snapshot([_pokemon("Pikachu", 2)])
        apply_difference(
            base,
            [
                Changed("Pikachu", CardCategory.POKEMON, before=2, after=4),
                Added("Mew", CardCategory.POKEMON, after=1),
            ],
        )
        assert base.counts() == {"Pikachu": 2}

    def test_base_list_not_mutated(self):
        base = [_pokemon("Pikachu", 2)]
        apply_difference(base, [Removed("Pikachu", CardCategory.POKEMON, before=2)])
        assert base == [_pokemon("Pikachu", 2)]

    def test_returns_new_snapshot_object(self):
        base = Snapshot([_pokemon("Pikachu", 2)])
        assert apply_difference(base, []) is not base

    def test_round_trip_with_compute(self):
        before = [_pokemon("Pikachu", 2), _pokemon("Mew", 1), _trainer("Nest Ball", 4)]
        after = [_pokemon("Pikachu", 4), _trainer("Nest Ball", 4), _trainer("Switch", 2)]
        result = apply_difference(before, compute_difference(before, after))
        assert result == Snapshot(after)

    def test_existing_cards_keep_position(self):
        base = [_pokemon("A", 1), _pokemon("B", 1), _pokemon("C", 1)]
        result = apply_difference(
            base,
            [
                Changed("B", CardCategory.POKEMON, before=1, after=2),
                Added("D", CardCategory.POKEMON, after=1),
            ],
        )
        assert list(result) == ["A", "B", "C", "D"]


# =========================================================================
# apply_difference_sequence
# =========================================================================

class TestApplyDifferenceSequence:
    def test_empty_sequence_returns_base(self):
        base = [_pokemon("Pikachu", 2)]
        assert apply_difference_sequence(base, []) == Snapshot(base)

    def test_folds_left_to_right(self):
        diffs = [
            [Added("Pikachu", CardCategory.POKEMON, after=2)],
            [Changed("Pikachu", CardCategory.POKEMON, before=2, after=4)],
            [Added("Mew", CardCategory.POKEMON, after=1)],
        ]
        result = apply_difference_sequence([], diffs)
        assert result.counts() == {"Pikachu": 4, "Mew": 1}

    def test_order_matters(self):
        diffs = [
            [Changed("Pikachu", CardCategory.POKEMON, before=2, after=4)],
            [Added("Pikachu", CardCategory.POKEMON, after=2)],
        ]
        # The change is inert before the card exists.
        assert apply_difference_sequence([], diffs).counts() == {"Pikachu": 2}

    def test_matches_repeated_apply(self):
        snapshots = [
            [],
            [_pokemon("A", 1)],
            [_pokemon("A", 2), _pokemon("B", 1)],
            [_pokemon("B", 3)],
        ]
        diffs = [
            compute_difference(a, b) for a, b in zip(snapshots, snapshots[1:])
        ]
        assert apply_difference_sequence([], diffs) == Snapshot(snapshots[-1])


# =========================================================================
# invert_difference / revert_difference
# =========================================================================

class TestInvertDifference:
    def test_added_becomes_removed(self):
        inverted = invert_difference([Added("Pikachu", CardCategory.POKEMON, after=2)])
        assert inverted == [Removed("Pikachu", CardCategory.POKEMON, before=2)]

    def test_removed_becomes_added(self):
        inverted = invert_difference([Removed("Pikachu", CardCategory.POKEMON, before=2)])
        assert inverted == [Added("Pikachu", CardCategory.POKEMON, after=2)]

    def test_changed_swaps_counts(self):
        inverted = invert_difference(
            [Changed("Pikachu", CardCategory.POKEMON, before=2, after=4)]
        )
        assert inverted == [Changed("Pikachu", CardCategory.POKEMON, before=4, after=2)]

    def test_keeps_category_and_card_id(self):
        inverted = invert_difference(
            [Added("Nest Ball", CardCategory.TRAINER, after=1, card_id="sv1-181")]
        )
        assert inverted[0].category == CardCategory.TRAINER
        assert inverted[0].card_id == "sv1-181"

    def test_recategorised_card_inverts_to_same_counts_as_reverse(self):
        """The inverse carries the newer category; the reverse diff the older one."""
        before = [_pokemon("Pikachu", 1)]
        after = [CardEntry("Pikachu", CardCategory.TRAINER, 2)]
        inverted = invert_difference(compute_difference(before, after))
        reverse = compute_difference(after, before)
        assert inverted == [Changed("Pikachu", CardCategory.TRAINER, before=2, after=1)]
        assert reverse == [Changed("Pikachu", CardCategory.POKEMON, before=2, after=1)]
        assert apply_difference(after, inverted) == apply_difference(after, reverse)

    def test_double_inversion_is_identity(self):
        diff = [
            Added("A", CardCategory.POKEMON, after=1),
            Removed("B", CardCategory.TRAINER, before=2),
            Changed("C", CardCategory.ENERGY, before=3, after=5),
        ]
        assert invert_difference(invert_difference(diff)) == diff

    def test_empty(self):
        assert invert_difference([]) == []

    def test_apply_then_inverse_restores_base(self):
        base = [_pokemon("Pikachu", 2), _pokemon("Mew", 1)]
        target = [_pokemon("Pikachu", 4), _trainer("Nest Ball", 3)]
        diff = compute_difference(base, target)
        forward = apply_difference(base, diff)
        assert apply_difference(forward, invert_difference(diff)) == Snapshot(base)

    def test_revert_difference(self):
        base = [_pokemon("Pikachu", 2)]
        target = [_pokemon("Pikachu", 3), _pokemon("Mew", 1)]
        diff = compute_difference(base, target)
        assert revert_difference(target, diff) == Snapshot(base)

    def test_inversion_against_unrelated_base_is_structural_only(self):
        diff = [Added("Pikachu", CardCategory.POKEMON, after=2)]
        unrelated = [_pokemon("Pikachu", 1)]
        # Removing what was never added against this base still removes it.
        assert apply_difference(unrelated, invert_difference(diff)).counts() == {}


class TestShuffledInputs:
    def test_compute_and_has_difference_ignore_shuffle(self):
        rng = random.Random(7)
        before = [_pokemon(f"Card {i}", (i % 4) + 1) for i in range(12)]
        after = [_pokemon(f"Card {i}", (i % 3) + 1) for i in range(4, 16)]
        expected = sorted(compute_difference(before, after), key=lambda e: e.name)
        for _ in range(5):
            shuffled_before = before[:]
            shuffled_after = after[:]
            rng.shuffle(shuffled_before)
            rng.shuffle(shuffled_after)
            got = compute_difference(shuffled_before, shuffled_after)
            assert sorted(got, key=lambda e: e.name) == expected
            assert has_difference(shuffled_before, shuffled_after) is True
