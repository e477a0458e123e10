"""
Unit Tests for Row Model

Tests for the Row dataclass: construction and validity checking,
permutation products, inverses, closures and fast hashing.
"""

import math
from itertools import permutations, product

import pytest

from ringing_toolkit.core.errors import (
    BellOutOfStageError,
    DuplicateBellError,
    IncompatibleStagesError,
    InvalidRowError,
)
from ringing_toolkit.core.models.bell import BELL_NAMES, Bell
from ringing_toolkit.core.models.row import Row
from ringing_toolkit.core.models.stage import Stage


def all_rows(n):
    """Every Row on ``n`` bells."""
    return [Row.from_indices(p) for p in permutations(range(n))]


class TestRowConstruction:
    """Tests for Row factory methods and validity checking."""

    # ─────────────────────────────────────────────────────────────────────────
    # Generator Rows
    # ─────────────────────────────────────────────────────────────────────────

    def test_rounds_when_stage_given_then_ascending(self):
        """rounds() should list the bells in ascending order."""
        assert str(Row.rounds(Stage.MINIMUS)) == "1234"
        assert str(Row.rounds(Stage.CATERS)) == "123456789"
        assert Row.rounds(Stage.MAJOR).stage == Stage.MAJOR

    def test_backrounds_when_stage_given_then_descending(self):
        """backrounds() should list the bells in descending order."""
        assert str(Row.backrounds(Stage.MINIMUS)) == "4321"
        assert str(Row.backrounds(Stage.CATERS)) == "987654321"

    def test_queens_when_stage_given_then_odds_then_evens(self):
        """queens() should list odd bells then even bells."""
        assert str(Row.queens(Stage.MINIMUS)) == "1324"
        assert str(Row.queens(Stage.CATERS)) == "135792468"

    # ─────────────────────────────────────────────────────────────────────────
    # Parsing
    # ─────────────────────────────────────────────────────────────────────────

    def test_parse_when_valid_then_creates_row(self):
        """A valid row string should parse."""
        assert str(Row.parse("12543")) == "12543"
        assert Row.parse("41325").stage == Stage.DOUBLES

    def test_parse_when_separators_present_then_skips_them(self):
        """Characters that aren't bell names should be skipped."""
        assert str(Row.parse("4321\t[65 78]")) == "43216578"
        assert str(Row.parse("3|2|1  6|5|4  9|8|7")) == "321654987"
        assert Row.parse("13579 | 24680").stage == Stage.ROYAL

    def test_parse_when_duplicate_bell_then_raises_duplicate(self):
        """'112345' should fail with DuplicateBell for bell 1."""
        with pytest.raises(DuplicateBellError) as exc_info:
            Row.parse("112345")
        assert exc_info.value.bell == Bell.from_name("1")

    def test_parse_when_bell_out_of_stage_then_raises_out_of_stage(self):
        """'12745' should fail with BellOutOfStage for bell 7 on Doubles."""
        with pytest.raises(BellOutOfStageError) as exc_info:
            Row.parse("12745")
        assert exc_info.value.bell == Bell.from_name("7")
        assert exc_info.value.stage == Stage.DOUBLES

    def test_parse_when_invalid_then_error_is_value_error(self):
        """Row errors should be catchable as InvalidRowError and ValueError."""
        with pytest.raises(InvalidRowError):
            Row.parse("5432")
        with pytest.raises(ValueError):
            Row.parse("1231")

    def test_parse_when_empty_then_zero_bell_row(self):
        """An empty string is the (trivially valid) zero-bell row."""
        row = Row.parse("")
        assert row.stage == Stage(0)
        assert row.is_rounds()

    # ─────────────────────────────────────────────────────────────────────────
    # Checked / Unchecked Construction
    # ─────────────────────────────────────────────────────────────────────────

    def test_from_bells_when_valid_then_creates_row(self):
        """A valid sequence of Bells should create a Row."""
        row = Row.from_bells(Bell(i) for i in [0, 3, 4, 2, 1])
        assert str(row) == "14532"

    def test_from_indices_when_out_of_range_then_raises(self):
        """Index 7 on five bells should be out of stage."""
        with pytest.raises(BellOutOfStageError) as exc_info:
            Row.from_indices([0, 3, 7, 2, 1])
        assert exc_info.value.bell == Bell.from_name("8")
        assert exc_info.value.stage == Stage.DOUBLES

    def test_from_bells_when_duplicate_then_raises(self):
        """A repeated Bell should raise DuplicateBellError."""
        bells = [Bell.from_name(c) for c in "4214"]
        with pytest.raises(DuplicateBellError) as exc_info:
            Row.from_bells(bells)
        assert exc_info.value.bell == Bell.from_name("4")

    def test_from_bells_unchecked_when_invalid_then_builds_anyway(self):
        """The unchecked constructor should skip validation."""
        bells = [Bell.from_name(c) for c in "4214"]
        assert str(Row.from_bells_unchecked(bells)) == "4214"

    def test_error_when_duplicate_then_message_names_bell(self):
        """Error messages should name the offending bell."""
        with pytest.raises(DuplicateBellError, match="Bell 1 would appear twice"):
            Row.parse("112345")
        with pytest.raises(BellOutOfStageError, match="Bell 7 is not within the stage Doubles"):
            Row.parse("12745")

    def test_init_when_frozen_then_immutable(self):
        """Row should be immutable (frozen)."""
        row = Row.rounds(Stage.MINIMUS)
        with pytest.raises(AttributeError):
            row.bells = ()  # type: ignore


class TestRowAlgebra:
    """Tests for products, inverses and closures."""

    # ─────────────────────────────────────────────────────────────────────────
    # Multiplication
    # ─────────────────────────────────────────────────────────────────────────

    def test_mul_when_same_stage_then_permutes_lhs(self):
        """RHS should permute LHS: result[i] == lhs[rhs[i]]."""
        assert Row.parse("13425678") * Row.parse("43217568") == Row.parse("24317568")

    def test_mul_when_rounds_then_identity(self):
        """Rounds is the identity on either side."""
        row = Row.parse("15263748")
        rounds = Row.rounds(Stage.MAJOR)
        assert row * rounds == row
        assert rounds * row == row

    def test_mul_when_different_stages_then_raises_incompatible(self):
        """Mismatched stages should raise IncompatibleStagesError."""
        with pytest.raises(IncompatibleStagesError) as exc_info:
            Row.parse("13425678") * Row.parse("4321")
        assert exc_info.value.lhs_stage == Stage.MAJOR
        assert exc_info.value.rhs_stage == Stage.MINIMUS
        assert str(exc_info.value) == "Incompatible stages: Major (lhs), Minimus (rhs)"

    def test_mul_when_any_mismatched_pair_then_carries_both_stages(self):
        """Every stage mismatch should carry both original stages."""
        for lhs_n, rhs_n in product(range(1, 7), repeat=2):
            if lhs_n == rhs_n:
                continue
            lhs = Row.rounds(Stage(lhs_n))
            rhs = Row.backrounds(Stage(rhs_n))
            with pytest.raises(IncompatibleStagesError) as exc_info:
                lhs * rhs
            assert exc_info.value.lhs_stage == Stage(lhs_n)
            assert exc_info.value.rhs_stage == Stage(rhs_n)

    def test_mul_unchecked_when_different_stages_then_meaningless_row(self):
        """mul_unchecked() should not compare stages."""
        result = Row.parse("13475628").mul_unchecked(Row.parse("4321"))
        assert result == Row.from_bells_unchecked(Bell.from_number(n) for n in [7, 4, 3, 1])

    def test_mul_when_not_a_row_then_type_error(self):
        """Multiplying by a non-Row should raise TypeError."""
        with pytest.raises(TypeError):
            Row.rounds(Stage.MINIMUS) * 3  # type: ignore

    def test_mul_when_any_triple_then_associative(self):
        """(a * b) * c == a * (b * c) for every triple on four bells."""
        rows = all_rows(4)
        for a, b, c in product(rows, repeat=3):
            assert (a * b) * c == a * (b * c)

    # ─────────────────────────────────────────────────────────────────────────
    # Inversion
    # ─────────────────────────────────────────────────────────────────────────

    def test_inverse_when_known_rows_then_matches(self):
        """Known inverses: queens <-> tittums, backrounds is self-inverse."""
        assert Row.parse("135246").inverse() == Row.parse("142536")
        assert ~Row.backrounds(Stage.MAJOR) == Row.backrounds(Stage.MAJOR)
        assert ~Row.parse("1342") == Row.parse("1423")

    def test_inverse_when_any_row_then_product_is_rounds(self):
        """a * ~a == ~a * a == rounds for every row on five bells."""
        rounds = Row.rounds(Stage.DOUBLES)
        for row in all_rows(5):
            assert row * row.inverse() == rounds
            assert row.inverse() * row == rounds

    # ─────────────────────────────────────────────────────────────────────────
    # Closure
    # ─────────────────────────────────────────────────────────────────────────

    def test_closure_when_cyclic_part_head_then_seven_rows(self):
        """The closure of 18234567 is the seven fixed-treble cyclic part heads."""
        closure = Row.parse("18234567").closure()
        assert [str(r) for r in closure] == [
            "18234567",
            "17823456",
            "16782345",
            "15678234",
            "14567823",
            "13456782",
            "12345678",
        ]

    def test_closure_when_rounds_then_single_row(self):
        """Rounds is its own closure."""
        rounds = Row.rounds(Stage.MAJOR)
        assert rounds.closure() == [rounds]

    def test_closure_when_any_row_then_ends_in_rounds_and_divides_factorial(self):
        """Every closure starts with the row, ends in rounds, and has order dividing n!."""
        rounds = Row.rounds(Stage.DOUBLES)
        for row in all_rows(5):
            closure = row.closure()
            assert closure[0] == row
            assert closure[-1] == rounds
            assert math.factorial(5) % len(closure) == 0

    def test_closure_when_zero_bells_then_single_row(self):
        """The empty row is rounds on zero bells."""
        assert Row.parse("").closure() == [Row.parse("")]


class TestRowQueries:
    """Tests for equality, ordering, hashing and display."""

    def test_str_when_parsed_then_round_trips(self):
        """parse(str(row)) == row for every row on five bells."""
        for row in all_rows(5):
            assert Row.parse(str(row)) == row

    def test_str_when_high_stage_then_uses_letters(self):
        """High bells display as letters."""
        assert str(Row.rounds(Stage.MAXIMUS)) == "1234567890ET"
        assert Row.parse(str(Row.backrounds(Stage.SIXTEEN))) == Row.backrounds(Stage.SIXTEEN)

    def test_str_when_every_bell_named_then_round_trips(self):
        """The display round-trip holds up to the last named bell."""
        largest = Stage(len(BELL_NAMES))

        for row in (Row.rounds(largest), Row.backrounds(largest), Row.queens(largest)):
            assert Row.parse(str(row)) == row

    def test_str_when_bells_beyond_names_then_question_mark(self):
        """Bells past the named alphabet display as '?' and don't round-trip."""
        row = Row.rounds(Stage(len(BELL_NAMES) + 1))

        assert str(row).endswith("Z?")
        assert Row.parse(str(row)) != row

    def test_repr_when_called_then_shows_bells(self):
        """repr() should be concise."""
        assert repr(Row.rounds(Stage.MAJOR)) == "Row(12345678)"

    def test_is_rounds_when_checked_then_matches_equality(self):
        """is_rounds() should agree with comparing against rounds."""
        assert Row.rounds(Stage.MAXIMUS).is_rounds()
        assert not Row.parse("18423756").is_rounds()

    def test_ordering_when_compared_then_lexicographic(self):
        """Rows should order lexicographically by bell."""
        rows = [Row.parse("2134"), Row.parse("1243"), Row.parse("1234")]
        assert sorted(rows) == [Row.parse("1234"), Row.parse("1243"), Row.parse("2134")]
        assert Row.parse("1324") < Row.parse("1342")

    def test_hash_when_equal_rows_then_equal_hashes(self):
        """Equal rows should hash equally and dedupe in sets."""
        assert hash(Row.parse("4321")) == hash(Row.backrounds(Stage.MINIMUS))
        assert len({Row.parse("4321"), Row.backrounds(Stage.MINIMUS)}) == 1

    def test_sequence_protocol_when_used_then_exposes_bells(self):
        """len(), indexing, iteration and reversed() should work on bells."""
        row = Row.parse("15263748")
        assert len(row) == 8
        assert row[3] == Bell.from_name("6")
        assert [b.name for b in row] == list("15263748")
        assert [b.name for b in reversed(row)] == list("84736251")

    # ─────────────────────────────────────────────────────────────────────────
    # Fast Hash
    # ─────────────────────────────────────────────────────────────────────────

    def test_fast_hash_when_rounds_then_reads_as_base_stage_number(self):
        """1234 is 0123 in base 4 = 27."""
        assert Row.rounds(Stage.MINIMUS).fast_hash() == 27

    def test_fast_hash_when_all_rows_then_collision_free(self):
        """fast_hash() should be distinct for every row on six bells."""
        hashes = {row.fast_hash() for row in all_rows(6)}
        assert len(hashes) == math.factorial(6)

    def test_fast_hash_is_lossless_when_bit_widths_then_matches_thresholds(self):
        """Lossless up to 6 bells in 16 bits, 9 in 32 bits, 16 in 64 bits."""
        assert Row.fast_hash_is_lossless(Stage.MINOR, 16)
        assert not Row.fast_hash_is_lossless(Stage.TRIPLES, 16)
        assert Row.fast_hash_is_lossless(Stage.CATERS, 32)
        assert not Row.fast_hash_is_lossless(Stage.ROYAL, 32)
        assert Row.fast_hash_is_lossless(Stage.SIXTEEN, 64)
        assert not Row.fast_hash_is_lossless(Stage(17), 64)
