"""Test the deterministic random source."""

from datetime import date, datetime, timedelta, timezone

import pytest

from src.engine import DeterministicRandomSource, ZERO_STATE_SUBSTITUTE, format_day_key


class TestSeeding:
    """Test cases for seeding the source."""

    def test_same_bytes_same_stream(self):
        """Identical seed bytes give identical trajectories."""
        a = DeterministicRandomSource.from_seed_bytes(b"TETRAD_v12025-09-25")
        b = DeterministicRandomSource.from_seed_bytes(b"TETRAD_v12025-09-25")
        assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]

    def test_different_bytes_different_stream(self):
        """Different seed bytes give different trajectories."""
        a = DeterministicRandomSource.from_seed_bytes(b"TETRAD_v12025-09-25")
        b = DeterministicRandomSource.from_seed_bytes(b"TETRAD_v12025-09-26")
        assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]

    def test_day_key_concatenates_version_and_date(self):
        """The daily seed is the version tag followed by the ISO date."""
        a = DeterministicRandomSource.from_day_key("T_v1", "2025-09-25")
        b = DeterministicRandomSource.from_seed_bytes(b"T_v12025-09-25")
        assert a.state == b.state

    def test_day_key_accepts_date(self):
        """A date object seeds like its ISO string."""
        a = DeterministicRandomSource.from_day_key("T_v1", date(2025, 9, 25))
        b = DeterministicRandomSource.from_day_key("T_v1", "2025-09-25")
        assert a.state == b.state

    def test_day_key_uses_utc(self):
        """Aware datetimes are converted to the UTC day."""
        evening_in_new_york = datetime(2025, 9, 25, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        a = DeterministicRandomSource.from_day_key("T_v1", evening_in_new_york)
        b = DeterministicRandomSource.from_day_key("T_v1", "2025-09-26")
        assert a.state == b.state

    def test_version_changes_seed(self):
        """The same day under another version is a different puzzle."""
        a = DeterministicRandomSource.from_day_key("T_v1", "2025-09-25")
        b = DeterministicRandomSource.from_day_key("T_v2", "2025-09-25")
        assert a.state != b.state

    def test_integer_seed(self):
        """Integer seeds are reproducible and distinct."""
        assert DeterministicRandomSource.from_seed(7).state == DeterministicRandomSource.from_seed(7).state
        assert DeterministicRandomSource.from_seed(7).state != DeterministicRandomSource.from_seed(8).state

    def test_integer_seed_wraps(self):
        """Integer seeds wrap to 64 bits."""
        a = DeterministicRandomSource.from_seed(2 ** 64 + 3)
        b = DeterministicRandomSource.from_seed(3)
        assert a.state == b.state

    def test_string_seed(self):
        """String seeds hash their UTF-8 bytes."""
        a = DeterministicRandomSource.from_string("level:food:L3")
        b = DeterministicRandomSource.from_seed_bytes("level:food:L3".encode("utf-8"))
        assert a.state == b.state

    def test_zero_state_substituted(self):
        """An all-zero state is replaced by a fixed constant."""
        assert DeterministicRandomSource(0).state == ZERO_STATE_SUBSTITUTE
        assert DeterministicRandomSource(2 ** 64).state == ZERO_STATE_SUBSTITUTE


class TestFormatDayKey:
    """Test cases for rendering day keys."""

    def test_string_roundtrip(self):
        """ISO strings are kept as-is."""
        assert format_day_key("2025-01-02") == "2025-01-02"

    def test_naive_datetime_is_utc(self):
        """Naive datetimes are taken to be UTC."""
        assert format_day_key(datetime(2025, 1, 2, 23, 59)) == "2025-01-02"

    def test_invalid_string(self):
        """Malformed day strings raise ValueError."""
        with pytest.raises(ValueError):
            format_day_key("25/09/2025")


class TestNext:
    """Test cases for advancing the generator."""

    def test_xorshift_step(self):
        """One step from state 1 matches xorshift64 with shifts 13, 7, 17."""
        source = DeterministicRandomSource(1)
        assert source.next() == 1082269761
        assert source.state == 1082269761

    def test_returns_new_state(self):
        """next() returns the state it advanced to."""
        source = DeterministicRandomSource.from_seed(42)
        value = source.next()
        assert value == source.state

    def test_stays_in_64_bits_and_nonzero(self):
        """Values are non-zero 64-bit integers."""
        source = DeterministicRandomSource.from_seed(42)
        for _ in range(1000):
            value = source.next()
            assert 0 < value < 2 ** 64

    def test_clone_is_independent(self):
        """A clone replays the same values without disturbing the original."""
        source = DeterministicRandomSource.from_seed(42)
        source.next()
        copy = source.clone()
        assert [copy.next() for _ in range(5)] == [source.next() for _ in range(5)]


class TestDerivedOperations:
    """Test cases for shuffles, bounded draws and choices."""

    def test_next_below_range(self):
        """Bounded draws stay in range."""
        source = DeterministicRandomSource.from_seed(1)
        for bound in [1, 2, 3, 7, 16, 1000]:
            for _ in range(50):
                assert 0 <= source.next_below(bound) < bound

    def test_next_below_invalid_bound(self):
        """A non-positive bound is rejected."""
        source = DeterministicRandomSource.from_seed(1)
        with pytest.raises(ValueError):
            source.next_below(0)

    def test_next_below_covers_values(self):
        """Small bounds hit every value over many draws."""
        source = DeterministicRandomSource.from_seed(5)
        assert {source.next_below(4) for _ in range(200)} == {0, 1, 2, 3}

    def test_shuffle_is_permutation(self):
        """Shuffling keeps exactly the same elements."""
        source = DeterministicRandomSource.from_seed(9)
        items = list("tetradwordpuzzle")
        shuffled = source.shuffle(items)
        assert sorted(shuffled) == sorted(items)

    def test_shuffle_does_not_mutate(self):
        """The input sequence is left untouched."""
        source = DeterministicRandomSource.from_seed(9)
        items = ["a", "b", "c", "d"]
        source.shuffle(items)
        assert items == ["a", "b", "c", "d"]

    def test_shuffle_reproducible(self):
        """Equal sources shuffle identically."""
        items = list(range(30))
        a = DeterministicRandomSource.from_seed(11).shuffle(items)
        b = DeterministicRandomSource.from_seed(11).shuffle(items)
        assert a == b

    def test_shuffle_changes_order(self):
        """Different seeds give different orders for a long sequence."""
        items = list(range(30))
        a = DeterministicRandomSource.from_seed(11).shuffle(items)
        b = DeterministicRandomSource.from_seed(12).shuffle(items)
        assert a != b

    def test_shuffle_trivial_sequences(self):
        """Empty and single-element sequences shuffle to themselves."""
        source = DeterministicRandomSource.from_seed(3)
        assert source.shuffle([]) == []
        assert source.shuffle(["x"]) == ["x"]

    def test_choice(self):
        """Choices come from the sequence."""
        source = DeterministicRandomSource.from_seed(3)
        for _ in range(20):
            assert source.choice("abc") in "abc"

    def test_choice_empty(self):
        """Choosing from an empty sequence raises IndexError."""
        source = DeterministicRandomSource.from_seed(3)
        with pytest.raises(IndexError):
            source.choice([])
