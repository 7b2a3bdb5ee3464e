"""Property-based tests for size formatting and parsing.

Property 1: format_bytes picks the largest unit with a value of at least 1, capped at TB
Property 2: parse_size_to_bytes never raises and never returns a negative count
Property 3: formatted sizes parse back to within the rounding of one decimal place
"""

import re

from hypothesis import given, settings
from hypothesis import strategies as st

from dlspace.utils.size import UNITS, format_bytes, parse_size_to_bytes

FORMAT_PATTERN = re.compile(r"^(\d+\.\d) (B|KB|MB|GB|TB)$")


class TestFormatBytesProperties:
    """Property tests for format_bytes."""

    @given(size_bytes=st.integers(min_value=0, max_value=1024**6))
    @settings(max_examples=200)
    def test_output_shape(self, size_bytes: int):
        """Output is always '<value with one decimal> <unit>'."""
        assert FORMAT_PATTERN.match(format_bytes(size_bytes))

    @given(size_bytes=st.integers(min_value=0, max_value=1024**6))
    @settings(max_examples=200)
    def test_unit_is_largest_fitting_unit(self, size_bytes: int):
        """The unit is the largest one whose scaled value is at least 1, capped at TB."""
        expected_index = 0
        while expected_index < len(UNITS) - 1 and size_bytes >= 1024 ** (expected_index + 1):
            expected_index += 1

        unit = format_bytes(size_bytes).split(" ")[1]

        assert unit == UNITS[expected_index]

    @given(size_bytes=st.integers(min_value=0, max_value=1024**6))
    @settings(max_examples=100)
    def test_value_matches_scaled_size(self, size_bytes: int):
        """The rendered value is the size scaled to its unit, to one decimal place."""
        value, unit = format_bytes(size_bytes).split(" ")

        scaled = size_bytes / 1024 ** UNITS.index(unit)

        assert abs(float(value) - scaled) <= 0.05 + 1e-9


class TestParseSizeProperties:
    """Property tests for parse_size_to_bytes."""

    @given(size_string=st.text(max_size=30))
    @settings(max_examples=300)
    def test_never_raises_on_arbitrary_text(self, size_string: str):
        """Any text yields a non-negative integer."""
        result = parse_size_to_bytes(size_string)

        assert isinstance(result, int)
        assert result >= 0

    @given(
        number=st.text(alphabet="0123456789.", min_size=1, max_size=500),
        unit=st.sampled_from(["b", "KB", "mb", "GB"]),
    )
    @settings(max_examples=200)
    def test_never_raises_on_long_numbers(self, number: str, unit: str):
        """Numbers of any length, including ones beyond float range, yield a count."""
        result = parse_size_to_bytes(f"{number} {unit}")

        assert isinstance(result, int)
        assert result >= 0

    @given(
        value=st.integers(min_value=0, max_value=10**6),
        unit=st.sampled_from(["b", "kb", "mb", "gb"]),
        upper=st.booleans(),
        spaces=st.text(alphabet=" \t", max_size=3),
    )
    @settings(max_examples=200)
    def test_integer_sizes_are_exact(self, value: int, unit: str, upper: bool, spaces: str):
        """Integer sizes convert exactly, regardless of case and spacing."""
        multipliers = {"b": 1, "kb": 1024, "mb": 1024**2, "gb": 1024**3}
        size_string = f"{value}{spaces}{unit.upper() if upper else unit}"

        assert parse_size_to_bytes(size_string) == value * multipliers[unit]

    @given(value=st.integers(min_value=1, max_value=1000), unit=st.sampled_from(["tb", "pb", "m"]))
    def test_unsupported_units_return_zero(self, value: int, unit: str):
        """Units outside B/KB/MB/GB are rejected."""
        assert parse_size_to_bytes(f"{value} {unit}") == 0


class TestRoundTrip:
    """Round trip between format_bytes and parse_size_to_bytes."""

    @given(
        multiple=st.integers(min_value=1, max_value=1023),
        exponent=st.integers(min_value=0, max_value=3),
    )
    @settings(max_examples=200)
    def test_power_of_1024_multiples_round_trip_exactly(self, multiple: int, exponent: int):
        """Exact multiples of a unit survive formatting and parsing unchanged."""
        size_bytes = multiple * 1024**exponent

        assert parse_size_to_bytes(format_bytes(size_bytes)) == size_bytes

    @given(size_bytes=st.integers(min_value=0, max_value=1024**4 - 1))
    @settings(max_examples=200)
    def test_round_trip_within_display_precision(self, size_bytes: int):
        """Parsing a formatted size is off by at most half a display step."""
        formatted = format_bytes(size_bytes)
        unit_size = 1024 ** UNITS.index(formatted.split(" ")[1])

        parsed = parse_size_to_bytes(formatted)

        assert abs(parsed - size_bytes) <= 0.05 * unit_size + 1
