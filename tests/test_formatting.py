"""Tests for the default inline snapshot formatter."""

import numpy as np

from snapshot_store.formatting import pretty_format, string_or_pretty_format


class TestPrettyFormat:
    """Tests for pretty_format."""

    def test_scalars(self):
        assert pretty_format(1) == "1"
        assert pretty_format(None) == "None"
        assert pretty_format("text") == "'text'"

    def test_dicts_are_sorted(self):
        assert pretty_format({"b": 1, "a": 2}) == "{'a': 2, 'b': 1}"

    def test_numpy_array(self):
        assert pretty_format(np.array([[1, 2], [3, 4]])) == "[[1, 2],\n [3, 4]]"

    def test_large_numpy_array_is_not_summarised(self):
        text = pretty_format(np.arange(2000))
        assert "..." not in text
        assert "1999" in text

    def test_numpy_scalar(self):
        assert pretty_format(np.int64(7)) == "7"
        assert pretty_format(np.float64(0.5)) == "0.5"


class TestStringOrPrettyFormat:
    """Tests for string_or_pretty_format."""

    def test_strings_pass_through(self):
        assert string_or_pretty_format("as is") == "as is"

    def test_other_values_are_formatted(self):
        assert string_or_pretty_format([1, 2]) == "[1, 2]"

    def test_custom_formatter(self):
        assert string_or_pretty_format(3, lambda value: f"<{value}>") == "<3>"
