"""Tests for nesting validation of candidate pairs."""

import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from runmark.parsing import identify_pairs, tokenize, validate_pairs

MARKUP = st.text(alphabet=st.sampled_from(list("ab *_~`+=^")), max_size=80)


def validated(text: str, max_depth: int = 2) -> dict[int, int]:
    tokens = tokenize(text)
    return validate_pairs(tokens, identify_pairs(tokens), max_depth)


class TestDepth:
    def test_two_levels_allowed(self) -> None:
        assert validated("**a *b* a**") == {0: 6, 6: 0, 2: 4, 4: 2}

    def test_third_level_dropped(self) -> None:
        """Bold > italic > strikethrough keeps the outer two pairs."""
        assert validated("**a *b ~~c~~ b* a**") == {0: 10, 10: 0, 2: 8, 8: 2}

    def test_custom_depth(self) -> None:
        assert validated("**a *b ~~c~~ b* a**", max_depth=3) == {
            0: 10,
            10: 0,
            2: 8,
            8: 2,
            4: 6,
            6: 4,
        }

    def test_depth_zero_drops_everything(self) -> None:
        assert validated("**a**", max_depth=0) == {}

    def test_depth_one(self) -> None:
        assert validated("**a *b* a**", max_depth=1) == {0: 6, 6: 0}

    def test_siblings_do_not_add_depth(self) -> None:
        assert validated("*a* *b* *c*", max_depth=1) == {0: 2, 2: 0, 4: 6, 6: 4, 8: 10, 10: 8}


class TestCrossing:
    def test_crossing_pairs_both_dropped(self) -> None:
        assert validated("*a~~b*c~~") == {}

    def test_crossing_drops_inner_pairs_only(self) -> None:
        """The enclosing pair survives when an inner pair crosses."""
        assert validated("**x *a~~b*c~~ y**", max_depth=3) == {0: 10, 10: 0}

    def test_depth_drop_prevents_crossing(self) -> None:
        """An opener dropped for depth cannot cross the pairs around it."""
        assert validated("**x *a~~b*c~~ y**") == {0: 10, 10: 0, 2: 6, 6: 2}

    def test_input_not_mutated(self) -> None:
        tokens = tokenize("*a~~b*c~~")
        pairs = identify_pairs(tokens)
        snapshot = dict(pairs)
        validate_pairs(tokens, pairs)
        assert pairs == snapshot


class TestDiagnostics:
    def test_depth_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="runmark")
        validated("**a *b ~~c~~ b* a**")
        assert "Nesting depth 2 exceeded" in caplog.text

    def test_crossing_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="runmark")
        validated("*a~~b*c~~")
        assert "crossing" in caplog.text


class TestValidatedProperties:
    @given(MARKUP)
    @settings(max_examples=200)
    def test_subset_of_candidates_and_symmetric(self, text: str) -> None:
        tokens = tokenize(text)
        candidates = identify_pairs(tokens)
        pairs = validate_pairs(tokens, candidates)
        for i, j in pairs.items():
            assert candidates[i] == j
            assert pairs[j] == i

    @given(MARKUP)
    @settings(max_examples=200)
    def test_well_nested_within_depth(self, text: str) -> None:
        tokens = tokenize(text)
        pairs = validate_pairs(tokens, identify_pairs(tokens))
        stack: list[int] = []
        for index in range(len(tokens)):
            match = pairs.get(index)
            if match is None:
                continue
            if match > index:
                stack.append(index)
                assert len(stack) <= 2
            else:
                assert stack.pop() == match
        assert stack == []
