"""Tests for ::part() and ::slotted() matching."""

import pytest

from stylescope.matching import match_shadow
from stylescope.model import TargetIdentity


@pytest.fixture
def identity():
    return TargetIdentity(classes=("card",), tag_name="my-widget", shadow_parts=("label", "icon"))


class TestPart:
    def test_part_name_and_host(self, identity):
        result = match_shadow("my-widget::part(label)", identity)
        assert result.matches
        assert result.reasons == ("part: label", "shadow-host with part")
        assert result.kinds == ("::part",)

    def test_part_name_only(self, identity):
        result = match_shadow("x-other::part(icon)", identity)
        assert result.reasons == ("part: icon",)

    def test_host_only(self, identity):
        result = match_shadow(".card::part(title)", identity)
        assert result.reasons == ("shadow-host with part",)

    def test_unrelated_part(self, identity):
        assert not match_shadow("x-other::part(title)", identity).matches


class TestSlotted:
    def test_slotted_class(self, identity):
        result = match_shadow("::slotted(.card)", identity)
        assert result.reasons == ("slotted: .card",)
        assert result.kinds == ("::slotted",)

    def test_slotted_other(self, identity):
        assert not match_shadow("::slotted(p)", identity).matches


class TestNonShadow:
    @pytest.mark.parametrize("selector", [".card", "", None, "my-widget::before"])
    def test_no_match(self, identity, selector):
        assert not match_shadow(selector, identity).matches
