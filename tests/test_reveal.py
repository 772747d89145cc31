"""Tests for elitefitness/services/reveal.py."""

from __future__ import annotations

import pytest

from elitefitness.services.reveal import (
    Box,
    RevealController,
    RootMargin,
    SectionVisibilityState,
    Viewport,
    intersection_ratio,
)

# 1000px tall window; with the -100px bottom margin the effective root ends
# at scroll_y + 900.
WINDOW = Viewport(width=1200, height=1000)
DEFAULT_MARGIN = RootMargin.parse("0px 0px -100px 0px")


def at(scroll_y: float) -> Viewport:
    return Viewport(width=WINDOW.width, height=WINDOW.height, scroll_y=scroll_y)


# ── Root margin parsing ─────────────────────────────────────────


class TestRootMargin:
    def test_four_values(self):
        margin = RootMargin.parse("0px 0px -100px 0px")
        assert margin.bottom == (-100.0, "px")
        assert margin.top == (0.0, "px")
        assert str(margin) == "0px 0px -100px 0px"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("10px", "10px 10px 10px 10px"),
            ("10px 5%", "10px 5% 10px 5%"),
            ("1px 2px 3px", "1px 2px 3px 2px"),
        ],
    )
    def test_shorthand_expansion(self, raw, expected):
        assert str(RootMargin.parse(raw)) == expected

    @pytest.mark.parametrize("raw", ["", "10em", "1px 2px 3px 4px 5px", "px"])
    def test_invalid_values_rejected(self, raw):
        with pytest.raises(ValueError):
            RootMargin.parse(raw)

    def test_percent_resolves_against_viewport(self):
        margin = RootMargin.parse("0px 0px -10% 0px")
        top, left, bottom, right = margin.apply(WINDOW)
        assert (top, left, bottom, right) == (0, 0, 900, 1200)


# ── Geometry ────────────────────────────────────────────────────


class TestIntersectionRatio:
    def test_fully_visible(self):
        box = Box(top=100, left=0, width=400, height=200)
        assert intersection_ratio(box, WINDOW, DEFAULT_MARGIN) == 1.0

    def test_below_the_fold_is_not_intersecting(self):
        box = Box(top=1500, left=0, width=400, height=200)
        assert intersection_ratio(box, WINDOW, DEFAULT_MARGIN) is None

    def test_bottom_margin_hides_last_hundred_pixels(self):
        # Entirely inside the window, but inside the shrunk 100px strip
        box = Box(top=920, left=0, width=400, height=60)
        assert intersection_ratio(box, WINDOW, DEFAULT_MARGIN) is None

    def test_partial_overlap(self):
        box = Box(top=800, left=0, width=400, height=400)
        assert intersection_ratio(box, WINDOW, DEFAULT_MARGIN) == pytest.approx(0.25)

    def test_scrolling_moves_the_root(self):
        box = Box(top=2000, left=0, width=400, height=200)
        assert intersection_ratio(box, at(1500), DEFAULT_MARGIN) == 1.0

    def test_zero_area_box_inside_root(self):
        box = Box(top=10, left=10, width=0, height=0)
        assert intersection_ratio(box, WINDOW, DEFAULT_MARGIN) == 1.0


# ── Controller ──────────────────────────────────────────────────


class TestRevealController:
    def test_reveals_once_ten_percent_is_visible(self):
        controller = RevealController()
        # 1000px tall section starting at 850: 50px visible (5%)
        controller.observe("pricing", Box(top=850, left=0, width=800, height=1000))
        assert controller.update(WINDOW) == []
        assert not controller.is_revealed("pricing")

        # Scroll 60px: 110px visible (11%)
        assert controller.update(at(60)) == ["pricing"]
        assert controller.is_revealed("pricing")

    def test_exact_threshold_reveals(self):
        controller = RevealController()
        controller.observe("hero", Box(top=800, left=0, width=100, height=1000))
        assert controller.update(WINDOW) == ["hero"]

    def test_reveal_is_a_one_way_latch(self):
        controller = RevealController()
        controller.observe("trainers", Box(top=1200, left=0, width=800, height=400))

        assert controller.update(at(600)) == ["trainers"]
        # Scroll far past and back again: nothing more is reported
        assert controller.update(at(5000)) == []
        assert controller.update(at(600)) == []
        assert controller.is_revealed("trainers")
        assert controller.observed == []

    def test_each_section_reported_exactly_once(self):
        controller = RevealController()
        sections = {
            f"section-{index}": Box(top=index * 600, left=0, width=800, height=500)
            for index in range(6)
        }
        controller.observe_all(sections)

        reported: list[str] = []
        for scroll_y in [0, 300, 900, 0, 2400, 1200, 3600, 0]:
            reported += controller.update(at(scroll_y))

        assert sorted(reported) == sorted(sections)
        assert len(reported) == len(set(reported))
        assert controller.revealed == frozenset(sections)

    def test_update_returns_ids_in_observation_order(self):
        controller = RevealController()
        controller.observe("b", Box(top=200, left=0, width=10, height=10))
        controller.observe("a", Box(top=100, left=0, width=10, height=10))
        assert controller.update(WINDOW) == ["b", "a"]

    def test_disconnect_releases_all_observation(self):
        controller = RevealController()
        controller.observe("contact", Box(top=3000, left=0, width=800, height=400))
        controller.disconnect()

        assert controller.observed == []
        assert controller.update(at(2800)) == []
        assert not controller.is_revealed("contact")

    def test_disconnect_keeps_revealed_flags(self):
        controller = RevealController()
        controller.observe("hero", Box(top=0, left=0, width=800, height=400))
        controller.update(WINDOW)
        controller.disconnect()
        assert controller.is_revealed("hero")

    def test_observing_a_revealed_section_is_a_no_op(self):
        controller = RevealController()
        controller.observe("hero", Box(top=0, left=0, width=800, height=400))
        controller.update(WINDOW)
        controller.observe("hero", Box(top=9000, left=0, width=800, height=400))
        assert controller.observed == []
        assert controller.is_revealed("hero")

    def test_unobserve(self):
        controller = RevealController()
        controller.observe("hero", Box(top=0, left=0, width=800, height=400))
        controller.unobserve("hero")
        assert controller.update(WINDOW) == []

    def test_unsupported_primitive_reveals_immediately(self):
        controller = RevealController(supported=False)
        controller.observe_all(["hero", "programs-header"])
        assert controller.revealed == frozenset({"hero", "programs-header"})
        assert controller.observed == []

    def test_reveal_all(self):
        controller = RevealController()
        controller.observe_all(["hero", "newsletter"])
        assert controller.reveal_all() == ["hero", "newsletter"]
        assert controller.reveal_all() == []

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            RevealController(threshold=1.5)

    def test_script_config_lists_pending_sections(self):
        controller = RevealController()
        controller.observe_all(["hero", "newsletter"])
        controller.observe("hero", Box(top=0, left=0, width=10, height=10))
        controller.update(WINDOW)

        config = controller.script_config()
        assert config["threshold"] == 0.1
        assert config["rootMargin"] == "0px 0px -100px 0px"
        assert config["selector"] == ".fade-in-section"
        assert config["revealedClass"] == "animate-in"
        assert config["sections"] == ["newsletter"]


class TestSectionVisibilityState:
    def test_mark_revealed_only_transitions_once(self):
        state = SectionVisibilityState()
        state.track("hero")
        assert state.mark_revealed("hero") is True
        assert state.mark_revealed("hero") is False
        assert state.revealed() == frozenset({"hero"})
