"""Reveal-on-scroll controller.

Sections marked as animatable start hidden and are flagged as revealed the
first time enough of them enters the viewport. The geometry mirrors the
browser's ``IntersectionObserver``: the viewport is adjusted by a CSS-style
root margin and a section counts once ``intersection / area`` reaches the
threshold.

Revealing is a one-way latch. A revealed section is no longer observed and is
never reported again, whatever the viewport does afterwards.

The same parameters are rendered into the page for ``static/js/site.js`` so
the browser and this model agree on when a section appears.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

SECTION_CLASS = "fade-in-section"
REVEALED_CLASS = "animate-in"
DEFAULT_THRESHOLD = 0.1
DEFAULT_ROOT_MARGIN = "0px 0px -100px 0px"

_MARGIN_TOKEN = re.compile(r"^(-?\d+(?:\.\d+)?)(px|%)$")


@dataclass(frozen=True)
class Box:
    """Section bounding box in document coordinates."""

    top: float
    left: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class Viewport:
    """Visible window: its size and how far the document is scrolled."""

    width: float
    height: float
    scroll_x: float = 0.0
    scroll_y: float = 0.0


@dataclass(frozen=True)
class RootMargin:
    """CSS margin applied to the viewport; negative values shrink it."""

    top: tuple[float, str] = (0.0, "px")
    right: tuple[float, str] = (0.0, "px")
    bottom: tuple[float, str] = (0.0, "px")
    left: tuple[float, str] = (0.0, "px")

    @classmethod
    def parse(cls, value: str) -> RootMargin:
        tokens = value.split()
        if not 1 <= len(tokens) <= 4:
            raise ValueError(f"invalid root margin: {value!r}")
        parsed: list[tuple[float, str]] = []
        for token in tokens:
            match = _MARGIN_TOKEN.match(token)
            if match is None:
                raise ValueError(f"invalid root margin length: {token!r}")
            parsed.append((float(match.group(1)), match.group(2)))
        # CSS shorthand expansion
        if len(parsed) == 1:
            parsed *= 4
        elif len(parsed) == 2:
            parsed = [parsed[0], parsed[1], parsed[0], parsed[1]]
        elif len(parsed) == 3:
            parsed = [parsed[0], parsed[1], parsed[2], parsed[1]]
        return cls(*parsed)

    def __str__(self) -> str:
        return " ".join(
            f"{_format_number(amount)}{unit}"
            for amount, unit in (self.top, self.right, self.bottom, self.left)
        )

    def apply(self, viewport: Viewport) -> tuple[float, float, float, float]:
        """Return the margin-adjusted root as (top, left, bottom, right)."""

        def resolve(length: tuple[float, str], basis: float) -> float:
            amount, unit = length
            return basis * amount / 100 if unit == "%" else amount

        top = viewport.scroll_y - resolve(self.top, viewport.height)
        bottom = (
            viewport.scroll_y
            + viewport.height
            + resolve(self.bottom, viewport.height)
        )
        left = viewport.scroll_x - resolve(self.left, viewport.width)
        right = (
            viewport.scroll_x + viewport.width + resolve(self.right, viewport.width)
        )
        return top, left, bottom, right


def _format_number(value: float) -> str:
    return str(int(value)) if value == int(value) else str(value)


def intersection_ratio(
    box: Box, viewport: Viewport, margin: RootMargin
) -> float | None:
    """Fraction of ``box`` inside the adjusted viewport.

    Returns None when the box does not touch the root at all. Edge-adjacent
    boxes intersect with a ratio of 0, except zero-area boxes which count as
    fully visible.
    """
    root_top, root_left, root_bottom, root_right = margin.apply(viewport)
    top = max(box.top, root_top)
    bottom = min(box.bottom, root_bottom)
    left = max(box.left, root_left)
    right = min(box.right, root_right)
    if bottom < top or right < left:
        return None
    if box.area == 0:
        return 1.0
    return ((bottom - top) * (right - left)) / box.area


@dataclass
class SectionVisibilityState:
    """Section id -> revealed flag for one mounted page."""

    flags: dict[str, bool] = field(default_factory=dict)

    def track(self, section_id: str) -> None:
        self.flags.setdefault(section_id, False)

    def mark_revealed(self, section_id: str) -> bool:
        """Latch ``section_id``; return True only on the first transition."""
        if self.flags.get(section_id):
            return False
        self.flags[section_id] = True
        return True

    def is_revealed(self, section_id: str) -> bool:
        return self.flags.get(section_id, False)

    def revealed(self) -> frozenset[str]:
        return frozenset(key for key, value in self.flags.items() if value)


class RevealController:
    """Observe animatable sections and reveal each one exactly once."""

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        root_margin: str = DEFAULT_ROOT_MARGIN,
        supported: bool = True,
    ) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError("threshold must be between 0 and 1")
        self.threshold = threshold
        self.root_margin = RootMargin.parse(root_margin)
        # Without a visibility primitive every section shows immediately
        self.supported = supported
        self.state = SectionVisibilityState()
        # None until the section has been laid out
        self._observed: dict[str, Box | None] = {}

    @property
    def observed(self) -> list[str]:
        return list(self._observed)

    @property
    def revealed(self) -> frozenset[str]:
        return self.state.revealed()

    def is_revealed(self, section_id: str) -> bool:
        return self.state.is_revealed(section_id)

    def observe(self, section_id: str, box: Box | None = None) -> None:
        """Start watching a section. Re-observing updates its box."""
        self.state.track(section_id)
        if self.state.is_revealed(section_id):
            return
        if not self.supported:
            self._reveal(section_id)
            return
        self._observed[section_id] = box

    def observe_all(self, sections: Mapping[str, Box] | Iterable[str]) -> None:
        if isinstance(sections, Mapping):
            for section_id, box in sections.items():
                self.observe(section_id, box)
        else:
            for section_id in sections:
                self.observe(section_id)

    def unobserve(self, section_id: str) -> None:
        self._observed.pop(section_id, None)

    def update(self, viewport: Viewport) -> list[str]:
        """Check every observed section against ``viewport``.

        Returns the ids revealed by this update, in observation order.
        """
        newly_revealed = []
        for section_id, box in list(self._observed.items()):
            if box is None:
                continue
            ratio = intersection_ratio(box, viewport, self.root_margin)
            if ratio is not None and ratio >= self.threshold:
                if self._reveal(section_id):
                    newly_revealed.append(section_id)
        return newly_revealed

    def reveal_all(self) -> list[str]:
        """Reveal every tracked section, e.g. when animations are disabled."""
        return [
            section_id
            for section_id in list(self.state.flags)
            if self._reveal(section_id)
        ]

    def disconnect(self) -> None:
        """Release all observation. Latched flags are kept."""
        self._observed.clear()

    def script_config(self) -> dict[str, object]:
        """Parameters for the browser-side observer."""
        return {
            "selector": f".{SECTION_CLASS}",
            "revealedClass": REVEALED_CLASS,
            "threshold": self.threshold,
            "rootMargin": str(self.root_margin),
            "sections": [
                section_id
                for section_id in self.state.flags
                if not self.state.is_revealed(section_id)
            ],
        }

    def _reveal(self, section_id: str) -> bool:
        self._observed.pop(section_id, None)
        if self.state.mark_revealed(section_id):
            logger.debug("Section revealed", extra={"section": section_id})
            return True
        return False
