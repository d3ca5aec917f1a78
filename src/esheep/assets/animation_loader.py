"""Loads animation definitions from an eSheep XML file."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import random
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from esheep.errors import AnimationDataError
from esheep.types import (
    AnimationAction,
    AnimationDef,
    AnimationSet,
    Movement,
    Transition,
)
from .default_animations import create_default_animations

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PATHS = (Path("animation.xml"), Path("original.xml"))

TRANSPARENCY_COLORS: dict[str, tuple[int, int, int]] = {
    "magenta": (255, 0, 255),
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "green": (0, 255, 0),
}

# "12", "-2.5", "random*10+5", "Random*10", "random(10,5)"
_NUMBER = r"-?\d+(?:\.\d+)?"
_RANDOM_PRODUCT = re.compile(rf"^random\s*\*\s*({_NUMBER})\s*(?:\+\s*({_NUMBER}))?$", re.I)
_RANDOM_CALL = re.compile(rf"^random\s*\(\s*({_NUMBER})\s*,\s*({_NUMBER})\s*\)$", re.I)


def _local(tag: str) -> str:
    """Strip an XML namespace from a tag."""
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _text(element: Optional[ET.Element], default: str = "") -> str:
    if element is None or element.text is None:
        return default
    return element.text.strip()


def evaluate_number(expression: str, rng: random.Random) -> float:
    """Evaluate a numeric expression from an animation file.

    Plain numbers and the two random forms used by eSheep files are
    supported. Random expressions are evaluated once, at load time.

    Args:
        expression: Text such as "3", "random*10+5" or "random(10,5)".
        rng: Random source for random expressions.

    Returns:
        The value.

    Raises:
        AnimationDataError: If the expression is not understood.
    """
    text = expression.strip()
    if re.fullmatch(_NUMBER, text):
        return float(text)

    match = _RANDOM_PRODUCT.match(text) or _RANDOM_CALL.match(text)
    if match:
        scale = float(match.group(1))
        offset = float(match.group(2) or 0)
        return scale * rng.random() + offset

    raise AnimationDataError(f"Unsupported expression {expression!r}")


class AnimationLoader:
    """Loads an AnimationSet from an eSheep XML file.

    load() never raises. Any failure falls back to the built-in set so the
    simulation always gets usable animations.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the loader.

        Args:
            path: Animation XML file; the default search paths are tried
                when omitted.
            rng: Random source for random expressions in the file.
        """
        self._path = Path(path) if path is not None else None
        self._rng = rng or random.Random()

    def find_animation_file(self) -> Optional[Path]:
        """Locate the animation file to load.

        Returns:
            Path to an existing file, or None.
        """
        candidates = (self._path,) if self._path is not None else DEFAULT_SEARCH_PATHS
        for candidate in candidates:
            if candidate.is_file():
                return candidate
        return None

    def load(self) -> AnimationSet:
        """Load animations, falling back to the built-in set on any failure.

        Returns:
            The loaded or built-in AnimationSet.
        """
        path = self.find_animation_file()
        if path is None:
            logger.warning("Animation XML not found; using built-in animations")
            return create_default_animations()

        try:
            animations = self.parse(path.read_bytes())
        except (OSError, AnimationDataError) as e:
            logger.warning("Failed to load %s: %s; using built-in animations", path, e)
            return create_default_animations()

        logger.info("Loaded %d animations from %s", len(animations), path)
        return animations

    def parse(self, data: bytes) -> AnimationSet:
        """Parse eSheep XML.

        Args:
            data: Raw XML document.

        Returns:
            The parsed AnimationSet.

        Raises:
            AnimationDataError: If the document is malformed.
        """
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise AnimationDataError(f"Failed to parse XML: {e}") from e

        tiles_x, tiles_y, image = self._parse_image(_child(root, "image"))

        container = _child(root, "animations")
        if container is None:
            raise AnimationDataError("No <animations> element")

        animations = [self._parse_animation(element) for element in _children(container, "animation")]
        if not animations:
            raise AnimationDataError("No animations defined")

        known = {animation.id for animation in animations}
        for animation in animations:
            for transition in animation.transitions:
                if transition.next_id not in known:
                    logger.warning(
                        "Animation %s transitions to unknown animation %s",
                        animation.id,
                        transition.next_id,
                    )

        return AnimationSet(
            animations,
            tiles_x=tiles_x,
            tiles_y=tiles_y,
            image=image,
            source="xml",
            strict=False,
        )

    def _parse_image(
        self, element: Optional[ET.Element]
    ) -> tuple[int, int, Optional[Image.Image]]:
        """Read the atlas grid and decode the embedded PNG."""
        if element is None:
            raise AnimationDataError("No <image> element")

        try:
            tiles_x = int(_text(_child(element, "tilesx"), "1"))
            tiles_y = int(_text(_child(element, "tilesy"), "1"))
        except ValueError as e:
            raise AnimationDataError(f"Invalid tile grid: {e}") from e

        encoded = "".join(_text(_child(element, "png")).split())
        if not encoded:
            raise AnimationDataError("No sprite image in <png>")

        try:
            raw = base64.b64decode(encoded, validate=True)
            image = Image.open(io.BytesIO(raw))
            image.load()
        except (binascii.Error, UnidentifiedImageError, OSError) as e:
            raise AnimationDataError(f"Failed to decode sprite image: {e}") from e

        image = image.convert("RGBA")
        transparency = _text(_child(element, "transparency")).lower()
        if transparency in TRANSPARENCY_COLORS:
            image = apply_color_key(image, TRANSPARENCY_COLORS[transparency])

        return tiles_x, tiles_y, image

    def _parse_animation(self, element: ET.Element) -> AnimationDef:
        animation_id = element.get("id")
        if animation_id is None:
            raise AnimationDataError("Animation without id")

        sequence = _child(element, "sequence")
        if sequence is None:
            raise AnimationDataError(f"Animation {animation_id} has no <sequence>")

        try:
            frames = tuple(int(_text(frame)) for frame in _children(sequence, "frame"))
        except ValueError as e:
            raise AnimationDataError(f"Animation {animation_id} has a bad frame: {e}") from e

        repeat_count = int(evaluate_number(sequence.get("repeat", "0"), self._rng))
        repeat_from = int(evaluate_number(sequence.get("repeatfrom", "0"), self._rng))

        transitions = []
        next_elements = _children(sequence, "next")
        for next_element in next_elements:
            weight = int(evaluate_number(next_element.get("probability", "0"), self._rng))
            if weight <= 0:
                logger.warning(
                    "Animation %s: dropping transition to %s with weight %d",
                    animation_id,
                    _text(next_element),
                    weight,
                )
                continue
            transitions.append(Transition(_text(next_element), weight))
        if next_elements and not transitions:
            raise AnimationDataError(
                f"Animation {animation_id} has transitions but no positive weight"
            )

        action = None
        action_name = _text(_child(sequence, "action")).lower()
        if action_name:
            try:
                action = AnimationAction(action_name)
            except ValueError:
                logger.debug("Ignoring unsupported action %r in animation %s", action_name, animation_id)

        return AnimationDef(
            id=animation_id,
            name=_text(_child(element, "name"), animation_id),
            frames=frames,
            repeat_count=repeat_count,
            repeat_from=repeat_from,
            movement=self._parse_movement(element),
            transitions=tuple(transitions),
            action=action,
            has_gravity=_child(element, "gravity") is not None,
            has_border=_child(element, "border") is not None,
        )

    def _parse_movement(self, element: ET.Element) -> Movement:
        """Read start/end movement.

        Files describe y growing downward; the simulation measures y upward,
        so vertical movement is negated. Intervals are converted from
        milliseconds to seconds.
        """
        values = []
        for name in ("start", "end"):
            part = _child(element, name)
            if part is None:
                values.append((0.0, 0.0, 0.1))
                continue
            x = evaluate_number(_text(_child(part, "x"), "0"), self._rng)
            y = evaluate_number(_text(_child(part, "y"), "0"), self._rng)
            interval = evaluate_number(_text(_child(part, "interval"), "100"), self._rng)
            values.append((x, -y, interval / 1000.0))

        (start_x, start_y, start_interval), (end_x, end_y, end_interval) = values
        return Movement(start_x, start_y, end_x, end_y, start_interval, end_interval)


def apply_color_key(image: Image.Image, color: tuple[int, int, int]) -> Image.Image:
    """Make every pixel of the given colour fully transparent.

    Args:
        image: RGBA image.
        color: RGB colour to key out.

    Returns:
        A new RGBA image.
    """
    pixels = np.array(image.convert("RGBA"))
    mask = np.all(pixels[..., :3] == np.array(color, dtype=np.uint8), axis=-1)
    pixels[mask, 3] = 0
    return Image.fromarray(pixels)
