"""Tests for animation loading and placeholder assets."""

from __future__ import annotations

import base64
import io
import logging
import random

import pytest
from PIL import Image

from esheep.assets import (
    DEFAULT_ANIMATION_DEFINITIONS,
    AnimationLoader,
    PlaceholderGenerator,
    create_default_animations,
    create_placeholder_atlas,
)
from esheep.assets.animation_loader import evaluate_number
from esheep.errors import AnimationDataError
from esheep.types import AnimationAction


def png_base64(size=(20, 20), color=(255, 0, 255, 255)) -> str:
    """Encode a small PNG whose top-left pixel differs from the rest."""
    image = Image.new("RGBA", size, color)
    image.putpixel((0, 0), (10, 20, 30, 255))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


SHEEP_XML = """<?xml version="1.0" encoding="utf-8"?>
<animations xmlns="https://esheep.petrucci.ch/">
  <image>
    <tilesx>2</tilesx>
    <tilesy>2</tilesy>
    <png>{png}</png>
    <transparency>Magenta</transparency>
  </image>
  <animations>
    <animation id="1">
      <name>walk</name>
      <start><x>-2</x><y>0</y><interval>200</interval></start>
      <end><x>-2</x><y>4</y><interval>100</interval></end>
      <sequence repeat="3" repeatfrom="1">
        <frame>0</frame>
        <frame>1</frame>
        <frame>2</frame>
        <next probability="70">1</next>
        <next probability="30">2</next>
        <next probability="0">1</next>
        <action>flip</action>
      </sequence>
      <border><next probability="100" only="vertical">2</next></border>
      <gravity><next probability="100">2</next></gravity>
    </animation>
    <animation id="2">
      <name>sit</name>
      <sequence repeat="random(3,1)" repeatfrom="0">
        <frame>3</frame>
        <next probability="100">9</next>
      </sequence>
    </animation>
  </animations>
</animations>
"""


@pytest.fixture
def sheep_xml() -> bytes:
    """A two-animation eSheep document."""
    return SHEEP_XML.format(png=png_base64()).encode("utf-8")


class TestDefaultAnimations:
    """Tests for the built-in animation set."""

    def test_four_animations(self):
        """Test the built-in set has exactly walk, run, idle and fall."""
        animations = create_default_animations()
        assert [animations[i].name for i in ("0", "1", "2", "3")] == ["walk", "run", "idle", "fall"]
        assert len(animations) == 4 == len(DEFAULT_ANIMATION_DEFINITIONS)

    def test_atlas_grid(self):
        """Test the built-in set uses a 16x11 atlas."""
        animations = create_default_animations()
        assert (animations.tiles_x, animations.tiles_y) == (16, 11)

    def test_walk_values(self):
        """Test walk frames, movement and transitions."""
        walk = create_default_animations()["0"]
        assert walk.frames == tuple(range(8))
        assert walk.movement.at(0.5) == (3, 0)
        assert [(t.next_id, t.weight) for t in walk.transitions] == [("0", 50), ("1", 30), ("2", 20)]

    def test_fall_values(self):
        """Test fall is a gravity animation that returns to walk."""
        fall = create_default_animations()["3"]
        assert fall.frames == (34, 35)
        assert fall.has_gravity
        assert [t.next_id for t in fall.transitions] == ["0"]


class TestEvaluateNumber:
    """Tests for numeric expressions in animation files."""

    def test_plain_numbers(self):
        """Test integers and decimals parse directly."""
        assert evaluate_number("12", random.Random(1)) == 12.0
        assert evaluate_number(" -2.5 ", random.Random(1)) == -2.5

    def test_random_product(self, scripted_random):
        """Test random*a+b scales the random value."""
        assert evaluate_number("random*10+5", scripted_random(randoms=[0.5])) == 10.0
        assert evaluate_number("Random*4", scripted_random(randoms=[0.25])) == 1.0

    def test_random_call(self, scripted_random):
        """Test random(a,b) scales and offsets the random value."""
        assert evaluate_number("random(10,5)", scripted_random(randoms=[0.2])) == 7.0

    def test_unsupported_expression(self):
        """Test screen-relative expressions are rejected."""
        with pytest.raises(AnimationDataError):
            evaluate_number("screenW-imageW", random.Random(1))


class TestAnimationLoader:
    """Tests for the XML animation loader."""

    def test_parse_animations(self, sheep_xml):
        """Test frames, repeats, transitions and flags are read."""
        animations = AnimationLoader(rng=random.Random(1)).parse(sheep_xml)
        walk = animations["1"]
        assert animations.source == "xml"
        assert animations.initial_id == "1"
        assert walk.name == "walk"
        assert walk.frames == (0, 1, 2)
        assert (walk.repeat_count, walk.repeat_from) == (3, 1)
        assert [(t.next_id, t.weight) for t in walk.transitions] == [("1", 70), ("2", 30)]
        assert walk.action is AnimationAction.FLIP
        assert walk.has_gravity and walk.has_border

    def test_movement_converted(self, sheep_xml):
        """Test y is flipped to point up and intervals become seconds."""
        walk = AnimationLoader(rng=random.Random(1)).parse(sheep_xml)["1"]
        assert walk.movement.start_x == -2
        assert walk.movement.end_y == -4
        assert walk.movement.start_interval == pytest.approx(0.2)
        assert walk.movement.end_interval == pytest.approx(0.1)

    def test_random_repeat_evaluated_once(self, sheep_xml):
        """Test a random repeat becomes a fixed integer at load time."""
        sit = AnimationLoader(rng=random.Random(1)).parse(sheep_xml)["2"]
        assert 1 <= sit.repeat_count <= 3
        assert sit.movement.at(0.0) == (0, 0)

    def test_image_decoded_with_color_key(self, sheep_xml):
        """Test the embedded PNG is decoded and magenta made transparent."""
        animations = AnimationLoader(rng=random.Random(1)).parse(sheep_xml)
        assert (animations.tiles_x, animations.tiles_y) == (2, 2)
        assert animations.image.size == (20, 20)
        assert animations.image.getpixel((5, 5))[3] == 0
        assert animations.image.getpixel((0, 0)) == (10, 20, 30, 255)

    def test_dangling_transition_is_warned(self, sheep_xml, caplog):
        """Test transitions to unknown ids are kept but reported."""
        with caplog.at_level(logging.WARNING):
            animations = AnimationLoader(rng=random.Random(1)).parse(sheep_xml)
        assert "9" not in animations
        assert "unknown animation 9" in caplog.text

    def test_load_from_file(self, sheep_xml, tmp_path):
        """Test load reads the given file."""
        path = tmp_path / "animation.xml"
        path.write_bytes(sheep_xml)
        animations = AnimationLoader(path, rng=random.Random(1)).load()
        assert animations.source == "xml"
        assert len(animations) == 2

    def test_missing_file_falls_back(self, tmp_path, caplog):
        """Test a missing file yields the built-in set."""
        with caplog.at_level(logging.WARNING):
            animations = AnimationLoader(tmp_path / "missing.xml").load()
        assert animations.source == "fallback"
        assert "built-in" in caplog.text

    def test_default_search_paths(self, tmp_path, monkeypatch):
        """Test the loader falls back when no default file is present."""
        monkeypatch.chdir(tmp_path)
        loader = AnimationLoader()
        assert loader.find_animation_file() is None
        assert loader.load().source == "fallback"

    def test_malformed_xml_falls_back(self, tmp_path):
        """Test unparseable XML yields the built-in set."""
        path = tmp_path / "animation.xml"
        path.write_text("<animations><image>")
        assert AnimationLoader(path).load().source == "fallback"

    def test_bad_image_falls_back(self, tmp_path):
        """Test an undecodable sprite image yields the built-in set."""
        path = tmp_path / "animation.xml"
        path.write_text(SHEEP_XML.format(png="not-base64!"))
        assert AnimationLoader(path).load().source == "fallback"

    def test_bad_animation_falls_back(self, tmp_path):
        """Test invalid animation data yields the built-in set."""
        path = tmp_path / "animation.xml"
        path.write_text(
            "<animations><image><tilesx>1</tilesx><tilesy>1</tilesy>"
            f"<png>{png_base64()}</png></image>"
            "<animations><animation id=\"1\"><sequence/></animation></animations></animations>"
        )
        assert AnimationLoader(path).load().source == "fallback"

    def test_zero_weight_transition_is_warned(self, sheep_xml, caplog):
        """Test a zero weight next to positive ones is dropped with a warning."""
        with caplog.at_level(logging.WARNING):
            walk = AnimationLoader(rng=random.Random(1)).parse(sheep_xml)["1"]
        assert all(t.weight > 0 for t in walk.transitions)
        assert "weight 0" in caplog.text

    def test_all_zero_weights_fall_back(self, tmp_path):
        """Test an animation whose transitions all weigh zero is rejected."""
        document = (
            "<animations><image><tilesx>1</tilesx><tilesy>1</tilesy>"
            f"<png>{png_base64()}</png></image>"
            "<animations><animation id=\"1\"><sequence><frame>0</frame>"
            "<next probability=\"0\">1</next><next probability=\"0\">1</next>"
            "</sequence></animation></animations></animations>"
        )
        with pytest.raises(AnimationDataError):
            AnimationLoader(rng=random.Random(1)).parse(document.encode("utf-8"))

        path = tmp_path / "animation.xml"
        path.write_text(document)
        assert AnimationLoader(path).load().source == "fallback"


class TestPlaceholderAtlas:
    """Tests for generated placeholder sprites."""

    def test_atlas_size(self):
        """Test the atlas covers the whole tile grid."""
        image = create_placeholder_atlas(4, 3, tile_size=10)
        assert image.size == (40, 30)
        assert image.mode == "RGBA"

    def test_tiles_have_border(self):
        """Test every tile has a white border and a coloured body."""
        image = create_placeholder_atlas(2, 2, tile_size=10)
        assert image.getpixel((10, 10)) == (255, 255, 255, 255)
        assert image.getpixel((15, 15)) != (255, 255, 255, 255)

    def test_tiles_differ(self):
        """Test neighbouring tiles get different colours."""
        image = create_placeholder_atlas(2, 1, tile_size=10)
        assert image.getpixel((5, 5)) != image.getpixel((15, 5))

    def test_generator_writes_png(self, tmp_path):
        """Test the generator saves an atlas to disk."""
        path = PlaceholderGenerator(tmp_path).generate_atlas("sheep", 2, 2, 10)
        assert path.exists()
        with Image.open(path) as image:
            assert image.size == (20, 20)
