"""카드 레이아웃 테스트 — 레이어 순서와 좌표."""

import logging

import pytest
from PIL import Image

from config import Lord
from content.cards import Card
from renderer.layers import BLEND_DEST_OVER, BLEND_OVER
from renderer.layout import CardLayout
from renderer.text import OverlaySpec, get_font, render_overlay

FRAME = (200, 300)


def _card(**kwargs) -> Card:
    values = dict(
        deck="play", lord="gaidda", index=0, rarity="common",
        name="Gaidda the Bold", cost="8", hp="2",
        use_text="u" * 30, play_text="p" * 20, flavour_text="",
    )
    values.update(kwargs)
    return Card(**values)


def _layers(lord, card, frame=FRAME):
    layout = CardLayout(frame, lord, version="v1.0")
    illustration = Image.new("RGBA", (512, 512), (0, 0, 255, 255))
    icons = {a: Image.new("RGBA", (18, 18), (255, 255, 0, 255)) for a in ("use", "play")}
    return layout.layers(card, illustration, icons, render_overlay)


def test_end_to_end_layer_list(lord):
    layers = _layers(lord, _card())

    assert [l.name for l in layers] == [
        "illustration", "cost", "name", "hp",
        "use", "use_icon", "play", "play_icon", "version",
    ]
    positions = {l.name: (l.top, l.left) for l in layers}
    assert positions == {
        "illustration": (15, 5),
        "cost": (6, 170),
        "name": (8, 16),
        "hp": (266, 88),
        "use": (170, 40),
        "use_icon": (168, 18),
        "play": (216, 40),   # 170 + 40 + 30 // 25 * 6
        "play_icon": (214, 18),
        "version": (286, 154),
    }
    assert layers[0].blend == BLEND_DEST_OVER
    assert all(l.blend == BLEND_OVER for l in layers[1:])
    assert layers[0].image.size == (190, 190)


def test_overlay_fonts_and_colors(lord):
    specs = dict(CardLayout(FRAME, lord).overlays(_card()))
    assert specs["cost"].font_size == 10
    assert specs["cost"].color == "#B1CAB1"
    assert specs["name"].font_size == 8
    assert specs["hp"].font_size == 8
    assert specs["use"].color == "#1E2A1E"
    assert specs["version"].font_style == "italic"


def test_rendered_overlay_matches_box(lord):
    for layer, (_, spec) in zip(
        [l for l in _layers(lord, _card()) if l.name in ("cost", "name", "hp", "use", "play", "version")],
        CardLayout(FRAME, lord).overlays(_card()),
    ):
        assert layer.image.size == (spec.width, spec.height)
        assert layer.image.mode == "RGBA"


def test_wide_cost_badge(lord):
    specs = dict(CardLayout(FRAME, lord).overlays(_card(cost="12")))
    assert specs["cost"].font_size == 8
    assert (specs["cost"].top, specs["cost"].left) == (12, 163)


def test_long_name_shrinks_and_drops(lord):
    specs = dict(CardLayout(FRAME, lord).overlays(_card(name="n" * 21)))
    assert specs["name"].font_size == 6
    assert specs["name"].top == 14


def test_flavour_text_rises_with_length(lord):
    specs = dict(CardLayout(FRAME, lord).overlays(_card(flavour_text="f" * 40)))
    flavour = specs["flavour"]
    assert flavour.font_style == "italic"
    assert (flavour.top, flavour.left) == (228, 30)


def test_flavour_layer_sits_before_version(lord):
    names = [l.name for l in _layers(lord, _card(flavour_text="Old roads remember."))]
    assert len(names) == 10
    assert names[-2:] == ["flavour", "version"]


def test_empty_play_text_drops_icon(lord):
    names = [l.name for l in _layers(lord, _card(play_text=""))]
    assert "play" not in names
    assert "play_icon" not in names


def test_illustration_offset(lord):
    layout = CardLayout(FRAME, lord)
    assert layout.illustration_box((10, -3)) == (190, 190, 25, 2)


def test_lord_frame_offset_moves_overlays_only():
    lord = Lord(id="selene", cost_color="#A9B8D6", text_color="#141C2B", frame_offset=4)
    layers = {l.name: l for l in _layers(lord, _card(lord="selene"))}
    assert layers["illustration"].top == 15
    assert layers["cost"].top == 10
    assert layers["use"].top == 174
    assert layers["use_icon"].top == 172


def test_summary_layers(lord):
    layout = CardLayout(FRAME, lord)
    card = _card(deck="request", flavour_text="Bring me the crown of the drowned king.")
    illustration = Image.new("RGBA", (64, 64), (0, 0, 255, 255))
    layers = layout.summary_layers(card, illustration, render_overlay)
    assert [l.name for l in layers] == ["illustration", "name", "description", "version"]
    description = dict(layout.summary_overlays(card))["description"]
    assert description.anchor == "middle"
    assert description.width == 160
    assert description.text.startswith("Bring me")


def test_overlay_size_must_be_positive():
    with pytest.raises(ValueError):
        OverlaySpec(text="x", color="#000000", width=0, height=10, font_size=8)


def test_body_box_grows_with_line_count(lord, caplog):
    layout = CardLayout(FRAME, lord, scale=150 / 72)
    card = _card(use_text="u" * 100, play_text="short")
    specs = dict(layout.overlays(card))
    line_height = sum(get_font(round(6 * 150 / 72)).getmetrics())

    assert specs["use"].height == max(40, 4 * line_height)
    assert specs["play"].height == 40
    assert (specs["use"].top, specs["use"].left) == (170, 40)
    assert specs["play"].top == 170 + 40 + 100 // 25 * 6

    with caplog.at_level(logging.WARNING, logger="renderer.text"):
        render_overlay(specs["use"], scale=150 / 72)
    assert not caplog.records
