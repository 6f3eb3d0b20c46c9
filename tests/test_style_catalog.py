"""Tests for style observation extraction and the deduplicated style inventory."""

import pytest

from ui_inventory.catalog.styles import (
    DESIGN_SYSTEM_SOURCE,
    derive_style_inventory,
    extract_style_observations,
    extract_token,
    find_style,
    generate_style_id,
    infer_style_kind,
    tokens_in_value,
)
from ui_inventory.identity.signature import derive_component_key
from ui_inventory.models.capture import CaptureRecord
from ui_inventory.models.viewer import NO_TOKEN


PRIMARY = ("--color-primary", "#3366FFFF", "color")


def _styles_by_triple(styles):
    return {(s.token, s.value, s.kind): s for s in styles}


# ============================================================================
# Observations
# ============================================================================


class TestExtractStyleObservations:
    """Tests for extract_style_observations."""

    def test_properties_in_table_order(self, button_capture):
        props = [obs.property_name for obs in extract_style_observations(button_capture)]
        assert props[:2] == ["color", "backgroundColor"]
        assert "fontFamily" in props
        assert props.index("paddingTop") < props.index("radiusTopLeft")

    def test_colors_are_hex_first(self, button_capture):
        obs = {o.property_name: o for o in extract_style_observations(button_capture)}
        assert obs["backgroundColor"].value == "#3366FFFF"
        assert obs["backgroundColor"].kind == "color"

    def test_raw_color_without_hex8(self, make_capture):
        capture = make_capture(styles={"primitives": {"color": {"raw": "red", "hex8": None}}})
        obs = {o.property_name: o for o in extract_style_observations(capture)}
        assert obs["color"].value == "red"

    def test_no_border_properties_without_visible_border(self, make_capture):
        capture = make_capture(
            styles={"primitives": {"borderColor": {"raw": "black", "hex8": "#000000FF"}}}
        )
        props = {o.property_name for o in extract_style_observations(capture)}
        assert not any(p.startswith("border") for p in props)

    def test_border_properties_with_visible_border(self, make_capture):
        capture = make_capture(
            styles={
                "primitives": {
                    "borderWidth": {"top": "1px", "right": "1px", "bottom": "1px", "left": "1px"},
                    "borderColor": {"top": {"raw": "black", "hex8": "#000000FF"}},
                }
            }
        )
        obs = [o for o in extract_style_observations(capture) if o.property_name.startswith("border")]
        colors = [o for o in obs if o.kind == "color"]
        widths = [o for o in obs if o.kind == "border"]
        assert len(colors) == 4
        assert {o.value for o in colors} == {"#000000FF"}
        assert {o.value for o in widths} == {"1px"}

    def test_shadow_none_skipped(self, button_capture):
        props = {o.property_name for o in extract_style_observations(button_capture)}
        assert "boxShadow" not in props

    def test_shadow_kept(self, make_capture):
        capture = make_capture(styles={"primitives": {"shadow": {"boxShadowRaw": "0 1px 2px #0003"}}})
        obs = {o.property_name: o for o in extract_style_observations(capture)}
        assert obs["boxShadow"].kind == "shadow"

    def test_float_font_weight(self, make_capture):
        capture = make_capture(styles={"primitives": {"typography": {"fontWeight": 600.0}}})
        obs = {o.property_name: o for o in extract_style_observations(capture)}
        assert obs["fontWeight"].value == "600"

    def test_empty_capture(self):
        assert extract_style_observations(CaptureRecord(id="cap_empty")) == []


# ============================================================================
# Tokens
# ============================================================================


class TestExtractToken:
    """Tests for token lookup per property."""

    def test_no_evidence(self, button_capture):
        assert extract_token("color", button_capture) == NO_TOKEN

    def test_from_sources(self, make_capture):
        capture = make_capture(styles={"primitives": {"sources": {"color": "var(--text-on-primary)"}}})
        assert extract_token("color", capture) == "--text-on-primary"
        assert extract_token("backgroundColor", capture) == NO_TOKEN

    def test_token_usage_wins(self, make_capture):
        capture = make_capture(
            styles={
                "primitives": {"sources": {"backgroundColor": "var(--from-source)"}},
                "tokens": {"used": [{"property": "backgroundColor", "token": "--from-usage"}]},
            }
        )
        assert extract_token("backgroundColor", capture) == "--from-usage"

    def test_from_author_evidence(self, make_capture):
        capture = make_capture(
            styles={"author": {"properties": {"paddingTop": {"authoredValue": "var(--space-2)"}}}}
        )
        assert extract_token("paddingTop", capture) == "--space-2"

    def test_border_side_uses_border_color_key(self, make_capture):
        capture = make_capture(styles={"primitives": {"sources": {"borderColor": "var(--border)"}}})
        assert extract_token("borderLeftColor", capture) == "--border"

    def test_tokens_in_value(self):
        assert tokens_in_value("var(--a, var(--b, var(--a)))") == ["--a", "--b"]
        assert tokens_in_value(None) == []


# ============================================================================
# Inventory
# ============================================================================


class TestDeriveStyleInventory:
    """Tests for derive_style_inventory."""

    def test_empty(self):
        assert derive_style_inventory([]) == []

    def test_dedup_across_components(self, make_capture):
        """Three uses of one token/value/kind across two components fold into one style."""
        save_1 = make_capture(
            id="cap_1",
            styles={"primitives": {"sources": {"backgroundColor": "var(--color-primary)"}}},
        )
        save_2 = make_capture(
            id="cap_2",
            styles={"primitives": {"sources": {"backgroundColor": "var(--color-primary)"}}},
        )
        link = make_capture(
            id="cap_3",
            element={"tagName": "a", "intent": {"accessibleName": "Docs"}},
            styles={
                "primitives": {"backgroundColor": {"raw": "transparent", "hex8": "#00000000"},
                               "color": {"raw": "rgb(51, 102, 255)", "hex8": "#3366FFFF"}},
                "tokens": {"used": [{"property": "color", "token": "--color-primary"}]},
            },
        )
        assert derive_component_key(save_1) == derive_component_key(save_2)
        assert derive_component_key(save_1) != derive_component_key(link)

        styles = derive_style_inventory([save_1, save_2, link])
        matching = [s for s in styles if (s.token, s.value, s.kind) == PRIMARY]
        assert len(matching) == 1
        assert matching[0].usage_count == 3
        assert matching[0].source == DESIGN_SYSTEM_SOURCE

    def test_same_value_different_token_are_distinct(self, make_capture):
        tokened = make_capture(
            id="cap_1", styles={"primitives": {"sources": {"backgroundColor": "var(--color-primary)"}}}
        )
        plain = make_capture(id="cap_2")
        by_triple = _styles_by_triple(derive_style_inventory([tokened, plain]))
        assert by_triple[PRIMARY].usage_count == 1
        assert by_triple[(NO_TOKEN, "#3366FFFF", "color")].usage_count == 1

    def test_counts_every_property_occurrence(self, button_capture):
        by_triple = _styles_by_triple(derive_style_inventory([button_capture]))
        # paddingTop and paddingBottom
        assert by_triple[(NO_TOKEN, "8px", "spacing")].usage_count == 2
        # four radius corners
        assert by_triple[(NO_TOKEN, "6px", "border")].usage_count == 4

    def test_sorted_by_usage(self, mixed_captures):
        styles = derive_style_inventory(mixed_captures)
        counts = [s.usage_count for s in styles]
        assert counts == sorted(counts, reverse=True)

    def test_idempotent(self, mixed_captures):
        assert derive_style_inventory(mixed_captures) == derive_style_inventory(mixed_captures)

    def test_usage_grows_with_more_captures(self, make_capture):
        one = derive_style_inventory([make_capture(id="a")])
        two = derive_style_inventory([make_capture(id="a"), make_capture(id="b")])
        before = _styles_by_triple(one)
        after = _styles_by_triple(two)
        for triple, style in before.items():
            assert after[triple].usage_count == 2 * style.usage_count

    def test_source_label_from_page(self, button_capture):
        styles = derive_style_inventory([button_capture])
        assert {s.source for s in styles} == {"Dashboard"}

    def test_style_id_stable(self, button_capture):
        style = derive_style_inventory([button_capture])[0]
        assert style.id == generate_style_id(style.token, style.value, style.kind)
        assert style.id.startswith("style_")

    def test_find_style(self, button_capture):
        styles = derive_style_inventory([button_capture])
        assert find_style(styles[0].id, styles) == styles[0]
        assert find_style("style_missing", styles) is None


@pytest.mark.parametrize(
    "prop,kind",
    [
        ("color", "color"),
        ("borderColor", "color"),
        ("fontWeight", "typography"),
        ("marginLeft", "spacing"),
        ("columnGap", "spacing"),
        ("radiusTopLeft", "border"),
        ("boxShadow", "shadow"),
        ("opacity", "unknown"),
    ],
)
def test_infer_style_kind(prop, kind):
    assert infer_style_kind(prop) == kind
