"""Tests for the spiral geometry: layers, dots, fill and zoom."""

from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from stepstracker.config import SpiralConfig
from stepstracker.model.colors import PALETTE
from stepstracker.model.spiral import SpiralProgressModel, ripple_scale

# module-level model: hypothesis does not mix with function-scoped fixtures
MODEL = SpiralProgressModel()
goals = st.floats(min_value=200.0, max_value=40000.0, allow_nan=False)


# ---------------------------------------------------------------------------
# Layer decomposition
# ---------------------------------------------------------------------------

class TestLayerDecomposition:
    def test_example_goal_in_second_layer(self, model: SpiralProgressModel):
        state = model.derive_state(12000)
        assert state.current_layer == 1
        assert state.layer_progress == pytest.approx(0.2)
        assert state.visible_layers == 2

    def test_min_goal(self, model: SpiralProgressModel):
        state = model.derive_state(200)
        assert state.current_layer == 0
        assert state.layer_progress == pytest.approx(0.02)
        assert state.visible_layers == 1

    def test_max_goal_saturates_last_layer(self, model: SpiralProgressModel):
        state = model.derive_state(40000)
        assert state.current_layer == 3
        assert state.layer_progress == pytest.approx(1.0)
        assert state.visible_layers == 4
        assert state.fill_fraction == pytest.approx(1.0)
        assert state.filled_dot_count == state.total_dot_count

    def test_goal_on_layer_boundary_starts_new_layer(self, model: SpiralProgressModel):
        state = model.derive_state(10000)
        assert state.current_layer == 1
        assert state.layer_progress == 0.0
        assert state.visible_layers == 2
        assert state.fill_fraction == pytest.approx(0.5)

    def test_goal_is_clamped(self, model: SpiralProgressModel):
        assert model.derive_state(-500).goal == 200
        assert model.derive_state(1_000_000).goal == 40000

    def test_goals_beyond_last_layer_look_the_same(self):
        model = SpiralProgressModel(SpiralConfig(max_goal=60000))
        a = model.derive_state(50000)
        b = model.derive_state(60000)
        assert a.current_layer == b.current_layer == 3
        assert a.layer_progress == b.layer_progress == 1.0
        assert a.dots == b.dots

    @given(goal=goals)
    def test_ranges_hold_for_any_goal(self, goal: float):
        state = MODEL.derive_state(goal)
        assert 0 <= state.current_layer <= MODEL.config.max_layers - 1
        assert 0.0 <= state.layer_progress <= 1.0
        assert 0.0 <= state.fill_fraction <= 1.0
        assert state.visible_layers == min(state.current_layer + 1, MODEL.config.max_layers)
        assert 0 <= state.filled_dot_count <= state.total_dot_count
        assert 0.0 < state.zoom_scale <= 1.0


# ---------------------------------------------------------------------------
# Dots
# ---------------------------------------------------------------------------

class TestDots:
    @pytest.mark.parametrize(
        "visible_layers, expected",
        [(1, 113), (2, 248), (3, 405), (4, 584)],
    )
    def test_total_dot_count(self, model: SpiralProgressModel, visible_layers: int, expected: int):
        assert model.total_dot_count(visible_layers) == expected

    def test_total_dot_count_never_zero(self):
        tiny = SpiralProgressModel(SpiralConfig(base_radius=0.0, layer_spacing=0.01, dot_spacing=1000.0))
        assert tiny.total_dot_count(1) == 1
        state = tiny.derive_state(200)
        assert state.total_dot_count == 1
        assert len(state.dots) == 1

    def test_filled_dot_count_is_rounded(self, model: SpiralProgressModel):
        # 248 dots * 0.6 = 148.8
        assert model.derive_state(12000).filled_dot_count == 149
        # 113 dots * 0.02 = 2.26
        assert model.derive_state(200).filled_dot_count == 2

    def test_dot_sequence_length_follows_visible_layers(self, model: SpiralProgressModel):
        assert len(model.derive_state(5000).dots) == 113
        assert len(model.derive_state(15000).dots) == 248

    def test_first_dot_sits_on_base_radius(self, model: SpiralProgressModel, config: SpiralConfig):
        first = model.derive_state(5000).dots[0]
        assert first.position.x == pytest.approx(config.base_radius)
        assert first.position.y == pytest.approx(0.0)
        assert first.layer == 0
        assert first.is_filled

    def test_dots_follow_the_spiral(self, model: SpiralProgressModel, config: SpiralConfig):
        state = model.derive_state(25000)
        n = state.total_dot_count
        for i, dot in enumerate(state.dots):
            turns = i / n * state.visible_layers * config.spiral_turns
            layer = math.floor(turns / config.spiral_turns)
            within = turns / config.spiral_turns - layer
            radius = config.base_radius + (layer + within) * config.layer_spacing
            angle = turns * 2 * math.pi

            assert dot.layer == layer
            assert dot.position.x == pytest.approx(radius * math.cos(angle))
            assert dot.position.y == pytest.approx(radius * math.sin(angle))

    def test_radius_grows_along_the_spiral(self, model: SpiralProgressModel):
        dots = model.derive_state(40000).dots
        radii = [math.hypot(d.position.x, d.position.y) for d in dots]
        assert all(a < b for a, b in zip(radii, radii[1:]))
        layers = [d.layer for d in dots]
        assert layers == sorted(layers)
        assert layers[-1] == 3

    def test_filled_dots_come_first(self, model: SpiralProgressModel):
        state = model.derive_state(18000)
        flags = [d.is_filled for d in state.dots]
        assert flags == [True] * state.filled_dot_count + [False] * (state.total_dot_count - state.filled_dot_count)
        assert len(state.filled_dots) + len(state.unfilled_dots) == len(state.dots)

    def test_dot_colours_start_red(self, model: SpiralProgressModel):
        assert model.derive_state(5000).dots[0].color == PALETTE[0]


# ---------------------------------------------------------------------------
# Zoom
# ---------------------------------------------------------------------------

class TestZoom:
    def test_four_layers_are_zoomed_out(self, model: SpiralProgressModel):
        assert model.outer_radius(4) == pytest.approx(135.0)
        assert model.zoom_scale(4) == pytest.approx(120.0 / 135.0)
        assert model.derive_state(35000).zoom_scale == pytest.approx(0.889, abs=1e-3)

    @pytest.mark.parametrize("visible_layers", [1, 2])
    def test_small_spirals_are_not_zoomed(self, model: SpiralProgressModel, visible_layers: int):
        assert model.zoom_scale(visible_layers) == 1.0

    def test_zoom_never_grows_with_more_layers(self, model: SpiralProgressModel):
        scales = [model.zoom_scale(v) for v in range(1, 5)]
        assert scales == sorted(scales, reverse=True)


# ---------------------------------------------------------------------------
# Guarantees
# ---------------------------------------------------------------------------

class TestGuarantees:
    @given(a=goals, b=goals)
    def test_monotonic_in_goal(self, a: float, b: float):
        low, high = sorted((a, b))
        s_low, s_high = MODEL.derive_state(low), MODEL.derive_state(high)
        assert s_low.filled_dot_count <= s_high.filled_dot_count
        assert s_low.current_layer <= s_high.current_layer

    def test_monotonic_across_every_step(self, model: SpiralProgressModel):
        previous = -1
        for goal in range(200, 40001, 200):
            filled = model.derive_state(goal).filled_dot_count
            assert filled >= previous
            previous = filled

    @given(goal=goals)
    def test_idempotent(self, goal: float):
        first = MODEL.derive_state(goal)
        second = MODEL.derive_state(goal)
        assert first == second
        assert first.dots == second.dots
        assert first.zoom_scale == second.zoom_scale

    def test_label_is_rounded_goal(self, model: SpiralProgressModel):
        assert model.derive_state(12345.6).display_goal == 12346

    def test_label_emphasis_from_second_layer(self, model: SpiralProgressModel):
        assert not model.derive_state(9800).is_beyond_first_layer
        assert model.derive_state(10000).is_beyond_first_layer

    def test_current_colour_matches_layer_progress(self, model: SpiralProgressModel):
        state = model.derive_state(12000)
        assert state.current_color == model.color_at(1, 0.2)


# ---------------------------------------------------------------------------
# Ripple
# ---------------------------------------------------------------------------

class TestRipple:
    def test_newest_dot_doubles(self):
        assert ripple_scale(19, 20, active=True) == pytest.approx(2.0)

    def test_ripple_fades_towards_older_dots(self):
        assert ripple_scale(18, 20, active=True) == pytest.approx(1.9)
        assert ripple_scale(10, 20, active=True) == pytest.approx(1.1)
        assert ripple_scale(9, 20, active=True) == 1.0

    def test_no_ripple_when_idle(self):
        assert ripple_scale(19, 20, active=False) == 1.0

    def test_unfilled_dots_never_ripple(self):
        assert ripple_scale(20, 20, active=True) == 1.0
        assert ripple_scale(-1, 20, active=True) == 1.0
