import math

import pytest

from stroke_recognizer.gestures.distance import DistanceEngine, GoldenSectionState
from stroke_recognizer.gestures.gesture import Gesture
from stroke_recognizer.utils.exceptions import EmptyPathError, LengthMismatchError
from stroke_recognizer.utils.gesture_utils import GeometryUtils, Point


def normalised(name, stroke, n=64, size=250):
    gesture = Gesture(name, stroke)
    gesture.normalise_gesture(n, size)
    return gesture


def max_radius(gesture):
    return max(math.hypot(p.x, p.y) for p in gesture.points)


class TestPathDistance:

    def test_mean_of_pointwise_distances(self):
        engine = DistanceEngine()
        other = Gesture("g", [(3, 4), (0, 0)])
        assert engine.path_distance([Point(0, 0), Point(0, 0)], other) == pytest.approx(2.5)

    def test_length_mismatch(self):
        engine = DistanceEngine()
        with pytest.raises(LengthMismatchError):
            engine.path_distance([Point(0, 0)], Gesture("g", [(0, 0), (1, 1)]))

    def test_empty(self):
        with pytest.raises(EmptyPathError):
            DistanceEngine().path_distance([], Gesture("g"))

    def test_distance_at_angle_leaves_query_alone(self, shapes):
        query = normalised("q", shapes.check())
        before = query.points
        engine = DistanceEngine()
        assert engine.distance_at_angle(0.0, query, query) == pytest.approx(0.0, abs=1e-9)
        assert engine.distance_at_angle(30.0, query, query) > 0
        assert query.points == before


class TestGoldenSectionSearch:

    def test_converges_on_parabola(self):
        engine = DistanceEngine()
        calls = []

        def objective(x):
            calls.append(x)
            return (x - 10.0) ** 2

        state = engine.golden_section_search(objective, -45.0, 45.0)

        assert isinstance(state, GoldenSectionState)
        assert state.width < 1.0
        assert state.a <= 10.0 <= state.b
        assert state.midpoint == pytest.approx(10.0, abs=0.5)
        # 90 * phi**10 < 1 <= 90 * phi**9, and each step reuses one probe
        assert state.evaluations == 12
        assert len(calls) == state.evaluations

    def test_bracket_shrinks_by_golden_ratio(self):
        engine = DistanceEngine(angle_precision=60.0)
        state = engine.golden_section_search(lambda x: abs(x), -45.0, 45.0)
        assert state.width == pytest.approx(90.0 * engine.golden_ratio)

    def test_finer_precision_needs_more_evaluations(self):
        coarse = DistanceEngine().golden_section_search(lambda x: x * x, -45, 45)
        fine = DistanceEngine(angle_precision=0.01).golden_section_search(lambda x: x * x, -45, 45)
        assert fine.evaluations > coarse.evaluations
        assert fine.width < 0.01

    def test_precision_must_be_positive(self):
        with pytest.raises(ValueError):
            DistanceEngine(angle_precision=0)

    def test_deterministic(self, shapes):
        engine = DistanceEngine()
        a = normalised("a", shapes.circle(wobble=4.0))
        b = normalised("b", shapes.triangle())
        assert engine.distance_at_best_angle(a, b) == engine.distance_at_best_angle(a, b)


class TestDistanceAtBestAngle:

    def test_self_distance_is_near_zero(self, shapes):
        for stroke in (shapes.circle(wobble=5.0), shapes.check(), shapes.triangle()):
            gesture = normalised("g", stroke)
            distance = DistanceEngine().distance_at_best_angle(gesture, gesture)
            assert distance <= 2 * max_radius(gesture) * math.sin(math.radians(0.25))

    def test_self_distance_with_fine_precision(self, shapes):
        gesture = normalised("g", shapes.check())
        engine = DistanceEngine(angle_precision=1e-3)
        assert engine.distance_at_best_angle(gesture, gesture) < 0.01

    def test_recovers_rotation(self, shapes):
        template = normalised("t", shapes.check())
        query = Gesture("q", GeometryUtils.rotate_points(template.points, 20.0))
        engine = DistanceEngine()

        assert engine.best_angle(query, template) == pytest.approx(-20.0, abs=0.5)
        bound = 2 * max_radius(template) * math.sin(math.radians(0.25))
        assert engine.distance_at_best_angle(query, template) <= bound + 1e-9

    def test_rotation_outside_range_is_not_recovered(self, shapes):
        template = normalised("t", shapes.check())
        query = Gesture("q", GeometryUtils.rotate_points(template.points, 90.0))
        engine = DistanceEngine()
        assert engine.distance_at_best_angle(query, template) > 10.0

    def test_normalised_pair_mirrors(self, shapes):
        engine = DistanceEngine()
        a = normalised("a", shapes.circle(wobble=6.0))
        b = normalised("b", shapes.check())

        # rotating a by theta against b is rotating b by -theta against a
        assert engine.best_angle(a, b) == pytest.approx(-engine.best_angle(b, a), abs=1e-6)
        assert engine.distance_at_best_angle(a, b) == pytest.approx(
            engine.distance_at_best_angle(b, a), rel=1e-6)

    def test_not_symmetric_in_general(self):
        # rotation happens about each query's own centroid, so order matters
        engine = DistanceEngine()
        a = Gesture("a", [(0, 0), (2, 0)])
        b = Gesture("b", [(10, 0), (10, 2)])

        ab = engine.distance_at_best_angle(a, b)
        ba = engine.distance_at_best_angle(b, a)
        assert ab == pytest.approx(9.063, abs=0.01)
        assert ba == pytest.approx(9.086, abs=0.01)
        assert ab != pytest.approx(ba, abs=1e-3)
