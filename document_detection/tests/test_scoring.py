import numpy as np
import pytest

from common.bounds import Bounds
from document_detection.candidates import Candidate
from document_detection.geometry import bounding_box_iou
from document_detection.scoring import is_confident, score_candidate, solidity
from document_detection.suppression import non_max_suppression


def box_with_solidity(width, height, value):
    bounds = Bounds(0, 0, width, height)
    return value * bounds.area(), bounds


def candidate(quad, confidence):
    quad = np.asarray(quad, dtype=np.float32)
    return Candidate(
        raw_polygon=quad,
        contour_area=0.0,
        bounds=Bounds.from_points(quad),
        quad=quad,
        confidence=confidence
    )


def square(left, top, size):
    return [[left, top], [left + size, top], [left + size, top + size], [left, top + size]]


class TestScoring:
    def test_clean_rectangle(self):
        area, bounds = box_with_solidity(150, 100, 0.95)
        assert score_candidate(4, area, bounds) > 90

    def test_perfect_rectangle_scores_100(self):
        area, bounds = box_with_solidity(300, 400, 1.0)
        assert score_candidate(4, area, bounds) == 100

    def test_low_solidity(self):
        area, bounds = box_with_solidity(150, 100, 0.7)
        assert score_candidate(4, area, bounds) <= 80

    def test_very_low_solidity(self):
        area, bounds = box_with_solidity(150, 100, 0.6)
        assert score_candidate(4, area, bounds) < 80

    def test_extra_vertices(self):
        area, bounds = box_with_solidity(150, 100, 0.95)
        assert score_candidate(6, area, bounds) < 95
        assert score_candidate(6, area, bounds) == 90

    def test_extreme_aspect_ratio(self):
        area, bounds = box_with_solidity(10, 100, 0.95)
        assert score_candidate(4, area, bounds) < 80

    def test_wide_aspect_ratio(self):
        area, bounds = box_with_solidity(600, 100, 0.95)
        assert score_candidate(4, area, bounds) == 75

    def test_clamped_at_zero(self):
        area, bounds = box_with_solidity(1000, 10, 0.0)
        assert score_candidate(8, area, bounds) == 0

    def test_zero_area_box(self):
        assert solidity(100.0, Bounds(0, 0, 0, 10)) == 0.0

    def test_threshold_is_strict(self):
        assert not is_confident(40, 40)
        assert is_confident(41, 40)


class TestNonMaxSuppression:
    def test_keeps_most_confident_of_overlapping(self):
        weak = candidate(square(5, 5, 100), 70)
        strong = candidate(square(0, 0, 100), 95)

        keep = non_max_suppression([weak, strong], 0.5)
        assert len(keep) == 1
        assert keep[0] is strong

    def test_disjoint_candidates_survive(self):
        a = candidate(square(0, 0, 100), 80)
        b = candidate(square(500, 500, 100), 90)

        keep = non_max_suppression([a, b], 0.5)
        assert [c.confidence for c in keep] == [90, 80]

    def test_threshold_is_inclusive(self):
        a = candidate(square(0, 0, 100), 90)
        # overlaps a with IOU exactly 1/3
        b = candidate([[50, 0], [150, 0], [150, 100], [50, 100]], 80)

        assert len(non_max_suppression([a, b], 1 / 3)) == 1
        assert len(non_max_suppression([a, b], 0.34)) == 2

    def test_no_two_kept_overlap(self):
        rng = np.random.default_rng(1)
        candidates = [
            candidate(square(int(x), int(y), 100), int(c))
            for x, y, c in zip(rng.integers(0, 300, 20), rng.integers(0, 300, 20), rng.integers(41, 100, 20))
        ]

        keep = non_max_suppression(candidates, 0.5)
        for i, a in enumerate(keep):
            for b in keep[i + 1:]:
                assert bounding_box_iou(a.quad, b.quad) < 0.5

    def test_empty(self):
        assert non_max_suppression([], 0.5) == []
