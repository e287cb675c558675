"""
Tests for extrinsic and intrinsic location estimators and medoid selection.
"""

import logging
import math
import tracemalloc

import pytest

from spherestat.models import SpherePoint, NORTH_POLE
from spherestat.utils.numerics import accu_sum, make_generator
from spherestat.core import (
    extrinsic_mean,
    extrinsic_median,
    intrinsic_mean,
    intrinsic_median,
    medoids,
    IntrinsicEstimator,
    PairwiseDistanceMatrix,
    NO_MEDOID,
    random_points,
)


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def cardinal_points():
    """Four points at the cardinal directions on the equator."""
    return [SpherePoint.from_geographic(0, lon) for lon in (0, 90, 180, -90)]


@pytest.fixture
def cluster():
    """Irregular cluster of points around (30N, 40E)."""
    offsets = [
        (0.0, 0.0), (1.2, -0.4), (-0.7, 2.1), (2.5, 1.0), (-1.9, -1.3),
        (0.4, 3.2), (-2.2, 0.8), (3.1, -2.0), (0.9, 0.3), (-0.5, -2.7),
        (1.7, 2.4), (-3.0, -0.2),
    ]
    return [SpherePoint.from_geographic(30 + dlat, 40 + dlon) for dlat, dlon in offsets]


@pytest.fixture
def symmetric_cross():
    """Four points symmetric about (0, 0)."""
    return [SpherePoint.from_geographic(lat, lon) for lat, lon in [(5, 0), (-5, 0), (0, 5), (0, -5)]]


def total_distance(center, points, power=1):
    return accu_sum(center.separation(p) ** power for p in points)


# =============================================================================
# Extrinsic estimators
# =============================================================================

class TestExtrinsic:
    """Test extrinsic mean and median."""

    def test_cardinal_mean_is_degenerate(self, cardinal_points, caplog):
        """Vector sum of the four cardinal points is zero."""
        with caplog.at_level(logging.WARNING):
            estimate = extrinsic_mean(cardinal_points)
        assert estimate.degenerate
        assert estimate.point == NORTH_POLE
        assert "undefined" in caplog.text

    def test_antipodal_pairs_are_degenerate(self):
        p = SpherePoint.from_geographic(12.0, 34.0)
        q = SpherePoint.from_geographic(-50.0, -100.0)
        assert extrinsic_mean([p, p.antipode(), q, q.antipode()]).degenerate

    def test_three_cardinal_points(self, cardinal_points):
        points = cardinal_points[:3]
        estimate = extrinsic_mean(points)
        assert not estimate.degenerate
        max_pairwise = max(a.separation(b) for a in points for b in points)
        for p in points:
            assert estimate.point.separation(p) <= max_pairwise
        lat, lon = estimate.to_geographic()
        assert lat == pytest.approx(0.0)
        assert lon == pytest.approx(90.0)

    def test_mean_of_cluster(self, cluster):
        estimate = extrinsic_mean(cluster)
        assert estimate.estimator == 'extrinsic_mean'
        assert estimate.point.separation(SpherePoint.from_geographic(30, 40)) < math.radians(1.5)

    def test_median_of_symmetric_cross(self, symmetric_cross):
        estimate = extrinsic_median(symmetric_cross)
        assert estimate.point.separation(SpherePoint.from_geographic(0, 0)) < 1e-9

    def test_median_resists_outlier(self, cluster):
        outlier = SpherePoint.from_geographic(-60, -120)
        mean_shift = extrinsic_mean(cluster + [outlier]).point.separation(extrinsic_mean(cluster).point)
        median_shift = extrinsic_median(cluster + [outlier]).point.separation(extrinsic_median(cluster).point)
        assert median_shift < mean_shift

    def test_empty_sample(self):
        with pytest.raises(ValueError):
            extrinsic_mean([])
        with pytest.raises(ValueError):
            extrinsic_median([])


# =============================================================================
# Medoids
# =============================================================================

class TestMedoids:
    """Test pairwise distances and medoid selection."""

    def test_matrix_is_symmetric(self, cluster):
        matrix = PairwiseDistanceMatrix(cluster)
        n = len(cluster)
        assert len(matrix) == n
        assert len(matrix.upper_triangle) == n * (n - 1) // 2
        for i in range(n):
            assert matrix.get(i, i) == 0.0
            for j in range(n):
                assert matrix.get(i, j) == matrix.get(j, i)
                assert matrix.get(i, j) == pytest.approx(cluster[i].separation(cluster[j]), abs=2e-15)

    def test_row_matches_get(self, cluster):
        matrix = PairwiseDistanceMatrix(cluster)
        row = matrix.row(4)
        assert row[4] == 0.0
        for j in range(len(cluster)):
            assert row[j] == matrix.get(4, j)

    def test_upper_triangle_is_read_only(self, cluster):
        with pytest.raises(ValueError):
            PairwiseDistanceMatrix(cluster).upper_triangle[0] = 1.0

    def test_build_memory_stays_near_packed_size(self):
        points = random_points(1000, make_generator(41))
        tracemalloc.start()
        try:
            matrix = PairwiseDistanceMatrix(points)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        assert peak < 2 * matrix.upper_triangle.nbytes

    def test_empty_sample(self):
        assert medoids([]) == (NO_MEDOID, NO_MEDOID)
        assert NO_MEDOID == -1

    def test_repeated_point(self):
        p = SpherePoint.from_geographic(-12.0, 77.0)
        assert medoids([p] * 6) == (0, 0)

    def test_single_point(self):
        assert medoids([SpherePoint.from_geographic(1, 1)]) == (0, 0)

    def test_middle_point_of_arc(self):
        points = [SpherePoint.from_geographic(0, lon) for lon in (-10, 0, 10)]
        assert medoids(points) == (1, 1)

    def test_median_and_mean_medoids_differ(self):
        """Squared distances weigh the far point more heavily."""
        points = [SpherePoint.from_geographic(0, lon) for lon in (0, 1, 2, 3, 60)]
        i1, i2 = medoids(points)
        assert i1 == 2
        assert i2 == 3


# =============================================================================
# Intrinsic estimators
# =============================================================================

class TestIntrinsic:
    """Test intrinsic (Frechet) mean and median."""

    def test_single_point(self):
        p = SpherePoint.from_geographic(10, 20)
        for estimate in (intrinsic_mean([p]), intrinsic_median([p])):
            assert estimate.point == p
            assert estimate.iterations == 1
            assert estimate.converged

    def test_repeated_point(self):
        p = SpherePoint.from_geographic(-33.0, 151.0)
        for estimate in (intrinsic_mean([p] * 7), intrinsic_median([p] * 7)):
            assert estimate.point == p
            assert estimate.iterations == 1
            assert estimate.converged

    def test_symmetric_cross(self, symmetric_cross):
        origin = SpherePoint.from_geographic(0, 0)
        assert intrinsic_mean(symmetric_cross).point.separation(origin) < 1e-9
        assert intrinsic_median(symmetric_cross, max_iterations=50).point.separation(origin) < 1e-9

    def test_mean_converges(self, cluster):
        estimate = intrinsic_mean(cluster)
        assert estimate.converged
        assert 1 <= estimate.iterations < 1000
        assert estimate.seed_index is not None

    def test_mean_improves_on_seed(self, cluster):
        """Sum of squared distances never exceeds that of the medoid seed."""
        estimate = intrinsic_mean(cluster)
        seed = cluster[medoids(cluster)[1]]
        assert total_distance(estimate.point, cluster, 2) <= total_distance(seed, cluster, 2)

    def test_mean_beats_extrinsic_mean(self, cluster):
        intrinsic = intrinsic_mean(cluster).point
        extrinsic = extrinsic_mean(cluster).point
        assert total_distance(intrinsic, cluster, 2) <= total_distance(extrinsic, cluster, 2) + 1e-12

    def test_mean_objective_non_increasing(self, cluster):
        """Each additional iteration does not increase the sum of squared distances."""
        previous = math.inf
        for cap in range(1, 6):
            point = intrinsic_mean(cluster, max_iterations=cap).point
            value = total_distance(point, cluster, 2)
            assert value <= previous + 1e-12
            previous = value

    def test_median_improves_on_seed(self, cluster):
        estimate = intrinsic_median(cluster, max_iterations=100)
        seed = cluster[medoids(cluster)[0]]
        assert total_distance(estimate.point, cluster) <= total_distance(seed, cluster)

    def test_median_beats_extrinsic_median(self, cluster):
        intrinsic = intrinsic_median(cluster, max_iterations=100).point
        extrinsic = extrinsic_median(cluster).point
        assert total_distance(intrinsic, cluster) <= total_distance(extrinsic, cluster) + 1e-9

    def test_iteration_cap_reports_non_convergence(self, cluster, caplog):
        with caplog.at_level(logging.WARNING):
            estimate = intrinsic_mean(cluster, max_iterations=1)
        assert not estimate.converged
        assert estimate.iterations == 1
        assert "did not converge" in caplog.text

    def test_extrinsic_seed_above_threshold(self, cluster):
        """Samples above the medoid threshold start from the extrinsic estimate."""
        by_medoid = intrinsic_mean(cluster)
        by_extrinsic = intrinsic_mean(cluster, medoid_threshold=0)
        assert by_extrinsic.seed_index is None
        assert by_extrinsic.point.separation(by_medoid.point) < 1e-10

    def test_medoid_threshold_is_inclusive(self, cluster):
        n = len(cluster)
        assert intrinsic_mean(cluster, medoid_threshold=n).seed_index is not None
        assert intrinsic_median(cluster, medoid_threshold=n, max_iterations=30).seed_index is not None
        assert intrinsic_mean(cluster, medoid_threshold=n - 1).seed_index is None
        assert intrinsic_median(cluster, medoid_threshold=n - 1, max_iterations=30).seed_index is None

    def test_random_sample_across_antimeridian(self):
        rng = make_generator(2024)
        center = SpherePoint.from_geographic(-5.0, 179.5)
        points = [p for p in random_points(3000, rng) if p.separation(center) < math.radians(8)]
        assert len(points) > 5
        estimate = intrinsic_mean(points)
        assert estimate.converged
        assert estimate.point.separation(center) < math.radians(8)

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            intrinsic_mean([])
        with pytest.raises(ValueError):
            intrinsic_median([])
        with pytest.raises(ValueError):
            IntrinsicEstimator(max_iterations=0)
