"""
Tests for the orthographic projection adapter and the visibility mask.
"""

import math

import numpy as np
import pytest

from current_trails import OrthographicProjection, VisibilityMask


def test_unrotated_projection():
    """Without rotation (0, 0) maps to the centre and north is up."""
    proj = OrthographicProjection(scale=100, translate=(200, 150))

    assert proj.project(0.0, 0.0) == pytest.approx((200.0, 150.0))
    assert proj.project(90.0, 0.0) == pytest.approx((300.0, 150.0))
    assert proj.project(-90.0, 0.0) == pytest.approx((100.0, 150.0))
    assert proj.project(0.0, 90.0) == pytest.approx((200.0, 50.0))
    assert proj(0.0, -90.0) == pytest.approx((200.0, 250.0))


def test_rotation_centres_the_view():
    """Rotating by (lambda, phi) centres the view on (-lambda, -phi)."""
    proj = OrthographicProjection(scale=500, translate=(480, 480), rotate=(20, -75))

    assert proj.project(-20.0, 75.0) == pytest.approx((480.0, 480.0))
    assert proj.is_front(-20.0, 75.0)
    assert not proj.is_front(160.0, -75.0)


def test_far_side_projects_inside_disk():
    """Back-hemisphere points still project, onto the disk."""
    proj = OrthographicProjection(scale=100, translate=(0, 0))
    x, y = proj.project(180.0, 10.0)

    assert not proj.is_front(180.0, 10.0)
    assert math.hypot(x, y) <= 100.0 + 1e-9


def test_sphere_outline_is_circle():
    """The outline is a closed circle of radius scale."""
    proj = OrthographicProjection(scale=80, translate=(100, 100))
    outline = proj.sphere_outline(90)

    assert outline.shape == (91, 2)
    assert outline[0] == pytest.approx(outline[-1])
    radii = np.hypot(outline[:, 0] - 100, outline[:, 1] - 100)
    assert radii == pytest.approx(np.full(91, 80.0))


def test_visibility_mask_centre_and_corner():
    """The projection centre is visible; a viewport corner off the globe is not."""
    proj = OrthographicProjection(scale=80, translate=(100, 100), rotate=(20, -75))
    mask = VisibilityMask(proj, 200, 200)
    raster = mask.build()

    assert raster.shape == (200, 200)
    assert mask.is_visible(100, 100)
    assert not mask.is_visible(0, 0)
    assert not mask.is_visible(199.5, 199.5)
    assert mask.visible_fraction() == pytest.approx(math.pi * 80 ** 2 / 200 ** 2, abs=0.01)


def test_visibility_mask_invalid_points():
    """Invalid or out-of-raster coordinates are never visible."""
    proj = OrthographicProjection(scale=80, translate=(100, 100))
    mask = VisibilityMask(proj, 200, 200)

    assert not mask.is_visible(None, 100)
    assert not mask.is_visible(100, float("nan"))
    assert not mask.is_visible(float("inf"), 100)
    assert not mask.is_visible(-1, 100)
    assert not mask.is_visible(100, 200)
    # built lazily on first query
    assert mask.mask is not None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
