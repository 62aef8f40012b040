import numpy as np
import pytest

from shah_sfs.errors import InvalidInput
from shah_sfs.illumination import illumination_vector
from shah_sfs.shah import reflectance_map
from shah_sfs.synthetic import gaussian_height, generate_gaussian, generate_sphere, sphere_height


def test_sphere_image_is_square_and_in_range():
    img = generate_sphere()
    assert img.ndim == 2
    assert img.shape[0] == img.shape[1]
    assert img.min() >= 0.0 and img.max() <= 1.0


def test_sphere_background_is_flat_shaded():
    I = np.array([0.2, 0.0, 0.9])
    img = generate_sphere(albedo=0.5, illumination=I)
    assert img[0, 0] == pytest.approx(0.5 * I[2] / np.linalg.norm(I))


def test_head_on_sphere_peaks_at_albedo():
    img = generate_sphere(albedo=0.5, illumination=(0, 0, 1))
    assert img.max() == pytest.approx(0.5, abs=1e-3)


def test_sphere_height_matches_radius():
    z, p, q = sphere_height(radius=3.0)
    assert z.max() == pytest.approx(3.0, abs=0.01)
    assert np.all(p[z == 0] == 0) and np.all(q[z == 0] == 0)


def test_gaussian_gradients_are_antisymmetric():
    z, p, q = gaussian_height(sigma=1.0, amplitude=2.0, half_extent=2.0, resolution=0.5)
    assert z.max() == pytest.approx(2.0)
    # grid is symmetric about zero apart from the excluded upper end
    assert np.allclose(p[1:, :], -p[1:, :][::-1, :])
    assert np.allclose(q[:, 1:], -q[:, 1:][:, ::-1])


@pytest.mark.parametrize("slant, tilt", [(0.6, 0.0), (0.4, 1.0), (1.1, 4.0)])
def test_rendering_agrees_with_solver_reflectance(slant, tilt):
    _, p, q = sphere_height(radius=2.0, resolution=0.2)
    img = generate_sphere(albedo=1.0, illumination=illumination_vector(slant, tilt),
                          radius=2.0, resolution=0.2)
    assert np.allclose(img, np.clip(reflectance_map(p, q, slant, tilt), 0.0, 1.0))


def test_sphere_gradient_runs_down_the_rows():
    z, p, q = sphere_height(radius=2.0, resolution=0.2)
    i, j = np.unravel_index(np.argmax(z), z.shape)
    # p is dz along axis 0: positive above the peak, negative below
    assert p[i - 3, j] > 0 > p[i + 3, j]
    assert abs(q[i - 3, j]) < 1e-9


def test_gaussian_image_in_range():
    img = generate_gaussian()
    assert img.min() >= 0.0 and img.max() <= 1.0


@pytest.mark.parametrize("kwargs", [
    {"radius": 0.0},
    {"resolution": 0.0},
    {"illumination": (0, 0, 0)},
    {"illumination": (1, 0)},
])
def test_sphere_rejects_bad_arguments(kwargs):
    with pytest.raises(InvalidInput):
        generate_sphere(**kwargs)
