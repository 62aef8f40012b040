import numpy as np

from shah_sfs.height_to_mesh import height_to_pointcloud


def test_pointcloud_skips_non_finite_pixels():
    z = np.arange(12, dtype=float).reshape(3, 4)
    z[1, 2] = np.nan
    pcd = height_to_pointcloud(z, scale=2.0)
    pts = np.asarray(pcd.points)
    assert pts.shape == (11, 3)
    assert np.isclose(pts[:, 2].max(), 22.0)


def test_pointcloud_is_centred_on_image():
    pcd = height_to_pointcloud(np.zeros((4, 4)))
    pts = np.asarray(pcd.points)
    assert pts[:, 0].min() == -2.0 and pts[:, 0].max() == 1.0
    assert pts[:, 1].max() == 2.0
