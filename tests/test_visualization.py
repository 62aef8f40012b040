import numpy as np

from shah_sfs.visualization import save_gradient_maps, save_height_plot


def test_save_height_plot_writes_file(tmp_path):
    i, j = np.mgrid[0:20, 0:30]
    out = tmp_path / "plots" / "height.png"
    save_height_plot(np.sin(i / 5.0) + j / 30.0, str(out))
    assert out.is_file() and out.stat().st_size > 0


def test_save_height_plot_with_mask(tmp_path):
    z = np.ones((10, 10))
    mask = np.zeros((10, 10), dtype=bool)
    mask[2:8, 2:8] = True
    out = tmp_path / "masked.png"
    save_height_plot(z, str(out), mask=mask, stride=2)
    assert out.is_file()


def test_save_gradient_maps(tmp_path):
    p = np.random.default_rng(1).normal(size=(8, 8))
    save_gradient_maps(p, -p, str(tmp_path / "grad"))
    assert (tmp_path / "grad" / "p.png").is_file()
    assert (tmp_path / "grad" / "q.png").is_file()
