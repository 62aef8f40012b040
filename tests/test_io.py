import numpy as np
import pytest

from shah_sfs.image_io import load_grayscale, save_float_array, save_image
from shah_sfs.preprocessing import as_intensity_image, normalize_uint8


def test_normalize_uint8_spans_full_range():
    out = normalize_uint8(np.array([[0.0, 0.5], [1.0, np.nan]]))
    assert out.dtype == np.uint8
    assert out[0, 0] == 0 and out[1, 0] == 255
    assert out[1, 1] == 0


def test_normalize_uint8_constant_is_zero():
    assert not normalize_uint8(np.full((3, 3), 7.0)).any()


def test_as_intensity_image_converts_lists():
    E = as_intensity_image([[0, 1], [1, 0]])
    assert E.dtype == np.float64
    assert E.shape == (2, 2)


def test_png_round_trip(tmp_path):
    img = np.array([[0, 51], [102, 255]], dtype=np.uint8)
    path = tmp_path / "img.png"
    save_image(img, str(path))
    loaded = load_grayscale(str(path))
    assert loaded.dtype == np.float64
    assert np.allclose(loaded, img / 255.0)


def test_16bit_png_is_scaled(tmp_path):
    img = np.array([[0, 65535]], dtype=np.uint16)
    path = tmp_path / "img16.png"
    save_image(img, str(path))
    assert np.allclose(load_grayscale(str(path)), [[0.0, 1.0]])


def test_missing_file_raises(tmp_path):
    with pytest.raises(ValueError):
        load_grayscale(str(tmp_path / "missing.png"))


def test_save_float_array_npy(tmp_path):
    arr = np.array([[1.5, np.nan]])
    path = tmp_path / "a.npy"
    save_float_array(arr, str(path), format="npy")
    assert np.array_equal(np.load(path), np.array([[1.5, 0.0]], dtype=np.float32))


def test_save_float_array_rejects_unknown_format(tmp_path):
    with pytest.raises(ValueError):
        save_float_array(np.zeros((2, 2)), str(tmp_path / "a.bin"), format="bin")
