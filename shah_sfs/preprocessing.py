import numpy as np
from .errors import InvalidInput

### The purpose of this script is to handle input validation and output normalization.
###
def as_intensity_image(image) -> np.ndarray:
    """Validate a grayscale image in [0,1] and return it as a float64 HxW array."""
    try:
        E = np.asarray(image, dtype=np.float64)
    except (TypeError, ValueError) as e:
        # numpy refuses ragged nested sequences and non-numeric entries
        raise InvalidInput(f"Image must be a rectangular numeric array: {e}") from e
    if E.ndim != 2:
        raise InvalidInput(f"Expected a 2-D grayscale image, got shape {E.shape}")
    if E.size == 0:
        raise InvalidInput(f"Image is empty (shape {E.shape})")
    return E

def normalize_uint8(img: np.ndarray) -> np.ndarray:
    """Normalize an image to [0,255] uint8 for visualization (ignores NaNs and infs)."""
    m = np.isfinite(img)
    if not np.any(m):
        return np.zeros_like(img, dtype=np.uint8)
    a, b = img[m].min(), img[m].max()
    if b <= a + 1e-12:
        return np.zeros_like(img, dtype=np.uint8)
    out = np.zeros_like(img, dtype=np.float32)
    out[m] = (img[m] - a) / (b - a)
    return np.clip(out * 255.0, 0, 255).astype(np.uint8)
