from enum import Enum
import numpy as np
from scipy.ndimage import median_filter

from .config import Config
from .errors import InvalidInput, OutOfRangeParameters
from .illumination import estimate_img_properties
from .preprocessing import as_intensity_image

### Core logic for Shah's linear-approximation shape from shading.
###
### Reference: T. Ping-Sing and M. Shah, "Shape from shading using linear approximation",
### Image and Vision Computing, vol. 12, no. 8, pp. 487-498, 1994.
### Every pass below is a whole-array numpy expression, so each one only reads the
### state left by the previous pass (Jacobi sweep, never Gauss-Seidel).


class BoundaryMode(Enum):
    """How the first row/column of the backward-shift buffers is filled."""
    STALE_CARRY = "stale_carry"  # never written, keeps the previous value (zero from init)
    REPLICATE = "replicate"      # copies Z itself, i.e. zero gradient on the boundary


def clamp_reflectance(R: np.ndarray) -> np.ndarray:
    """Reflected radiance cannot be negative."""
    return np.maximum(R, 0.0)


def reflectance_map(p: np.ndarray, q: np.ndarray, slant: float, tilt: float) -> np.ndarray:
    """Lambertian reflectance R(p, q) for a distant light at (slant, tilt), clamped at zero."""
    R = (np.cos(slant) + p * np.cos(tilt) * np.sin(slant) + q * np.sin(tilt) * np.sin(slant)) / \
        np.sqrt(1.0 + p**2 + q**2)
    return clamp_reflectance(R)


def residual(E: np.ndarray, p: np.ndarray, q: np.ndarray, slant: float, tilt: float) -> np.ndarray:
    """f = E - R, the brightness error the iteration drives toward zero."""
    return E - reflectance_map(p, q, slant, tilt)


def residual_derivative(p: np.ndarray, q: np.ndarray, ix: float, iy: float) -> np.ndarray:
    """df/dZ of the linearized reflectance map with respect to the height at each pixel."""
    pq = 1.0 + p**2 + q**2
    il = np.sqrt(1.0 + ix**2 + iy**2)
    return (p + q) * (ix * p + iy * q + 1.0) / (np.sqrt(pq**3) * il) - \
        (ix + iy) / (np.sqrt(pq) * il)


def newton_update(Z: np.ndarray, f: np.ndarray, dfdZ: np.ndarray, eps: float = Config.EPS) -> np.ndarray:
    """One Newton step Z - f / (dfdZ + eps); eps keeps the step finite where dfdZ == 0."""
    return Z - f / (dfdZ + eps)


def shift_backward(Z: np.ndarray, out: np.ndarray, axis: int,
                   boundary: BoundaryMode = BoundaryMode.STALE_CARRY) -> np.ndarray:
    """
    Write Z shifted by one pixel along `axis` into `out` (out[i] = Z[i-1]).

    Index 0 along `axis` has no backward neighbour. With STALE_CARRY it is left
    untouched, with REPLICATE it receives Z's own first row/column. No wraparound.
    """
    dst = [slice(None), slice(None)]
    src = [slice(None), slice(None)]
    dst[axis] = slice(1, None)
    src[axis] = slice(None, -1)
    out[tuple(dst)] = Z[tuple(src)]
    if boundary is BoundaryMode.REPLICATE:
        edge = [slice(None), slice(None)]
        edge[axis] = 0
        out[tuple(edge)] = Z[tuple(edge)]
    return out


def median_smooth(Z: np.ndarray, window: int = Config.MEDIAN_WINDOW) -> np.ndarray:
    """
    Square median filter centred on each pixel.

    Borders are padded by replicating the edge pixels (scipy mode="nearest").
    """
    if not isinstance(window, (int, np.integer)) or window < 1 or window % 2 == 0:
        raise InvalidInput(f"Median window must be a positive odd integer, got {window!r}")
    return median_filter(np.asarray(Z, dtype=np.float64), size=window, mode="nearest")


def check_illumination(slant: float, tilt: float):
    """Fail fast on physically meaningless light directions."""
    if not 0.0 <= slant <= np.pi / 2:
        raise OutOfRangeParameters(f"slant must be in [0, pi/2], got {slant}")
    if not 0.0 <= tilt <= 2 * np.pi:
        raise OutOfRangeParameters(f"tilt must be in [0, 2*pi], got {tilt}")


def retrieve_surface(
        image,
        slant: float = None,
        tilt: float = None,
        iterations: int = Config.DEFAULT_ITERATIONS,
        window: int = Config.MEDIAN_WINDOW,
        boundary: BoundaryMode = BoundaryMode.STALE_CARRY,
        on_iteration=None
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Reconstruct a height map from a grayscale image using Shah's algorithm.

    Parameters:
        image       : array-like, shape (M, N)
                      Grayscale intensities in [0,1].
        slant, tilt : float or None
                      Light direction in radians. Give both or neither; when neither
                      is given they are estimated from the image.
        iterations  : int
                      Number of Jacobi sweeps, always run in full.
        window      : int
                      Size of the final median filter.
        boundary    : BoundaryMode
                      Fill policy for pixels without a backward neighbour.
        on_iteration: callable(k, f) or None
                      Called after every sweep with its index and residual field.

    Returns:
        Z : (M, N) smoothed absolute height field.
        p : (M, N) Z(x,y) - Z(x-1,y) from the last sweep (unsmoothed).
        q : (M, N) Z(x,y) - Z(x,y-1) from the last sweep (unsmoothed).
    """
    img = as_intensity_image(image)
    if (slant is None) != (tilt is None):
        raise InvalidInput("slant and tilt must be given together or not at all")
    if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)) or iterations < 0:
        raise InvalidInput(f"iterations must be a non-negative integer, got {iterations!r}")
    if slant is None:
        _, _, slant, tilt = estimate_img_properties(img)
    slant, tilt = float(slant), float(tilt)
    check_illumination(slant, tilt)

    E = img * Config.INTENSITY_SCALE
    p = np.zeros_like(E)
    q = np.zeros_like(E)
    Z = np.zeros_like(E)
    Zx = np.zeros_like(E)
    Zy = np.zeros_like(E)
    ix = np.cos(tilt) * np.tan(slant)
    iy = np.sin(tilt) * np.tan(slant)

    for k in range(iterations):
        # 1) reflectance map and residual from the current gradients
        f = residual(E, p, q, slant, tilt)
        # 2) derivative from the same gradients, then the Newton step on Z
        dfdZ = residual_derivative(p, q, ix, iy)
        Z = newton_update(Z, f, dfdZ)
        # 3) gradients from the fully updated Z
        shift_backward(Z, Zx, axis=0, boundary=boundary)
        shift_backward(Z, Zy, axis=1, boundary=boundary)
        p = Z - Zx
        q = Z - Zy
        if on_iteration is not None:
            on_iteration(k, f)

    Z = median_smooth(np.abs(Z), window)
    return Z, p, q
