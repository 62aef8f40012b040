import numpy as np
from .config import Config
from .errors import InvalidInput

### Synthetic Lambertian images of analytic surfaces, used to check reconstructions
### against a known height field.

def setup_xy(half_extent: float, resolution: float) -> tuple[np.ndarray, np.ndarray]:
    """Square grid covering [-half_extent, half_extent); x runs along axis 0, y along axis 1."""
    if resolution <= 0:
        raise InvalidInput(f"resolution must be positive, got {resolution}")
    r = np.arange(-half_extent, half_extent, resolution)
    x, y = np.meshgrid(r, r, indexing="ij")
    return x, y

def render_lambertian(p: np.ndarray, q: np.ndarray, albedo: float, illumination) -> np.ndarray:
    """
    Image of a surface with gradients p, q lit from `illumination`, clipped to [0,1].

    Uses the same reflectance map as the solver, so a light at (slant, tilt) is
    illumination_vector(slant, tilt).
    """
    I = np.asarray(illumination, dtype=np.float64)
    n = np.linalg.norm(I)
    if I.shape != (3,) or n == 0:
        raise InvalidInput(f"illumination must be a non-zero 3-vector, got {illumination!r}")
    I = I / n
    R = albedo * (I[2] + I[0] * p + I[1] * q) / np.sqrt(1 + p**2 + q**2)
    return np.clip(R, 0.0, 1.0)

def sphere_height(
    radius: float = Config.SYNTH_RADIUS,
    scale_factor: float = Config.SYNTH_SCALE_FACTOR,
    resolution: float = Config.SYNTH_RESOLUTION
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Height z and gradients p, q of a hemisphere; zero outside the disc."""
    if radius <= 0:
        raise InvalidInput(f"radius must be positive, got {radius}")
    x, y = setup_xy(scale_factor * radius, resolution)
    inside = radius**2 - x**2 - y**2 > 0
    z = np.zeros_like(x)
    p = np.zeros_like(x)
    q = np.zeros_like(x)
    z[inside] = np.sqrt(radius**2 - x[inside]**2 - y[inside]**2)
    p[inside] = -x[inside] / z[inside]
    q[inside] = -y[inside] / z[inside]
    return z, p, q

def gaussian_height(
    sigma: float = 1.0,
    amplitude: float = 1.0,
    half_extent: float = 3.0,
    resolution: float = 0.05
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Height z and gradients p, q of a Gaussian bump centred on the grid."""
    if sigma <= 0:
        raise InvalidInput(f"sigma must be positive, got {sigma}")
    x, y = setup_xy(half_extent, resolution)
    z = amplitude * np.exp(-(x**2 + y**2) / (2 * sigma**2))
    p = -x / sigma**2 * z
    q = -y / sigma**2 * z
    return z, p, q

def generate_sphere(
    albedo: float = Config.SYNTH_ALBEDO,
    illumination=Config.SYNTH_ILLUMINATION,
    radius: float = Config.SYNTH_RADIUS,
    scale_factor: float = Config.SYNTH_SCALE_FACTOR,
    resolution: float = Config.SYNTH_RESOLUTION
) -> np.ndarray:
    """Grayscale image in [0,1] of a sphere on a flat background."""
    _, p, q = sphere_height(radius, scale_factor, resolution)
    return render_lambertian(p, q, albedo, illumination)

def generate_gaussian(
    albedo: float = Config.SYNTH_ALBEDO,
    illumination=Config.SYNTH_ILLUMINATION,
    sigma: float = 1.0,
    amplitude: float = 1.0,
    half_extent: float = 3.0,
    resolution: float = 0.05
) -> np.ndarray:
    """Grayscale image in [0,1] of a Gaussian bump."""
    _, p, q = gaussian_height(sigma, amplitude, half_extent, resolution)
    return render_lambertian(p, q, albedo, illumination)
