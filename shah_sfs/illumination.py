import numpy as np
import cv2
from .config import Config
from .preprocessing import as_intensity_image

### Estimate albedo and light direction from image statistics, assuming a Lambertian
### surface of constant albedo whose normals are uniformly distributed.

def illumination_vector(slant: float, tilt: float) -> np.ndarray:
    """Unit light direction [cos(tilt)sin(slant), sin(tilt)sin(slant), cos(slant)]."""
    return np.array([np.cos(tilt) * np.sin(slant),
                     np.sin(tilt) * np.sin(slant),
                     np.cos(slant)], dtype=np.float64)

def normalized_gradients(E: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Sobel gradients divided by their magnitude.

    x runs along axis 0 (rows) and y along axis 1 (columns), the same axes as the
    solver's p and q. OpenCV's dx/dy flags are the other way round.
    """
    Ex = cv2.Sobel(E, cv2.CV_64F, 0, 1, ksize=3, borderType=cv2.BORDER_REPLICATE)
    Ey = cv2.Sobel(E, cv2.CV_64F, 1, 0, ksize=3, borderType=cv2.BORDER_REPLICATE)
    Exy = np.sqrt(Ex**2 + Ey**2)
    return Ex / (Exy + Config.EPS), Ey / (Exy + Config.EPS)

def estimate_img_properties(image) -> tuple[float, float, float, float]:
    """
    Estimate (albedo, mean_intensity, slant, tilt) of a grayscale image in [0,1].

    slant is in [0, pi/2] and tilt in [0, pi), measured from axis 0 toward axis 1
    as in retrieve_surface. An image with no contrast gives slant 0, an image
    with no gradients gives tilt 0.
    """
    E = as_intensity_image(image)
    mu1 = float(np.mean(E))
    mu2 = float(np.mean(E**2))
    g = np.sqrt(6 * np.pi**2 * mu2 - 48 * mu1**2)
    albedo = g / np.pi
    # flat images put 4*mu1/g just above 1
    slant = float(np.arccos(np.clip(4 * mu1 / (g + Config.EPS), -1.0, 1.0)))

    nEx, nEy = normalized_gradients(E)
    # atan(y/x) shifted into [0, pi) is arctan2 modulo pi
    tilt = float(np.arctan2(np.mean(nEy), np.mean(nEx)) % np.pi)
    return float(albedo), mu1, slant, tilt
