from pathlib import Path
import numpy as np
import cv2

### This script handles image loading and saving operations to isolate the I/O logic from the rest of the program
###
def load_grayscale(path: str) -> np.ndarray:
    """Load one grayscale image. Returns HxW float64 in [0,1]."""
    if not Path(path).is_file():
        raise ValueError(f"No such image: {path}")
    im = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE | cv2.IMREAD_ANYDEPTH)
    if im is None:
        raise ValueError(f"Failed to read: {path}")
    if im.dtype == np.uint16:
        return im.astype(np.float64) / 65535.0
    if im.dtype == np.uint8:
        return im.astype(np.float64) / 255.0
    return np.clip(im.astype(np.float64), 0.0, 1.0)

def save_image(img: np.ndarray, path: str, convert_bgr: bool = False):
    """Save image to disk, optionally converting RGB to BGR."""
    if convert_bgr:
        img = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), img):
        raise ValueError(f"Failed to write: {path}")

def save_float_array(arr: np.ndarray, path: str, format: str = "npy"):
    """Save float array as .npy or .pfm."""
    if format == "npy":
        np.save(path, np.nan_to_num(arr, nan=0.0).astype(np.float32))
    elif format == "pfm":
        cv2.imwrite(str(path), np.nan_to_num(arr, nan=0.0).astype(np.float32))
    else:
        raise ValueError(f"Unsupported format: {format}")
