import numpy as np
from pathlib import Path
from .image_io import save_image
from .preprocessing import normalize_uint8
from .config import Config
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

### The purpose of this script is to handle visualization of the reconstructed surface.
def save_gradient_maps(p: np.ndarray, q: np.ndarray, out_dir: str):
    """Save p and q as normalized 8-bit PNGs."""
    Config.ensure_dir(out_dir)
    save_image(normalize_uint8(p), str(Path(out_dir) / "p.png"))
    save_image(normalize_uint8(q), str(Path(out_dir) / "q.png"))

def save_height_plot(z: np.ndarray, out_path: str, mask: np.ndarray = None, stride: int = 1):
    """
    Create a 3D surface plot from a height map and save it as an image.

    Parameters:
        z       : np.ndarray, shape (H, W)
                  Height map.
        out_path: str
                  Path to save the output image.
        mask    : np.ndarray, shape (H, W), optional
                  Boolean mask of valid pixels.
        stride  : int
                  Row/column stride of the plotted mesh (raise it for large maps).
    """
    z_masked = np.where(mask, z, np.nan) if mask is not None else z
    H, W = z_masked.shape
    X, Y = np.meshgrid(np.arange(W), np.arange(H))

    # Create figure
    fig = plt.figure(figsize=(8, 6))
    ax = fig.add_subplot(111, projection='3d')

    # Plot surface
    ax.plot_surface(X, Y, z_masked, rstride=stride, cstride=stride, cmap='viridis', edgecolor='none')

    # Labels and view
    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Height')
    ax.view_init(elev=30, azim=120)

    # Save figure
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, bbox_inches='tight')
    plt.close(fig)
