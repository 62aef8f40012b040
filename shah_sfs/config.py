from pathlib import Path
import numpy as np

class Config:
    # --- Project root resolution ---
    # This automatically finds the top-level folder (one up from /shah_sfs)
    PROJECT_ROOT = Path(__file__).resolve().parent.parent

    # --- Input / Output paths ---
    DEFAULT_OUTPUT_DIR = str(PROJECT_ROOT / "Output")
    HEIGHT_SUBDIR = "Height"
    GRADIENT_SUBDIR = "Gradients"
    MESH_SUBDIR = "Mesh"

    # --- Solver parameters ---
    DEFAULT_ITERATIONS = 200
    MEDIAN_WINDOW = 21  # Square window of the final smoothing pass
    INTENSITY_SCALE = 255.0  # Images in [0,1] are scaled to [0,255] before solving
    EPS = np.finfo(np.float64).eps  # Keeps the Newton step finite where dfdZ == 0

    # --- Synthetic surfaces ---
    SYNTH_ALBEDO = 0.5
    SYNTH_ILLUMINATION = (0.2, 0.0, 0.9)
    SYNTH_RADIUS = 5.0
    SYNTH_SCALE_FACTOR = 1.5
    SYNTH_RESOLUTION = 0.1

    # --- Mesh export ---
    DEFAULT_MESH_SCALE = 1.0
    DEFAULT_POISSON_DEPTH = 8

    @classmethod
    def output_path(cls, subdir: str, base: str = None) -> Path:
        path = Path(base if base is not None else cls.DEFAULT_OUTPUT_DIR) / subdir
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def ensure_dir(path: str):
        """Create directory if it doesn't exist."""
        Path(path).mkdir(parents=True, exist_ok=True)
