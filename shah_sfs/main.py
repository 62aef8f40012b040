import argparse
from pathlib import Path
import numpy as np

from .config import Config
from .image_io import load_grayscale, save_image, save_float_array
from .preprocessing import normalize_uint8
from .illumination import estimate_img_properties
from .shah import retrieve_surface
from .synthetic import generate_sphere, generate_gaussian
from .visualization import save_gradient_maps, save_height_plot

SYNTHETIC_SURFACES = {
    "sphere": generate_sphere,
    "gaussian": generate_gaussian,
}


def main(
        input_path: str = None,
        output_dir: str = Config.DEFAULT_OUTPUT_DIR,
        slant: float = None,
        tilt: float = None,
        iterations: int = Config.DEFAULT_ITERATIONS,
        synthetic: str = "sphere",
        export_mesh: bool = False,
        save_plot: bool = True
):
    out = Path(output_dir)
    height_dir = Config.output_path(Config.HEIGHT_SUBDIR, output_dir)
    gradient_dir = Config.output_path(Config.GRADIENT_SUBDIR, output_dir)

    # Load or synthesize the image
    if input_path is not None:
        print(f"Input image: {input_path}")
        img = load_grayscale(input_path)
    else:
        if synthetic not in SYNTHETIC_SURFACES:
            raise ValueError(f"Unknown synthetic surface: {synthetic}")
        print(f"Input image: synthetic {synthetic}")
        img = SYNTHETIC_SURFACES[synthetic]()
    print(f"Output directory: {out}")
    print(f"Resolution of image is {img.shape[0]}x{img.shape[1]}")

    # Illumination
    if slant is None and tilt is None:
        albedo, mean_intensity, slant, tilt = estimate_img_properties(img)
        print(f"Estimated albedo={albedo:.4f}, mean intensity={mean_intensity:.4f}")
    if slant is not None and tilt is not None:
        print(f"Using slant={slant:.4f} rad, tilt={tilt:.4f} rad, {iterations} iterations")

    Z, p, q = retrieve_surface(img, slant, tilt, iterations)

    # Save outputs
    save_float_array(Z, str(height_dir / "height.npy"), format="npy")
    save_float_array(Z, str(height_dir / "height.pfm"), format="pfm")
    save_float_array(p, str(gradient_dir / "p.npy"), format="npy")
    save_float_array(q, str(gradient_dir / "q.npy"), format="npy")
    save_image(normalize_uint8(Z), str(height_dir / "height.png"))
    save_gradient_maps(p, q, str(gradient_dir))
    if save_plot:
        stride = max(1, max(Z.shape) // 100)
        save_height_plot(Z, str(height_dir / "height_3d.png"), stride=stride)
    if export_mesh:
        # open3d is only imported when a mesh is requested
        from .height_to_mesh import height_to_mesh
        height_to_mesh(np.nan_to_num(Z, nan=0.0), str(Config.output_path(Config.MESH_SUBDIR, output_dir)))

    print(f"Wrote outputs to: {out.resolve()}")
    return Z, p, q


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shape from Shading (Shah's linear approximation)")
    parser.add_argument("--input", default=None, help="Grayscale input image; omit to use a synthetic surface")
    parser.add_argument("--output", default=Config.DEFAULT_OUTPUT_DIR, help="Base output directory")
    parser.add_argument("--slant", type=float, default=None, help="Light slant in radians [0, pi/2]")
    parser.add_argument("--tilt", type=float, default=None, help="Light tilt in radians [0, 2pi]")
    parser.add_argument("--iterations", type=int, default=Config.DEFAULT_ITERATIONS, help="Number of iterations")
    parser.add_argument("--synthetic", choices=sorted(SYNTHETIC_SURFACES), default="sphere",
                        help="Synthetic surface used when --input is omitted")
    parser.add_argument("--mesh", action="store_true", dest="export_mesh", help="Export a .ply/.stl mesh")
    parser.add_argument("--no-plot", action="store_false", dest="save_plot", help="Skip the 3D height plot")
    return parser


if __name__ == "__main__":
    args = build_parser().parse_args()

    main(
        input_path=args.input,
        output_dir=args.output,
        slant=args.slant,
        tilt=args.tilt,
        iterations=args.iterations,
        synthetic=args.synthetic,
        export_mesh=args.export_mesh,
        save_plot=args.save_plot
    )
