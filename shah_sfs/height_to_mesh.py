import numpy as np
import open3d as o3d
from pathlib import Path
from .config import Config


def height_to_pointcloud(z: np.ndarray, scale: float = Config.DEFAULT_MESH_SCALE) -> o3d.geometry.PointCloud:
    """Point cloud of (x, -y, z) for every finite pixel of a height map, centred on the image."""
    H, W = z.shape
    y, x = np.mgrid[0:H, 0:W]
    x = (x - W / 2) * scale
    y = (y - H / 2) * scale
    pts = np.stack((x, -y, z * scale), axis=-1).reshape(-1, 3)
    pts = pts[np.isfinite(pts[:, 2])]

    pcd = o3d.geometry.PointCloud()
    pcd.points = o3d.utility.Vector3dVector(pts.astype(np.float64))
    return pcd


def height_to_mesh(
    z: np.ndarray,
    output_dir: str,
    scale: float = Config.DEFAULT_MESH_SCALE,
    poisson_depth: int = Config.DEFAULT_POISSON_DEPTH
):
    """
    Convert a reconstructed height map into a 3D mesh and save as .ply and .stl.

    Args:
        z: Height map (H, W)
        output_dir: Folder to save mesh files
        scale: Scale factor applied to x, y and z
        poisson_depth: Octree depth for Poisson surface reconstruction
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    H, W = z.shape
    print(f"Meshing height map: {W}x{H}")

    pcd = height_to_pointcloud(z, scale)
    # Estimate normals before Poisson reconstruction
    pcd.estimate_normals(search_param=o3d.geometry.KDTreeSearchParamHybrid(radius=5 * scale, max_nn=30))
    pcd.orient_normals_towards_camera_location(np.array([0.0, 0.0, 1e6]))

    o3d.io.write_point_cloud(str(Path(output_dir) / "surface_pointcloud.ply"), pcd)
    print(f"Saved point cloud to {output_dir}/surface_pointcloud.ply")

    # --- Poisson reconstruction ---
    try:
        print(f"Running Poisson reconstruction (depth={poisson_depth})...")
        mesh, densities = o3d.geometry.TriangleMesh.create_from_point_cloud_poisson(
            pcd, depth=poisson_depth
        )
        if len(mesh.vertices) == 0:
            raise RuntimeError("Empty mesh returned by Poisson reconstruction.")
        mesh.compute_vertex_normals()
    except RuntimeError as e:
        print(f"[WARNING] Poisson reconstruction failed at depth={poisson_depth}: {e}")
        print("[INFO] Falling back to Ball Pivoting reconstruction...")
        avg_dist = np.mean(pcd.compute_nearest_neighbor_distance())
        radii = o3d.utility.DoubleVector([avg_dist, 2 * avg_dist])
        mesh = o3d.geometry.TriangleMesh.create_from_point_cloud_ball_pivoting(pcd, radii)
        mesh.compute_vertex_normals()

    # --- Save mesh files ---
    ply_path = str(Path(output_dir) / "surface_mesh.ply")
    stl_path = str(Path(output_dir) / "surface_mesh.stl")
    o3d.io.write_triangle_mesh(ply_path, mesh)
    o3d.io.write_triangle_mesh(stl_path, mesh)
    print(f"Saved mesh as:\n - {ply_path}\n - {stl_path}")

    return mesh
