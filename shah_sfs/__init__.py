from .config import Config
from .errors import InvalidInput, OutOfRangeParameters
from .shah import BoundaryMode, retrieve_surface, median_smooth, reflectance_map, residual_derivative
from .illumination import estimate_img_properties, illumination_vector
from .synthetic import generate_sphere, generate_gaussian, sphere_height, gaussian_height
from .preprocessing import as_intensity_image, normalize_uint8
from .image_io import load_grayscale, save_image, save_float_array
