from typing import Any, Dict
CONFIG_VERSION = "1.0.0"
DEFAULTS: Dict[str, Any] = {
    # Visualizer Defaults
    "DEFAULT_VISUALIZER": "PyVista",  # VisualizerType member name
    "MESH_OPACITY": 0.4,              # ROM / affordance mesh opacity
    "POINT_SIZE": 10.0,               # contact point size in pixels

    # Geometry Kernel Defaults
    "GEOM_EPS": 1e-6,                 # zero tolerance shared by intersector and half-space filter
    "CLIPPER_SCALE": 1e6,             # float -> int scale for pyclipper (coplanar triangles)
    "COPLANAR_POLICY": "CLIP",        # CoplanarPolicy used for coplanar pairs inside the extractor

    # Hull refinement
    "HULL_MIN_EDGE_FLOOR": 0.1,       # initial candidate for the minimum hull edge length
    "HULL_EDGE_EPS": 1e-6,            # hull edges shorter than this are ignored

    # Narrow phase
    "MAX_CONTACTS": 100,              # contact points requested from the collision query

    # Conic fitting
    "CONIC_EPS": 1e-9,                # |B| below this -> circle branch of shape recovery
    "MIN_ELLIPSE_POINTS": 6,          # direct ellipse fit needs at least 6 points

    # Processing Defaults
    "SHOW_PROGRESS": False,           # tqdm over the pairwise triangle loop
}
