from ..default_config import DEFAULTS, CONFIG_VERSION
from .static_class import CoplanarPolicy

GEOM_EPS = DEFAULTS["GEOM_EPS"]
CLIPPER_SCALE = DEFAULTS["CLIPPER_SCALE"]
COPLANAR_POLICY = CoplanarPolicy(DEFAULTS["COPLANAR_POLICY"])

HULL_MIN_EDGE_FLOOR = DEFAULTS["HULL_MIN_EDGE_FLOOR"]  # initial candidate minimum edge length
HULL_EDGE_EPS = DEFAULTS["HULL_EDGE_EPS"]              # degenerate hull edges are skipped

MAX_CONTACTS = DEFAULTS["MAX_CONTACTS"]

CONIC_EPS = DEFAULTS["CONIC_EPS"]
MIN_ELLIPSE_POINTS = DEFAULTS["MIN_ELLIPSE_POINTS"]

SHOW_PROGRESS = DEFAULTS["SHOW_PROGRESS"]
