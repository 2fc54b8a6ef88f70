import os

# Edge detection defaults
DEFAULT_EDGE_DETECTOR = "adaptive"
DEFAULT_SOBEL_THRESHOLD = 50.0
DEFAULT_CANNY_LOW_THRESHOLD = 25.0
DEFAULT_CANNY_HIGH_THRESHOLD = 75.0
DEFAULT_GAUSSIAN_BLUR = True

# Adaptive threshold: mean + k * stddev, clamped
ADAPTIVE_STDDEV_FACTOR = 1.5
ADAPTIVE_MIN_THRESHOLD = 10.0
ADAPTIVE_MAX_THRESHOLD = 255.0

# Path tracing defaults
DEFAULT_PATH_TRACER = "custom"
DEFAULT_SMOOTHING_FACTOR = 0.3
DEFAULT_SIMPLIFICATION_THRESHOLD = 2.0
DEFAULT_MIN_PATH_LENGTH = 10

# Color quantization / segmentation defaults
DEFAULT_KMEANS_CLUSTERS = 8
DEFAULT_COLOR_SIMILARITY_THRESHOLD = 30.0
DEFAULT_REGION_GROWING_THRESHOLD = 25.0
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_CONVERGENCE_THRESHOLD = 5.0
DEFAULT_RANDOM_SEED = 42

# Rendering defaults
DEFAULT_PATH_PRECISION = 5

# Quality score bounds
ACCURACY_RANGE = (60, 95)
SMOOTHNESS_RANGE = (50, 90)

# API settings
API_HOST = os.getenv("RASTERTRACE_HOST", "0.0.0.0")
API_PORT = int(os.getenv("RASTERTRACE_PORT", "8000"))
MAX_UPLOAD_BYTES = int(os.getenv("RASTERTRACE_MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))

# Logging
LOG_LEVEL = os.getenv("RASTERTRACE_LOG_LEVEL", "INFO")
