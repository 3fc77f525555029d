"""
Vector-Cloud Configuration
Central configuration for embedding, rendering, and interaction settings.
"""

from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent

# Logging
LOG_LEVEL = "INFO"

# Embedding settings
DEFAULT_EMBEDDER = "openai"
OPENAI_MODEL = "text-embedding-3-small"
OPENAI_EMBEDDING_DIM = 1536
OPENAI_BATCH_SIZE = 2000  # Max texts per API call (actual batch size adapts to token limits)
HASHING_EMBEDDING_DIM = 256

# Embedders offered in the sidebar
AVAILABLE_EMBEDDERS = {
    "openai": {
        "label": "OpenAI",
        "description": f"{OPENAI_MODEL} ({OPENAI_EMBEDDING_DIM} dims, needs an API key)",
        "needs_api_key": True,
    },
    "hashing": {
        "label": "Offline (hashing)",
        "description": "Deterministic character n-gram vectors, no network",
        "needs_api_key": False,
    },
}

# Projection settings
PCA_N_COMPONENTS = 3
MIN_BATCH_SIZE = 2

# Viewport settings
VIEWPORT_WIDTH = 800
VIEWPORT_HEIGHT = 600
BACKGROUND_COLOR = (0xF0, 0xF0, 0xF0)  # Light gray

# Camera settings
CAMERA_FOV = 75.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 1000.0
CAMERA_POSITION = (5.0, 5.0, 5.0)

# Orbit controls
ORBIT_ENABLE_DAMPING = True
ORBIT_DAMPING_FACTOR = 0.05
ORBIT_ROTATE_SPEED = 1.0
ORBIT_ZOOM_SPEED = 1.0
ORBIT_MIN_DISTANCE = 0.5
ORBIT_MAX_DISTANCE = 50.0

# Scene helpers
AXES_SIZE = 5.0
AXIS_LABEL_OFFSET = 5.2
AXIS_LABEL_FONT_SIZE = 16
LIGHT_INTENSITY = 0.5

# Highlight shader
POINT_BASE_SIZE = 8.0
POINT_HIGHLIGHT_SIZE = 4.0
PULSE_AMPLITUDE = 0.2
PULSE_FREQUENCY = 5.0
HIGHLIGHT_COLOR = (1.0, 1.0, 0.0)  # Yellow

# Picking
PICK_TOLERANCE_PX = 8.0

# Render loop
TIME_STEP = 0.016  # Approximately 60 FPS
FRAME_INTERVAL = "0.1s"  # Streamlit fragment refresh
ZOOM_STEP_NOTCHES = 3
