"""Global constants for the application."""

# Animation settings
DEFAULT_FRAMES = 100  # Number of animation frames
DEFAULT_WIDTH = 500  # Width of the generated image in pixels
DEFAULT_FPS = 20  # Default frames per second for animated outputs
DEFAULT_OUTPUT = "out"  # Output path stem when none is given
DEFAULT_FORMAT = "gif"

# CSS linear-gradient inspired colour scheme, freshest ink first
DEFAULT_COLORS = "#fff,#ff8@.01,#911@.03,#414@.07,#007@.15,#001"
PALETTE_SIZE = 0x100  # GIF and paletted PNG frames hold at most 256 entries
TRANSPARENT_COLOR = (0, 0, 0)  # RGB stored at the sentinel slot

# Frame synthesis
CLOCK_OVERSHOOT = 1.2  # Global clock runs past 1.0 so trails hold once complete
TRAIL_LENGTH = 1.0  # Temporal width of the comet trail in normalized units

# Projection
EARTH_RADIUS = 6378137.0  # Spherical web-Mercator radius in metres
SCALE_FACTOR = 0.9  # Shrinks the fitted scale to leave room for a margin
MARGIN_FRACTION = 0.05  # Inset applied to the left and top bounds

# Haversine distances
MEAN_EARTH_RADIUS = 6371000.0  # Metres

# Environment variables read by the CLI
ENV_FRAMES = "RAINBOW_ROADS_FRAMES"
ENV_WIDTH = "RAINBOW_ROADS_WIDTH"
ENV_COLORS = "RAINBOW_ROADS_COLORS"
