"""Shared constants for font discovery, rendering and layout."""

# figlet font files
FONT_SUFFIX = ".flf"

# Probed in order when `figlet -I 2` gives nothing usable
COMMON_FONT_DIRS: tuple[str, ...] = (
    "/usr/share/figlet/fonts",
    "/usr/share/figlet",
    "/usr/local/share/figlet/fonts",
    "/usr/local/share/figlet",
    "/opt/homebrew/share/figlet/fonts",
    "/opt/homebrew/share/figlet",
)

# Previews
PREVIEW_LINES = 11
PREVIEW_MARGIN = 20  # list padding + selection marker
MIN_RENDER_WIDTH = 20

# Full output
OUTPUT_MARGIN = 4

# Timing (seconds)
STATUS_TIMEOUT = 2.0
RENDER_TIMEOUT = 10.0

# Text input
CHAR_LIMIT = 256

# Prefix that marks a preview as a failed render rather than figlet output
PREVIEW_ERROR_PREFIX = "Error rendering: "
