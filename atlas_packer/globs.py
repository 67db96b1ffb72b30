"""Global constants for the atlas packer.

This module contains the default configuration values and limits used
throughout the package. It provides consistent access to canvas limits and
the pixel formats understood by the codec boundary.
"""

DEFAULT_TEXTURE_WIDTH = 1024
DEFAULT_TEXTURE_HEIGHT = 1024
DEFAULT_CHANNELS = 4

MAX_DIMENSION = 16384

# Pillow image modes by channel count
CHANNEL_MODES = {
    1: "L",
    2: "LA",
    3: "RGB",
    4: "RGBA",
}


class PackStates:
    """Constants naming the stages a pack() call moves through.

    They only appear in log records, so a failure can be traced back to the
    stage that raised it.
    """

    SORTING = "sorting"
    PLACING = "placing"
    GROW_CANVAS = "grow_canvas"
    OPEN_NEW_BIN = "open_new_bin"
    DONE = "done"
    RENDERING = "rendering"
    FAILED = "failed"
