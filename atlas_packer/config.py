"""Packer configuration.

The configuration is passed explicitly at construction. ``default_config()``
is the only place defaults come from.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from . import globs
from .errors import InvalidConfigError
from .utils.packers.heuristics import Heuristic


@dataclass
class Config:
    """Packing options.

    Attributes:
        texture_width: Base canvas width in pixels.
        texture_height: Base canvas height in pixels.
        auto_grow: Grow the canvas instead of opening new canvases on overflow.
        square: Force width == height on every canvas and growth step.
        heuristic: Placement scoring rule.
        padding: Spacing reserved between neighbouring images.
        max_dimension: Upper bound for either canvas side.
        max_bin_count: Upper bound for the number of canvases, None for unbounded.
        channels: Number of 8-bit channels per pixel (1 to 4).
    """

    texture_width: int = globs.DEFAULT_TEXTURE_WIDTH
    texture_height: int = globs.DEFAULT_TEXTURE_HEIGHT
    auto_grow: bool = False
    square: bool = True
    heuristic: Heuristic = field(default=Heuristic.BEST_SHORT_SIDE_FIT)
    padding: int = 0
    max_dimension: int = globs.MAX_DIMENSION
    max_bin_count: Optional[int] = None
    channels: int = globs.DEFAULT_CHANNELS

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Checks every option, coercing heuristic names to members.

        Raises:
            InvalidConfigError: If an option is out of range.
        """
        for name in ("texture_width", "texture_height", "padding", "max_dimension", "channels"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidConfigError("{} must be an integer, got {!r}".format(name, value))

        if self.texture_width <= 0 or self.texture_height <= 0:
            raise InvalidConfigError(
                "Base canvas size must be positive, got {}x{}".format(
                    self.texture_width, self.texture_height
                )
            )
        if self.padding < 0:
            raise InvalidConfigError("padding must not be negative, got {}".format(self.padding))
        if self.max_dimension <= 0:
            raise InvalidConfigError(
                "max_dimension must be positive, got {}".format(self.max_dimension)
            )
        if max(self.texture_width, self.texture_height) > self.max_dimension:
            raise InvalidConfigError(
                "Base canvas {}x{} exceeds max_dimension {}".format(
                    self.texture_width, self.texture_height, self.max_dimension
                )
            )
        if self.max_bin_count is not None and (
            not isinstance(self.max_bin_count, int) or self.max_bin_count < 1
        ):
            raise InvalidConfigError(
                "max_bin_count must be None or at least 1, got {!r}".format(self.max_bin_count)
            )
        if self.channels not in globs.CHANNEL_MODES:
            raise InvalidConfigError(
                "channels must be one of {}, got {}".format(
                    sorted(globs.CHANNEL_MODES), self.channels
                )
            )

        try:
            self.heuristic = Heuristic.parse(self.heuristic)
        except ValueError as e:
            raise InvalidConfigError(str(e)) from e

    @property
    def base_size(self):
        """Canvas size every new canvas starts with, squared up when required."""
        if self.square:
            side = max(self.texture_width, self.texture_height)
            return side, side
        return self.texture_width, self.texture_height

    def copy(self, **changes) -> "Config":
        """Returns a validated copy, optionally with some options replaced."""
        return replace(self, **changes)


def default_config() -> Config:
    """Creates a configuration holding the documented defaults."""
    return Config()
