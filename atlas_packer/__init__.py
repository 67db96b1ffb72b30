"""Atlas Packer.

Packs independently sized raster images into one or more fixed size
canvases with minimal wasted area and no overlap. Canvases can grow to fit
everything, can be kept square, and byte-identical duplicates are recognized
so the same content is never packed twice.

MIT License

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""

__version__ = "1.0.0"

from .config import Config, default_config  # noqa: E402
from .errors import (  # noqa: E402
    BinLimitExceededError,
    DecodeError,
    GrowthLimitExceededError,
    ImageTooLargeError,
    InvalidConfigError,
    InvalidImageError,
    PackerError,
)
from .packer import Packer, new  # noqa: E402
from .utils.codec import Codec, PillowCodec  # noqa: E402
from .utils.images import DuplicateOf, InputImage, Placed, Unplaced  # noqa: E402
from .utils.packers import Heuristic  # noqa: E402

__all__ = [
    "BinLimitExceededError",
    "Codec",
    "Config",
    "DecodeError",
    "DuplicateOf",
    "GrowthLimitExceededError",
    "Heuristic",
    "ImageTooLargeError",
    "InputImage",
    "InvalidConfigError",
    "InvalidImageError",
    "Packer",
    "PackerError",
    "PillowCodec",
    "Placed",
    "Unplaced",
    "default_config",
    "new",
]
