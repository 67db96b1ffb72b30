"""Exceptions raised by the atlas packer.

Ingestion errors are raised synchronously from the ``add_image*`` calls.
Packing errors abort the current ``Packer.pack()`` call and leave the results
of an earlier successful call untouched.
"""


class PackerError(Exception):
    """Base class for every error raised by the atlas packer."""

    pass


class DecodeError(PackerError):
    """Indicates the input of an ingestion call could not be decoded."""

    pass


class InvalidImageError(PackerError):
    """Indicates zero or mismatched image dimensions."""

    pass


class ImageTooLargeError(PackerError):
    """Indicates one image can never fit the largest permitted canvas.

    Attributes:
        image_id: Identifier of the offending image.
        size: Width and height of the image.
        limit: Width and height of the largest canvas it was checked against.
    """

    def __init__(self, image_id: int, size, limit) -> None:
        self.image_id = image_id
        self.size = tuple(size)
        self.limit = tuple(limit)
        super().__init__(
            "Image {} ({}x{}) does not fit into a {}x{} canvas".format(
                image_id, self.size[0], self.size[1], self.limit[0], self.limit[1]
            )
        )


class GrowthLimitExceededError(PackerError):
    """Indicates the canvas reached its maximum size with images left over."""

    pass


class BinLimitExceededError(PackerError):
    """Indicates more canvases were needed than the configured maximum."""

    pass


class InvalidConfigError(PackerError):
    """Indicates an invalid packer configuration."""

    pass
