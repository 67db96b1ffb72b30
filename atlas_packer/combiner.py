"""Rendering of packed canvases.

Every placed image is copied verbatim into its canvas at the assigned offset.
No resampling, blending or color conversion takes place, so the rendered
pixels inside a placement equal the source pixels exactly.
"""

import logging
from typing import Dict, List, Sequence

from .type_annotations import PixelBuffer
from .utils.images import InputImage
from .utils.packers.bin_packer import Canvas
from .utils.pixels.pixel_buffer import new_pixel_buffer, pixel_buffer_paste

logger = logging.getLogger(__name__)


def get_atlas(canvas: Canvas, images: Dict[int, InputImage], channels: int) -> PixelBuffer:
    """Render one canvas.

    Args:
        canvas: The packed canvas.
        images: Images by id, holding at least every image placed on the canvas.
        channels: Channel count of the rendered buffer.

    Returns:
        A new pixel buffer of the canvas size, transparent where no image sits.
    """
    atlas = new_pixel_buffer(canvas.size, channels)
    for placement in canvas.placements:
        pixel_buffer_paste(atlas, images[placement.image_id].pixels, (placement.x, placement.y))
    return atlas


def render_canvases(canvases: Sequence[Canvas], images: Sequence[InputImage], channels: int) -> List[PixelBuffer]:
    """Render every canvas holding at least one placement, in creation order."""
    by_id = {image.id: image for image in images}
    atlases = []
    for canvas in canvases:
        if canvas.is_empty:
            continue
        atlases.append(get_atlas(canvas, by_id, channels))
        logger.debug("Rendered canvas %d (%dx%d, %d images)", canvas.index, canvas.width, canvas.height,
                     len(canvas.placements))
    return atlases
