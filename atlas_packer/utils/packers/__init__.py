from .bin_packer import BinPacker, Canvas, CanvasPlacement
from .free_rects import FreeRectTracker, Rectangle
from .heuristics import Heuristic
