import numpy as np


# Every channel is stored as one unsigned byte, so the raw bytes of a buffer are
# exactly the bytes a codec hands over and the fingerprint is computed from.
pixel_dtype = np.uint8

# Background of a freshly allocated canvas (transparent black)
background_value = 0
