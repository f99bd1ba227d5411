"""
Preview scaling of the composited surface.
"""

# Standard Library
import math

# PIP3 modules
import PIL.Image

# local repo modules
import cenik_header_generator as chg
import cenik_header_generator.config
import cenik_header_generator.surface


RasterSurface = chg.surface.RasterSurface
PREVIEW_CONTAINER_WIDTH = chg.config.PREVIEW_CONTAINER_WIDTH
PREVIEW_PADDING = chg.config.PREVIEW_PADDING
PREVIEW_MAX_HEIGHT = chg.config.PREVIEW_MAX_HEIGHT


#============================================
def compute_scale(
	source_width: int,
	source_height: int,
	max_width: float,
	max_height: float,
) -> float:
	"""
	Compute the downscale factor for fitting a size into bounds.

	Args:
		source_width: Source width in pixels.
		source_height: Source height in pixels.
		max_width: Bound width.
		max_height: Bound height.

	Returns:
		Scale factor, never above 1.0.
	"""
	if max_width <= 0 or max_height <= 0:
		raise ValueError(f"Preview bounds must be positive: {max_width}x{max_height}")
	scale_x = max_width / source_width
	scale_y = max_height / source_height
	return min(scale_x, scale_y, 1.0)


#============================================
def compute_target_size(
	source_width: int,
	source_height: int,
	max_width: float,
	max_height: float,
) -> tuple[int, int]:
	"""
	Compute the preview size for a source size and bounds.

	Args:
		source_width: Source width in pixels.
		source_height: Source height in pixels.
		max_width: Bound width.
		max_height: Bound height.

	Returns:
		Tuple of (width, height), floored and at least one pixel.
	"""
	scale = compute_scale(source_width, source_height, max_width, max_height)
	target_width = max(1, math.floor(source_width * scale))
	target_height = max(1, math.floor(source_height * scale))
	return (target_width, target_height)


#============================================
def compute_preview_bounds(
	container_width: int = PREVIEW_CONTAINER_WIDTH,
) -> tuple[int, int]:
	"""
	Compute the preview bounds for a display container width.
	"""
	return (container_width - PREVIEW_PADDING, PREVIEW_MAX_HEIGHT)


#============================================
def scale_to_fit(
	source: RasterSurface,
	max_width: float,
	max_height: float,
) -> RasterSurface:
	"""
	Make a downscaled copy of a surface that fits within bounds.

	The source surface is not modified. When the source already fits the
	copy keeps the source size exactly.

	Args:
		source: Full resolution surface.
		max_width: Bound width.
		max_height: Bound height.

	Returns:
		New surface holding the resampled image.
	"""
	target_size = compute_target_size(source.width, source.height, max_width, max_height)
	if target_size == source.size:
		image = source.image.copy()
	else:
		image = source.image.resize(target_size, PIL.Image.Resampling.LANCZOS)
	return RasterSurface.from_image(image, source.fonts)
