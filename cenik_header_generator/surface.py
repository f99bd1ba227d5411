"""
Pillow-backed raster surface used for measuring and drawing.
"""

# Standard Library
import io

# PIP3 modules
import PIL.Image
import PIL.ImageColor
import PIL.ImageDraw

# local repo modules
import cenik_header_generator as chg
import cenik_header_generator.config
import cenik_header_generator.fonts


FontResolver = chg.fonts.FontResolver
DEFAULT_TEXT_COLOR = chg.config.DEFAULT_TEXT_COLOR
TRANSPARENT = (0, 0, 0, 0)


class RasterSurface:
	"""
	RGBA drawing surface with an active font and fill color.

	Mirrors the small drawing capability the compositor needs: clear,
	draw an image into a rectangle, set font and fill, measure a string,
	draw a string at a top-left anchor and export PNG bytes.
	"""

	def __init__(
		self,
		width: int,
		height: int,
		fonts: FontResolver | None = None,
	):
		if width <= 0 or height <= 0:
			raise ValueError(f"Surface size must be positive: {width}x{height}")
		self.image = PIL.Image.new("RGBA", (int(width), int(height)), TRANSPARENT)
		self.fonts = fonts if fonts is not None else FontResolver()
		self._draw = PIL.ImageDraw.Draw(self.image)
		self._font = None
		self._fill = PIL.ImageColor.getcolor(DEFAULT_TEXT_COLOR, "RGBA")

	#============================================
	@classmethod
	def from_image(
		cls,
		image: PIL.Image.Image,
		fonts: FontResolver | None = None,
	) -> "RasterSurface":
		"""
		Wrap a copy of an existing image.
		"""
		surface = cls(image.width, image.height, fonts)
		surface.image.paste(image.convert("RGBA"), (0, 0))
		return surface

	@property
	def width(self) -> int:
		return self.image.width

	@property
	def height(self) -> int:
		return self.image.height

	@property
	def size(self) -> tuple[int, int]:
		return self.image.size

	#============================================
	def clear(self) -> None:
		"""
		Reset every pixel to transparent.
		"""
		self.image.paste(TRANSPARENT, (0, 0, self.width, self.height))

	#============================================
	def draw_image(
		self,
		image: PIL.Image.Image,
		box: tuple[int, int, int, int],
	) -> None:
		"""
		Draw an image stretched into a rectangle.

		Args:
			image: Source image.
			box: Target (x0, y0, x1, y1); no aspect correction is applied.
		"""
		x0, y0, x1, y1 = box
		target_size = (int(x1 - x0), int(y1 - y0))
		if target_size[0] <= 0 or target_size[1] <= 0:
			return
		layer = image.convert("RGBA")
		if layer.size != target_size:
			layer = layer.resize(target_size, PIL.Image.Resampling.LANCZOS)
		self.image.alpha_composite(layer, dest=(int(x0), int(y0)))

	#============================================
	def set_font(
		self,
		family: str,
		weight: int,
		size: float,
		font_file: str | None = None,
	) -> None:
		self._font = self.fonts.get_font(family, weight, size, font_file)

	#============================================
	def set_fill(self, color: str) -> None:
		self._fill = PIL.ImageColor.getcolor(color, "RGBA")

	#============================================
	def measure_text(self, text: str) -> float:
		"""
		Measure the advance width of a string under the active font.

		Args:
			text: String to measure.

		Returns:
			Width in pixels.
		"""
		if self._font is None:
			raise RuntimeError("No active font set on surface")
		return self._font.getlength(text)

	#============================================
	def fill_text(self, text: str, x: float, y: float) -> None:
		"""
		Draw a string with the top-left of its box at (x, y).
		"""
		if self._font is None:
			raise RuntimeError("No active font set on surface")
		self._draw.text((x, y), text, font=self._font, fill=self._fill, anchor="la")

	#============================================
	def export_png(self) -> bytes:
		"""
		Encode the surface as lossless PNG.

		Returns:
			PNG bytes.
		"""
		buffer = io.BytesIO()
		self.image.save(buffer, format="PNG")
		return buffer.getvalue()

	#============================================
	def pixel_bytes(self) -> bytes:
		return self.image.tobytes()
