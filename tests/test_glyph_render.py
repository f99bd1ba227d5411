import PIL.Image

import cenik_header_generator.config
import cenik_header_generator.fonts
import cenik_header_generator.glyphs
import cenik_header_generator.surface


TextSlotConfig = cenik_header_generator.config.TextSlotConfig
RasterSurface = cenik_header_generator.surface.RasterSurface


class RecordingSurface:
	"""
	Surface stand-in that records draw calls.
	"""

	def __init__(self):
		self.font = None
		self.fill = None
		self.draws: list[tuple[str, float, float]] = []

	def set_font(self, family, weight, size, font_file=None):
		self.font = (family, weight, size)

	def set_fill(self, color):
		self.fill = color

	def measure_text(self, text: str) -> float:
		return len(text) * self.font[2] * 0.5

	def fill_text(self, text: str, x: float, y: float) -> None:
		self.draws.append((text, x, y))


#============================================
def build_slot(**overrides) -> TextSlotConfig:
	values = {
		"x": 10,
		"y": 12,
		"font_family": "DejaVu Sans",
		"font_size": 40,
		"max_width": 300,
		"font_weight": 700,
		"color": "#ff0000",
	}
	values.update(overrides)
	return TextSlotConfig(**values)


#============================================
def test_plain_text_uses_single_draw_call() -> None:
	surface = RecordingSurface()
	cenik_header_generator.glyphs.draw_slot_text(surface, "v2.3.1", build_slot(), 32)
	assert surface.draws == [("v2.3.1", 10, 12)]
	assert surface.font == ("DejaVu Sans", 700, 32)
	assert surface.fill == "#ff0000"


#============================================
def test_letter_spacing_advances_pen_per_character() -> None:
	surface = RecordingSurface()
	slot = build_slot(letter_spacing=3)
	cenik_header_generator.glyphs.draw_slot_text(surface, "abc", slot, 20)
	# each char is 10px wide at 20px
	assert surface.draws == [("a", 10, 12), ("b", 23, 12), ("c", 36, 12)]


#============================================
def test_draw_text_with_spacing_returns_pen_position() -> None:
	surface = RecordingSurface()
	surface.set_font("DejaVu Sans", 400, 10)
	end_x = cenik_header_generator.glyphs.draw_text_with_spacing(surface, "ab", 0, 0, 2)
	assert end_x == 14


#============================================
def test_text_lands_at_anchor_on_raster_surface(tmp_path) -> None:
	fonts = cenik_header_generator.fonts.FontResolver([tmp_path])
	surface = RasterSurface(240, 90, fonts)
	slot = build_slot(x=30, y=20)
	cenik_header_generator.glyphs.draw_slot_text(surface, "HI", slot, 30)
	bbox = surface.image.getbbox()
	assert bbox is not None
	assert bbox[0] >= 28
	assert bbox[1] >= 18
	assert bbox[2] <= 240
	assert bbox[3] <= 90
	colors = surface.image.getcolors(maxcolors=240 * 90)
	assert any(color == (255, 0, 0, 255) for _count, color in colors)


#============================================
def test_drawing_leaves_other_regions_untouched(tmp_path) -> None:
	fonts = cenik_header_generator.fonts.FontResolver([tmp_path])
	base = PIL.Image.new("RGBA", (300, 100), (0, 0, 255, 255))
	surface = RasterSurface.from_image(base, fonts)
	slot = build_slot(x=10, y=10)
	cenik_header_generator.glyphs.draw_slot_text(surface, "A", slot, 24)
	untouched = surface.image.crop((200, 0, 300, 100))
	assert untouched.tobytes() == base.crop((200, 0, 300, 100)).tobytes()
	assert surface.image.tobytes() != base.tobytes()
