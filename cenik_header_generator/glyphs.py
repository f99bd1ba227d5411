"""
Glyph drawing for fitted slot text.
"""

# local repo modules
import cenik_header_generator as chg
import cenik_header_generator.config
import cenik_header_generator.surface


TextSlotConfig = chg.config.TextSlotConfig
RasterSurface = chg.surface.RasterSurface


#============================================
def draw_text_with_spacing(
	surface: RasterSurface,
	text: str,
	x: float,
	y: float,
	spacing: float,
) -> float:
	"""
	Draw text one character at a time with fixed extra spacing.

	Kerning between characters is lost; the pen advances by each
	character's own width plus the spacing.

	Args:
		surface: Target surface with font and fill already set.
		text: Text to draw.
		x: Pen start x.
		y: Top y.
		spacing: Extra pixels after each character.

	Returns:
		Final pen x position.
	"""
	current_x = x
	for char in text:
		surface.fill_text(char, current_x, y)
		current_x += surface.measure_text(char) + spacing
	return current_x


#============================================
def draw_slot_text(
	surface: RasterSurface,
	text: str,
	slot: TextSlotConfig,
	font_size: float,
) -> None:
	"""
	Draw slot text at its fitted size.

	Args:
		surface: Target surface.
		text: Full text including the slot prefix.
		slot: Slot configuration.
		font_size: Fitted font size.
	"""
	surface.set_font(slot.font_family, slot.font_weight, font_size, slot.font_file)
	surface.set_fill(slot.color)
	if slot.letter_spacing:
		draw_text_with_spacing(surface, text, slot.x, slot.y, slot.letter_spacing)
	else:
		surface.fill_text(text, slot.x, slot.y)
