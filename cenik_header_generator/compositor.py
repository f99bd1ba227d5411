"""
Full resolution compositing of a template and its slot text.
"""

# Standard Library
import typing

# PIP3 modules
import PIL.Image

# local repo modules
import cenik_header_generator as chg
import cenik_header_generator.config
import cenik_header_generator.fit
import cenik_header_generator.glyphs
import cenik_header_generator.surface


Template = chg.config.Template
RenderOutcome = chg.config.RenderOutcome
RasterSurface = chg.surface.RasterSurface
SHRINK_WARNING = chg.config.SHRINK_WARNING
TOO_LONG_ERROR = chg.config.TOO_LONG_ERROR


#============================================
def render_full_resolution(
	surface: RasterSurface,
	template: Template,
	base_image: PIL.Image.Image,
	live_values: typing.Mapping[str, str],
) -> RenderOutcome:
	"""
	Composite the base image and every filled slot onto the surface.

	The surface is cleared first, so repeating the call with the same
	inputs reproduces the same pixels. Slots run in template order. A slot
	whose text cannot fit at its minimum size stops the pass; slots drawn
	before it stay on the surface but the pass is reported as failed.

	Args:
		surface: Full resolution surface sized to the template.
		template: Template definition.
		base_image: Decoded base image.
		live_values: Slot name to value. Missing or empty values omit the slot.

	Returns:
		RenderOutcome for the pass.
	"""
	surface.clear()
	surface.draw_image(base_image, (0, 0, template.width, template.height))

	outcome = RenderOutcome(ok=True)
	has_warning = False
	for slot_name, slot in template.slots:
		value = live_values.get(slot_name) or ""
		if not value:
			continue
		text = slot.prefix + value
		result = chg.fit.fit_font_size(surface, text, slot)
		if not result.fits:
			label = chg.config.slot_label(slot_name, slot)
			outcome.ok = False
			outcome.error = TOO_LONG_ERROR.format(label=label)
			outcome.failed_slot = slot_name
			return outcome
		if result.shrunk:
			has_warning = True
		chg.glyphs.draw_slot_text(surface, text, slot, result.font_size)
		outcome.font_sizes[slot_name] = result.font_size

	if has_warning:
		outcome.warning = SHRINK_WARNING
	return outcome
