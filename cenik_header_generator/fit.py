"""
Font size fitting for slot text.
"""

# Standard Library
import typing

# local repo modules
import cenik_header_generator as chg
import cenik_header_generator.config


TextSlotConfig = chg.config.TextSlotConfig
FitResult = chg.config.FitResult
FONT_SIZE_STEP = chg.config.FONT_SIZE_STEP


class TextMeasurer(typing.Protocol):
	def set_font(
		self,
		family: str,
		weight: int,
		size: float,
		font_file: str | None = None,
	) -> None:
		...

	def measure_text(self, text: str) -> float:
		...


#============================================
def measure_at_size(
	measurer: TextMeasurer,
	text: str,
	slot: TextSlotConfig,
	font_size: float,
) -> float:
	"""
	Measure text with the slot font at a given size.

	Args:
		measurer: Surface or other width measuring object.
		text: Text to measure.
		slot: Slot configuration.
		font_size: Font size in pixels.

	Returns:
		Rendered width in pixels.
	"""
	measurer.set_font(slot.font_family, slot.font_weight, font_size, slot.font_file)
	return measurer.measure_text(text)


#============================================
def fit_font_size(
	measurer: TextMeasurer,
	text: str,
	slot: TextSlotConfig,
) -> FitResult:
	"""
	Find the largest font size that keeps text within the slot width.

	Sizes are tried from the nominal size downward in steps of one pixel.
	The minimum size is tried and accepted if it fits; nothing smaller is
	tried. The measurer's active font is left at the last size measured.

	Args:
		measurer: Surface or other width measuring object.
		text: Full text including the slot prefix.
		slot: Slot configuration.

	Returns:
		FitResult with the chosen size, or an unfit result.
	"""
	font_size = slot.font_size
	if not text:
		return FitResult(font_size=font_size, shrunk=False, fits=True)

	min_font_size = slot.effective_min_font_size
	text_width = measure_at_size(measurer, text, slot, font_size)
	if text_width <= slot.max_width:
		return FitResult(font_size=font_size, shrunk=False, fits=True)

	while font_size - FONT_SIZE_STEP >= min_font_size:
		font_size -= FONT_SIZE_STEP
		text_width = measure_at_size(measurer, text, slot, font_size)
		if text_width <= slot.max_width:
			return FitResult(font_size=font_size, shrunk=True, fits=True)

	# fractional minimum sits between whole steps
	if font_size > min_font_size:
		text_width = measure_at_size(measurer, text, slot, min_font_size)
		if text_width <= slot.max_width:
			return FitResult(font_size=min_font_size, shrunk=True, fits=True)

	return FitResult(font_size=None, shrunk=False, fits=False)
