"""
Export checks, file naming and PNG output.
"""

# Standard Library
import pathlib
import string
import typing

# local repo modules
import cenik_header_generator as chg
import cenik_header_generator.config
import cenik_header_generator.surface


Template = chg.config.Template
RasterSurface = chg.surface.RasterSurface
MISSING_TEMPLATE_ERROR = chg.config.MISSING_TEMPLATE_ERROR
MISSING_VALUE_ERROR = chg.config.MISSING_VALUE_ERROR

FILENAME_SAFE_CHARS = set(string.ascii_letters + string.digits + "_-")


#============================================
def validate_inputs(
	template: Template | None,
	live_values: typing.Mapping[str, str],
) -> tuple[bool, str | None]:
	"""
	Check that export has everything it needs.

	Args:
		template: Selected template or None.
		live_values: Slot name to trimmed value.

	Returns:
		Tuple of (valid, error message).
	"""
	if template is None:
		return (False, MISSING_TEMPLATE_ERROR)
	for slot_name, slot in template.slots:
		if not slot.required:
			continue
		if not live_values.get(slot_name):
			label = chg.config.slot_label(slot_name, slot)
			return (False, MISSING_VALUE_ERROR.format(label=label))
	return (True, None)


#============================================
def sanitize_filename_token(value: str) -> str:
	"""
	Replace every character outside [A-Za-z0-9_-] with an underscore.

	Args:
		value: Input string.

	Returns:
		Sanitized string.
	"""
	result: list[str] = []
	for char in value:
		if char in FILENAME_SAFE_CHARS:
			result.append(char)
		else:
			result.append("_")
	return "".join(result)


#============================================
def build_output_filename(
	template: Template,
	live_values: typing.Mapping[str, str],
) -> str:
	"""
	Build the export filename from the template id and version value.

	Args:
		template: Template definition.
		live_values: Slot name to value.

	Returns:
		Filename like "header_a_2_3_1.png".
	"""
	token = sanitize_filename_token(live_values.get(template.filename_slot) or "")
	return f"{template.template_id}_{token}.png"


#============================================
def export_png(surface: RasterSurface, output_path: pathlib.Path) -> pathlib.Path:
	"""
	Write the surface to disk as PNG.

	Args:
		surface: Full resolution surface.
		output_path: Target file path.

	Returns:
		Written path.
	"""
	output_path = pathlib.Path(output_path)
	output_path.parent.mkdir(parents=True, exist_ok=True)
	output_path.write_bytes(surface.export_png())
	print(f"PNG written: {output_path} ({surface.width} x {surface.height} px)")
	return output_path
