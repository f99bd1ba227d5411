"""
Template registry loading and validation.
"""

# Standard Library
import json
import pathlib

# PIP3 modules
import PIL.Image
import PIL.ImageColor

# local repo modules
import cenik_header_generator as chg
import cenik_header_generator.config
import cenik_header_generator.fonts


Template = chg.config.Template
TextSlotConfig = chg.config.TextSlotConfig
DEFAULT_TEXT_COLOR = chg.config.DEFAULT_TEXT_COLOR
FILENAME_SLOT = chg.config.FILENAME_SLOT

# template records in older registries carry these slots as top level keys
LEGACY_SLOT_KEYS = ("version", "validFrom")


class TemplateRegistryError(ValueError):
	pass


class TemplateImageError(OSError):
	pass


#============================================
def require_number(record: dict, key: str, context: str) -> float:
	"""
	Read a required numeric field.

	Args:
		record: JSON object.
		key: Field name.
		context: Location used in error messages.

	Returns:
		Field value.
	"""
	if key not in record:
		raise TemplateRegistryError(f"{context}: missing '{key}'")
	value = record[key]
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		raise TemplateRegistryError(f"{context}: '{key}' must be a number, got {value!r}")
	return value


#============================================
def parse_slot(record: dict, slot_name: str, context: str) -> TextSlotConfig:
	"""
	Parse one text slot record.

	Args:
		record: Slot JSON object using camelCase keys.
		slot_name: Slot key.
		context: Location used in error messages.

	Returns:
		TextSlotConfig.
	"""
	if not isinstance(record, dict):
		raise TemplateRegistryError(f"{context}: slot must be an object")
	font_size = require_number(record, "fontSize", context)
	max_width = require_number(record, "maxWidth", context)
	if font_size <= 0:
		raise TemplateRegistryError(f"{context}: 'fontSize' must be positive")
	if max_width <= 0:
		raise TemplateRegistryError(f"{context}: 'maxWidth' must be positive")

	min_font_size = record.get("minFontSize")
	if min_font_size is not None:
		min_font_size = require_number(record, "minFontSize", context)
		if min_font_size <= 0 or min_font_size > font_size:
			raise TemplateRegistryError(
				f"{context}: 'minFontSize' must be between 0 and fontSize ({font_size})"
			)

	color = record.get("color") or DEFAULT_TEXT_COLOR
	try:
		PIL.ImageColor.getrgb(color)
	except ValueError as error:
		raise TemplateRegistryError(f"{context}: bad color {color!r}") from error

	try:
		font_weight = chg.fonts.normalize_font_weight(record.get("fontWeight"))
	except ValueError as error:
		raise TemplateRegistryError(f"{context}: {error}") from error

	letter_spacing = record.get("letterSpacing") or 0.0
	if isinstance(letter_spacing, bool) or not isinstance(letter_spacing, (int, float)):
		raise TemplateRegistryError(f"{context}: 'letterSpacing' must be a number")

	font_family = record.get("fontFamily")
	if not font_family or not isinstance(font_family, str):
		raise TemplateRegistryError(f"{context}: missing 'fontFamily'")

	return TextSlotConfig(
		x=require_number(record, "x", context),
		y=require_number(record, "y", context),
		font_family=font_family,
		font_size=font_size,
		max_width=max_width,
		prefix=str(record.get("prefix") or ""),
		font_weight=font_weight,
		min_font_size=min_font_size,
		color=color,
		letter_spacing=letter_spacing,
		label=str(record.get("label") or slot_name),
		required=bool(record.get("required", True)),
		font_file=record.get("fontFile"),
	)


#============================================
def parse_template(record: dict, index: int) -> Template:
	"""
	Parse one template record.

	Args:
		record: Template JSON object.
		index: Position in the registry, for error messages.

	Returns:
		Template.
	"""
	if not isinstance(record, dict):
		raise TemplateRegistryError(f"template #{index}: record must be an object")
	template_id = record.get("id")
	if not template_id or not isinstance(template_id, str):
		raise TemplateRegistryError(f"template #{index}: missing 'id'")
	context = f"template '{template_id}'"

	base_image = record.get("baseImage")
	if not base_image or not isinstance(base_image, str):
		raise TemplateRegistryError(f"{context}: missing 'baseImage'")

	width = require_number(record, "width", context)
	height = require_number(record, "height", context)
	if int(width) != width or int(height) != height or width <= 0 or height <= 0:
		raise TemplateRegistryError(f"{context}: width and height must be positive integers")

	slot_records = record.get("slots")
	if slot_records is None:
		slot_records = {key: record[key] for key in LEGACY_SLOT_KEYS if key in record}
	if not isinstance(slot_records, dict):
		raise TemplateRegistryError(f"{context}: 'slots' must be an object")

	slots: list[tuple[str, TextSlotConfig]] = []
	for slot_name, slot_record in slot_records.items():
		slot = parse_slot(slot_record, slot_name, f"{context} slot '{slot_name}'")
		slots.append((slot_name, slot))

	return Template(
		template_id=template_id,
		name=str(record.get("name") or template_id),
		base_image=base_image,
		width=int(width),
		height=int(height),
		slots=tuple(slots),
		filename_slot=str(record.get("filenameSlot") or FILENAME_SLOT),
	)


#============================================
def parse_template_registry(data: dict) -> list[Template]:
	"""
	Parse a decoded registry document.

	Args:
		data: Object with a "templates" list.

	Returns:
		Templates in file order.
	"""
	if not isinstance(data, dict) or not isinstance(data.get("templates"), list):
		raise TemplateRegistryError("registry must be an object with a 'templates' list")
	templates: list[Template] = []
	seen: set[str] = set()
	for index, record in enumerate(data["templates"]):
		template = parse_template(record, index)
		if template.template_id in seen:
			raise TemplateRegistryError(f"duplicate template id '{template.template_id}'")
		seen.add(template.template_id)
		templates.append(template)
	return templates


#============================================
def load_template_registry(path: pathlib.Path) -> list[Template]:
	"""
	Load the template registry JSON file.

	Args:
		path: Registry path.

	Returns:
		Templates in file order.
	"""
	path = pathlib.Path(path)
	if not path.is_file():
		raise FileNotFoundError(f"Template registry not found: {path}")
	with path.open("r", encoding="utf-8") as handle:
		try:
			data = json.load(handle)
		except json.JSONDecodeError as error:
			raise TemplateRegistryError(f"Template registry is not valid JSON: {path}: {error}") from error
	return parse_template_registry(data)


#============================================
def find_template(templates: list[Template], template_id: str) -> Template:
	"""
	Look up a template by id.

	Args:
		templates: Loaded templates.
		template_id: Template id.

	Returns:
		Matching template.
	"""
	for template in templates:
		if template.template_id == template_id:
			return template
	raise KeyError(f"Unknown template: {template_id}")


#============================================
def resolve_base_image_path(template: Template, asset_root: pathlib.Path) -> pathlib.Path:
	path = pathlib.Path(template.base_image)
	if path.is_absolute():
		return path
	return pathlib.Path(asset_root) / path


#============================================
def load_base_image(template: Template, asset_root: pathlib.Path) -> PIL.Image.Image:
	"""
	Decode the base image for a template.

	Args:
		template: Template definition.
		asset_root: Directory relative base image paths resolve against.

	Returns:
		RGBA image, fully loaded.
	"""
	path = resolve_base_image_path(template, asset_root)
	if not path.is_file():
		raise TemplateImageError(f"Base template image does not exist: {template.base_image}")
	try:
		with PIL.Image.open(path) as image:
			image.load()
			return image.convert("RGBA")
	except (OSError, PIL.Image.DecompressionBombError) as error:
		raise TemplateImageError(f"Base template image cannot be read: {template.base_image}: {error}") from error
