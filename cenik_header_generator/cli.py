"""
CLI entry point for header generation.
"""

# Standard Library
import argparse
import pathlib

# local repo modules
import cenik_header_generator as chg
import cenik_header_generator.config
import cenik_header_generator.export
import cenik_header_generator.scaler
import cenik_header_generator.session
import cenik_header_generator.templates


GeneratorSession = chg.session.GeneratorSession
TemplateRegistryError = chg.templates.TemplateRegistryError
TemplateImageError = chg.templates.TemplateImageError

DEFAULT_REGISTRY_PATH = chg.config.DEFAULT_REGISTRY_PATH
DEFAULT_OUTPUT_DIR = chg.config.DEFAULT_OUTPUT_DIR
PREVIEW_CONTAINER_WIDTH = chg.config.PREVIEW_CONTAINER_WIDTH


#============================================
def parse_slot_assignment(value: str) -> tuple[str, str]:
	"""
	Parse a "slot=value" assignment.

	Args:
		value: Raw argument.

	Returns:
		Tuple of (slot name, value).
	"""
	slot_name, sep, slot_value = value.partition("=")
	if not sep or not slot_name.strip():
		raise argparse.ArgumentTypeError(f"expected SLOT=VALUE, got {value!r}")
	return (slot_name.strip(), slot_value)


#============================================
def build_live_values(args: argparse.Namespace) -> dict[str, str]:
	"""
	Collect live slot values from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Slot name to raw value.
	"""
	values: dict[str, str] = {}
	if args.version is not None:
		values["version"] = args.version
	if args.valid_from is not None:
		values["validFrom"] = args.valid_from
	for slot_name, slot_value in args.assignments:
		values[slot_name] = slot_value
	return values


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render version and validity text onto header templates.")

	input_group = parser.add_argument_group("Input")
	input_group.add_argument("-r", "--registry", dest="registry_path", default=DEFAULT_REGISTRY_PATH, help="Template registry JSON path.")
	input_group.add_argument("-a", "--asset-root", dest="asset_root", default=".", help="Directory template image paths are relative to.")
	input_group.add_argument("-t", "--template", dest="template_id", default=None, help="Template id.")
	input_group.add_argument("--version-text", "--version", dest="version", default=None, help="Version text.")
	input_group.add_argument("--valid-from", dest="valid_from", default=None, help="Validity date text.")
	input_group.add_argument(
		"-s",
		"--set",
		dest="assignments",
		action="append",
		type=parse_slot_assignment,
		default=[],
		metavar="SLOT=VALUE",
		help="Value for any slot; repeatable.",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output-dir", dest="output_dir", default=DEFAULT_OUTPUT_DIR, help="Directory for the PNG.")
	output_group.add_argument("-p", "--preview", dest="preview_path", default=None, help="Also write a scaled preview PNG here.")
	output_group.add_argument(
		"-w",
		"--preview-width",
		dest="preview_width",
		type=int,
		default=PREVIEW_CONTAINER_WIDTH,
		help="Preview container width in pixels.",
	)
	output_group.add_argument("-l", "--list", dest="list_templates", action="store_true", help="List templates and exit.")

	args = parser.parse_args(argv)
	return args


#============================================
def print_templates(session: GeneratorSession) -> None:
	for template in session.templates:
		slot_names = ", ".join(template.slot_names())
		print(f"{template.template_id}\t{template.name}\t{template.width} x {template.height} px\t[{slot_names}]")


#============================================
def run_generator(args: argparse.Namespace) -> int:
	"""
	Run one generation from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Process exit code.
	"""
	bounds = chg.scaler.compute_preview_bounds(args.preview_width)
	try:
		session = GeneratorSession.load(
			args.registry_path,
			args.asset_root,
			preview_bounds=bounds,
		)
	except (OSError, TemplateRegistryError) as error:
		print(f"Initialization error: {error}")
		return 1
	print(f"Templates loaded: {len(session.templates)}")

	if args.list_templates:
		print_templates(session)
		return 0
	if not args.template_id:
		print(f"Error: {chg.config.MISSING_TEMPLATE_ERROR}")
		return 1

	try:
		session.select_template(args.template_id)
	except KeyError as error:
		print(f"Error: {error.args[0]}")
		return 1
	except TemplateImageError as error:
		print(f"Template load error: {error}")
		return 1
	print(f"Template: {session.template.name} ({session.resolution_info})")

	for slot_name, slot_value in build_live_values(args).items():
		if session.template.get_slot(slot_name) is None:
			print(f"Warning: template has no slot '{slot_name}', value ignored")
			continue
		session.set_value(slot_name, slot_value)

	path, outcome = session.export(pathlib.Path(args.output_dir))
	if outcome is not None and outcome.warning:
		print(f"Warning: {outcome.warning}")
	if path is None:
		print(f"Error: {outcome.error}")
		return 1
	for slot_name, font_size in outcome.font_sizes.items():
		print(f"Slot {slot_name}: font size {font_size:g}px")

	if args.preview_path and session.preview is not None:
		chg.export.export_png(session.preview, pathlib.Path(args.preview_path))
	return 0


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	return run_generator(args)
