"""
Generator session state and debounced render scheduling.
"""

# Standard Library
import pathlib
import time
import typing

# PIP3 modules
import PIL.Image

# local repo modules
import cenik_header_generator as chg
import cenik_header_generator.compositor
import cenik_header_generator.config
import cenik_header_generator.export
import cenik_header_generator.fonts
import cenik_header_generator.scaler
import cenik_header_generator.surface
import cenik_header_generator.templates


Template = chg.config.Template
RenderOutcome = chg.config.RenderOutcome
RasterSurface = chg.surface.RasterSurface
FontResolver = chg.fonts.FontResolver
FONT_SEARCH_DIRS = chg.config.FONT_SEARCH_DIRS
RENDER_DEBOUNCE_SECONDS = chg.config.RENDER_DEBOUNCE_SECONDS


class RenderScheduler:
	"""
	Single threaded debounce for render requests.

	Each request pushes the deadline out again, so a burst of edits
	collapses into one render. The owner calls poll() from its loop.
	"""

	def __init__(
		self,
		delay: float = RENDER_DEBOUNCE_SECONDS,
		clock: typing.Callable[[], float] = time.monotonic,
	):
		self.delay = delay
		self.clock = clock
		self._due: float | None = None

	@property
	def pending(self) -> bool:
		return self._due is not None

	def request(self) -> None:
		self._due = self.clock() + self.delay

	def cancel(self) -> None:
		self._due = None

	#============================================
	def poll(self) -> bool:
		"""
		Report whether a scheduled render is due, consuming it.

		Returns:
			True once per due request.
		"""
		if self._due is None:
			return False
		if self.clock() < self._due:
			return False
		self._due = None
		return True


class GeneratorSession:
	"""
	State for one user working with the generator.

	Owns the full resolution surface and the preview surface; both are only
	changed through render().
	"""

	def __init__(
		self,
		templates: list[Template],
		asset_root: pathlib.Path | str = ".",
		preview_bounds: tuple[int, int] | None = None,
		scheduler: RenderScheduler | None = None,
		fonts: FontResolver | None = None,
	):
		self.templates = templates
		self.asset_root = pathlib.Path(asset_root)
		if preview_bounds is None:
			preview_bounds = chg.scaler.compute_preview_bounds()
		self.preview_bounds = preview_bounds
		self.scheduler = scheduler if scheduler is not None else RenderScheduler()
		if fonts is None:
			search_dirs = [self.asset_root / "fonts"] + list(FONT_SEARCH_DIRS)
			fonts = FontResolver(search_dirs)
		self.fonts = fonts
		self.template: Template | None = None
		self.base_image: PIL.Image.Image | None = None
		self.values: dict[str, str] = {}
		self.surface: RasterSurface | None = None
		self.preview: RasterSurface | None = None
		self.outcome: RenderOutcome | None = None

	#============================================
	@classmethod
	def load(
		cls,
		registry_path: pathlib.Path | str,
		asset_root: pathlib.Path | str | None = None,
		**kwargs,
	) -> "GeneratorSession":
		"""
		Create a session from a registry file.

		Args:
			registry_path: Template registry JSON path.
			asset_root: Base directory for template images; defaults to
				the current directory.

		Returns:
			GeneratorSession.
		"""
		templates = chg.templates.load_template_registry(pathlib.Path(registry_path))
		if asset_root is None:
			asset_root = pathlib.Path.cwd()
		return cls(templates, asset_root, **kwargs)

	@property
	def resolution_info(self) -> str:
		if self.template is None:
			return ""
		return f"{self.template.width} x {self.template.height} px"

	#============================================
	def select_template(self, template_id: str | None) -> RenderOutcome | None:
		"""
		Switch to a template and render it.

		An empty id deselects. A missing base image raises and leaves the
		session without a template.

		Args:
			template_id: Template id or None.

		Returns:
			Outcome of the first render, or None when deselected.
		"""
		self.scheduler.cancel()
		self.template = None
		self.base_image = None
		self.surface = None
		self.preview = None
		self.outcome = None
		if not template_id:
			return None
		template = chg.templates.find_template(self.templates, template_id)
		self.base_image = chg.templates.load_base_image(template, self.asset_root)
		self.template = template
		self.surface = RasterSurface(template.width, template.height, self.fonts)
		return self.render()

	#============================================
	def set_value(self, slot_name: str, value: str) -> None:
		"""
		Store a trimmed live value and schedule a render.
		"""
		self.values[slot_name] = (value or "").strip()
		self.scheduler.request()

	#============================================
	def poll(self) -> RenderOutcome | None:
		"""
		Run the scheduled render if it is due.

		Returns:
			Outcome when a render ran, otherwise None.
		"""
		if not self.scheduler.poll():
			return None
		return self.render()

	#============================================
	def render(self) -> RenderOutcome | None:
		"""
		Composite at full resolution and rebuild the preview.

		The preview is only replaced after a successful pass.

		Returns:
			RenderOutcome, or None when no template is selected.
		"""
		self.scheduler.cancel()
		if self.template is None or self.base_image is None or self.surface is None:
			return None
		outcome = chg.compositor.render_full_resolution(
			self.surface,
			self.template,
			self.base_image,
			self.values,
		)
		self.outcome = outcome
		if outcome.ok:
			max_width, max_height = self.preview_bounds
			self.preview = chg.scaler.scale_to_fit(self.surface, max_width, max_height)
		return outcome

	#============================================
	def can_export(self) -> bool:
		valid, _message = chg.export.validate_inputs(self.template, self.values)
		return valid and self.outcome is not None and self.outcome.ok

	#============================================
	def export(self, output_dir: pathlib.Path | str) -> tuple[pathlib.Path | None, RenderOutcome]:
		"""
		Render a final pass and write the PNG.

		Args:
			output_dir: Directory for the PNG.

		Returns:
			Tuple of (written path or None, outcome).
		"""
		valid, message = chg.export.validate_inputs(self.template, self.values)
		if not valid:
			return (None, RenderOutcome(ok=False, error=message))
		outcome = self.render()
		if outcome is None or not outcome.ok:
			return (None, outcome)
		filename = chg.export.build_output_filename(self.template, self.values)
		path = chg.export.export_png(self.surface, pathlib.Path(output_dir) / filename)
		return (path, outcome)
