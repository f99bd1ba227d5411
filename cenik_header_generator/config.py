"""
Shared configuration and constants.
"""

import dataclasses


DEFAULT_REGISTRY_PATH = "config/templates.json"
DEFAULT_OUTPUT_DIR = "output"

DEFAULT_MIN_FONT_RATIO = 0.7
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_WEIGHT = 400
BOLD_WEIGHT_THRESHOLD = 600
FONT_SIZE_STEP = 1
FILENAME_SLOT = "version"

FONT_SEARCH_DIRS = [
	"fonts",
	"/usr/share/fonts/truetype/dejavu",
	"/usr/share/fonts/TTF",
	"/usr/share/fonts/truetype",
	"/usr/share/fonts",
	"/Library/Fonts",
	"C:/Windows/Fonts",
]
FONT_EXTENSIONS = (".ttf", ".otf", ".ttc")
FALLBACK_FONT_REGULAR = "DejaVuSans"
FALLBACK_FONT_BOLD = "DejaVuSans-Bold"

PREVIEW_CONTAINER_WIDTH = 848
PREVIEW_PADDING = 48
PREVIEW_MAX_HEIGHT = 600
RENDER_DEBOUNCE_SECONDS = 0.150

SHRINK_WARNING = "Text was shrunk to fit the available space."
TOO_LONG_ERROR = "{label} is too long. Shorten the text."
MISSING_TEMPLATE_ERROR = "Select a template."
MISSING_VALUE_ERROR = "Enter a value for {label}."


@dataclasses.dataclass(frozen=True)
class TextSlotConfig:
	"""
	One positioned region of a template that receives dynamic text.

	An empty live value omits the slot entirely. Slots are evaluated and
	drawn in the order the template defines them.
	"""
	x: float
	y: float
	font_family: str
	font_size: float
	max_width: float
	prefix: str = ""
	font_weight: int = DEFAULT_FONT_WEIGHT
	min_font_size: float | None = None
	color: str = DEFAULT_TEXT_COLOR
	letter_spacing: float = 0.0
	label: str = ""
	required: bool = True
	font_file: str | None = None

	@property
	def effective_min_font_size(self) -> float:
		if self.min_font_size is None:
			return round(self.font_size * DEFAULT_MIN_FONT_RATIO, 6)
		return self.min_font_size


@dataclasses.dataclass(frozen=True)
class Template:
	template_id: str
	name: str
	base_image: str
	width: int
	height: int
	slots: tuple[tuple[str, TextSlotConfig], ...]
	filename_slot: str = FILENAME_SLOT

	def slot_names(self) -> list[str]:
		return [name for name, _slot in self.slots]

	def get_slot(self, slot_name: str) -> TextSlotConfig | None:
		for name, slot in self.slots:
			if name == slot_name:
				return slot
		return None


@dataclasses.dataclass(frozen=True)
class FitResult:
	font_size: float | None
	shrunk: bool
	fits: bool


@dataclasses.dataclass
class RenderOutcome:
	ok: bool
	warning: str | None = None
	error: str | None = None
	failed_slot: str | None = None
	font_sizes: dict[str, float] = dataclasses.field(default_factory=dict)


#============================================
def slot_label(slot_name: str, slot: TextSlotConfig) -> str:
	"""
	Get the human field name used in messages for a slot.

	Args:
		slot_name: Slot key in the template.
		slot: Slot configuration.

	Returns:
		Label text.
	"""
	if slot.label:
		return slot.label
	return slot_name
