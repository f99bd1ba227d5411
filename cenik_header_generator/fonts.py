"""
Font lookup and caching for slot text.
"""

# Standard Library
import pathlib

# PIP3 modules
import PIL.ImageFont

# local repo modules
import cenik_header_generator as chg
import cenik_header_generator.config


FONT_SEARCH_DIRS = chg.config.FONT_SEARCH_DIRS
FONT_EXTENSIONS = chg.config.FONT_EXTENSIONS
FALLBACK_FONT_REGULAR = chg.config.FALLBACK_FONT_REGULAR
FALLBACK_FONT_BOLD = chg.config.FALLBACK_FONT_BOLD
BOLD_WEIGHT_THRESHOLD = chg.config.BOLD_WEIGHT_THRESHOLD
DEFAULT_FONT_WEIGHT = chg.config.DEFAULT_FONT_WEIGHT

WEIGHT_NAMES = {
	100: ["thin", "hairline"],
	200: ["extralight", "ultralight"],
	300: ["light"],
	400: ["regular", "normal", "book", ""],
	500: ["medium"],
	600: ["semibold", "demibold"],
	700: ["bold"],
	800: ["extrabold", "ultrabold"],
	900: ["black", "heavy"],
}
WEIGHT_KEYWORDS = {
	"normal": 400,
	"regular": 400,
	"bold": 700,
	"bolder": 700,
	"lighter": 300,
}


#============================================
def normalize_font_weight(value: int | float | str | None) -> int:
	"""
	Normalize a CSS-style font weight to an int from 100 to 900.

	Args:
		value: Weight like 700, 700.0, "700", "bold" or None.

	Returns:
		Weight rounded to the nearest hundred.
	"""
	if value is None:
		return DEFAULT_FONT_WEIGHT
	if isinstance(value, str):
		text = value.strip().lower()
		if not text:
			return DEFAULT_FONT_WEIGHT
		if text in WEIGHT_KEYWORDS:
			return WEIGHT_KEYWORDS[text]
		if not text.isdigit():
			raise ValueError(f"Unknown font weight: {value!r}")
		value = int(text)
	if isinstance(value, float) and value.is_integer():
		value = int(value)
	if isinstance(value, bool) or not isinstance(value, int):
		raise ValueError(f"Unknown font weight: {value!r}")
	weight = (value + 50) // 100 * 100
	return min(900, max(100, weight))


#============================================
def normalize_font_key(value: str) -> str:
	"""
	Normalize a family name or file stem for matching.
	"""
	return "".join(char for char in value.lower() if char.isalnum())


#============================================
def candidate_stems(family: str, weight: int) -> list[str]:
	"""
	Build normalized file stems that may hold a family at a weight.

	Args:
		family: Font family name.
		weight: Normalized weight.

	Returns:
		Stems in preference order.
	"""
	base = normalize_font_key(family)
	stems: list[str] = []
	for suffix in WEIGHT_NAMES.get(weight, []):
		stems.append(base + suffix)
	if weight >= BOLD_WEIGHT_THRESHOLD and base + "bold" not in stems:
		stems.append(base + "bold")
	if base not in stems:
		stems.append(base)
	return stems


class FontResolver:
	"""
	Resolve (family, weight, size) requests to Pillow fonts.

	Font files are indexed once from the search directories. Loaded fonts
	are cached per (path, size) so repeated fit passes stay cheap.
	"""

	def __init__(self, search_dirs: list[str | pathlib.Path] | None = None):
		if search_dirs is None:
			search_dirs = list(FONT_SEARCH_DIRS)
		self.search_dirs = [pathlib.Path(entry) for entry in search_dirs]
		self._index: dict[str, pathlib.Path] | None = None
		self._path_cache: dict[tuple[str, int, str | None], pathlib.Path | None] = {}
		self._font_cache: dict[tuple[str, float], PIL.ImageFont.FreeTypeFont] = {}
		self.fallbacks: list[str] = []

	#============================================
	def build_index(self) -> dict[str, pathlib.Path]:
		"""
		Index font files by normalized stem.

		Returns:
			Mapping of normalized stem to font path. Earlier search
			directories win.
		"""
		if self._index is not None:
			return self._index
		index: dict[str, pathlib.Path] = {}
		for directory in self.search_dirs:
			if not directory.is_dir():
				continue
			paths = sorted(
				path for path in directory.rglob("*")
				if path.suffix.lower() in FONT_EXTENSIONS
			)
			for path in paths:
				index.setdefault(normalize_font_key(path.stem), path)
		self._index = index
		return index

	#============================================
	def resolve_path(
		self,
		family: str,
		weight: int,
		font_file: str | None = None,
	) -> pathlib.Path | None:
		"""
		Find the font file for a family and weight.

		Args:
			family: Font family name.
			weight: Normalized weight.
			font_file: Optional explicit font path from the template.

		Returns:
			Font path, or None when only Pillow's built-in font is left.
		"""
		key = (family, weight, font_file)
		if key in self._path_cache:
			return self._path_cache[key]

		path = None
		if font_file:
			explicit = pathlib.Path(font_file)
			if explicit.is_file():
				path = explicit
		index = self.build_index()
		if path is None:
			for stem in candidate_stems(family, weight):
				if stem in index:
					path = index[stem]
					break
		if path is None:
			if weight >= BOLD_WEIGHT_THRESHOLD:
				fallback_names = [FALLBACK_FONT_BOLD, FALLBACK_FONT_REGULAR]
			else:
				fallback_names = [FALLBACK_FONT_REGULAR]
			for name in fallback_names:
				stem = normalize_font_key(name)
				if stem in index:
					path = index[stem]
					break
			used = str(path) if path is not None else "built-in default"
			message = f"Font fallback: family={family} weight={weight} using {used}"
			self.fallbacks.append(message)
			print(message)

		self._path_cache[key] = path
		return path

	#============================================
	def get_font(
		self,
		family: str,
		weight: int,
		size: float,
		font_file: str | None = None,
	) -> PIL.ImageFont.FreeTypeFont:
		"""
		Load a font at a pixel size.

		Args:
			family: Font family name.
			weight: Normalized weight.
			size: Font size in pixels.
			font_file: Optional explicit font path.

		Returns:
			Pillow font object.
		"""
		path = self.resolve_path(family, weight, font_file)
		cache_key = (str(path) if path is not None else "", size)
		font = self._font_cache.get(cache_key)
		if font is not None:
			return font
		if path is None:
			font = PIL.ImageFont.load_default(size=size)
		else:
			font = PIL.ImageFont.truetype(str(path), size)
		self._font_cache[cache_key] = font
		return font
