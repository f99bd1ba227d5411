import pathlib

import pytest

import cenik_header_generator.fonts


FontResolver = cenik_header_generator.fonts.FontResolver
normalize_font_weight = cenik_header_generator.fonts.normalize_font_weight


#============================================
@pytest.mark.parametrize(
	"value, expected",
	[
		(None, 400),
		("", 400),
		("normal", 400),
		("Bold", 700),
		("600", 600),
		(650, 700),
		(1000, 900),
		(40, 100),
		(700.0, 700),
	],
)
def test_normalize_font_weight(value, expected) -> None:
	assert normalize_font_weight(value) == expected


#============================================
def test_normalize_font_weight_rejects_unknown() -> None:
	with pytest.raises(ValueError):
		normalize_font_weight("chunky")
	with pytest.raises(ValueError):
		normalize_font_weight(True)
	with pytest.raises(ValueError):
		normalize_font_weight(650.5)


#============================================
def test_candidate_stems_prefer_weight_name() -> None:
	stems = cenik_header_generator.fonts.candidate_stems("Open Sans", 600)
	assert stems[0] == "opensanssemibold"
	assert "opensansbold" in stems
	assert stems[-1] == "opensans"


#============================================
def test_resolver_matches_family_and_weight(tmp_path: pathlib.Path) -> None:
	for name in ["Inter-Regular.ttf", "Inter-Bold.ttf", "Inter Medium.otf"]:
		(tmp_path / name).write_bytes(b"")
	resolver = FontResolver([tmp_path])
	assert resolver.resolve_path("Inter", 700).name == "Inter-Bold.ttf"
	assert resolver.resolve_path("Inter", 400).name == "Inter-Regular.ttf"
	assert resolver.resolve_path("Inter", 500).name == "Inter Medium.otf"
	assert resolver.fallbacks == []


#============================================
def test_resolver_prefers_earlier_directories(tmp_path: pathlib.Path) -> None:
	first = tmp_path / "first"
	second = tmp_path / "second"
	first.mkdir()
	second.mkdir()
	(first / "Brand-Bold.ttf").write_bytes(b"")
	(second / "Brand-Bold.ttf").write_bytes(b"")
	resolver = FontResolver([first, second])
	assert resolver.resolve_path("Brand", 700).parent == first


#============================================
def test_explicit_font_file_wins(tmp_path: pathlib.Path) -> None:
	explicit = tmp_path / "custom.ttf"
	explicit.write_bytes(b"")
	resolver = FontResolver([tmp_path / "empty"])
	assert resolver.resolve_path("Anything", 400, str(explicit)) == explicit


#============================================
def test_missing_family_falls_back_to_builtin(tmp_path: pathlib.Path) -> None:
	resolver = FontResolver([tmp_path])
	assert resolver.resolve_path("Nope Sans", 700) is None
	assert len(resolver.fallbacks) == 1
	# repeat lookups are cached and reported once
	resolver.resolve_path("Nope Sans", 700)
	assert len(resolver.fallbacks) == 1

	small = resolver.get_font("Nope Sans", 700, 12)
	large = resolver.get_font("Nope Sans", 700, 36)
	assert resolver.get_font("Nope Sans", 700, 12) is small
	assert large.getlength("Header") > small.getlength("Header")
