"""
Pytest configuration for local imports and shared template fixtures.
"""

# Standard Library
import json
import os
import pathlib
import sys

# PIP3 modules
import PIL.Image
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


BASE_COLOR = (20, 60, 120)
TEMPLATE_WIDTH = 480
TEMPLATE_HEIGHT = 140


#============================================
def build_template_record() -> dict:
	"""
	Build a registry record in the on-disk camelCase shape.
	"""
	return {
		"id": "header_a",
		"name": "Header A",
		"baseImage": "templates/header_a.png",
		"width": TEMPLATE_WIDTH,
		"height": TEMPLATE_HEIGHT,
		"version": {
			"prefix": "v",
			"x": 20,
			"y": 16,
			"fontFamily": "DejaVu Sans",
			"fontWeight": 700,
			"fontSize": 40,
			"minFontSize": 28,
			"maxWidth": 300,
			"color": "#ffffff",
			"label": "Version",
		},
		"validFrom": {
			"prefix": "Valid from ",
			"x": 20,
			"y": 84,
			"fontFamily": "DejaVu Sans",
			"fontWeight": "normal",
			"fontSize": 24,
			"maxWidth": 440,
			"color": "#ffcc00",
			"letterSpacing": 1,
			"label": "Valid from",
		},
	}


#============================================
@pytest.fixture
def asset_root(tmp_path: pathlib.Path) -> pathlib.Path:
	"""
	Asset directory holding the base image for "header_a".
	"""
	image_dir = tmp_path / "templates"
	image_dir.mkdir()
	image = PIL.Image.new("RGB", (TEMPLATE_WIDTH, TEMPLATE_HEIGHT), BASE_COLOR)
	image.save(image_dir / "header_a.png")
	return tmp_path


#============================================
@pytest.fixture
def registry_path(asset_root: pathlib.Path) -> pathlib.Path:
	"""
	Registry JSON with a single template.
	"""
	config_dir = asset_root / "config"
	config_dir.mkdir()
	path = config_dir / "templates.json"
	payload = {"templates": [build_template_record()]}
	path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
	return path
