"""
Pytest configuration for local imports and shared asset fixtures.
"""

# Standard Library
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


FLAG_COLORS = {
	"de": (220, 0, 0),
	"fr": (0, 0, 200),
}
LOGO_NAMES = ("un", "mun-sh", "munbw", "dmun", "small_dmun")


#============================================
def write_image(path: pathlib.Path, size: tuple[int, int], color: tuple[int, int, int], image_format: str = "PNG") -> None:
	"""
	Write a solid color image.

	Args:
		path: Output path.
		size: Pixel size.
		color: RGB fill.
		image_format: Pillow format name.
	"""
	path.parent.mkdir(parents=True, exist_ok=True)
	PIL.Image.new("RGB", size, color).save(path, format=image_format)


#============================================
@pytest.fixture
def asset_root(tmp_path: pathlib.Path) -> pathlib.Path:
	"""
	Asset directory with two flags, every brand logo and one upload.
	"""
	root = tmp_path / "assets"
	for code, color in FLAG_COLORS.items():
		write_image(root / "flags" / f"{code}.png", (40, 30), color)
	for name in LOGO_NAMES:
		write_image(root / "logo" / "color" / f"{name}.png", (20, 20), (0, 120, 0))
	write_image(root / "uploads" / "portrait.jpg", (40, 30), (0, 160, 0), image_format="JPEG")
	(root / "uploads" / "notes.txt").write_text("not an image", encoding="utf-8")
	return root
