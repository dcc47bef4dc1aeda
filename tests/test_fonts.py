import pathlib
import shutil

import pytest
import reportlab

import conference_documents.fonts


#============================================
def copy_vera(target: pathlib.Path) -> pathlib.Path:
	"""
	Copy the Vera font shipped with reportlab to a new path.
	"""
	source = pathlib.Path(reportlab.__file__).parent / "fonts" / "Vera.ttf"
	if not source.exists():
		pytest.skip("Vera.ttf not shipped with this reportlab build")
	target.parent.mkdir(parents=True, exist_ok=True)
	shutil.copyfile(source, target)
	return target


#============================================
def test_same_stem_fonts_get_distinct_names(tmp_path: pathlib.Path) -> None:
	"""
	Two font files sharing a stem register under different names.
	"""
	first_path = copy_vera(tmp_path / "first" / "BadgeSans.ttf")
	second_path = copy_vera(tmp_path / "second" / "BadgeSans.ttf")
	first = conference_documents.fonts.register_ttf(first_path)
	second = conference_documents.fonts.register_ttf(second_path)
	assert first != second
	assert first.startswith("BadgeSans")
	assert second.startswith("BadgeSans-")
	# the same file keeps its name
	assert conference_documents.fonts.register_ttf(tmp_path / "first" / ".." / "first" / "BadgeSans.ttf") == first


#============================================
def test_default_fonts_are_helvetica() -> None:
	"""
	Without font files the standard Helvetica pair is used.
	"""
	fonts = conference_documents.fonts.load_fonts()
	assert fonts.regular == "Helvetica"
	assert fonts.bold == "Helvetica-Bold"
