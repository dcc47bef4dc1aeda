"""
Font loading for the two weights used on every page.
"""

# Standard Library
import dataclasses
import hashlib
import logging
import pathlib
import threading

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts

# local repo modules
import conference_documents.config


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_REGULAR = conference_documents.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = conference_documents.config.DEFAULT_FONT_BOLD

_FONT_CACHE: dict[tuple[str | None, str | None], "FontPair"] = {}
_FONT_CACHE_LOCK = threading.Lock()
# resolved font path -> registered font name
_TTF_NAMES: dict[str, str] = {}
_TTF_NAMES_LOCK = threading.Lock()


@dataclasses.dataclass(frozen=True)
class FontPair:
	regular: str
	bold: str


#============================================
def register_ttf(path: pathlib.Path) -> str:
	"""
	Register a TrueType font with ReportLab.

	The font is named after the file stem. A different file with a stem that
	is already registered gets a name suffixed with a hash of its path.

	Args:
		path: Font file path.

	Returns:
		Registered font name.
	"""
	path = pathlib.Path(path).resolve()
	key = str(path)
	with _TTF_NAMES_LOCK:
		if key in _TTF_NAMES:
			return _TTF_NAMES[key]
		font_name = path.stem
		if font_name in reportlab.pdfbase.pdfmetrics.getRegisteredFontNames():
			digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:8]
			font_name = f"{path.stem}-{digest}"
		LOGGER.info("Registering font %s from %s", font_name, path)
		font = reportlab.pdfbase.ttfonts.TTFont(font_name, key)
		reportlab.pdfbase.pdfmetrics.registerFont(font)
		_TTF_NAMES[key] = font_name
	return font_name


#============================================
def load_fonts(
	regular_path: pathlib.Path | None = None,
	bold_path: pathlib.Path | None = None,
) -> FontPair:
	"""
	Load the regular and bold weights once per process.

	Without paths the standard Helvetica pair is used; a missing bold path
	falls back to the regular weight.

	Args:
		regular_path: Optional TTF for the regular weight.
		bold_path: Optional TTF for the bold weight.

	Returns:
		FontPair of registered font names.
	"""
	key = (
		str(regular_path) if regular_path else None,
		str(bold_path) if bold_path else None,
	)
	with _FONT_CACHE_LOCK:
		cached = _FONT_CACHE.get(key)
		if cached is not None:
			return cached
		if regular_path is None:
			regular = DEFAULT_FONT_REGULAR
			bold = DEFAULT_FONT_BOLD
			if bold_path is not None:
				bold = register_ttf(bold_path)
		else:
			regular = register_ttf(regular_path)
			bold = register_ttf(bold_path) if bold_path is not None else regular
		pair = FontPair(regular=regular, bold=bold)
		_FONT_CACHE[key] = pair
		return pair
