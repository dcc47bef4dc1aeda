"""
Text measuring, glyph coverage checks and guarded text drawing.
"""

# Standard Library
import unicodedata

# PIP3 modules
import reportlab.lib.colors
import reportlab.pdfbase.pdfmetrics

# local repo modules
import conference_documents.config
import conference_documents.page
import conference_documents.records


PageContext = conference_documents.page.PageContext
TextAnchor = conference_documents.page.TextAnchor
WarningType = conference_documents.records.WarningType

OVERFLOW_SAFETY_MARGIN = conference_documents.config.OVERFLOW_SAFETY_MARGIN
OVERFLOW_WARNING_MESSAGE = conference_documents.config.OVERFLOW_WARNING_MESSAGE
TEXT_WARNING_MESSAGE = conference_documents.config.TEXT_WARNING_MESSAGE

# letters without a canonical decomposition onto a Latin base glyph
REPLACEMENTS = {
	"\u0141": "L",
	"\u0142": "l",
	"\u0110": "D",
	"\u0111": "d",
	"\u0126": "H",
	"\u0127": "h",
	"\u0131": "i",
	"\u0166": "T",
	"\u0167": "t",
	"\u0138": "k",
	"\u2212": "-",
	"\u2010": "-",
	"\u2011": "-",
	"\u202f": " ",
}


class GlyphCoverageError(ValueError):
	"""
	Raised when a font has no glyph for some characters of a string.
	"""

	def __init__(self, font_name: str, characters: list[str]) -> None:
		self.font_name = font_name
		self.characters = characters
		listed = ", ".join(f"{char!r} (U+{ord(char):04X})" for char in characters)
		super().__init__(f"font {font_name} cannot encode {listed}")


#============================================
def is_character_supported(font_name: str, char: str) -> bool:
	"""
	Check whether a font can render a single character.

	TrueType fonts are checked against their character map, standard Type 1
	fonts against their encoding.

	Args:
		font_name: Registered ReportLab font name.
		char: Single character.

	Returns:
		True if the font has a glyph for the character.
	"""
	font = reportlab.pdfbase.pdfmetrics.getFont(font_name)
	face = getattr(font, "face", None)
	char_map = getattr(face, "charToGlyph", None)
	if char_map:
		return ord(char) in char_map
	try:
		char.encode(font.encName)
	except UnicodeEncodeError:
		return False
	return True


#============================================
def find_unsupported_characters(font_name: str, text: str) -> list[str]:
	missing: list[str] = []
	for char in text:
		if char in missing:
			continue
		if not is_character_supported(font_name, char):
			missing.append(char)
	return missing


#============================================
def ensure_supported(font_name: str, text: str) -> None:
	missing = find_unsupported_characters(font_name, text)
	if missing:
		raise GlyphCoverageError(font_name, missing)


#============================================
def sanitize_text(text: str, font_name: str) -> str:
	"""
	Replace characters the font cannot render.

	Supported characters are kept as-is. Others go through the replacement
	table, then NFKD decomposition without combining marks; whatever the font
	still cannot render is dropped.

	Args:
		text: Input text.
		font_name: Registered ReportLab font name.

	Returns:
		Text drawable with the font.
	"""
	result: list[str] = []
	for char in text:
		if is_character_supported(font_name, char):
			result.append(char)
			continue
		candidate = REPLACEMENTS.get(char)
		if candidate is None:
			decomposed = unicodedata.normalize("NFKD", char)
			candidate = "".join(part for part in decomposed if not unicodedata.combining(part))
		for part in candidate:
			if is_character_supported(font_name, part):
				result.append(part)
	return "".join(result)


#============================================
def measure_width(font_name: str, text: str, size: float) -> float:
	"""
	Measure text width, sanitizing first if the font lacks glyphs.

	Args:
		font_name: Registered ReportLab font name.
		text: Text to measure.
		size: Font size in points.

	Returns:
		Width in points.
	"""
	try:
		ensure_supported(font_name, text)
	except GlyphCoverageError:
		text = sanitize_text(text, font_name)
	return reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, size)


#============================================
def is_overflowing(page_width: float, text_width: float) -> bool:
	return page_width - OVERFLOW_SAFETY_MARGIN < text_width


#============================================
def place_text(
	ctx: PageContext,
	font_name: str,
	size: float,
	text: str,
	text_width: float,
	anchor: TextAnchor,
	color: reportlab.lib.colors.Color,
) -> None:
	"""
	Draw one copy of a centred text line.

	Args:
		ctx: Page context.
		font_name: Registered ReportLab font name.
		size: Font size in points.
		text: Text to draw.
		text_width: Measured width of the text.
		anchor: Centre and baseline, with optional rotation.
		color: Fill color.
	"""
	pdf = ctx.pdf
	pdf.saveState()
	pdf.setFont(font_name, size)
	pdf.setFillColor(color)
	pdf.translate(anchor.center_x, anchor.baseline_y)
	if anchor.rotation:
		pdf.rotate(anchor.rotation)
	pdf.drawString(-text_width / 2.0, 0, text)
	pdf.restoreState()


#============================================
def draw_text(
	ctx: PageContext,
	font_name: str,
	text: str,
	anchors: list[TextAnchor],
	size: float,
	path: tuple[str, ...],
	color: reportlab.lib.colors.Color | None = None,
) -> str:
	"""
	Draw a text line centred at each anchor, recording advisory warnings.

	Unsupported glyphs raise one TEXT warning and the sanitized text is drawn
	instead. Text wider than the page raises one OVERFLOW warning and is drawn
	anyway. Warnings are raised once per call, however many anchors.

	Args:
		ctx: Page context.
		font_name: Registered ReportLab font name.
		text: Text to draw.
		anchors: One anchor per copy of the text.
		size: Font size in points.
		path: Warning path for the data field.
		color: Fill color, black by default.

	Returns:
		The text actually drawn.
	"""
	if color is None:
		color = reportlab.lib.colors.black
	drawn = text
	try:
		ensure_supported(font_name, text)
	except GlyphCoverageError as error:
		ctx.run.warn(WarningType.TEXT, TEXT_WARNING_MESSAGE, path, details=str(error))
		drawn = sanitize_text(text, font_name)

	text_width = reportlab.pdfbase.pdfmetrics.stringWidth(drawn, font_name, size)
	if is_overflowing(ctx.width, text_width):
		ctx.run.warn(WarningType.OVERFLOW, OVERFLOW_WARNING_MESSAGE, path, details=drawn)

	for anchor in anchors:
		place_text(ctx, font_name, size, drawn, text_width, anchor, color)
	return drawn
