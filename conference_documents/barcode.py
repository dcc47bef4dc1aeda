"""
Code 128 barcode rasterization.
"""

# Standard Library
import io
import string

# PIP3 modules
import PIL.Image
import PIL.ImageDraw
import reportlab.graphics.barcode.code128

# local repo modules
import conference_documents.config


BARCODE_SCALE = conference_documents.config.BARCODE_SCALE
BARCODE_HEIGHT = conference_documents.config.BARCODE_HEIGHT
POINTS_PER_MM = conference_documents.config.POINTS_PER_MM


class BarcodeError(ValueError):
	"""
	Raised when a value cannot be encoded as a barcode.
	"""


#============================================
def encode_code128_modules(text: str) -> list[tuple[bool, int]]:
	"""
	Encode text into Code 128 bar and space widths.

	Args:
		text: Value to encode.

	Returns:
		List of (is_bar, width_in_modules) runs, starting with a bar.
	"""
	if not text:
		raise BarcodeError("cannot encode an empty value")
	symbol = reportlab.graphics.barcode.code128.Code128(text, quiet=0)
	symbol.validate()
	if not symbol.valid:
		raise BarcodeError(f"value {text!r} contains characters outside Code 128")
	try:
		symbol.encode()
		symbol.decompose()
	except (KeyError, IndexError, ValueError) as error:
		raise BarcodeError(f"value {text!r} cannot be encoded: {error}") from error

	runs: list[tuple[bool, int]] = []
	for char in symbol.decomposed:
		if char in string.ascii_uppercase:
			runs.append((True, ord(char) - ord("A") + 1))
		elif char in string.ascii_lowercase:
			runs.append((False, ord(char) - ord("a") + 1))
	return runs


#============================================
def rasterize_code128(
	text: str,
	scale: int = BARCODE_SCALE,
	height: float = BARCODE_HEIGHT,
) -> PIL.Image.Image:
	"""
	Render a Code 128 barcode onto an off-screen grayscale canvas.

	Args:
		text: Value to encode.
		scale: Pixels per module.
		height: Bar height in millimetres at one pixel per point.

	Returns:
		Barcode image, black bars on white.
	"""
	runs = encode_code128_modules(text)
	total_modules = sum(width for _is_bar, width in runs)
	image_width = total_modules * scale
	image_height = max(1, int(round(height * POINTS_PER_MM * scale)))
	image = PIL.Image.new("L", (image_width, image_height), 255)
	draw = PIL.ImageDraw.Draw(image)
	left = 0
	for is_bar, width in runs:
		run_width = width * scale
		if is_bar:
			draw.rectangle([left, 0, left + run_width - 1, image_height - 1], fill=0)
		left += run_width
	return image


#============================================
def render_code128_png(
	text: str,
	scale: int = BARCODE_SCALE,
	height: float = BARCODE_HEIGHT,
) -> bytes:
	"""
	Render a Code 128 barcode and encode it as PNG.

	Args:
		text: Value to encode.
		scale: Pixels per module.
		height: Bar height in millimetres.

	Returns:
		PNG bytes.
	"""
	image = rasterize_code128(text, scale=scale, height=height)
	buffer = io.BytesIO()
	image.save(buffer, format="PNG")
	return buffer.getvalue()
