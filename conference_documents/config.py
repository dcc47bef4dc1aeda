"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.colors
import reportlab.lib.pagesizes


DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"

PLACARD_PAGE_SIZE = reportlab.lib.pagesizes.landscape(reportlab.lib.pagesizes.A4)
VERTICAL_BADGE_PAGE_SIZE = (155.91, 241.0)
HORIZONTAL_BADGE_PAGE_SIZE = (241.0, 155.91)

# text wider than page width minus this margin is reported as overflow
OVERFLOW_SAFETY_MARGIN = 20.0

IMAGE_BORDER_COLOR = reportlab.lib.colors.Color(0, 0, 0)
TRIM_BORDER_COLOR = reportlab.lib.colors.Color(0.6, 0.6, 0.6)
TRIM_BORDER_WIDTH = 0.25
DIVIDER_COLOR = reportlab.lib.colors.Color(0.95, 0.95, 0.95)
CONSENT_PARTIAL_COLOR = reportlab.lib.colors.Color(1, 0.647, 0)
CONSENT_RESTRICTED_COLOR = reportlab.lib.colors.Color(0, 0.502, 1)

# alternative images starting with this marker show the built-in DMUN logo
RESERVED_IMAGE_PREFIX = "$DMUN"
RESERVED_IMAGE_ADDRESS = "logo/color/dmun.png"
DECORATIVE_LOGO_ADDRESS = "logo/color/small_dmun.png"
FLAG_ADDRESS_TEMPLATE = "flags/{code}.png"
UPLOAD_ADDRESS_TEMPLATE = "uploads/{identifier}"
SUPPORTED_IMAGE_TYPES = {
	"image/png": "PNG",
	"image/jpeg": "JPEG",
	"image/jpg": "JPEG",
}
HTTP_TIMEOUT_SECONDS = 15.0

PROGRESS_BAR_WIDTH = 30

BARCODE_SCALE = 3
BARCODE_HEIGHT = 6
# bwip-style height is given in millimetres
POINTS_PER_MM = 72.0 / 25.4

CAPTION_TEXT = "Model United Nations"
IMAGE_WARNING_MESSAGE = "Flag / image could not be loaded."
OVERFLOW_WARNING_MESSAGE = "Text is wider than the page."
TEXT_WARNING_MESSAGE = "Text contains characters the font cannot render; they were replaced."


@dataclasses.dataclass(frozen=True)
class Margins:
	left: float
	right: float
	top: float
	bottom: float


@dataclasses.dataclass(frozen=True)
class StyleColors:
	gray: reportlab.lib.colors.Color
	black: reportlab.lib.colors.Color
	accent: reportlab.lib.colors.Color


@dataclasses.dataclass(frozen=True)
class FontSizes:
	title: float
	heading: float
	normal: float


@dataclasses.dataclass(frozen=True)
class PageStyles:
	margin: Margins
	colors: StyleColors
	font_size: FontSizes
	line_height: float


DEFAULT_MARGINS = Margins(left=40, right=40, top=40, bottom=40)

PLACARD_STYLES = PageStyles(
	margin=DEFAULT_MARGINS,
	colors=StyleColors(
		gray=reportlab.lib.colors.Color(0.5, 0.5, 0.5),
		black=reportlab.lib.colors.Color(0, 0, 0),
		accent=reportlab.lib.colors.Color(0, 0.478, 1),
	),
	font_size=FontSizes(title=36, heading=24, normal=11),
	line_height=1.2,
)

VERTICAL_BADGE_STYLES = PageStyles(
	margin=DEFAULT_MARGINS,
	colors=StyleColors(
		gray=reportlab.lib.colors.Color(0.5, 0.5, 0.5),
		black=reportlab.lib.colors.Color(0, 0, 0),
		accent=reportlab.lib.colors.Color(0, 0.478, 1),
	),
	font_size=FontSizes(title=11, heading=9, normal=7),
	line_height=1.2,
)

HORIZONTAL_BADGE_STYLES = PageStyles(
	margin=DEFAULT_MARGINS,
	colors=StyleColors(
		gray=reportlab.lib.colors.Color(0.5, 0.5, 0.5),
		black=reportlab.lib.colors.Color(0, 0, 0),
		accent=reportlab.lib.colors.Color(0.478, 1, 0),
	),
	font_size=FontSizes(title=16, heading=11, normal=7),
	line_height=1.2,
)
