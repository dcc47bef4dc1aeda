"""
Page geometry tables and the layout strategy that draws one row per page.
"""

# Standard Library
import dataclasses
import io
import logging

# PIP3 modules
import PIL.Image
import reportlab.lib.colors
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import conference_documents.assets
import conference_documents.barcode
import conference_documents.config
import conference_documents.fonts
import conference_documents.page
import conference_documents.records
import conference_documents.run_state
import conference_documents.text


Box = conference_documents.page.Box
TextAnchor = conference_documents.page.TextAnchor
PageContext = conference_documents.page.PageContext
PageStyles = conference_documents.config.PageStyles
FontPair = conference_documents.fonts.FontPair
AssetFailure = conference_documents.assets.AssetFailure
AssetResolver = conference_documents.assets.AssetResolver
Row = conference_documents.records.Row
BrandInfo = conference_documents.records.BrandInfo
DocumentType = conference_documents.records.DocumentType
MediaConsentStatus = conference_documents.records.MediaConsentStatus
WarningType = conference_documents.records.WarningType
RunHandle = conference_documents.run_state.RunHandle

CAPTION_TEXT = conference_documents.config.CAPTION_TEXT
DECORATIVE_LOGO_ADDRESS = conference_documents.config.DECORATIVE_LOGO_ADDRESS
IMAGE_BORDER_COLOR = conference_documents.config.IMAGE_BORDER_COLOR
IMAGE_WARNING_MESSAGE = conference_documents.config.IMAGE_WARNING_MESSAGE
TRIM_BORDER_COLOR = conference_documents.config.TRIM_BORDER_COLOR
TRIM_BORDER_WIDTH = conference_documents.config.TRIM_BORDER_WIDTH
DIVIDER_COLOR = conference_documents.config.DIVIDER_COLOR
CONSENT_PARTIAL_COLOR = conference_documents.config.CONSENT_PARTIAL_COLOR
CONSENT_RESTRICTED_COLOR = conference_documents.config.CONSENT_RESTRICTED_COLOR

LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class LogoSpot:
	box: Box
	opacity: float = 1.0


@dataclasses.dataclass(frozen=True)
class ConsentSpot:
	x: float
	y: float
	radius: float


@dataclasses.dataclass(frozen=True)
class DividerLine:
	x0: float
	y0: float
	x1: float
	y1: float
	width: float


@dataclasses.dataclass(frozen=True)
class LayoutSpec:
	"""
	Fixed geometry of one document type, in points from the bottom-left.
	"""
	document_type: DocumentType
	page_size: tuple[float, float]
	styles: PageStyles
	brand_logos: tuple[LogoSpot, ...]
	decorative_logos: tuple[tuple[str, LogoSpot], ...]
	image_boxes: tuple[Box, ...]
	image_border_width: float
	title_anchors: tuple[TextAnchor, ...]
	name_anchors: tuple[TextAnchor, ...]
	pronoun_anchors: tuple[TextAnchor, ...] = ()
	caption_anchors: tuple[TextAnchor, ...] = ()
	consent: ConsentSpot | None = None
	barcode_box: Box | None = None
	divider: DividerLine | None = None


#============================================
def build_placard_layout() -> LayoutSpec:
	"""
	Build the double-sided placard geometry.

	The upper half mirrors the lower half rotated by 180 degrees so the
	folded placard reads upright from both sides.

	Returns:
		LayoutSpec for placards.
	"""
	width, height = conference_documents.config.PLACARD_PAGE_SIZE
	center_x = width / 2.0
	center_y = height / 2.0

	logo_size = 130.0
	logo_offset_x = 250.0
	logo_offset_y = 160.0
	logo_opacity = 0.1
	brand_logos = (
		LogoSpot(
			Box(center_x - logo_offset_x - logo_size / 2.0, center_y + logo_offset_y - logo_size, logo_size, logo_size, 180),
			logo_opacity,
		),
		LogoSpot(
			Box(center_x + logo_offset_x - logo_size / 2.0, center_y + logo_offset_y - logo_size, logo_size, logo_size, 180),
			logo_opacity,
		),
		LogoSpot(
			Box(center_x - logo_offset_x - logo_size / 2.0, center_y - logo_offset_y, logo_size, logo_size),
			logo_opacity,
		),
		LogoSpot(
			Box(center_x + logo_offset_x - logo_size / 2.0, center_y - logo_offset_y, logo_size, logo_size),
			logo_opacity,
		),
	)

	image_width = 200.0
	image_height = 150.0
	image_gap = 20.0
	image_boxes = (
		Box(center_x - image_width / 2.0, center_y + image_gap, image_width, image_height, 180),
		Box(center_x - image_width / 2.0, center_y - image_gap - image_height, image_width, image_height),
	)

	title_offset = 225.0
	name_offset = 270.0
	return LayoutSpec(
		document_type=DocumentType.PLACARD,
		page_size=(width, height),
		styles=conference_documents.config.PLACARD_STYLES,
		brand_logos=brand_logos,
		decorative_logos=(),
		image_boxes=image_boxes,
		image_border_width=1.0,
		title_anchors=(
			TextAnchor(center_x, center_y - title_offset),
			TextAnchor(center_x, center_y + title_offset, 180),
		),
		name_anchors=(
			TextAnchor(center_x, center_y - name_offset),
			TextAnchor(center_x, center_y + name_offset, 180),
		),
		divider=DividerLine(0.0, center_y, width, center_y, 1.0),
	)


#============================================
def build_vertical_badge_layout() -> LayoutSpec:
	"""
	Build the portrait badge geometry.

	Returns:
		LayoutSpec for vertical badges.
	"""
	width, height = conference_documents.config.VERTICAL_BADGE_PAGE_SIZE
	center_x = width / 2.0

	image_margin_side = 30.0
	image_margin_bottom = 40.0
	image_width = width - image_margin_side * 2.0
	image_height = image_width * 0.75

	logo_size = 60.0
	logo_margin_top = 10.0
	dmun_logo_width = 50.0
	dmun_logo_height = dmun_logo_width / 2.18
	dmun_margin_bottom = 10.0
	return LayoutSpec(
		document_type=DocumentType.VERTICAL_BADGE,
		page_size=(width, height),
		styles=conference_documents.config.VERTICAL_BADGE_STYLES,
		brand_logos=(
			LogoSpot(Box(center_x - logo_size / 2.0, height - logo_margin_top - logo_size, logo_size, logo_size)),
		),
		decorative_logos=(
			(
				DECORATIVE_LOGO_ADDRESS,
				LogoSpot(Box(center_x - dmun_logo_width / 2.0, dmun_margin_bottom, dmun_logo_width, dmun_logo_height)),
			),
		),
		image_boxes=(Box(image_margin_side, image_margin_bottom, image_width, image_height),),
		image_border_width=0.5,
		title_anchors=(TextAnchor(center_x, height - 92.0),),
		name_anchors=(TextAnchor(center_x, height - 106.0),),
		pronoun_anchors=(TextAnchor(center_x, height - 116.0),),
	)


#============================================
def build_horizontal_badge_layout() -> LayoutSpec:
	"""
	Build the landscape badge geometry.

	Returns:
		LayoutSpec for horizontal badges.
	"""
	width, height = conference_documents.config.HORIZONTAL_BADGE_PAGE_SIZE
	center_x = width / 2.0

	image_margin_left = 20.0
	image_margin_bottom = 16.0
	image_width = 100.0
	image_height = 75.0
	# centre of the free space right of the image
	free_center_x = image_margin_left + image_width + (width - image_margin_left - image_width) / 2.0

	logo_size = image_height * 0.8
	logo_offset_y = 8.0

	barcode_height = 10.0
	barcode_gap = 2.0

	consent_radius = 3.0
	consent_margin = 10.0
	return LayoutSpec(
		document_type=DocumentType.HORIZONTAL_BADGE,
		page_size=(width, height),
		styles=conference_documents.config.HORIZONTAL_BADGE_STYLES,
		brand_logos=(
			LogoSpot(
				Box(
					free_center_x - logo_size / 2.0,
					image_margin_bottom + (image_height - logo_size) / 2.0 + logo_offset_y,
					logo_size,
					logo_size,
				)
			),
		),
		decorative_logos=(),
		image_boxes=(Box(image_margin_left, image_margin_bottom, image_width, image_height),),
		image_border_width=0.5,
		title_anchors=(TextAnchor(center_x, height - 25.0),),
		name_anchors=(TextAnchor(center_x, height - 40.0),),
		pronoun_anchors=(TextAnchor(center_x, height - 52.0),),
		caption_anchors=(
			TextAnchor(free_center_x, image_margin_bottom + 7.0),
			TextAnchor(free_center_x, image_margin_bottom),
		),
		consent=ConsentSpot(
			width - consent_margin - consent_radius,
			height - consent_margin - consent_radius,
			consent_radius,
		),
		barcode_box=Box(
			image_margin_left,
			image_margin_bottom - barcode_gap - barcode_height,
			image_width,
			barcode_height,
		),
	)


LAYOUTS = {
	DocumentType.PLACARD: build_placard_layout(),
	DocumentType.VERTICAL_BADGE: build_vertical_badge_layout(),
	DocumentType.HORIZONTAL_BADGE: build_horizontal_badge_layout(),
}


#============================================
def get_layout(document_type: DocumentType) -> LayoutSpec:
	return LAYOUTS[DocumentType(document_type)]


#============================================
def consent_color(status: MediaConsentStatus | None) -> reportlab.lib.colors.Color | None:
	"""
	Pick the media consent indicator color.

	Args:
		status: Row media consent status.

	Returns:
		Indicator color, or None when no indicator is drawn.
	"""
	if status == MediaConsentStatus.ALLOWED_ALL:
		return None
	if status == MediaConsentStatus.PARTIALLY_ALLOWED:
		return CONSENT_PARTIAL_COLOR
	return CONSENT_RESTRICTED_COLOR


#============================================
def draw_media_consent(ctx: PageContext, layout: LayoutSpec, row: Row) -> None:
	if layout.consent is None:
		return
	color = consent_color(row.media_consent_status)
	if color is None:
		return
	pdf = ctx.pdf
	pdf.saveState()
	pdf.setFillColor(color)
	pdf.circle(layout.consent.x, layout.consent.y, layout.consent.radius, stroke=0, fill=1)
	pdf.restoreState()


#============================================
def draw_logos(
	ctx: PageContext,
	layout: LayoutSpec,
	resolver: AssetResolver,
	brand: BrandInfo,
) -> None:
	"""
	Draw the brand logos and fixed decorative logos.

	Missing logos are skipped; the resolver has already logged them.

	Args:
		ctx: Page context.
		layout: Layout geometry.
		resolver: Run asset resolver.
		brand: Resolved brand.
	"""
	brand_logo = resolver.resolve_static(brand.logo_address)
	if brand_logo is not None:
		for spot in layout.brand_logos:
			conference_documents.page.draw_image_in_box(ctx.pdf, brand_logo, spot.box, spot.opacity)
	for address, spot in layout.decorative_logos:
		logo = resolver.resolve_static(address)
		if logo is None:
			continue
		conference_documents.page.draw_image_in_box(ctx.pdf, logo, spot.box, spot.opacity)


#============================================
def draw_subject_image(
	ctx: PageContext,
	layout: LayoutSpec,
	resolver: AssetResolver,
	row: Row,
) -> bool:
	"""
	Draw the flag or alternative image inside its bordered boxes.

	The border is drawn even when the image cannot be resolved.

	Args:
		ctx: Page context.
		layout: Layout geometry.
		resolver: Run asset resolver.
		row: Attendee row.

	Returns:
		True if the image was drawn.
	"""
	image = resolver.resolve_subject_image(row)
	drawn = not isinstance(image, AssetFailure)
	if not drawn:
		ctx.run.warn(
			WarningType.IMAGE,
			IMAGE_WARNING_MESSAGE,
			ctx.path(row.image_field),
			details=image.reason,
		)
	for box in layout.image_boxes:
		if drawn:
			conference_documents.page.draw_image_in_box(ctx.pdf, image, box)
		conference_documents.page.draw_box_border(ctx.pdf, box, IMAGE_BORDER_COLOR, layout.image_border_width)
	return drawn


#============================================
def draw_barcode(ctx: PageContext, layout: LayoutSpec, row: Row) -> None:
	if layout.barcode_box is None or not row.id:
		return
	try:
		png_data = conference_documents.barcode.render_code128_png(row.id)
		image = PIL.Image.open(io.BytesIO(png_data)).convert("RGB")
	except Exception as error:
		# decorative, the page is kept without a barcode
		LOGGER.warning("Barcode for row %s skipped: %s", ctx.row_index, error)
		return
	conference_documents.page.draw_image_in_box(
		ctx.pdf,
		reportlab.lib.utils.ImageReader(image),
		layout.barcode_box,
	)


#============================================
def draw_texts(ctx: PageContext, layout: LayoutSpec, row: Row, brand: BrandInfo) -> None:
	"""
	Draw captions, title, name and pronouns centred on their anchors.

	Args:
		ctx: Page context.
		layout: Layout geometry.
		row: Attendee row.
		brand: Resolved brand.
	"""
	styles = layout.styles
	color = styles.colors.black
	draw_text = conference_documents.text.draw_text
	captions = (CAPTION_TEXT, brand.conference_name)
	for caption, anchor in zip(captions, layout.caption_anchors):
		draw_text(
			ctx,
			ctx.fonts.regular,
			caption,
			[anchor],
			styles.font_size.normal,
			ctx.path(conference_documents.records.FIELD_BRAND),
			color,
		)

	draw_text(
		ctx,
		ctx.fonts.bold,
		row.country_name,
		list(layout.title_anchors),
		styles.font_size.title,
		ctx.path(conference_documents.records.FIELD_COUNTRY_NAME),
		color,
	)
	draw_text(
		ctx,
		ctx.fonts.regular,
		row.name_text,
		list(layout.name_anchors),
		styles.font_size.heading,
		ctx.path(conference_documents.records.FIELD_NAME),
		color,
	)
	if row.pronouns and layout.pronoun_anchors:
		draw_text(
			ctx,
			ctx.fonts.regular,
			row.pronouns,
			list(layout.pronoun_anchors),
			styles.font_size.heading,
			ctx.path(conference_documents.records.FIELD_PRONOUNS),
			color,
		)


#============================================
def draw_divider(ctx: PageContext, layout: LayoutSpec) -> None:
	if layout.divider is None:
		return
	line = layout.divider
	pdf = ctx.pdf
	pdf.saveState()
	pdf.setStrokeColor(DIVIDER_COLOR)
	pdf.setLineWidth(line.width)
	pdf.line(line.x0, line.y0, line.x1, line.y1)
	pdf.restoreState()


#============================================
def draw_trim_border(ctx: PageContext) -> None:
	page_box = Box(0.0, 0.0, ctx.width, ctx.height)
	conference_documents.page.draw_box_border(ctx.pdf, page_box, TRIM_BORDER_COLOR, TRIM_BORDER_WIDTH)


class PageLayoutStrategy:
	"""
	Lays out one row onto one page of the shared canvas.
	"""

	def __init__(
		self,
		layout: LayoutSpec,
		pdf: reportlab.pdfgen.canvas.Canvas,
		resolver: AssetResolver,
		fonts: FontPair,
		brand: BrandInfo,
		run: RunHandle,
		row: Row,
		row_index: int,
		trim_border: bool = False,
	) -> None:
		self.layout = layout
		self.pdf = pdf
		self.resolver = resolver
		self.fonts = fonts
		self.brand = brand
		self.run = run
		self.row = row
		self.row_index = row_index
		self.trim_border = trim_border
		self.ctx: PageContext | None = None

	def initialize(self) -> PageContext:
		width, height = self.layout.page_size
		self.pdf.setPageSize((width, height))
		self.ctx = PageContext(
			pdf=self.pdf,
			width=width,
			height=height,
			fonts=self.fonts,
			run=self.run,
			row_index=self.row_index,
		)
		return self.ctx

	def generate_content(self) -> None:
		if self.ctx is None:
			raise RuntimeError("initialize() must run before generate_content()")
		ctx = self.ctx
		draw_media_consent(ctx, self.layout, self.row)
		draw_logos(ctx, self.layout, self.resolver, self.brand)
		draw_subject_image(ctx, self.layout, self.resolver, self.row)
		draw_barcode(ctx, self.layout, self.row)
		draw_texts(ctx, self.layout, self.row, self.brand)
		draw_divider(ctx, self.layout)
		if self.trim_border:
			draw_trim_border(ctx)
