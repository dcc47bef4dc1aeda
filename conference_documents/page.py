"""
Page context and placement primitives shared by the layout code.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.colors
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import conference_documents.fonts
import conference_documents.run_state


FontPair = conference_documents.fonts.FontPair
RunHandle = conference_documents.run_state.RunHandle


@dataclasses.dataclass(frozen=True)
class Box:
	"""
	Visual page rectangle; rotation turns the content about the box centre.
	"""
	x: float
	y: float
	width: float
	height: float
	rotation: float = 0.0


@dataclasses.dataclass(frozen=True)
class TextAnchor:
	"""
	Horizontal centre and baseline for one copy of a text line.
	"""
	center_x: float
	baseline_y: float
	rotation: float = 0.0


@dataclasses.dataclass
class PageContext:
	pdf: reportlab.pdfgen.canvas.Canvas
	width: float
	height: float
	fonts: FontPair
	run: RunHandle
	row_index: int

	def path(self, field_name: str) -> tuple[str, str]:
		return (str(self.row_index), field_name)


#============================================
def draw_image_in_box(
	pdf: reportlab.pdfgen.canvas.Canvas,
	image_reader: reportlab.lib.utils.ImageReader,
	box: Box,
	opacity: float = 1.0,
) -> None:
	"""
	Draw an image stretched to a box.

	Args:
		pdf: ReportLab canvas.
		image_reader: Decoded image.
		box: Target box.
		opacity: Fill alpha applied to the image.
	"""
	pdf.saveState()
	if opacity < 1.0:
		pdf.setFillAlpha(opacity)
	pdf.translate(box.x + box.width / 2.0, box.y + box.height / 2.0)
	if box.rotation:
		pdf.rotate(box.rotation)
	pdf.drawImage(
		image_reader,
		-box.width / 2.0,
		-box.height / 2.0,
		width=box.width,
		height=box.height,
		mask="auto",
		preserveAspectRatio=False,
		anchor="sw",
	)
	pdf.restoreState()


#============================================
def draw_box_border(
	pdf: reportlab.pdfgen.canvas.Canvas,
	box: Box,
	color: reportlab.lib.colors.Color,
	line_width: float,
) -> None:
	"""
	Stroke the outline of a box.
	"""
	pdf.saveState()
	pdf.setStrokeColor(color)
	pdf.setLineWidth(line_width)
	pdf.rect(box.x, box.y, box.width, box.height, stroke=1, fill=0)
	pdf.restoreState()
