"""
Document generation: one PDF page per row.
"""

# Standard Library
import io
import json
import logging
import pathlib
import typing

# PIP3 modules
import reportlab.pdfgen.canvas

# local repo modules
import conference_documents.assets
import conference_documents.fonts
import conference_documents.layout
import conference_documents.records
import conference_documents.run_state


AssetResolver = conference_documents.assets.AssetResolver
AssetSource = conference_documents.assets.AssetSource
FontPair = conference_documents.fonts.FontPair
PageLayoutStrategy = conference_documents.layout.PageLayoutStrategy
Brand = conference_documents.records.Brand
DocumentType = conference_documents.records.DocumentType
DocumentWarning = conference_documents.records.DocumentWarning
Row = conference_documents.records.Row
GenerationProgress = conference_documents.run_state.GenerationProgress
RunHandle = conference_documents.run_state.RunHandle

LOGGER = logging.getLogger(__name__)


class DocumentGenerator:
	"""
	Lays out rows onto a single multi-page PDF.

	Every call to generate() starts a fresh run: progress and warnings are
	reset and static assets are fetched again through a new resolver.
	"""

	def __init__(
		self,
		source: AssetSource,
		fonts: FontPair | None = None,
		year: int | None = None,
		run: RunHandle | None = None,
	) -> None:
		"""
		Args:
			source: Asset byte source with a fetch(address) method.
			fonts: Registered font pair, the Helvetica pair by default.
			year: Conference year shown in brand captions.
			run: Run state to report into, a new one by default.
		"""
		self.source = source
		self.fonts = fonts
		self.year = year
		self.run = run or RunHandle()

	def warnings(self) -> tuple[DocumentWarning, ...]:
		return self.run.warnings.get()

	def progress(self) -> GenerationProgress:
		return self.run.progress.get()

	def generate(
		self,
		rows: typing.Sequence[Row],
		brand: Brand,
		document_type: DocumentType,
		trim_border: bool = False,
		run: RunHandle | None = None,
		progress_callback: typing.Callable[[GenerationProgress], None] | None = None,
	) -> bytes:
		"""
		Render every row onto its own page.

		Advisory problems become warnings on the run; any other exception
		propagates and no document is returned.

		Args:
			rows: Rows in output order.
			brand: Conference brand for logos and captions.
			document_type: Page variant used for every row.
			trim_border: Draw a cutting guide at the page edge.
			run: Run state to use for this call, replacing the current one.
			progress_callback: Called with the progress after each page.

		Returns:
			PDF document bytes.
		"""
		if run is not None:
			self.run = run
		total = len(rows)
		self.run.reset(total)

		fonts = self.fonts or conference_documents.fonts.load_fonts()
		brand = conference_documents.records.brand_info(brand, self.year)
		layout = conference_documents.layout.get_layout(document_type)
		resolver = AssetResolver(self.source)
		LOGGER.info("Generating %d %s page(s)", total, layout.document_type.value)

		buffer = io.BytesIO()
		pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=layout.page_size)
		for index, row in enumerate(rows):
			strategy = PageLayoutStrategy(
				layout=layout,
				pdf=pdf,
				resolver=resolver,
				fonts=fonts,
				brand=brand,
				run=self.run,
				row=row,
				row_index=index,
				trim_border=trim_border,
			)
			strategy.initialize()
			strategy.generate_content()
			pdf.showPage()
			self.run.progress.advance(total, index + 1)
			if progress_callback is not None:
				progress_callback(self.run.progress.get())
		return pdf.getpdfdata()


#============================================
def write_warning_report(
	report_path: pathlib.Path,
	warnings: typing.Sequence[DocumentWarning],
	progress: GenerationProgress,
	document_type: DocumentType,
	brand: Brand,
) -> None:
	"""
	Write run warnings and progress as JSON.

	Args:
		report_path: Output path.
		warnings: Warnings raised during the run.
		progress: Final progress.
		document_type: Page variant of the run.
		brand: Conference brand of the run.
	"""
	data = {
		"document_type": DocumentType(document_type).value,
		"brand": Brand(brand).value,
		"pages": progress.completed_pages,
		"total_pages": progress.total_pages,
		"warnings": [warning.to_dict() for warning in warnings],
	}
	report_path = pathlib.Path(report_path)
	report_path.parent.mkdir(parents=True, exist_ok=True)
	report_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
