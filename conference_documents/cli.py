"""
CLI entry points for conference document generation.
"""

# Standard Library
import argparse
import logging
import pathlib
import time

# local repo modules
import conference_documents.assets
import conference_documents.config
import conference_documents.fonts
import conference_documents.records
import conference_documents.render
import conference_documents.run_state


Brand = conference_documents.records.Brand
DocumentType = conference_documents.records.DocumentType
WarningType = conference_documents.records.WarningType
GenerationProgress = conference_documents.run_state.GenerationProgress

PROGRESS_BAR_WIDTH = conference_documents.config.PROGRESS_BAR_WIDTH
HTTP_TIMEOUT_SECONDS = conference_documents.config.HTTP_TIMEOUT_SECONDS


#============================================
def print_progress(progress: GenerationProgress) -> None:
	"""
	Print a simple progress bar.

	Args:
		progress: Current run progress.
	"""
	total = progress.total_pages
	current = progress.completed_pages
	if total <= 0:
		return
	percent = (current * 100) // total
	filled = (PROGRESS_BAR_WIDTH * current) // total
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	end = "\n" if current == total else "\r"
	print(f"Pages [{bar}] {current}/{total} ({percent}%)", end=end)


#============================================
def build_source(args: argparse.Namespace):
	"""
	Build the asset byte source from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		DirectoryAssetSource or HttpAssetSource.
	"""
	if args.asset_url:
		return conference_documents.assets.HttpAssetSource(args.asset_url, timeout=args.timeout)
	return conference_documents.assets.DirectoryAssetSource(pathlib.Path(args.asset_root))


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, sys.argv by default.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Generate conference placards and badges as PDF.")
	parser.add_argument("input_path", help="Rows as a JSON array or CSV file.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")
	output_group.add_argument(
		"-w", "--warnings", dest="warnings_path", default=None, help="Output warnings JSON path."
	)

	document_group = parser.add_argument_group("Document")
	document_group.add_argument(
		"-t", "--document-type", dest="document_type",
		choices=[item.value for item in DocumentType], default=DocumentType.PLACARD.value,
		help="Page variant.",
	)
	document_group.add_argument(
		"-b", "--brand", dest="brand",
		choices=[item.value for item in Brand], default=Brand.UN.value,
		help="Conference brand.",
	)
	document_group.add_argument("-y", "--year", dest="year", type=int, default=None, help="Conference year in captions.")
	document_group.add_argument("-r", "--trim-border", dest="trim_border", action="store_true", help="Draw a trim guide.")
	document_group.add_argument("-R", "--no-trim-border", dest="trim_border", action="store_false", help="Omit the trim guide.")

	asset_group = parser.add_argument_group("Assets")
	asset_group.add_argument("-a", "--asset-root", dest="asset_root", default="assets", help="Local asset directory.")
	asset_group.add_argument("-u", "--asset-url", dest="asset_url", default=None, help="Asset base URL, overrides the root.")
	asset_group.add_argument(
		"--timeout", dest="timeout", type=float, default=HTTP_TIMEOUT_SECONDS, help="HTTP timeout in seconds."
	)
	asset_group.add_argument("--font-regular", dest="font_regular", default=None, help="Regular weight TTF.")
	asset_group.add_argument("--font-bold", dest="font_bold", default=None, help="Bold weight TTF.")

	parser.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Show info logging.")

	parser.set_defaults(
		trim_border=False,
		verbose=False,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> conference_documents.render.DocumentGenerator:
	"""
	Run generation from a rows file to a PDF file.

	Args:
		args: Parsed argparse namespace.

	Returns:
		The generator, for inspecting warnings and progress.
	"""
	print("Conference document generation")
	print(f"Input: {args.input_path}")
	print(f"Output PDF: {args.output_path}")
	print(f"Document type: {args.document_type}")
	print(f"Brand: {args.brand}")
	print(f"Trim border: {args.trim_border}")
	if args.asset_url:
		print(f"Asset URL: {args.asset_url}")
	else:
		print(f"Asset root: {args.asset_root}")

	start_time = time.perf_counter()
	rows = conference_documents.records.load_rows(pathlib.Path(args.input_path))
	print(f"Rows loaded: {len(rows)}")

	regular_path = pathlib.Path(args.font_regular) if args.font_regular else None
	bold_path = pathlib.Path(args.font_bold) if args.font_bold else None
	fonts = conference_documents.fonts.load_fonts(regular_path, bold_path)
	print(f"Fonts: {fonts.regular} / {fonts.bold}")

	generator = conference_documents.render.DocumentGenerator(
		build_source(args),
		fonts=fonts,
		year=args.year,
	)
	pdf_bytes = generator.generate(
		rows,
		Brand(args.brand),
		DocumentType(args.document_type),
		trim_border=args.trim_border,
		progress_callback=print_progress,
	)

	output_path = pathlib.Path(args.output_path)
	output_path.parent.mkdir(parents=True, exist_ok=True)
	output_path.write_bytes(pdf_bytes)
	progress = generator.progress()
	warnings = generator.warnings()
	print(f"Pages written: {progress.completed_pages}")
	for warning_type in WarningType:
		count = len(generator.run.warnings.by_type(warning_type))
		if count:
			print(f"{warning_type.value} warnings: {count}")

	if args.warnings_path:
		conference_documents.render.write_warning_report(
			pathlib.Path(args.warnings_path),
			warnings,
			progress,
			DocumentType(args.document_type),
			Brand(args.brand),
		)
		print(f"Warnings written: {args.warnings_path}")

	total_time = time.perf_counter() - start_time
	print(f"Timing: total={total_time:.2f}s")
	return generator


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	level = logging.INFO if args.verbose else logging.WARNING
	logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
	run_pipeline(args)
