import json
import pathlib

import pypdf

import conference_documents.cli


#============================================
def test_cli_writes_pdf_and_warning_report(asset_root: pathlib.Path, tmp_path: pathlib.Path) -> None:
	"""
	Run the CLI end to end from a JSON rows file.
	"""
	rows_path = tmp_path / "rows.json"
	rows_path.write_text(
		json.dumps(
			[
				{"name": "Ada", "countryName": "Germany", "countryAlpha2Code": "DE", "id": "DE-1"},
				{"name": "Bob", "countryName": "Press", "alternativeImage": "missing.png"},
			]
		),
		encoding="utf-8",
	)
	output_path = tmp_path / "out" / "badges.pdf"
	report_path = tmp_path / "out" / "warnings.json"
	conference_documents.cli.main(
		[
			str(rows_path),
			"-o", str(output_path),
			"-w", str(report_path),
			"-t", "HORIZONTAL_BADGE",
			"-b", "MUNBW",
			"-y", "2025",
			"-a", str(asset_root),
			"-r",
		]
	)
	reader = pypdf.PdfReader(str(output_path))
	assert len(reader.pages) == 2

	report = json.loads(report_path.read_text(encoding="utf-8"))
	assert report["document_type"] == "HORIZONTAL_BADGE"
	assert report["brand"] == "MUNBW"
	assert report["pages"] == 2
	assert report["warnings"][0]["type"] == "IMAGE"
	assert report["warnings"][0]["path"] == ["1", "alternativeImage"]


#============================================
def test_print_progress_bar(capsys) -> None:
	"""
	Progress prints a bar with the floored percent.
	"""
	progress = conference_documents.cli.GenerationProgress(total_pages=3, completed_pages=1)
	conference_documents.cli.print_progress(progress)
	captured = capsys.readouterr()
	assert "1/3 (33%)" in captured.out
