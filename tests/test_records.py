import json
import pathlib

import pytest

import conference_documents.records


Row = conference_documents.records.Row
RowValidationError = conference_documents.records.RowValidationError
MediaConsentStatus = conference_documents.records.MediaConsentStatus


#============================================
def test_row_from_mapping_with_flag() -> None:
	"""
	Build a flag row from dataset column keys.
	"""
	row = Row.from_mapping(
		{
			"name": " Ada Lovelace ",
			"committee": "GA1",
			"countryName": "Germany",
			"countryAlpha2Code": "DE",
			"pronouns": "she/her",
			"id": "A-17",
			"mediaConsentStatus": "partially_allowed",
		}
	)
	assert row.name == "Ada Lovelace"
	assert row.country_alpha2_code == "DE"
	assert row.alternative_image is None
	assert row.media_consent_status == MediaConsentStatus.PARTIALLY_ALLOWED
	assert row.image_field == "countryAlpha2Code"
	assert row.name_text == "Ada Lovelace (GA1)"


#============================================
def test_row_from_mapping_with_alternative_image() -> None:
	"""
	Blank optional columns become None.
	"""
	row = Row.from_mapping(
		{
			"name": "Bob",
			"countryName": "Press",
			"countryAlpha2Code": "",
			"alternativeImage": "press.png",
			"committee": "  ",
		}
	)
	assert row.image_field == "alternativeImage"
	assert row.committee is None
	assert row.name_text == "Bob"
	assert row.media_consent_status is None


#============================================
@pytest.mark.parametrize(
	"record",
	[
		{"countryName": "Germany", "countryAlpha2Code": "de"},
		{"name": "Ada", "countryAlpha2Code": "de"},
		{"name": "Ada", "countryName": "Germany"},
		{"name": "Ada", "countryName": "Germany", "countryAlpha2Code": "de", "alternativeImage": "x.png"},
		{"name": "Ada", "countryName": "Germany", "countryAlpha2Code": "deu"},
	],
)
def test_row_from_mapping_rejects_invalid(record: dict) -> None:
	"""
	Required fields and the image source rules are enforced.
	"""
	with pytest.raises(RowValidationError):
		Row.from_mapping(record)


#============================================
def test_unknown_media_consent_is_restricted() -> None:
	"""
	Unrecognized consent values count as not allowed.
	"""
	assert conference_documents.records.parse_media_consent("maybe") == MediaConsentStatus.NOT_ALLOWED
	assert conference_documents.records.parse_media_consent("ALLOWED_ALL") == MediaConsentStatus.ALLOWED_ALL
	assert conference_documents.records.parse_media_consent(None) is None


#============================================
def test_brand_info_names_include_year() -> None:
	"""
	Every brand resolves to a logo and a dated conference name.
	"""
	for brand in conference_documents.records.Brand:
		info = conference_documents.records.brand_info(brand, 2025)
		assert info.logo_address.startswith("logo/color/")
		assert info.conference_name.endswith("2025")
	info = conference_documents.records.brand_info("MUN-SH", 2024)
	assert info.conference_name == "Schleswig-Holstein 2024"


#============================================
def test_load_rows_json_and_csv(tmp_path: pathlib.Path) -> None:
	"""
	Rows load from JSON arrays and CSV files in file order.
	"""
	records = [
		{"name": "Ada", "countryName": "Germany", "countryAlpha2Code": "de"},
		{"name": "Bob", "countryName": "Press", "alternativeImage": "press.png"},
	]
	json_path = tmp_path / "rows.json"
	json_path.write_text(json.dumps(records), encoding="utf-8")
	rows = conference_documents.records.load_rows(json_path)
	assert [row.name for row in rows] == ["Ada", "Bob"]

	csv_path = tmp_path / "rows.csv"
	csv_path.write_text(
		"name,countryName,countryAlpha2Code,alternativeImage\n"
		"Ada,Germany,de,\n"
		"Bob,Press,,press.png\n",
		encoding="utf-8",
	)
	rows = conference_documents.records.load_rows(csv_path)
	assert [row.image_field for row in rows] == ["countryAlpha2Code", "alternativeImage"]


#============================================
def test_load_rows_reports_row_index(tmp_path: pathlib.Path) -> None:
	"""
	Validation errors name the offending row.
	"""
	path = tmp_path / "rows.json"
	path.write_text(json.dumps([{"name": "Ada", "countryName": "Germany", "countryAlpha2Code": "de"}, {"name": "Bob"}]), encoding="utf-8")
	with pytest.raises(RowValidationError, match="row 1"):
		conference_documents.records.load_rows(path)
