"""
Attendee rows, brands and warning records.
"""

# Standard Library
import csv
import dataclasses
import datetime
import enum
import json
import pathlib
import re

# PIP3 modules
import reportlab.lib.colors


ALPHA2_PATTERN = re.compile(r"^[A-Za-z]{2}$")

# dataset column keys, used for warning paths
FIELD_NAME = "name"
FIELD_COMMITTEE = "committee"
FIELD_COUNTRY_NAME = "countryName"
FIELD_COUNTRY_CODE = "countryAlpha2Code"
FIELD_ALTERNATIVE_IMAGE = "alternativeImage"
FIELD_PRONOUNS = "pronouns"
FIELD_ID = "id"
FIELD_MEDIA_CONSENT = "mediaConsentStatus"
FIELD_BRAND = "brand"


class RowValidationError(ValueError):
	"""
	Raised when a dataset record does not describe a valid row.
	"""


class Brand(str, enum.Enum):
	MUN_SH = "MUN-SH"
	MUNBW = "MUNBW"
	DMUN = "DMUN"
	UN = "UN"


class DocumentType(str, enum.Enum):
	PLACARD = "PLACARD"
	VERTICAL_BADGE = "VERTICAL_BADGE"
	HORIZONTAL_BADGE = "HORIZONTAL_BADGE"


class MediaConsentStatus(str, enum.Enum):
	ALLOWED_ALL = "ALLOWED_ALL"
	PARTIALLY_ALLOWED = "PARTIALLY_ALLOWED"
	NOT_ALLOWED = "NOT_ALLOWED"


class WarningType(str, enum.Enum):
	OVERFLOW = "OVERFLOW"
	IMAGE = "IMAGE"
	TEXT = "TEXT"


@dataclasses.dataclass(frozen=True)
class DocumentWarning:
	type: WarningType
	message: str
	path: tuple[str, ...]
	details: str | None = None

	def to_dict(self) -> dict:
		payload = {
			"type": self.type.value,
			"message": self.message,
			"path": list(self.path),
		}
		if self.details is not None:
			payload["details"] = self.details
		return payload


@dataclasses.dataclass(frozen=True)
class BrandInfo:
	logo_address: str
	primary_color: reportlab.lib.colors.Color
	conference_name: str


@dataclasses.dataclass(frozen=True)
class Row:
	name: str
	country_name: str
	committee: str | None = None
	country_alpha2_code: str | None = None
	alternative_image: str | None = None
	pronouns: str | None = None
	id: str | None = None
	media_consent_status: MediaConsentStatus | None = None

	@property
	def image_field(self) -> str:
		"""
		Dataset field that feeds the subject image.
		"""
		if self.alternative_image:
			return FIELD_ALTERNATIVE_IMAGE
		return FIELD_COUNTRY_CODE

	@property
	def name_text(self) -> str:
		if self.committee:
			return f"{self.name} ({self.committee})"
		return self.name

	@classmethod
	def from_mapping(cls, record: dict) -> "Row":
		"""
		Build a row from a column-keyed record.

		Args:
			record: Mapping keyed by dataset column names.

		Returns:
			Row instance.
		"""
		name = _clean(record.get(FIELD_NAME))
		country_name = _clean(record.get(FIELD_COUNTRY_NAME))
		if not name:
			raise RowValidationError("name is required")
		if not country_name:
			raise RowValidationError("countryName is required")
		country_code = _clean(record.get(FIELD_COUNTRY_CODE))
		alternative_image = _clean(record.get(FIELD_ALTERNATIVE_IMAGE))
		if country_code and alternative_image:
			raise RowValidationError(
				"countryAlpha2Code and alternativeImage are mutually exclusive"
			)
		if not country_code and not alternative_image:
			raise RowValidationError("one of countryAlpha2Code or alternativeImage is required")
		if country_code and not ALPHA2_PATTERN.match(country_code):
			raise RowValidationError(f"invalid countryAlpha2Code: {country_code!r}")
		return cls(
			name=name,
			country_name=country_name,
			committee=_clean(record.get(FIELD_COMMITTEE)),
			country_alpha2_code=country_code,
			alternative_image=alternative_image,
			pronouns=_clean(record.get(FIELD_PRONOUNS)),
			id=_clean(record.get(FIELD_ID)),
			media_consent_status=parse_media_consent(record.get(FIELD_MEDIA_CONSENT)),
		)


#============================================
def _clean(value) -> str | None:
	if value is None:
		return None
	text = str(value).strip()
	if not text:
		return None
	return text


#============================================
def parse_media_consent(value) -> MediaConsentStatus | None:
	"""
	Parse a media consent value.

	Unknown values count as fully restricted.

	Args:
		value: Raw dataset value.

	Returns:
		MediaConsentStatus or None when unset.
	"""
	text = _clean(value)
	if text is None:
		return None
	try:
		return MediaConsentStatus(text.upper())
	except ValueError:
		return MediaConsentStatus.NOT_ALLOWED


#============================================
def brand_info(brand: Brand, year: int | None = None) -> BrandInfo:
	"""
	Resolve branding for a conference brand.

	Args:
		brand: Brand identity.
		year: Conference year, defaults to the current year.

	Returns:
		BrandInfo with logo address, color and display name.
	"""
	if year is None:
		year = datetime.date.today().year
	brand = Brand(brand)
	if brand == Brand.MUN_SH:
		return BrandInfo(
			logo_address="logo/color/mun-sh.png",
			primary_color=reportlab.lib.colors.HexColor("#3C8DCB"),
			conference_name=f"Schleswig-Holstein {year}",
		)
	if brand == Brand.MUNBW:
		return BrandInfo(
			logo_address="logo/color/munbw.png",
			primary_color=reportlab.lib.colors.HexColor("#D3242B"),
			conference_name=f"Baden-Württemberg {year}",
		)
	if brand == Brand.DMUN:
		return BrandInfo(
			logo_address="logo/color/dmun.png",
			primary_color=reportlab.lib.colors.HexColor("#0D3C77"),
			conference_name=f"DMUN {year}",
		)
	return BrandInfo(
		logo_address="logo/color/un.png",
		primary_color=reportlab.lib.colors.HexColor("#009EDB"),
		conference_name=f"Simulation {year}",
	)


#============================================
def load_rows(path: pathlib.Path) -> list[Row]:
	"""
	Load rows from a JSON array or a CSV file.

	Args:
		path: Input file path.

	Returns:
		List of rows in file order.
	"""
	path = pathlib.Path(path)
	suffix = path.suffix.lower()
	if suffix == ".json":
		records = json.loads(path.read_text(encoding="utf-8"))
		if not isinstance(records, list):
			raise RowValidationError("JSON input must be an array of objects")
	elif suffix == ".csv":
		with path.open("r", encoding="utf-8", newline="") as handle:
			records = list(csv.DictReader(handle))
	else:
		raise RowValidationError(f"unsupported input format: {path.suffix}")

	rows: list[Row] = []
	for index, record in enumerate(records):
		if not isinstance(record, dict):
			raise RowValidationError(f"row {index}: expected an object")
		try:
			rows.append(Row.from_mapping(record))
		except RowValidationError as error:
			raise RowValidationError(f"row {index}: {error}") from error
	return rows
