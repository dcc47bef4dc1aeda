"""
Asset byte sources and resolution of page images.
"""

# Standard Library
import dataclasses
import io
import logging
import mimetypes
import pathlib
import typing
import urllib.parse

# PIP3 modules
import PIL.Image
import reportlab.lib.utils
import requests

# local repo modules
import conference_documents.config
import conference_documents.records


Row = conference_documents.records.Row

RESERVED_IMAGE_PREFIX = conference_documents.config.RESERVED_IMAGE_PREFIX
RESERVED_IMAGE_ADDRESS = conference_documents.config.RESERVED_IMAGE_ADDRESS
FLAG_ADDRESS_TEMPLATE = conference_documents.config.FLAG_ADDRESS_TEMPLATE
UPLOAD_ADDRESS_TEMPLATE = conference_documents.config.UPLOAD_ADDRESS_TEMPLATE
SUPPORTED_IMAGE_TYPES = conference_documents.config.SUPPORTED_IMAGE_TYPES
HTTP_TIMEOUT_SECONDS = conference_documents.config.HTTP_TIMEOUT_SECONDS
UNKNOWN_MIME_TYPE = "application/octet-stream"

LOGGER = logging.getLogger(__name__)


class AssetFetchError(RuntimeError):
	"""
	Raised by asset sources when an address cannot be fetched.
	"""


@dataclasses.dataclass(frozen=True)
class Asset:
	address: str
	data: bytes
	mime_type: str


@dataclasses.dataclass(frozen=True)
class AssetFailure:
	address: str
	reason: str


class AssetSource(typing.Protocol):
	"""
	Addressable byte source; raises AssetFetchError when an address fails.
	"""

	def fetch(self, address: str) -> Asset:
		...


class DirectoryAssetSource:
	"""
	Serves assets from files below a root directory.
	"""

	def __init__(self, root: pathlib.Path) -> None:
		self.root = pathlib.Path(root).resolve()

	def fetch(self, address: str) -> Asset:
		path = (self.root / address.lstrip("/")).resolve()
		if path != self.root and self.root not in path.parents:
			raise AssetFetchError(f"address escapes asset root: {address}")
		if not path.is_file():
			raise AssetFetchError(f"asset not found: {address}")
		mime_type, _encoding = mimetypes.guess_type(path.name)
		try:
			data = path.read_bytes()
		except OSError as error:
			raise AssetFetchError(f"cannot read {address}: {error}") from error
		return Asset(address=address, data=data, mime_type=mime_type or UNKNOWN_MIME_TYPE)


class HttpAssetSource:
	"""
	Fetches assets relative to a base URL.
	"""

	def __init__(
		self,
		base_url: str,
		session: requests.Session | None = None,
		timeout: float = HTTP_TIMEOUT_SECONDS,
	) -> None:
		self.base_url = base_url.rstrip("/")
		self.session = session or requests.Session()
		self.timeout = timeout

	def fetch(self, address: str) -> Asset:
		quoted = urllib.parse.quote(address.lstrip("/"), safe="/")
		url = f"{self.base_url}/{quoted}"
		try:
			response = self.session.get(url, timeout=self.timeout)
		except requests.RequestException as error:
			raise AssetFetchError(f"request for {url} failed: {error}") from error
		if not 200 <= response.status_code < 300:
			raise AssetFetchError(f"{url} returned HTTP {response.status_code}")
		content_type = response.headers.get("Content-Type") or ""
		mime_type = content_type.split(";")[0].strip().lower()
		if not mime_type:
			mime_type, _encoding = mimetypes.guess_type(address)
		return Asset(
			address=address,
			data=response.content,
			mime_type=mime_type or UNKNOWN_MIME_TYPE,
		)


#============================================
def subject_image_address(row: Row) -> str:
	"""
	Pick the asset address for a row's subject image.

	Args:
		row: Attendee row.

	Returns:
		Asset address.
	"""
	if row.alternative_image and row.alternative_image.startswith(RESERVED_IMAGE_PREFIX):
		return RESERVED_IMAGE_ADDRESS
	if row.alternative_image:
		return UPLOAD_ADDRESS_TEMPLATE.format(identifier=row.alternative_image)
	code = (row.country_alpha2_code or "").lower()
	return FLAG_ADDRESS_TEMPLATE.format(code=code)


#============================================
def decode_image(asset: Asset) -> reportlab.lib.utils.ImageReader:
	"""
	Decode asset bytes into an image ReportLab can embed.

	Args:
		asset: Fetched asset.

	Returns:
		ImageReader for the decoded image.
	"""
	if asset.mime_type == UNKNOWN_MIME_TYPE:
		# no declared type, let Pillow sniff among the supported formats
		image_formats = sorted(set(SUPPORTED_IMAGE_TYPES.values()))
	elif asset.mime_type in SUPPORTED_IMAGE_TYPES:
		image_formats = [SUPPORTED_IMAGE_TYPES[asset.mime_type]]
	else:
		raise AssetFetchError(f"unsupported image type {asset.mime_type} for {asset.address}")
	try:
		image = PIL.Image.open(io.BytesIO(asset.data), formats=image_formats)
		image.load()
	except (OSError, SyntaxError, ValueError) as error:
		raise AssetFetchError(f"cannot decode {asset.address}: {error}") from error
	if image.mode not in ("RGB", "RGBA", "L", "LA"):
		image = image.convert("RGBA")
	return reportlab.lib.utils.ImageReader(image)


class AssetResolver:
	"""
	Resolves row images and static logos for one run.

	Static assets are fetched at most once per resolver; create one resolver
	per run.
	"""

	def __init__(self, source: AssetSource) -> None:
		self.source = source
		self._static_cache: dict[str, reportlab.lib.utils.ImageReader | None] = {}

	def fetch(self, address: str) -> Asset | AssetFailure:
		try:
			return self.source.fetch(address)
		except AssetFetchError as error:
			return AssetFailure(address=address, reason=str(error))

	def load_image(self, address: str) -> reportlab.lib.utils.ImageReader | AssetFailure:
		result = self.fetch(address)
		if isinstance(result, AssetFailure):
			return result
		try:
			return decode_image(result)
		except AssetFetchError as error:
			return AssetFailure(address=address, reason=str(error))

	def resolve_subject_asset(self, row: Row) -> Asset | AssetFailure:
		"""
		Fetch the raw bytes and MIME type of a row's subject image.
		"""
		return self.fetch(subject_image_address(row))

	def resolve_subject_image(self, row: Row) -> reportlab.lib.utils.ImageReader | AssetFailure:
		"""
		Resolve the flag or alternative image of a row.

		Args:
			row: Attendee row.

		Returns:
			Decoded image, or AssetFailure when it cannot be fetched or decoded.
		"""
		address = subject_image_address(row)
		if address == RESERVED_IMAGE_ADDRESS:
			image_reader = self.resolve_static(address)
			if image_reader is None:
				return AssetFailure(address=address, reason="built-in logo unavailable")
			return image_reader
		asset = self.resolve_subject_asset(row)
		if isinstance(asset, AssetFailure):
			LOGGER.info("Subject image %s unavailable: %s", address, asset.reason)
			return asset
		try:
			return decode_image(asset)
		except AssetFetchError as error:
			LOGGER.info("Subject image %s unavailable: %s", address, error)
			return AssetFailure(address=address, reason=str(error))

	def resolve_static(self, address: str) -> reportlab.lib.utils.ImageReader | None:
		"""
		Resolve a logo shared by every page of the run.

		Failures are logged and cached as None.

		Args:
			address: Asset address.

		Returns:
			Decoded image or None.
		"""
		if address in self._static_cache:
			return self._static_cache[address]
		result = self.load_image(address)
		if isinstance(result, AssetFailure):
			LOGGER.warning("Static asset %s unavailable: %s", address, result.reason)
			image_reader = None
		else:
			image_reader = result
		self._static_cache[address] = image_reader
		return image_reader
