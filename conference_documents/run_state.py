"""
Per-run warning and progress state.
"""

# Standard Library
import dataclasses
import logging
import math
import threading

# local repo modules
import conference_documents.records


DocumentWarning = conference_documents.records.DocumentWarning
WarningType = conference_documents.records.WarningType

LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class GenerationProgress:
	total_pages: int
	completed_pages: int


class WarningSink:
	"""
	Collects advisory warnings raised while laying out one run.
	"""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._warnings: list[DocumentWarning] = []

	def reset(self) -> None:
		with self._lock:
			self._warnings = []

	def add(self, warning: DocumentWarning) -> None:
		LOGGER.warning(
			"%s warning at %s: %s %s",
			warning.type.value,
			"/".join(warning.path),
			warning.message,
			warning.details or "",
		)
		with self._lock:
			self._warnings.append(warning)

	def get(self) -> tuple[DocumentWarning, ...]:
		with self._lock:
			return tuple(self._warnings)

	def by_type(self, warning_type: WarningType) -> tuple[DocumentWarning, ...]:
		return tuple(warning for warning in self.get() if warning.type == warning_type)


class ProgressReporter:
	"""
	Counts finished pages out of the run total.
	"""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._total = 0
		self._current = 0

	def reset(self, total: int | None = None) -> None:
		with self._lock:
			if total is not None:
				self._total = total
			self._current = 0

	def advance(self, total: int, current: int) -> None:
		"""
		Record that `current` of `total` pages are complete.

		Args:
			total: Page total for the run.
			current: Completed page count.
		"""
		if current < 0 or current > total:
			raise ValueError(f"progress {current}/{total} out of range")
		with self._lock:
			if current < self._current and total == self._total:
				raise ValueError(f"progress moved backwards: {self._current} -> {current}")
			self._total = total
			self._current = current

	def get(self) -> GenerationProgress:
		with self._lock:
			return GenerationProgress(total_pages=self._total, completed_pages=self._current)

	def percent(self) -> int:
		progress = self.get()
		if not progress.total_pages:
			return 0
		return math.floor(progress.completed_pages / progress.total_pages * 100)

	def text(self) -> str:
		progress = self.get()
		return f"{progress.completed_pages}/{progress.total_pages}"


class RunHandle:
	"""
	Warning and progress state for a single generation run.

	A handle is reset by the generator at the start of every run and can be
	polled from another thread while the run proceeds.
	"""

	def __init__(self) -> None:
		self.warnings = WarningSink()
		self.progress = ProgressReporter()

	def reset(self, total: int) -> None:
		self.progress.reset(total)
		self.warnings.reset()

	def warn(
		self,
		warning_type: WarningType,
		message: str,
		path: tuple[str, ...],
		details: str | None = None,
	) -> None:
		self.warnings.add(
			DocumentWarning(type=warning_type, message=message, path=tuple(path), details=details)
		)
