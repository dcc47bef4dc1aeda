import pytest

import conference_documents.records
import conference_documents.run_state


WarningType = conference_documents.records.WarningType
GenerationProgress = conference_documents.run_state.GenerationProgress


#============================================
def test_progress_percent_and_text() -> None:
	"""
	Percent is floored and text shows completed over total.
	"""
	progress = conference_documents.run_state.ProgressReporter()
	assert progress.percent() == 0
	assert progress.text() == "0/0"
	progress.reset(3)
	progress.advance(3, 1)
	assert progress.percent() == 33
	assert progress.text() == "1/3"
	progress.advance(3, 2)
	assert progress.percent() == 66
	progress.advance(3, 3)
	assert progress.get() == GenerationProgress(total_pages=3, completed_pages=3)
	assert progress.percent() == 100


#============================================
def test_progress_reset_keeps_total_without_argument() -> None:
	"""
	Resetting without a total keeps the previous one.
	"""
	progress = conference_documents.run_state.ProgressReporter()
	progress.reset(5)
	progress.advance(5, 4)
	progress.reset()
	assert progress.get() == GenerationProgress(total_pages=5, completed_pages=0)


#============================================
def test_progress_rejects_invalid_updates() -> None:
	"""
	Progress never exceeds the total or moves backwards.
	"""
	progress = conference_documents.run_state.ProgressReporter()
	progress.reset(2)
	with pytest.raises(ValueError):
		progress.advance(2, 3)
	progress.advance(2, 2)
	with pytest.raises(ValueError):
		progress.advance(2, 1)


#============================================
def test_warning_sink_keeps_arrival_order() -> None:
	"""
	Warnings are returned in order and cleared on reset.
	"""
	run = conference_documents.run_state.RunHandle()
	run.reset(2)
	run.warn(WarningType.IMAGE, "missing", ("0", "countryAlpha2Code"), details="not found")
	run.warn(WarningType.TEXT, "replaced", ("1", "name"))
	warnings = run.warnings.get()
	assert [warning.type for warning in warnings] == [WarningType.IMAGE, WarningType.TEXT]
	assert warnings[0].to_dict() == {
		"type": "IMAGE",
		"message": "missing",
		"path": ["0", "countryAlpha2Code"],
		"details": "not found",
	}
	assert "details" not in warnings[1].to_dict()
	assert len(run.warnings.by_type(WarningType.TEXT)) == 1

	run.reset(1)
	assert run.warnings.get() == ()
	assert run.progress.get() == GenerationProgress(total_pages=1, completed_pages=0)
