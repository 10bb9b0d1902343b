"""Exceptions raised by the assessment pipeline."""


class AssessmentError(Exception):
    """Base class for assessment pipeline errors."""


class RequestValidationError(AssessmentError):
    """Required assessment fields are missing or blank."""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = missing_fields
        super().__init__(f"Missing required fields: {', '.join(missing_fields)}")


class FarmNotFoundError(AssessmentError):
    """The registry has no record for the requested farm."""

    def __init__(self, farm_id: str):
        self.farm_id = farm_id
        super().__init__(f"Farm ID not found: {farm_id}")


class UpstreamDataDegraded(AssessmentError):
    """A satellite or weather provider could not supply live data."""


class PredictionFailure(AssessmentError):
    """The risk predictor was unreachable or returned an invalid payload."""


class PersistenceFailure(AssessmentError):
    """A fraud case could not be written to the store."""
