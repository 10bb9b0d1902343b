"""Farm and assessment request data models."""

from typing import Literal

from pydantic import BaseModel, Field

IrrigationType = Literal["rainfed", "flood", "drip", "sprinkler", "canal", "borewell"]

REQUIRED_FIELDS = ("farm_id", "crop_type", "season", "gps_latitude", "gps_longitude")


class AssessmentRequest(BaseModel):
    """Inbound request for a farm risk assessment.

    Required fields are typed as optional so that a missing value can be
    reported as a validation error listing every absent field, rather than
    failing on the first one.
    """

    farm_id: str | None = Field(default=None, description="KCC registry identifier")
    crop_type: str | None = None
    season: str | None = None
    gps_latitude: float | None = Field(default=None, ge=-90, le=90)
    gps_longitude: float | None = Field(default=None, ge=-180, le=180)
    irrigation_type: IrrigationType = "rainfed"
    borewell_count: int = Field(default=0, ge=0)
    borewell_depth_ft: float = Field(default=0, ge=0)
    has_canal_access: bool = False
    owns_tractor: bool = False
    has_storage: bool = False
    livestock_count: int = Field(default=0, ge=0)
    sum_insured: float | None = Field(default=None, gt=0, description="Defaults to the configured sum")
    declared_land_acres: float | None = Field(
        default=None, gt=0, description="Land size claimed by the farmer; checked against the registry"
    )

    def missing_fields(self) -> list[str]:
        """Names of required fields that are absent or blank."""
        missing = []
        for name in REQUIRED_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing


class FarmRecord(BaseModel):
    """Authoritative farm record from the KCC registry."""

    farm_id: str
    farmer_name: str
    phone: str = ""
    village: str = ""
    district: str = ""
    state: str | None = None
    land_acres: float = Field(gt=0)
    crops: list[str] = Field(default_factory=list, description="Registered crop types")
    repayment_rate_percent: float = Field(ge=0, le=100)
    outstanding_amount: float = Field(default=0, ge=0)
    has_insurance_history: bool = False

    @property
    def crop_count(self) -> int:
        """Number of distinct registered crops (at least one)."""
        return max(1, len({c.strip().lower() for c in self.crops if c.strip()}))


class FarmProfile(BaseModel):
    """Farm state the suggestion rules are evaluated against."""

    irrigation_type: str
    crop_count: int = Field(ge=1)
    has_livestock: bool
    has_storage: bool
    has_canal_access: bool
    land_acres: float = Field(gt=0)

    @classmethod
    def from_sources(cls, request: AssessmentRequest, record: FarmRecord) -> "FarmProfile":
        """Registry supplies land and crops; the request supplies operations."""
        return cls(
            irrigation_type=request.irrigation_type,
            crop_count=record.crop_count,
            has_livestock=request.livestock_count > 0,
            has_storage=request.has_storage,
            has_canal_access=request.has_canal_access,
            land_acres=record.land_acres,
        )
