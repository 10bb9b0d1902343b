"""KCC farm registry lookup."""

import json
from pathlib import Path
from typing import Optional

from farmrisk.logger import get_logger
from farmrisk.models.farm import FarmRecord

logger = get_logger(__name__)

# Demo registry used when no registry file is configured
SAMPLE_RECORDS = [
    {
        "farm_id": "KCC001",
        "farmer_name": "Ramesh Patil",
        "phone": "9876543210",
        "village": "Shirur",
        "district": "Pune",
        "state": "Maharashtra",
        "land_acres": 10.0,
        "crops": ["soybean", "wheat", "onion"],
        "repayment_rate_percent": 95.0,
        "outstanding_amount": 50000.0,
        "has_insurance_history": True,
    },
    {
        "farm_id": "KCC002",
        "farmer_name": "Suresh Jadhav",
        "phone": "9823456701",
        "village": "Paranda",
        "district": "Osmanabad",
        "state": "Maharashtra",
        "land_acres": 2.0,
        "crops": ["cotton"],
        "repayment_rate_percent": 60.0,
        "outstanding_amount": 85000.0,
    },
    {
        "farm_id": "KCC003",
        "farmer_name": "Anita Shinde",
        "phone": "9765432180",
        "village": "Niphad",
        "district": "Nashik",
        "state": "Maharashtra",
        "land_acres": 6.0,
        "crops": ["grapes", "onion"],
        "repayment_rate_percent": 82.0,
        "outstanding_amount": 120000.0,
    },
]


class FarmRegistry:
    """Read-only lookup of KCC farm records by identifier."""

    def __init__(self, records: Optional[list[FarmRecord]] = None):
        if records is None:
            records = [FarmRecord(**r) for r in SAMPLE_RECORDS]
        self._records = {r.farm_id.upper(): r for r in records}
        logger.info(f"FarmRegistry initialized with {len(self._records)} records")

    @classmethod
    def from_file(cls, path: Path) -> "FarmRegistry":
        """Load registry records from a JSON array."""
        logger.info(f"Loading farm registry from {path}")
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return cls([FarmRecord(**item) for item in data])

    def lookup(self, farm_id: str) -> Optional[FarmRecord]:
        """Return the record for a farm, or None if it is not registered."""
        record = self._records.get(farm_id.strip().upper())
        if record is None:
            logger.info(f"Registry miss for farm {farm_id}")
        else:
            logger.debug(f"Registry hit for farm {farm_id}: {record.land_acres} acres")
        return record
