"""SQLite audit store for assessments that raise fraud flags."""

import json
import sqlite3
import uuid
from datetime import date
from pathlib import Path
from typing import List, Optional, Protocol

from farmrisk.errors import PersistenceFailure
from farmrisk.logger import get_logger
from farmrisk.models.farm import FarmRecord
from farmrisk.models.fraud import FraudAssessment, FraudCase

logger = get_logger(__name__)

DB_PATH = Path("fraud_cases.db")


class CaseStore(Protocol):
    def save(self, case: FraudCase) -> None: ...


class FraudCaseStore:
    """SQLite store of fraud cases, one row per case.

    The database is opened on first use, so constructing a store never
    touches the filesystem. Any SQLite error surfaces as PersistenceFailure.
    """

    def __init__(self, db_path: Path = DB_PATH):
        self.db_path = db_path
        self._initialized = False
        logger.debug(f"FraudCaseStore configured with db: {self.db_path}")

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        if not self._initialized:
            self._init_db(conn)
            self._initialized = True
        return conn

    def _init_db(self, conn: sqlite3.Connection):
        """Initialize the database table."""
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS fraud_cases (
                id TEXT PRIMARY KEY,
                farm_id TEXT NOT NULL,
                severity TEXT NOT NULL,
                fraud_score REAL NOT NULL,
                assessment_date TEXT NOT NULL,
                status TEXT NOT NULL,
                data TEXT NOT NULL
            )
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_fraud_cases_farm ON fraud_cases(farm_id)")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_fraud_cases_severity ON fraud_cases(severity)")
        conn.commit()

    def save(self, case: FraudCase) -> None:
        """Insert a case; saving the same id twice keeps a single row."""
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO fraud_cases
                    (id, farm_id, severity, fraud_score, assessment_date, status, data)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        case.id,
                        case.farm_id,
                        case.severity,
                        case.fraud_score,
                        case.assessment_date,
                        case.status,
                        json.dumps(case.model_dump()),
                    ),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Could not save fraud case {case.id}: {e}") from e
        logger.info(f"Saved fraud case {case.id} for farm {case.farm_id} ({case.severity})")

    def get(self, case_id: str) -> Optional[FraudCase]:
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT data FROM fraud_cases WHERE id = ?", (case_id,)).fetchone()
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Could not read fraud case {case_id}: {e}") from e
        if row is None:
            return None
        return FraudCase(**json.loads(row[0]))

    def list_cases(self, limit: int = 100, severity: Optional[str] = None) -> List[FraudCase]:
        """Most recent cases first, optionally filtered by severity."""
        query = "SELECT data FROM fraud_cases"
        params: list = []
        if severity:
            query += " WHERE severity = ?"
            params.append(severity)
        query += " ORDER BY assessment_date DESC, rowid DESC LIMIT ?"
        params.append(limit)

        try:
            with self._connect() as conn:
                rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Could not list fraud cases: {e}") from e

        cases = []
        for row in rows:
            try:
                cases.append(FraudCase(**json.loads(row[0])))
            except Exception as e:
                logger.error(f"Failed to parse fraud case row: {e}")
        return cases


class FraudCaseRecorder:
    """Best-effort audit trail for assessments that raise fraud flags."""

    def __init__(self, store: CaseStore):
        self.store = store

    def record(self, farm_id: str, farm: FarmRecord, fraud: FraudAssessment) -> Optional[FraudCase]:
        """Persist a case if the assessment has flags.

        Returns the saved case, or None when there was nothing to record or
        the store failed. Store failures are logged and never raised.
        """
        if not fraud.flags:
            return None

        case = FraudCase(
            id=f"fraud_{uuid.uuid4().hex}",
            farm_id=farm_id,
            farmer_name=farm.farmer_name,
            phone=farm.phone,
            severity=fraud.severity,
            flags=fraud.flags,
            assessment_date=date.today().isoformat(),
            fraud_score=fraud.fraud_score,
        )
        try:
            self.store.save(case)
        except PersistenceFailure as e:
            logger.error(f"Fraud case not recorded: {e}")
            return None
        except Exception as e:
            logger.error(f"Fraud case not recorded, unexpected store error: {e}", exc_info=True)
            return None
        return case
