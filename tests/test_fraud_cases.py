"""Tests for the fraud case store and recorder."""

from datetime import date

import pytest

from conftest import MemoryCaseStore
from farmrisk.errors import PersistenceFailure
from farmrisk.models.farm import FarmRecord
from farmrisk.models.fraud import FraudAssessment, FraudCase, FraudFlag
from farmrisk.services.fraud_cases import FraudCaseRecorder, FraudCaseStore


@pytest.fixture
def farm():
    return FarmRecord(
        farm_id="KCC002",
        farmer_name="Suresh Jadhav",
        phone="9823456701",
        land_acres=2,
        crops=["cotton"],
        repayment_rate_percent=60,
    )


def flagged(recommendation: str, score: float = 40) -> FraudAssessment:
    return FraudAssessment(
        flags=[FraudFlag(type="land_mismatch", details="Declared 5 acres, registry 2", weight=35)],
        fraud_score=score,
        recommendation=recommendation,
    )


def make_case(case_id: str, severity: str = "high", assessment_date: str = "2026-10-01") -> FraudCase:
    return FraudCase(
        id=case_id,
        farm_id="KCC002",
        farmer_name="Suresh Jadhav",
        severity=severity,
        flags=[FraudFlag(type="land_mismatch", details="mismatch", weight=35)],
        assessment_date=assessment_date,
        fraud_score=35,
    )


class TestFraudCaseStore:

    @pytest.fixture
    def store(self, tmp_path):
        return FraudCaseStore(tmp_path / "cases.db")

    def test_save_and_get(self, store):
        store.save(make_case("fraud_1"))

        case = store.get("fraud_1")

        assert case == make_case("fraud_1")
        assert store.get("fraud_missing") is None

    def test_save_is_idempotent_per_id(self, store):
        store.save(make_case("fraud_1"))
        store.save(make_case("fraud_1"))

        assert len(store.list_cases()) == 1

    def test_list_newest_first_and_filter(self, store):
        store.save(make_case("fraud_old", severity="medium", assessment_date="2026-09-01"))
        store.save(make_case("fraud_new", severity="critical", assessment_date="2026-10-10"))
        store.save(make_case("fraud_mid", severity="high", assessment_date="2026-10-01"))

        assert [c.id for c in store.list_cases()] == ["fraud_new", "fraud_mid", "fraud_old"]
        assert [c.id for c in store.list_cases(limit=1)] == ["fraud_new"]
        assert [c.id for c in store.list_cases(severity="critical")] == ["fraud_new"]

    def test_construction_does_not_open_database(self, tmp_path):
        db_path = tmp_path / "missing-dir" / "cases.db"

        store = FraudCaseStore(db_path)

        assert not db_path.exists()
        with pytest.raises(PersistenceFailure):
            store.list_cases()
        with pytest.raises(PersistenceFailure):
            store.get("fraud_1")

    def test_write_failure_raises_persistence_failure(self, tmp_path):
        store = FraudCaseStore(tmp_path / "cases.db")
        store.db_path = tmp_path / "missing-dir" / "cases.db"

        with pytest.raises(PersistenceFailure):
            store.save(make_case("fraud_1"))


class TestFraudCaseRecorder:

    def test_no_flags_means_no_write(self, farm):
        store = MemoryCaseStore()

        result = FraudCaseRecorder(store).record("KCC002", farm, FraudAssessment(fraud_score=0, recommendation="approve"))

        assert result is None
        assert store.attempts == 0

    @pytest.mark.parametrize(
        "recommendation, severity",
        [("reject", "critical"), ("field_verify", "high"), ("approve", "medium")],
    )
    def test_case_contents(self, farm, recommendation, severity):
        store = MemoryCaseStore()

        case = FraudCaseRecorder(store).record("KCC002", farm, flagged(recommendation))

        assert store.saved == [case]
        assert case.id.startswith("fraud_")
        assert case.farm_id == "KCC002"
        assert case.farmer_name == "Suresh Jadhav"
        assert case.phone == "9823456701"
        assert case.severity == severity
        assert case.fraud_score == 40
        assert case.assessment_date == date.today().isoformat()

    def test_each_case_gets_a_fresh_id(self, farm):
        store = MemoryCaseStore()
        recorder = FraudCaseRecorder(store)

        first = recorder.record("KCC002", farm, flagged("approve"))
        second = recorder.record("KCC002", farm, flagged("approve"))

        assert first.id != second.id

    def test_store_failure_is_swallowed(self, farm):
        store = MemoryCaseStore(fail=True)

        assert FraudCaseRecorder(store).record("KCC002", farm, flagged("reject", 70)) is None
        assert store.attempts == 1

    def test_unexpected_store_error_is_swallowed(self, farm):
        class BrokenStore:
            def save(self, case):
                raise OSError("read-only filesystem")

        assert FraudCaseRecorder(BrokenStore()).record("KCC002", farm, flagged("reject", 70)) is None

    def test_persists_to_sqlite(self, farm, tmp_path):
        store = FraudCaseStore(tmp_path / "cases.db")

        case = FraudCaseRecorder(store).record("KCC002", farm, flagged("field_verify"))

        assert store.get(case.id) == case
