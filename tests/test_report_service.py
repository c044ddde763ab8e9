import pytest
from datetime import timedelta
from sqlmodel import Session

from imei_registry.db.report_store import ReportStore
from imei_registry.db.session_store import SessionStore
from imei_registry.models.report import ReportCreate
from imei_registry.services.report_service import ReportService
from imei_registry.services.session_authority import SessionAuthority, SessionHandle
from imei_registry.utils.errors import (
    NotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)

from conftest import VALID_IMEI

SECRET = "s3cret-admin"


class UntouchableStore:
    """Fails the test if the service reaches the store at all."""

    def __getattr__(self, name):
        raise AssertionError(f"store.{name} must not be called")


class BrokenStore:
    def insert(self, report):
        raise StoreError("connection reset")

    def find_by_imei(self, imei):
        raise StoreError("connection reset")


@pytest.fixture(name="authority")
def authority_fixture(session: Session):
    return SessionAuthority(SessionStore(session), admin_secret=SECRET, ttl=timedelta(hours=8))


@pytest.fixture(name="service")
def service_fixture(session: Session, authority: SessionAuthority):
    return ReportService(ReportStore(session), authority)


@pytest.fixture(name="admin")
def admin_fixture(authority: SessionAuthority):
    handle = SessionHandle()
    assert authority.login(handle, SECRET)
    return handle


def test_submit_returns_unique_refs(service: ReportService):
    refs = {service.submit_report(ReportCreate(imei=VALID_IMEI, status=status)) for status in ("lost", "stolen", "lost")}
    assert len(refs) == 3


@pytest.mark.parametrize("status", ["recovered", "LOST", "", None, "found"])
def test_submit_rejects_bad_status(service: ReportService, status):
    with pytest.raises(ValidationError, match="Invalid status"):
        service.submit_report(ReportCreate(imei=VALID_IMEI, status=status))


@pytest.mark.parametrize("imei", ["490154203237519", "", None, "12345", 490154203237518])
def test_submit_rejects_bad_imei(service: ReportService, imei):
    with pytest.raises(ValidationError, match="Invalid IMEI"):
        service.submit_report(ReportCreate(imei=imei, status="lost"))


def test_submit_trims_imei(service: ReportService, admin: SessionHandle):
    service.submit_report(ReportCreate(imei=f"  {VALID_IMEI} ", status="stolen"))
    assert service.list_reports(admin)[0].imei == VALID_IMEI


def test_validation_happens_before_store():
    service = ReportService(UntouchableStore(), authority=None)
    with pytest.raises(ValidationError):
        service.submit_report(ReportCreate(imei="123", status="lost"))
    with pytest.raises(ValidationError):
        service.check_imei("not-an-imei")


def test_private_report_hidden_from_check_but_listed(service: ReportService, admin: SessionHandle):
    ref = service.submit_report(ReportCreate(imei=VALID_IMEI, status="lost", is_public=False))

    assert service.check_imei(VALID_IMEI).count == 0
    assert [r.ref for r in service.list_reports(admin)] == [ref]


def test_check_returns_public_fields_only(service: ReportService):
    service.submit_report(ReportCreate(
        imei=VALID_IMEI,
        status="stolen",
        is_public=True,
        brand="Acme",
        contact_email="owner@example.com",
        police_report="PR-77",
    ))

    result = service.check_imei(f" {VALID_IMEI} ")

    assert result.imei == VALID_IMEI
    assert result.count == 1
    dumped = result.reports[0].model_dump()
    assert dumped["brand"] == "Acme"
    assert "contact_email" not in dumped
    assert "police_report" not in dumped


def test_recovered_can_be_reopened(service: ReportService, admin: SessionHandle):
    ref = service.submit_report(ReportCreate(imei=VALID_IMEI, status="lost"))

    service.update_report(admin, ref, "recovered", True)
    assert service.check_imei(VALID_IMEI).reports[0].status == "recovered"

    service.update_report(admin, ref, "stolen", True)
    assert service.check_imei(VALID_IMEI).reports[0].status == "stolen"


def test_update_can_hide_report(service: ReportService, admin: SessionHandle):
    ref = service.submit_report(ReportCreate(imei=VALID_IMEI, status="lost"))

    service.update_report(admin, ref, "lost", False)

    assert service.check_imei(VALID_IMEI).count == 0


def test_update_rejects_bad_status(service: ReportService, admin: SessionHandle):
    ref = service.submit_report(ReportCreate(imei=VALID_IMEI, status="lost"))
    with pytest.raises(ValidationError):
        service.update_report(admin, ref, "destroyed", True)


def test_update_unknown_ref(service: ReportService, admin: SessionHandle):
    with pytest.raises(NotFoundError):
        service.update_report(admin, "no-such-ref", "lost", True)


def test_admin_operations_need_admin_and_never_touch_store(authority: SessionAuthority):
    service = ReportService(UntouchableStore(), authority)
    anonymous = SessionHandle()

    with pytest.raises(UnauthorizedError):
        service.list_reports(anonymous)
    with pytest.raises(UnauthorizedError):
        service.update_report(anonymous, "some-ref", "recovered", True)
    with pytest.raises(UnauthorizedError):
        service.update_report(SessionHandle(id="forged"), "some-ref", "bogus", True)


def test_store_errors_propagate(authority: SessionAuthority):
    service = ReportService(BrokenStore(), authority)

    with pytest.raises(StoreError):
        service.submit_report(ReportCreate(imei=VALID_IMEI, status="lost"))
    with pytest.raises(StoreError):
        service.check_imei(VALID_IMEI)


@pytest.mark.parametrize("flag", [None, False, 0, ""])
def test_submit_without_public_flag_stays_private(service: ReportService, admin: SessionHandle, flag):
    service.submit_report(ReportCreate(imei=VALID_IMEI, status="lost", is_public=flag))

    assert service.check_imei(VALID_IMEI).count == 0
    assert service.list_reports(admin)[0].is_public is False


@pytest.mark.parametrize("flag", [True, 1, "yes"])
def test_submit_truthy_public_flag(service: ReportService, flag):
    service.submit_report(ReportCreate(imei=VALID_IMEI, status="lost", is_public=flag))
    assert service.check_imei(VALID_IMEI).count == 1
