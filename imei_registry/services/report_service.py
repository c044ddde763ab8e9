"""
Report lifecycle: submission, public checks and admin review.

Statuses form a flat graph. A report is created as "lost" or "stolen"; an admin
may later move it to "lost", "stolen" or "recovered" from any state, including
back out of "recovered".
"""

import logging
import uuid
from typing import Any, List

from imei_registry.db.report_store import ReportStore
from imei_registry.models.report import (
    INITIAL_STATUSES,
    REPORT_STATUSES,
    CheckResult,
    Report,
    ReportCreate,
)
from imei_registry.services.session_authority import SessionAuthority, SessionHandle
from imei_registry.utils.errors import NotFoundError, StoreError, ValidationError
from imei_registry.utils.imei import is_valid_imei, mask_imei, normalize_imei

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, store: ReportStore, authority: SessionAuthority):
        self.store = store
        self.authority = authority

    def submit_report(self, form: ReportCreate) -> str:
        imei = normalize_imei(form.imei)
        if not is_valid_imei(imei):
            raise ValidationError("Invalid IMEI")

        if form.status not in INITIAL_STATUSES:
            raise ValidationError("Invalid status")

        report = Report(
            ref=str(uuid.uuid4()),
            imei=imei,
            status=form.status,
            brand=form.brand,
            model=form.model,
            color=form.color,
            description=form.description,
            lost_date=form.lost_date,
            location=form.location,
            contact_name=form.contact_name,
            contact_email=form.contact_email,
            contact_phone=form.contact_phone,
            police_report=form.police_report,
            is_public=bool(form.is_public),
        )

        try:
            self.store.insert(report)
        except StoreError:
            logger.exception("Failed to store report for IMEI %s", mask_imei(imei))
            raise

        logger.info("Report %s filed as %s for IMEI %s", report.ref, report.status, mask_imei(imei))
        return report.ref

    def check_imei(self, imei: Any) -> CheckResult:
        imei = normalize_imei(imei)
        if not is_valid_imei(imei):
            raise ValidationError("Invalid IMEI")

        try:
            reports = self.store.find_by_imei(imei)
        except StoreError:
            logger.exception("IMEI check failed for %s", mask_imei(imei))
            raise

        return CheckResult(imei=imei, count=len(reports), reports=reports)

    def list_reports(self, handle: SessionHandle) -> List[Report]:
        self.authority.require_admin(handle)

        try:
            return self.store.list_all()
        except StoreError:
            logger.exception("Failed to list reports")
            raise

    def update_report(self, handle: SessionHandle, ref: str, status: Any, is_public: Any) -> None:
        self.authority.require_admin(handle)

        if status not in REPORT_STATUSES:
            raise ValidationError("Invalid status")

        try:
            updated = self.store.update_status(ref, status, bool(is_public))
        except StoreError:
            logger.exception("Failed to update report %s", ref)
            raise

        if not updated:
            raise NotFoundError("Report not found")

        logger.info("Report %s set to %s", ref, status)
