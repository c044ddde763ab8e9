from typing import List
from fastapi import APIRouter, Depends

from imei_registry.models.report import CheckResult, Report, ReportCreate, ReportUpdate
from imei_registry.services.report_service import ReportService
from imei_registry.services.session_authority import SessionHandle
from imei_registry.utils.auth_helper import get_report_service, get_session_handle

router = APIRouter()


@router.post("/report", status_code=201)
def submit_report(
    form: ReportCreate,
    service: ReportService = Depends(get_report_service),
):
    ref = service.submit_report(form)
    return {"ok": True, "ref": ref}


@router.get("/check", response_model=CheckResult)
def check_imei(
    imei: str = "",
    service: ReportService = Depends(get_report_service),
):
    return service.check_imei(imei)


# Admin
@router.get("/reports", response_model=List[Report])
def list_reports(
    handle: SessionHandle = Depends(get_session_handle),
    service: ReportService = Depends(get_report_service),
):
    return service.list_reports(handle)


@router.patch("/reports/{ref}")
def update_report(
    ref: str,
    updates: ReportUpdate,
    handle: SessionHandle = Depends(get_session_handle),
    service: ReportService = Depends(get_report_service),
):
    service.update_report(handle, ref, updates.status, updates.is_public)
    return {"ok": True}
