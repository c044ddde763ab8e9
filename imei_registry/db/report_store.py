import logging
from typing import List

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from imei_registry.models.report import PublicReport, Report
from imei_registry.utils import settings
from imei_registry.utils.errors import ConflictError, StoreError

logger = logging.getLogger(__name__)

PUBLIC_COLUMNS = (
    Report.ref,
    Report.imei,
    Report.status,
    Report.brand,
    Report.model,
    Report.color,
    Report.lost_date,
    Report.location,
    Report.created_at,
)


class ReportStore:
    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def initialize_schema(engine: Engine) -> bool:
        # False instead of raising; the app keeps serving in degraded mode
        try:
            SQLModel.metadata.create_all(engine)
        except SQLAlchemyError:
            logger.exception("Failed to initialize database schema")
            return False

        logger.info("Database schema ready")
        return True

    def insert(self, report: Report) -> Report:
        try:
            self.session.add(report)
            self.session.commit()
            self.session.refresh(report)
        except IntegrityError as e:
            self.session.rollback()
            raise ConflictError(f"Report {report.ref} conflicts with an existing row") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Failed to insert report {report.ref}") from e

        return report

    def find_by_imei(self, imei: str) -> List[PublicReport]:
        query = (
            select(*PUBLIC_COLUMNS)
            .where(Report.imei == imei)
            .where(Report.is_public == True)  # noqa: E712
            .order_by(Report.created_at.desc(), Report.id.desc())
        )

        try:
            rows = self.session.exec(query).all()
        except SQLAlchemyError as e:
            raise StoreError("Failed to look up reports by IMEI") from e

        return [PublicReport(**row._asdict()) for row in rows]

    def list_all(self, limit: int = settings.REPORT_LIST_LIMIT) -> List[Report]:
        query = (
            select(Report)
            .order_by(Report.created_at.desc(), Report.id.desc())
            .limit(min(limit, settings.REPORT_LIST_LIMIT))
        )

        try:
            return list(self.session.exec(query).all())
        except SQLAlchemyError as e:
            raise StoreError("Failed to list reports") from e

    def update_status(self, ref: str, status: str, is_public: bool) -> bool:
        # False when no row has this ref
        try:
            report = self.session.exec(
                select(Report).where(Report.ref == ref)
            ).first()

            if not report:
                return False

            report.status = status
            report.is_public = is_public

            self.session.add(report)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Failed to update report {ref}") from e

        return True
