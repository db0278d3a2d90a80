"""Application service: manual re-evaluation of the pending queue."""

from __future__ import annotations

from armory.application.dto import ScanReportDTO
from armory.application.single_writer import SingleWriter
from armory.domain.repository.order_repository import OrderRepository
from armory.domain.repository.stock_repository import StockRepository
from armory.domain.service.admission_scan_service import AdmissionScanService


class RunAdmissionScanHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        stock_repo: StockRepository,
        writer: SingleWriter | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._stock_repo = stock_repo
        self._writer = writer or SingleWriter.shared()

    def handle(self) -> ScanReportDTO:
        """Run the scan and report what it did.

        Unlike the scans triggered after other mutations, this one is the
        caller's primary operation, so its errors are raised.
        """
        with self._writer:
            result = AdmissionScanService(self._order_repo, self._stock_repo).run()
        return ScanReportDTO(
            examined=result.examined,
            promoted=list(result.promoted),
            halted_at=result.halted_at,
        )
