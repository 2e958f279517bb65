import json
from pathlib import Path

from src.config.logger_config import logger
from src.release_cleanup.application.contracts import RunReportRecord
from src.release_cleanup.application.ports import RunReportSinkPort
from src.release_cleanup.domain.rules import make_report_filename


class JsonRunReportSink(RunReportSinkPort):
    def __init__(self, report_dir: str | Path) -> None:
        self.report_dir = Path(report_dir)
        self.report_dir.mkdir(parents=True, exist_ok=True)

    def write_report(self, report: RunReportRecord) -> str:
        report_path = self.report_dir / make_report_filename(report.package_name, report.run_id)
        report_path.write_text(
            json.dumps(report.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info("Run report written: report_path={}", str(report_path))
        return str(report_path)
