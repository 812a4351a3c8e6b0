import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from reportflow.config.settings import Settings
from reportflow.logging.logger import Log
from reportflow.processor.file_loader import resolve_local_path
from reportflow.processor.processor import build_report_processor
from reportflow.storage.postgres_store import PostgresRecordStore


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="reportflow",
        description="Process one medical report: extract, analyze, illustrate, persist.",
    )
    parser.add_argument("file_uri", help="Local path, file:// URI or http(s) URL")
    parser.add_argument("--report-type", default="Medical", help="e.g. MRI, CT Scan, Blood Test")
    parser.add_argument("--mime-type", help="Defaults to a guess from the file extension")
    parser.add_argument(
        "--report-id",
        help="Existing report id; a new report row is created when omitted",
    )
    return parser.parse_args(argv)


def guess_mime_type(file_uri: str) -> str:
    path = resolve_local_path(file_uri)
    guessed, _ = mimetypes.guess_type(str(path) if path is not None else file_uri)
    return guessed or "application/octet-stream"


async def run(args: argparse.Namespace, settings: Settings) -> bool:
    """Process the report named on the command line. Returns True on success."""
    mime_type = args.mime_type or guess_mime_type(args.file_uri)
    async with build_report_processor(settings) as processor:
        store = processor.store
        if isinstance(store, PostgresRecordStore):
            await store.ensure_schema()

        report_id = args.report_id
        if report_id is None:
            path = resolve_local_path(args.file_uri)
            report = await store.insert_report(
                file_url=args.file_uri,
                report_type=args.report_type,
                original_filename=Path(path).name if path is not None else None,
            )
            report_id = report.id

        result = await processor.process_report(
            report_id, args.file_uri, mime_type, args.report_type
        )
        if not result.success:
            Log.error(f"Report {report_id} failed: {result.error}", report_id=report_id)
            return False

        processed = await processor.get_processed_report(report_id)
        if processed.analysis is not None:
            print(processed.analysis.ai_summary)
        for image in processed.images:
            print(image.image_url)
        return True


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build the pipeline -> process one report."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    try:
        ok = asyncio.run(run(args, settings))
    except Exception:
        Log.exception("Report processing crashed")
        return 2
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
