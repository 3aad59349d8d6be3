"""Command-line entry point."""
from __future__ import annotations

import logging
from typing import Sequence

from macosify_ubuntu.config import parse_args
from services.orchestrator import MacosifyService, summarize
from services.preferences import ApplicationResult, StepResult
from services.runner import MissingToolError

logger = logging.getLogger(__name__)

RESULT_LABELS = {
    ApplicationResult.APPLIED: "OK",
    ApplicationResult.SKIPPED_CAPABILITY_MISSING: "SKIPPED",
    ApplicationResult.FAILED_EXTERNAL_TOOL: "FAILED",
}


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def format_result(result: StepResult) -> str:
    detail = f" - {result.detail}" if result.detail else ""
    return f"{result.name}: {RESULT_LABELS[result.result]}{detail}"


def main(argv: Sequence[str] | None = None, service: MacosifyService | None = None) -> int:
    config = parse_args(argv)
    configure_logging(config.verbose)
    service = service or MacosifyService(config)
    try:
        service.ensure_prerequisites()
    except MissingToolError as exc:
        logger.error("%s. This script requires GNOME + gsettings + gnome-extensions.", exc)
        return 1

    results = service.run()
    for result in results:
        logger.info(format_result(result))
    failed = [result.name for result in results if not result.success]
    if failed:
        logger.warning("%d step(s) failed: %s", len(failed), ", ".join(failed))
    counts = summarize(results)
    logger.info(
        "Summary: %d applied, %d skipped, %d failed",
        counts[ApplicationResult.APPLIED],
        counts[ApplicationResult.SKIPPED_CAPABILITY_MISSING],
        counts[ApplicationResult.FAILED_EXTERNAL_TOOL],
    )
    logger.info("Done. On Wayland, log out/in if shell/icons don't refresh.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
