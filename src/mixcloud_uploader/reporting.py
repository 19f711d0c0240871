from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from rich.console import Console

from mixcloud_uploader.models import Track, UploadResponse
from mixcloud_uploader.tracklist import format_tracklist

SERVICE_HOST = "mixcloud.com"


class Terminal:
    """Colored stdout/stderr output used by every interactive step."""

    def __init__(self, out: Console | None = None, err: Console | None = None) -> None:
        self.out = out or Console(highlight=False, soft_wrap=True)
        self.err = err or Console(stderr=True, highlight=False, soft_wrap=True)

    def message(self, text: str, style: str | None = None, end: str = "\n") -> None:
        self.out.print(text, style=style, markup=False, end=end)

    def success(self, text: str) -> None:
        self.message(text, style="green")

    def error(self, text: str) -> None:
        self.err.print(text, style="bold red", markup=False)

    def dump(self, data: Any) -> None:
        self.err.print_json(data=data, default=str)


@dataclass(slots=True)
class UploadOutcome:
    success: bool
    message: str
    url: str | None = None
    details: Any = None


def share_url(key: str) -> str:
    return f"https://{SERVICE_HOST}{key}edit"


def reconcile_response(response: UploadResponse) -> UploadOutcome:
    """Turn a decoded upload reply into a success/failure outcome.

    An ``error`` object always means failure, whatever else is present. Success
    requires a ``result`` whose ``success`` flag is set; any other shape is a
    generic failure.
    """
    if response.error is not None:
        message = response.error.message or response.error.type or "Unknown API error"
        return UploadOutcome(success=False, message=message, details=response.details)

    if response.result is not None and response.result.success:
        return UploadOutcome(
            success=True,
            message="Successfully uploaded file",
            url=share_url(response.result.key),
        )

    return UploadOutcome(
        success=False,
        message="Error uploading, no success",
        details=response.model_dump(exclude_none=True),
    )


def report_outcome(outcome: UploadOutcome, tracklist: Sequence[Track] | None, terminal: Terminal) -> bool:
    if not outcome.success:
        terminal.error(outcome.message)
        if outcome.details:
            terminal.dump(outcome.details)
        return False

    terminal.success(outcome.message)
    terminal.success(outcome.url or "")
    if tracklist:
        terminal.message("Tracklist")
        for line in format_tracklist(list(tracklist)):
            terminal.message(line)
    return True
