from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Callable, TextIO

from mixcloud_uploader.errors import DateInputError, InputError
from mixcloud_uploader.models import PremiumOptions
from mixcloud_uploader.reporting import Terminal

DATE_INPUT_FORMAT = "%d/%m/%Y %H:%M"
_DATE_INPUT_PATTERN = re.compile(r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}")
RFC1123_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"

_YES = {"y", "yes"}
_NO = {"n", "no"}


def split_tags(raw: str) -> list[str]:
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def parse_date_input(text: str) -> datetime:
    """Parse ``DD/MM/YYYY HH:MM`` as a local, timezone-aware datetime."""
    text = text.strip()
    # strptime alone would also take single-digit fields.
    if not _DATE_INPUT_PATTERN.fullmatch(text):
        raise DateInputError(f"Incorrect date format - {text!r} does not match DD/MM/YYYY HH:MM")
    try:
        naive = datetime.strptime(text, DATE_INPUT_FORMAT)
    except ValueError as exc:
        raise DateInputError(f"Incorrect date format - {exc}") from exc
    return naive.astimezone()


def format_rfc3339_utc(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _local_now() -> datetime:
    return datetime.now().astimezone()


class Prompter:
    """Line-oriented questions asked on the terminal.

    ``stream`` replaces stdin when given; end of input aborts the run.
    """

    def __init__(
        self,
        terminal: Terminal,
        stream: TextIO | None = None,
        now: Callable[[], datetime] = _local_now,
    ) -> None:
        self.terminal = terminal
        self.stream = stream
        self.now = now

    def ask(self, question: str) -> str:
        try:
            answer = self.terminal.out.input(question, markup=False, stream=self.stream)
        except EOFError as exc:
            raise InputError("Aborted.") from exc
        if self.stream is not None and not answer:
            raise InputError("Aborted.")
        return answer.strip()

    def confirm(self, question: str) -> bool:
        answer = self.ask(f"{question} [y/n] ").lower()
        while answer not in _YES and answer not in _NO:
            answer = self.ask("Please type yes or no and then press enter: ").lower()
        return answer in _YES

    def basic_input(self, default_tags: str) -> tuple[str, str, list[str]]:
        name = self.ask("Enter a name for the cloudcast: ")
        description = self.ask("Enter a description: ")
        tags = self.ask(f"Enter tags (comma separated) [{default_tags}]: ")
        return name, description, split_tags(tags or default_tags)

    def premium_input(self) -> PremiumOptions:
        options = PremiumOptions()
        options.disable_comments = self.confirm("Disable comments?")
        options.hide_stats = self.confirm("Hide statistics?")
        options.unlisted = self.confirm("Set to unlisted?")
        if self.confirm("Set publish date?"):
            options.publish_date = self.publish_date()
        return options

    def publish_date(self) -> str:
        """Ask until a future date is given; return it as RFC-3339 UTC.

        A malformed date raises DateInputError instead of asking again.
        """
        while True:
            current = self.now()
            offset = current.utcoffset()
            hours = int(offset.total_seconds() / 3600) if offset is not None else 0
            answer = self.ask(
                f"Enter a publish date in {current.tzname()} ({hours:+d} GMT) [DD/MM/YYYY HH:MM]: "
            )
            moment = parse_date_input(answer)
            if moment > current:
                return format_rfc3339_utc(moment)
            self.terminal.error(f"Date {moment.strftime(RFC1123_FORMAT)} is not in the future")
