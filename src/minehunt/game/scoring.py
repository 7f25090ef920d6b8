"""
Score reporters for Minehunt.

A reporter receives the total click count once the last level of a
session is cleared. The controller never lets a reporter failure
undo a win, so reporters only need to worry about storing scores.
"""
import json
import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Protocol, Union

from .errors import ScoreReportError

logger = logging.getLogger(__name__)


class ScoreReporter(Protocol):
    """Anything that accepts a final click total."""

    def submit(self, total_clicks: int) -> None:
        ...


# ============================================================================
# In-Memory Reporter
# ============================================================================

class InMemoryScoreReporter:
    """Keeps submitted totals in a list, newest last."""

    def __init__(self) -> None:
        self.submissions: List[int] = []

    def submit(self, total_clicks: int) -> None:
        self.submissions.append(total_clicks)


# ============================================================================
# JSON Record Store
# ============================================================================

@dataclass(frozen=True)
class ScoreRecord:
    """
    A stored session result.

    Attributes:
        id: Millisecond timestamp used as record identifier.
        user_name: Name the score is filed under.
        total_clicks: Clicks needed to clear every level.
        created_at: ISO-8601 creation time in UTC.
    """

    id: int
    user_name: str
    total_clicks: int
    created_at: str


class JsonScoreReporter:
    """
    Appends session results to a JSON array file.

    The file is created on first submission. Records are kept in
    submission order.
    """

    def __init__(self, path: Union[str, Path], user_name: str = "GUEST") -> None:
        """
        Initialize the reporter.

        Args:
            path: Location of the record file.
            user_name: Name stored with every record.
        """
        self.path = Path(path)
        self.user_name = user_name

    def submit(self, total_clicks: int) -> None:
        """
        Store a new record.

        Raises:
            ScoreReportError: If the file cannot be read or written.
        """
        now = datetime.now(timezone.utc)
        record = ScoreRecord(
            id=int(now.timestamp() * 1000),
            user_name=self.user_name,
            total_clicks=total_clicks,
            created_at=now.isoformat(),
        )
        records = self.load_records()
        records.append(record)
        self._write(records)
        logger.debug("Stored score %d for %s", total_clicks, self.user_name)

    def load_records(self) -> List[ScoreRecord]:
        """
        Read every stored record.

        Returns:
            Records in submission order, empty if no file exists yet.

        Raises:
            ScoreReportError: If the file is unreadable or not a list
                of records.
        """
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise ScoreReportError(f"Could not read scores: {exc}") from exc

        if not isinstance(data, list):
            raise ScoreReportError("Could not read scores: expected a JSON list")
        try:
            return [ScoreRecord(**entry) for entry in data]
        except TypeError as exc:
            raise ScoreReportError(f"Could not read scores: {exc}") from exc

    def top(self, n: int = 3) -> List[ScoreRecord]:
        """
        Ranking of the stored records.

        Args:
            n: Number of records to return.

        Returns:
            Up to n records with the fewest clicks, earliest first on ties.
        """
        records = self.load_records()
        return sorted(records, key=lambda record: record.total_clicks)[:n]

    def best(self) -> Optional[ScoreRecord]:
        """Record with the fewest clicks, earliest wins ties."""
        ranking = self.top(1)
        return ranking[0] if ranking else None

    def _write(self, records: List[ScoreRecord]) -> None:
        """Replace the file content with the given records."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump([asdict(record) for record in records], f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise ScoreReportError(f"Could not save score: {exc}") from exc


# ============================================================================
# Background Reporter
# ============================================================================

class BackgroundScoreReporter:
    """
    Runs another reporter on a worker thread.

    ``submit`` returns immediately; failures are logged when the
    worker finishes instead of reaching the caller.
    """

    def __init__(self, inner: ScoreReporter) -> None:
        self.inner = inner
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="score-reporter"
        )

    def submit(self, total_clicks: int) -> None:
        future = self._executor.submit(self.inner.submit, total_clicks)
        future.add_done_callback(self._log_failure)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker, optionally waiting for pending submissions."""
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _log_failure(future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error(
                "Background score submission failed",
                exc_info=(type(exc), exc, exc.__traceback__),
            )
