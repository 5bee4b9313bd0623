"""Stats presenter: per-date activity counts for the bar chart."""

from datetime import date
from typing import List, Optional, Tuple

from ..models import DateStats
from ..services import StoreError, WordStore
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

# (field, legend label, bar color)
SERIES = (
    ("add", "Words added", "#8884d8"),
    ("update", "Words updated", "#82ca9d"),
    ("quiz", "Quizzes taken", "#ffc658"),
)


def _date_key(stat: DateStats) -> Tuple[date, str]:
    try:
        return date.fromisoformat(stat.date[:10]), stat.date
    except ValueError:
        return date.max, stat.date


class StatsPresenter:
    """Fetches pre-aggregated stats and orders them for display."""

    def __init__(self, store: WordStore) -> None:
        self.store = store
        self.stats: List[DateStats] = []
        self.error: Optional[str] = None

    async def load(self) -> bool:
        try:
            stats = await self.store.stats_by_date()
        except StoreError as e:
            logger.error("Failed to load statistics: %s", e)
            self.error = f"Error: {e}"
            return False

        self.stats = sorted(stats, key=_date_key)
        self.error = None
        return True

    def series(self) -> List[Tuple[str, str, str]]:
        """Series to draw; quiz only appears when some date carries it."""
        has_quiz = any(stat.quiz is not None for stat in self.stats)
        return [s for s in SERIES if s[0] != "quiz" or has_quiz]

    def max_value(self) -> int:
        keys = [key for key, _, _ in self.series()]
        return max(
            (getattr(stat, key) or 0 for stat in self.stats for key in keys),
            default=0,
        )
