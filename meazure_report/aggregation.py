import datetime
import logging
import typing

from .credentials import Credentials
from .meazure.model import AggregateResult, ProjectAggregate, TimeEntry

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 60 * 60


def local_utc_offset(now: datetime.datetime = None) -> int:
    """Local UTC offset in minutes, positive east of Greenwich."""
    offset = (now or datetime.datetime.now()).astimezone().utcoffset()
    return int(offset.total_seconds() // 60)


def to_local_date(entry_date: datetime.datetime, utc_offset: int) -> datetime.datetime:
    # Meazure reports timestamps shifted to its server's zone rather than the real
    # moment, so only zones close to the server's give a meaningful "today".
    if entry_date.tzinfo is not None:
        entry_date = entry_date.astimezone().replace(tzinfo=None)
    return entry_date - datetime.timedelta(minutes=utc_offset)


class ProjectAggregator:

    def __init__(self, credentials: Credentials):
        self._credentials = credentials
        self._seconds = {}

    def append(self, entry: TimeEntry):
        self._seconds[entry.project_name] = self._seconds.get(entry.project_name, 0) + entry.duration_seconds

    def flush(self) -> typing.Dict[typing.Optional[str], ProjectAggregate]:
        result = {}
        for project, seconds in self._seconds.items():
            hours = seconds / SECONDS_PER_HOUR
            result[project] = ProjectAggregate(hours=hours, earnings=hours * self._credentials.rate_for(project))
        return result


def has_entry_today(entries: typing.Iterable[TimeEntry], now: datetime.datetime, utc_offset: int) -> bool:
    today_start = datetime.datetime.combine(now.date(), datetime.time.min)
    tomorrow_start = today_start + datetime.timedelta(days=1)
    return any(today_start <= to_local_date(entry.date, utc_offset) <= tomorrow_start for entry in entries)


def aggregate(entries: typing.Sequence[TimeEntry], credentials: Credentials,
              now: datetime.datetime = None, utc_offset: int = None) -> AggregateResult:
    now = now or datetime.datetime.now()
    if utc_offset is None:
        utc_offset = local_utc_offset(now)

    aggregator = ProjectAggregator(credentials)
    for entry in entries:
        aggregator.append(entry)
    by_project = aggregator.flush()

    total = ProjectAggregate()
    for project_aggregate in by_project.values():
        total = total + project_aggregate

    result = AggregateResult(by_project=by_project,
                             total=total,
                             have_entry_today=has_entry_today(entries, now, utc_offset))
    logger.debug('aggregated %d entries into %d projects, %.2f hours in total',
                 len(entries), len(by_project), total.hours)
    return result
