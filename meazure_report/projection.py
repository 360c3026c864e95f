import datetime
import logging
import math
import typing

from .common import DaysRange, parse_date
from .errors import ProjectionError
from .meazure.model import AggregateResult, Projection

logger = logging.getLogger(__name__)


def _parse(value, name) -> datetime.date:
    try:
        return parse_date(value)
    except (TypeError, ValueError) as e:
        raise ProjectionError(f'{name} {value!r} is not a YYYY-MM-DD date') from e


def count_week_days(from_date: datetime.date, to_date: datetime.date,
                    reference: datetime.date) -> typing.Tuple[int, int]:
    """Returns week days in the inclusive range and those strictly before reference."""
    in_range = elapsed = 0
    for day in DaysRange(from_date, to_date).week_days():
        in_range += 1
        if day < reference:
            elapsed += 1
    return in_range, elapsed


def build_projection(result: AggregateResult, week_days_in_range: int, week_days_elapsed: int) -> Projection:
    if not week_days_elapsed:
        return Projection(
            week_days_in_range=week_days_in_range,
            week_days_elapsed=0,
            percent_complete=0 if week_days_in_range else None,
            avg_earnings_per_day=None,
            avg_hours_per_day=None,
            estimated_earnings=None,
            estimated_hours=None
        )
    avg_earnings_per_day = math.floor(result.total.earnings / week_days_elapsed)
    return Projection(
        week_days_in_range=week_days_in_range,
        week_days_elapsed=week_days_elapsed,
        percent_complete=100 * week_days_elapsed // week_days_in_range,
        avg_earnings_per_day=avg_earnings_per_day,
        avg_hours_per_day=result.total.hours / week_days_elapsed,
        estimated_earnings=math.floor(avg_earnings_per_day * week_days_in_range),
        estimated_hours=week_days_in_range * (result.total.hours / week_days_elapsed)
    )


def project(result: AggregateResult, from_date, to_date, today: datetime.date = None) -> AggregateResult:
    start = _parse(from_date, 'from date')
    end = _parse(to_date, 'to date')
    if start >= end:
        logger.debug('range %s - %s is empty, skipping projection', start, end)
        return result

    reference = today or datetime.date.today()
    if result.have_entry_today:
        reference += datetime.timedelta(days=1)

    week_days_in_range, week_days_elapsed = count_week_days(start, end, reference)
    if not week_days_elapsed:
        logger.warning('no week days elapsed between %s and %s yet, averages are not available', start, reference)
    result.projections = build_projection(result, week_days_in_range, week_days_elapsed)
    return result
