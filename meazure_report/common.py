import calendar
import datetime
import typing

DATE_FORMAT = '%Y-%m-%d'


def parse_date(value: typing.Union[str, datetime.date]) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.datetime.strptime(value, DATE_FORMAT).date()


def format_date(value: typing.Union[str, datetime.date]) -> str:
    return parse_date(value).strftime(DATE_FORMAT)


def end_of_month(date: datetime.date) -> datetime.date:
    num_days = calendar.monthrange(date.year, date.month)[1]
    return datetime.date(date.year, date.month, num_days)


def month_bounds(date: datetime.date) -> typing.Tuple[datetime.date, datetime.date]:
    return date.replace(day=1), end_of_month(date)


def is_week_day(date: datetime.date) -> bool:
    return date.weekday() < 5


class DaysRange:

    def __init__(self, start_date, end_date):
        if start_date > end_date:
            raise ValueError(f'start date ({start_date.strftime(DATE_FORMAT)}) '
                             f'is after end date ({end_date.strftime(DATE_FORMAT)})')
        self._start = start_date
        self._end = end_date

    def __iter__(self):
        delta = self._end - self._start
        for i in range(delta.days + 1):
            yield self._start + datetime.timedelta(days=i)

    def week_days(self) -> typing.Iterator[datetime.date]:
        return (day for day in self if is_week_day(day))
