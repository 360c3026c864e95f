import datetime
import typing
from dataclasses import dataclass, field

import dateutil.parser

NO_PROJECT = '(no project)'


@dataclass
class TimeEntry:
    date: datetime.datetime
    duration_seconds: int
    project_name: typing.Optional[str]
    task_name: typing.Optional[str]

    @classmethod
    def from_record(cls, record: dict):
        return cls(
            date=dateutil.parser.isoparse(record['Date']),
            duration_seconds=record.get('DurationSeconds') or 0,
            project_name=record.get('ProjectName'),
            task_name=record.get('TaskName')
        )


@dataclass
class ProjectAggregate:
    hours: float = 0.0
    earnings: float = 0.0

    def __add__(self, other):
        return ProjectAggregate(hours=self.hours + other.hours, earnings=self.earnings + other.earnings)

    def to_dict(self) -> dict:
        return {'hours': self.hours, 'earnings': self.earnings}


@dataclass
class Projection:
    week_days_in_range: int
    week_days_elapsed: int
    percent_complete: typing.Optional[int]
    avg_earnings_per_day: typing.Optional[int]
    avg_hours_per_day: typing.Optional[float]
    estimated_earnings: typing.Optional[int]
    estimated_hours: typing.Optional[float]

    def to_dict(self) -> dict:
        return {
            'weekDaysInRange': self.week_days_in_range,
            'weekDaysElapsed': self.week_days_elapsed,
            'percentComplete': self.percent_complete,
            'avgEarningsPerDay': self.avg_earnings_per_day,
            'avgHoursPerDay': self.avg_hours_per_day,
            'estimatedEarnings': self.estimated_earnings,
            'estimatedHours': self.estimated_hours
        }


@dataclass
class AggregateResult:
    by_project: typing.Dict[typing.Optional[str], ProjectAggregate] = field(default_factory=dict)
    total: ProjectAggregate = field(default_factory=ProjectAggregate)
    have_entry_today: bool = False
    projections: typing.Optional[Projection] = None

    def to_dict(self) -> dict:
        result = {
            'projects': {project_key(project): aggregate.to_dict() for (project, aggregate) in self.by_project.items()},
            'total': self.total.to_dict(),
            'haveEntryToday': self.have_entry_today
        }
        if self.projections is not None:
            result['projections'] = self.projections.to_dict()
        return result


def project_key(project: typing.Optional[str]) -> str:
    return NO_PROJECT if project is None else project
