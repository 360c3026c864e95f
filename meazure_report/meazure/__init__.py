from .api import MeazureAPI, MeazureSession, DEFAULT_BASE_URL
from .model import TimeEntry, ProjectAggregate, Projection, AggregateResult
