import json
import logging

from openpyxl.workbook import Workbook

from .common import format_date
from .excel import ProjectionSheet, ProjectsSheet
from .meazure.model import AggregateResult

logger = logging.getLogger(__name__)


def render(result: AggregateResult, from_date, to_date) -> str:
    return f'Results: {format_date(from_date)} - {format_date(to_date)} {json.dumps(result.to_dict(), indent=2)}'


class ReportWorkbook:

    def __init__(self, filepath):
        self._filepath = filepath

    def write(self, result: AggregateResult, from_date, to_date):
        wb = Workbook()
        ProjectsSheet(wb.active, result, f'{format_date(from_date)} - {format_date(to_date)}')
        if result.projections is not None:
            ProjectionSheet(wb.create_sheet(), result.projections)
        wb.save(filename=self._filepath)
        logger.info('report saved to %s', self._filepath)
