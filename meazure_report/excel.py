import typing

from openpyxl.styles import Font, PatternFill
from openpyxl.styles.colors import Color
from openpyxl.utils import get_column_letter

from .meazure.model import AggregateResult, Projection, project_key

HOURS_FORMAT = '0.00'
MONEY_FORMAT = '#,##0.00'


class BaseSheet:

    _title = ''
    _header: typing.Sequence[str] = ()
    _header_font = Font(color='FF000000', bold=True)
    _header_fill = PatternFill("solid", fgColor=Color(indexed=22))
    _columns_width: typing.Mapping[str, int] = {}

    def __init__(self, sheet, title=None):
        self._sheet = sheet
        sheet.title = title or self._title
        for idx, cell_title in enumerate(self._header):
            self.set_header(f'{get_column_letter(idx + 1)}1', cell_title)
        for column, width in self._columns_width.items():
            sheet.column_dimensions[column].width = width
        self._row = 2 if self._header else 1

    @property
    def sheet(self):
        return self._sheet

    def set_header(self, cell, value):
        self._sheet[cell] = value
        self._sheet[cell].font = self._header_font
        self._sheet[cell].fill = self._header_fill

    def append(self, values: typing.Sequence, formats: typing.Sequence[typing.Optional[str]] = (), bold=False):
        for idx, value in enumerate(values):
            cell = self._sheet.cell(row=self._row, column=idx + 1, value=value)
            if idx < len(formats) and formats[idx]:
                cell.number_format = formats[idx]
            if bold:
                cell.font = self._header_font
        self._row += 1

    def __setitem__(self, key, value):
        self._sheet[key] = value

    def __getitem__(self, item):
        return self._sheet[item]


class ProjectsSheet(BaseSheet):

    _title = 'Projects'
    _header = ('Project', 'Hours', 'Earnings')
    _columns_width = {'A': 40, 'B': 12, 'C': 15}

    def __init__(self, sheet, result: AggregateResult, period: str, **kwargs):
        super().__init__(sheet, **kwargs)
        self['E1'] = 'Period'
        self['F1'] = period
        formats = (None, HOURS_FORMAT, MONEY_FORMAT)
        for project, aggregate in result.by_project.items():
            self.append((project_key(project), aggregate.hours, aggregate.earnings), formats)
        self.append(('Total', result.total.hours, result.total.earnings), formats, bold=True)


class ProjectionSheet(BaseSheet):

    _title = 'Projection'
    _header = ('Metric', 'Value')
    _columns_width = {'A': 25, 'B': 15}

    _rows = (
        ('Week days in range', 'week_days_in_range', None),
        ('Week days elapsed', 'week_days_elapsed', None),
        ('Percent complete', 'percent_complete', None),
        ('Avg earnings per day', 'avg_earnings_per_day', MONEY_FORMAT),
        ('Avg hours per day', 'avg_hours_per_day', HOURS_FORMAT),
        ('Estimated earnings', 'estimated_earnings', MONEY_FORMAT),
        ('Estimated hours', 'estimated_hours', HOURS_FORMAT),
    )

    def __init__(self, sheet, projection: Projection, **kwargs):
        super().__init__(sheet, **kwargs)
        for label, attribute, number_format in self._rows:
            self.append((label, getattr(projection, attribute)), (None, number_format))
