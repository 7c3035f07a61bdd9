"""Plain-text table rendering for console output."""

from datetime import datetime, timezone
from io import StringIO
from typing import Any, Iterable, Optional, Sequence

from rich import box
from rich.console import Console
from rich.measure import Measurement
from rich.table import Table

DATE_FORMAT = "%Y-%m-%d %H:%M:%S %Z"

# Upper bound used only to measure a table's natural width
MEASURE_WIDTH = 100_000


def format_timestamp(epoch_millis: Optional[int]) -> str:
    """Format epoch milliseconds as 'YYYY-MM-DD HH:MM:SS UTC'."""
    if epoch_millis is None:
        return ""
    moment = datetime.fromtimestamp(epoch_millis / 1000, tz=timezone.utc)
    return moment.strftime(DATE_FORMAT)


class TableRenderer:
    """Renders rows as a bordered ASCII table string.

    Output carries no color or terminal control codes so it can be written
    to any remote channel as-is. The table is as wide as its widest row;
    cells are never cropped.
    """

    def _console(self, width: int) -> Console:
        return Console(
            file=StringIO(),
            width=width,
            color_system=None,
            force_terminal=False,
            highlight=False,
            emoji=False,
            markup=False,
        )

    def render(
        self,
        header: Sequence[str],
        rows: Iterable[Sequence[Any]],
        title: Optional[str] = None,
    ) -> str:
        """Render a header row and data rows.

        Args:
            header: Column names
            rows: One sequence of cell values per entity
            title: Optional title above the table

        Returns:
            The table as text. With no rows, only the header is drawn.
        """
        table = Table(
            title=title,
            box=box.ASCII,
            show_header=True,
            show_edge=True,
            pad_edge=True,
        )
        for name in header:
            table.add_column(name, no_wrap=True, overflow="ignore")
        for row in rows:
            table.add_row(*("" if cell is None else str(cell) for cell in row))

        measuring = self._console(MEASURE_WIDTH)
        width = Measurement.get(measuring, measuring.options, table).maximum
        console = self._console(width)
        with console.capture() as capture:
            console.print(table)
        return capture.get().rstrip("\n")
