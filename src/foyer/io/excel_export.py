"""Excel export of a generated planning."""
import io
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from foyer.engine.stats import calculate_person_stats, stats_to_dict_list
from foyer.engine.template import build_day_slots
from foyer.models.config import PlanningConfig
from foyer.models.days import DAY_LABELS
from foyer.models.person import Person
from foyer.models.rules import COMMON_COLUMN
from foyer.models.schedule import PlacementResult, PlanningWeek, Schedule, ScheduledEntry
from foyer.utils.logging_setup import get_logger

logger = get_logger("foyer.io.excel_export")

HEADER_FILL = PatternFill("solid", fgColor="DDEEFF")
THIN = Side(border_style="thin", color="CCCCCC")
BORDER_THIN = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)
_HEX = re.compile(r"^#?([0-9a-fA-F]{6})$")


def _fill_for(color: str) -> Optional[PatternFill]:
    m = _HEX.match(color or "")
    if not m:
        return None
    return PatternFill("solid", fgColor=m.group(1).upper())


def _time_rows(week: PlanningWeek, config: Optional[PlanningConfig]) -> List[Tuple[str, str]]:
    if config is not None:
        return [
            (s.start_time, s.end_time)
            for s in build_day_slots(config.work_start, config.work_end, config.lunch_start,
                                     config.lunch_end, config.slot_duration)
        ]
    return sorted({(e.start_time, e.end_time) for e in week.entries})


def _write_week_sheet(ws, week: PlanningWeek, labels: Dict[str, str], config: Optional[PlanningConfig]):
    """Time rows × day columns, one line per occupied column in each cell."""
    ncols = len(week.days) + 1
    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=ncols)
    title = ws.cell(row=1, column=1, value=f"SEMAINE {week.week_number}")
    title.font = Font(bold=True, size=13)
    title.alignment = Alignment(horizontal="center")

    ws.cell(row=2, column=1, value="Horaire").font = Font(bold=True)
    for c, day in enumerate(week.days, start=2):
        cell = ws.cell(row=2, column=c, value=f"{DAY_LABELS.get(day.day_name, day.day_name)} {day.date:%d/%m}")
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center")

    cells: Dict[Tuple[str, str], List[ScheduledEntry]] = {}
    for e in week.entries:
        cells.setdefault((e.date.isoformat(), e.start_time), []).append(e)

    for r, (start, end) in enumerate(_time_rows(week, config), start=3):
        ws.cell(row=r, column=1, value=f"{start}-{end}").font = Font(bold=True)
        for c, day in enumerate(week.days, start=2):
            entries = cells.get((day.date.isoformat(), start), [])
            cell = ws.cell(row=r, column=c)
            cell.border = BORDER_THIN
            cell.alignment = Alignment(wrap_text=True, vertical="top")
            if not entries:
                continue
            cell.value = "\n".join(f"{labels.get(e.column, e.column)}: {e.task.name}" for e in entries)
            fill = _fill_for(entries[0].task.color)
            if fill and len({e.task.id for e in entries}) == 1:
                cell.fill = fill

    ws.column_dimensions["A"].width = 13
    for c in range(2, ncols + 1):
        ws.column_dimensions[get_column_letter(c)].width = 24
    ws.freeze_panes = "B3"


def _write_table(ws, rows: List[Dict]):
    if not rows:
        return
    headers = list(rows[0].keys())
    for c, h in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=c, value=h)
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL
        ws.column_dimensions[get_column_letter(c)].width = max(12, len(str(h)) + 2)
    for r, row in enumerate(rows, start=2):
        for c, h in enumerate(headers, start=1):
            ws.cell(row=r, column=c, value=row[h])


def export_to_excel(
    schedule: Schedule,
    output: Union[str, Path, io.BytesIO],
    persons: Optional[Sequence[Person]] = None,
    stats: Optional[PlacementResult] = None,
    config: Optional[PlanningConfig] = None,
) -> Union[Path, io.BytesIO]:
    """
    Export the planning to an Excel workbook.

    Sheets: one per ISO week, then "Statistiques" (per column workload and
    placement summary) and "Echecs" (failed tasks) when stats are given.

    Args:
        schedule: Generated schedule
        output: File path or BytesIO buffer
        persons: Household members, for column labels and workload rows
        stats: Placement result
        config: Run configuration; when given every template slot gets a row

    Returns:
        Path or buffer written to
    """
    persons = list(persons or [])
    labels = {p.id: p.name for p in persons}
    labels[COMMON_COLUMN] = "Commun"

    wb = Workbook()
    wb.remove(wb.active)

    for week in schedule.weeks:
        ws = wb.create_sheet(title=f"S{week.week_number}-{week.iso_year}")
        _write_week_sheet(ws, week, labels, config)

    if persons:
        ws = wb.create_sheet(title="Statistiques")
        _write_table(ws, stats_to_dict_list(calculate_person_stats(schedule, persons)))
        if stats is not None:
            base = ws.max_row + 2
            summary = stats.summary()
            for i, key in enumerate(("total", "placed", "failed", "success_rate")):
                ws.cell(row=base + i, column=1, value=key).font = Font(bold=True)
                ws.cell(row=base + i, column=2, value=summary[key])

    if stats is not None and stats.failed:
        ws = wb.create_sheet(title="Echecs")
        _write_table(ws, [
            {"Tache": f.task.name, "Assigne a": labels.get(f.task.target_column, f.task.assigned_to), "Raison": f.reason}
            for f in stats.failed
        ])

    if not wb.sheetnames:
        wb.create_sheet(title="Planning")

    if isinstance(output, io.BytesIO):
        wb.save(output)
        output.seek(0)
        return output

    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    logger.info(f"Excel planning written to {path}")
    return path
