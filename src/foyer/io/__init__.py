# foyer/io - Input/output handling
from .csv_export import export_schedule_to_csv, export_tasks_to_csv
from .excel_export import export_to_excel
from .export import export_planning, import_milestones, import_planning, load_export, save_export
from .loaders import load_people, load_planning_file, load_tasks, save_people

__all__ = [
    "export_planning",
    "import_planning",
    "import_milestones",
    "save_export",
    "load_export",
    "load_people",
    "load_tasks",
    "save_people",
    "load_planning_file",
    "export_tasks_to_csv",
    "export_schedule_to_csv",
    "export_to_excel",
]
