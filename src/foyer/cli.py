from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from datetime import date
from typing import Any, Dict

from foyer.engine.generate import generate
from foyer.engine.normalize import normalize_inputs
from foyer.engine.stats import calculate_person_stats, milestone_summary, task_breakdown
from foyer.io.csv_export import export_tasks_to_csv
from foyer.io.excel_export import export_to_excel
from foyer.io.export import export_planning, save_export
from foyer.io.loaders import load_people, load_planning_file, load_tasks
from foyer.models.config import PeriodKind
from foyer.utils.logging_setup import setup_logging


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {}
    if args.period:
        cfg["period"] = PeriodKind(args.period)
    if args.start:
        cfg["start_date"] = date.fromisoformat(args.start)
    if args.slot_duration:
        cfg["slot_duration"] = int(args.slot_duration)
    return cfg


def _load(args: argparse.Namespace, p: argparse.ArgumentParser):
    if args.input:
        return load_planning_file(args.input, strict=args.strict)
    if not (args.people and args.tasks):
        p.error("--input ou --people et --tasks sont requis")
    cfg, people, tasks = normalize_inputs(None, load_people(args.people), load_tasks(args.tasks))
    return cfg, people, tasks, []


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="foyer", description="Planning familial automatique")
    p.add_argument("--input", help="Fichier JSON {config, persons, tasks, milestones}")
    p.add_argument("--people", help="CSV des membres du foyer")
    p.add_argument("--tasks", help="CSV des taches")
    p.add_argument("--period", choices=[k.value for k in PeriodKind], help="Semaine ou mois")
    p.add_argument("--start", help="Date de debut (AAAA-MM-JJ)")
    p.add_argument("--slot-duration", dest="slot_duration", type=int, help="Duree d'un creneau (min)")
    p.add_argument("--strict", action="store_true", help="Validation stricte du fichier d'entree")
    p.add_argument("--name", default="planning", help="Nom du planning (exports)")
    p.add_argument("--export", dest="export_dir", help="Dossier de l'export JSON versionne")
    p.add_argument("--excel", help="Chemin du classeur Excel")
    p.add_argument("--tasks-csv", dest="tasks_csv", help="Chemin de l'export CSV des taches")
    p.add_argument("--log-file", dest="log_file", default=None, help="Fichier de log")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--json", dest="json_out", action="store_true", help="Sortie JSON (summary)")
    args = p.parse_args(argv)

    level = {0: "WARNING", 1: "INFO"}.get(args.verbose, "DEBUG")
    setup_logging(level=level, log_file=args.log_file)

    try:
        cfg, people, tasks, milestones = _load(args, p)
        cfg = replace(cfg, **_overrides(args))
        schedule, stats = generate(cfg, people, tasks)
    except ValueError as e:  # PlanningInputError, pydantic ValidationError, bad dates
        print(f"Erreur: {e}", file=sys.stderr)
        return 2

    if args.export_dir:
        record = export_planning(schedule, stats, cfg, people, tasks, milestones=milestones, name=args.name)
        save_export(record, args.export_dir)
    if args.excel:
        export_to_excel(schedule, args.excel, persons=people, stats=stats, config=cfg)
    if args.tasks_csv:
        export_tasks_to_csv(tasks, people, args.tasks_csv)

    summary = stats.summary()
    if args.json_out:
        summary["tasks"] = task_breakdown(tasks)
        summary["workload"] = {
            s.name: {"slots": s.slots, "minutes": s.minutes}
            for s in calculate_person_stats(schedule, people)
        }
        summary["milestones"] = milestone_summary(milestones, people)
        print(json.dumps({"summary": summary}, ensure_ascii=False, indent=2))
    else:
        print("Résumé:")
        for k in ("total", "placed", "failed", "success_rate"):
            print(f" - {k}: {summary[k]}")
        for f in summary["failures"]:
            print(f"   ✗ {f['task']}: {f['reason']}")
        print(f"Créneaux occupés: {len(schedule.entries)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
