import time, argparse
from dataclasses import replace
from foyer.engine.generate import generate
from foyer.io.loaders import load_planning_file
from foyer.models.config import PeriodKind

parser = argparse.ArgumentParser()
parser.add_argument("--input", required=True)
parser.add_argument("--period", choices=[k.value for k in PeriodKind], default="month")
parser.add_argument("--tries", type=int, default=5)
args = parser.parse_args()

cfg, people, tasks, _ = load_planning_file(args.input)
cfg = replace(cfg, period=PeriodKind(args.period))
t0 = time.time()
for _ in range(args.tries):
    schedule, stats = generate(cfg, people, tasks)
dt = (time.time() - t0) / args.tries
print(f"Time: {dt:.3f}s | Placed: {stats.placed_count} | Failed: {stats.failed_count} | Entries: {len(schedule.entries)} | Weeks: {len(schedule.weeks)}")
