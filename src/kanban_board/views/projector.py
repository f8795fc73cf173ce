"""
Board projection: store state -> per-stage view -> HTML fragment.

Nothing here keeps state between calls. Every render recomputes the view
from the store, so any mutation path that re-renders afterwards stays in
sync. Task text is untrusted and only reaches markup through Jinja2
autoescaping.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from kanban_board.domain.task_models import STAGE_ORDER, Stage, Task

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "app" / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(default=True, default_for_string=True),
    trim_blocks=True,
    lstrip_blocks=True,
)

EMPTY_HINT = "— no items —"


def project(tasks: Iterable[Task], stage: Stage) -> Iterator[Task]:
    """Tasks in `stage`, in source order. A fresh generator per call."""
    return (t for t in tasks if t.stage == stage)


def count_by_stage(tasks: Iterable[Task]) -> Dict[Stage, int]:
    counts = {s: 0 for s in STAGE_ORDER}
    for t in tasks:
        counts[t.stage] += 1
    return counts


def pad_number(n: int) -> str:
    return f"{n:02d}"


def total_label(total: int) -> str:
    return f"{total} task{'' if total == 1 else 's'}"


def header_date_label(day: date) -> str:
    # e.g. "MON, OCT 19, 2026"
    return f"{day:%a}, {day:%b} {day.day}, {day.year}".upper()


@dataclass(frozen=True)
class CardView:
    task: Task
    number: str
    can_move_left: bool
    can_move_right: bool


@dataclass(frozen=True)
class ColumnView:
    stage: Stage
    label: str
    cards: List[CardView]

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def count_label(self) -> str:
        return pad_number(self.count)


@dataclass(frozen=True)
class BoardView:
    columns: List[ColumnView]
    total: int
    header_date: str

    @property
    def total_label(self) -> str:
        return total_label(self.total)


def build_board_view(tasks: Iterable[Task], today: Optional[date] = None) -> BoardView:
    tasks = list(tasks)
    columns = []
    for stage in STAGE_ORDER:
        cards = [
            CardView(
                task=t,
                number=f"#{pad_number(t.id)}",
                can_move_left=stage.shifted(-1) is not None,
                can_move_right=stage.shifted(1) is not None,
            )
            for t in project(tasks, stage)
        ]
        columns.append(ColumnView(stage=stage, label=stage.label, cards=cards))
    return BoardView(
        columns=columns,
        total=len(tasks),
        header_date=header_date_label(today or date.today()),
    )


def render_board(view: BoardView) -> str:
    return _env.get_template("board.html").render(board=view, empty_hint=EMPTY_HINT)
