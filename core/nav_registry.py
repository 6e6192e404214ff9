# core/nav_registry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List

from core.models import Section
from core.store import RecordsCache

# Page renderer signature: (cache, router) -> None
PageFn = Callable[..., None]
MountFn = Callable[[RecordsCache], None]

@dataclass(frozen=True)
class Route:
    section: Section          # stable id
    label: str                # UI label
    icon: str                 # emoji or short string
    render: PageFn            # renders the mounted view
    on_mount: MountFn         # fetches the view's slice when it mounts

from screens.home import render as home_render, on_mount as home_mount
from screens.students import render as students_render, on_mount as students_mount
from screens.subjects import render as subjects_render, on_mount as subjects_mount
from screens.grades import render as grades_render, on_mount as grades_mount

ROUTES: List[Route] = [
    Route(Section.HOME,     "Home",     "🏠", home_render,     home_mount),
    Route(Section.STUDENTS, "Students", "🎓", students_render, students_mount),
    Route(Section.SUBJECTS, "Subjects", "📘", subjects_render, subjects_mount),
    Route(Section.GRADES,   "Grades",   "✅", grades_render,   grades_mount),
]

# Index for quick lookup (used by the app loop)
ROUTE_INDEX: Dict[Section, Route] = {r.section: r for r in ROUTES}
