"""Default rows seeded into an empty store outside production.

Each call returns fresh entities so repeated seeding never shares instances.
"""

from __future__ import annotations

from personalos.domain.entities import HabitItem, TodoItem


def default_todos() -> list[TodoItem]:
    return [
        TodoItem(title="Welcome to PersonalOS", category="Getting Started", priority=1),
        TodoItem(title="Explore the Dashboard", category="Getting Started", priority=1),
        TodoItem(title="Set up your first goal", category="Life", priority=2),
    ]


def default_habits() -> list[HabitItem]:
    return [
        HabitItem(title="Morning Exercise", icon="figure.walk", is_completed=False, streak=0),
        HabitItem(title="Read 30 Minutes", icon="book.fill", is_completed=False, streak=0),
        HabitItem(title="Meditation", icon="brain.head.profile", is_completed=False, streak=0),
    ]
