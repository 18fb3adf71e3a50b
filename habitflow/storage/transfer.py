"""Copy habits, logs and categories between storage backends."""

from __future__ import annotations

import logging
from typing import Dict

from .base import HabitStorage

logger = logging.getLogger(__name__)


def copy_storage(source: HabitStorage, target: HabitStorage) -> Dict[str, int]:
    """Copy every record from ``source`` into ``target``.

    Categories already present in the target (by name) are skipped. Habits get
    fresh ids in the target and their logs are remapped accordingly;
    ``created_at`` is preserved so recent-first ordering survives the move.
    """
    existing_names = {category.name for category in target.list_categories()}
    copied_categories = 0
    for category in source.list_categories():
        if category.name in existing_names:
            continue
        target.create_category(category.name, category.color, category.icon)
        copied_categories += 1

    id_map: Dict[int, int] = {}
    # 日本語: 古い順に投入して ID の並びを保つ / English: Insert oldest first so new ids follow the original order
    for habit in reversed(source.list_habits()):
        id_map[habit.id] = target.create_habit(
            habit.name,
            habit.category,
            habit.frequency,
            habit.color,
            habit.icon,
            created_at=habit.created_at,
        )

    copied_logs = 0
    for old_id, new_id in id_map.items():
        for log in source.list_logs(old_id):
            target.upsert_log(new_id, log.date, log.status)
            copied_logs += 1

    counts = {"categories": copied_categories, "habits": len(id_map), "logs": copied_logs}
    logger.info("Copied %s from %s to %s storage", counts, source.backend_name, target.backend_name)
    return counts
