"""
Populate an EntityStore with the demo data set.

    python -m smartschool.seed
"""
import logging
import random
from typing import Dict, Optional

from smartschool.config import settings
from smartschool.data import mock_data
from smartschool.storage import EntityStore

logger = logging.getLogger(__name__)


def seed_store(store: EntityStore, student_count: int = 50, seed: Optional[int] = 42) -> Dict[str, int]:
    """
    Fill an empty store with mock schools, users, students and exams.

    A store that already holds data is left alone. Returns the
    per-collection counts after seeding.
    """
    with store.lock:
        if not store.is_empty():
            logger.info("🌱 Store already populated, skipping seed")
            return store.counts()

        rng = random.Random(seed)

        store.schools.update({s.id: s for s in mock_data.mock_schools()})
        store.users.update({u.id: u for u in mock_data.mock_users()})
        store.students.update({s.id: s for s in mock_data.mock_students(student_count, rng)})
        store.subjects.update({s.id: s for s in mock_data.mock_subjects()})
        store.schemes.update({s.id: s for s in mock_data.mock_schemes()})
        store.assessments.update({a.id: a for a in mock_data.mock_assessments()})
        store.results.update({(r.student_id, r.subject_name): r for r in mock_data.mock_results(student_count, rng)})
        store.exams.update({e.id: e for e in mock_data.mock_exams()})
        store.class_masters.update(mock_data.DEFAULT_CLASS_MASTERS)

        counts = store.counts()

    logger.info("🌱 Seeded store: %s", ", ".join(f"{k}={v}" for k, v in counts.items() if v))
    return counts


def main():
    logging.basicConfig(level=settings.log_level)
    counts = seed_store(EntityStore(), settings.mock_student_count, settings.mock_seed)
    for name, count in counts.items():
        print(f"  {name:<15} {count}")


if __name__ == "__main__":
    main()
