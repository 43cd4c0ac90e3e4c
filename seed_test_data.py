"""
Test Data Generator for the Lift Log
Populates the workouts table with realistic sample sets

Run with: python seed_test_data.py
"""

import sys
import random
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from sqlalchemy import text

from config import settings
from database import SessionLocal, init_db
from services import HistoryAggregator
from services.workout_log import WorkoutLogRepository

ASSISTANCE_EXERCISES = ["Dumbbell Press", "Shoulder Press", "Chin-up", "Dip", "Lunge", "Rowing"]

# Starting working weights in kg (progressively increased)
STARTING_WEIGHTS = {
    'bench': 80.0,
    'squat': 110.0,
    'deadlift': 140.0,
}

# Mon=bench, Wed=squat, Fri=deadlift
SCHEDULE = {0: 'bench', 2: 'squat', 4: 'deadlift'}

WEIGHT_STEP = 2.5


def _on_grid(weight: float) -> float:
    """Snap a weight to the 2.5 kg plate grid"""
    return round(weight / WEIGHT_STEP) * WEIGHT_STEP


def generate_entries(
    num_weeks: int = 8,
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Dict]:
    """
    Generate workout entries over a period of weeks.

    Each training day has 3-5 sets of the day's primary lift plus 1-2
    assistance exercises. Weights increase a little every week.

    Returns:
        List of dicts with exercise, weight, reps and created_at (UTC)
    """
    rng = random.Random(seed)
    now = now or datetime.now(timezone.utc)
    current_weights = STARTING_WEIGHTS.copy()
    start = (now - timedelta(weeks=num_weeks)).replace(hour=18, minute=0, second=0, microsecond=0)

    entries = []
    current = start
    while current <= now:
        lift = SCHEDULE.get(current.weekday())

        # Random chance to skip a workout (life happens)
        if lift and rng.random() >= 0.1:
            moment = current
            num_sets = rng.randint(3, 5)
            for set_num in range(1, num_sets + 1):
                if set_num == num_sets:
                    weight = current_weights[lift] * rng.uniform(1.0, 1.08)  # Top set
                    reps = rng.randint(1, 5)
                else:
                    weight = current_weights[lift] * rng.uniform(0.85, 1.0)
                    reps = rng.randint(5, 10)
                entries.append({
                    'exercise': lift,
                    'weight': _on_grid(weight),
                    'reps': reps,
                    'created_at': moment,
                })
                moment += timedelta(minutes=4)

            for exercise in rng.sample(ASSISTANCE_EXERCISES, rng.randint(1, 2)):
                for _ in range(rng.randint(2, 3)):
                    entries.append({
                        'exercise': exercise,
                        'weight': _on_grid(rng.uniform(10, 40)),
                        'reps': rng.randint(8, 12),
                        'created_at': moment,
                    })
                    moment += timedelta(minutes=3)

            # Progressive overload: roughly 1-2% per week on each lift's day
            current_weights[lift] = round(current_weights[lift] * rng.uniform(1.01, 1.02), 1)

        current += timedelta(days=1)

    return entries


def print_summary(repo: WorkoutLogRepository):
    """Print summary of generated data"""
    entries = repo.fetch_all()
    groups = HistoryAggregator.from_settings(settings).aggregate(entries)

    print("\n" + "="*50)
    print("📊 TEST DATA SUMMARY")
    print("="*50)
    print(f"✓ Sets logged:           {len(entries)}")
    print(f"✓ Training days:         {len(groups)}")

    print("\n🏆 Best Strength Index Per Lift:")
    for lift in STARTING_WEIGHTS:
        best = max(
            (s for g in groups for s in getattr(g, lift)),
            key=lambda s: s.strength_index,
            default=None,
        )
        if best:
            print(f"   • {lift}: {best.weight}kg x {best.reps} (PV {best.strength_index})")
    print("="*50)


def main():
    print("\n🏋️ Lift Log - Test Data Generator")
    print("="*50)

    db = SessionLocal()
    try:
        init_db()
        db.execute(text("SELECT 1"))
        print("✓ Connected to database")
    except Exception as e:
        print(f"❌ Database connection failed: {e}")
        db.close()
        sys.exit(1)

    try:
        # Ask for confirmation
        print("\n⚠️  This will DELETE existing workout data and create new test data.")
        response = input("Continue? (y/n): ").strip().lower()

        if response != 'y':
            print("Cancelled.")
            sys.exit(0)

        print("Clearing existing workout data...")
        db.execute(text("DELETE FROM workouts"))
        db.commit()
        print("✓ Existing data cleared")

        print("\nGenerating 8 weeks of workout data...")
        repo = WorkoutLogRepository(db)
        entries = generate_entries(num_weeks=8)
        for entry in entries:
            repo.insert(entry['exercise'], entry['weight'], entry['reps'], entry['created_at'])
        print(f"✓ Created {len(entries)} sets")

        print_summary(repo)

        print("\n✅ Test data generated successfully!")
        print("\nYou can now test:")
        print("  • http://localhost:8000/docs (Swagger UI)")
        print("  • http://localhost:8000/history")
        print("  • http://localhost:8000/history/export?format=xlsx")

    except Exception as e:
        print(f"\n❌ Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
