#!/usr/bin/env python3
"""Create tables and optionally seed a demo cutting batch.

This script is runnable directly (python scripts/seed_batches.py) and also import-safe.
If you see `ModuleNotFoundError: No module named 'cutting_tracker'`, run from the project root or set PYTHONPATH=. before running.
"""
import sys
from pathlib import Path

# Ensure project root is on sys.path when running the script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import argparse
import logging

from cutting_tracker import crud, schemas
from cutting_tracker.config.settings import settings
from cutting_tracker.db import SessionLocal, Base, engine
from cutting_tracker.exceptions import ReconciliationError
from cutting_tracker.logging_conf import configure_logging

logger = logging.getLogger("seed_batches")


def demo_batch(program_number: str) -> schemas.BatchCreate:
    return schemas.BatchCreate(
        program_number=program_number,
        pattern="Polo Basic",
        line_number="L1",
        sizes=list(settings.SIZE_BUCKETS),
        rolls=[
            schemas.RollCreate(roll_number="R1", color="Red", weight=18.5, layers=[40, 38],
                               size_distribution={"S": 20, "M": 30, "L": 28}),
            schemas.RollCreate(roll_number="R2", color="Blue", weight=17.2, layers=[36],
                               size_distribution={"M": 18, "L": 18}),
        ],
        worker_processes=[
            schemas.WorkerProcessCreate(worker_name="Asha", operation="Stitching",
                                        in_pieces={"S": 20, "M": 30}, out_pieces={"S": 20, "M": 30}),
            schemas.WorkerProcessCreate(worker_name="Ravi", operation="Finishing", in_pieces={"L": 28}),
        ],
        order_details=schemas.OrderDetailsIn(
            order_code="ORD-001",
            client="Demo Client",
            color_size_matrix=[
                schemas.OrderColorSizeEntryIn(color="Red", sizes={"S": 20, "M": 30, "L": 28}),
                schemas.OrderColorSizeEntryIn(color="Blue", sizes={"M": 18, "L": 18}),
            ],
        ),
    )


def main():
    parser = argparse.ArgumentParser(description='Create tables and optionally seed a demo cutting batch.')
    parser.add_argument('--demo', action='store_true', help='Insert a demo batch')
    parser.add_argument('--program-number', default='DEMO-001', help='Program number of the demo batch')
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready on %s", engine.url.render_as_string(hide_password=True))

    if not args.demo:
        return

    with SessionLocal() as db:
        if crud.get_batch_by_program_number(db, args.program_number):
            logger.info("Batch %s already exists", args.program_number)
            return
        try:
            db_batch = crud.create_batch(db, demo_batch(args.program_number))
        except ReconciliationError as exc:
            logger.error("Could not seed demo batch: %s", exc)
            sys.exit(1)
        logger.info("Seeded demo batch %s (id=%s)", db_batch.program_number, db_batch.id)


if __name__ == '__main__':
    main()
