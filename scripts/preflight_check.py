#!/usr/bin/env python3
import sys
import os

print("Running preflight import check...")
try:
    # Set dummy env vars so settings load without a real deployment
    os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

    import screener.main
    print("Import screener.main: OK")

    import screener.queue.jobs
    print("Import screener.queue.jobs: OK")

    from screener.core.catalog import STANDARD, EXTENDED
    print(f"Catalogs: standard={STANDARD.step_count} extended={EXTENDED.step_count}")

    print("Preflight check passed.")
    sys.exit(0)
except Exception as e:
    print(f"Preflight check FAILED: {e}")
    import traceback
    traceback.print_exc()
    sys.exit(1)
