import subprocess
import sys
import os
import logging

# Setup basic logging for run.py
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

PORT = os.getenv("DIET_ENGINE_PORT", "8000")


def run():
    logger.info("Starting Dietary Restriction Engine API (Uvicorn)...")
    server = subprocess.Popen(
        ["uvicorn", "diet_engine.main:app", "--reload", "--port", PORT],
        stdout=sys.stdout,
        stderr=sys.stderr
    )

    logger.info(f"API:  http://localhost:{PORT}")
    logger.info(f"Docs: http://localhost:{PORT}/docs")
    logger.info("Press Ctrl+C to stop.")

    try:
        server.wait()
    except KeyboardInterrupt:
        logger.info("Stopping API...")
        server.terminate()
        logger.info("Done.")


if __name__ == "__main__":
    run()
