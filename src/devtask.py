"""
Dev task runner for the local PostgreSQL container.

Each step runs the step before it when needed, in this order:
build, run, init, seed.

Once init or seed has been run, ``run`` alone reuses the existing data.
"""

import argparse
import logging
import os
import shutil
import subprocess
import sys
import time
from typing import Callable

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import (  # noqa: E402
    CONTAINER_PORT, DB_PORT, DEFAULT_DATABASE_URL, DOCKER_COMMAND,
    DOCKER_IMAGE_NAME, PROJECT_ROOT, STARTUP_WAIT_SECONDS,
)
from src.db import create_db_engine, init_schema, seed  # noqa: E402
from src.errors import AppError, CommandExitError, CommandNotFound  # noqa: E402

logger = logging.getLogger(__name__)


# ─── Docker ──────────────────────────────────────────────────────

def _docker() -> str:
    path = shutil.which(DOCKER_COMMAND)
    if path is None:
        raise CommandNotFound(DOCKER_COMMAND)
    return path


def _spawn(args: list) -> subprocess.Popen:
    try:
        return subprocess.Popen([_docker()] + args, cwd=PROJECT_ROOT)
    except FileNotFoundError as e:
        raise CommandNotFound(DOCKER_COMMAND, str(e)) from e


def _check_exit(process: subprocess.Popen) -> None:
    status = process.wait()
    if status != 0:
        raise CommandExitError(DOCKER_COMMAND, status)


def build() -> subprocess.Popen:
    logger.info("Building docker image %s", DOCKER_IMAGE_NAME)
    return _spawn(["build", ".", "-t", DOCKER_IMAGE_NAME])


def run() -> subprocess.Popen:
    logger.info("Running docker image %s on port %d", DOCKER_IMAGE_NAME, DB_PORT)
    return _spawn(["run", "-p", f"{DB_PORT}:{CONTAINER_PORT}", DOCKER_IMAGE_NAME])


def image_exists() -> bool:
    result = subprocess.run(
        [_docker(), "image", "inspect", f"{DOCKER_IMAGE_NAME}:latest"],
        capture_output=True,
        text=True,
    )
    return result.returncode == 0


def container_running() -> bool:
    result = subprocess.run(
        [_docker(), "ps", "--filter", f"ancestor={DOCKER_IMAGE_NAME}", "--format", "{{.ID}}"],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise CommandExitError(DOCKER_COMMAND, result.returncode)
    return bool(result.stdout.strip())


# ─── Database ────────────────────────────────────────────────────

def init_db(url: str = DEFAULT_DATABASE_URL) -> None:
    engine = create_db_engine(url)
    try:
        init_schema(engine)
    finally:
        engine.dispose()


def seed_db(url: str = DEFAULT_DATABASE_URL) -> int:
    engine = create_db_engine(url)
    try:
        init_schema(engine)
        return seed(engine)
    finally:
        engine.dispose()


# ─── Steps ───────────────────────────────────────────────────────

def build_step() -> None:
    _check_exit(build())


def run_step() -> None:
    if not image_exists():
        build_step()
    _check_exit(run())


def _with_database(action: Callable[[], object]) -> None:
    """Run ``action`` against a running container, starting one if needed."""
    if container_running():
        action()
        return

    if not image_exists():
        build_step()
    process = run()
    try:
        logger.info("Waiting %ds for postgres to accept connections...", STARTUP_WAIT_SECONDS)
        time.sleep(STARTUP_WAIT_SECONDS)
        action()
    except Exception:
        # A container we started must not outlive a failed setup
        process.kill()
        raise


def init_step() -> None:
    _with_database(init_db)


def seed_step() -> None:
    _with_database(seed_db)


STEPS = {
    "build": (build_step, "Build the postgres docker image"),
    "run":   (run_step,   "Run the postgres docker image"),
    "init":  (init_step,  "Initialize the database in the postgres docker image"),
    "seed":  (seed_step,  "Seed dummy data to the postgres docker image"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="step", required=True)
    for name, (_, help_text) in STEPS.items():
        subparsers.add_parser(name, help=help_text)
    return parser


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    args = build_parser().parse_args(argv)

    step, _ = STEPS[args.step]
    try:
        step()
    except AppError as e:
        logger.error("Step '%s' failed: %s", args.step, e)
        return 1

    logger.info("Step '%s' finished successfully.", args.step)
    return 0


if __name__ == "__main__":
    sys.exit(main())
