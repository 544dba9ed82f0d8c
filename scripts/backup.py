"""Dump the configured database with ``mysqldump``.

Usage: python scripts/backup.py [--out-dir backups]
"""

from __future__ import annotations

import argparse
import importlib
import logging
import os
import subprocess
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from store_manager.config import get_settings_module
from store_manager.database.connection import DBConfig

logger = logging.getLogger("backup")

DEFAULT_OUT_DIR = Path(__file__).resolve().parents[1] / "backups"


def dump_command(db: DBConfig) -> list[str]:
    return [
        "mysqldump",
        "--single-transaction",
        f"--host={db.host}",
        f"--port={db.port}",
        f"--user={db.user}",
        db.database,
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--out-dir", type=Path, default=DEFAULT_OUT_DIR)
    args = parser.parse_args()

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    db = DBConfig.from_dict(importlib.import_module(get_settings_module()).DB_CONFIG)
    args.out_dir.mkdir(parents=True, exist_ok=True)
    target = args.out_dir / f"{db.database}_{datetime.now():%Y%m%d_%H%M%S}.sql"

    # password through the environment so it never shows up in the process list
    env = {**os.environ, "MYSQL_PWD": db.password}
    try:
        with target.open("wb") as out:
            subprocess.run(dump_command(db), stdout=out, stderr=subprocess.PIPE, env=env, check=True)
    except FileNotFoundError:
        raise SystemExit("mysqldump not found. Install the MySQL client tools first.")
    except subprocess.CalledProcessError as exc:
        target.unlink(missing_ok=True)
        logger.error("mysqldump failed: %s", exc.stderr.decode(errors="replace").strip())
        raise SystemExit(exc.returncode)
    logger.info("Backup created: %s", target)


if __name__ == "__main__":
    main()
