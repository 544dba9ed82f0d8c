"""Delete sales that repeat a (store, currency, day) already on record.

The oldest sale of each group survives. Run with ``--dry-run`` to only list
what would go.
"""

from __future__ import annotations

import argparse
import importlib
import logging

from dotenv import load_dotenv

from store_manager.common.money import format_currency
from store_manager.config import get_settings_module
from store_manager.database.connection import DBConfig, DatabaseConnection
from store_manager.sales.maintenance import find_duplicate_sales
from store_manager.sales.model import SaleFilter
from store_manager.sales.mysql_sale_repository import MySQLSaleRepository

logger = logging.getLogger("remove_duplicate_sales")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dry-run", action="store_true", help="list duplicates without deleting them")
    args = parser.parse_args()

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    settings = importlib.import_module(get_settings_module())
    repo = MySQLSaleRepository(DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG)))

    duplicates = find_duplicate_sales(repo.list(SaleFilter()))
    if not duplicates:
        logger.info("No duplicate sales found")
        return

    for sale in duplicates:
        logger.info(
            "duplicate sale %s: store=%s %s %s total=%s",
            sale.sale_id,
            sale.store_id,
            sale.sale_date.isoformat(),
            sale.currency.value,
            format_currency(sale.total, sale.currency),
        )

    if args.dry_run:
        logger.info("Dry run: %d duplicate sales left in place", len(duplicates))
        return

    deleted = repo.delete_many([s.sale_id for s in duplicates])
    logger.info("Deleted %d duplicate sales", deleted)


if __name__ == "__main__":
    main()
