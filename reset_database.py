#!/usr/bin/env python3
"""Drop the WorkVista listing and bid collections to start from an empty store."""

from dotenv import load_dotenv

load_dotenv()

from pymongo.errors import PyMongoError

from workvista.config import AppConfig
from workvista.database import (
    BIDS_COLLECTION,
    CATEGORIES_COLLECTION,
    close_mongo_connection,
    get_database,
)

COLLECTIONS_TO_DROP = [CATEGORIES_COLLECTION, BIDS_COLLECTION]


def reset_all_collections(config: AppConfig) -> None:
    """Drop all collections and start fresh."""
    db = get_database(config)

    print(f"Clearing collections in {config.mongodb_database}...")
    for collection_name in COLLECTIONS_TO_DROP:
        try:
            db[collection_name].drop()
            print(f"   dropped {collection_name}")
        except PyMongoError as e:
            print(f"   could not drop {collection_name}: {e}")

    print("\nDatabase reset complete.")


if __name__ == "__main__":
    print("This will DELETE ALL listings and bids.")

    confirm = input("\nAre you sure? Type 'yes' to continue: ")
    if confirm.lower() == 'yes':
        try:
            reset_all_collections(AppConfig.from_env())
        finally:
            close_mongo_connection()
    else:
        print("Reset cancelled.")
