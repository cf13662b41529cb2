"""
Runs every ingestion step in the order they depend on each other:

  seed -> HSK levels -> structure (decomposition, etymology) -> metadata

Structure and metadata only enrich rows that already exist, so running them
first would silently drop their data. Stops at the first failing step; steps
that already finished stay committed.
"""
import argparse
import asyncio

from hanzidb import commands
from hanzidb.errors import HanziError
from hanzidb.logging_config import setup_logging

STEPS = [
    ("seed", commands.seed_characters),
    ("hsk", commands.sync_hsk_levels),
    ("structure", commands.import_dictionary_data),
    ("metadata", commands.sync_json_metadata),
]


async def main(skip: set[str], backup: bool) -> None:
    if backup:
        try:
            print(await commands.backup_database())
        except HanziError as exc:
            raise SystemExit(f"❌ backup failed: {exc}")

    for name, step in STEPS:
        if name in skip:
            print(f"== skipping {name} ==")
            continue
        print(f"\n== {name} ==")
        try:
            message = await step()
        except HanziError as exc:
            raise SystemExit(f"❌ {name} failed: {exc}")
        print(f"✅ {message}")

    print("\n🎉 DONE.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--skip", action="append", default=[], choices=[name for name, _ in STEPS])
    parser.add_argument("--backup", action="store_true", help="copy the database before syncing")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args()

    setup_logging(args.log_level)
    asyncio.run(main(set(args.skip), args.backup))
