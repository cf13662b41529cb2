import asyncio

from hanzidb import commands
from hanzidb.errors import HanziError
from hanzidb.logging_config import setup_logging


async def main():
    try:
        message = await commands.seed_characters()
    except HanziError as exc:
        raise SystemExit(f"❌ {exc}")
    print(f"🌱 {message}")


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
