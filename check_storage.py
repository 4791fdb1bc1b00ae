from app.core.database import session_manager
from app.models.kventry import KeyValueEntry
from sqlalchemy import select
import asyncio
import json

async def list_collections():
    # Initialize the session manager first
    await session_manager.init()

    async with session_manager.get_session() as db:
        result = await db.execute(select(KeyValueEntry).order_by(KeyValueEntry.key))
        for entry in result.scalars():
            items = json.loads(entry.value)
            print(f"✅ {entry.key}: {len(items)} items, updated {entry.updated_at:%Y-%m-%d %H:%M:%S}")

    await session_manager.close()

asyncio.run(list_collections())
