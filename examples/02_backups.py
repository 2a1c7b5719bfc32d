"""
Backups - Start jobs, watch activities, follow the live log
"""
import asyncio
from urbackupy import UrBackupClient, setup_logging


async def main():
    setup_logging()

    async with UrBackupClient("http://127.0.0.1:55414", "admin", "secret") as server:

        # Clients without a backup in the last 24 hours
        for client in await server.get_stale_clients(include_blank=False):
            started = await server.start_incremental_file_backup(client_id=client.id)
            print(f"{client.name}: started={started}")

        activities = await server.get_activities(include_past=True)
        for activity in activities.current:
            print(f"  {activity.client_name}: {activity.percent_done}%")

        # Only new lines on each poll
        for _ in range(3):
            for entry in await server.get_live_log(recent_only=True):
                print(f"[{entry.level}] {entry.message}")
            await asyncio.sleep(5)


if __name__ == "__main__":
    asyncio.run(main())
