"""
Advanced usage - Proxy, config, client and group management
"""
import asyncio
from urbackupy import UrBackupClient


async def main():
    # Custom configuration
    config = UrBackupClient.create_config(
        proxy="http://proxy.example.com:8080",
        timeout=30,
        max_retries=3,
        verify_ssl=True
    )

    async with UrBackupClient("https://backup.example.com", "admin", "secret", config=config) as server:
        await server.add_group("laptops")

        added = await server.add_client("new-laptop")
        if added is not None:
            print(f"Added {added.name} (id {added.id}), key: {added.authkey}")

        await server.set_client_settings("update_freq_incr", 4 * 3600, client_name="new-laptop")

        for entry in await server.get_usage():
            print(f"{entry.name}: {entry.used / 1e9:.2f} GB")


if __name__ == "__main__":
    asyncio.run(main())
