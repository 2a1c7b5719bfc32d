"""
Basic usage - Login and list clients
"""
import asyncio
from urbackupy import UrBackupClient


async def main():
    async with UrBackupClient("http://127.0.0.1:55414", "admin", "secret") as server:

        version = await server.get_server_version()
        print(f"Connected! Server version: {version}")

        print("\nClients:")
        for client in await server.get_clients(include_removed=False):
            state = "online" if client.online else "offline"
            print(f"  {client.name} ({state}) file_ok={client.file_ok} image_ok={client.image_ok}")


if __name__ == "__main__":
    asyncio.run(main())
