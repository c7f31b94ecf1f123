"""Sends a command to an RCON server."""
import asyncio
import logging

import srconpy as rcon

HOST = "127.0.0.1"
PORT = 25575
PASSWORD = "PASSWORD"

log = logging.getLogger("srconpy")
log.setLevel(logging.DEBUG)
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(name)s: %(message)s"))
log.addHandler(handler)

client = rcon.RCONClient()


async def main():
    async with client.session(HOST, PORT, PASSWORD):
        response = await client.write("list")
        print(response.payload)


if __name__ == "__main__":
    asyncio.run(main())
