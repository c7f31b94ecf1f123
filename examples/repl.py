"""Provides an interactive prompt for sending commands."""

import asyncio
import logging

import srconpy as rcon

HOST = "127.0.0.1"
PORT = 25575
PASSWORD = "PASSWORD"

log = logging.getLogger("srconpy")
log.setLevel(logging.WARNING)
handler = logging.StreamHandler()
handler.setFormatter(
    logging.Formatter("%(asctime)s:%(levelname)s:%(name)s: %(message)s")
)
log.addHandler(handler)

client = rcon.RCONClient()


async def ainput():
    return await asyncio.to_thread(input, "> ")


async def main():
    async with client.session(HOST, PORT, PASSWORD):
        print("Logged in, use #batch a;b;c to send several commands at once")

        while True:
            command = await ainput()

            if command.lower().startswith("#batch "):
                commands = command[len("#batch ") :].split(";")
                for packet in await client.multi_command(commands):
                    print(packet.payload)
                continue

            try:
                response = await client.write(command)
            except rcon.MalformedFrameError as e:
                print(e)
            else:
                print(response.payload)


if __name__ == "__main__":
    asyncio.run(main())
