#!/usr/bin/env python3
"""
Await setup, then drive the entrypoint yourself
"""
import asyncio

from appboot import bootstrap_promise


async def register():
    print("Connecting services...")
    await asyncio.sleep(0.5)


async def main():
    await bootstrap_promise(register)
    print("Services ready, running main logic")


if __name__ == "__main__":
    asyncio.run(main())
