#!/usr/bin/env python3
"""
Example application - register, tick once a second, exit after 5 seconds
Press Ctrl+C to exit early (teardown still runs)
"""
import asyncio

from appboot import Bootstrap


class AppBootstrap(Bootstrap):
    def register(self):
        print("Registering...")

    def teardown(self):
        print("Teardown...")


app = AppBootstrap()


async def main():
    async def ticker():
        while True:
            await asyncio.sleep(1)
            print(".")

    asyncio.create_task(ticker())
    asyncio.get_running_loop().call_later(5, app.request_exit, 0)


if __name__ == "__main__":
    app.start(main)
