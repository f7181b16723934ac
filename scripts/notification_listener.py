#!/usr/bin/env python3
"""
Real-time Notification Listener

Connects to the /ws channel, registers an employer id and prints every
newApplication event. Start the API first, then apply to one of the
employer's jobs.

Usage: python scripts/notification_listener.py <employerId> [ws://localhost:3000/ws]

The employerId is the "employerId" of any job you created, or the
/api/auth/me response for your token.
"""
import asyncio
import json
import sys

import websockets


async def listen(employer_id: str, url: str):
    async with websockets.connect(url) as ws:
        print(f"Connected to {url}")
        await ws.send(json.dumps({"event": "register", "data": {"employerId": employer_id}}))

        async for raw in ws:
            frame = json.loads(raw)
            event, data = frame.get("event"), frame.get("data")
            if event == "registered":
                print(f"✅ Registered as employer {data['employerId']}, waiting for applications...")
            elif event == "newApplication":
                candidate = data["candidate"]
                print(f"📬 New application for job {data['jobId']}: "
                      f"{candidate['candidateName']} <{candidate['candidateEmail']}>")
            else:
                print(f"⚠️  {event}: {data}")


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        return 1
    url = sys.argv[2] if len(sys.argv) > 2 else "ws://localhost:3000/ws"
    try:
        asyncio.run(listen(sys.argv[1], url))
    except KeyboardInterrupt:
        print("\nDisconnected from server")
    return 0


if __name__ == "__main__":
    sys.exit(main())
