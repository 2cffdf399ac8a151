"""
profile_load.py — simple async load script to create user profiles

Usage:
  python profile_load.py --base http://127.0.0.1:8000 --count 2000 --concurrency 100 --out profiles_created.jsonl
"""
import argparse
import asyncio
import json
import random
import string
import time
from datetime import datetime, timezone

import httpx

def _now_iso():
    return datetime.now(timezone.utc).isoformat()

def _rand_username(n=8):
    alphabet = string.ascii_lowercase + string.digits
    return "".join(random.choice(alphabet) for _ in range(n))

async def _create_one(client: httpx.AsyncClient, base: str, out_file, idx: int):
    username = f"{_rand_username()}{idx}"
    payload = {"username": username}
    # Every other profile supplies its own email
    if idx % 2:
        payload["email"] = f"{username}@load.test"
    try:
        r = await client.post(f"{base}/profile", json=payload, timeout=10)
        r.raise_for_status()
        user = r.json().get("user") or {}
        if user.get("id") and out_file:
            out_file.write(json.dumps({"id": user["id"], "username": username}) + "\n")
        return True
    except httpx.HTTPError:
        return False

async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8000")
    parser.add_argument("--count", type=int, default=2000)
    parser.add_argument("--concurrency", type=int, default=100)
    parser.add_argument("--out", default="profiles_created.jsonl")
    args = parser.parse_args()

    start_iso = _now_iso()
    t0 = time.perf_counter()
    success = 0

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    with open(args.out, "w", encoding="utf-8") as out_f:
        async with httpx.AsyncClient(limits=limit) as client:
            sem = asyncio.Semaphore(args.concurrency)

            async def _task(i):
                nonlocal success
                async with sem:
                    ok = await _create_one(client, args.base, out_f, i)
                    if ok:
                        success += 1

            await asyncio.gather(*(_task(i) for i in range(args.count)))
            stats = (await client.get(f"{args.base}/stats", timeout=10)).json()

    dt = time.perf_counter() - t0
    end_iso = _now_iso()
    print(f"START: {start_iso}")
    print(f"END:   {end_iso}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   creates={args.count}, ok={success}, fail={args.count - success}")
    if dt > 0:
        print(f"TPS:   {success/dt:.1f} req/s")
    print(f"STATS: totalUsers={stats.get('totalUsers')} totalRequests={stats.get('totalRequests')}")

if __name__ == "__main__":
    asyncio.run(main())
