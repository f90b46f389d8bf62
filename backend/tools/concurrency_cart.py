import os
import sys

import argparse
import concurrent.futures
import json
from uuid import uuid4

import requests

BASE = os.environ.get("PLANTSTORE_BASE", "http://127.0.0.1:5000")


def add_task(i, user_id, plant_id, qty):
    payload = {"plantId": plant_id, "quantity": qty}
    try:
        r = requests.post(f"{BASE}/api/cart/{user_id}", json=payload, timeout=30)
        return (i, r.status_code, r.text)
    except Exception as e:
        return (i, "ERR", str(e))


def run_add_concurrent(workers, user_id, plant_id, qty):
    print(f"Running add-to-cart test: workers={workers}, user={user_id}, plant={plant_id}, qty={qty}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(add_task, i, user_id, plant_id, qty) for i in range(workers)]
        results = [f.result() for f in futures]
    ok = [r for r in results if r[1] == 201]
    print(f"{len(ok)}/{workers} adds succeeded; statuses: {sorted({str(r[1]) for r in results})}")

    cart = requests.get(f"{BASE}/api/cart/{user_id}", timeout=30).json()["data"]
    lines = [it for it in cart["items"] if it["id"] == plant_id]
    quantity = sum(it["quantity"] for it in lines)
    amount = sum(it["quantity"] * it["cartPrice"] for it in cart["items"])
    print(json.dumps({"lines": len(lines), "quantity": quantity, "totalItems": cart["totalItems"], "totalAmount": cart["totalAmount"]}))

    if len(lines) != (1 if ok else 0) or quantity != qty * len(ok) or cart["totalItems"] != quantity or abs(cart["totalAmount"] - amount) > 0.005:
        print("INVARIANT VIOLATED")
        sys.exit(1)
    print("totals consistent")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fire concurrent add-to-cart calls and check cart totals.")
    parser.add_argument("--plant", required=True, help="plant id to add")
    parser.add_argument("--user", default=None, help="user id (random by default)")
    parser.add_argument("--workers", type=int, default=10)
    parser.add_argument("--qty", type=int, default=1)
    args = parser.parse_args()
    run_add_concurrent(args.workers, args.user or f"load-{uuid4().hex[:8]}", args.plant, args.qty)
