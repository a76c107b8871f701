from __future__ import annotations

import argparse

from apps.registry_backend.deps import get_host
from apps.registry_backend.host import HostError
from apps.registry_backend.init_db import init_registry_db


def main():
    parser = argparse.ArgumentParser(description="Seed the registry with a demo company, asset and inventory check.")
    parser.add_argument("--signer", default="clyde.testnet", help="Account recorded as the caller")
    parser.add_argument("--company", default="Kylastroke", help="Company name")
    parser.add_argument("--location", default="kisumu", help="Company location")
    parser.add_argument("--asset", default="laptop", help="Asset name")
    parser.add_argument("--serial", default="1234", help="Asset serial")
    parser.add_argument("--status", default="good", help="Status recorded by the inventory check")

    args = parser.parse_args()

    init_registry_db()
    host = get_host()
    calls = [
        ("register_company", {"owner": args.signer, "name": args.company, "location": args.location}),
        ("register_asset", {"name": args.asset, "serial": args.serial, "company_name": args.company}),
        ("take_inventory", {"company_name": args.company, "serial": args.serial, "status": args.status}),
    ]
    try:
        for method, call_args in calls:
            out = host.call(method, call_args, args.signer)
            print(f"{method}: {out.result} logs={out.logs} version={out.version}")
        for method in ("count_assets", "count_inventories"):
            out = host.view(method, {"company_name": args.company})
            print(f"{method}({args.company}) = {out.result}")
    except HostError as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    main()
