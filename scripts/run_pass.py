#!/usr/bin/env python3
"""Run one AirBox sync pass against Cosmos DB.

Reads the device directory record, reconciles every listed device and
prints one line per device.

Usage
-----
Set environment variables and run::

    export AIRBOX_COSMOS_ENDPOINT="https://<account>.documents.azure.com:443/"
    export AIRBOX_COSMOS_KEY="..."
    python scripts/run_pass.py

Options::

    --device ID      Reconcile only this device (repeatable)
    --quiet          Print only the launch summary
    -v, --verbose    Debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pyairbox import AirboxClient, AirboxConfig, AirboxError, ReconcileResult


def _format_result(result: ReconcileResult | BaseException) -> str:
    if isinstance(result, BaseException):
        return f"  !! unexpected error: {result!r}"
    line = f"  {result.device_id}: {result.outcome.value}"
    if result.operation is not None:
        line += f" ({result.operation.value})"
    if result.record is not None and result.record.display_name:
        line += f" name={result.record.display_name!r}"
    if result.error is not None:
        line += f" [{result.stage.value if result.stage else '?'}] {result.error}"
    return line


async def _run(args: argparse.Namespace) -> int:
    config = AirboxConfig.from_env()
    async with AirboxClient(config) as client:
        if args.device:
            sync_pass = client.start_devices(args.device)
        else:
            sync_pass = await client.start_directory_pass()
        if args.quiet:
            print(f"Started pass over {len(sync_pass.device_ids)} device(s)")
            return 0
        results = await sync_pass.wait()

    failed = 0
    for result in results:
        print(_format_result(result))
        if isinstance(result, BaseException) or not result.ok:
            failed += 1
    print(f"{len(results) - failed}/{len(results)} device(s) reconciled")
    return 1 if failed else 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--device", action="append", default=[], help="Only reconcile this device id")
    parser.add_argument("--quiet", action="store_true", help="Print only the launch summary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(_run(args))
    except AirboxError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
