from __future__ import annotations

import argparse
import datetime as dt
import sys

from basetracker.config import settings
from basetracker.config.log_config import configure_logging
from basetracker.services.lookup_service import FirstTransactionService
from basetracker.services.tracker_session import TrackerSession
from basetracker.io.frame import FrameService
from basetracker.io.output_writer import write_frame_html, write_frame_json, write_result_html, write_result_json
from basetracker.io.share import build_share_text

from basetracker.adapters.chain.alchemy_transfer_adapter import AlchemyTransferAdapter
from basetracker.adapters.chain.static_transfer_adapter import StaticTransferAdapter


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="basetracker",
        description=f"Find the first {settings.NETWORK_NAME} transaction of an address",
    )
    p.add_argument("--address", required=False, help="Address to look up (defaults to CONNECTED_WALLET_ADDRESS)")
    p.add_argument("--out", default="out", help="Output folder")
    p.add_argument("--json", action="store_true", help="Write result.json (frame.json with --frame)")
    p.add_argument("--html", action="store_true", help="Write a result page (index.html)")
    p.add_argument("--frame", action="store_true", help="Print frame metadata and write frame.html")
    p.add_argument("--use-static", action="store_true", help="Use static adapter (dev/testing)")
    p.add_argument("--no-simulate", action="store_true", help="Report a miss instead of simulating data")
    p.add_argument("--now-ts", type=int, default=None, help="Pin the current unix time (reproducible output)")
    p.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or WARNING)")
    return p


def _ts() -> str:
    return dt.datetime.now().strftime("%H:%M:%S")


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.log_level)

    address = (args.address or settings.CONNECTED_WALLET_ADDRESS or "").strip()
    if not address:
        print("Missing --address (or CONNECTED_WALLET_ADDRESS)", file=sys.stderr)
        return 2

    if args.frame:
        frames = FrameService()
        metadata = frames.generate_frame_metadata(address, now_ts=args.now_ts)
        print(metadata, end="")
        print(f"Wrote: {write_frame_html(metadata, args.out)}")
        if args.json:
            record = frames.generate_frame(address, now_ts=args.now_ts)
            print(f"Wrote: {write_frame_json(record, args.out)}")
        return 0

    # Ports
    if args.use_static:
        chain = StaticTransferAdapter()
        adapter_label = "StaticTransferAdapter (dev/testing)"
    else:
        if not settings.ALCHEMY_API_KEY:
            print(f"[{_ts()}] Error: Missing ALCHEMY_API_KEY environment variable", file=sys.stderr)
            return 2
        chain = AlchemyTransferAdapter(api_key=settings.ALCHEMY_API_KEY)
        adapter_label = "AlchemyTransferAdapter"

    svc = FirstTransactionService(chain=chain, simulate_on_miss=not args.no_simulate and settings.SIMULATE_ON_MISS)
    session = TrackerSession(svc)
    print(f"Adapter: {adapter_label}")
    print(f"[{_ts()}] Searching for the first {settings.NETWORK_NAME} transaction of {address}...")

    result = session.submit(address, now_ts=args.now_ts)
    if not result.ok:
        print(f"[{_ts()}] Error: {result.error}", file=sys.stderr)
        return 1

    view = result.view
    network = settings.NETWORK_NAME
    print(f"Your {network} Genesis Moment!")
    print(f"  First Transaction Date: {view.formatted_date}")
    print(f"  Transaction Hash:       {view.short_hash}")
    print(f"  Block Number:           {view.block_number:,}")
    print(f"  Days Since First Tx:    {view.days_since} days")
    print(f"  Milestone:              You've been building on {network} for {view.months} months!")
    if view.simulated:
        print("  (estimated: no indexed transfers were available)")
    print()
    print(build_share_text(view))

    if args.json:
        print(f"Wrote: {write_result_json(view, args.out, address=address)}")
    if args.html:
        print(f"Wrote: {write_result_html(view, args.out, address=address)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
