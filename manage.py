#!/usr/bin/env python3
"""
PharmaDesk management CLI.

Usage:
    python manage.py demo        Seed stock, run an order and a queue visit, print stats
    python manage.py settings    Print the effective configuration as JSON
"""

import argparse
import asyncio
import json
import sys
from datetime import date, timedelta
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.application import reset_services, run_command  # noqa: E402
from src.application.dto.requests import (  # noqa: E402
    AdvanceOrderStatusRequest,
    AdvanceQueueEntryRequest,
    CheckInRequest,
    CreateOrderRequest,
    ReceiveStockRequest,
)
from src.application.use_cases import (  # noqa: E402
    AdvanceOrderStatusUseCase,
    AdvanceQueueEntryUseCase,
    CheckInPatientUseCase,
    CreateOrderUseCase,
    GetDashboardStatsUseCase,
    ReceiveStockUseCase,
)
from src.config import command_context, configure_logging, get_settings  # noqa: E402
from src.core.entities.order import OrderStatus  # noqa: E402
from src.core.entities.queue import QueueStatus, QueueType  # noqa: E402

DEMO_STOCK = [
    # sku, name, salt, qty, reorder, price, gst
    ("PARA500", "Paracetamol 500mg", "Paracetamol", 100, 20, 2.50, 12.0),
    ("AMOX500", "Amoxicillin 500mg", "Amoxicillin Trihydrate", 250, 50, 7.14, 12.0),
    ("ATOR10", "Atorvastatin 10mg", "Atorvastatin Calcium", 12, 40, 6.67, 12.0),
]


def _print(title: str, payload: object) -> None:
    print(f"\n== {title}")
    print(json.dumps(payload, indent=2, default=str))


async def _run_demo(order_qty: int) -> int:
    reset_services()
    receive = ReceiveStockUseCase()
    expiry = date.today() + timedelta(days=365)

    for sku, name, salt, qty, reorder, price, gst in DEMO_STOCK:
        result = await receive.execute(
            ReceiveStockRequest(
                sku=sku,
                quantity=qty,
                batch_no=f"BN-{sku}-01",
                expiry_date=expiry,
                name=name,
                salt=salt,
                reorder_level=reorder,
                price=price,
                gst_rate=gst,
            )
        )
        print(f"received {qty:>4} x {sku:<8} stock={result.item.stock}")

    check_in = CheckInPatientUseCase()
    entry = await check_in.execute(CheckInRequest(patient_ref="PRN-1001", type=QueueType.PRN))
    print(f"checked in PRN-1001 as {entry.token}")

    create = CreateOrderUseCase()
    outcome = await run_command(
        "create_order",
        create.execute(
            CreateOrderRequest(
                patient_ref="PRN-1001",
                items={"PARA500": order_qty},
                queue_entry_id=entry.id,
            )
        ),
    )
    if not outcome.ok:
        _print("create_order failed", outcome.error.model_dump(mode="json"))
        return 1
    order = outcome.value
    _print("order", create.to_response(order).model_dump(mode="json"))

    advance_queue = AdvanceQueueEntryUseCase()
    for status in (QueueStatus.SERVICING, QueueStatus.COMPLETED):
        await advance_queue.execute(
            AdvanceQueueEntryRequest(entry_id=entry.id, target_status=status)
        )

    advance = AdvanceOrderStatusUseCase()
    for status in (OrderStatus.READY, OrderStatus.DISPATCHED, OrderStatus.DELIVERED):
        await advance.execute(AdvanceOrderStatusRequest(order_id=order.id, target_status=status))
        print(f"order {order.id} -> {status.value}")

    replay = await run_command(
        "advance_order",
        advance.execute(
            AdvanceOrderStatusRequest(order_id=order.id, target_status=OrderStatus.DELIVERED)
        ),
    )
    _print("re-advance delivered order", replay.error.model_dump(mode="json"))

    stats_uc = GetDashboardStatsUseCase()
    stats = await stats_uc.execute()
    _print("dashboard", stats_uc.to_response(stats).model_dump(mode="json"))
    return 0


def cmd_demo(args: argparse.Namespace) -> None:
    configure_logging()
    with command_context(terminal=args.terminal):
        code = asyncio.run(_run_demo(args.quantity))
    sys.exit(code)


def cmd_settings(args: argparse.Namespace) -> None:
    print(json.dumps(get_settings().model_dump(mode="json"), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="PharmaDesk engine management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command")

    p_demo = sub.add_parser("demo", help="Run an end-to-end demo scenario")
    p_demo.add_argument(
        "--quantity", type=int, default=95, help="Units of PARA500 to order (default: 95)"
    )
    p_demo.add_argument("--terminal", default="DEMO", help="Terminal id bound to log events")
    p_demo.set_defaults(func=cmd_demo)

    p_settings = sub.add_parser("settings", help="Print effective settings")
    p_settings.set_defaults(func=cmd_settings)

    args = parser.parse_args()
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)
    args.func(args)


if __name__ == "__main__":
    main()
