# wmsconsole/main.py
"""
仓库作业控制台（命令行入口）

用法：
    python -m wmsconsole.main dashboard
    python -m wmsconsole.main orders --status NEW
    python -m wmsconsole.main tasks --status IN_PROGRESS
    python -m wmsconsole.main cancel-order 12 [--yes]
    python -m wmsconsole.main complete-task 7 [--yes]

远端地址等配置见 wmsconsole.core.config（环境变量 / .env）。
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional, Sequence

from wmsconsole.core.config import get_settings
from wmsconsole.core.logging import setup_logging
from wmsconsole.gateway import RemoteGateway
from wmsconsole.gateway.errors import GatewayError, error_message
from wmsconsole.models.enums import OrderStatus, TaskStatus
from wmsconsole.utils.formatters import format_date
from wmsconsole.views.dashboard import DashboardView
from wmsconsole.views.order_detail import OrderDetailView
from wmsconsole.views.task_detail import TaskDetailView


def _format_table(headers: List[str], rows: List[List[str]]) -> str:
    widths = [len(h) for h in headers]
    for r in rows:
        for i, cell in enumerate(r):
            widths[i] = max(widths[i], len(cell))

    def fmt_row(cols: List[str]) -> str:
        return " | ".join(col.ljust(widths[i]) for i, col in enumerate(cols))

    sep = "-+-".join("-" * w for w in widths)
    return "\n".join([fmt_row(headers), sep] + [fmt_row(r) for r in rows])


def _ask(prompt: str) -> bool:
    try:
        return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")
    except EOFError:
        return False


# -------------------- commands --------------------


async def _cmd_dashboard(gateway: RemoteGateway, args: argparse.Namespace) -> int:
    view = DashboardView(gateway)
    try:
        await view.mount(poll=False)
        if view.error is not None:
            print(f"ERR: {error_message(view.error)}")
            return 1
        m = view.metrics()
    finally:
        view.close()

    print(
        _format_table(
            ["Total Products", "Low Stock Alerts", "Active Orders", "Pending Tasks"],
            [[str(m.total_products), str(m.low_stock), str(m.active_orders), str(m.pending_tasks)]],
        )
    )
    print("\n== Recent Orders ==")
    rows = [
        [f"#{o.id}", o.status.value, format_date(o.created_at), f"{o.line_count} items"]
        for o in m.recent_orders
    ]
    print(_format_table(["Order", "Status", "Created", "Items"], rows) if rows else "<none>")
    print("\n== Low Stock ==")
    rows = [[p.sku, p.name, f"{p.quantity_in_stock} left"] for p in m.low_stock_products]
    print(_format_table(["SKU", "Name", "Stock"], rows) if rows else "<none>")
    return 0


async def _cmd_orders(gateway: RemoteGateway, args: argparse.Namespace) -> int:
    if args.status:
        orders = await gateway.orders.list_by_status(OrderStatus(args.status))
    else:
        orders = await gateway.orders.list_all()
    rows = [
        [f"#{o.id}", o.status.value, format_date(o.created_at), str(o.line_count), str(o.total_units)]
        for o in orders
    ]
    print(_format_table(["Order", "Status", "Created", "Lines", "Units"], rows) if rows else "<empty>")
    return 0


async def _cmd_tasks(gateway: RemoteGateway, args: argparse.Namespace) -> int:
    if args.status:
        tasks = await gateway.picking_tasks.list_by_status(TaskStatus(args.status))
    else:
        tasks = await gateway.picking_tasks.list_all()
    rows = [[f"#{t.id}", f"#{t.order_id}", t.status.value, format_date(t.created_at)] for t in tasks]
    print(_format_table(["Task", "Order", "Status", "Created"], rows) if rows else "<empty>")
    return 0


async def _cmd_cancel_order(gateway: RemoteGateway, args: argparse.Namespace) -> int:
    view = OrderDetailView(gateway, args.order_id)
    try:
        await view.mount()
        if view.order.error is not None:
            print(f"ERR: {error_message(view.order.error)}")
            return 1
        updated = await view.cancel(confirm=None if args.yes else _ask)
    finally:
        view.close()

    if updated is None:
        print("aborted")
        return 0
    print(f"Order #{updated.id} -> {updated.status.value}")
    return 0


async def _cmd_complete_task(gateway: RemoteGateway, args: argparse.Namespace) -> int:
    view = TaskDetailView(gateway, args.task_id)
    try:
        await view.mount()
        if view.error is not None:
            print(f"ERR: {error_message(view.error)}")
            return 1
        updated = await view.complete(confirm=None if args.yes else _ask)
    finally:
        # 命令行没有“返回列表”的页面跳转，直接撤掉延迟跳转
        view.close()

    if updated is None:
        print("aborted")
        return 0
    print(f"Task #{updated.id} -> {updated.status.value}")
    return 0


COMMANDS = {
    "dashboard": _cmd_dashboard,
    "orders": _cmd_orders,
    "tasks": _cmd_tasks,
    "cancel-order": _cmd_cancel_order,
    "complete-task": _cmd_complete_task,
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="wmsconsole", description="Warehouse operations console")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("dashboard", help="show dashboard metrics")

    p = sub.add_parser("orders", help="list orders")
    p.add_argument("--status", choices=[s.value for s in OrderStatus])

    p = sub.add_parser("tasks", help="list picking tasks")
    p.add_argument("--status", choices=[s.value for s in TaskStatus])

    p = sub.add_parser("cancel-order", help="cancel a NEW / ALLOCATED order")
    p.add_argument("order_id", type=int)
    p.add_argument("--yes", action="store_true", help="skip confirmation")

    p = sub.add_parser("complete-task", help="complete an IN_PROGRESS picking task")
    p.add_argument("task_id", type=int)
    p.add_argument("--yes", action="store_true", help="skip confirmation")
    return ap


async def run(argv: Sequence[str], gateway: Optional[RemoteGateway] = None) -> int:
    args = build_parser().parse_args(list(argv))
    own_gateway = gateway is None
    gw = gateway or RemoteGateway.connect()
    try:
        return await COMMANDS[args.command](gw, args)
    except GatewayError as exc:
        print(f"ERR: {error_message(exc)}")
        return 1
    finally:
        if own_gateway:
            await gw.aclose()


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, json=settings.JSON_LOG)
    return asyncio.run(run(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    raise SystemExit(main())
