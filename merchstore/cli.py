# merchstore/cli.py
import json

import click
from flask import current_app
from flask.cli import with_appcontext

from .catalog import color_label
from .errors import OrderNotFound, StoreError
from .schemas import normalise_order_code
from .services.admin_service import build_admin_summary, mark_order_paid
from .store import current_store
from .utils.money import parse_production_cost


@click.command("mark-paid")
@click.argument("order_code")
@with_appcontext
def mark_paid(order_code):
    code = normalise_order_code(order_code)
    if not code:
        raise click.BadParameter("order code is empty", param_hint="ORDER_CODE")
    try:
        data = mark_order_paid(current_store(), code)
    except OrderNotFound:
        raise click.ClickException(f"no order found with code {code}")
    except StoreError:
        raise click.ClickException("could not update the order")
    click.echo(f"{data['order']['order_hash']} -> {data['order']['status']} ({data['updatedAt']})")


@click.command("order-summary")
@click.option("--production-cost", default="0", help="Production cost per item, e.g. 18,50")
@click.option("--json", "as_json", is_flag=True, help="Print the raw summary payload.")
@with_appcontext
def order_summary(production_cost, as_json):
    try:
        data = build_admin_summary(
            current_store(),
            unit_price=current_app.config["UNIT_SALE_PRICE"],
            production_cost=parse_production_cost(production_cost),
        )
    except StoreError:
        raise click.ClickException("could not load the summary")
    if as_json:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    summary, money = data["summary"], data["financials"]
    click.echo(f"orders: {summary['totalOrders']}")
    for status, count in sorted(summary["statusCounts"].items()):
        click.echo(f"  {status}: {count}")
    for variant, count in sorted(summary["itemsByVariant"].items(), key=lambda kv: -kv[1]):
        color, _, size = variant.partition("__")
        click.echo(f"  {color_label(color)} {size.upper()}: {count}")
    click.echo(f"revenue: {money['totalRevenue']:.2f} (paid {money['paidRevenue']:.2f})")
    click.echo(f"profit: {money['totalProfit']:.2f} (paid {money['paidProfit']:.2f})")


def register_cli(app):
    app.cli.add_command(mark_paid)
    app.cli.add_command(order_summary)
