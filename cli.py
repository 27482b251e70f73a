# cli.py
import argparse
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog_sdk.client import CatalogClient, CatalogAPIError

console = Console()

# Cached product ids/names for autocomplete
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(title=title, box=box.ROUNDED, header_style="bold cyan", show_lines=True)
    table.add_column("ID", style="dim", width=12, overflow="ellipsis")
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=36)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=14)
    table.add_column("Stock", width=8)

    for p in products:
        stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            stock,
        )
    console.print(table)


def show_page(page: Dict[str, Any]):
    show_products(page.get("products", []))
    console.print(
        f"[dim]page {page.get('currentPage')}/{page.get('totalPages')} · "
        f"{page.get('totalProducts')} products · "
        f"next: {page.get('hasNext')} · previous: {page.get('hasPrevious')}[/dim]"
    )


def show_stats(stats: Dict[str, Any]):
    table = Table(title="📊 Catalog Stats", box=box.ROUNDED, header_style="bold magenta", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total products", str(stats.get("totalProducts", 0)))
    table.add_row("In stock", str(stats.get("inStock", 0)))
    table.add_row("Out of stock", str(stats.get("outOfStock", 0)))
    table.add_row("Average price", f"${stats.get('averagePrice', 0):.2f}")
    for category, count in stats.get("categories", {}).items():
        table.add_row(f"  {category}", str(count))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """Call an SDK method and print a status panel; returns None on API errors."""
    try:
        result = fn(*args, **kwargs)
    except CatalogAPIError as e:
        console.print(show_status(f"{e.name} ({e.status_code}): {e.message}", False))
        return None
    if success_msg:
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Input helpers
# ---------------------------
def get_product_completer(c: CatalogClient):
    global product_cache
    if not product_cache:
        page = try_api(c.list_products, limit=1000) or {}
        product_cache = page.get("products", [])
    words = [p.get("id", "") for p in product_cache] + [p.get("name", "") for p in product_cache]
    return WordCompleter([w for w in words if w], ignore_case=True)


def _is_number(raw: str) -> bool:
    try:
        float(raw)
    except ValueError:
        return False
    return True


def ask_price(message: str, default: Optional[float] = None) -> float:
    while True:
        raw = Prompt.ask(message, default=None if default is None else str(default))
        try:
            return float(raw)
        except (TypeError, ValueError):
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(partial: bool = False) -> Dict[str, Any]:
    """Prompt for product fields; in partial mode blank answers are left out."""
    fields: Dict[str, Any] = {}
    for key in ("name", "description", "category"):
        value = Prompt.ask(f"{key.capitalize()}" + (" (blank keeps current)" if partial else ""), default="")
        if value or not partial:
            fields[key] = value
    if partial:
        raw = Prompt.ask("Price (blank keeps current)", default="")
        if raw:
            fields["price"] = float(raw) if _is_number(raw) else ask_price("💰 Price")
        stock = Prompt.ask("In stock? (y/n, blank keeps current)", choices=["y", "n", ""], default="")
        if stock:
            fields["in_stock"] = stock == "y"
    else:
        fields["price"] = ask_price("💰 Price")
        fields["in_stock"] = Confirm.ask("In stock?", default=True)
    return fields


# ---------------------------
# Interactive menu
# ---------------------------
def menu(c: CatalogClient):
    global product_cache

    console.clear()
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    console.print(Panel(f"[bold blue]Product Catalog CLI[/bold blue]  [dim]{c.base_url} · {now}[/dim]"))

    options = [
        ("1", "📦 List products"), ("2", "🔍 Search products"), ("3", "📊 Stats"),
        ("4", "ℹ️ Get product by ID"), ("5", "➕ Create product"), ("6", "✏️ Update product"),
        ("7", "🗑️ Delete product"), ("q", "👋 Quit"),
    ]

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt(
            "Choose an option ",
            completer=WordCompleter([k for k, _ in options] + ["quit", "exit"]),
            style=custom_style,
        ).strip().lower()

        if choice == "1":
            category = Prompt.ask("Category (blank for all)", default="")
            page = Prompt.ask("Page", default="1")
            res = try_api(c.list_products, category=category or None, page=page)
            if res is not None:
                show_page(res)

        elif choice == "2":
            term = Prompt.ask("Search term")
            res = try_api(c.search_products, term)
            if res is not None:
                show_products(res["results"], title=f"🔍 Results for '{term}' ({res['count']})")

        elif choice == "3":
            res = try_api(c.get_stats)
            if res is not None:
                show_stats(res)

        elif choice == "4":
            pid = prompt("Product ID ", completer=get_product_completer(c), style=custom_style).strip()
            res = try_api(c.get_product, pid)
            if res is not None:
                show_products([res])

        elif choice == "5":
            fields = ask_product_fields()
            res = try_api(c.create_product, **fields, success_msg=f"Product '{fields['name']}' created")
            if res is not None:
                show_products([res["product"]])
                product_cache = []

        elif choice == "6":
            pid = prompt("Product ID ", completer=get_product_completer(c), style=custom_style).strip()
            fields = ask_product_fields(partial=True)
            res = try_api(c.update_product, pid, **fields, success_msg=f"Product {pid} updated")
            if res is not None:
                show_products([res["product"]])
                product_cache = []

        elif choice == "7":
            pid = prompt("Product ID ", completer=get_product_completer(c), style=custom_style).strip()
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                res = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if res is not None:
                    product_cache = []

        elif choice in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            return

        console.rule(style="dim")


# ---------------------------
# One-shot commands
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product Catalog CLI")
    parser.add_argument("--base-url", default=os.getenv("CATALOG_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"), help="Key sent as x-api-key on writes")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("interactive", help="Interactive menu (default)")

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter by category")
    lp.add_argument("--in-stock", choices=["true", "false"], help="Filter by stock flag")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    sp = subparsers.add_parser("search", help="Search name and description")
    sp.add_argument("q")

    subparsers.add_parser("stats", help="Catalog statistics")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("product_id")

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--out-of-stock", action="store_true")

    up = subparsers.add_parser("update-product", help="Update fields of a product")
    up.add_argument("product_id")
    up.add_argument("--name")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--category")
    up.add_argument("--in-stock", choices=["true", "false"])

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("product_id")
    return parser


def run(args) -> int:
    c = CatalogClient(base_url=args.base_url, api_key=args.api_key)

    if args.command in (None, "interactive"):
        menu(c)
        return 0

    try:
        if args.command == "list-products":
            in_stock = None if args.in_stock is None else args.in_stock == "true"
            show_page(c.list_products(args.category, in_stock, args.page, args.limit))
        elif args.command == "search":
            res = c.search_products(args.q)
            show_products(res["results"], title=f"🔍 Results for '{args.q}' ({res['count']})")
        elif args.command == "stats":
            show_stats(c.get_stats())
        elif args.command == "get-product":
            show_products([c.get_product(args.product_id)])
        elif args.command == "create-product":
            res = c.create_product(args.name, args.description, args.price, args.category,
                                   in_stock=not args.out_of_stock)
            console.print(show_status(res["message"]))
            show_products([res["product"]])
        elif args.command == "update-product":
            fields = {k: getattr(args, k) for k in ("name", "description", "price", "category")
                      if getattr(args, k) is not None}
            if args.in_stock is not None:
                fields["in_stock"] = args.in_stock == "true"
            res = c.update_product(args.product_id, **fields)
            console.print(show_status(res["message"]))
            show_products([res["product"]])
        elif args.command == "delete-product":
            res = c.delete_product(args.product_id)
            console.print(show_status(res["message"]))
    except CatalogAPIError as e:
        console.print(show_status(f"{e.name} ({e.status_code}): {e.message}", False))
        return 1
    return 0


def main():
    try:
        sys.exit(run(build_parser().parse_args()))
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
