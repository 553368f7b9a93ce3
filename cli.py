# cli.py
import argparse
import json
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from products_sdk.client import ProductsApiError, ProductsClient

console = Console()

BASE_URL = os.getenv("PRODUCTS_API_URL", "http://127.0.0.1:3000")
API_KEY = os.getenv("PRODUCTS_API_KEY", "mysecretapikey")

# Global state for status messages and autocomplete
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
category_cache = set()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=36)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=8)

    for p in products:
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"{p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]",
        )
    console.print(table)


def show_page(page: Dict[str, Any]):
    show_products(page.get("data", []), title=f"📦 Products (page {page.get('page')})")
    console.print(f"[dim]limit {page.get('limit')} · {page.get('total')} matching products[/dim]")


def show_stats(stats: Dict[str, int]):
    if not stats:
        console.print("[italic yellow]Store is empty[/italic yellow]")
        return
    table = Table(title="📊 Products per category", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category")
    table.add_column("Count", justify="right")
    for category, count in stats.items():
        table.add_row(category, str(count))
    table.add_row("[bold]Total[/bold]", f"[bold]{sum(stats.values())}[/bold]")
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. API errors are shown in the
    status panel and turn into a None result.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except ProductsApiError as e:
        status_message = f"Error: {e.message} ({e.status_code})"
        console.print(show_status(status_message, False))
        return None
    except OSError as e:
        status_message = f"Error: cannot reach {BASE_URL}: {e}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_cache(c: ProductsClient):
    global product_cache
    try:
        product_cache = list(c.iter_products())
    except (ProductsApiError, OSError):
        product_cache = []
    for p in product_cache:
        category_cache.add(p.get("category", ""))


def get_product_completer():
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    return WordCompleter([c for c in category_cache if c], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("Name", default=current.get("name", "")),
        "description": prompt_with_autocomplete("Description", default=current.get("description", "")),
        "price": ask_float("💰 Price", default=current.get("price", 10.0)),
        "category": prompt_with_autocomplete(
            "🏷️ Category", completer=get_category_completer(), default=current.get("category", "general")
        ),
        "in_stock": Confirm.ask("In stock?", default=current.get("inStock", True)),
    }


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Products API",
        f"[bold blue]{BASE_URL}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu(c: ProductsClient):
    global status_message

    console.clear()
    console.print(create_header())
    refresh_cache(c)

    options = [
        ("1", "📦 List products", "5", "✏️ Update product"),
        ("2", "🔍 Search by name", "6", "🗑️ Delete product"),
        ("3", "ℹ️ Get product by ID", "7", "📊 Category stats"),
        ("4", "➕ Create product", "q", "👋 Quit"),
    ]

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            category = prompt_with_autocomplete("Category (blank for all)", completer=get_category_completer())
            page = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Page size", default=10)
            resp = try_api(c.list_products, category or None, page, limit, success_msg="Products loaded")
            if resp is not None:
                show_page(resp)

        elif choice == "2":
            term = prompt_with_autocomplete("Name contains")
            resp = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if resp is not None:
                show_products(resp, title=f"🔍 Matches for '{term}'")

        elif choice == "3":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if resp:
                show_products([resp])

        elif choice == "4":
            fields = ask_product_fields()
            resp = try_api(c.create_product, success_msg=f"Product '{fields['name']}' created", **fields)
            if resp:
                console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
                refresh_cache(c)

        elif choice == "5":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if current:
                fields = ask_product_fields(current)
                resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
                if resp:
                    show_products([resp])
                    refresh_cache(c)

        elif choice == "6":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                refresh_cache(c)

        elif choice == "7":
            resp = try_api(c.stats, success_msg="Stats loaded")
            if resp is not None:
                show_stats(resp)

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            return

        console.print()
        console.rule(style="dim")


# ---------------------------
# One-shot subcommands
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Products API client")
    parser.add_argument("--url", default=BASE_URL, help="Base URL of the service")
    parser.add_argument("--api-key", default=API_KEY, help="Shared API key")
    subparsers = parser.add_subparsers(dest="command")

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Case-insensitive category filter")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get", help="Get a product by ID")
    gp.add_argument("product_id")

    for name in ("create", "update"):
        sp = subparsers.add_parser(name, help=f"{name.capitalize()} a product")
        if name == "update":
            sp.add_argument("product_id")
        sp.add_argument("--name", required=True)
        sp.add_argument("--description", default="")
        sp.add_argument("--price", type=float, required=True)
        sp.add_argument("--category", required=True)
        sp.add_argument("--out-of-stock", action="store_true", help="Mark as not in stock")

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("product_id")

    sp = subparsers.add_parser("search", help="Search products by name")
    sp.add_argument("name")

    subparsers.add_parser("stats", help="Product count per category")
    return parser


def run_command(c: ProductsClient, args: argparse.Namespace) -> Any:
    if args.command == "list":
        return c.list_products(args.category, args.page, args.limit)
    if args.command == "get":
        return c.get_product(args.product_id)
    if args.command == "create":
        return c.create_product(args.name, args.description, args.price, args.category, not args.out_of_stock)
    if args.command == "update":
        return c.update_product(
            args.product_id, args.name, args.description, args.price, args.category, not args.out_of_stock
        )
    if args.command == "delete":
        c.delete_product(args.product_id)
        return {"deleted": args.product_id}
    if args.command == "search":
        return c.search_products(args.name)
    if args.command == "stats":
        return c.stats()
    raise ValueError(f"unknown command {args.command!r}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    c = ProductsClient(base_url=args.url, api_key=args.api_key)

    if args.command is None:
        menu(c)
        return 0

    try:
        result = run_command(c, args)
    except ProductsApiError as e:
        console.print(f"[bold red]{e}[/bold red]")
        return 1
    console.print_json(json.dumps(result))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
