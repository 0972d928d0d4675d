# cli.py
import argparse
import os
import sys
from typing import Any, Dict, List, Optional

import httpx
import requests
from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, FloatPrompt, IntPrompt
from rich.table import Table

from sdk.client import ProductClient

console = Console()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def products_table(products: List[Dict[str, Any]], title: str = "📦 Products") -> Table:
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
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"{p.get('price', 0):,}",
            p.get("category", "N/A"),
            "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]",
        )
    return table


def show_page(page: Dict[str, Any]):
    results = page.get("results", [])
    if not results:
        console.print("[italic yellow]No products found[/italic yellow]")
    else:
        console.print(products_table(results))
    console.print(f"[dim]page {page.get('page')} · limit {page.get('limit')} · {page.get('total')} matching[/dim]")


def show_stats(stats: Dict[str, int]):
    table = Table(title="📊 Products per category", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category")
    table.add_column("Count", justify="right")
    for category, count in sorted(stats.items()):
        table.add_row(category, str(count))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def describe_http_error(exc) -> str:
    """Render an HTTP error raised by either a requests or an httpx response."""
    resp = exc.response
    if resp is None:
        return str(exc)
    try:
        body = resp.json()
        return f"{resp.status_code} {body.get('error')}: {body.get('message')}"
    except ValueError:
        return f"HTTP {resp.status_code}: {resp.text}"


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Prints a status panel and returns None on failure.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except (requests.HTTPError, httpx.HTTPStatusError) as e:
        console.print(show_status(f"Error: {describe_http_error(e)}", False))
        return None
    except requests.RequestException as e:
        console.print(show_status(f"Error: {e}", False))
        return None

    if success_msg:
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Interactive mode
# ---------------------------
def product_completer(c: ProductClient) -> WordCompleter:
    page = try_api(c.list_products, limit=1000) or {}
    ids = [p["id"] for p in page.get("results", [])]
    return WordCompleter(ids, ignore_case=True)


def category_completer(c: ProductClient) -> WordCompleter:
    stats = try_api(c.stats) or {}
    return WordCompleter(sorted(stats), ignore_case=True)


def ask(message: str, completer=None, default: str = "") -> str:
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default).strip()


def ask_product_fields(c: ProductClient, current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": ask("Name", default=current.get("name", "")),
        "description": ask("Description", default=current.get("description", "")),
        "price": FloatPrompt.ask("Price", default=float(current.get("price", 0))),
        "category": ask("Category", completer=category_completer(c), default=current.get("category", "")),
        "in_stock": Confirm.ask("In stock?", default=current.get("inStock", True)),
    }


def menu(c: ProductClient):
    console.clear()
    console.print(Panel.fit(f"[bold blue]Product catalogue[/bold blue] · {c.base_url}", style="bold blue"))

    options = [
        ("1", "📦 List products"),
        ("2", "🔍 Search / filter"),
        ("3", "ℹ️ Get product by ID"),
        ("4", "➕ Create product"),
        ("5", "✏️ Update product"),
        ("6", "🗑️ Delete product"),
        ("7", "📊 Category stats"),
        ("q", "👋 Quit"),
    ]

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = ask("\nChoose an option", completer=WordCompleter([k for k, _ in options])).lower()

        if choice == "1":
            page = IntPrompt.ask("Page", default=1)
            resp = try_api(c.list_products, page=page)
            if resp:
                show_page(resp)

        elif choice == "2":
            category = ask("Category (blank for any)", completer=category_completer(c)) or None
            search = ask("Name contains (blank for any)") or None
            resp = try_api(c.list_products, category=category, search=search)
            if resp:
                show_page(resp)

        elif choice == "3":
            pid = ask("Product ID", completer=product_completer(c))
            resp = try_api(c.get_product, pid)
            if resp:
                console.print(products_table([resp], title="ℹ️ Product"))

        elif choice == "4":
            fields = ask_product_fields(c)
            resp = try_api(c.create_product, success_msg=f"Product '{fields['name']}' created", **fields)
            if resp:
                console.print(products_table([resp], title="➕ Created"))

        elif choice == "5":
            pid = ask("Product ID", completer=product_completer(c))
            current = try_api(c.get_product, pid)
            if current:
                fields = ask_product_fields(c, current)
                resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
                if resp:
                    console.print(products_table([resp], title="✏️ Updated"))

        elif choice == "6":
            pid = ask("Product ID", completer=product_completer(c))
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid)
                if resp:
                    console.print(show_status(resp["message"], True))

        elif choice == "7":
            resp = try_api(c.stats)
            if resp is not None:
                show_stats(resp)

        elif choice in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            return

        console.print()
        console.rule(style="dim")


# ---------------------------
# One-shot commands
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product catalogue CLI")
    parser.add_argument("--url", default=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
                        help="Base URL of the API")
    parser.add_argument("--api-key", default=os.getenv("API_KEY"), help="Value for the x-api-key header")
    parser.add_argument("--interactive", "-i", action="store_true", help="Start the interactive menu")
    subparsers = parser.add_subparsers(dest="command")

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Exact category (case-insensitive)")
    lp.add_argument("--search", help="Substring of the product name")
    lp.add_argument("--page", type=int, default=None)
    lp.add_argument("--limit", type=int, default=None)

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("product_id")

    for name, help_text in (("create", "Create a product"), ("update", "Replace a product")):
        sp = subparsers.add_parser(name, help=help_text)
        if name == "update":
            sp.add_argument("product_id")
        sp.add_argument("--name", required=True)
        sp.add_argument("--description", required=True)
        sp.add_argument("--price", type=float, required=True)
        sp.add_argument("--category", required=True)
        sp.add_argument("--out-of-stock", action="store_true", help="Mark as not in stock")

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("product_id")

    subparsers.add_parser("stats", help="Count products per category")
    return parser


def run_command(c: ProductClient, args: argparse.Namespace) -> bool:
    resp = None
    if args.command == "list":
        resp = try_api(c.list_products, args.category, args.search, args.page, args.limit)
        if resp:
            show_page(resp)
    elif args.command == "get":
        resp = try_api(c.get_product, args.product_id)
        if resp:
            console.print(products_table([resp], title="ℹ️ Product"))
    elif args.command in ("create", "update"):
        fields = dict(name=args.name, description=args.description, price=args.price,
                      category=args.category, in_stock=not args.out_of_stock)
        if args.command == "create":
            resp = try_api(c.create_product, success_msg="Product created", **fields)
        else:
            resp = try_api(c.update_product, args.product_id, success_msg="Product updated", **fields)
        if resp:
            console.print(products_table([resp]))
    elif args.command == "delete":
        resp = try_api(c.delete_product, args.product_id)
        if resp:
            console.print(show_status(resp["message"], True))
    elif args.command == "stats":
        resp = try_api(c.stats)
        if resp is not None:
            show_stats(resp)
    return resp is not None


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    c = ProductClient(base_url=args.url, api_key=args.api_key)

    if args.interactive:
        try:
            menu(c)
        except KeyboardInterrupt:
            console.print("\n\n[bold red]Interrupted by user[/bold red]")
            return 1
        return 0

    if not args.command:
        parser.print_help()
        return 2
    return 0 if run_command(c, args) else 1


if __name__ == "__main__":
    sys.exit(main())
