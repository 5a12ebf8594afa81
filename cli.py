# cli.py - interactive console for the store API
import os
import sys
from typing import List, Dict, Any, Optional

import requests
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.status import Status
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.shopclient import StoreAPIError, StoreClient

API_URL = os.environ.get("SHOP_API_URL", "http://127.0.0.1:8080")

console = Console()
c = StoreClient(base_url=API_URL)

# ids offered by the completers
product_cache: List[Dict[str, Any]] = []

prompt_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#444444 #eeeeee',
    'completion-menu.completion.current': 'bg:#5f87af #ffffff bold',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Title", style="bold", width=22)
    table.add_column("Code", width=12)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Category", width=15)
    table.add_column("Active", width=7)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("title", "N/A"),
            p.get("code", "N/A"),
            f"${p.get('price', 0):.2f}",
            str(p.get("stock", 0)),
            p.get("category", "N/A"),
            "[green]yes[/green]" if p.get("status", True) else "[red]no[/red]",
        )
    console.print(table)


def _product_title(product_id: int) -> str:
    for p in product_cache:
        if p.get("id") == product_id:
            return p.get("title", f"Product {product_id}")
    return f"[red]Unknown product {product_id}[/red]"


def show_cart(cart: Dict[str, Any]):
    if not cart:
        console.print("[italic yellow]No cart data[/italic yellow]")
        return

    items = cart.get("products", [])
    title = Text()
    title.append(f"🛒 Cart #{cart.get('id', '?')}", style="bold")
    title.append(f" - {sum(it.get('quantity', 0) for it in items)} units", style="bold green")

    if not items:
        console.print(Panel("This cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product ID", style="dim", width=10)
    table.add_column("Title", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)

    for it in items:
        table.add_row(str(it.get("product")), _product_title(it.get("product")), str(it.get("quantity", 0)))

    console.print(Panel(table, title=title, border_style="blue"))


def show_carts(carts: List[Dict[str, Any]]):
    if not carts:
        console.print("[italic yellow]No carts found[/italic yellow]")
        return

    table = Table(title="🛒 Carts", box=box.ROUNDED, header_style="bold yellow", show_lines=True)
    table.add_column("Cart ID", style="dim", width=8)
    table.add_column("Lines", justify="right", width=8)
    table.add_column("Units", justify="right", width=8)
    for cart in carts:
        items = cart.get("products", [])
        table.add_row(str(cart.get("id")), str(len(items)), str(sum(it.get("quantity", 0) for it in items)))
    console.print(table)


# ---------------------------
# API calls
# ---------------------------
def try_api(fn, *args, done: Optional[str] = None, **kwargs):
    """Run an SDK call under a spinner. Returns the payload, or None after printing the error."""
    try:
        with Status("Talking to the store...", console=console, spinner="dots"):
            result = fn(*args, **kwargs)
    except StoreAPIError as e:
        console.print(f"[red]✗ {e}[/red]")
        return None
    except requests.RequestException as e:
        console.print(f"[red]✗ Store API unreachable at {API_URL}: {e}[/red]")
        return None
    if done:
        console.print(f"[green]✓ {done}[/green]")
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_products():
    global product_cache
    product_cache = try_api(c.list_products) or []


def get_product_completer():
    if not product_cache:
        refresh_products()
    return WordCompleter([str(p.get("id")) for p in product_cache], ignore_case=True)


def get_cart_completer():
    carts = try_api(c.list_carts) or []
    return WordCompleter([str(cart.get("id")) for cart in carts], ignore_case=True)


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=prompt_style, default=default)


def ask_int(message: str, completer=None) -> Optional[int]:
    raw = prompt_with_autocomplete(message, completer=completer).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Please enter a whole number.[/red]")
        return None


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_optional(message: str) -> Optional[str]:
    raw = Prompt.ask(f"{message} [dim](blank to keep)[/dim]", default="")
    return raw.strip() or None


# ---------------------------
# Main menu
# ---------------------------
def menu():
    console.clear()
    console.rule(f"[bold blue]🛍️ Products & Carts Console[/bold blue] [dim]{API_URL}[/dim]")
    refresh_products()

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "6", "🛒 List carts"),
            ("2", "ℹ️ Get product by ID", "7", "🆕 Create cart"),
            ("3", "➕ Create product", "8", "👀 View cart"),
            ("4", "✏️ Update product", "9", "➕ Add to cart"),
            ("5", "🗑️ Delete product", "10", "➖ Remove from cart"),
            ("", "", "11", "🔢 Set quantity"),
            ("", "", "12", "🧹 Clear cart"),
            ("", "", "q", "👋 Quit")
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 13)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, done="Products loaded successfully")
            if products is not None:
                product_cache[:] = products
                show_products(products)

        elif choice == "2":
            pid = ask_int("Enter product ID", completer=get_product_completer())
            if pid is not None:
                resp = try_api(c.get_product, pid, done=f"Product {pid} details loaded")
                if resp:
                    show_products([resp])

        elif choice == "3":
            title = prompt_with_autocomplete("Title")
            description = prompt_with_autocomplete("Description")
            code = prompt_with_autocomplete("Code")
            price = ask_float("💰 Price", default=10.0)
            stock = IntPrompt.ask("📦 Stock", default=1)
            category = prompt_with_autocomplete("🏷️ Category", default="general")
            resp = try_api(
                c.create_product, title, description, code, price, stock, category,
                done=f"Product '{title}' created"
            )
            if resp:
                show_products([resp])
                refresh_products()

        elif choice == "4":
            pid = ask_int("Enter product ID", completer=get_product_completer())
            if pid is None:
                continue
            fields: Dict[str, Any] = {}
            for name in ("title", "description", "code", "category"):
                value = ask_optional(name.capitalize())
                if value is not None:
                    fields[name] = value
            price = ask_optional("Price")
            stock = ask_optional("Stock")
            try:
                if price is not None:
                    fields["price"] = float(price)
                if stock is not None:
                    fields["stock"] = int(stock)
            except ValueError:
                console.print("[red]Price and stock must be numbers.[/red]")
                continue
            if not fields:
                console.print("[yellow]Nothing to update[/yellow]")
                continue
            resp = try_api(c.update_product, pid, done=f"Product {pid} updated", **fields)
            if resp:
                show_products([resp])
                refresh_products()

        elif choice == "5":
            pid = ask_int("Enter product ID", completer=get_product_completer())
            if pid is not None and Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, done=f"Product {pid} deleted")
                if resp:
                    refresh_products()

        elif choice == "6":
            carts = try_api(c.list_carts, done="Carts loaded")
            if carts is not None:
                show_carts(carts)

        elif choice == "7":
            resp = try_api(c.create_cart, done="Cart created")
            if resp:
                show_cart(resp)

        elif choice == "8":
            cid = ask_int("Enter cart ID", completer=get_cart_completer())
            if cid is not None:
                resp = try_api(c.get_cart, cid, done=f"Cart {cid} loaded")
                if resp:
                    show_cart(resp)

        elif choice in ("9", "10", "11"):
            cid = ask_int("Enter cart ID", completer=get_cart_completer())
            pid = ask_int("Enter product ID", completer=get_product_completer()) if cid is not None else None
            if cid is None or pid is None:
                continue
            if choice == "9":
                resp = try_api(c.add_to_cart, cid, pid, done=f"Added product {pid} to cart {cid}")
            elif choice == "10":
                resp = try_api(c.remove_from_cart, cid, pid, done=f"Removed product {pid} from cart {cid}")
            else:
                qty = IntPrompt.ask("New quantity", default=1)
                resp = try_api(c.update_quantity, cid, pid, qty, done=f"Quantity set to {qty}")
            if resp:
                show_cart(resp)

        elif choice == "12":
            cid = ask_int("Enter cart ID", completer=get_cart_completer())
            if cid is not None and Confirm.ask(f"[red]Remove every product from cart {cid}?[/red]"):
                resp = try_api(c.clear_cart, cid, done=f"Cart {cid} cleared")
                if resp:
                    show_cart(resp)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
