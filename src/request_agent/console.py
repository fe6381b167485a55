"""
Rich console tracing of requests and responses.
"""
import json
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from .types import AgentResponse

console = Console(stderr=True)


def _format_body(body: Any) -> str:
    """Format body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    return str(body)


def print_request(
    method: str,
    url: str,
    headers: Dict[str, str],
    content: Optional[bytes] = None,
) -> None:
    console.print(Panel(f"[bold cyan]{method}[/bold cyan] {escape(url)}", title="[bold blue]Request[/bold blue]"))
    console.print("[bold]Headers:[/bold]", headers)
    if content:
        console.print(
            Panel(
                Syntax(_format_body(content), "json", theme="monokai", word_wrap=True),
                title="[bold]Request Body[/bold]",
            )
        )


def print_response(response: Optional[AgentResponse], data: Any, error: Optional[Exception]) -> None:
    if response is None:
        console.print(Panel(f"[bold red]{escape(str(error))}[/bold red]", title="[bold blue]Response[/bold blue]"))
        return

    status_color = "green" if response.ok else "red"
    response_info = (
        f"[bold {status_color}]{response.status}[/bold {status_color}] {escape(response.status_text)}"
    )
    console.print(Panel(response_info, title=f"[bold blue]Response[/bold blue] ({escape(response.url)})"))
    console.print("[bold]Headers:[/bold]", response.headers)
    if error is not None:
        console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    if data:
        lexer = "json" if isinstance(data, (dict, list)) else "text"
        console.print(
            Panel(
                Syntax(_format_body(data), lexer, theme="monokai", word_wrap=True),
                title=f"[bold]Response Body[/bold] (URL: {escape(response.url)})",
            )
        )
