"""
Centralized UI constants for consistent styling across Stackette.

This module defines standard symbols and styles used in Rich console
output throughout the application.
"""

# Colorblind-friendly symbols and styles
SYMBOLS = {
    "app": "📦 ",
    "stack": "🗂️ ",
    "construct": "◆ ",
    "resource": "→ ",
    "output": "⇢ ",
    "success": "[bold green]✓[/bold green] ",
    "error": "[bold red]![/bold red] ",
    "warning": "[bold yellow]⚠[/bold yellow] ",
    "info": "[bold blue]i[/bold blue] ",
}

STYLE = {
    "header": "bold cyan",
    "dim": "dim",
    "info": "blue",
    "warning": "yellow",
    "error": "red",
    "success": "green",
    "node_stack": "bold",
    "node_construct": "underline",
    "node_resource": "cyan",
    "resource_type": "magenta",
    "logical_id": "dim",
}
