# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console used as the stderr sink by treecli.

Usage text, diagnostics and console-script errors go to `err_console`. Pass a
different `Console` to `render_usage()` to capture usage elsewhere.
"""
from rich.console import Console

err_console = Console(stderr=True, highlight=False)
