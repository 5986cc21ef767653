"""
Treecli CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import asyncio
import sys
from typing import Any, Sequence

from treecli.config import find_config, loader
from treecli.console import err_console
from treecli.exceptions import TreeCliError
from treecli.logger import setup_logging
from treecli.signals import HelpSignal

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_CONFIG = 2


def main(argv: Sequence[str] | None = None) -> Any:
    """Load the command tree from the nearest config file and run it.

    Log output follows `TREECLI_LOG_MODE` and `TREECLI_LOG_FILE`.
    """
    argv = list(sys.argv[1:] if argv is None else argv)

    try:
        setup_logging()
    except ValueError as error:
        err_console.print(f"error: {error}", markup=False, soft_wrap=True)
        return EXIT_ERROR

    config_path = find_config()
    if config_path is None:
        err_console.print(
            "treecli: no treecli.yaml or treecli.toml found "
            "(set TREECLI_CONFIG to point at one)",
            markup=False,
            soft_wrap=True,
        )
        return EXIT_NO_CONFIG

    try:
        root = loader(config_path)
        asyncio.run(root.run(argv))
    except HelpSignal:
        return EXIT_OK
    except TreeCliError as error:
        err_console.print(f"error: {error}", markup=False, soft_wrap=True)
        return EXIT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
