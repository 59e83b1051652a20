#!/usr/bin/env python3
"""Main entry point for the ATM Console simulator"""

import sys
from typing import Optional

from .clock import Clock
from .config import AtmConfig, get_config
from .console import Console, InputReader, StdConsole
from .logging_config import setup_logging
from .session import Session, open_account, print_header

EXIT_OK = 0
EXIT_INTERRUPTED = 130


def main(console: Optional[Console] = None, config: Optional[AtmConfig] = None,
         clock: Optional[Clock] = None) -> int:
    """Run one complete session and return the process exit code"""
    config = config or get_config()
    console = console or StdConsole()
    logger = setup_logging(config.log_level, log_format=config.log_format, log_file=config.log_file)

    print_header(console, "ATM Console")
    try:
        account = open_account(InputReader(console), config, clock)
        Session(account, console, config).run()
    except (EOFError, KeyboardInterrupt):
        console.write("\nSession ended.")
        logger.info("Session ended before exit was selected")
        return EXIT_INTERRUPTED

    console.write("\nThank you for using ATM Console.")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
