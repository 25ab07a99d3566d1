from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Routes execution to the CLI controller and makes sure fatal crashes are
logged and reported with their own exit code.
"""

import logging
import os
import sys
import traceback
from typing import Any

EXIT_CRASH: int = 3
EXIT_INTERRUPTED: int = 130

# Anti-shadowing and path visibility logic
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
SRC_DIR = os.path.dirname(BASE_DIR)
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)


def global_exception_handler(exctype: type[BaseException], value: BaseException, tb: Any) -> None:
    """
    Log an unhandled exception and print its trace to stderr.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))

    logger = logging.getLogger("projectfilefinder.supervisor")
    logger.critical(f"FATAL EXCEPTION DETECTED: {value}\n{stack_trace}")

    print("\n" + "=" * 80, file=sys.stderr)
    print("CRITICAL ERROR (PROJECTFILEFINDER CLI)", file=sys.stderr)
    print("=" * 80, file=sys.stderr)
    print(stack_trace, file=sys.stderr)


def main() -> int:
    """
    Run the CLI under the global supervisor.

    Returns:
        int: Process exit code.
    """
    from projectfilefinder.interface.cli.app import main as cli_main

    try:
        return cli_main()
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        global_exception_handler(type(e), e, e.__traceback__)
        return EXIT_CRASH


if __name__ == "__main__":
    sys.exit(main())
