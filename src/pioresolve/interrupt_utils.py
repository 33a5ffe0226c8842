"""Utilities for handling KeyboardInterrupt around blocking catalog calls.

Catalog queries block on PlatformIO subprocesses; a Ctrl-C arriving while
one runs must reach the main thread instead of being turned into a catalog
error by the surrounding exception handlers.
"""

import _thread


def handle_keyboard_interrupt_properly(ke: KeyboardInterrupt) -> None:
    """Propagate a KeyboardInterrupt to the main thread and re-raise it.

    Usage:
        try:
            result = subprocess.run(cmd, ...)
        except KeyboardInterrupt as ke:
            handle_keyboard_interrupt_properly(ke)
        except OSError as e:
            raise CatalogTransportError(...) from e

    Args:
        ke: The KeyboardInterrupt exception to handle

    Raises:
        KeyboardInterrupt: Always
    """
    _thread.interrupt_main()
    raise ke
