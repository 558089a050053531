"""Module entrypoint for ``python -m explorersharp``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and command dispatch happen in ``explorersharp.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
