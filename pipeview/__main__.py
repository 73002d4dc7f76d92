"""Module entrypoint for ``python -m pipeview``.

All argument parsing and session setup happen in ``pipeview.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
