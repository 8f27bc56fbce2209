"""Module entrypoint for ``python -m ocflview``.

All argument parsing and command dispatch happen in ``ocflview.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
