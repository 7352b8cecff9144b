"""Module entrypoint for ``python -m lazydiff``.

All argument parsing and runtime setup happen in ``lazydiff.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
