"""Module entrypoint for ``python -m lazyexplorer``."""

from .cli import main


if __name__ == "__main__":
    main()
