"""Allow ``python -m fxgraph``."""

from fxgraph.cli import main

if __name__ == "__main__":
    main()
