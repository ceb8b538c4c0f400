"""Main entry point for ``python -m addondeploy``."""

from addondeploy.cli.main import main


if __name__ == "__main__":
    main()
