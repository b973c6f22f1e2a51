"""Allow running bquery as a module: python -m bquery."""

from bquery import cli


if __name__ == "__main__":
    cli.main()
