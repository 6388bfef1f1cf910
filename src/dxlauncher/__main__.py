"""Allow running the launcher with python -m dxlauncher."""

from dxlauncher.cli import cli_main

if __name__ == "__main__":
    cli_main()
