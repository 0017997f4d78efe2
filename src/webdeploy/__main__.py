"""Allow running webdeploy as ``python -m webdeploy``."""

from webdeploy.cli import cli_main

if __name__ == "__main__":
    cli_main()
