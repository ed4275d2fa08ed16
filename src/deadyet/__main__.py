"""Main entry point for the deadyet package."""
from deadyet.cli import cli


def main():
    """Main entry point function."""
    cli()


if __name__ == "__main__":
    main()
