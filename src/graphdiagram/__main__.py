"""Main entry point for graphdiagram when run as a module.

This module enables running graphdiagram directly using 'python -m graphdiagram'.
It provides a simple command router to different submodules.
"""

import sys

from . import cli


def main():
    """Main entry point for the package."""
    if len(sys.argv) < 2:
        print("Usage: python -m graphdiagram <command> [args...]")
        print("\nAvailable commands:")
        print("  cli - Access the CLI interface")
        sys.exit(1)

    command = sys.argv.pop(1)  # Remove the command and shift remaining args

    if command == "cli":
        cli.run(sys.argv[1:])
    else:
        print(f"Unknown command: {command}")
        print("Available commands: cli")
        sys.exit(1)


if __name__ == "__main__":
    main()
