"""
Entry point for the `srclink` command-line interface.

srclink maps the source control metadata of a repository (remote URL,
commit, submodules) to the content URLs recorded in a source link file.

This module provides the main() entry point that delegates to the Click CLI.
"""


def main():
    """Main entry point for the srclink CLI."""
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
