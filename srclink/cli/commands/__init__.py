"""
Click command implementations for srclink CLI.

Each module corresponds to a srclink command (e.g., generate.py implements
'srclink generate'). Commands are registered with the main CLI group via
the register_commands() function in srclink.cli.
"""

from .config import config
from .generate import generate
from .lookup import lookup
from .providers import providers
from .resolve import resolve
from .translate import translate

# List of commands for registration
COMMANDS = [
    config,
    generate,
    lookup,
    providers,
    resolve,
    translate,
]

__all__ = [
    "COMMANDS",
    "config",
    "generate",
    "lookup",
    "providers",
    "resolve",
    "translate",
]
