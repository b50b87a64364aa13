"""
Inspection entry point: python -m pacargs [ARGS...]

Loads the persisted settings, parses the command line exactly as the front end
would, saves the settings back when --save was given and prints what would be
handed to the wrapped tool. Faults are rendered on stderr with exit status 1.

Set PACARGS_DEBUG=1 for debug logging on stderr.
"""
import logging
import os
import sys

from rich.logging import RichHandler
from rich.pretty import pprint

from .faults import ArgumentsException, console, trigger
from .parser import parse_command_line
from .settings import Configuration
from .sources import StreamSource
from .utils import truthy

__prog__ = "pacargs"


def main(argv=None):
    logging.basicConfig(
        level=logging.DEBUG if truthy(os.environ.get("PACARGS_DEBUG")) else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    with StreamSource() as source:
        try:
            config = Configuration.load()
            arguments, config = parse_command_line(sys.argv[1:] if argv is None else argv, config=config, source=source)
            if config.runtime.save_config:
                config.save()
        except ArgumentsException as fault:
            trigger(fault, shell=True, prog=__prog__)

        pprint(arguments)
        pprint(config)
        pprint({
            "pacman": [config.pacman_bin, *filter(None, arguments.format_args()), *arguments.format_globals(), *arguments.targets],
            "need_root": arguments.need_root(config.runtime.mode),
            "prompt": getattr(source.prompt, "name", None),
        })
    return 0


if __name__ == '__main__':
    sys.exit(main())
