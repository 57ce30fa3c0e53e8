#!/usr/bin/env python3
"""
Example demonstrating config file loading with command-line overrides.

Values are first loaded from a YAML or JSON file; command-line options then
overwrite scalar values and append to list values. Options the file already
sets count as given, so their declared defaults are not used.

Usage:
    python override_example.py settings.yaml --jobs 8 --target docs
"""

import logging
import sys

from optdesc import CommandLine, ConfigSet, ParserSettings

OPTIONS = [
    "!:name,n=string:project name",
    ":jobs,j=int,1:number of parallel jobs",
    "*target:target,t=string:build TARGET (may be repeated)",
    ":dry-run:only print what would be done",
]

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if len(sys.argv) < 2:
        print(f"usage: {sys.argv[0]} CONFIG_FILE [OPTIONS]", file=sys.stderr)
        sys.exit(2)

    config = ConfigSet.from_file(sys.argv[1])
    cmdline = CommandLine(
        OPTIONS,
        banner="usage: build CONFIG_FILE [OPTIONS]",
        settings=ParserSettings.from_environment(allow_abbreviations=True),
    )
    cmdline.parse(sys.argv[2:], config)

    for key, value in sorted(config.to_dict().items()):
        print(f"{key} = {value!r}")
