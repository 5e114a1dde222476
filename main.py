from rich.pretty import pprint

from libcli import *

__prog__ = "myprogram"

specs = [
    OptionSpec(NO_ABBREVIATION, UNNAMED, "Input files", required=True, policy=AtLeast(1)),
    OptionSpec("o", "output", "Output file", required=True, policy=Exact(1)),
    OptionSpec("v", "verbose", "Shows verbose output", policy=Exact(0)),
    OptionSpec("h", "help", "Display a help screen", policy=Terminator()),
]


if __name__ == '__main__':
    config = parse_from_process_arguments(specs, shell=True)

    if config.option("help") is not None:
        print_usage(specs, title=__prog__)
    elif config.option("verbose") is not None:
        print("Reading files %s..." % ", ".join(config[UNNAMED]))
        pprint(config)
