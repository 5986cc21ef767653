import asyncio
import sys

from treecli import BoolOption, Command, HelpSignal, IntOption, StringOption
from treecli.logger import setup_logging

setup_logging()


async def serve(command: Command, args: list[str]) -> None:
    port = command.get_option_int("port")
    host = command.get_option_string("host")
    verbose = root.get_option_bool("verbose")
    print(f"serving on {host}:{port} verbose={verbose} extra={args}")


def version(command: Command, args: list[str]) -> None:
    print("main-cli 0.1.0")


root = Command(
    name="main-cli",
    description="Example command tree.",
    options=[
        BoolOption(
            name="verbose",
            short="v",
            environment="VERBOSE",
            description="output verbose",
            default=False,
        ),
    ],
    subcommands=[
        Command(
            name="sub",
            aliases=["serve"],
            description="Serve requests.",
            options=[
                IntOption(name="port", short="p", environment="PORT", default=8080),
                StringOption(name="host", description="bind address", default="127.0.0.1"),
            ],
            run_func=serve,
        ),
        Command(name="version", description="Show version.", run_func=version),
    ],
)


if __name__ == "__main__":
    try:
        asyncio.run(root.run(sys.argv))
    except HelpSignal:
        pass
