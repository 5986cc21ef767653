from treecli import Command


def push(command: Command, args: list[str]) -> None:
    replicas = command.get_option_int("replicas")
    print(f"pushing {args} with {replicas} replicas")


def rollback(command: Command, args: list[str]) -> None:
    ratio = command.get_option_float("ratio")
    print(f"rolling back {ratio:.0%} of traffic")
