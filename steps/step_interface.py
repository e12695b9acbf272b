from typing import Mapping, Protocol, Sequence


class StepRunner(Protocol):
    """
    Protocol for whatever executes a pipeline step's command.
    Implementations block until the command is done and return its exit status.
    """

    def run(self, command: Sequence[str], env: Mapping[str, str]) -> int:
        """
        Run ``command`` with exactly ``env`` as its environment.
        :param command: Program path followed by its arguments.
        :param env: Complete environment for the child process.
        :return: The exit status; 0 means success.
        """
        ...
