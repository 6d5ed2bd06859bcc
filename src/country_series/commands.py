"""Line-oriented command interpreter driving a :class:`CountryData`."""

from collections.abc import Callable, Iterable, Iterator

import structlog
from attrs import define, field

from .series import CountryData, FailureReason, Outcome

logger = structlog.get_logger(__name__)

EXIT_COMMAND = "EXIT"


def iter_tokens(lines: Iterable[str]) -> Iterator[str]:
    """Split input lines into whitespace separated tokens."""
    for line in lines:
        yield from line.split()


@define(frozen=True)
class CommandSpec:
    """Arity and handler of one command keyword."""

    arity: int
    handler: Callable[[CountryData, list[str]], Outcome]


def _code_year_value(
    action: Callable[[CountryData, str, int, float], Outcome],
) -> Callable[[CountryData, list[str]], Outcome]:
    def handler(country: CountryData, args: list[str]) -> Outcome:
        code, raw_year, raw_value = args
        try:
            year = int(raw_year)
            value = float(raw_value)
        except ValueError:
            logger.warning("command.bad_argument", code=code, year=raw_year, value=raw_value)
            return Outcome.failure(FailureReason.PARSE_FAILURE)
        return action(country, code, year, value)

    return handler


COMMANDS: dict[str, CommandSpec] = {
    "LOAD_P2": CommandSpec(1, lambda country, args: country.load(args[0])),
    "LIST_P2": CommandSpec(0, lambda country, args: country.list_series()),
    "ADD_P2": CommandSpec(3, _code_year_value(CountryData.add_series_element)),
    "UPDATE_P2": CommandSpec(3, _code_year_value(CountryData.update)),
    "PRINT_P2": CommandSpec(1, lambda country, args: country.print_series(args[0])),
    "DELETE_P2": CommandSpec(1, lambda country, args: country.delete_series(args[0])),
    "BIGGEST_P2": CommandSpec(0, lambda country, args: country.series_with_biggest_mean()),
    "TS_P2": CommandSpec(1, lambda country, args: country.series_size_capacity(args[0])),
    "MEAN_P2": CommandSpec(1, lambda country, args: country.series_mean(args[0])),
    "MONOTONIC_P2": CommandSpec(1, lambda country, args: country.series_monotonic(args[0])),
    "FIT_P2": CommandSpec(1, lambda country, args: country.series_best_fit(args[0])),
}


@define(slots=True)
class CommandRouter:
    """Read commands from a token stream and emit one result line per command."""

    country: CountryData = field(factory=CountryData)
    commands: dict[str, CommandSpec] = field(factory=lambda: dict(COMMANDS))

    def execute(self, keyword: str, args: list[str]) -> Outcome:
        """Run a single command with already collected arguments."""
        spec = self.commands[keyword]
        if len(args) != spec.arity:
            raise ValueError(f"{keyword} expects {spec.arity} arguments, got {len(args)}.")
        return spec.handler(self.country, args)

    def run(self, lines: Iterable[str]) -> Iterator[str]:
        """Interpret ``lines`` until ``EXIT`` or end of input."""
        tokens = iter_tokens(lines)
        for keyword in tokens:
            if keyword == EXIT_COMMAND:
                logger.debug("command.exit")
                return
            spec = self.commands.get(keyword)
            if spec is None:
                logger.warning("command.unknown", keyword=keyword)
                continue
            args = [token for _, token in zip(range(spec.arity), tokens)]
            if len(args) < spec.arity:
                logger.warning("command.truncated", keyword=keyword, args=args)
                return
            outcome = self.execute(keyword, args)
            logger.debug(
                "command.completed",
                keyword=keyword,
                ok=outcome.ok,
                reason=outcome.reason.value if outcome.reason else None,
            )
            yield outcome.render()


__all__ = ["COMMANDS", "CommandRouter", "CommandSpec", "EXIT_COMMAND", "iter_tokens"]
