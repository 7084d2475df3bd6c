"""Configuration for a test run."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ConfigError(Exception):
    """Raised when the run cannot be configured; no case has run yet."""


class RunConfig(BaseModel):
    """Resolved reporting options."""

    model_config = ConfigDict(frozen=True)

    color: bool = Field(default=False, description="Color the result markers")
    quiet: bool = Field(default=False, description="Only print failures and total")
    timer: bool = Field(default=True, description="Print the time each case took")
    maybes: bool = Field(
        default=False, description="Announce each case before it runs"
    )
    cr: bool = Field(
        default=False,
        description="End announcements with a carriage return so the result "
        "overwrites them",
    )
    log_file: Path | None = Field(
        default=None, description="Write output here instead of stdout"
    )

    @classmethod
    def resolve(
        cls,
        *,
        interactive: bool,
        color: bool | None = None,
        quiet: bool | None = None,
        timer: bool | None = None,
        maybes: bool | None = None,
        cr: bool | None = None,
        log_file: Path | None = None,
    ) -> "RunConfig":
        """Fill unset options with defaults for the output destination.

        Color, maybes and cr default to on only when output goes to an
        interactive terminal, which a log file never is. Log file output is
        always newline terminated, so cr is off there even when requested.

        Args:
            interactive: Whether stdout is a terminal
            color: Explicit color setting, or None for the default
            quiet: Explicit quiet setting, or None for the default
            timer: Explicit timer setting, or None for the default
            maybes: Explicit maybes setting, or None for the default
            cr: Explicit cr setting, or None for the default
            log_file: Path to redirect output to

        Returns:
            Configuration with every option decided

        """
        terminal = interactive and log_file is None

        def pick(value: bool | None, default: bool) -> bool:
            return default if value is None else value

        return cls(
            color=pick(color, terminal),
            quiet=pick(quiet, False),
            timer=pick(timer, True),
            maybes=pick(maybes, terminal),
            cr=pick(cr, terminal) and log_file is None,
            log_file=log_file,
        )
