import asyncio
from typing import Any, Callable, Optional

import click

from config.settings import settings
from constants.arbitrum_networks import ARBITRUM_NETWORKS
from ingestion.arbitrum.enums.inclusion_mode import InclusionMode
from ingestion.arbitrum.jobs.base_token_list_job import BaseTokenListJob
from utils.exceptions import InvalidConfigurationError
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Token List CLI")


def common_options(fn: Callable) -> Callable:
    """Options shared by every list command."""
    options = [
        click.option(
            "--l2-network-id",
            "--l2NetworkID",
            "l2_network_id",
            default=settings.network.l2_network_id,
            show_default=True,
            type=int,
            help=f"Destination network chain id, one of {sorted(ARBITRUM_NETWORKS)}.",
        ),
        click.option(
            "-t",
            "--token-list",
            "--tokenList",
            "token_list",
            required=True,
            type=str,
            help="Path or URL of the source token list.",
        ),
        click.option(
            "--prev-arbified-list",
            "--prevArbifiedList",
            "prev_arbified_list",
            default=None,
            type=str,
            help="Previous arbified list to version against. Defaults to the list's output path.",
        ),
        click.option(
            "--new-arbified-list",
            "--newArbifiedList",
            "new_arbified_list",
            default=None,
            type=str,
            help="Where to write the generated list. Defaults to a path derived from the list name.",
        ),
        click.option(
            "--ignore-previous-list",
            "--ignorePreviousList",
            "ignore_previous_list",
            is_flag=True,
            default=False,
            help="Generate version 1.0.0 regardless of any previous list.",
        ),
        click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file."),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def inclusion_options(default: InclusionMode) -> Callable:
    def decorator(fn: Callable) -> Callable:
        fn = click.option(
            "--include-unbridged-l1-tokens",
            "--includeUnbridgedL1Tokens",
            "include_unbridged_l1_tokens",
            is_flag=True,
            default=False,
            help="Legacy flag, same as --inclusion-mode unbridged-source-tokens-only.",
        )(fn)
        fn = click.option(
            "--include-all-l1-tokens",
            "--includeAllL1Tokens",
            "include_all_l1_tokens",
            is_flag=True,
            default=False,
            help="Legacy flag, same as --inclusion-mode all-source-tokens.",
        )(fn)
        fn = click.option(
            "--inclusion-mode",
            default=None,
            type=click.Choice([mode.value for mode in InclusionMode]),
            help=f"Source tokens appended after the bridged tokens. [default: {default.value}]",
        )(fn)
        return fn

    return decorator


def resolve_inclusion_mode(
    inclusion_mode: Optional[str],
    include_all_l1_tokens: bool,
    include_unbridged_l1_tokens: bool,
    default: InclusionMode,
) -> InclusionMode:
    """
    Raises:
        InvalidConfigurationError: both legacy flags were set, or a legacy flag
            disagrees with --inclusion-mode.
    """
    from_flags = InclusionMode.from_flags(include_all_l1_tokens, include_unbridged_l1_tokens)
    legacy_flag_set = include_all_l1_tokens or include_unbridged_l1_tokens
    if inclusion_mode is None:
        return from_flags if legacy_flag_set else default

    mode = InclusionMode(inclusion_mode)
    if legacy_flag_set and from_flags != mode:
        raise InvalidConfigurationError(
            f"--inclusion-mode {mode.value} contradicts the legacy flag for {from_flags.value}"
        )
    return mode


def run_job(job_factory: Callable[[], BaseTokenListJob], log_file: Optional[str]) -> Any:
    configure_logging(log_file, settings.app.log_level)
    try:
        job = job_factory()
        return asyncio.run(job.run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
    except Exception as e:
        logger.exception("An error occurred while generating the token list:")
        raise e
