import click

from cli.common_options import common_options, inclusion_options, resolve_inclusion_mode, run_job
from ingestion.arbitrum.enums.inclusion_mode import InclusionMode
from ingestion.arbitrum.jobs.token_list_jobs import UpdateListJob

DEFAULT_INCLUSION_MODE = InclusionMode.ALL_SOURCE_TOKENS


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@common_options
@inclusion_options(DEFAULT_INCLUSION_MODE)
def update(
    l2_network_id: int,
    token_list: str,
    prev_arbified_list: str,
    new_arbified_list: str,
    ignore_previous_list: bool,
    log_file: str,
    inclusion_mode: str,
    include_all_l1_tokens: bool,
    include_unbridged_l1_tokens: bool,
):
    """Regenerates an existing arbified list."""
    mode = resolve_inclusion_mode(inclusion_mode, include_all_l1_tokens, include_unbridged_l1_tokens, DEFAULT_INCLUSION_MODE)
    run_job(
        lambda: UpdateListJob(
            l2_network_id,
            token_list,
            prev_arbified_list=prev_arbified_list,
            new_arbified_list=new_arbified_list,
            ignore_previous_list=ignore_previous_list,
            inclusion_mode=mode,
        ),
        log_file,
    )
