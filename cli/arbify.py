import click

from cli.common_options import common_options, inclusion_options, resolve_inclusion_mode, run_job
from ingestion.arbitrum.enums.inclusion_mode import InclusionMode
from ingestion.arbitrum.jobs.token_list_jobs import ArbifyListJob

DEFAULT_INCLUSION_MODE = InclusionMode.ALL_SOURCE_TOKENS


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@common_options
@inclusion_options(DEFAULT_INCLUSION_MODE)
@click.option(
    "--include-old-data-fields",
    "--includeOldDataFields",
    "include_old_data_fields",
    is_flag=True,
    default=False,
    help="Also write the l1Address, l2GatewayAddress and l1GatewayAddress extensions.",
)
def arbify(
    l2_network_id: int,
    token_list: str,
    prev_arbified_list: str,
    new_arbified_list: str,
    ignore_previous_list: bool,
    log_file: str,
    inclusion_mode: str,
    include_all_l1_tokens: bool,
    include_unbridged_l1_tokens: bool,
    include_old_data_fields: bool,
):
    """Generates the arbified version of an L1 token list."""
    mode = resolve_inclusion_mode(inclusion_mode, include_all_l1_tokens, include_unbridged_l1_tokens, DEFAULT_INCLUSION_MODE)
    run_job(
        lambda: ArbifyListJob(
            l2_network_id,
            token_list,
            prev_arbified_list=prev_arbified_list,
            new_arbified_list=new_arbified_list,
            ignore_previous_list=ignore_previous_list,
            inclusion_mode=mode,
            include_old_data_fields=include_old_data_fields,
        ),
        log_file,
    )
