import click

from cli.common_options import common_options, run_job
from ingestion.arbitrum.jobs.token_list_jobs import FullListJob


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@common_options
def full(
    l2_network_id: int,
    token_list: str,
    prev_arbified_list: str,
    new_arbified_list: str,
    ignore_previous_list: bool,
    log_file: str,
):
    """Lists every bridged token of the network in the Etherscan format. Expects --token-list full."""
    run_job(lambda: FullListJob(l2_network_id, token_list), log_file)
