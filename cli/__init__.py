import click

from cli.arbify import arbify
from cli.full import full
from cli.permit_test import permit_test
from cli.update import update
from ingestion.arbitrum.enums.action import Action


@click.group()
@click.version_option(version="1.0.0")
@click.pass_context
def cli(ctx):
    pass


# Arbified lists
cli.add_command(arbify, Action.ARBIFY.value)
cli.add_command(update, Action.UPDATE.value)

# Etherscan list of every bridged token
cli.add_command(full, Action.FULL.value)

# Permit support of bridged tokens
cli.add_command(permit_test, Action.PERMIT_TEST.value)
