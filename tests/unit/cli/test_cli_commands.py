import pytest
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from cli import cli
from ingestion.arbitrum.enums.inclusion_mode import InclusionMode
from utils.exceptions import ConfigurationError, InvalidConfigurationError


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def run_job_inline():
    """Builds the job without running it."""
    with patch("cli.arbify.run_job", side_effect=lambda factory, log_file: factory()) as arbify_run, patch(
        "cli.update.run_job", side_effect=lambda factory, log_file: factory()
    ) as update_run:
        yield arbify_run, update_run


def test_unknown_command_is_rejected(runner):
    result = runner.invoke(cli, ["deploy"])
    assert result.exit_code != 0


def test_arbify_default_inclusion_mode(runner, run_job_inline):
    with patch("cli.arbify.ArbifyListJob") as MockJob:
        result = runner.invoke(cli, ["arbify", "--token-list", "https://tokens.example.com/list.json"])

    assert result.exit_code == 0, result.output
    args, kwargs = MockJob.call_args
    assert args == (42161, "https://tokens.example.com/list.json")
    assert kwargs["inclusion_mode"] == InclusionMode.ALL_SOURCE_TOKENS
    assert kwargs["include_old_data_fields"] is False


def test_arbify_legacy_flags_and_aliases(runner, run_job_inline):
    with patch("cli.arbify.ArbifyListJob") as MockJob:
        result = runner.invoke(
            cli,
            [
                "arbify",
                "--tokenList",
                "list.json",
                "--l2NetworkID",
                "42170",
                "--includeUnbridgedL1Tokens",
                "--includeOldDataFields",
                "--ignorePreviousList",
            ],
        )

    assert result.exit_code == 0, result.output
    args, kwargs = MockJob.call_args
    assert args == (42170, "list.json")
    assert kwargs["inclusion_mode"] == InclusionMode.UNBRIDGED_SOURCE_TOKENS_ONLY
    assert kwargs["include_old_data_fields"] is True
    assert kwargs["ignore_previous_list"] is True


def test_both_legacy_inclusion_flags_fail_before_any_work(runner, run_job_inline):
    arbify_run, _ = run_job_inline
    result = runner.invoke(
        cli,
        ["arbify", "--token-list", "list.json", "--include-all-l1-tokens", "--include-unbridged-l1-tokens"],
    )

    assert result.exit_code != 0
    assert isinstance(result.exception, InvalidConfigurationError)
    arbify_run.assert_not_called()


@pytest.mark.parametrize(
    "mode, legacy_flag",
    [
        ("bridged-only", "--include-all-l1-tokens"),
        ("all-source-tokens", "--include-unbridged-l1-tokens"),
        ("unbridged-source-tokens-only", "--includeAllL1Tokens"),
    ],
)
def test_inclusion_mode_contradicting_legacy_flag_fails(runner, run_job_inline, mode, legacy_flag):
    arbify_run, _ = run_job_inline
    result = runner.invoke(cli, ["arbify", "--token-list", "list.json", "--inclusion-mode", mode, legacy_flag])

    assert result.exit_code != 0
    assert isinstance(result.exception, InvalidConfigurationError)
    arbify_run.assert_not_called()


def test_inclusion_mode_agreeing_with_legacy_flag(runner, run_job_inline):
    with patch("cli.arbify.ArbifyListJob") as MockJob:
        result = runner.invoke(
            cli,
            ["arbify", "--token-list", "list.json", "--inclusion-mode", "all-source-tokens", "--include-all-l1-tokens"],
        )

    assert result.exit_code == 0, result.output
    assert MockJob.call_args.kwargs["inclusion_mode"] == InclusionMode.ALL_SOURCE_TOKENS


def test_update_inclusion_mode_option(runner, run_job_inline):
    with patch("cli.update.UpdateListJob") as MockJob:
        result = runner.invoke(
            cli, ["update", "--token-list", "arbed_list.json", "--inclusion-mode", "bridged-only"]
        )

    assert result.exit_code == 0, result.output
    assert MockJob.call_args.kwargs["inclusion_mode"] == InclusionMode.BRIDGED_ONLY


def test_full_requires_full_token_list(runner):
    with patch("cli.common_options.configure_logging"):
        result = runner.invoke(cli, ["full", "--token-list", "list.json"])

    assert result.exit_code != 0
    assert isinstance(result.exception, InvalidConfigurationError)


def test_unsupported_network_is_a_configuration_error(runner):
    with patch("cli.common_options.configure_logging"):
        result = runner.invoke(cli, ["permit_test", "--token-list", "list.json", "--l2-network-id", "10"])

    assert result.exit_code != 0
    assert isinstance(result.exception, ConfigurationError)


def test_permit_test_runs_probe_job(runner):
    job = MagicMock()
    with patch("cli.permit_test.PermitProbeJob", return_value=job) as MockJob, patch(
        "cli.common_options.configure_logging"
    ), patch("cli.common_options.asyncio.run") as mock_run:
        result = runner.invoke(cli, ["permit_test", "--token-list", "list.json"])

    assert result.exit_code == 0, result.output
    MockJob.assert_called_once_with(42161, "list.json", ignore_previous_list=True)
    mock_run.assert_called_once_with(job.run.return_value)
