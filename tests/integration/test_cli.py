"""Tests for the command-line interface."""

from click.testing import CliRunner

from inviteflow.cli import cli


def test_info_shows_configuration():
    result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "InviteFlow v" in result.output
    assert "External URL:" in result.output


def test_create_tenant_requires_subdomain():
    result = CliRunner().invoke(
        cli, ["create-tenant", "--id", "acme", "--subdomain", " ", "--name", "Acme"]
    )

    assert result.exit_code == 1
    assert "Subdomain must not be empty" in result.output


def test_commands_are_registered():
    result = CliRunner().invoke(cli, ["--help"])

    for command in ["serve", "init-db", "create-tenant", "purge-codes", "info"]:
        assert command in result.output
