"""
Tests for the srclink command line interface.
"""

import importlib
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from srclink.cli import cli
from srclink.cli.commands.config import config
from srclink.cli.commands.generate import generate
from srclink.cli.commands.lookup import lookup
from srclink.cli.commands.providers import providers
from srclink.cli.commands.resolve import resolve
from srclink.cli.commands.translate import translate
from srclink.cli.context import SrclinkContext, parse_host_spec
from srclink.core.exceptions import InvalidArgumentError, ProviderNotFoundError
from srclink.core.models.source_root import RepositoryRoot
from srclink.core.settings import load_settings

SHA = "0123456789abcdefABCDEF000000000000000000"

generate_module = importlib.import_module("srclink.cli.commands.generate")


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def ctx(container, tmp_path):
    """Context for a working directory without configuration."""
    return SrclinkContext(cwd=tmp_path, settings=load_settings(start_dir=str(tmp_path)))


class TestParseHostSpec:
    """Tests for parse_host_spec."""

    def test_authority_only(self):
        """A bare authority declares a host."""
        host = parse_host_spec("contoso.com:8080")

        assert host.authority == "contoso.com:8080"
        assert host.content_url is None

    def test_attributes(self):
        """Attributes follow the authority separated by ';'."""
        host = parse_host_spec("bb.contoso.com;content_url=https://x.com;enterprise_edition=true;version=4.6")

        assert host.content_url == "https://x.com"
        assert host.enterprise_edition is True
        assert host.version == "4.6"

    @pytest.mark.parametrize(
        "spec",
        ["", ";version=1.0", "contoso.com;color=red", "contoso.com;version", "contoso.com;enterprise_edition=maybe"],
    )
    def test_invalid(self, spec):
        """Unknown attributes and bad values are rejected."""
        with pytest.raises(InvalidArgumentError):
            parse_host_spec(spec)


class TestSelectProviders:
    """Tests for SrclinkContext.select_providers."""

    def test_configured_providers(self, ctx):
        """Without names the configured providers are used."""
        selected, hosts = ctx.select_providers()

        assert [p.name for p in selected] == ["github", "gitlab", "bitbucket", "azure_repos", "gitee"]
        assert hosts["github"] == []

    def test_named_provider_with_hosts(self, ctx):
        """--host values are declared for the named provider."""
        selected, hosts = ctx.select_providers(["gitea"], ["gitea.local"])

        assert [p.name for p in selected] == ["gitea"]
        assert [h.authority for h in hosts["gitea"]] == ["gitea.local"]

    def test_provider_names_normalized(self, ctx):
        """Names are case-insensitive, dashes match underscores, repeats are dropped."""
        selected, hosts = ctx.select_providers(["Azure-Repos", "azure_repos"], ["contoso.local"])

        assert [p.name for p in selected] == ["azure_repos"]
        assert [h.authority for h in hosts["azure_repos"]] == ["contoso.local"]

    def test_hosts_need_one_provider(self, ctx):
        """--host is ambiguous without exactly one provider."""
        with pytest.raises(InvalidArgumentError):
            ctx.select_providers([], ["gitea.local"])

    def test_unknown_provider(self, ctx):
        """Unknown providers are reported."""
        with pytest.raises(ProviderNotFoundError):
            ctx.select_providers(["nope"])


class TestResolveCommand:
    """Tests for `srclink resolve`."""

    def test_github(self, runner, ctx):
        """Prints the content URL template."""
        result = runner.invoke(resolve, ["https://github.com/org/repo.git", SHA], obj=ctx)

        assert result.exit_code == 0
        assert result.output.strip() == f"https://raw.githubusercontent.com/org/repo/{SHA}/*"

    def test_scp_remote(self, runner, ctx):
        """scp-like remotes are accepted."""
        result = runner.invoke(resolve, ["git@gitlab.com:org/repo.git", SHA, "-p", "gitlab"], obj=ctx)

        assert result.exit_code == 0
        assert result.output.strip() == f"https://gitlab.com/org/repo/-/raw/{SHA}/*"

    def test_unknown_host(self, runner, ctx):
        """Prints N/A when no provider applies."""
        result = runner.invoke(resolve, ["https://contoso.com/org/repo", SHA], obj=ctx)

        assert result.exit_code == 0
        assert result.output.strip() == "N/A"

    def test_declared_host(self, runner, ctx):
        """Hosts can be declared on the command line."""
        result = runner.invoke(
            resolve,
            [
                "http://tfs.local/tfs/Coll/Proj/_git/repo",
                SHA,
                "-p",
                "azure_devops_server",
                "--host",
                "tfs.local;virtual_directory=tfs",
            ],
            obj=ctx,
        )

        assert result.exit_code == 0
        assert result.output.strip() == (
            "http://tfs.local/tfs/Coll/Proj/_apis/git/repositories/repo/items"
            f"?api-version=1.0&versionType=commit&version={SHA}&path=/*"
        )

    def test_invalid_revision(self, runner, ctx):
        """Validation errors fail the command."""
        result = runner.invoke(resolve, ["https://github.com/org/repo", "abc"], obj=ctx)

        assert result.exit_code == 1
        assert "not a valid commit hash" in result.output

    def test_host_without_provider(self, runner, ctx):
        """--host requires --provider."""
        result = runner.invoke(resolve, ["https://x.com/a", SHA, "--host", "x.com"], obj=ctx)

        assert result.exit_code == 1
        assert "--host requires exactly one --provider" in result.output


class TestTranslateCommand:
    """Tests for `srclink translate`."""

    def test_azure_scp_remote(self, runner, ctx):
        """Azure SSH remotes become HTTPS clone URLs."""
        result = runner.invoke(translate, ["git@ssh.dev.azure.com:v3/org/proj/repo"], obj=ctx)

        assert result.exit_code == 0
        assert result.output.strip() == "https://dev.azure.com/org/proj/_git/repo"

    def test_unknown_host_unchanged(self, runner, ctx):
        """Remotes of unknown hosts are printed as normalized URLs."""
        result = runner.invoke(translate, ["ssh://git@contoso.com/a/b"], obj=ctx)

        assert result.output.strip() == "ssh://git@contoso.com/a/b"

    def test_unsupported(self, runner, ctx):
        """Translation errors fail the command."""
        result = runner.invoke(
            translate, ["https://contoso.com/a/b", "-p", "gitweb", "--host", "contoso.com"], obj=ctx
        )

        assert result.exit_code == 1
        assert "not supported by provider" in result.output


class TestLookupCommand:
    """Tests for `srclink lookup`."""

    def test_match(self, runner, tmp_path):
        """Prints the URL of a file."""
        manifest = tmp_path / "sourcelink.json"
        manifest.write_text('{"documents":{"/src/*":"https://host/abc/*"}}')

        result = runner.invoke(lookup, [str(manifest), "/src/a/b.c"])

        assert result.exit_code == 0
        assert result.output.strip() == "https://host/abc/a/b.c"

    def test_no_match(self, runner, tmp_path):
        """Fails when no entry matches."""
        manifest = tmp_path / "sourcelink.json"
        manifest.write_text('{"documents":{"/src/*":"https://host/abc/*"}}')

        result = runner.invoke(lookup, [str(manifest), "/other/a.c"])

        assert result.exit_code == 1
        assert "No source link entry matches" in result.output

    def test_invalid_manifest(self, runner, tmp_path):
        """Malformed manifests are reported."""
        manifest = tmp_path / "sourcelink.json"
        manifest.write_text("{")

        result = runner.invoke(lookup, [str(manifest), "/src/a.c"])

        assert result.exit_code == 1
        assert "invalid source link JSON" in result.output


class TestProvidersCommand:
    """Tests for `srclink providers`."""

    def test_lists_providers(self, runner, ctx):
        """Enabled providers are marked and default hosts shown."""
        result = runner.invoke(providers, [], obj=ctx)

        assert result.exit_code == 0
        assert "* github" in result.output
        assert "  gitweb" in result.output
        assert "github.com -> https://raw.githubusercontent.com" in result.output


class TestConfigCommand:
    """Tests for `srclink config`."""

    def test_set_and_get(self, runner, ctx, tmp_path):
        """Values set are saved and read back."""
        result = runner.invoke(config, ["set", "sourcelink.remote", "upstream"], obj=ctx)

        assert result.exit_code == 0
        assert "Set sourcelink.remote = upstream" in result.output
        assert (tmp_path / ".srclink" / "config.toml").exists()

        result = runner.invoke(config, ["get", "sourcelink.remote"], obj=ctx)

        assert result.output.strip() == "sourcelink.remote: upstream"

    def test_set_invalid(self, runner, ctx):
        """Invalid values fail the command."""
        result = runner.invoke(config, ["set", "logging.level", "loud"], obj=ctx)

        assert result.exit_code == 1
        assert "Invalid log level" in result.output

    def test_list(self, runner, ctx):
        """All keys are listed."""
        result = runner.invoke(config, ["list"], obj=ctx)

        assert "sourcelink.providers" in result.output
        assert "logging.level" in result.output

    def test_list_current_value(self, runner, ctx):
        """Values that differ from the default are shown."""
        runner.invoke(config, ["set", "sourcelink.remote", "upstream"], obj=ctx)

        result = runner.invoke(config, ["list"], obj=ctx)

        assert "Current: upstream" in result.output

    def test_add_host(self, runner, ctx, tmp_path):
        """Hosts are declared under the provider's registered name."""
        result = runner.invoke(config, ["add-host", "GitLab", "git.contoso.com;version=11.0"], obj=ctx)

        assert result.exit_code == 0
        assert "Declared git.contoso.com for gitlab" in result.output
        host = load_settings(start_dir=str(tmp_path)).hosts_for("gitlab")[0]
        assert host.authority == "git.contoso.com"
        assert host.version == "11.0"

    def test_add_host_unknown_provider(self, runner, ctx):
        """Hosts can only be declared for registered providers."""
        result = runner.invoke(config, ["add-host", "nope", "git.contoso.com"], obj=ctx)

        assert result.exit_code == 1

    def test_hosts(self, runner, ctx, tmp_path):
        """Declared hosts are listed per provider with their attributes."""
        config_dir = tmp_path / ".srclink"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text(
            '[[hosts.bitbucket]]\nauthority = "bb.contoso.com"\nenterprise_edition = true\n'
        )
        ctx.settings = load_settings(start_dir=str(tmp_path))

        result = runner.invoke(config, ["hosts"], obj=ctx)

        assert result.output == "bitbucket:\n  bb.contoso.com (enterprise_edition=True)\n"

    def test_no_hosts(self, runner, ctx):
        """An empty configuration says so."""
        result = runner.invoke(config, ["hosts"], obj=ctx)

        assert result.output.strip() == "No hosts declared."


class TestGenerateCommand:
    """Tests for `srclink generate`."""

    @pytest.fixture
    def mock_vcs(self, tmp_path):
        """Git collaborator returning one GitHub root."""
        vcs = MagicMock()
        vcs.get_repo_root.return_value = str(tmp_path)
        vcs.get_source_roots.return_value = [
            RepositoryRoot(
                local_path=f"{tmp_path}/",
                repository_url="ssh://git@github.com/org/repo.git",
                revision_id=SHA,
            )
        ]
        return vcs

    def _invoke(self, runner, ctx, mock_vcs, args=()):
        mock_container = MagicMock()
        mock_container.get_vcs_provider.return_value = mock_vcs
        with patch.object(generate_module, "get_container", return_value=mock_container):
            return runner.invoke(generate, list(args), obj=ctx)

    def test_writes_manifest(self, runner, ctx, mock_vcs, tmp_path):
        """The manifest maps the root to its content URL."""
        result = self._invoke(runner, ctx, mock_vcs)

        assert result.exit_code == 0, result.output
        content = (tmp_path / "sourcelink.json").read_text()
        assert content == (
            f'{{"documents":{{"{tmp_path}/*":"https://raw.githubusercontent.com/org/repo/{SHA}/*"}}}}'
        )
        assert f"Source link file: {tmp_path / 'sourcelink.json'}" in result.output

    def test_output_and_remote(self, runner, ctx, mock_vcs, tmp_path):
        """-o and --remote override the settings."""
        output = tmp_path / "obj" / "sl.json"

        result = self._invoke(runner, ctx, mock_vcs, ["-o", str(output), "--remote", "upstream"])

        assert result.exit_code == 0, result.output
        assert output.exists()
        mock_vcs.get_source_roots.assert_called_once_with(str(tmp_path), "upstream")

    def test_not_a_repository(self, runner, ctx, mock_vcs):
        """Fails outside a git repository."""
        mock_vcs.get_repo_root.return_value = None

        result = self._invoke(runner, ctx, mock_vcs)

        assert result.exit_code == 1
        assert "Not a git repository" in result.output

    def test_no_source_control_information(self, runner, ctx, mock_vcs, tmp_path):
        """No file is written when nothing can be linked."""
        mock_vcs.get_source_roots.return_value = [RepositoryRoot(local_path=f"{tmp_path}/")]

        result = self._invoke(runner, ctx, mock_vcs)

        assert result.exit_code == 0
        assert "No source link information available" in result.output
        assert not (tmp_path / "sourcelink.json").exists()

    def test_reports_every_error(self, runner, ctx, mock_vcs, tmp_path):
        """Each failing root is printed before the command fails."""
        mock_vcs.get_source_roots.return_value = [
            RepositoryRoot(
                local_path=f"{tmp_path}/", repository_url="https://github.com/org/a", revision_id="x"
            ),
            RepositoryRoot(
                local_path=f"{tmp_path}/sub/", repository_url="https://github.com/org/b", revision_id="y"
            ),
        ]

        result = self._invoke(runner, ctx, mock_vcs)

        assert result.exit_code == 1
        assert result.output.count("error: ") == 2
        assert "2 source link errors" in result.output


class TestCliGroup:
    """Tests for the top-level group."""

    def test_version(self, runner):
        """--version prints the program name."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "srclink" in result.output

    def test_help_without_command(self, runner):
        """Invoking without a command prints help."""
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "generate" in result.output

    def test_subcommand_creates_context(self, runner, tmp_path):
        """Subcommands run with a bootstrapped context."""
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, ["providers"])

        assert result.exit_code == 0
        assert "github" in result.output
