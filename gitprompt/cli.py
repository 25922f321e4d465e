import json
from pathlib import Path
from typing import TextIO

import click
from rich.console import Console

from gitprompt.app import App, substitute
from gitprompt.git_ops import CannedRepositoryQuery
from gitprompt.services import build_status
from gitprompt.settings import Settings, SettingsError, load_settings
from gitprompt.ui import render_prompt, render_status_table

_CWD_OPTION = click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory to inspect (defaults to the current directory).",
)


def _settings(ctx: click.Context, strict: bool) -> Settings:
    path = ctx.obj.get("settings_path")
    try:
        return load_settings(path)
    except SettingsError as exc:
        if strict:
            click.echo(f"gitprompt: {exc}", err=True)
            raise SystemExit(1)
        # the prompt must still render with a broken settings file
        return Settings()


def _resolve_cwd(cwd: Path | None) -> Path | None:
    if cwd is not None:
        return cwd
    try:
        return Path.cwd()
    except OSError:
        # the shell's directory was removed underneath it
        return None


def _fragment(ctx: click.Context, cwd: Path | None) -> str:
    resolved = _resolve_cwd(cwd)
    if resolved is None:
        return ""
    return App(resolved, _settings(ctx, strict=False)).fragment()


def _emit(text: str) -> None:
    # stdout is a pipe under $(...); keep the escape sequences anyway
    click.echo(text, nl=False, color=True)


@click.group(context_settings={"help_option_names": ["-h", "--help"]}, invoke_without_command=True)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings JSON file (default: $GITPROMPT_SETTINGS or ~/.config/gitprompt/settings.json).",
)
@click.pass_context
def main(ctx: click.Context, settings_path: Path | None) -> None:
    """gitprompt: git status for your shell prompt."""
    ctx.ensure_object(dict)
    ctx.obj["settings_path"] = settings_path
    if ctx.invoked_subcommand is not None:
        return
    _emit(_fragment(ctx, None))


@main.command("prompt")
@_CWD_OPTION
@click.pass_context
def prompt(ctx: click.Context, cwd: Path | None) -> None:
    """Print the status fragment (nothing outside a repository)."""
    _emit(_fragment(ctx, cwd))


@main.command("filter")
@click.argument("template")
@_CWD_OPTION
@click.pass_context
def filter_template(ctx: click.Context, template: str, cwd: Path | None) -> None:
    """Print TEMPLATE with {git_enhanced} replaced by the status fragment."""
    _emit(substitute(template, _fragment(ctx, cwd)))


@main.command("status")
@_CWD_OPTION
@click.pass_context
def status(ctx: click.Context, cwd: Path | None) -> None:
    """Show the repository status as a table."""
    resolved = _resolve_cwd(cwd)
    app = App(resolved, _settings(ctx, strict=True)) if resolved else None
    git_dir = app.git_dir() if app else None
    if app is None or git_dir is None:
        click.echo("gitprompt: not inside a git repository", err=True)
        raise SystemExit(1)
    current = app.status()
    if current is None:
        click.echo("gitprompt: HEAD has no branch, tag or commit to show", err=True)
        raise SystemExit(1)
    Console().print(render_status_table(current, git_dir.parent, app.settings.theme))


@main.command("parse")
@click.option("--tag", default="", help="Exact tag at HEAD, used for detached heads.")
@click.option("--hash", "head_hash", default="", help="Short hash of HEAD, used when there is no tag.")
@click.option("--stashes", default=0, type=click.IntRange(min=0), help="Stash count to show.")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.pass_context
def parse(ctx: click.Context, tag: str, head_hash: str, stashes: int, source: TextIO) -> None:
    """Render porcelain status read from SOURCE (stdin by default)."""
    text = source.read()
    query = CannedRepositoryQuery(status_text=text, tag=tag, head_hash=head_hash, stashes=stashes)
    current = build_status(query)
    if current is None:
        return
    _emit(render_prompt(current, _settings(ctx, strict=False).theme))


@main.command("settings")
@click.pass_context
def show_settings(ctx: click.Context) -> None:
    """Print the effective settings as JSON."""
    settings = _settings(ctx, strict=True)
    click.echo(json.dumps(settings.to_dict(), indent=2, ensure_ascii=False))


@main.command("shell-init")
def shell_init() -> None:
    """Print prompt hooks for gitprompt (bash, zsh and fish)."""
    bash = r'''if [ -z "$GITPROMPT_TEMPLATE" ]; then
  GITPROMPT_TEMPLATE='\w {git_enhanced}\$ '
fi
_gitprompt_update() {
  PS1="$(command gitprompt filter "$GITPROMPT_TEMPLATE")"
}
PROMPT_COMMAND="_gitprompt_update${PROMPT_COMMAND:+;$PROMPT_COMMAND}"
'''
    zsh = r'''if [ -z "$GITPROMPT_TEMPLATE" ]; then
  GITPROMPT_TEMPLATE='%~ {git_enhanced}%# '
fi
_gitprompt_update() {
  PROMPT="$(command gitprompt filter "$GITPROMPT_TEMPLATE")"
}
precmd_functions+=(_gitprompt_update)
'''
    fish = r'''if not set -q GITPROMPT_TEMPLATE
  set -g GITPROMPT_TEMPLATE '{cwd} {git_enhanced}> '
end
function fish_prompt
  set -l template (string replace '{cwd}' (prompt_pwd) $GITPROMPT_TEMPLATE)
  command gitprompt filter "$template"
end
'''
    click.echo("# bash\n" + bash + "\n# zsh\n" + zsh + "\n# fish\n" + fish)


if __name__ == "__main__":
    main()
