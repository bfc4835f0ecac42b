"""Main CLI entry point for claude-config."""
import click
import logging
import sys
from pathlib import Path
from typing import List, Optional

from claude_config import __version__
from claude_config.cli import output
from claude_config.models.layout import ConfigScope

SCOPE_MENU = {
    "1": [ConfigScope.GLOBAL],
    "2": [ConfigScope.PROJECT],
    "3": [ConfigScope.GLOBAL, ConfigScope.PROJECT],
}

SCOPE_OPTIONS = {
    "global": [ConfigScope.GLOBAL],
    "project": [ConfigScope.PROJECT],
    "both": [ConfigScope.GLOBAL, ConfigScope.PROJECT],
    "enterprise": [ConfigScope.ENTERPRISE],
}

COMPARE_ICONS = {
    "both_missing": ("⚫", "missing on both sides"),
    "backup_only": ("🔵", "only in backup (can copy to system)"),
    "system_only": ("🟡", "only on system (can copy to backup)"),
    "identical": ("🟢", "identical"),
    "different": ("🔴", "different"),
}


def _backup_root(ctx: click.Context) -> Path:
    return ctx.obj["backup_root"]


def _load_config(ctx: click.Context):
    """Load claude-config.yaml from the backup root, aborting on errors."""
    from claude_config.core.config import CONFIG_FILENAME, load_config

    if "config" not in ctx.obj:
        path = _backup_root(ctx) / CONFIG_FILENAME
        try:
            ctx.obj["config"] = load_config(path)
        except Exception as e:
            output.fatal(f"Failed to load {path}: {e}")
            raise click.Abort()
    return ctx.obj["config"]


def _select_scopes(scope: Optional[str], yes: bool, action: str) -> List[ConfigScope]:
    """Resolve --scope, or show the numbered menu."""
    if scope:
        return SCOPE_OPTIONS[scope]
    if yes:
        return SCOPE_MENU["3"]

    click.echo()
    output.info(f"Select what to {action}:")
    click.echo("  1) Global settings only (~/.claude/)")
    click.echo("  2) Project settings only")
    click.echo("  3) Both (recommended)")
    click.echo()
    choice = click.prompt(
        "Select (1-3)",
        type=click.Choice(list(SCOPE_MENU)),
        default="3",
        show_choices=False,
    )
    return SCOPE_MENU[choice]


def _resolve_project_dir(
    project_dir: Optional[Path],
    configured: Optional[Path],
    yes: bool,
    required_default: bool = True
) -> Optional[Path]:
    """Project directory from option, config, or prompt."""
    if project_dir is not None:
        return project_dir

    default = configured or (Path.cwd() if required_default else None)
    if yes:
        return default

    answer = click.prompt(
        "Project directory",
        default=str(default) if default else "",
        show_default=bool(default),
    )
    return Path(answer).expanduser() if answer else None


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--backup-dir',
    type=click.Path(file_okay=False, path_type=Path),
    default='.',
    envvar='CLAUDE_CONFIG_BACKUP_DIR',
    show_default=True,
    help='Backup tree holding global/ and project/'
)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging on stderr')
@click.pass_context
def cli(ctx: click.Context, backup_dir: Path, verbose: bool) -> None:
    """claude-config - AI assistant configuration manager

    Back up, install, sync and verify CLAUDE.md, settings.json,
    rules and skills between a backup tree and your system.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["backup_root"] = backup_dir.expanduser().resolve()


@cli.command()
@click.option('--force', is_flag=True, help='Overwrite existing claude-config.yaml')
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Initialize a new claude-config.yaml file."""
    from claude_config.core.config import CONFIG_FILENAME, CONFIG_TEMPLATE

    config_path = _backup_root(ctx) / CONFIG_FILENAME

    # Check if file already exists
    if config_path.exists() and not force:
        output.fatal(f"{CONFIG_FILENAME} already exists. Use --force to overwrite.")
        raise click.Abort()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(CONFIG_TEMPLATE)

    output.success(f"Created {CONFIG_FILENAME}")
    click.echo("  Edit this file to customise paths, then run: claude-config install")


@cli.command()
def version() -> None:
    """Show claude-config version."""
    click.echo(f"claude-config version {__version__}")


def _report_install(results) -> bool:
    """Print install results. Returns False if anything failed."""
    ok = True
    for result in results:
        if result.status == "installed":
            output.success(f"{result.entry.name} -> {result.destination}")
            if result.backup_path:
                output.info(f"  previous version saved as {result.backup_path.name}")
        elif result.status == "missing":
            output.error(f"{result.entry.name} - {result.error}")
            ok = False
        elif result.status == "failed":
            output.error(f"{result.entry.name} - {result.error}")
            ok = False
    return ok


@cli.command()
@click.option(
    '--scope',
    type=click.Choice(list(SCOPE_OPTIONS)),
    help='Install without showing the menu'
)
@click.option(
    '--project-dir',
    type=click.Path(path_type=Path),
    help='Project directory (default: prompt, current directory)'
)
@click.option('--no-backup', is_flag=True, help='Do not keep *.backup_* copies of overwritten files')
@click.option('--yes', '-y', is_flag=True, help='Accept all defaults without prompting')
@click.pass_context
def install(
    ctx: click.Context,
    scope: Optional[str],
    project_dir: Optional[Path],
    no_backup: bool,
    yes: bool
) -> None:
    """Install settings from the backup tree onto this system."""
    from claude_config.core.installer import ConfigInstaller
    from claude_config.models.layout import default_target_root

    config = _load_config(ctx).config
    installer = ConfigInstaller(_backup_root(ctx))
    backup_existing = config.backup_existing and not no_backup

    scopes = _select_scopes(scope, yes, "install")
    installed_roots = {}
    ok = True

    for target_scope in scopes:
        output.section(f"Installing {target_scope.value} settings")

        if not installer.has_source(target_scope):
            output.error(
                f"Backup tree has no {target_scope.value}/ directory: {_backup_root(ctx)}"
            )
            ok = False
            continue

        if target_scope == ConfigScope.PROJECT:
            target_root = _resolve_project_dir(project_dir, config.project_dir, yes)
            if target_root is None or not target_root.is_dir():
                output.error(f"Directory does not exist: {target_root}")
                sys.exit(1)
            output.info(f"Install path: {target_root}")
        else:
            target_root = default_target_root(
                target_scope, enterprise_dir=config.enterprise_dir
            )

        if (
            target_scope == ConfigScope.GLOBAL
            and (target_root / "CLAUDE.md").exists()
            and not yes
        ):
            output.warning("An existing CLAUDE.md was found.")
            if not click.confirm("Back up and overwrite?", default=True):
                output.info("Skipped global settings")
                continue

        results = installer.install_scope(target_scope, target_root, backup_existing)
        ok = _report_install(results) and ok
        installed_roots[target_scope] = target_root

        if target_scope == ConfigScope.GLOBAL:
            click.echo()
            output.warning("Important: personalise git-identity.md!")
            click.echo(f"  Edit: {target_root / 'git-identity.md'}")
        elif target_scope == ConfigScope.PROJECT:
            click.echo()
            output.info("Customise the project settings:")
            click.echo("  - CLAUDE.md: project overview")
            click.echo("  - .claude/rules/ and claude-guidelines/: project standards")

    # Summary
    output.section("Installation summary")
    for target_scope, target_root in installed_roots.items():
        click.echo(f"  {target_scope.value}: {target_root}")
    if not installed_roots:
        click.echo("  Nothing installed")

    click.echo()
    if not ok:
        output.error("Installation finished with errors.")
        sys.exit(1)

    output.success("Installation complete!")
    click.echo("  Restart your assistant session to pick up the new settings.")


@cli.command()
@click.option(
    '--scope',
    type=click.Choice(list(SCOPE_OPTIONS)),
    help='Back up without showing the menu'
)
@click.option(
    '--project-dir',
    type=click.Path(path_type=Path),
    help='Project directory to back up'
)
@click.option('--replace/--keep', default=None, help='Replace the current backup, or keep a timestamped copy')
@click.option('--yes', '-y', is_flag=True, help='Accept all defaults without prompting')
@click.pass_context
def backup(
    ctx: click.Context,
    scope: Optional[str],
    project_dir: Optional[Path],
    replace: Optional[bool],
    yes: bool
) -> None:
    """Back up settings from this system into the backup tree."""
    from claude_config.core.backup import ConfigBackup
    from claude_config.models.layout import default_target_root

    config = _load_config(ctx).config
    manager = ConfigBackup(_backup_root(ctx))

    scopes = _select_scopes(scope, yes, "back up")
    staging = manager.create_staging()

    for source_scope in scopes:
        output.section(f"Backing up {source_scope.value} settings")

        if source_scope == ConfigScope.PROJECT:
            source_root = _resolve_project_dir(
                project_dir, config.project_dir, yes, required_default=False
            )
            if source_root is None:
                output.warning("No project directory given, skipping")
                continue
            if not source_root.is_dir():
                output.error(f"Directory does not exist: {source_root}")
                continue
        else:
            source_root = default_target_root(
                source_scope, enterprise_dir=config.enterprise_dir
            )

        for result in manager.snapshot(source_scope, source_root, staging):
            if result.status == "copied":
                output.success(f"{result.entry.name} backed up")
            elif result.status == "missing":
                output.warning(f"{result.entry.name} not found")
            elif result.status == "failed":
                output.error(f"{result.entry.name} - {result.error}")

    output.section("Finishing backup")

    if replace is None:
        replace = True if yes else click.confirm(
            "Replace the existing backup with this one?", default=True
        )

    if replace:
        for replaced in manager.promote(staging):
            output.success(f"{replaced.value} backup updated")
        output.info("Temporary backup removed")
    else:
        output.success(f"Kept timestamped backup: {staging}")

    # Summary
    output.section("Backup complete!")
    output.info(f"Backup location: {_backup_root(ctx)}")
    for listed_scope in (ConfigScope.GLOBAL, ConfigScope.PROJECT, ConfigScope.ENTERPRISE):
        names = manager.list_backed_up(listed_scope)
        if names:
            click.echo(f"  {listed_scope.value}:")
            output.bullet_list(names)

    click.echo()
    output.info("Next steps:")
    click.echo("  1. Copy the backup tree to another system")
    click.echo("  2. Run 'claude-config install' there")


def _comparison_rows(scope: ConfigScope, comparisons) -> List[List[str]]:
    return [
        [scope.value, c.entry.name, c.status.value, str(len(c.differences))]
        for c in comparisons
    ]


def _print_comparisons(comparisons) -> None:
    for comparison in comparisons:
        icon, label = COMPARE_ICONS[comparison.status.value]
        click.echo(f"    {icon} {comparison.entry.name}: {label}")
        for line in comparison.differences[:10]:
            click.echo(f"        {line}")
        if len(comparison.differences) > 10:
            click.echo(f"        ... {len(comparison.differences) - 10} more")


@cli.command()
@click.option(
    '--direction',
    type=click.Choice(['backup-to-system', 'system-to-backup', 'compare']),
    help='Sync direction (default: show menu)'
)
@click.option(
    '--project-dir',
    type=click.Path(path_type=Path),
    help='Also compare this project directory'
)
@click.option(
    '--format', 'output_format',
    type=click.Choice(['text', 'table', 'json']),
    default='text',
    help='Comparison output format'
)
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
def sync(
    ctx: click.Context,
    direction: Optional[str],
    project_dir: Optional[Path],
    output_format: str,
    yes: bool
) -> None:
    """Compare the backup tree with this system and sync one way."""
    import json
    from claude_config.core.sync import ConfigSyncer, SyncDirection, has_differences
    from claude_config.models.layout import default_target_root

    directions = {
        "1": SyncDirection.BACKUP_TO_SYSTEM,
        "2": SyncDirection.SYSTEM_TO_BACKUP,
        "3": SyncDirection.COMPARE_ONLY,
        "backup-to-system": SyncDirection.BACKUP_TO_SYSTEM,
        "system-to-backup": SyncDirection.SYSTEM_TO_BACKUP,
        "compare": SyncDirection.COMPARE_ONLY,
    }

    as_json = output_format == 'json'
    if as_json and (direction is None or (direction != 'compare' and not yes)):
        raise click.UsageError(
            "--format json needs --direction, and --yes unless comparing"
        )

    _load_config(ctx)
    syncer = ConfigSyncer(_backup_root(ctx))

    if direction is None:
        click.echo()
        output.info("Select sync direction:")
        click.echo("  1) Backup -> system (apply backup settings to this system)")
        click.echo("  2) System -> backup (save this system's settings to the backup)")
        click.echo("  3) Compare only (no changes)")
        click.echo()
        direction = click.prompt(
            "Select (1-3)",
            type=click.Choice(["1", "2", "3"]),
            default="3",
            show_choices=False,
        )
    sync_direction = directions[direction]

    targets = {ConfigScope.GLOBAL: default_target_root(ConfigScope.GLOBAL)}

    if project_dir is None and not yes and output_format == 'text':
        click.echo()
        if click.confirm("Compare project settings too?", default=False):
            answer = click.prompt("Project directory", default="", show_default=False)
            project_dir = Path(answer).expanduser() if answer else None

    if project_dir is not None:
        if project_dir.is_dir():
            targets[ConfigScope.PROJECT] = project_dir
        else:
            output.warning(
                f"Project directory not found, skipping: {project_dir}", err=as_json
            )

    comparisons = {
        scope: syncer.compare(scope, target_root)
        for scope, target_root in targets.items()
    }

    if as_json:
        data = [
            {
                "scope": scope.value,
                "entry": c.entry.path,
                "status": c.status.value,
                "differences": c.differences,
            }
            for scope, scope_comparisons in comparisons.items()
            for c in scope_comparisons
        ]
        click.echo(json.dumps(data, indent=2))
        # stdout carries only the JSON document
        if sync_direction != SyncDirection.COMPARE_ONLY:
            failed = False
            for scope, target_root in targets.items():
                if not has_differences(comparisons[scope]):
                    continue
                for result in syncer.apply(
                    sync_direction, scope, target_root, comparisons[scope]
                ):
                    if not result.success:
                        output.error(f"{result.entry.name} - {result.error}", err=True)
                        failed = True
            if failed:
                sys.exit(1)
        return
    elif output_format == 'table':
        rows: List[List[str]] = []
        for scope, scope_comparisons in comparisons.items():
            rows.extend(_comparison_rows(scope, scope_comparisons))
        click.echo(output.render_table(
            "Backup vs system", ["Scope", "Entry", "Status", "Differences"], rows
        ))
    else:
        for scope, scope_comparisons in comparisons.items():
            output.section(f"Comparing {scope.value} settings: {targets[scope]}")
            _print_comparisons(scope_comparisons)

    if sync_direction == SyncDirection.COMPARE_ONLY:
        click.echo()
        output.success("Comparison complete (no changes made)")
        return

    if not any(has_differences(c) for c in comparisons.values()):
        click.echo()
        output.success("All files are identical. Nothing to sync!")
        return

    output.section("Confirm sync")
    if sync_direction == SyncDirection.BACKUP_TO_SYSTEM:
        output.warning("Backup settings will be applied to this system!")
        click.echo("  - Existing system files are kept as *.backup_* copies")
    else:
        output.warning("This system's settings will be saved into the backup!")
        click.echo("  - Existing backup files will be overwritten")

    if not yes and not click.confirm("Continue?", default=False):
        output.info("Sync cancelled")
        return

    output.section("Syncing")
    arrow = "system" if sync_direction == SyncDirection.BACKUP_TO_SYSTEM else "backup"
    failed = False
    for scope, target_root in targets.items():
        for result in syncer.apply(sync_direction, scope, target_root, comparisons[scope]):
            if result.success:
                output.success(f"{result.entry.name} -> {arrow}")
            else:
                output.error(f"{result.entry.name} - {result.error}")
                failed = True

    click.echo()
    if failed:
        output.error("Sync finished with errors.")
        sys.exit(1)
    output.success("Sync complete!")


@cli.command()
@click.option(
    '--format', 'output_format',
    type=click.Choice(['text', 'table']),
    default='text',
    help='Output format'
)
@click.pass_context
def verify(ctx: click.Context, output_format: str) -> None:
    """Verify that the backup tree is complete and well formed."""
    from claude_config.core.verifier import BackupVerifier

    report = BackupVerifier(_backup_root(ctx)).verify()

    if output_format == 'table':
        rows = [
            [check.section, check.description, check.status, check.detail or ""]
            for check in report.checks
        ]
        click.echo(output.render_table(
            "Backup verification", ["Section", "Check", "Status", "Detail"], rows
        ))
    else:
        for section_name, checks in report.by_section().items():
            output.section(f"Checking {section_name}")
            for check in checks:
                text = check.description
                if check.detail:
                    text += f" ({check.detail})"
                if check.status == "pass":
                    output.success(text)
                elif check.status == "warn":
                    output.warning(text)
                else:
                    output.error(text)

    stats = report.stats
    output.section("Statistics")
    output.info(f"Total files: {stats.total_files}")
    output.info(f"Total size: {stats.total_bytes} bytes")
    output.info(f"Markdown files: {stats.markdown_files}")
    output.info(f"Shell scripts: {stats.shell_scripts}")

    output.section("Summary")
    click.echo(f"  Total checks: {report.total}")
    click.echo(f"  Passed:       {report.passed}")
    click.echo(f"  Failed:       {report.failed}")
    click.echo(f"  Warnings:     {report.warnings}")
    click.echo()

    if report.ok:
        output.success("All checks passed! (100%)")
        click.echo("  The backup is complete and ready to install.")
        sys.exit(0)

    output.warning(f"Some checks failed (success rate: {report.success_rate}%)")
    click.echo("  Missing files found. Recreate the backup with: claude-config backup")
    sys.exit(1)


@cli.command('validate-skills')
@click.argument('paths', nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.pass_context
def validate_skills(ctx: click.Context, paths) -> None:
    """Validate SKILL.md frontmatter.

    PATHS may be SKILL.md files or directories. Without PATHS the
    configured skill directories of the backup tree are scanned.
    """
    from claude_config.core.validator import SkillValidator

    config = _load_config(ctx).config
    backup_root = _backup_root(ctx)
    validator = SkillValidator(max_lines=config.max_skill_lines)

    if paths:
        skill_files = validator.collect(paths)
    else:
        skill_files = validator.discover(backup_root, config.skill_dirs)

    if not skill_files:
        output.error("No SKILL.md files found")
        sys.exit(1)

    output.info(f"Found {len(skill_files)} SKILL.md file(s)")

    summary = validator.validate_all(skill_files)
    for report in summary.reports:
        try:
            display = report.path.resolve().relative_to(backup_root)
        except ValueError:
            display = report.path
        click.echo()
        click.echo("━" * 54)
        output.info(f"Validating: {display}")
        click.echo("━" * 54)
        for check in report.checks:
            if check.status == "pass":
                output.success(check.message)
            elif check.status == "warn":
                output.warning(check.message)
            else:
                output.error(check.message)

    output.section("Summary")
    click.echo(f"  Total checks: {summary.total}")
    click.echo(f"  Passed:       {summary.passed}")
    click.echo(f"  Failed:       {summary.failed}")
    click.echo(f"  Warnings:     {summary.warnings}")
    click.echo()

    if summary.valid:
        output.success("All checks passed!")
        if summary.warnings:
            output.warning(f"{summary.warnings} warning(s); review the recommendations.")
        sys.exit(0)

    output.error(f"{summary.failed} check(s) failed")
    click.echo()
    output.info("SKILL.md format requirements:")
    click.echo("  - YAML frontmatter: starts and ends with '---'")
    click.echo("  - name: lowercase letters, numbers, hyphens only (max 64 characters)")
    click.echo("  - description: must not be empty (max 1024 characters)")
    sys.exit(1)


def _personalize_git_identity(claude_dir: Path, yes: bool) -> None:
    identity = claude_dir / "git-identity.md"
    click.echo()
    output.warning("Important: update the git identity with your own details!")
    if identity.exists():
        click.echo("  Current settings:")
        for line in identity.read_text(encoding="utf-8").splitlines():
            if line.startswith(("name:", "email:")):
                click.echo(f"    {line}")
    click.echo(f"  Edit: {identity}")

    if not yes and identity.exists() and click.confirm("Edit it now?", default=False):
        click.edit(filename=str(identity))
        output.success("Git identity updated")


@cli.command()
@click.option(
    '--install-dir',
    type=click.Path(file_okay=False, path_type=Path),
    envvar='INSTALL_DIR',
    help='Where to clone the repository'
)
@click.option(
    '--type', 'install_type',
    type=click.Choice(['1', '2', '3', '4']),
    help='1=global, 2=project, 3=both, 4=clone only'
)
@click.option(
    '--project-dir',
    type=click.Path(path_type=Path),
    help='Project directory for project installs'
)
@click.option('--yes', '-y', is_flag=True, help='Accept all defaults without prompting')
@click.pass_context
def bootstrap(
    ctx: click.Context,
    install_dir: Optional[Path],
    install_type: Optional[str],
    project_dir: Optional[Path],
    yes: bool
) -> None:
    """Fetch the configuration repository from GitHub and install it."""
    import os
    from claude_config.core.installer import ConfigInstaller
    from claude_config.core.repository import (
        GitHubArchiveFetcher,
        GitRepository,
        RepositoryError,
        fetch_repository,
    )
    from claude_config.models.layout import default_target_root

    config = _load_config(ctx)
    repo_config = config.repository.with_env()
    if install_dir is not None:
        repo_config.install_dir = install_dir.expanduser()

    output.info("Checking dependencies...")
    git = GitRepository(repo_config.install_dir)
    use_git = git.is_available()
    if use_git:
        output.success("git found")
    else:
        output.warning("git not found; the repository will be downloaded as an archive")

    overwrite = False
    if repo_config.install_dir.exists():
        output.warning(f"Install directory already exists: {repo_config.install_dir}")
        overwrite = not yes and click.confirm("Overwrite it?", default=False)

    output.info(f"Fetching {repo_config.github_user}/{repo_config.github_repo}...")
    try:
        fetcher = GitHubArchiveFetcher(token=os.environ.get("GITHUB_TOKEN"))
        action = fetch_repository(
            repo_config,
            overwrite=overwrite,
            git=git,
            fetcher=fetcher,
            use_git=use_git,
        )
    except (RepositoryError, RuntimeError, OSError, ValueError) as e:
        output.fatal(str(e))
        sys.exit(1)
    output.success(f"Repository {action}: {repo_config.install_dir}")

    if install_type is None:
        if yes:
            install_type = "1"
        else:
            click.echo()
            output.info("Select installation type:")
            click.echo("  1) Global settings only (~/.claude/)")
            click.echo("  2) Project settings only")
            click.echo("  3) Both")
            click.echo("  4) Clone only (install manually)")
            click.echo()
            install_type = click.prompt(
                "Select (1-4)",
                type=click.Choice(["1", "2", "3", "4"]),
                default="1",
                show_choices=False,
            )

    installer = ConfigInstaller(repo_config.install_dir)
    claude_dir = default_target_root(ConfigScope.GLOBAL)
    ok = True

    if install_type in ("1", "3"):
        output.section("Installing global settings")
        ok = _report_install(installer.install_scope(ConfigScope.GLOBAL, claude_dir)) and ok

    if install_type in ("2", "3"):
        target_root = _resolve_project_dir(project_dir, config.config.project_dir, yes)
        if target_root is None or not target_root.is_dir():
            output.fatal(f"Directory does not exist: {target_root}")
            sys.exit(1)
        output.section(f"Installing project settings: {target_root}")
        ok = _report_install(installer.install_scope(ConfigScope.PROJECT, target_root)) and ok

    if install_type in ("1", "3"):
        _personalize_git_identity(claude_dir, yes)

    if install_type == "4":
        output.info(f"Repository cloned to: {repo_config.install_dir}")
        output.info("Run 'claude-config --backup-dir <dir> install' to install manually.")

    output.section("Bootstrap complete!")
    click.echo(f"  Backup repository: {repo_config.install_dir}")
    click.echo(f"  Sync later with: claude-config --backup-dir {repo_config.install_dir} sync")
    if not ok:
        sys.exit(1)


@cli.command('install-git-hooks')
@click.option(
    '--repo',
    type=click.Path(file_okay=False, path_type=Path),
    help='Repository root (default: backup tree)'
)
@click.option('--force', is_flag=True, help='Overwrite an existing pre-commit hook')
@click.pass_context
def install_git_hooks(ctx: click.Context, repo: Optional[Path], force: bool) -> None:
    """Install a pre-commit hook that validates SKILL.md files."""
    from claude_config.core.git_hooks import install_pre_commit, list_hooks

    repo_root = repo or _backup_root(ctx)
    hook_path = repo_root / ".git" / "hooks" / "pre-commit"

    if hook_path.exists() and not force:
        output.warning("A pre-commit hook already exists.")
        if not click.confirm("Overwrite it?", default=False):
            output.info("Skipping installation.")
            return
        force = True

    try:
        install_pre_commit(repo_root, force=force)
    except FileNotFoundError as e:
        output.fatal(str(e))
        sys.exit(1)

    output.success("pre-commit hook installed!")
    click.echo()
    output.info("Installed hooks:")
    output.bullet_list(list_hooks(repo_root), indent=2)
    click.echo()
    output.info("SKILL.md files are validated automatically on commit.")


@cli.group()
def hook() -> None:
    """Hook entry points referenced from settings.json."""
    pass


def _emit(response) -> None:
    click.echo(response.to_json())
    sys.exit(response.exit_code)


@hook.command('command-guard')
@click.option('--command', 'command', envvar='CLAUDE_TOOL_INPUT', default='', help='Shell command to check')
def command_guard(command: str) -> None:
    """Block dangerous shell commands (PreToolUse: Bash)."""
    from claude_config.hooks.guards import check_command

    _emit(check_command(command))


@hook.command('file-guard')
@click.option('--file-path', envvar='CLAUDE_FILE_PATH', default='', help='File being accessed')
def file_guard(file_path: str) -> None:
    """Block access to sensitive files (PreToolUse: Edit|Write|Read)."""
    from claude_config.hooks.guards import check_file_path

    _emit(check_file_path(file_path))


@hook.command('prompt-validator')
@click.option('--prompt', envvar='CLAUDE_USER_PROMPT', default='', help='Submitted prompt')
def prompt_validator(prompt: str) -> None:
    """Warn about destructive requests (UserPromptSubmit)."""
    from claude_config.hooks.guards import check_prompt

    _emit(check_prompt(prompt))


@hook.command('github-preflight')
@click.option('--command', 'command', envvar='CLAUDE_TOOL_INPUT', default='', help='Shell command to check')
def github_preflight_command(command: str) -> None:
    """Check GitHub connectivity before gh/GitHub commands (PreToolUse: Bash)."""
    from claude_config.hooks.preflight import github_preflight

    _emit(github_preflight(command))


@hook.command('session-log')
@click.argument('event', required=False, default='')
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path), help='Log file override')
def session_log(event: str, log_file: Optional[Path]) -> None:
    """Log session start/end/stop events (SessionStart, SessionEnd, Stop)."""
    from claude_config.hooks.guards import HookResponse
    from claude_config.hooks.loggers import log_session_event

    try:
        log_session_event(event, log_file=log_file)
    except OSError as e:
        logging.getLogger(__name__).debug("Session log failed: %s", e)
    _emit(HookResponse())


@hook.command('subagent-log')
@click.argument('action', required=False, default='unknown')
@click.option('--subagent-type', envvar='CLAUDE_SUBAGENT_TYPE', default='unknown')
@click.option('--session-id', envvar='CLAUDE_SESSION_ID', default='unknown')
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path), help='Log file override')
def subagent_log(action: str, subagent_type: str, session_id: str, log_file: Optional[Path]) -> None:
    """Log subagent start/stop events (SubagentStart, SubagentStop)."""
    from claude_config.hooks.loggers import log_subagent_event

    log_subagent_event(action, subagent_type, session_id, log_file=log_file)


@hook.command('tool-failure')
@click.option('--tool-name', envvar='CLAUDE_TOOL_NAME', default='unknown')
@click.option('--session-id', envvar='CLAUDE_SESSION_ID', default='unknown')
@click.option('--error', 'error_message', envvar='CLAUDE_TOOL_ERROR', default=None)
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path), help='Log file override')
def tool_failure(
    tool_name: str,
    session_id: str,
    error_message: Optional[str],
    log_file: Optional[Path]
) -> None:
    """Log tool execution failures (PostToolUseFailure)."""
    from claude_config.hooks.loggers import log_tool_failure

    log_tool_failure(tool_name, session_id, error_message, log_file=log_file)


@hook.command('cleanup')
@click.option(
    '--tmp-dir',
    type=click.Path(file_okay=False, path_type=Path),
    default='/tmp',
    show_default=True
)
@click.option('--max-age', type=int, default=60, show_default=True, help='Minutes')
def cleanup(tmp_dir: Path, max_age: int) -> None:
    """Remove stale temporary files (SessionEnd)."""
    from claude_config.hooks.loggers import cleanup_temp_files

    cleanup_temp_files(tmp_dir, max_age_minutes=max_age)


if __name__ == "__main__":
    cli()
