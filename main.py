"""Main entry point for skillsync."""

import argparse
import asyncio
import importlib.metadata
from typing import Optional, Sequence

from config import Config
from skills import SkillError, SyncError, ValidationError, filter_skills
from skills.manager import SkillManager
from skills.settings import SettingsStore
from sync import SyncStatus
from utils import get_log_file_path, get_logger, setup_logger, terminal_ui
from utils.runtime import ensure_runtime_dirs

logger = get_logger(__name__)


def _read_body(args: argparse.Namespace) -> Optional[str]:
    """Resolve the body from --body or --body-file (None when neither is given)."""
    if args.body_file:
        with open(args.body_file, encoding="utf-8") as f:
            return f.read()
    return args.body


async def _require_skill(manager: SkillManager, name: str):
    skill = await manager.get_skill(name)
    if skill is None:
        raise ValidationError(f"Skill '{name}' not found in {manager.settings.commands_dir}")
    return skill


async def cmd_list(manager: SkillManager, args: argparse.Namespace) -> int:
    all_skills = await manager.list_skills()
    shown = filter_skills(all_skills, args.query or "")
    terminal_ui.print_skill_table(shown, total=len(all_skills))
    return 0


async def cmd_show(manager: SkillManager, args: argparse.Namespace) -> int:
    skill = await _require_skill(manager, args.name)
    terminal_ui.print_skill_detail(skill)
    return 0


async def cmd_new(manager: SkillManager, args: argparse.Namespace) -> int:
    skill = await manager.create_skill(
        args.name,
        description=args.description or "",
        argument_hint=args.argument_hint or "",
        body=_read_body(args) or "",
    )
    terminal_ui.print_success(f"Created {skill.display_name}")
    return 0


async def cmd_edit(manager: SkillManager, args: argparse.Namespace) -> int:
    skill = await _require_skill(manager, args.name)
    body = _read_body(args)
    if args.description is not None:
        skill.description = args.description.strip()
    if args.argument_hint is not None:
        skill.argument_hint = args.argument_hint.strip()
    if body is not None:
        skill.body = body
    await manager.update_skill(skill)
    terminal_ui.print_success(f"Saved {skill.display_name}")
    return 0


async def cmd_tags(manager: SkillManager, args: argparse.Namespace) -> int:
    tags = await manager.set_tags(args.name, args.tags)
    shown = ", ".join(tags) if tags else "(none)"
    terminal_ui.print_success(f"Updated tags for /{args.name}: {shown}")
    return 0


async def cmd_delete(manager: SkillManager, args: argparse.Namespace) -> int:
    if not args.yes and not terminal_ui.confirm(
        f"Delete /{args.name}? This cannot be undone.", default=False
    ):
        terminal_ui.print_info("Cancelled")
        return 0
    await manager.delete_skill(args.name)
    terminal_ui.print_success(f"Deleted /{args.name}")
    return 0


async def cmd_remote(manager: SkillManager, args: argparse.Namespace) -> int:
    if args.url is None:
        remote = manager.settings.remote
        if remote:
            terminal_ui.console.print(remote)
        else:
            terminal_ui.print_warning("No remote configured")
        return 0
    await manager.set_remote(args.url)
    terminal_ui.print_success(f"Remote set to {manager.settings.remote or '(none)'}")
    return 0


async def cmd_push(manager: SkillManager, args: argparse.Namespace) -> int:
    result = await manager.sync_push()
    terminal_ui.print_sync_log(result.lines)
    if result.status == SyncStatus.PUSHED:
        terminal_ui.print_success("Skills pushed")
    return 0


async def cmd_pull(manager: SkillManager, args: argparse.Namespace) -> int:
    result = await manager.sync_pull()
    terminal_ui.print_sync_log(result.lines)
    terminal_ui.print_success("Skills pulled")
    return 0


async def cmd_config(manager: SkillManager, args: argparse.Namespace) -> int:
    settings = manager.settings
    terminal_ui.print_config(
        {
            "Commands directory": settings.commands_dir,
            "Metadata file": settings.meta_file,
            "Remote": settings.remote or "(none)",
            "Branch": Config.GIT_BRANCH,
            "Settings file": manager.settings_store.settings_path
            if manager.settings_store
            else "(not persisted)",
        }
    )
    return 0


COMMANDS = {
    "list": cmd_list,
    "show": cmd_show,
    "new": cmd_new,
    "edit": cmd_edit,
    "tags": cmd_tags,
    "delete": cmd_delete,
    "remote": cmd_remote,
    "push": cmd_push,
    "pull": cmd_pull,
    "config": cmd_config,
}


def _add_content_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--description", "-d", help="One-line description")
    parser.add_argument("--argument-hint", "-a", help="Argument hint, e.g. '[topic] [tone]'")
    body = parser.add_mutually_exclusive_group()
    body.add_argument("--body", "-b", help="Command body text")
    body.add_argument("--body-file", "-f", help="Read the command body from a file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillsync",
        description="Manage command skill files, their tags, and git sync",
    )

    try:
        version = importlib.metadata.version("skillsync")
    except importlib.metadata.PackageNotFoundError:
        version = "dev"
    parser.add_argument("--version", "-V", action="version", version=f"skillsync {version}")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging to ~/.skillsync/logs/",
    )
    parser.add_argument("--commands-dir", help="Skills directory (overrides settings)")
    parser.add_argument("--meta-file", help="Metadata file (overrides settings)")
    parser.add_argument("--settings", help="Settings file (default: ~/.skillsync/settings.yaml)")

    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List skills")
    p_list.add_argument("--query", "-q", help="Filter by name, description or tag")

    p_show = sub.add_parser("show", help="Show one skill")
    p_show.add_argument("name")

    p_new = sub.add_parser("new", help="Create a skill")
    p_new.add_argument("name")
    _add_content_options(p_new)

    p_edit = sub.add_parser("edit", help="Edit a skill")
    p_edit.add_argument("name")
    _add_content_options(p_edit)

    p_tags = sub.add_parser("tags", help="Replace the tags of a skill")
    p_tags.add_argument("name")
    p_tags.add_argument("tags", help="Comma separated tags, e.g. 'writing, blog'")

    p_delete = sub.add_parser("delete", help="Delete a skill")
    p_delete.add_argument("name")
    p_delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    p_remote = sub.add_parser("remote", help="Show or set the git remote")
    p_remote.add_argument("url", nargs="?", help="New remote URL ('' clears it)")

    sub.add_parser("push", help="Commit and push skills to the remote")
    sub.add_parser("pull", help="Pull skills from the remote (rebase)")
    sub.add_parser("config", help="Show effective settings")

    return parser


async def run(args: argparse.Namespace) -> int:
    manager = await SkillManager.load(
        SettingsStore(args.settings),
        commands_dir=args.commands_dir,
        meta_file=args.meta_file,
    )
    settings = manager.settings
    logger.info(
        f"Running '{args.command}' on {settings.commands_dir} "
        f"(metadata: {settings.meta_file}, remote: {settings.remote or 'none'})"
    )
    return await COMMANDS[args.command](manager, args)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    # Initialize runtime directories (create logs dir only in verbose mode)
    ensure_runtime_dirs(create_logs=args.verbose)

    if args.verbose:
        setup_logger()

    try:
        Config.validate()
    except ValueError as e:
        terminal_ui.print_error(str(e), title="Configuration Error")
        return 1

    try:
        return asyncio.run(run(args))
    except SyncError as e:
        terminal_ui.print_sync_log(e.lines)
        terminal_ui.print_error("Git error, check the sync log above", title="Sync Error")
    except SkillError as e:
        terminal_ui.print_error(str(e), title=type(e).__name__)
    except OSError as e:
        terminal_ui.print_error(str(e), title="File Error")

    log_file = get_log_file_path()
    if log_file:
        terminal_ui.print_log_location(log_file)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
