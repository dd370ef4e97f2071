"""Command-line entry point for kirei."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, Dict, List, Optional, Union

from config.settings import settings
from kirei_store.config_store import ConfigStore
from pipelines import execute_create_pipeline, execute_list_pipeline, execute_targets_pipeline, open_client
from schemas.config_schemas import Config
from schemas.issue_schemas import ProviderId, UnifiedCreateParams, UnifiedIssue, UnifiedListQuery, UnifiedMode, UnifiedTarget
from tools import format_error_message, format_greeting, resolve_user_name
from tools.error_handler import KireiError
from tools.prompts import (
    intro,
    note,
    outro,
    prompt_issue_body,
    prompt_issue_title,
    prompt_operation,
    prompt_provider,
    prompt_user_name,
)

logger = logging.getLogger(__name__)

UNTITLED_ISSUE = "Untitled issue"


def _non_blank(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("value cannot be empty")
    return value


def _provider(value: str) -> ProviderId:
    try:
        return ProviderId.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    providers = ", ".join(provider.value for provider in ProviderId)

    parser = argparse.ArgumentParser(prog="kirei", description="Interactive CLI for unified provider APIs")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    init = commands.add_parser("init", help="Create or update the local configuration")
    init.add_argument("--user-name", type=_non_blank, help="Provide the user name without prompting")
    init.add_argument("--default-provider", type=_provider, metavar="PROVIDER", help=f"Default provider ({providers})")
    init.add_argument("--default-repo", help="Default GitHub repo (owner/name)")
    init.add_argument("--default-workspace", help="Default Linear team id")
    init.add_argument("--default-board", help="Default Trello board id")
    init.add_argument("--default-project", help="Default Jira project key")
    init.add_argument("--github-token", help="Store a GitHub token for future requests")
    init.add_argument("--linear-token", help="Store a Linear token for future requests")
    init.add_argument("--trello-token", help="Store a Trello token for future requests")
    init.add_argument("--trello-api-key", help="Store the Trello API key")
    init.add_argument("--jira-token", help="Store a Jira API token for future requests")
    init.add_argument("--jira-server-url", help="Jira Cloud site, e.g. https://example.atlassian.net")
    init.add_argument("--jira-email", help="Account email used with the Jira API token")

    greet = commands.add_parser("greet", help="Print a greeting for the stored user")
    greet.add_argument("--user-name", type=_non_blank, help="Override the user name used for greeting")

    config = commands.add_parser("config", help="Inspect the stored configuration")
    config_commands = config.add_subparsers(dest="config_command", metavar="ACTION", required=True)
    config_commands.add_parser("show", help="Dump the stored config as JSON")
    config_commands.add_parser("path", help="Print the path to the config file")

    unified = commands.add_parser("unified", help="Explore unified issue streams across providers")
    unified.add_argument("--provider", type=_provider, metavar="PROVIDER", help=f"Target provider ({providers})")
    unified.add_argument(
        "--mode",
        choices=[mode.value for mode in UnifiedMode],
        help="Operation to perform (default: interactive)",
    )
    unified.add_argument("--workspace", help="Linear team id")
    unified.add_argument("--repo", help="GitHub repo (owner/name)")
    unified.add_argument("--board", help="Trello board id")
    unified.add_argument("--project", help="Jira project key")
    unified.add_argument("--title", help="Title for issue creation")
    unified.add_argument("--body", help="Body for issue creation")
    unified.add_argument("--search", help="Case-insensitive title filter for lists")
    unified.add_argument("--raw", action="store_true", help="Dump the raw provider payload")

    return parser


def _apply_provider_flags(args: argparse.Namespace, config: Config) -> None:
    unified = config.unified
    if args.default_provider is not None:
        unified.default_provider = args.default_provider
    if args.default_repo:
        unified.default_repo = args.default_repo.strip()
    if args.default_workspace:
        unified.default_workspace = args.default_workspace.strip()
    if args.default_board:
        unified.trello.default_board = args.default_board.strip()
    if args.default_project:
        unified.jira.default_project = args.default_project.strip()
    if args.trello_api_key:
        unified.trello.api_key = args.trello_api_key.strip()
    if args.jira_server_url:
        unified.jira.server_url = args.jira_server_url.strip().rstrip("/")
    if args.jira_email:
        unified.jira.email = args.jira_email.strip()

    tokens = {
        ProviderId.GITHUB: args.github_token,
        ProviderId.LINEAR: args.linear_token,
        ProviderId.TRELLO: args.trello_token,
        ProviderId.JIRA: args.jira_token,
    }
    for provider, token in tokens.items():
        if token and token.strip():
            unified.tokens[provider] = token.strip()


def init_command(args: argparse.Namespace, store: ConfigStore) -> int:
    intro("init")
    config = store.load()

    user_name = args.user_name if args.user_name is not None else prompt_user_name()
    config.user_name = user_name.strip()
    _apply_provider_flags(args, config)

    saved = store.save(config)
    note("Config saved", str(saved))
    outro("You're all set!")
    return 0


def greet_command(args: argparse.Namespace, store: ConfigStore) -> int:
    config = store.load()
    print(format_greeting(resolve_user_name(args.user_name, config)))
    return 0


def config_command(args: argparse.Namespace, store: ConfigStore) -> int:
    if args.config_command == "show":
        print(json.dumps(store.load().masked_dump(), indent=2, ensure_ascii=False))
    else:
        print(store.path())
    return 0


def _display(item: Union[UnifiedIssue, UnifiedTarget], raw: bool) -> None:
    print(item.display_summary())
    if raw:
        print(json.dumps(item.raw_payload, indent=2, ensure_ascii=False))


def unified_command(args: argparse.Namespace, store: ConfigStore) -> int:
    intro("unified")
    config = store.load()

    mode = UnifiedMode(args.mode) if args.mode else UnifiedMode.INTERACTIVE
    provider = args.provider
    if provider is None:
        default = config.unified.default_provider
        provider = prompt_provider(default) if mode is UnifiedMode.INTERACTIVE else default
    if mode is UnifiedMode.INTERACTIVE:
        mode = prompt_operation()

    with open_client(provider, config) as client:
        if mode is UnifiedMode.CREATE:
            title = args.title if args.title is not None else prompt_issue_title()
            body = args.body if args.body is not None else prompt_issue_body()
            params = UnifiedCreateParams(
                workspace=args.workspace,
                repo=args.repo,
                board=args.board,
                project=args.project,
                title=title if title and title.strip() else UNTITLED_ISSUE,
                body=body,
            )
            _display(execute_create_pipeline(client, params), args.raw)
        else:
            query = UnifiedListQuery(
                workspace=args.workspace,
                repo=args.repo,
                board=args.board,
                project=args.project,
                search=args.search,
            )
            if mode is UnifiedMode.TARGETS:
                results = execute_targets_pipeline(client, query)
                empty_message = "No targets returned."
            else:
                results = execute_list_pipeline(client, query)
                empty_message = "No issues returned."
            if not results:
                print(empty_message)
            for item in results:
                _display(item, args.raw)

    outro("Done interacting with provider.")
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace, ConfigStore], int]] = {
    "init": init_command,
    "greet": greet_command,
    "config": config_command,
    "unified": unified_command,
}


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None, store: Optional[ConfigStore] = None) -> int:
    """
    Parse ``argv`` and run one command.

    Returns the process exit code; argument errors exit through argparse with status 2.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        return COMMANDS[args.command](args, store or ConfigStore())
    except KireiError as exc:
        print(format_error_message(exc, command=args.command), file=sys.stderr)
        return 1
    except EOFError:
        print("error: input closed before a value was entered", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\ncancelled", file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
