"""CLI - Command line interface for Resume Copilot."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.markup import escape
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .chat_proxy import ChatProxy, create_chat_proxy
from .config import DEFAULT_CONFIG_PATH, AppConfig, load_config, load_raw_config
from .config_validator import Severity, has_errors, validate_config
from .controller import ChatMessage, ConversationController, JobKeywordMatcher, initial_history
from .domain.ats_scorer import ScoreResult, score_label, score_resume
from .domain.document import Document, Selection, apply_mutation, capture_selection
from .domain.exporter import EXPORT_FORMATS, EmptyDocumentError, export_document
from .domain.keyword_matcher import build_add_keywords_message, format_keyword_report
from .skills.quick_actions import SECTION_FLOWS, SELECTION_ACTIONS

console = Console()

_PRIORITY_STYLES = {"high": "red", "medium": "yellow", "low": "dim"}


def print_help():
    """Print help message."""
    actions = ", ".join([*SELECTION_ACTIONS, *SECTION_FLOWS])
    help_text = f"""
## Available Commands

| Command | Description |
|---------|-------------|
| `/help` | Show this help message |
| `/show` | Print the current document |
| `/score` | ATS score of the current document |
| `/select START END` | Select characters START..END for targeted edits |
| `/unselect` | Clear the selection |
| `/action ID` | Run a quick action ({actions}) |
| `/match FILE` | Match the document against a job description file |
| `/addmissing` | Ask the assistant to work in keywords missing from the last match |
| `/save [PATH]` | Save the document (`.txt`, `.docx` or `.html`) |
| `/quit` or `/exit` | Exit |

Anything else is sent to the assistant.
"""
    console.print(Markdown(help_text))


def print_score(result: ScoreResult) -> None:
    style = "green" if result.score >= 80 else "yellow" if result.score >= 60 else "red"
    console.print(f"ATS Score: [bold {style}]{result.score}[/] - {score_label(result.score)}")
    if not result.issues:
        console.print("No issues found.", style="green")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Priority")
    table.add_column("Issue")
    for issue in result.issues:
        table.add_row(issue.priority, issue.text, style=_PRIORITY_STYLES.get(issue.priority))
    console.print(table)


def _load_app_config(config_path: str) -> AppConfig:
    try:
        return load_config(config_path)
    except FileNotFoundError:
        console.print(f"⚠️ Config file not found: {config_path}", style="yellow")
        console.print("Using default configuration. Set OPENAI_API_KEY environment variable.", style="dim")
        return AppConfig()


class EditorShell:
    """Terminal stand-in for the editor: one document, one conversation."""

    def __init__(self, path: Path, chat_proxy: ChatProxy) -> None:
        self.path = path
        text = path.read_text(encoding="utf-8") if path.exists() else ""
        self.document = Document(text=text, title=path.stem)
        self.selection: Optional[Selection] = None
        self.history: List[ChatMessage] = initial_history()
        self.awaiting_details: Optional[str] = None
        self.controller = ConversationController(chat_proxy)
        self.matcher = JobKeywordMatcher(chat_proxy)
        self.missing_keywords: List[str] = []

    async def send(self, text: str) -> None:
        result = await self.controller.send(
            text,
            self.selection,
            self.awaiting_details,
            self.history,
            self.document.text,
        )
        self._commit(result)

    async def action(self, action_id: str) -> None:
        result = await self.controller.run_action(
            action_id,
            self.selection,
            self.awaiting_details,
            self.history,
            self.document.text,
        )
        self._commit(result)

    def _commit(self, result) -> None:
        self.history = result.history
        self.awaiting_details = result.awaiting_details
        if result.mutation is not None:
            self.document, self.selection = apply_mutation(self.document, result.mutation)
            verb = "Replaced selection" if result.mutation.kind == "replace" else "Appended to document"
            console.print(f"✏️ {verb} ({self.document.word_count} words)", style="green")
        if result.reply:
            console.print("\n🤖 Assistant:", style="bold green")
            console.print(Markdown(result.reply))

    async def match(self, jd_path: Path) -> None:
        analysis = await self.matcher.analyze(jd_path.read_text(encoding="utf-8"), self.document.text)
        if analysis is None:
            console.print("Couldn't analyze that job description.", style="yellow")
            return
        self.missing_keywords = analysis.missing
        console.print(Panel(Markdown(format_keyword_report(analysis)), title="🎯 Keyword Match"))
        if analysis.missing:
            console.print("Type /addmissing to have the assistant work them in.", style="dim")

    def save(self, target: Path) -> None:
        fmt = target.suffix.lstrip(".") or "txt"
        if fmt not in EXPORT_FORMATS:
            console.print(f"Unsupported format: .{fmt}", style="red")
            return
        try:
            target.write_bytes(export_document(self.document, fmt))
        except EmptyDocumentError as exc:
            console.print(str(exc), style="yellow")
            return
        console.print(f"💾 Saved {target}", style="green")

    async def handle_command(self, command: str) -> bool:
        """Handle special commands. Returns True if should continue, False to exit."""
        cmd, *args = command.strip().split()
        cmd = cmd.lower()

        if cmd in ["/quit", "/exit", "/q"]:
            console.print("\n👋 Goodbye!", style="yellow")
            return False
        elif cmd == "/help":
            print_help()
        elif cmd == "/show":
            console.print(Panel(Text(self.document.text or "(empty)"), title=f"📄 {self.document.title}"))
        elif cmd == "/score":
            print_score(score_resume(self.document.text))
        elif cmd == "/select" and len(args) == 2 and all(a.isdigit() for a in args):
            try:
                self.selection = capture_selection(self.document.text, int(args[0]), int(args[1]))
            except ValueError as exc:
                console.print(str(exc), style="red")
                return True
            if self.selection:
                console.print(f'Selected: "{self.selection.text}"', style="cyan", markup=False)
        elif cmd == "/unselect":
            self.selection = None
        elif cmd == "/action" and len(args) == 1:
            try:
                await self.action(args[0])
            except (LookupError, ValueError) as exc:
                console.print(str(exc), style="red")
        elif cmd == "/match" and len(args) == 1:
            await self.match(Path(args[0]))
        elif cmd == "/addmissing":
            if not self.missing_keywords:
                console.print("Run /match first.", style="yellow")
            else:
                await self.send(build_add_keywords_message(self.missing_keywords))
        elif cmd == "/save":
            self.save(Path(args[0]) if args else self.path)
        else:
            console.print(f"Unknown command: {command}. Type /help for available commands.", style="red", markup=False)

        return True


async def run_interactive(shell: EditorShell):
    """Run interactive chat loop."""
    history_file = Path.home() / ".resume_copilot_history"
    session = PromptSession(history=FileHistory(str(history_file)))

    console.print(f"📄 Editing {shell.path} ({shell.document.word_count} words). Type /help for commands.", style="cyan")
    console.print(Markdown(shell.history[-1].content))

    while True:
        try:
            prompt = "\n📝 [selection] You: " if shell.selection else "\n📝 You: "
            user_input = await asyncio.get_event_loop().run_in_executor(
                None,
                lambda: session.prompt(prompt),
            )
            user_input = user_input.strip()
            if not user_input:
                continue

            if user_input.startswith("/"):
                if not await shell.handle_command(user_input):
                    break
                continue

            console.print("\n🤔 Thinking...", style="dim")
            await shell.send(user_input)

        except KeyboardInterrupt:
            console.print("\n\n👋 Goodbye!", style="yellow")
            break
        except EOFError:
            console.print("\n👋 Goodbye!", style="yellow")
            break


def _check_config(config_path: str) -> int:
    try:
        raw_config = load_raw_config(config_path)
    except FileNotFoundError:
        raw_config = {}

    issues = validate_config(raw_config)
    if not issues:
        console.print("✅ Configuration looks good.", style="green")
        return 0
    for issue in issues:
        icon = "❌" if issue.severity == Severity.ERROR else "⚠️"
        style = "red" if issue.severity == Severity.ERROR else "yellow"
        console.print(f"  {icon} {escape(f'[{issue.field}]')} {escape(issue.message)}", style=style)
    if has_errors(issues):
        console.print(
            "\n💡 Fix the errors above, then try again.\n"
            "   Quick fix: export OPENAI_API_KEY=your_key_here\n"
            "   Or copy config/config.yaml → config/config.local.yaml and set api_key",
            style="dim",
        )
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    import argparse

    from dotenv import load_dotenv

    # Load environment variables from .env file
    load_dotenv()

    parser = argparse.ArgumentParser(description="Resume Copilot - AI writing assistant for resumes")
    parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the web API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    score_parser = subparsers.add_parser("score", help="Print the ATS score of a resume text file")
    score_parser.add_argument("file", type=Path)

    subparsers.add_parser("check-config", help="Validate the configuration file")

    chat_parser = subparsers.add_parser("chat", help="Edit a resume text file with the assistant")
    chat_parser.add_argument("file", type=Path)

    args = parser.parse_args(argv)

    if args.command == "score":
        print_score(score_resume(args.file.read_text(encoding="utf-8")))
        return 0

    if args.command == "check-config":
        return _check_config(args.config)

    if args.command == "serve":
        from .web.app import main as serve

        serve(host=args.host, port=args.port, config=_load_app_config(args.config))
        return 0

    config = _load_app_config(args.config)
    if not config.proxy_url and _check_config(args.config):
        return 1
    shell = EditorShell(args.file, create_chat_proxy(config))
    asyncio.run(run_interactive(shell))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
