# pipecomp.repl.repl - Main REPL implementation
"""
Interactive pipeline editor with live completion.
"""
from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from prompt_toolkit.styles import Style

from pipecomp.completion.engine import PipelineCompletion
from pipecomp.completion.reflector import PipelineReflector
from pipecomp.config import Config
from pipecomp.parser.pipeline_parser import ParseError
from pipecomp.repl.completer import PipelineCompleter
from pipecomp.version import __version__

QUIT_COMMANDS = ("/quit", "/exit", "quit", "exit", "q")


class Repl:
    """
    Interactive pipeline editor.

    Features:
    - Multi-line editing, submitted with Esc+Enter
    - Stage and $search operator completion while typing
    - Input history
    - Summary of the stages found in each submitted pipeline
    """

    # REPL prompt style
    STYLE = Style.from_dict({
        "prompt": "bold cyan",
        "continuation": "gray",
    })

    def __init__(
        self,
        engine: Optional[PipelineCompletion] = None,
        history_file: Optional[Path] = None,
    ):
        """
        Initialize REPL.

        Args:
            engine: Completion engine (default providers if omitted)
            history_file: History file path
        """
        self.engine = engine or PipelineCompletion.from_config(Config())
        self.completer = PipelineCompleter(self.engine)

        # Setup history
        if history_file is None:
            history_file = Path.home() / ".pipecomp_history"
        self.history = FileHistory(str(history_file))

        self.session: Optional[PromptSession] = None

    def _create_session(self) -> PromptSession:
        """Create prompt session."""
        return PromptSession(
            history=self.history,
            completer=self.completer,
            style=self.STYLE,
            multiline=True,
            complete_while_typing=True,
            prompt_continuation=lambda width, line_number, wrap_count: [
                ("class:continuation", "... ".rjust(width))
            ],
        )

    def run(self) -> None:
        """Run the REPL."""
        self.session = self._create_session()

        print(self._get_banner())

        while True:
            try:
                text = self.session.prompt([("class:prompt", "pipeline> ")])
            except KeyboardInterrupt:
                print("\nUse /quit to exit")
                continue
            except EOFError:
                print("\nGoodbye!")
                break

            if not text or not text.strip():
                continue
            if text.strip().lower() in QUIT_COMMANDS:
                break

            print(self.summarize(text))

    def summarize(self, text: str) -> str:
        """
        Describe the stages of a submitted pipeline.

        Args:
            text: Pipeline text

        Returns:
            Summary text
        """
        try:
            tree = self.engine.parser.parse(text)
        except ParseError as e:
            return f"Error: {e}"

        names = PipelineReflector(tree).stage_names_present()
        if not names:
            return "No recognized stages."

        lines = [f"Stages ({len(names)}):"]
        lines.extend(f"  {i}. {name}" for i, name in enumerate(names, 1))
        if tree.recovered:
            lines.append(f"(input repaired in {tree.recovered} place{'s' if tree.recovered != 1 else ''})")
        return "\n".join(lines)

    def _get_banner(self) -> str:
        """Get welcome banner."""
        return f"""
pipecomp v{__version__} - Pipeline Completion
Type a pipeline, Esc+Enter to submit, /quit to exit
"""
