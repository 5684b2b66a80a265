# pipecomp.repl - Interactive pipeline editor
from pipecomp.repl.completer import PipelineCompleter
from pipecomp.repl.repl import Repl

__all__ = ["PipelineCompleter", "Repl"]
