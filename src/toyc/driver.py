from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from toyc.analyzer import SemanticAnalyzer
from toyc.ast_nodes import Program
from toyc.errors import CompileError, Diagnostic
from toyc.lexer import MAX_LEXEME_LENGTH, tokenize
from toyc.parser import Parser
from toyc.visitors import print_ast, print_tokens


class FrontEnd:
    """Runs lexer, parser and semantic analysis over one source text."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

        self.max_lexeme_length = self.config.get("max_lexeme_length", MAX_LEXEME_LENGTH)
        self.dump_tokens = self.config.get("dump_tokens", False)
        self.dump_ast = self.config.get("dump_ast", False)
        self.use_colors = self.config.get("use_colors", False)
        self.verbose = self.config.get("verbose", True)

        self.parser = Parser(self.max_lexeme_length)
        self.analyzer = SemanticAnalyzer(verbose=self.verbose)
        self.program: Optional[Program] = None
        self.error: Optional[CompileError] = None

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return self.analyzer.diagnostics

    def run(self, source: str) -> bool:
        """Parse and analyze `source`; True when both stages pass."""
        self.program = None
        self.error = None
        self.analyzer.diagnostics = []

        if self.dump_tokens:
            print(print_tokens(tokenize(source, self.max_lexeme_length), use_colors=self.use_colors), end="")

        try:
            self.parser.initialize(source)
            self.program = self.parser.parse_program()
        except CompileError as e:
            self.error = e
            print(e)
            return False
        except RecursionError:
            self.error = CompileError("Program is nested too deeply", self.parser.current.line)
            print(self.error)
            return False

        try:
            if self.dump_ast:
                print(print_ast(self.program, use_colors=self.use_colors), end="")
            return self.analyzer.analyze(self.program)
        except RecursionError:
            # the tree printer and expression checks still recurse
            self.error = CompileError("Program is nested too deeply", self.program.line)
            print(self.error)
            return False

    def run_file(self, path: Union[str, Path]) -> bool:
        source = Path(path).read_text(encoding="utf-8")
        return self.run(source)
