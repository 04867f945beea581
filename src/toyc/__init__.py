"""
Front end for a small imperative teaching language: lexer, parser and
semantic analyzer.
"""

__all__ = [
    # pipeline
    'Lexer',
    'Token',
    'Parser',
    'SemanticAnalyzer',
    'FrontEnd',

    # errors
    'CompileError',
    'LexicalError',
    'ParseError',
    'Diagnostic',

    # helpers
    'tokenize',
    'parse',
    'analyze',
    'print_ast',
    'print_tokens',
]

from toyc.analyzer import SemanticAnalyzer, analyze
from toyc.driver import FrontEnd
from toyc.errors import CompileError, Diagnostic, LexicalError, ParseError
from toyc.lexer import Lexer, Token, tokenize
from toyc.parser import Parser, parse
from toyc.visitors import print_ast, print_tokens
