from typing import List, Optional

from forkshell.ast_tree import Command, Pipeline
from forkshell.lexer import ShellLexer, ShellToken


class ShellParser:
    """
    Builds a Pipeline from the lexer's tokens.

    Grammar::

        line     := pipeline ["&"]
        pipeline := command ("|" command)*
        command  := (WORD | "<" WORD | ">" WORD)+
    """

    def __init__(self, tokens: List[ShellToken]) -> None:
        self.tokens = tokens
        self.pos = 0
        self._validate_tokens()

    def _validate_tokens(self) -> None:
        if not self.tokens:
            raise SyntaxError("Empty command")

        for i, token in enumerate(self.tokens):
            if token.is_operator("&") and i < len(self.tokens) - 1:
                raise SyntaxError("Token '&' can only appear at the end of a command")

        if self.tokens[0].is_operator("|") or self.tokens[0].is_operator("&"):
            raise SyntaxError(f"A command cannot start with '{self.tokens[0].lex}'")

        if self.tokens[-1].is_operator("|"):
            raise SyntaxError("A command cannot end with '|'")

    def parse(self) -> Pipeline:
        commands = self.parse_pipe()

        background = False
        if self.peek_operator("&"):
            self.consume("&")
            background = True

        if self.pos < len(self.tokens):
            raise SyntaxError(f"Unexpected token '{self.tokens[self.pos].lex}'")

        if background:
            commands = [cmd._replace(background=True) for cmd in commands]
        return Pipeline(tuple(commands))

    def parse_pipe(self) -> List[Command]:
        commands = [self.parse_redirect()]

        while self.peek_operator("|"):
            self.consume("|")
            commands.append(self.parse_redirect())

        return commands

    def parse_redirect(self) -> Command:
        args = []
        in_file = None
        out_file = None

        while self.pos < len(self.tokens):
            token = self.tokens[self.pos]

            if token.is_operator("<"):
                self.consume("<")
                in_file = self.consume_word("<")
            elif token.is_operator(">"):
                self.consume(">")
                out_file = self.consume_word(">")
            elif token.is_operator("|") or token.is_operator("&"):
                break
            else:
                args.append(self.consume_any().lex)

        if not args:
            raise SyntaxError("Missing command name")

        return Command(tuple(args), in_file, out_file)

    def peek(self) -> Optional[ShellToken]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def peek_operator(self, op: str) -> bool:
        token = self.peek()
        return token is not None and token.is_operator(op)

    def consume(self, expected: str) -> ShellToken:
        if self.peek_operator(expected):
            self.pos += 1
            return self.tokens[self.pos - 1]
        got = self.peek().lex if self.peek() else "end of input"
        raise SyntaxError(f"Expected '{expected}', got '{got}'")

    def consume_word(self, after: str) -> str:
        token = self.peek()
        if token is None or token.is_operator():
            raise SyntaxError(f"Missing file name after '{after}'")
        self.pos += 1
        return token.lex

    def consume_any(self) -> ShellToken:
        if self.pos >= len(self.tokens):
            raise SyntaxError("Unexpected end of input")
        token = self.tokens[self.pos]
        self.pos += 1
        return token


def parse_line(line: str) -> Pipeline:
    """Tokenize and parse one input line.

    Raises ValueError for lexical errors and SyntaxError for grammar errors.
    """
    return ShellParser(ShellLexer().tokenize(line)).parse()
