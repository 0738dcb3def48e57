from typing import List, NamedTuple

OPERATORS = ("|", "<", ">", "&")


class ShellToken(NamedTuple):
    lex: str
    quoted: bool = False

    def is_operator(self, op: str = None) -> bool:
        if self.quoted or self.lex not in OPERATORS:
            return False
        return op is None or self.lex == op


class ShellLexer:
    """
    Splits an input line into words and the operators | < > &.
    Quoted text is a single word and never an operator.
    """

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.tokens: List[ShellToken] = []
        self.current_token = ""
        self.in_quote = False
        self.quote_char = ""
        self.token_was_quoted = False

    def tokenize(self, line: str) -> List[ShellToken]:
        self._reset()

        i = 0
        while i < len(line):
            char = line[i]

            if self.in_quote:
                if char == self.quote_char:
                    self.in_quote = False
                    self.quote_char = ""
                else:
                    self.current_token += char
                i += 1
                continue

            if char in ('"', "'"):
                self.in_quote = True
                self.quote_char = char
                self.token_was_quoted = True
                i += 1
                continue

            if char in OPERATORS:
                self.add_token()
                self.tokens.append(ShellToken(char))
                i += 1
                continue

            if char.isspace():
                self.add_token()
                i += 1
                continue

            self.current_token += char
            i += 1

        if self.in_quote:
            raise ValueError(f"Unterminated quote {self.quote_char}")

        self.add_token()
        return self.tokens

    def add_token(self) -> None:
        # "" is still a word
        if self.current_token or self.token_was_quoted:
            self.tokens.append(ShellToken(self.current_token, self.token_was_quoted))
        self.current_token = ""
        self.token_was_quoted = False
