# Lexical scanner for C-
# Pull-based: the parser asks for one token at a time via get_next_token().

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class TokenType(Enum):
    # Keywords
    IF = "IF"
    ELSE = "ELSE"
    WHILE = "WHILE"
    INT = "INT"
    FLOAT = "FLOAT"
    RETURN = "RETURN"
    VOID = "VOID"
    PROGRAM = "PROGRAM"

    # Identifiers and numbers
    ID = "ID"
    NUM = "NUM"

    # Operators
    PLUS = "PLUS"
    MINUS = "MINUS"
    TIMES = "TIMES"
    DIVIDE = "DIVIDE"
    LT = "LT"
    LTE = "LTE"
    GT = "GT"
    GTE = "GTE"
    EQ = "EQ"
    NEQ = "NEQ"
    ASSIGN = "ASSIGN"

    # Delimiters
    SEMI = "SEMI"
    COMMA = "COMMA"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    DOT = "DOT"

    # Special
    ENDOFFILE = "ENDOFFILE"
    ERROR = "ERROR"


@dataclass
class Token:
    type: TokenType
    lexeme: str
    line: int
    column: int

    def __repr__(self):
        return f"({self.type.value}, {self.lexeme})"


# Keywords are matched case-insensitively
KEYWORDS = {
    'if': TokenType.IF,
    'else': TokenType.ELSE,
    'while': TokenType.WHILE,
    'int': TokenType.INT,
    'float': TokenType.FLOAT,
    'return': TokenType.RETURN,
    'void': TokenType.VOID,
    'program': TokenType.PROGRAM,
}

# Two-char symbols are tried before single-char ones
DOUBLE_SYMBOLS = {
    '<=': TokenType.LTE,
    '>=': TokenType.GTE,
    '==': TokenType.EQ,
    '!=': TokenType.NEQ,
}

SYMBOLS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.TIMES,
    '/': TokenType.DIVIDE,
    '<': TokenType.LT,
    '>': TokenType.GT,
    '=': TokenType.ASSIGN,
    ';': TokenType.SEMI,
    ',': TokenType.COMMA,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '.': TokenType.DOT,
}

# Characters allowed between two alphanumeric runs of an identifier
ID_SEPARATORS = {'_', '.', '#', '$'}

WHITESPACE = {' ', '\n', '\r', '\t', '\v', '\f'}

EOF_LEXEME = "EOF"


class Scanner:
    def __init__(self, source_code: str):
        self.src = source_code
        self.pos = 0
        self.length = len(source_code)
        self.lineno = 1
        self.col = 1
        self.lex_errors = []  # tuples: (lineno, thrown_string, message)
        self._done = False

    def __iter__(self):
        """Yield tokens up to and including ENDOFFILE."""
        while True:
            token = self.get_next_token()
            yield token
            if token.type == TokenType.ENDOFFILE:
                return

    def peek(self, offset=0):
        if self.pos + offset >= self.length:
            return None
        return self.src[self.pos + offset]

    def advance(self):
        if self.pos >= self.length:
            return None
        char = self.src[self.pos]
        self.pos += 1
        if char == '\n':
            self.lineno += 1
            self.col = 1
        else:
            self.col += 1
        return char

    def log_error(self, lineno, thrown, message):
        self.lex_errors.append((lineno, thrown, message))
        logger.warning("Lexical error at line %d: %s (%s)", lineno, message, thrown)

    def _eof(self):
        self._done = True
        return Token(TokenType.ENDOFFILE, EOF_LEXEME, self.lineno, self.col)

    def _is_alnum(self, ch):
        return ch is not None and ch.isascii() and ch.isalnum()

    def _is_digit(self, ch):
        return ch is not None and ch.isascii() and ch.isdigit()

    def get_next_token(self) -> Token:
        if self._done:
            return self._eof()

        while self.pos < self.length:
            char = self.peek()
            start_ln, start_col = self.lineno, self.col

            # 1. Whitespace
            if char in WHITESPACE:
                self.advance()
                continue

            # 2. Block comment /* ... */
            if char == '/' and self.peek(1) == '*':
                self.advance(); self.advance()
                while self.pos < self.length:
                    if self.peek() == '*' and self.peek(1) == '/':
                        self.advance(); self.advance()
                        break
                    self.advance()
                else:
                    self.log_error(start_ln, "/* Unclosed ...", "Open comment at EOF")
                    return self._eof()
                continue

            # 3. Identifiers and keywords
            if char.isascii() and char.isalpha():
                return self._scan_identifier(start_ln, start_col)

            # 4. Numbers
            if self._is_digit(char):
                return self._scan_number(start_ln, start_col)

            # 5. Symbols
            pair = char + (self.peek(1) or '')
            if pair in DOUBLE_SYMBOLS:
                self.advance(); self.advance()
                return Token(DOUBLE_SYMBOLS[pair], pair, start_ln, start_col)
            if char in SYMBOLS:
                self.advance()
                return Token(SYMBOLS[char], char, start_ln, start_col)

            # 6. Illegal character
            self.advance()
            self.log_error(start_ln, char, "Illegal character")
            return Token(TokenType.ERROR, char, start_ln, start_col)

        return self._eof()

    def _scan_identifier(self, start_ln, start_col):
        lexeme = ""
        while self._is_alnum(self.peek()):
            lexeme += self.advance()

        # separator groups: z.field, a#member, y_value
        while self.peek() in ID_SEPARATORS:
            if not self._is_alnum(self.peek(1)):
                # '.' may also be the program terminator, leave it for the symbol rule
                if self.peek() == '.':
                    break
                lexeme += self.advance()
                self.log_error(start_ln, lexeme, "Malformed identifier")
                return Token(TokenType.ERROR, lexeme, start_ln, start_col)
            lexeme += self.advance()
            while self._is_alnum(self.peek()):
                lexeme += self.advance()

        token_type = KEYWORDS.get(lexeme.lower(), TokenType.ID)
        return Token(token_type, lexeme, start_ln, start_col)

    def _scan_number(self, start_ln, start_col):
        lexeme = ""
        while self._is_digit(self.peek()):
            lexeme += self.advance()

        # fraction: 45.67 or 89.
        if self.peek() == '.':
            lexeme += self.advance()
            while self._is_digit(self.peek()):
                lexeme += self.advance()

        # exponent: 1.23e10, 4.56E-3, 78e+2
        if self.peek() in ('e', 'E'):
            signed = self.peek(1) in ('+', '-')
            if self._is_digit(self.peek(2 if signed else 1)):
                lexeme += self.advance()
                if signed:
                    lexeme += self.advance()
                while self._is_digit(self.peek()):
                    lexeme += self.advance()
            elif signed or '.' in lexeme:
                # 2.3eX, 1.5e+ABC: exponent marker with no digits
                lexeme += self.advance()
                if signed:
                    lexeme += self.advance()
                self.log_error(start_ln, lexeme, "Malformed number")
                return Token(TokenType.ERROR, lexeme, start_ln, start_col)
            # otherwise 12else scans as NUM then ID

        return Token(TokenType.NUM, lexeme, start_ln, start_col)
