# Predictive recursive descent parser for C-
# One method per grammar rule. Each returns the arena index of its finished
# subtree or raises ParseError; the first error aborts the whole parse.

import logging
from dataclasses import dataclass
from typing import Optional

from .config import ParserConfig
from .lexical import Scanner, Token, TokenType
from .parse_tree import ParseTree, assign_ids

logger = logging.getLogger(__name__)

TYPE_SPECIFIERS = (TokenType.INT, TokenType.FLOAT)
STATEMENT_START = (TokenType.ID, TokenType.IF, TokenType.WHILE, TokenType.LBRACE)
RELOPS = {
    TokenType.LT: "<",
    TokenType.LTE: "<=",
    TokenType.GT: ">",
    TokenType.GTE: ">=",
    TokenType.EQ: "==",
    TokenType.NEQ: "!=",
}
ADDOPS = {TokenType.PLUS: "+", TokenType.MINUS: "-"}
MULOPS = {TokenType.TIMES: "*", TokenType.DIVIDE: "/"}


class ParseError(Exception):
    """Syntax error with the position of the offending token"""
    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(self.format())

    def format(self) -> str:
        return f"SYNTAX ERROR at Line {self.line}, Col {self.column}: {self.message}"


class Parser:
    def __init__(self, scanner, config: Optional[ParserConfig] = None):
        self.scanner = scanner
        self.config = config or ParserConfig()
        self.tree = ParseTree()
        self.error: Optional[ParseError] = None
        self._depth = 0

        self.current: Optional[Token] = None
        self.token_type = TokenType.ERROR
        self.lexeme = ""
        self.line = 0
        self.col = 0

    # ---------- Token cursor ----------

    def advance(self) -> None:
        token = self.scanner.get_next_token()
        self.current = token
        self.token_type = token.type
        self.lexeme = token.lexeme
        self.line = token.line
        self.col = token.column

    def peek_is(self, *token_types: TokenType) -> bool:
        return self.token_type in token_types

    def expect(self, token_type: TokenType, name: str) -> int:
        if self.token_type != token_type:
            self.fail(f"Expected {name} but found '{self.lexeme}'")
        leaf = self.tree.add_terminal(name, self.lexeme)
        self.advance()
        return leaf

    def fail(self, message: str):
        # only the first error is kept; raising stops every enclosing rule
        error = ParseError(message, self.line, self.col)
        if self.error is None:
            self.error = error
        raise error

    # ---------- Node helpers ----------

    def _open(self, rule: str) -> int:
        self._depth += 1
        if self._depth > self.config.max_depth:
            self.fail(f"Maximum nesting depth of {self.config.max_depth} exceeded")
        return self.tree.add_nonterminal(rule)

    def _close(self, node: int) -> int:
        self._depth -= 1
        return node

    def add(self, node: int, child: int) -> None:
        self.tree.add_child(node, child)

    def epsilon(self, node: int) -> None:
        self.tree.add_child(node, self.tree.add_epsilon())

    def chain(self, node: int) -> int:
        # next link of a right-leaning prime chain; built in a loop so list
        # length does not count toward max_depth
        tail = self.tree.add_nonterminal(self.tree.label(node))
        self.add(node, tail)
        return tail

    # ---------- Entry point ----------

    def parse(self) -> ParseTree:
        self.tree = ParseTree()
        self.error = None
        self._depth = 0
        try:
            self.advance()
            root = self.parse_program()
            if not self.peek_is(TokenType.ENDOFFILE):
                self.fail(f"Expected end of file but found '{self.lexeme}'")
        except ParseError as err:
            logger.debug("Parse aborted: %s", err)
            self.tree = ParseTree()
            raise
        self.tree.root = root
        logger.debug("Parse finished with %d nodes", len(self.tree))
        return self.tree

    # ---------- Grammar rules ----------

    # program ::= Program ID "{" declaration-list statement-list "}" "."
    def parse_program(self) -> int:
        node = self._open("program")
        self.add(node, self.expect(TokenType.PROGRAM, "Program"))
        self.add(node, self.expect(TokenType.ID, "ID"))
        self.add(node, self.expect(TokenType.LBRACE, "{"))
        self.add(node, self.parse_declaration_list())
        self.add(node, self.parse_statement_list())
        self.add(node, self.expect(TokenType.RBRACE, "}"))
        self.add(node, self.expect(TokenType.DOT, "."))
        return self._close(node)

    # declaration-list ::= declaration declaration-list'
    def parse_declaration_list(self) -> int:
        node = self._open("declaration-list")
        self.add(node, self.parse_declaration())
        self.add(node, self.parse_declaration_list_prime())
        return self._close(node)

    # declaration-list' ::= declaration declaration-list' | ε
    def parse_declaration_list_prime(self) -> int:
        head = node = self._open("declaration-list'")
        while self.peek_is(*TYPE_SPECIFIERS):
            self.add(node, self.parse_declaration())
            node = self.chain(node)
        self.epsilon(node)
        return self._close(head)

    # declaration ::= var-declaration
    def parse_declaration(self) -> int:
        node = self._open("declaration")
        self.add(node, self.parse_var_declaration())
        return self._close(node)

    # var-declaration ::= type-specifier ID var-declaration'
    def parse_var_declaration(self) -> int:
        node = self._open("var-declaration")
        self.add(node, self.parse_type_specifier())
        self.add(node, self.expect(TokenType.ID, "ID"))
        self.add(node, self.parse_var_declaration_prime())
        return self._close(node)

    # var-declaration' ::= ";" | "[" NUM "]" ";"
    def parse_var_declaration_prime(self) -> int:
        node = self._open("var-declaration'")
        if self.peek_is(TokenType.SEMI):
            self.add(node, self.expect(TokenType.SEMI, ";"))
        elif self.peek_is(TokenType.LBRACKET):
            self.add(node, self.expect(TokenType.LBRACKET, "["))
            self.add(node, self.expect(TokenType.NUM, "NUM"))
            self.add(node, self.expect(TokenType.RBRACKET, "]"))
            self.add(node, self.expect(TokenType.SEMI, ";"))
        else:
            self.fail("Expected ';' or '[' in variable declaration")
        return self._close(node)

    # type-specifier ::= int | float
    def parse_type_specifier(self) -> int:
        node = self._open("type-specifier")
        if self.peek_is(TokenType.INT):
            self.add(node, self.expect(TokenType.INT, "int"))
        elif self.peek_is(TokenType.FLOAT):
            self.add(node, self.expect(TokenType.FLOAT, "float"))
        else:
            self.fail("Expected 'int' or 'float'")
        return self._close(node)

    # params ::= param-list | void
    # Not reachable from program; kept for function declarations.
    def parse_params(self) -> int:
        node = self._open("params")
        if self.peek_is(TokenType.VOID):
            self.add(node, self.expect(TokenType.VOID, "void"))
        elif self.peek_is(*TYPE_SPECIFIERS):
            self.add(node, self.parse_param_list())
        else:
            self.fail("Expected parameter list or 'void'")
        return self._close(node)

    # param-list ::= param param-list'
    def parse_param_list(self) -> int:
        node = self._open("param-list")
        self.add(node, self.parse_param())
        self.add(node, self.parse_param_list_prime())
        return self._close(node)

    # param-list' ::= "," param param-list' | ε
    def parse_param_list_prime(self) -> int:
        head = node = self._open("param-list'")
        while self.peek_is(TokenType.COMMA):
            self.add(node, self.expect(TokenType.COMMA, ","))
            self.add(node, self.parse_param())
            node = self.chain(node)
        self.epsilon(node)
        return self._close(head)

    # param ::= type-specifier ID param'
    def parse_param(self) -> int:
        node = self._open("param")
        self.add(node, self.parse_type_specifier())
        self.add(node, self.expect(TokenType.ID, "ID"))
        self.add(node, self.parse_param_prime())
        return self._close(node)

    # param' ::= ε | "[" "]"
    def parse_param_prime(self) -> int:
        node = self._open("param'")
        if self.peek_is(TokenType.LBRACKET):
            self.add(node, self.expect(TokenType.LBRACKET, "["))
            self.add(node, self.expect(TokenType.RBRACKET, "]"))
        else:
            self.epsilon(node)
        return self._close(node)

    # compound-stmt ::= "{" statement-list "}"
    def parse_compound_stmt(self) -> int:
        node = self._open("compound-stmt")
        self.add(node, self.expect(TokenType.LBRACE, "{"))
        self.add(node, self.parse_statement_list())
        self.add(node, self.expect(TokenType.RBRACE, "}"))
        return self._close(node)

    # statement-list ::= statement-list'
    def parse_statement_list(self) -> int:
        node = self._open("statement-list")
        self.add(node, self.parse_statement_list_prime())
        return self._close(node)

    # statement-list' ::= statement statement-list' | ε
    def parse_statement_list_prime(self) -> int:
        head = node = self._open("statement-list'")
        while self.peek_is(*STATEMENT_START):
            self.add(node, self.parse_statement())
            node = self.chain(node)
        self.epsilon(node)
        return self._close(head)

    # statement ::= assignment-stmt | compound-stmt | selection-stmt | iteration-stmt
    def parse_statement(self) -> int:
        node = self._open("statement")
        if self.peek_is(TokenType.ID):
            self.add(node, self.parse_assignment_stmt())
        elif self.peek_is(TokenType.LBRACE):
            self.add(node, self.parse_compound_stmt())
        elif self.peek_is(TokenType.IF):
            self.add(node, self.parse_selection_stmt())
        elif self.peek_is(TokenType.WHILE):
            self.add(node, self.parse_iteration_stmt())
        else:
            self.fail("Expected statement")
        return self._close(node)

    # selection-stmt ::= if "(" expression ")" statement selection-stmt'
    def parse_selection_stmt(self) -> int:
        node = self._open("selection-stmt")
        self.add(node, self.expect(TokenType.IF, "if"))
        self.add(node, self.expect(TokenType.LPAREN, "("))
        self.add(node, self.parse_expression())
        self.add(node, self.expect(TokenType.RPAREN, ")"))
        self.add(node, self.parse_statement())
        self.add(node, self.parse_selection_stmt_prime())
        return self._close(node)

    # selection-stmt' ::= ε | else statement
    # an else always binds to the nearest if
    def parse_selection_stmt_prime(self) -> int:
        node = self._open("selection-stmt'")
        if self.peek_is(TokenType.ELSE):
            self.add(node, self.expect(TokenType.ELSE, "else"))
            self.add(node, self.parse_statement())
        else:
            self.epsilon(node)
        return self._close(node)

    # iteration-stmt ::= while "(" expression ")" statement
    def parse_iteration_stmt(self) -> int:
        node = self._open("iteration-stmt")
        self.add(node, self.expect(TokenType.WHILE, "while"))
        self.add(node, self.expect(TokenType.LPAREN, "("))
        self.add(node, self.parse_expression())
        self.add(node, self.expect(TokenType.RPAREN, ")"))
        self.add(node, self.parse_statement())
        return self._close(node)

    # assignment-stmt ::= var "=" expression
    def parse_assignment_stmt(self) -> int:
        node = self._open("assignment-stmt")
        self.add(node, self.parse_var())
        self.add(node, self.expect(TokenType.ASSIGN, "="))
        self.add(node, self.parse_expression())
        return self._close(node)

    # var ::= ID var'
    def parse_var(self) -> int:
        node = self._open("var")
        self.add(node, self.expect(TokenType.ID, "ID"))
        self.add(node, self.parse_var_prime())
        return self._close(node)

    # var' ::= ε | "[" expression "]"
    def parse_var_prime(self) -> int:
        node = self._open("var'")
        if self.peek_is(TokenType.LBRACKET):
            self.add(node, self.expect(TokenType.LBRACKET, "["))
            self.add(node, self.parse_expression())
            self.add(node, self.expect(TokenType.RBRACKET, "]"))
        else:
            self.epsilon(node)
        return self._close(node)

    # Expressions: expression -> additive-expression -> term -> factor,
    # one layer per precedence level.

    # expression ::= additive-expression expression'
    def parse_expression(self) -> int:
        node = self._open("expression")
        self.add(node, self.parse_additive_expression())
        self.add(node, self.parse_expression_prime())
        return self._close(node)

    # expression' ::= relop additive-expression expression' | ε
    def parse_expression_prime(self) -> int:
        head = node = self._open("expression'")
        while self.peek_is(*RELOPS):
            self.add(node, self.parse_relop())
            self.add(node, self.parse_additive_expression())
            node = self.chain(node)
        self.epsilon(node)
        return self._close(head)

    # relop ::= "<" | "<=" | ">" | ">=" | "==" | "!="
    def parse_relop(self) -> int:
        node = self._open("relop")
        if not self.peek_is(*RELOPS):
            self.fail("Expected relational operator")
        self.add(node, self.expect(self.token_type, RELOPS[self.token_type]))
        return self._close(node)

    # additive-expression ::= term additive-expression'
    def parse_additive_expression(self) -> int:
        node = self._open("additive-expression")
        self.add(node, self.parse_term())
        self.add(node, self.parse_additive_expression_prime())
        return self._close(node)

    # additive-expression' ::= addop term additive-expression' | ε
    def parse_additive_expression_prime(self) -> int:
        head = node = self._open("additive-expression'")
        while self.peek_is(*ADDOPS):
            self.add(node, self.parse_addop())
            self.add(node, self.parse_term())
            node = self.chain(node)
        self.epsilon(node)
        return self._close(head)

    # addop ::= "+" | "-"
    def parse_addop(self) -> int:
        node = self._open("addop")
        if not self.peek_is(*ADDOPS):
            self.fail("Expected '+' or '-'")
        self.add(node, self.expect(self.token_type, ADDOPS[self.token_type]))
        return self._close(node)

    # term ::= factor term'
    def parse_term(self) -> int:
        node = self._open("term")
        self.add(node, self.parse_factor())
        self.add(node, self.parse_term_prime())
        return self._close(node)

    # term' ::= mulop factor term' | ε
    def parse_term_prime(self) -> int:
        head = node = self._open("term'")
        while self.peek_is(*MULOPS):
            self.add(node, self.parse_mulop())
            self.add(node, self.parse_factor())
            node = self.chain(node)
        self.epsilon(node)
        return self._close(head)

    # mulop ::= "*" | "/"
    def parse_mulop(self) -> int:
        node = self._open("mulop")
        if not self.peek_is(*MULOPS):
            self.fail("Expected '*' or '/'")
        self.add(node, self.expect(self.token_type, MULOPS[self.token_type]))
        return self._close(node)

    # factor ::= "(" expression ")" | var | NUM
    def parse_factor(self) -> int:
        node = self._open("factor")
        if self.peek_is(TokenType.LPAREN):
            self.add(node, self.expect(TokenType.LPAREN, "("))
            self.add(node, self.parse_expression())
            self.add(node, self.expect(TokenType.RPAREN, ")"))
        elif self.peek_is(TokenType.ID):
            self.add(node, self.parse_var())
        elif self.peek_is(TokenType.NUM):
            self.add(node, self.expect(TokenType.NUM, "NUM"))
        else:
            self.fail("Expected '(', identifier, or number")
        return self._close(node)


@dataclass
class ParseResult:
    tree: Optional[ParseTree] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.tree is not None


def parse_source(source: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """Scan and parse ``source``; return either a numbered tree or the first error."""
    parser = Parser(Scanner(source), config)
    try:
        tree = parser.parse()
    except ParseError as err:
        return ParseResult(error=err)
    assign_ids(tree)
    return ParseResult(tree=tree)
