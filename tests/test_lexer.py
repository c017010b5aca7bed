"""Lexer tests."""

import pytest

from sdl import Lexer, TokenKind, lookup_ident, tokenize

K = TokenKind

SAMPLE = """MODIFY CAMERA {
    position: [0, 1.5, -10],
    focalDistance: 35.0,
}

NUMBER pi = 3.14159265359

MATERIAL shiny = {
    ambientIntensity: 0.1 * 5 + 1 - 1 / 2,
    color: red,
}

LIGHT light1 AT (0, 1.5, 0)
"""


class TestLexer:
    def test_sample_scene(self):
        expected = [
            (K.MODIFY, "MODIFY"),
            (K.CAMERA, "CAMERA"),
            (K.LBRACE, "{"),
            (K.IDENT, "position"),
            (K.COLON, ":"),
            (K.LBRACKET, "["),
            (K.FLOAT, "0"),
            (K.COMMA, ","),
            (K.FLOAT, "1.5"),
            (K.COMMA, ","),
            (K.MINUS, "-"),
            (K.FLOAT, "10"),
            (K.RBRACKET, "]"),
            (K.COMMA, ","),
            (K.IDENT, "focalDistance"),
            (K.COLON, ":"),
            (K.FLOAT, "35.0"),
            (K.COMMA, ","),
            (K.RBRACE, "}"),
            (K.NUMBER, "NUMBER"),
            (K.IDENT, "pi"),
            (K.ASSIGN, "="),
            (K.FLOAT, "3.14159265359"),
            (K.MATERIAL, "MATERIAL"),
            (K.IDENT, "shiny"),
            (K.ASSIGN, "="),
            (K.LBRACE, "{"),
            (K.IDENT, "ambientIntensity"),
            (K.COLON, ":"),
            (K.FLOAT, "0.1"),
            (K.MULTIPLY, "*"),
            (K.FLOAT, "5"),
            (K.PLUS, "+"),
            (K.FLOAT, "1"),
            (K.MINUS, "-"),
            (K.FLOAT, "1"),
            (K.DIVIDE, "/"),
            (K.FLOAT, "2"),
            (K.COMMA, ","),
            (K.IDENT, "color"),
            (K.COLON, ":"),
            (K.IDENT, "red"),
            (K.COMMA, ","),
            (K.RBRACE, "}"),
            (K.LIGHT, "LIGHT"),
            (K.IDENT, "light1"),
            (K.AT, "AT"),
            (K.LPAREN, "("),
            (K.FLOAT, "0"),
            (K.COMMA, ","),
            (K.FLOAT, "1.5"),
            (K.COMMA, ","),
            (K.FLOAT, "0"),
            (K.RPAREN, ")"),
            (K.EOF, ""),
        ]
        lexer = Lexer(SAMPLE)
        for i, (kind, literal) in enumerate(expected):
            tok = lexer.next_token()
            assert (tok.kind, tok.literal) == (kind, literal), f"token {i}"

    def test_eof_is_idempotent(self):
        lexer = Lexer("a")
        assert lexer.next_token().kind == K.IDENT
        for _ in range(3):
            tok = lexer.next_token()
            assert tok.kind == K.EOF
            assert tok.literal == ""

    def test_iteration_stops_after_eof(self):
        tokens = tokenize("NUMBER x = 1")
        assert [t.kind for t in tokens] == [K.NUMBER, K.IDENT, K.ASSIGN, K.FLOAT, K.EOF]

    def test_empty_source(self):
        assert [t.kind for t in tokenize("  \t\r\n ")] == [K.EOF]

    @pytest.mark.parametrize(
        "source,kind",
        [
            ("SPHERE", K.SPHERE),
            ("COLOR", K.COLOR),
            ("PLACE", K.PLACE),
            ("sphere", K.IDENT),
            ("SPHERES", K.IDENT),
            ("_private", K.IDENT),
            ("light_2", K.IDENT),
        ],
    )
    def test_keyword_lookup(self, source, kind):
        tok = Lexer(source).next_token()
        assert tok.kind == kind
        assert tok.literal == source
        assert lookup_ident(source) == kind

    @pytest.mark.parametrize("literal", ["0", "42", "3.5", "0.001", "10.25"])
    def test_numbers_keep_their_text(self, literal):
        tok = Lexer(literal).next_token()
        assert tok.kind == K.FLOAT
        assert tok.literal == literal

    def test_minus_is_never_part_of_number(self):
        assert [(t.kind, t.literal) for t in tokenize("-5")] == [
            (K.MINUS, "-"),
            (K.FLOAT, "5"),
            (K.EOF, ""),
        ]

    def test_digits_then_letters_split(self):
        assert [t.kind for t in tokenize("12ab")] == [K.FLOAT, K.IDENT, K.EOF]

    @pytest.mark.parametrize("ch", ["@", "#", "$", ".", "!", ";"])
    def test_unknown_character_is_illegal(self, ch):
        tok = Lexer(ch).next_token()
        assert tok.kind == K.ILLEGAL
        assert tok.literal == ch

    def test_lexing_continues_after_illegal(self):
        assert [t.kind for t in tokenize("a $ b")] == [K.IDENT, K.ILLEGAL, K.IDENT, K.EOF]

    def test_positions(self):
        tokens = tokenize("NUMBER a = 1\n  COLOR b = a")
        color = tokens[4]
        assert color.kind == K.COLOR
        assert (color.line, color.col) == (2, 3)
        assert (tokens[0].line, tokens[0].col) == (1, 1)
        assert (tokens[3].line, tokens[3].col) == (1, 12)
