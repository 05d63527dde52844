from dataclasses import dataclass

from dotgraph.errors import DotSyntaxError


@dataclass(slots=True, frozen=True)
class Token:
    kind: str
    value: str
    position: int


SINGLE_CHAR_TOKENS = {
    "{": "LBRACE",
    "}": "RBRACE",
    "[": "LBRACKET",
    "]": "RBRACKET",
    "=": "EQUALS",
    ",": "COMMA",
    ";": "SEMICOLON",
    ":": "COLON",
}

EDGE_OPS = {
    "->": "ARROW",
    "--": "LINE",
}


def lex(source: str) -> list[Token]:
    tokens: list[Token] = []
    index = 0
    length = len(source)

    while index < length:
        char = source[index]
        if char.isspace():
            index += 1
            continue

        if source.startswith("//", index):
            index = _skip_to_line_end(source, index)
            continue

        if source.startswith("/*", index):
            index = _skip_block_comment(source, index)
            continue

        if char == "#" and (index == 0 or source[index - 1] == "\n"):
            index = _skip_to_line_end(source, index)
            continue

        if char == '"':
            value, end = _read_string(source, index)
            tokens.append(Token("STRING", value, index))
            index = end
            continue

        edge_kind = EDGE_OPS.get(source[index : index + 2])
        if edge_kind is not None:
            tokens.append(Token(edge_kind, source[index : index + 2], index))
            index += 2
            continue

        token_kind = SINGLE_CHAR_TOKENS.get(char)
        if token_kind is not None:
            tokens.append(Token(token_kind, char, index))
            index += 1
            continue

        if _is_numeral_start(source, index):
            value, end = _read_numeral(source, index)
            tokens.append(Token("NUMBER", value, index))
            index = end
            continue

        if _is_identifier_start(char):
            value, end = _read_identifier(source, index)
            tokens.append(Token("IDENT", value, index))
            index = end
            continue

        raise DotSyntaxError(f"Unexpected character {char!r}", position=index)

    tokens.append(Token("EOF", "", len(source)))
    return tokens


def _skip_to_line_end(source: str, index: int) -> int:
    while index < len(source) and source[index] != "\n":
        index += 1
    return index


def _skip_block_comment(source: str, index: int) -> int:
    end = source.find("*/", index + 2)
    if end == -1:
        raise DotSyntaxError("Unterminated block comment", position=index)
    return end + 2


def _read_string(source: str, index: int) -> tuple[str, int]:
    start = index
    index += 1
    result: list[str] = []

    while index < len(source):
        char = source[index]
        if char == '"':
            return "".join(result), index + 1
        if char == "\\" and index + 1 < len(source):
            # Escapes stay verbatim so the value renders back unchanged.
            result.append(char)
            index += 1
            result.append(source[index])
        else:
            result.append(char)
        index += 1

    raise DotSyntaxError("Unterminated string literal", position=start)


def _is_numeral_start(source: str, index: int) -> bool:
    char = source[index]
    if char == "-":
        index += 1
        if index >= len(source):
            return False
        char = source[index]
    if char.isdigit():
        return True
    return char == "." and index + 1 < len(source) and source[index + 1].isdigit()


def _read_numeral(source: str, index: int) -> tuple[str, int]:
    start = index
    if source[index] == "-":
        index += 1
    while index < len(source) and source[index].isdigit():
        index += 1
    if index < len(source) and source[index] == ".":
        index += 1
        while index < len(source) and source[index].isdigit():
            index += 1
    return source[start:index], index


def _read_identifier(source: str, index: int) -> tuple[str, int]:
    start = index
    while index < len(source) and _is_identifier_part(source[index]):
        index += 1
    return source[start:index], index


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_" or ord(char) >= 0x80


def _is_identifier_part(char: str) -> bool:
    return _is_identifier_start(char) or char.isdigit()
