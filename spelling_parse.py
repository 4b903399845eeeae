import ply.yacc as yacc

from slotted import SlottedClass
from spelling_lex import Lexer, find_column


class TypeSpelling(SlottedClass):
    """
    One way of writing a native type, as the ordered list of words used.
    Keywords are lower case, any other word is a typedef name.
    """
    __attrs__ = ("words", )
    __types__ = {"words": [str]}

    def __str__(self):
        return " ".join(self.words)


class Parser:
    ########### Parser interface #############

    def __init__(self, lexer=Lexer, **kwargs):
        self.__lexer = lexer()
        self.tokens = self.__lexer.tokens
        kwargs.setdefault("write_tables", False)
        kwargs.setdefault("debug", False)
        self.parser = yacc.yacc(module=self, **kwargs)

    def lexer(self):
        return self.__lexer

    def parse(self, spelling):
        return self.parser.parse(spelling, lexer=self.__lexer)

    ##########   Parser (tokens -> TypeSpelling) ######

    def p_spelling(self, p):
        "spelling : word_list"
        p[0] = TypeSpelling(p[1])

    def p_word_list_1(self, p):
        "word_list : word_list word"
        p[0] = p[1] + [p[2]]

    def p_word_list_2(self, p):
        "word_list : word"
        p[0] = [p[1]]

    def p_word(self, p):
        """word : CHAR
                | SIGNED
                | UNSIGNED
                | SHORT
                | INT
                | LONG
                | FLOAT
                | DOUBLE
                | NAME"""
        p[0] = p[1]

    def p_error(self, p):
        if p is None:
            raise SyntaxError("Unexpected end of type spelling '{}'".format(
                self.__lexer.lexdata()))
        raise SyntaxError("Unexpected symbol '{}' at column {}".format(
            p.value, find_column(p)
        ))


_PARSER = None


def parse_spelling(spelling):
    """Parse a spelling like 'long unsigned int' into a TypeSpelling."""
    global _PARSER
    if _PARSER is None:
        _PARSER = Parser()
    return _PARSER.parse(spelling)
