import ply.lex as lex


class Lexer:
    ######## Token definitions ##########

    RESERVED = {
        "char": "CHAR",
        "signed": "SIGNED",
        "unsigned": "UNSIGNED",
        "short": "SHORT",
        "int": "INT",
        "long": "LONG",
        "float": "FLOAT",
        "double": "DOUBLE",
    }

    # Sorted so ply sees the same token signature on every run
    tokens = tuple(sorted(("NAME", ) + tuple(RESERVED.values())))

    t_ignore = " \t"

    ########## Lexer interface #########

    def __init__(self, **kwargs):
        self.__lexer = lex.lex(module=self, **kwargs)

    def input(self, s):
        self.__lexer.input(s)

    def token(self):
        return self.__lexer.token()

    def lexdata(self):
        return self.__lexer.lexdata

    def __iter__(self):
        return iter(self.__lexer.token, None)

    ########### Token handlers ############

    def t_NAME(self, t):
        r'[a-zA-Z_][a-zA-Z0-9_]*'
        t.type = self.RESERVED.get(t.value, "NAME")
        return t

    def t_error(self, t):
        raise SyntaxError("Unknown symbol '{}' at column {} of '{}'".format(
            t.value[0], find_column(t), t.lexer.lexdata
        ))


def find_column(token):
    """1-based column of a token within the spelling being lexed."""
    return token.lexpos + 1


def tokenize(spelling):
    """List of (type, value) pairs for a spelling."""
    lexer = Lexer()
    lexer.input(spelling)
    return [(tok.type, tok.value) for tok in lexer]
