from callisp.reader.parser import lex, read, to_source, Token, TokenStream

__all__ = ["lex", "read", "to_source", "Token", "TokenStream"]
