class CallispError(Exception):
    """ Base class for all callisp errors"""
    pass

class CallispSyntaxError(CallispError):
    """ Raised when the reader meets malformed parenthesization"""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        incomplete: bool = False,
    ):
        if line is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)
        self.line = line
        self.column = column
        # True when more input could complete the form (REPL continuation)
        self.incomplete = incomplete

class CallispInvalidSymbol(CallispError):
    """ Raised when a non-symbol is used where a name is required"""
    pass

class CallispUnboundSymbol(CallispError):
    """ Raised when a symbol is used before it is bound"""
    pass

class CallispEmptyApplication(CallispError):
    """ Raised when the empty list is evaluated as a call"""

class CallispNotCallable(CallispError):
    """ Raised when the head of a call does not evaluate to a function"""

class CallispArityError(CallispError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class CallispTypeError(CallispError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class CallispDivisionByZero(CallispError):
    """ Raised when a divisor is exactly zero"""

class CallispIOError(CallispError):
    """ Raised when a file or stream cannot be read"""
