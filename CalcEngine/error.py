


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation


# -----------------------------
# Lexer errors
# -----------------------------

class LexError(MathError):
    pass


# -----------------------------
# Parser / evaluation errors
# -----------------------------

class ParseError(MathError):
    pass


class UnexpectedEOF(MathError):
    """Common base for an expression that ends before it is complete."""
    def __init__(self, code="3001", equation=None):
        super().__init__(ERROR_MESSAGES["3001"], code=code, equation=equation)


class LexerEOF(UnexpectedEOF, LexError):
    pass


class ParserEOF(UnexpectedEOF, ParseError):
    def __init__(self, equation=None):
        super().__init__(code="3101", equation=equation)


class EmptyParentheses(LexError):
    def __init__(self, equation=None):
        super().__init__(ERROR_MESSAGES["3002"], code="3002", equation=equation)


class UnexpectedCharacter(LexError):
    def __init__(self, character, position, equation=None):
        message = ERROR_MESSAGES["3003"] + f"'{character}' at index {position}"
        super().__init__(message, code="3003", equation=equation)
        self.character = character
        self.position = position


class UndefinedIdent(ParseError):
    def __init__(self, name, equation=None):
        super().__init__(ERROR_MESSAGES["3102"] + f'"{name}"', code="3102", equation=equation)
        self.name = name


class UnexpectedToken(ParseError):
    def __init__(self, token, equation=None):
        super().__init__(ERROR_MESSAGES["3103"] + token.descriptor(), code="3103", equation=equation)
        self.token = token


class NonFunction(ParseError):
    def __init__(self, name, equation=None):
        super().__init__(f'"{name}"' + ERROR_MESSAGES["3104"], code="3104", equation=equation)
        self.name = name


class ConfigError(MathError):
    pass



Error_Dictionary = {

    "3" : "Calculator Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification (0 = Lexer, 1 = Parser, 5 = Configuration)
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3001" : "Incomplete expression",
    "3002" : "Empty parentheses",
    "3003" : "Unexpected character ", # + 'c' at index n

    "3101" : "Incomplete expression",
    "3102" : "Undefined variable ", # + "name"
    "3103" : "Unexpected ", # + token descriptor
    "3104" : " is not a function", # "name" +

    "5501" : "Invalid angle mode: ", # + value
    "5502" : "Invalid number of decimal places: ", # + value
    "5503" : "Settings could not be saved: ", # + reason

    "9999" : "Unexpected Error: " #+error
}
