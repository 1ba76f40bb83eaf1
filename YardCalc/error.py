

class MathError(Exception):
    def __init__(self, message, code="9999", equation=None, dump=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation
        # Tree dump rendered from whatever values were computed before the failure
        self.dump = dump

class SyntaxError(MathError):
    pass

class ExpressionError(MathError):
    pass

class CalculationError(MathError):
    pass



Error_Dictionary= {

    "1" : "Missing Files",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3004" : "Invalid binary operator: ", # + operator
    "3008" : "Invalid number: ", # + number text
    "3009" : "Mismatched parenthesis",
    "3011" : "Invalid unary operator: ", # + operator
    "3012" : "Broken mathematical expression",
    "3013" : "Empty expression",
    "3026" : "Expression nested too deeply",

    "4002" : "Calculation already Running!",
    "4501" : "Not all Settings could be saved: ", # + Error raising setting

    "9999" : "Unexpected Error: " #+error
}
