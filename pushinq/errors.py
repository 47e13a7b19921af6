class NoElementsError(ValueError):
    """raised (on request) when a sequence had no elements but one was required"""

    def __init__(self, message: str = "sequence contains no elements"):
        super().__init__(message)


class MultipleElementsError(ValueError):
    """raised (on request) when a sequence had more than one element but exactly one was required"""

    def __init__(self, message: str = "sequence contains more than one element"):
        super().__init__(message)


# shared instances, so callers can compare outcomes by identity
ERR_NO_ELEMENTS = NoElementsError()
ERR_MULTIPLE_ELEMENTS = MultipleElementsError()
