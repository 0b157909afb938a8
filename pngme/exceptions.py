class FormatException(Exception):
    '''Base class to extend in order to throw exception in pngme.

    It takes a single argument that represents the chain of the layer that
    caused the exception; each enclosing chunk appends the name of the field
    it was unpacking while the exception travels up.
    '''

    def __init__(self, chain=None, message=None):
        self.chain = chain if chain is not None else []
        self.message = message
        super().__init__(message)

    def __str__(self):
        where = '.'.join(reversed(self.chain))
        msg = self.message or self.__class__.__name__

        return f'{msg} (at {where})' if where else msg


class InvalidTypeCodeException(FormatException):
    '''The type code is not made of exactly 4 ASCII letters.'''
    pass


class TruncatedInputException(FormatException):
    '''Less bytes available than what a field needs.'''
    pass


class ChecksumMismatchException(FormatException):
    pass


class BadPreambleException(FormatException):
    '''The magic at the start of the data doesn't correspond.'''
    pass


class ChunkNotFoundException(FormatException):
    pass
