class CodecError(ValueError):
    """Base class for failures while decoding a .huff container."""


class ContainerError(CodecError):
    """The container framing or its header is malformed."""


class CorruptStreamError(CodecError):
    """The packed bits do not fit the code tree rebuilt from the header."""
