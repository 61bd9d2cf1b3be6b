# src/blockinsight/exceptions.py
from typing import Optional


class ExplorerError(Exception):
    """Base exception class for explorer errors"""
    pass

class NotFoundError(ExplorerError):
    """Raised when the node reports that a hash or height does not exist"""
    pass

class BlockNotFoundError(NotFoundError):
    """Raised when a block hash or height is unknown to the node"""
    pass

class TransactionNotFoundError(NotFoundError):
    """Raised when a transaction id is unknown to the node"""
    pass

class InvalidInputError(ExplorerError):
    """Raised for malformed user input"""
    pass

class CollaboratorError(ExplorerError):
    """Raised when the node or transaction service fails"""
    pass

class RpcError(CollaboratorError):
    """Raised when the node answers a JSON-RPC call with an error object"""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code

class BlockParseError(CollaboratorError):
    """Raised when raw block bytes cannot be decoded"""
    pass
