"""
Mutation Errors Module

A mutation which cannot be carried out on a genome (because no suitable
node or connection exists) raises a MutationError. The genome is left
unchanged; callers typically ignore or log the error.

Classes:
    MutationError:                            Base class of recoverable mutation failures
    CouldNotAddFeedForwardConnectionError:    No connectable, cycle-safe node pair
    CouldNotAddRecurrentConnectionError:      No connectable node pair
    CouldNotAddNodeError:                     No connection to split
    CouldNotRemoveNodeError:                  No hidden node removable without dangling neighbors
    CouldNotRemoveFeedForwardConnectionError: No removable feed-forward connection
    CouldNotRemoveRecurrentConnectionError:   No recurrent connection
    CouldNotDuplicateNodeError:               No hidden node to duplicate
"""

class MutationError(Exception):
    """A requested mutation is structurally impossible for the genome at hand."""

class CouldNotAddFeedForwardConnectionError(MutationError):
    pass

class CouldNotAddRecurrentConnectionError(MutationError):
    pass

class CouldNotAddNodeError(MutationError):
    pass

class CouldNotRemoveNodeError(MutationError):
    pass

class CouldNotRemoveFeedForwardConnectionError(MutationError):
    pass

class CouldNotRemoveRecurrentConnectionError(MutationError):
    pass

class CouldNotDuplicateNodeError(MutationError):
    pass
