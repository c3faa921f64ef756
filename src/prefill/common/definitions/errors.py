#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.


class PreFillError(Exception):
    """Base class for every error raised by prefill."""


class InvalidShape(PreFillError, ValueError):
    """A block shape with non-positive dimensions or weight."""


class EmptyQueue(PreFillError, IndexError):
    """Removal attempted on an allocation queue with nothing left."""
