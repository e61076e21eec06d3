"""Core module - error taxonomy, messages, product drafts and the resolution workflow."""

from lager.core.draft import ProductDraft
from lager.core.errors import LagerError
from lager.core.messages import t
from lager.core.resolution import (
    DraftSession,
    EditMode,
    ProductResolutionWorkflow,
    SubmitResult,
)

__all__ = [
    "DraftSession",
    "EditMode",
    "LagerError",
    "ProductDraft",
    "ProductResolutionWorkflow",
    "SubmitResult",
    "t",
]
