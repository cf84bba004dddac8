"""Recipe extraction exceptions."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base exception for the extraction pipeline."""


class SynthesisError(ExtractionError):
    """Raised when model output is not a valid recipe result.

    Always fatal to the job: an invalid recipe is never stored and never
    downgraded to "not a recipe".
    """
