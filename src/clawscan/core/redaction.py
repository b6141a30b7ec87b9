# SPDX-License-Identifier: MIT
"""
Central redaction utilities for ClawScan.

Every matched secret that leaves a detector goes through :func:`mask_secret`
so reporters never see the raw value.
"""

from __future__ import annotations

MASK_KEEP = 4
MASK_JOINER = "..."


def mask_secret(secret: str) -> str:
    """
    Mask a secret showing only the first 4 and last 4 characters.

    Short secrets use the same slicing, so prefix and suffix may overlap.
    The result is never the full secret for inputs of 12+ characters.

    Args:
        secret: The secret string to mask

    Returns:
        Masked string, e.g. ``sk-a...9xYz``
    """
    return secret[:MASK_KEEP] + MASK_JOINER + secret[-MASK_KEEP:]
